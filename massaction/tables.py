"""SQLAlchemy Core table definitions for the database schema."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

from .enums import course_role_enum

# Naming convention for constraints (helps Alembic generate better names)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


# =====================================================
# 1. USERS
# =====================================================
users = Table(
    "users",
    metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("username", Text, nullable=False),
    Column("is_site_admin", Boolean, server_default="false"),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    UniqueConstraint("username"),
)


# =====================================================
# 2. COURSES
# =====================================================
courses = Table(
    "courses",
    metadata,
    Column("course_id", Integer, primary_key=True, autoincrement=True),
    Column("shortname", Text, nullable=False),
    Column("fullname", Text, nullable=False),
    Column("format", Text, nullable=False, server_default="topics"),
    # Per-format settings, e.g. {"numsections": 10}
    Column("format_options", JSONB, server_default="{}"),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
)


# =====================================================
# 3. COURSE SECTIONS
# =====================================================
course_sections = Table(
    "course_sections",
    metadata,
    Column("section_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("section", Integer, nullable=False),  # 0 = general section
    Column("name", Text),  # NULL/empty = unnamed
    UniqueConstraint("course_id", "section"),
    Index("idx_course_sections_course_id", "course_id"),
)


# =====================================================
# 4. COURSE MODULES
# =====================================================
course_modules = Table(
    "course_modules",
    metadata,
    Column("cm_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "section_id",
        Integer,
        ForeignKey("course_sections.section_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("module_name", Text, nullable=False),  # e.g. "forum", "quiz"
    Index("idx_course_modules_course_id", "course_id"),
)


# =====================================================
# 5. COURSE ENROLMENTS
# =====================================================
course_enrolments = Table(
    "course_enrolments",
    metadata,
    Column("enrolment_id", Integer, primary_key=True, autoincrement=True),
    Column(
        "course_id",
        Integer,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id",
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("role", course_role_enum, nullable=False),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    UniqueConstraint("course_id", "user_id"),
    Index("idx_course_enrolments_user_id", "user_id"),
)
