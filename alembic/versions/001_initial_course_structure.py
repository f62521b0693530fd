"""Initial course structure schema.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates users, courses, course_sections, course_modules and
course_enrolments, plus the course_role enum.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

course_role = postgresql.ENUM(
    "student",
    "teacher",
    "editingteacher",
    "manager",
    name="course_role",
    create_type=False,
)


def upgrade() -> None:
    course_role.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column(
            "is_site_admin", sa.Boolean(), server_default="false", nullable=True
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("user_id", name=op.f("pk_users")),
        sa.UniqueConstraint("username", name=op.f("uq_users_username")),
    )

    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("shortname", sa.Text(), nullable=False),
        sa.Column("fullname", sa.Text(), nullable=False),
        sa.Column("format", sa.Text(), server_default="topics", nullable=False),
        sa.Column(
            "format_options",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default="{}",
            nullable=True,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("course_id", name=op.f("pk_courses")),
    )

    op.create_table(
        "course_sections",
        sa.Column("section_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("section", sa.Integer(), nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["courses.course_id"],
            name=op.f("fk_course_sections_course_id_courses"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("section_id", name=op.f("pk_course_sections")),
        sa.UniqueConstraint(
            "course_id", "section", name=op.f("uq_course_sections_course_id")
        ),
    )
    op.create_index(
        "idx_course_sections_course_id", "course_sections", ["course_id"], unique=False
    )

    op.create_table(
        "course_modules",
        sa.Column("cm_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("section_id", sa.Integer(), nullable=False),
        sa.Column("module_name", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["courses.course_id"],
            name=op.f("fk_course_modules_course_id_courses"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["section_id"],
            ["course_sections.section_id"],
            name=op.f("fk_course_modules_section_id_course_sections"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("cm_id", name=op.f("pk_course_modules")),
    )
    op.create_index(
        "idx_course_modules_course_id", "course_modules", ["course_id"], unique=False
    )

    op.create_table(
        "course_enrolments",
        sa.Column("enrolment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("course_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role", course_role, nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(
            ["course_id"],
            ["courses.course_id"],
            name=op.f("fk_course_enrolments_course_id_courses"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.user_id"],
            name=op.f("fk_course_enrolments_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("enrolment_id", name=op.f("pk_course_enrolments")),
        sa.UniqueConstraint(
            "course_id", "user_id", name=op.f("uq_course_enrolments_course_id")
        ),
    )
    op.create_index(
        "idx_course_enrolments_user_id", "course_enrolments", ["user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index("idx_course_enrolments_user_id", table_name="course_enrolments")
    op.drop_table("course_enrolments")
    op.drop_index("idx_course_modules_course_id", table_name="course_modules")
    op.drop_table("course_modules")
    op.drop_index("idx_course_sections_course_id", table_name="course_sections")
    op.drop_table("course_sections")
    op.drop_table("courses")
    op.drop_table("users")
    course_role.drop(op.get_bind(), checkfirst=True)
