"""SQLAlchemy enum definitions for the database schema."""

import enum

from sqlalchemy import Enum as SQLEnum


class CourseRole(str, enum.Enum):
    student = "student"
    teacher = "teacher"  # non-editing teacher
    editingteacher = "editingteacher"
    manager = "manager"


# References the PostgreSQL type created by the initial migration
course_role_enum = SQLEnum(
    CourseRole, name="course_role", create_type=False, native_enum=True
)
