"""Query layer for database operations using SQLAlchemy Core."""

from .courses import (
    get_course,
    get_course_sections,
    get_last_section_number,
    get_module_section_numbers,
    get_user_course_role,
    is_site_admin,
)

__all__ = [
    "get_course",
    "get_course_sections",
    "get_last_section_number",
    "get_module_section_numbers",
    "get_user_course_role",
    "is_site_admin",
]
