"""
Permission checks for mass actions into a target course.

Combines the user's course role with the course format's section filters.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncConnection

from .enums import CourseRole
from .formats import apply_section_filters
from .queries.courses import get_user_course_role, is_site_admin
from .types import SectionPermissions

logger = logging.getLogger(__name__)

COURSE_UPDATE = "course:update"
COURSE_VIEW = "course:view"

ROLE_CAPABILITIES: dict[str, set[str]] = {
    CourseRole.student.value: {COURSE_VIEW},
    CourseRole.teacher.value: {COURSE_VIEW},
    CourseRole.editingteacher.value: {COURSE_VIEW, COURSE_UPDATE},
    CourseRole.manager.value: {COURSE_VIEW, COURSE_UPDATE},
}


def has_capability(
    capability: str, role: str | None, *, is_site_admin: bool = False
) -> bool:
    """Check a capability against a course role. Site admins hold every capability."""
    if is_site_admin:
        return True
    if role is None:
        return False
    return capability in ROLE_CAPABILITIES.get(role, set())


async def can_add_section(
    conn: AsyncConnection, course_id: int, format_name: str, user_id: int
) -> bool:
    """Whether the user may create new sections in the course."""
    role = await get_user_course_role(conn, course_id, user_id)
    admin = await is_site_admin(conn, user_id)
    if not has_capability(COURSE_UPDATE, role, is_site_admin=admin):
        return False
    return apply_section_filters(course_id, format_name).make_section_allowed


def can_keep_original_section_number(course_id: int, format_name: str) -> bool:
    """Whether modules may keep their section numbers in the target course."""
    return apply_section_filters(course_id, format_name).keep_original_section_allowed


def get_restricted_sections(course_id: int, format_name: str) -> list[int]:
    """Sections of the course that may not be used as a target."""
    return sorted(apply_section_filters(course_id, format_name).restricted_sections)


async def get_section_permissions(
    conn: AsyncConnection, course_id: int, format_name: str, user_id: int
) -> SectionPermissions:
    """Evaluate all target section permission checks for one user and course."""
    permissions = SectionPermissions(
        can_add_section=await can_add_section(conn, course_id, format_name, user_id),
        can_keep_original_section_number=can_keep_original_section_number(
            course_id, format_name
        ),
        restricted_sections=frozenset(
            get_restricted_sections(course_id, format_name)
        ),
    )
    logger.debug(
        f"Section permissions for user {user_id} in course {course_id}: {permissions}"
    )
    return permissions
