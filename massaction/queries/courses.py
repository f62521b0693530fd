"""Course structure queries using SQLAlchemy Core."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import course_enrolments, course_modules, course_sections, courses, users


async def get_course(conn: AsyncConnection, course_id: int) -> dict[str, Any] | None:
    """Get a course by ID."""
    result = await conn.execute(select(courses).where(courses.c.course_id == course_id))
    row = result.mappings().first()
    return dict(row) if row else None


async def get_course_sections(
    conn: AsyncConnection, course_id: int
) -> list[dict[str, Any]]:
    """Get all sections of a course ordered by section number."""
    result = await conn.execute(
        select(
            course_sections.c.section_id,
            course_sections.c.section,
            course_sections.c.name,
        )
        .where(course_sections.c.course_id == course_id)
        .order_by(course_sections.c.section)
    )
    return [dict(row) for row in result.mappings()]


async def get_last_section_number(conn: AsyncConnection, course_id: int) -> int:
    """Highest section number in a course (0 when only the general section exists)."""
    result = await conn.execute(
        select(func.max(course_sections.c.section)).where(
            course_sections.c.course_id == course_id
        )
    )
    last = result.scalar()
    return last if last is not None else 0


async def get_module_section_numbers(
    conn: AsyncConnection,
    course_id: int,
    module_ids: list[int],
) -> dict[int, int]:
    """
    Map course module IDs to the number of the section they sit in.

    Modules that don't belong to the course are left out of the result.
    """
    if not module_ids:
        return {}

    result = await conn.execute(
        select(course_modules.c.cm_id, course_sections.c.section)
        .join(
            course_sections,
            course_modules.c.section_id == course_sections.c.section_id,
        )
        .where(course_modules.c.course_id == course_id)
        .where(course_modules.c.cm_id.in_(module_ids))
    )
    return {row["cm_id"]: row["section"] for row in result.mappings()}


async def get_user_course_role(
    conn: AsyncConnection, course_id: int, user_id: int
) -> str | None:
    """Role the user is enrolled with in a course, or None if not enrolled."""
    result = await conn.execute(
        select(course_enrolments.c.role)
        .where(course_enrolments.c.course_id == course_id)
        .where(course_enrolments.c.user_id == user_id)
    )
    role = result.scalar()
    if role is None:
        return None
    # SQLEnum hands back the Python enum member
    return getattr(role, "value", role)


async def is_site_admin(conn: AsyncConnection, user_id: int) -> bool:
    """Check if a user is a site administrator."""
    result = await conn.execute(
        select(users.c.is_site_admin).where(users.c.user_id == user_id)
    )
    return bool(result.scalar())
