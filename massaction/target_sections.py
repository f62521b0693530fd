"""
Load everything the section option builder needs from the database.

Used by both the render and the submit endpoint, so the allowed values
are always computed the same way from the current course state.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncConnection

from .capabilities import get_section_permissions
from .errors import (
    CourseNotFoundError,
    InvalidRequestError,
    NoSourceCourseSpecifiedError,
    NoTargetCourseSpecifiedError,
)
from .formats import get_max_sections
from .queries.courses import (
    get_course,
    get_course_sections,
    get_last_section_number,
    get_module_section_numbers,
)
from .request import MassActionRequest
from .section_select import build_section_options
from .types import CourseFormatState, SectionSelection, SourceModule, TargetSection

logger = logging.getLogger(__name__)


def _get_numsections(format_options: dict | None) -> int | None:
    """Read the optional `numsections` format option."""
    if not format_options or format_options.get("numsections") is None:
        return None
    return int(format_options["numsections"])


def check_course_ids(
    source_course_id: int | None, target_course_id: int | None
) -> tuple[int, int]:
    """
    Make sure both course IDs were passed along with the form.

    Raises:
        NoTargetCourseSpecifiedError: target_course_id missing
        NoSourceCourseSpecifiedError: source_course_id missing
    """
    if not target_course_id:
        raise NoTargetCourseSpecifiedError("No target course specified")
    if not source_course_id:
        raise NoSourceCourseSpecifiedError("Source course id was lost")
    return source_course_id, target_course_id


async def load_target_course(
    conn: AsyncConnection, course_id: int
) -> tuple[dict, list[TargetSection], CourseFormatState]:
    """
    Load a target course with its sections and format limits.

    Raises:
        CourseNotFoundError: If the course doesn't exist
    """
    course = await get_course(conn, course_id)
    if course is None:
        raise CourseNotFoundError(f"Course not found: {course_id}")

    rows = await get_course_sections(conn, course_id)
    sections = [
        TargetSection(section_num=row["section"], name=row["name"]) for row in rows
    ]

    format_state = CourseFormatState(
        format_name=course["format"],
        last_section_number=await get_last_section_number(conn, course_id),
        max_sections=get_max_sections(course["format"]),
        numsections=_get_numsections(course.get("format_options")),
    )
    return course, sections, format_state


async def load_source_modules(
    conn: AsyncConnection, course_id: int, module_ids: list[int]
) -> list[SourceModule]:
    """
    Look up the current section of every requested module.

    Raises:
        CourseNotFoundError: If the source course doesn't exist
        InvalidRequestError: If a module is not part of the source course
    """
    if await get_course(conn, course_id) is None:
        raise CourseNotFoundError(f"Course not found: {course_id}")

    section_numbers = await get_module_section_numbers(conn, course_id, module_ids)
    missing = [m for m in module_ids if m not in section_numbers]
    if missing:
        raise InvalidRequestError(
            f"Modules {missing} are not part of course {course_id}"
        )

    return [
        SourceModule(module_id=module_id, section_num=section_numbers[module_id])
        for module_id in module_ids
    ]


async def load_section_selection(
    conn: AsyncConnection,
    *,
    request: MassActionRequest,
    source_course_id: int | None,
    target_course_id: int | None,
    user_id: int,
) -> SectionSelection:
    """
    Compute the target section options for a mass-action request.

    Raises:
        NoTargetCourseSpecifiedError: target_course_id missing
        NoSourceCourseSpecifiedError: source_course_id missing
        CourseNotFoundError: Either course doesn't exist
        InvalidRequestError: Requested modules not in the source course
        EmptyModuleSetError: No modules requested
        NoAllowedOptionError: No section can be chosen
    """
    source_course_id, target_course_id = check_course_ids(
        source_course_id, target_course_id
    )

    _course, sections, format_state = await load_target_course(conn, target_course_id)
    modules = await load_source_modules(conn, source_course_id, request.module_ids)
    permissions = await get_section_permissions(
        conn, target_course_id, format_state.format_name, user_id
    )

    logger.info(
        f"Building section options for {request.action} of {len(modules)} modules "
        f"from course {source_course_id} into course {target_course_id}"
    )
    return build_section_options(sections, format_state, modules, permissions)
