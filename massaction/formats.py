"""
Course formats and per-format section filters.

A course format decides how many sections a course may have. Formats (or
site customisations) can also register section filters that veto creating
sections, keeping original section numbers, or individual target sections.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from .config import get_default_max_sections

logger = logging.getLogger(__name__)

# Registers a filter for every format
ALL_FORMATS = "*"


@dataclass(frozen=True)
class CourseFormat:
    """Section policy of a course format."""

    name: str
    max_sections: int | None = None  # None = site default
    uses_sections: bool = True  # False = general section only


@dataclass
class SectionFilter:
    """Mutable verdict handed to each registered section filter."""

    course_id: int
    format_name: str
    make_section_allowed: bool = True
    keep_original_section_allowed: bool = True
    restricted_sections: set[int] = field(default_factory=set)

    def disable_make_section(self) -> None:
        self.make_section_allowed = False

    def disable_keep_original_section(self) -> None:
        self.keep_original_section_allowed = False

    def restrict_section(self, section_num: int) -> None:
        self.restricted_sections.add(section_num)


SectionFilterCallback = Callable[[SectionFilter], None]


def _single_section_filter(section_filter: SectionFilter) -> None:
    """Formats with only the general section never grow new ones."""
    section_filter.disable_make_section()
    section_filter.disable_keep_original_section()


COURSE_FORMATS = {
    "topics": CourseFormat(name="topics"),
    "weeks": CourseFormat(name="weeks"),
    "singleactivity": CourseFormat(name="singleactivity", uses_sections=False),
    "social": CourseFormat(name="social", uses_sections=False),
}

_section_filters: dict[str, list[SectionFilterCallback]] = {}


def _uses_sections(format_name: str) -> bool:
    course_format = COURSE_FORMATS.get(format_name)
    return course_format is None or course_format.uses_sections


def get_course_format(format_name: str) -> CourseFormat:
    """Look up a format; unknown formats behave like a plain sectioned format."""
    course_format = COURSE_FORMATS.get(format_name)
    if course_format is None:
        logger.warning(f"Unknown course format '{format_name}', using defaults")
        return CourseFormat(name=format_name)
    return course_format


def get_max_sections(format_name: str) -> int:
    """Ceiling on the number of sections for courses in this format."""
    course_format = get_course_format(format_name)
    if not course_format.uses_sections:
        return 0
    if course_format.max_sections is None:
        return get_default_max_sections()
    return course_format.max_sections


def register_section_filter(
    format_name: str, callback: SectionFilterCallback
) -> None:
    """Register a filter for one format, or for all formats with ALL_FORMATS."""
    _section_filters.setdefault(format_name, []).append(callback)


def clear_section_filters() -> None:
    """Remove all registered filters. Formats without sections stay restricted."""
    _section_filters.clear()


def apply_section_filters(course_id: int, format_name: str) -> SectionFilter:
    """Run the filters that apply to a course and return the verdict."""
    section_filter = SectionFilter(course_id=course_id, format_name=format_name)
    callbacks = _section_filters.get(format_name, []) + _section_filters.get(
        ALL_FORMATS, []
    )
    if not _uses_sections(format_name):
        callbacks = [_single_section_filter] + callbacks
    for callback in callbacks:
        callback(section_filter)
    return section_filter
