"""
Target section selection for mass actions.

Builds the radio options for "which section should the selected modules go
to" and validates the submitted choice against the same allowed set.

Options are produced in this order:
- keep original section numbers (-1)
- every existing section of the target course, 0..last
- a new section after the last one (last + 1)
"""

import logging
import re

from .errors import EmptyModuleSetError, InvalidSectionError, NoAllowedOptionError
from .types import (
    KEEP_ORIGINAL,
    CourseFormatState,
    SectionOption,
    SectionPermissions,
    SectionSelection,
    SourceModule,
    TargetSection,
)

logger = logging.getLogger(__name__)

KEEP_ORIGINAL_LABEL = "Keep original section"
NEW_SECTION_LABEL = "New section"
INVALID_SECTION_MESSAGE = "Invalid section number"

_INTEGER_RE = re.compile(r"^-?\d+$")


def get_last_section_number(format_state: CourseFormatState) -> int:
    """Highest selectable section number, clamped by the `numsections` option."""
    last = format_state.last_section_number
    if format_state.numsections is not None and format_state.numsections < last:
        last = format_state.numsections
    return last


def truncate_sections(
    sections: list[TargetSection], last_section_number: int
) -> list[TargetSection]:
    """Trim off orphaned sections numbered past the last selectable one."""
    ordered = sorted(sections, key=lambda s: s.section_num)
    return [s for s in ordered if s.section_num <= last_section_number]


def get_source_max_section(modules: list[SourceModule]) -> int:
    """Highest section number any of the moved modules currently sits in."""
    if not modules:
        raise EmptyModuleSetError("No course modules selected")
    return max(module.section_num for module in modules)


def build_section_options(
    sections: list[TargetSection],
    format_state: CourseFormatState,
    modules: list[SourceModule],
    permissions: SectionPermissions,
) -> SectionSelection:
    """
    Compute the target section options and the values the user may submit.

    Args:
        sections: All sections of the target course
        format_state: Numbering limits of the target course format
        modules: Modules being moved/duplicated, with their source sections
        permissions: Capability check results for the target course

    Returns:
        SectionSelection with options in display order

    Raises:
        EmptyModuleSetError: No modules given
        NoAllowedOptionError: Every option ended up disabled
    """
    last = get_last_section_number(format_state)
    target_sections = truncate_sections(sections, last)
    src_max_section = get_source_max_section(modules)

    options: list[SectionOption] = []

    # Keeping original numbers only works if the numbers already exist in the
    # target course or missing sections may be created
    can_keep_original = permissions.can_keep_original_section_number and (
        permissions.can_add_section or src_max_section <= last
    )
    options.append(
        SectionOption(
            value=KEEP_ORIGINAL,
            label=KEEP_ORIGINAL_LABEL,
            allowed=can_keep_original,
            kind="keep_original",
        )
    )

    for section in target_sections:
        options.append(
            SectionOption(
                value=section.section_num,
                label=section.display_name,
                allowed=section.section_num not in permissions.restricted_sections,
                kind="section",
            )
        )

    can_add_new_section = (
        permissions.can_add_section and last + 1 <= format_state.max_sections
    )
    options.append(
        SectionOption(
            value=last + 1,
            label=NEW_SECTION_LABEL,
            allowed=can_add_new_section,
            kind="new_section",
        )
    )

    allowed_values = [option.value for option in options if option.allowed]
    logger.debug(
        f"Section options for format {format_state.format_name}: "
        f"last={last} src_max={src_max_section} allowed={allowed_values}"
    )

    if not allowed_values:
        raise NoAllowedOptionError("No target section can be selected")

    return SectionSelection(
        options=options,
        allowed_values=allowed_values,
        last_section_number=last,
    )


def normalize_section_value(value) -> int | None:
    """
    Convert a submitted radio value to an int.

    Accepts ints and integer strings ("3", "-1", " 2 "). Returns None for
    anything else, including bools and empty strings.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if _INTEGER_RE.match(stripped):
            return int(stripped)
    return None


def validate_section_choice(value, allowed_values: list[int]) -> int:
    """
    Check a submitted section number against the allowed set.

    Returns:
        The section number as an int

    Raises:
        InvalidSectionError: Value missing, malformed, or not allowed
    """
    section_num = normalize_section_value(value)
    if section_num is None or section_num not in allowed_values:
        raise InvalidSectionError(INVALID_SECTION_MESSAGE)
    return section_num


def validation_errors(data: dict, allowed_values: list[int]) -> dict[str, str]:
    """Form-style validation: field name -> error message, empty if valid."""
    errors = {}
    try:
        validate_section_choice(data.get("targetsectionnum"), allowed_values)
    except InvalidSectionError as e:
        errors["sections"] = str(e)
    return errors
