"""
Type definitions for target section selection.
"""

from dataclasses import dataclass, field
from typing import Literal

# Radio value meaning "put each module in the section number it has now"
KEEP_ORIGINAL = -1

SECTION_LABEL = "Section"


@dataclass(frozen=True)
class SourceModule:
    """A course module being moved or duplicated."""

    module_id: int
    section_num: int  # Section number in the source course


@dataclass(frozen=True)
class TargetSection:
    """A section of the target course."""

    section_num: int  # 0 = general section
    name: str | None = None

    @property
    def display_name(self) -> str:
        if not self.name:
            return f"{SECTION_LABEL} {self.section_num}"
        return self.name


@dataclass(frozen=True)
class CourseFormatState:
    """Section numbering limits of the target course's format."""

    format_name: str
    last_section_number: int  # Highest existing section number
    max_sections: int  # Format ceiling on section count
    numsections: int | None = None  # Format option, clamps last_section_number


@dataclass(frozen=True)
class SectionPermissions:
    """What the current user may do in the target course."""

    can_add_section: bool
    can_keep_original_section_number: bool
    restricted_sections: frozenset[int] = field(default_factory=frozenset)


OptionKind = Literal["keep_original", "section", "new_section"]


@dataclass(frozen=True)
class SectionOption:
    """One radio button of the section select form."""

    value: int
    label: str
    allowed: bool
    kind: OptionKind


@dataclass
class SectionSelection:
    """Options offered to the user and the values they may submit."""

    options: list[SectionOption]
    allowed_values: list[int]  # In option order
    last_section_number: int

    @property
    def default_value(self) -> int:
        """First allowed value (the builder guarantees there is one)."""
        return self.allowed_values[0]
