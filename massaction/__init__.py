"""
Mass-action target section selection - platform-agnostic core.
Can be used by the web API or any other interface.
"""

# Domain types
from .types import (
    KEEP_ORIGINAL,
    SourceModule, TargetSection, CourseFormatState, SectionPermissions,
    SectionOption, SectionSelection,
)

# Errors
from .errors import (
    MassActionError, NoTargetCourseSpecifiedError, NoSourceCourseSpecifiedError,
    CourseNotFoundError, InvalidRequestError, EmptyModuleSetError,
    NoAllowedOptionError, InvalidSectionError, StaleSelectionError,
)

# Option builder and submission validator
from .section_select import (
    build_section_options, validate_section_choice, validation_errors,
)

# Capability checks
from .capabilities import (
    has_capability, can_add_section, can_keep_original_section_number,
    get_restricted_sections, get_section_permissions,
)

# Course formats and section filters
from .formats import (
    CourseFormat, SectionFilter, get_course_format, get_max_sections,
    register_section_filter, clear_section_filters, apply_section_filters,
)

# Request parsing
from .request import MassActionRequest, parse_massaction_request

# Database loading
from .target_sections import load_section_selection

__all__ = [
    # Types
    'KEEP_ORIGINAL',
    'SourceModule', 'TargetSection', 'CourseFormatState', 'SectionPermissions',
    'SectionOption', 'SectionSelection',
    # Errors
    'MassActionError', 'NoTargetCourseSpecifiedError', 'NoSourceCourseSpecifiedError',
    'CourseNotFoundError', 'InvalidRequestError', 'EmptyModuleSetError',
    'NoAllowedOptionError', 'InvalidSectionError', 'StaleSelectionError',
    # Builder / validator
    'build_section_options', 'validate_section_choice', 'validation_errors',
    # Capabilities
    'has_capability', 'can_add_section', 'can_keep_original_section_number',
    'get_restricted_sections', 'get_section_permissions',
    # Formats
    'CourseFormat', 'SectionFilter', 'get_course_format', 'get_max_sections',
    'register_section_filter', 'clear_section_filters', 'apply_section_filters',
    # Request
    'MassActionRequest', 'parse_massaction_request',
    # Loading
    'load_section_selection',
]
