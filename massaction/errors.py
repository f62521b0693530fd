"""
Exceptions raised by the mass-action section selection.

Each exception carries a stable `code` (the language-string key the
frontend uses to show a message) so the HTTP layer can report it without
string matching.
"""


class MassActionError(Exception):
    """Base exception for mass-action errors."""

    code = "massactionerror"


class NoTargetCourseSpecifiedError(MassActionError):
    """The request did not say which course to move/duplicate into."""

    code = "notargetcourseidspecified"


class NoSourceCourseSpecifiedError(MassActionError):
    """The request lost the course the modules come from."""

    code = "sourcecourseidlost"


class CourseNotFoundError(MassActionError):
    """Raised when a course cannot be found."""

    code = "coursenotfound"


class InvalidRequestError(MassActionError):
    """The mass-action request JSON is malformed or references unknown modules."""

    code = "invalidrequest"


class EmptyModuleSetError(MassActionError):
    """No source modules were supplied."""

    code = "noitemselected"


class NoAllowedOptionError(MassActionError):
    """Every target section option is disabled; there is nothing to submit."""

    code = "nosectionavailable"


class InvalidSectionError(MassActionError):
    """The submitted section number is not one of the allowed options."""

    code = "invalidsectionnum"


class StaleSelectionError(MassActionError):
    """The options offered at render time no longer match the course."""

    code = "selectionchanged"
