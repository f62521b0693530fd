"""
Target section select routes for mass actions.

Endpoints:
- GET /api/massaction/section-select - Section options for a mass-action request
- POST /api/massaction/section-select - Validate the chosen target section
"""

import logging
from typing import Any, NoReturn

import sentry_sdk
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from massaction.database import get_connection
from massaction.errors import (
    CourseNotFoundError,
    EmptyModuleSetError,
    InvalidRequestError,
    InvalidSectionError,
    MassActionError,
    NoAllowedOptionError,
    NoSourceCourseSpecifiedError,
    NoTargetCourseSpecifiedError,
    StaleSelectionError,
)
from massaction.request import parse_massaction_request
from massaction.section_select import validate_section_choice
from massaction.selection_token import create_selection_token, read_selection_token
from massaction.target_sections import check_course_ids, load_section_selection
from massaction.types import SectionSelection
from web_api.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/massaction", tags=["massaction"])


class SectionSelectSubmission(BaseModel):
    """Submitted section select form (hidden fields plus the chosen radio)."""

    model_config = ConfigDict(populate_by_name=True)

    request: str
    instance_id: int | None = None
    return_url: str | None = None
    sourcecourseid: int | None = None
    targetcourseid: int | None = None
    # Left unconverted; validate_section_choice decides what counts as a number
    targetsectionnum: Any = None
    selection_token: str | None = Field(default=None, alias="selectionToken")


def _error_detail(error: MassActionError, **extra: Any) -> dict[str, Any]:
    return {"error": error.code, "message": str(error), **extra}


def _raise_http_error(error: MassActionError, return_url: str | None) -> NoReturn:
    """Translate a domain error into the matching HTTP error."""
    if isinstance(error, (NoTargetCourseSpecifiedError, NoSourceCourseSpecifiedError)):
        # The host redirects back to return_url with the message
        raise HTTPException(400, _error_detail(error, return_url=return_url))
    if isinstance(error, CourseNotFoundError):
        raise HTTPException(404, _error_detail(error))
    if isinstance(error, EmptyModuleSetError):
        logger.error(f"Section select called without modules: {error}")
        sentry_sdk.capture_exception(error)
        raise HTTPException(400, _error_detail(error))
    if isinstance(error, InvalidRequestError):
        raise HTTPException(400, _error_detail(error))
    if isinstance(error, (NoAllowedOptionError, StaleSelectionError)):
        raise HTTPException(409, _error_detail(error))
    if isinstance(error, InvalidSectionError):
        raise HTTPException(
            422, _error_detail(error, errors={"sections": str(error)})
        )
    raise HTTPException(400, _error_detail(error))


def _serialize_selection(selection: SectionSelection) -> dict[str, Any]:
    return {
        "options": [
            {
                "value": option.value,
                "label": option.label,
                "allowed": option.allowed,
                "kind": option.kind,
            }
            for option in selection.options
        ],
        "allowedValues": selection.allowed_values,
        "defaultValue": selection.default_value,
    }


@router.get("/section-select")
async def get_section_select(
    request: str = Query(..., description="Mass-action request JSON"),
    instance_id: int | None = Query(None),
    return_url: str | None = Query(None),
    sourcecourseid: int | None = Query(None),
    targetcourseid: int | None = Query(None),
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Get the target section options for a mass-action request.

    Returns hidden form state, the radio options (disabled ones included
    with allowed=false), the allowed values, the default selection, and a
    selection token to send back on submit.
    """
    try:
        check_course_ids(sourcecourseid, targetcourseid)
        massaction_request = parse_massaction_request(request)
        async with get_connection() as conn:
            selection = await load_section_selection(
                conn,
                request=massaction_request,
                source_course_id=sourcecourseid,
                target_course_id=targetcourseid,
                user_id=user["user_id"],
            )
    except MassActionError as e:
        _raise_http_error(e, return_url)

    return {
        "hidden": {
            "request": request,
            "instance_id": instance_id,
            "return_url": return_url,
            "sourcecourseid": sourcecourseid,
            "targetcourseid": targetcourseid,
        },
        **_serialize_selection(selection),
        "selectionToken": create_selection_token(
            targetcourseid, selection.allowed_values
        ),
    }


@router.post("/section-select")
async def submit_section_select(
    body: SectionSelectSubmission,
    user: dict = Depends(get_current_user),
) -> dict[str, Any]:
    """
    Validate the chosen target section.

    The allowed values are recomputed from the current course state. When a
    selection token is sent, its values must match the recomputed ones,
    otherwise the form is stale and has to be reloaded.
    """
    try:
        check_course_ids(body.sourcecourseid, body.targetcourseid)
        massaction_request = parse_massaction_request(body.request)
        async with get_connection() as conn:
            selection = await load_section_selection(
                conn,
                request=massaction_request,
                source_course_id=body.sourcecourseid,
                target_course_id=body.targetcourseid,
                user_id=user["user_id"],
            )

        if body.selection_token:
            offered = read_selection_token(body.selection_token, body.targetcourseid)
            if offered != selection.allowed_values:
                logger.info(
                    f"Section options for course {body.targetcourseid} changed "
                    f"since render: {offered} -> {selection.allowed_values}"
                )
                raise StaleSelectionError(
                    "The course changed since the form was loaded"
                )

        section_num = validate_section_choice(
            body.targetsectionnum, selection.allowed_values
        )
    except MassActionError as e:
        _raise_http_error(e, body.return_url)

    return {
        "action": massaction_request.action,
        "moduleIds": massaction_request.module_ids,
        "targetcourseid": body.targetcourseid,
        "targetsectionnum": section_num,
    }
