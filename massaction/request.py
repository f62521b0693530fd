"""Parsing of the mass-action request carried through the section select form."""

import json

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import EmptyModuleSetError, InvalidRequestError

# Actions that ask the user for a target section
KNOWN_ACTIONS = ("moveto", "duplicateto", "duplicatetocourse")


class MassActionRequest(BaseModel):
    """The JSON request, e.g. {"action": "moveto", "moduleIds": [3, 5]}."""

    action: str
    module_ids: list[int] = Field(alias="moduleIds")

    @field_validator("action")
    @classmethod
    def action_must_be_known(cls, value: str) -> str:
        if value not in KNOWN_ACTIONS:
            raise ValueError(f"Unknown action: {value}")
        return value

    @field_validator("module_ids")
    @classmethod
    def dedupe_module_ids(cls, value: list[int]) -> list[int]:
        return list(dict.fromkeys(value))


def parse_massaction_request(raw: str) -> MassActionRequest:
    """
    Parse and validate the raw request JSON.

    Raises:
        InvalidRequestError: Malformed JSON, unknown action, or bad module ids
        EmptyModuleSetError: No modules selected
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise InvalidRequestError(f"Request is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidRequestError("Request must be a JSON object")

    try:
        request = MassActionRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid mass-action request: {e}") from e

    if not request.module_ids:
        raise EmptyModuleSetError("No course modules selected")

    return request
