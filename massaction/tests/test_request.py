"""Tests for mass-action request parsing."""

import json

import pytest

from massaction.errors import EmptyModuleSetError, InvalidRequestError
from massaction.request import parse_massaction_request


def test_parses_action_and_module_ids():
    request = parse_massaction_request(
        json.dumps({"action": "moveto", "moduleIds": [3, 5]})
    )
    assert request.action == "moveto"
    assert request.module_ids == [3, 5]


def test_accepts_string_module_ids():
    """The block sends checkbox values, which are strings."""
    request = parse_massaction_request(
        json.dumps({"action": "duplicatetocourse", "moduleIds": ["12", "13"]})
    )
    assert request.module_ids == [12, 13]


def test_collapses_duplicate_ids_preserving_order():
    request = parse_massaction_request(
        json.dumps({"action": "duplicateto", "moduleIds": [5, 3, 5, 3]})
    )
    assert request.module_ids == [5, 3]


def test_empty_module_list_is_empty_module_set_error():
    with pytest.raises(EmptyModuleSetError):
        parse_massaction_request(json.dumps({"action": "moveto", "moduleIds": []}))


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "",
        "[1, 2]",
        json.dumps({"moduleIds": [1]}),
        json.dumps({"action": "moveto"}),
        json.dumps({"action": "delete", "moduleIds": [1]}),
        json.dumps({"action": "moveto", "moduleIds": ["abc"]}),
    ],
)
def test_malformed_requests_are_rejected(raw):
    with pytest.raises(InvalidRequestError):
        parse_massaction_request(raw)


def test_none_is_rejected():
    with pytest.raises(InvalidRequestError):
        parse_massaction_request(None)
