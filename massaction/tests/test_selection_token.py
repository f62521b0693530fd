"""Tests for signed selection tokens."""

import jwt
import pytest

from massaction.errors import StaleSelectionError
from massaction.selection_token import create_selection_token, read_selection_token


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret-for-selection-tokens-0123456789")


def test_round_trips_allowed_values():
    token = create_selection_token(7, [-1, 0, 2])
    assert read_selection_token(token, 7) == [-1, 0, 2]


def test_other_course_is_stale():
    token = create_selection_token(7, [0, 1])
    with pytest.raises(StaleSelectionError):
        read_selection_token(token, 8)


def test_tampered_token_is_stale():
    token = create_selection_token(7, [0, 1])
    forged = jwt.encode(
        {"course": 7, "allowed": [0, 1, 2, 3]}, "another-secret", algorithm="HS256"
    )
    assert token != forged
    with pytest.raises(StaleSelectionError):
        read_selection_token(forged, 7)


def test_expired_token_is_stale(monkeypatch):
    monkeypatch.setenv("SELECTION_TOKEN_TTL_MINUTES", "-1")
    token = create_selection_token(7, [0])
    with pytest.raises(StaleSelectionError):
        read_selection_token(token, 7)


def test_missing_secret_raises(monkeypatch):
    monkeypatch.delenv("JWT_SECRET")
    with pytest.raises(ValueError):
        create_selection_token(7, [0])
