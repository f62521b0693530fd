"""Tests for the section select API endpoints."""

import json
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

# Ensure we import from root main.py
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from main import app
from massaction.errors import CourseNotFoundError, NoAllowedOptionError
from massaction.selection_token import create_selection_token
from massaction.types import SectionOption, SectionSelection
from web_api.auth import get_current_user

REQUEST_JSON = json.dumps({"action": "duplicatetocourse", "moduleIds": [10, 11]})


def _selection(allowed_values=(-1, 0, 1, 2)):
    """Selection for a three-section course; new section disallowed."""
    options = [
        SectionOption(
            -1, "Keep original section", -1 in allowed_values, "keep_original"
        ),
        *[
            SectionOption(n, f"Section {n}", n in allowed_values, "section")
            for n in range(3)
        ],
        SectionOption(3, "New section", 3 in allowed_values, "new_section"),
    ]
    return SectionSelection(
        options=options, allowed_values=list(allowed_values), last_section_number=2
    )


@pytest.fixture(autouse=True)
def jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "test-secret-for-api-tests-0123456789abcdef")


@pytest.fixture
def client():
    user = {"sub": "42", "user_id": 42}
    app.dependency_overrides[get_current_user] = lambda: user
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db():
    """Patch the DB connection and the selection loader used by the routes."""
    with (
        patch("web_api.routes.section_select.get_connection") as mock_get_conn,
        patch(
            "web_api.routes.section_select.load_section_selection",
            new_callable=AsyncMock,
        ) as mock_load,
    ):
        mock_conn = AsyncMock()
        mock_get_conn.return_value.__aenter__.return_value = mock_conn
        mock_get_conn.return_value.__aexit__.return_value = None
        mock_load.return_value = _selection()
        yield mock_load


def _form_params(**overrides):
    params = {
        "request": REQUEST_JSON,
        "instance_id": 5,
        "return_url": "/course/view.php?id=1",
        "sourcecourseid": 1,
        "targetcourseid": 2,
    }
    params.update(overrides)
    return {k: v for k, v in params.items() if v is not None}


class TestAuthentication:
    def test_requires_session(self):
        client = TestClient(app)
        response = client.get("/api/massaction/section-select", params=_form_params())
        assert response.status_code == 401


class TestGetSectionSelect:
    def test_returns_options_and_default(self, client, mock_db):
        response = client.get("/api/massaction/section-select", params=_form_params())

        assert response.status_code == 200
        data = response.json()
        assert [o["value"] for o in data["options"]] == [-1, 0, 1, 2, 3]
        assert data["options"][-1]["allowed"] is False
        assert data["allowedValues"] == [-1, 0, 1, 2]
        assert data["defaultValue"] == -1
        assert data["hidden"]["targetcourseid"] == 2
        assert data["hidden"]["request"] == REQUEST_JSON
        assert data["selectionToken"]

    def test_passes_user_and_courses_to_loader(self, client, mock_db):
        client.get("/api/massaction/section-select", params=_form_params())

        kwargs = mock_db.await_args.kwargs
        assert kwargs["user_id"] == 42
        assert kwargs["source_course_id"] == 1
        assert kwargs["target_course_id"] == 2
        assert kwargs["request"].module_ids == [10, 11]

    def test_missing_target_course_returns_redirect_info(self, client, mock_db):
        response = client.get(
            "/api/massaction/section-select",
            params=_form_params(targetcourseid=None),
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error"] == "notargetcourseidspecified"
        assert detail["return_url"] == "/course/view.php?id=1"
        mock_db.assert_not_awaited()

    def test_missing_source_course(self, client, mock_db):
        response = client.get(
            "/api/massaction/section-select",
            params=_form_params(sourcecourseid=None),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "sourcecourseidlost"

    def test_malformed_request(self, client, mock_db):
        response = client.get(
            "/api/massaction/section-select", params=_form_params(request="{")
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "invalidrequest"

    def test_empty_module_list_is_reported(self, client, mock_db):
        empty = json.dumps({"action": "moveto", "moduleIds": []})
        with patch("web_api.routes.section_select.sentry_sdk") as mock_sentry:
            response = client.get(
                "/api/massaction/section-select", params=_form_params(request=empty)
            )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "noitemselected"
        mock_sentry.capture_exception.assert_called_once()

    def test_unknown_course(self, client, mock_db):
        mock_db.side_effect = CourseNotFoundError("Course not found: 2")

        response = client.get("/api/massaction/section-select", params=_form_params())

        assert response.status_code == 404

    def test_no_allowed_option_blocks(self, client, mock_db):
        mock_db.side_effect = NoAllowedOptionError("No target section can be selected")

        response = client.get("/api/massaction/section-select", params=_form_params())

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "nosectionavailable"


class TestSubmitSectionSelect:
    def _body(self, **overrides):
        body = {
            "request": REQUEST_JSON,
            "instance_id": 5,
            "return_url": "/course/view.php?id=1",
            "sourcecourseid": 1,
            "targetcourseid": 2,
            "targetsectionnum": "1",
        }
        body.update(overrides)
        return body

    def test_accepts_allowed_section(self, client, mock_db):
        response = client.post(
            "/api/massaction/section-select", json=self._body(targetsectionnum="1")
        )

        assert response.status_code == 200
        assert response.json() == {
            "action": "duplicatetocourse",
            "moduleIds": [10, 11],
            "targetcourseid": 2,
            "targetsectionnum": 1,
        }

    def test_accepts_keep_original_as_int(self, client, mock_db):
        response = client.post(
            "/api/massaction/section-select", json=self._body(targetsectionnum=-1)
        )

        assert response.status_code == 200
        assert response.json()["targetsectionnum"] == -1

    @pytest.mark.parametrize("value", ["3", 3, "", None, "abc", True, 2.0, 1.0])
    def test_rejects_disallowed_or_missing_section(self, client, mock_db, value):
        response = client.post(
            "/api/massaction/section-select", json=self._body(targetsectionnum=value)
        )

        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["error"] == "invalidsectionnum"
        assert "sections" in detail["errors"]

    @pytest.mark.parametrize("value", [True, 2.0])
    def test_bool_and_float_are_not_coerced(self, client, mock_db, value):
        """true and 2.0 would pass as 1 and 2 if the body model converted them."""
        response = client.post(
            "/api/massaction/section-select", json=self._body(targetsectionnum=value)
        )

        assert response.status_code == 422
        assert response.json()["detail"]["error"] == "invalidsectionnum"

    def test_matching_selection_token_is_accepted(self, client, mock_db):
        token = create_selection_token(2, [-1, 0, 1, 2])

        response = client.post(
            "/api/massaction/section-select",
            json=self._body(selectionToken=token),
        )

        assert response.status_code == 200

    def test_course_changed_since_render_is_rejected(self, client, mock_db):
        """Section 1 got restricted after the form was rendered."""
        token = create_selection_token(2, [-1, 0, 1, 2])
        mock_db.return_value = _selection(allowed_values=(-1, 0, 2))

        response = client.post(
            "/api/massaction/section-select",
            json=self._body(targetsectionnum="0", selectionToken=token),
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "selectionchanged"

    def test_token_for_other_course_is_rejected(self, client, mock_db):
        token = create_selection_token(3, [-1, 0, 1, 2])

        response = client.post(
            "/api/massaction/section-select",
            json=self._body(selectionToken=token),
        )

        assert response.status_code == 409

    def test_missing_target_course(self, client, mock_db):
        response = client.post(
            "/api/massaction/section-select", json=self._body(targetcourseid=None)
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "notargetcourseidspecified"
