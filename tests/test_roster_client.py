"""
Tests for the remote list client.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import requests

from funny_names.errors import NetworkError
from funny_names.roster import Student, StudentsClient, build_session
from funny_names.roster.factory import create_roster_module


def make_session(payload=None, status_code=200, exc=None):
    """Create a mock requests session returning ``payload`` as JSON."""
    session = MagicMock()
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else []
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
    if exc is not None:
        session.request.side_effect = exc
    else:
        session.request.return_value = response
    return session


class TestBuildSession:

    def test_bypass_header_is_always_sent(self):
        session = build_session()
        assert session.headers["ngrok-skip-browser-warning"] == "true"

    def test_custom_bypass_header(self):
        session = build_session("x-skip", "1")
        assert session.headers["x-skip"] == "1"


class TestStudentsClient:

    def test_url_joins_base_and_path(self):
        client = StudentsClient("https://example.test/", session=MagicMock(), students_path="students")
        assert client.url == "https://example.test/students"

    def test_list_students_preserves_remote_order(self):
        payload = [
            {"id": 2, "name": "Zoe", "username": "zoe"},
            {"id": 1, "name": "Ana", "username": "ana123", "extra": "ignored"},
        ]
        session = make_session(payload)
        client = StudentsClient("https://example.test", session=session, timeout=4)

        students = client.list_students()

        assert [s.name for s in students] == ["Zoe", "Ana"]
        assert students[1] == Student(id=1, name="Ana", username="ana123")
        session.request.assert_called_once_with("GET", "https://example.test/students", timeout=4)

    def test_list_students_without_username(self):
        session = make_session([{"id": "a1", "name": "Solo"}])
        client = StudentsClient("https://example.test", session=session)

        students = client.list_students()
        assert students[0].username is None

    def test_list_students_null_name_is_empty(self):
        session = make_session([
            {"id": 1, "name": None, "username": "anon"},
            {"id": 2, "name": "Zoe", "username": "zoe"},
        ])
        client = StudentsClient("https://example.test", session=session)

        students = client.list_students()

        assert [s.name for s in students] == ["", "Zoe"]
        assert students[0].model_dump() == {"id": 1, "name": "", "username": "anon"}

    def test_create_student_posts_payload(self):
        session = make_session({"id": 3})
        client = StudentsClient("https://example.test", session=session, timeout=4)

        client.create_student({"name": "Ana", "username": "ana123"})

        session.request.assert_called_once_with(
            "POST", "https://example.test/students", timeout=4,
            json={"name": "Ana", "username": "ana123"}
        )

    def test_http_error_becomes_network_error(self):
        session = make_session(status_code=500)
        client = StudentsClient("https://example.test", session=session)

        with pytest.raises(NetworkError) as exc_info:
            client.create_student({"name": "Ana"})
        assert exc_info.value.status_code == 500

    def test_connection_error_becomes_network_error(self):
        session = make_session(exc=requests.exceptions.ConnectionError("refused"))
        client = StudentsClient("https://example.test", session=session)

        with pytest.raises(NetworkError):
            client.list_students()

    def test_malformed_payload_becomes_network_error(self):
        session = make_session({"not": "a list"})
        client = StudentsClient("https://example.test", session=session)

        with pytest.raises(NetworkError):
            client.list_students()

    def test_non_json_body_becomes_network_error(self):
        session = make_session()
        session.request.return_value.json.side_effect = ValueError("no json")
        client = StudentsClient("https://example.test", session=session)

        with pytest.raises(NetworkError):
            client.list_students()


def test_create_roster_module_uses_remote_config():
    remote_config = SimpleNamespace(
        base_url="https://example.test",
        students_path="/students",
        timeout=7,
        bypass_header="ngrok-skip-browser-warning",
        bypass_value="true"
    )

    module = create_roster_module(remote_config)

    assert module["client"].url == "https://example.test/students"
    assert module["client"].timeout == 7
    assert module["session"].headers["ngrok-skip-browser-warning"] == "true"
