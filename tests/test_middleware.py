"""Tests for logging and error handling middleware."""
import logging

from fastapi.testclient import TestClient

from main import create_app
from src.api.endpoints.chat import get_gemini_client
from src.middleware.request_logging import redact
from tests.conftest import TEST_API_KEY, make_settings


def test_redact_masks_sensitive_keys():
    body = {"message": "hi", "api_key": "secret", "Password": "pw"}

    assert redact(body) == {"message": "hi", "api_key": "***REDACTED***", "Password": "***REDACTED***"}


def test_redact_leaves_non_dict_bodies():
    assert redact(["a"]) == ["a"]


def test_process_time_header(client):
    resp = client.post("/api/chat", json={"message": "hi"})

    assert "x-process-time" in resp.headers


def test_request_body_is_logged_without_api_key(client, caplog):
    with caplog.at_level(logging.INFO):
        client.post("/api/chat", json={"message": "有包廂嗎"})

    assert "有包廂嗎" in caplog.text
    assert TEST_API_KEY not in caplog.text


def test_unhandled_error_hides_details_in_production():
    def broken_client():
        raise RuntimeError("kaboom")

    app = create_app(make_settings(environment="production"))
    app.dependency_overrides[get_gemini_client] = broken_client
    client = TestClient(app)

    resp = client.post("/api/chat", json={"message": "hi"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Internal Server Error"
    assert "kaboom" not in resp.text
    assert "traceback" not in resp.json()


def test_unhandled_error_shows_details_outside_production():
    def broken_client():
        raise RuntimeError("kaboom")

    app = create_app(make_settings(environment="local"))
    app.dependency_overrides[get_gemini_client] = broken_client
    client = TestClient(app)

    resp = client.post("/api/chat", json={"message": "hi"})

    assert resp.status_code == 500
    assert resp.json()["message"] == "RuntimeError: kaboom"
    assert "traceback" in resp.json()
