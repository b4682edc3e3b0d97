"""Shared fixtures: app factory, fake Gemini upstream, test client."""
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from main import create_app
from src.api.endpoints.chat import get_gemini_client
from src.config.settings import Settings
from src.services.gemini import GeminiClient

TEST_API_KEY = "test-google-key-123"
TEST_API_URL = "https://gemini.test/v1/models/gemini-2.5-flash:generateContent"


def gemini_reply(text: str) -> dict:
    """A well-formed generateContent body with one candidate."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ]
    }


class FakeGemini:
    """MockTransport handler recording every outbound request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.calls: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.handler(request)

    def client(self, api_key: str = TEST_API_KEY) -> GeminiClient:
        return GeminiClient(
            httpx.AsyncClient(transport=httpx.MockTransport(self)),
            api_url=TEST_API_URL,
            api_key=api_key,
            timeout=30.0,
        )


def make_settings(**overrides) -> Settings:
    values = {
        "google_api_key": TEST_API_KEY,
        "gemini_api_url": TEST_API_URL,
        "static_dir": "/nonexistent/build",
        "environment": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def fake_gemini():
    return FakeGemini(lambda request: httpx.Response(200, json=gemini_reply("歡迎光臨！")))


@pytest.fixture
def app(fake_gemini):
    app = create_app(make_settings())
    app.dependency_overrides[get_gemini_client] = lambda: fake_gemini.client()
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
