"""
Shared fixtures for the test suite.

Rate limiting is disabled before the application is imported so that repeated
calls from the test client are never throttled.
"""
import os

os.environ["RATE_LIMIT_ENABLED"] = "false"

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
import httpx
import openai
import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.core.ai_client_manager import get_generation_client
from app.core.route_limiters import limiter
from app.services.generation.generation_client import GenerationClient


def make_completion(content):
    """Build an object shaped like an openai chat completion."""
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_status_error(status_code, body=None):
    """Build an openai.APIStatusError for the given HTTP status."""
    request = httpx.Request("POST", "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions")
    response = httpx.Response(status_code, request=request, json=body)
    return openai.APIStatusError(f"Error code: {status_code}", response=response, body=body)


def overload_error():
    return make_status_error(503, {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}})


class SleepRecorder:
    """Stands in for asyncio.sleep and records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def fake_openai():
    """A fake AsyncOpenAI exposing chat.completions.create as an AsyncMock."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


@pytest.fixture
def generation_client(fake_openai, sleep_recorder):
    return GenerationClient(client_factory=lambda api_key: fake_openai, sleep=sleep_recorder)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def client(generation_client):
    limiter.enabled = False
    app.dependency_overrides[get_generation_client] = lambda: generation_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def completion():
    return make_completion


@pytest.fixture
def status_error():
    return make_status_error


@pytest.fixture
def overload():
    return overload_error
