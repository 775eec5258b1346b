"""
Shared fixtures for the translator tests.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from app.api import get_provider_factory
from app.llm_client import GeminiClient, LLMProvider
from app.main import app

API_KEY = "test-gemini-key-5f2c"


class FakeProvider(LLMProvider):
    """Records every prompt and answers with a canned text (or raises)."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def complete(self, prompt, generation_config):
        self.calls.append((prompt, generation_config))
        if self.error is not None:
            raise self.error
        return self.text


def gemini_body(text):
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", API_KEY)
    monkeypatch.setenv("TRANSLATE_VARIANT", "simple")
    monkeypatch.setenv("APP_ENV", "production")
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    monkeypatch.delenv("GEMINI_TIMEOUT", raising=False)
    return monkeypatch


@pytest.fixture
def fake_provider():
    return FakeProvider(text="Saya merasa kesal...")


@pytest.fixture
def client(env, fake_provider):
    app.dependency_overrides[get_provider_factory] = lambda: (lambda settings: fake_provider)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def gemini_app(env):
    """Build a TestClient backed by a real GeminiClient talking to a mock transport."""
    def _make(handler):
        transport = httpx.MockTransport(handler)

        def factory(settings):
            return GeminiClient(settings.api_key, model=settings.model, transport=transport)

        app.dependency_overrides[get_provider_factory] = lambda: factory
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
