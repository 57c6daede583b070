"""Tests for the /api/chat relay endpoint."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from resume_copilot.config import AppConfig
from resume_copilot.providers import LLMResponse
from resume_copilot.web.app import create_app


class ScriptedProvider:
    def __init__(self, text: str = "Here is a stronger bullet.", error: Exception = None) -> None:
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, messages, config):
        self.calls.append((messages, config))
        if self.error:
            raise self.error
        return LLMResponse(text=self.text)


def _client(provider) -> TestClient:
    return TestClient(create_app(config=AppConfig(api_key="test-key"), provider=provider))


def test_relays_to_provider():
    provider = ScriptedProvider()
    with _client(provider) as client:
        response = client.post(
            "/api/chat",
            json={"system": "SYSTEM", "messages": [{"role": "user", "content": "Improve this"}]},
        )
    assert response.status_code == 200
    assert response.json() == {"content": "Here is a stronger bullet."}
    messages, config = provider.calls[0]
    assert [(m.role, m.content) for m in messages] == [("user", "Improve this")]
    assert config.system_prompt == "SYSTEM"
    assert config.max_tokens == 2000
    assert config.temperature == 0.7


@pytest.mark.parametrize("body", [{}, {"messages": "hi"}, {"messages": None}, ["not", "an", "object"]])
def test_messages_must_be_a_list(body):
    with _client(ScriptedProvider()) as client:
        response = client.post("/api/chat", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Messages array is required"}


def test_provider_failure_is_500():
    with _client(ScriptedProvider(error=RuntimeError("Incorrect API key provided"))) as client:
        response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "hi"}]})
    assert response.status_code == 500
    assert response.json() == {"error": "Incorrect API key provided"}


def test_empty_completion_is_500():
    with _client(ScriptedProvider(text="")) as client:
        response = client.post("/api/chat", json={"messages": []})
    assert response.status_code == 500
    assert response.json() == {"error": "No response from AI"}
