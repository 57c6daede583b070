"""Provider normalization and factory tests."""

from types import SimpleNamespace

import pytest

from resume_copilot.providers import create_provider, resolve_api_key
from resume_copilot.providers.gemini import GeminiProvider
from resume_copilot.providers.openai_compat import OpenAICompatibleProvider
from resume_copilot.providers.types import GenerationConfig, Message


def _openai_provider() -> OpenAICompatibleProvider:
    return OpenAICompatibleProvider(api_key="test-key", model="kimi-k2", api_base="https://api.moonshot.cn/v1")


def test_openai_completion_normalizes_list_content():
    completion = SimpleNamespace(
        choices=[
            SimpleNamespace(
                message=SimpleNamespace(
                    content=[
                        {"type": "text", "text": "Led "},
                        {"type": "text", "text": "launches"},
                    ]
                )
            )
        ],
        usage=SimpleNamespace(prompt_tokens=10, completion_tokens=20, total_tokens=30),
    )

    response = _openai_provider()._from_openai_completion(completion)

    assert response.text == "Led launches"
    assert response.usage == {"prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30}


def test_openai_completion_without_choices_raises():
    with pytest.raises(RuntimeError, match="no choices"):
        _openai_provider()._from_openai_completion(SimpleNamespace(choices=[]))


def test_openai_messages_put_system_prompt_first():
    messages = _openai_provider()._to_openai_messages(
        [Message.assistant("Hi!"), Message.user("Improve this")],
        "SYSTEM",
    )
    assert messages == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "assistant", "content": "Hi!"},
        {"role": "user", "content": "Improve this"},
    ]


def test_openai_chat_kwargs():
    kwargs = _openai_provider()._build_chat_kwargs([], GenerationConfig(max_tokens=2000, temperature=0.7))
    assert kwargs == {"model": "kimi-k2", "messages": [], "max_tokens": 2000, "temperature": 0.7}


@pytest.mark.asyncio
async def test_openai_retries_with_allowed_temperature():
    provider = _openai_provider()
    calls = []

    async def create(**kwargs):
        calls.append(kwargs)
        if len(calls) == 1:
            raise RuntimeError("Error code: 400 - invalid temperature: only 1 is allowed for this model")
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="ok"))], usage=None)

    provider.client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

    response = await provider.generate([Message.user("hi")], GenerationConfig(temperature=0.7))

    assert response.text == "ok"
    assert [c["temperature"] for c in calls] == [0.7, 1.0]


def test_gemini_response_joins_text_parts():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.5-flash")
    response = SimpleNamespace(
        candidates=[
            SimpleNamespace(
                content=SimpleNamespace(parts=[SimpleNamespace(text="Stronger "), SimpleNamespace(text="bullet ")])
            )
        ],
        usage_metadata=None,
    )
    assert provider._from_gemini_response(response).text == "Stronger bullet"


def test_gemini_maps_assistant_to_model_role():
    provider = GeminiProvider(api_key="test-key", model="gemini-2.5-flash")
    contents = provider._to_gemini_contents([Message.user("hi"), Message.assistant("hello")])
    assert [c.role for c in contents] == ["user", "model"]


def test_create_provider_uses_known_api_base():
    provider = create_provider("deepseek", "sk-test", "deepseek-chat")
    assert isinstance(provider, OpenAICompatibleProvider)
    assert provider.api_base == "https://api.deepseek.com"


def test_resolve_api_key(monkeypatch):
    assert resolve_api_key("openai", "sk-config") == "sk-config"
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert resolve_api_key("openai", "sk-config") == "sk-env"
    with pytest.raises(ValueError, match="GEMINI_API_KEY"):
        resolve_api_key("gemini", "${GEMINI_API_KEY}")
