"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple, Union

import pytest

from resume_copilot.chat_proxy import ChatProxyError


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local runtime env that can leak into tests on developer machines."""
    for key in (
        "RESUME_COPILOT_PROVIDER",
        "RESUME_COPILOT_MODEL",
        "RESUME_COPILOT_PROXY_URL",
        "OPENAI_API_KEY",
        "GEMINI_API_KEY",
        "DEEPSEEK_API_KEY",
        "KIMI_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


class FakeChatProxy:
    """Scripted chat proxy: replies are consumed in order, exceptions are raised."""

    def __init__(self, *replies: Union[str, Exception]) -> None:
        self.replies: List[Union[str, Exception]] = list(replies)
        self.calls: List[Tuple[str, List[Dict[str, str]]]] = []

    async def complete(self, system: str, messages: Sequence[Dict[str, str]]) -> str:
        self.calls.append((system, [dict(m) for m in messages]))
        reply = self.replies.pop(0) if self.replies else "OK"
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_proxy() -> FakeChatProxy:
    return FakeChatProxy()


@pytest.fixture
def failing_proxy() -> FakeChatProxy:
    return FakeChatProxy(*[ChatProxyError("connection refused")] * 5)


@pytest.fixture
def make_proxy():
    """Factory for scripted proxies: ``make_proxy("reply", ChatProxyError(...))``."""
    return FakeChatProxy
