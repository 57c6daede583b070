"""Chat proxy: ``(system, messages) -> generated text``.

The controller only depends on :class:`ChatProxy`. ``ProviderChatProxy`` calls
a hosted provider in-process with the server-held credential;
``HTTPChatProxy`` talks to a remote ``/api/chat`` endpoint.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Sequence

import httpx

from .config import AppConfig
from .providers import ChatProvider, GenerationConfig, Message, create_provider

logger = logging.getLogger(__name__)

ChatMessages = Sequence[Dict[str, str]]


class ChatProxyError(Exception):
    """Any failed exchange: error status, transport error, bad body or empty content."""


class ChatProxy(Protocol):
    """Protocol for chat proxy implementations."""

    async def complete(self, system: str, messages: ChatMessages) -> str: ...


class ProviderChatProxy:
    """Forward to a provider with fixed model, temperature and token cap."""

    def __init__(
        self,
        config: AppConfig,
        provider: Optional[ChatProvider] = None,
    ) -> None:
        self.config = config
        self._provider = provider

    @property
    def provider(self) -> ChatProvider:
        # Created lazily so the app can start before a key is configured.
        if self._provider is None:
            self._provider = create_provider(
                provider=self.config.provider,
                api_key=self.config.api_key,
                model=self.config.model,
                api_base=self.config.api_base,
            )
        return self._provider

    async def complete(self, system: str, messages: ChatMessages) -> str:
        generation = GenerationConfig(
            system_prompt=system,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
        try:
            response = await self.provider.generate(_to_messages(messages), generation)
        except Exception as exc:
            logger.debug("Provider request failed: %s", exc)
            raise ChatProxyError(str(exc) or exc.__class__.__name__) from exc

        if not response.text:
            raise ChatProxyError("No response from AI")
        return response.text


class HTTPChatProxy:
    """POST ``{system, messages}`` to a remote chat endpoint."""

    def __init__(self, url: str, client: Optional[httpx.AsyncClient] = None) -> None:
        self.url = url
        self._client = client

    async def complete(self, system: str, messages: ChatMessages) -> str:
        payload = {"system": system, "messages": [dict(m) for m in messages]}
        try:
            if self._client is not None:
                response = await self._client.post(self.url, json=payload)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise ChatProxyError(f"Chat proxy unreachable: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ChatProxyError(f"Chat proxy returned invalid JSON (status {response.status_code})") from exc

        if not response.is_success:
            message = body.get("error") if isinstance(body, dict) else None
            raise ChatProxyError(message or f"Chat proxy returned status {response.status_code}")

        content = body.get("content") if isinstance(body, dict) else None
        if not isinstance(content, str) or not content:
            raise ChatProxyError("No response from AI")
        return content


def create_chat_proxy(config: AppConfig) -> ChatProxy:
    """Remote proxy when ``proxy_url`` is configured, else in-process provider."""
    if config.proxy_url:
        return HTTPChatProxy(config.proxy_url)
    return ProviderChatProxy(config)


def _to_messages(messages: ChatMessages) -> List[Message]:
    return [Message(role=m["role"], content=m["content"]) for m in messages]
