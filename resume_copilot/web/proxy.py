"""``POST /api/chat``: server-side relay to the model provider.

Keeps the provider credential on the server. Errors use the flat
``{"error": message}`` shape the browser client expects.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Request

from ..chat_proxy import ChatProxyError
from .errors import ChatEndpointError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["proxy"])


@router.post("/chat")
async def chat(request: Request) -> Dict[str, Any]:
    try:
        body = await request.json()
    except ValueError as exc:
        raise ChatEndpointError(400, "Messages array is required") from exc

    messages = body.get("messages") if isinstance(body, dict) else None
    if not isinstance(messages, list):
        raise ChatEndpointError(400, "Messages array is required")
    for message in messages:
        if not isinstance(message, dict) or not isinstance(message.get("content"), str):
            raise ChatEndpointError(400, "Each message needs role and content")

    system = body.get("system") or ""
    if not isinstance(system, str):
        raise ChatEndpointError(400, "System prompt must be a string")

    proxy = request.app.state.provider_proxy
    try:
        content = await proxy.complete(
            system,
            [{"role": m.get("role", "user"), "content": m["content"]} for m in messages],
        )
    except ChatProxyError as exc:
        logger.error("chat_proxy_failed error=%s", exc)
        raise ChatEndpointError(500, str(exc) or "AI request failed") from exc
    return {"content": content}
