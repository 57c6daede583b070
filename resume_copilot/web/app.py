"""FastAPI app entrypoint for Resume Copilot web APIs."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from ..chat_proxy import ChatProxy, ProviderChatProxy, create_chat_proxy
from ..config import AppConfig, load_config
from ..providers import ChatProvider
from .api.v1.router import api_v1_router
from .errors import (
    APIError,
    ChatEndpointError,
    api_error_handler,
    chat_endpoint_error_handler,
    validation_error_handler,
)
from .proxy import router as proxy_router
from .store import InMemorySessionStore

logger = logging.getLogger("resume_copilot.web.api")


def _load_app_config() -> AppConfig:
    try:
        return load_config()
    except FileNotFoundError:
        logger.warning("No config file found; using built-in defaults")
        return AppConfig()


def create_app(
    config: Optional[AppConfig] = None,
    chat_proxy: Optional[ChatProxy] = None,
    provider: Optional[ChatProvider] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``chat_proxy`` drives the editor sessions; ``provider`` backs the
    ``/api/chat`` relay. Both default to what ``config`` describes.
    """
    config = config or _load_app_config()
    provider_proxy = ProviderChatProxy(config, provider=provider)
    if chat_proxy is None:
        chat_proxy = provider_proxy if not config.proxy_url else create_chat_proxy(config)
    store = InMemorySessionStore(
        chat_proxy=chat_proxy,
        daily_limit=config.free_ai_uses,
        provider_name=config.provider,
        model_name=config.model,
    )

    app = FastAPI(title="Resume Copilot API", version="0.1.0")
    app.state.session_store = store
    app.state.provider_proxy = provider_proxy
    app.include_router(api_v1_router)
    app.include_router(proxy_router)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        start = perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration_ms = (perf_counter() - start) * 1000
            path_params = request.scope.get("path_params", {})
            meta = store.runtime_metadata()
            logger.info(
                "api_request method=%s path=%s status=%s duration_ms=%.2f session_id=%s provider=%s model=%s",
                request.method,
                request.url.path,
                status_code,
                duration_ms,
                path_params.get("session_id", "-"),
                meta["provider"],
                meta["model"],
            )

    @app.get("/healthz", tags=["system"])
    async def healthz() -> dict:
        return {"status": "ok"}

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ChatEndpointError, chat_endpoint_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    return app


def main(host: str = "127.0.0.1", port: int = 8000, config: Optional[AppConfig] = None) -> None:
    """Run development API server."""
    import uvicorn

    uvicorn.run(create_app(config), host=host, port=port)
