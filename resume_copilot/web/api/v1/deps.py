"""Dependency providers for v1 API."""

from __future__ import annotations

from fastapi import Request

from ...store import InMemorySessionStore


def get_store(request: Request) -> InMemorySessionStore:
    """Access shared session store from app state."""
    return request.app.state.session_store
