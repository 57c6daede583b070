"""Assistant conversation endpoints for Web API v1."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..deps import get_store
from .sessions import SessionView, session_view
from ....store import InMemorySessionStore
from .....controller import TurnResult

router = APIRouter(prefix="/sessions", tags=["chat"])


class SendMessageRequest(BaseModel):
    text: str = Field(max_length=20_000)


class TurnResponse(BaseModel):
    reply: Optional[str] = None
    mutation: Optional[str] = None  # "replace" | "append"
    ai_used: bool
    session: SessionView


def turn_response(result: TurnResult, view: SessionView) -> TurnResponse:
    return TurnResponse(
        reply=result.reply,
        mutation=result.mutation.kind if result.mutation else None,
        ai_used=result.ai_used,
        session=view,
    )


@router.post("/{session_id}/messages", response_model=TurnResponse)
async def send_message(
    session_id: str,
    request: SendMessageRequest,
    store: InMemorySessionStore = Depends(get_store),
) -> TurnResponse:
    result = await store.send_message(session_id, request.text)
    return turn_response(result, session_view(await store.get_session(session_id)))


@router.post("/{session_id}/actions/{action_id}", response_model=TurnResponse)
async def run_action(
    session_id: str,
    action_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> TurnResponse:
    result = await store.run_action(session_id, action_id)
    return turn_response(result, session_view(await store.get_session(session_id)))
