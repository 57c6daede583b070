"""Session and document endpoints for Web API v1."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from ..deps import get_store
from ....store import EditorSession, InMemorySessionStore

router = APIRouter(prefix="/sessions", tags=["sessions"])


class CreateSessionRequest(BaseModel):
    pro: bool = Field(default=False)


class SelectionView(BaseModel):
    text: str
    start: int
    end: int


class ChatMessageView(BaseModel):
    role: str
    content: str


class SessionView(BaseModel):
    session_id: str
    created_at: str
    title: str
    document: str
    word_count: int
    selection: Optional[SelectionView] = None
    history: List[ChatMessageView]
    awaiting_details: Optional[str] = None
    ai_uses_remaining: Optional[int] = None


class UpdateDocumentRequest(BaseModel):
    text: Optional[str] = None
    title: Optional[str] = None


class SelectionRequest(BaseModel):
    start: int = Field(ge=0)
    end: int = Field(ge=0)


def session_view(session: EditorSession) -> SessionView:
    selection = session.selection
    return SessionView(
        session_id=session.session_id,
        created_at=session.created_at,
        title=session.document.title,
        document=session.document.text,
        word_count=session.document.word_count,
        selection=(
            SelectionView(text=selection.text, start=selection.start, end=selection.end)
            if selection
            else None
        ),
        history=[ChatMessageView(role=m.role, content=m.content) for m in session.history],
        awaiting_details=session.awaiting_details,
        ai_uses_remaining=session.usage.remaining(),
    )


@router.post("", response_model=SessionView, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: Optional[CreateSessionRequest] = None,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionView:
    session = await store.create_session(pro=request.pro if request else False)
    return session_view(session)


@router.get("/{session_id}", response_model=SessionView)
async def get_session(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionView:
    return session_view(await store.get_session(session_id))


@router.put("/{session_id}/document", response_model=SessionView)
async def update_document(
    session_id: str,
    request: UpdateDocumentRequest,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionView:
    session = await store.update_document(session_id, text=request.text, title=request.title)
    return session_view(session)


@router.delete("/{session_id}/document", response_model=SessionView)
async def clear_document(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionView:
    return session_view(await store.clear_document(session_id))


@router.post("/{session_id}/selection", response_model=SessionView)
async def set_selection(
    session_id: str,
    request: SelectionRequest,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionView:
    session = await store.set_selection(session_id, start=request.start, end=request.end)
    return session_view(session)


@router.delete("/{session_id}/selection", response_model=SessionView)
async def clear_selection(
    session_id: str,
    store: InMemorySessionStore = Depends(get_store),
) -> SessionView:
    return session_view(await store.clear_selection(session_id))
