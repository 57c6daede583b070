"""In-memory editor session store for Web API v1."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..chat_proxy import ChatProxy
from ..controller import (
    ChatMessage,
    ConversationBusyError,
    ConversationController,
    JobKeywordMatcher,
    SelectionRequiredError,
    TurnResult,
    UnknownActionError,
    initial_history,
)
from ..domain.ats_scorer import ScoreResult, score_resume
from ..domain.document import Document, Selection, apply_mutation, capture_selection
from ..domain.exporter import EmptyDocumentError, export_document
from ..domain.keyword_matcher import KeywordAnalysis, build_add_keywords_message
from ..observability import ExchangeObserver
from ..quota import DEFAULT_DAILY_LIMIT, UsageGate
from .errors import APIError, session_not_found

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format."""
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def make_id(prefix: str) -> str:
    """Create opaque id matching the documented prefix style."""
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


@dataclass
class EditorSession:
    session_id: str
    created_at: str
    usage: UsageGate
    controller: ConversationController
    matcher: JobKeywordMatcher
    document: Document = field(default_factory=Document)
    selection: Optional[Selection] = None
    history: List[ChatMessage] = field(default_factory=initial_history)
    awaiting_details: Optional[str] = None
    keyword_analysis: Optional[KeywordAnalysis] = None


class InMemorySessionStore:
    """Session state for the editor; nothing is persisted."""

    def __init__(
        self,
        chat_proxy: ChatProxy,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
        provider_name: str = "openai",
        model_name: str = "gpt-4o",
    ) -> None:
        self._sessions: Dict[str, EditorSession] = {}
        self._lock = asyncio.Lock()
        self.chat_proxy = chat_proxy
        self.daily_limit = daily_limit
        self.provider_name = provider_name
        self.model_name = model_name

    def runtime_metadata(self) -> Dict[str, str]:
        """Static provider/model values used by API observability logs."""
        return {"provider": self.provider_name, "model": self.model_name}

    async def create_session(self, pro: bool = False) -> EditorSession:
        session_id = make_id("sess")
        observer = ExchangeObserver(session_id=session_id)
        session = EditorSession(
            session_id=session_id,
            created_at=utc_now_iso(),
            usage=UsageGate(daily_limit=self.daily_limit, pro=pro),
            controller=ConversationController(self.chat_proxy, observer=observer, daily_limit=self.daily_limit),
            matcher=JobKeywordMatcher(self.chat_proxy, observer=observer),
        )
        async with self._lock:
            self._sessions[session_id] = session
        return session

    async def get_session(self, session_id: str) -> EditorSession:
        async with self._lock:
            session = self._sessions.get(session_id)
        if not session:
            raise session_not_found(session_id)
        return session

    # ------------------------------------------------------------------
    # Document editing
    # ------------------------------------------------------------------

    async def update_document(
        self,
        session_id: str,
        text: Optional[str] = None,
        title: Optional[str] = None,
    ) -> EditorSession:
        session = await self.get_session(session_id)
        if text is not None and text != session.document.text:
            session.document = Document(text=text, title=session.document.title)
            session.selection = None
        if title is not None:
            session.document = Document(text=session.document.text, title=title)
        return session

    async def clear_document(self, session_id: str) -> EditorSession:
        session = await self.get_session(session_id)
        session.document = Document(text="", title=session.document.title)
        session.selection = None
        return session

    async def set_selection(self, session_id: str, start: int, end: int) -> EditorSession:
        session = await self.get_session(session_id)
        try:
            session.selection = capture_selection(session.document.text, start, end)
        except ValueError as exc:
            raise APIError(400, "INVALID_SELECTION", str(exc), {"start": start, "end": end}) from exc
        return session

    async def clear_selection(self, session_id: str) -> EditorSession:
        session = await self.get_session(session_id)
        session.selection = None
        return session

    # ------------------------------------------------------------------
    # Assistant
    # ------------------------------------------------------------------

    async def send_message(self, session_id: str, text: str) -> TurnResult:
        session = await self.get_session(session_id)
        try:
            result = await session.controller.send(
                text,
                session.selection,
                session.awaiting_details,
                session.history,
                session.document.text,
                can_use_ai=session.usage.can_use_ai(),
                on_ai_use=session.usage.record_use,
            )
        except ConversationBusyError as exc:
            raise APIError(409, "CONVERSATION_BUSY", str(exc)) from exc
        self._commit_turn(session, result)
        return result

    async def run_action(self, session_id: str, action_id: str) -> TurnResult:
        session = await self.get_session(session_id)
        try:
            result = await session.controller.run_action(
                action_id,
                session.selection,
                session.awaiting_details,
                session.history,
                session.document.text,
                can_use_ai=session.usage.can_use_ai(),
                on_ai_use=session.usage.record_use,
            )
        except UnknownActionError as exc:
            raise APIError(404, "UNKNOWN_ACTION", str(exc.args[0]), {"action_id": action_id}) from exc
        except SelectionRequiredError as exc:
            raise APIError(400, "SELECTION_REQUIRED", str(exc), {"action_id": action_id}) from exc
        except ConversationBusyError as exc:
            raise APIError(409, "CONVERSATION_BUSY", str(exc)) from exc
        self._commit_turn(session, result)
        return result

    def _commit_turn(self, session: EditorSession, result: TurnResult) -> None:
        session.history = result.history
        session.awaiting_details = result.awaiting_details
        if result.mutation is not None:
            # The mutation carries its own selection snapshot; the live
            # selection is cleared either way.
            session.document, session.selection = apply_mutation(session.document, result.mutation)
            logger.info(
                "document_mutation session_id=%s kind=%s chars=%d",
                session.session_id,
                result.mutation.kind,
                len(result.mutation.content),
            )

    # ------------------------------------------------------------------
    # Analysis and export
    # ------------------------------------------------------------------

    async def score(self, session_id: str) -> ScoreResult:
        session = await self.get_session(session_id)
        return score_resume(session.document.text)

    async def analyze_keywords(self, session_id: str, job_description: str) -> Optional[KeywordAnalysis]:
        session = await self.get_session(session_id)
        try:
            analysis = await session.matcher.analyze(job_description, session.document.text)
        except ConversationBusyError as exc:
            raise APIError(409, "ANALYSIS_BUSY", str(exc)) from exc
        if analysis is not None:
            session.keyword_analysis = analysis
        return analysis

    async def add_missing_keywords(self, session_id: str) -> TurnResult:
        session = await self.get_session(session_id)
        analysis = session.keyword_analysis
        if analysis is None or not analysis.missing:
            raise APIError(400, "NO_MISSING_KEYWORDS", "Run a keyword match with missing keywords first")
        return await self.send_message(session_id, build_add_keywords_message(analysis.missing))

    async def export(self, session_id: str, fmt: str) -> Dict[str, Any]:
        session = await self.get_session(session_id)
        try:
            content = export_document(session.document, fmt)
        except EmptyDocumentError as exc:
            raise APIError(400, "EMPTY_DOCUMENT", str(exc)) from exc
        except ValueError as exc:
            raise APIError(404, "UNSUPPORTED_FORMAT", str(exc), {"format": fmt}) from exc
        return {"content": content, "title": session.document.title}
