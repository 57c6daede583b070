"""Conversation controller: turns chat turns into document mutations.

State is passed in and returned explicitly; the controller itself only owns
its busy flag, so one instance serves one editor session.
"""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Callable, Dict, List, Optional, Sequence

from .chat_proxy import ChatProxy, ChatProxyError
from .domain.document import DocumentMutation, Selection
from .domain.insertion import parse_insertion
from .domain.intent import detect_intent
from .domain.keyword_matcher import KeywordAnalysis, extract_keyword_sets, match_keywords
from .observability import ExchangeObserver
from .quota import DEFAULT_DAILY_LIMIT
from .skills.editor_prompt import build_system_prompt
from .skills.keyword_prompt import KEYWORD_EXTRACTION_PROMPT, build_keyword_messages
from .skills.quick_actions import (
    CONNECTIVITY_ERROR,
    GREETING,
    SECTION_FLOWS,
    SELECTION_ACTIONS,
    quota_refusal,
)


class ConversationBusyError(RuntimeError):
    """A request is already in flight for this controller."""


class UnknownActionError(LookupError):
    """Quick action id is neither a selection action nor a section flow."""


class SelectionRequiredError(ValueError):
    """Selection actions need an active selection."""


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "user" | "assistant"
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class TurnResult:
    """Outcome of one controller operation."""

    history: List[ChatMessage]
    mutation: Optional[DocumentMutation] = None
    awaiting_details: Optional[str] = None
    ai_used: bool = False

    @property
    def reply(self) -> Optional[str]:
        if self.history and self.history[-1].role == "assistant":
            return self.history[-1].content
        return None


def initial_history() -> List[ChatMessage]:
    return [ChatMessage("assistant", GREETING)]


class ConversationController:
    """Orchestrates one chat turn: prompt, proxy call, parse, mutation."""

    def __init__(
        self,
        chat_proxy: ChatProxy,
        observer: Optional[ExchangeObserver] = None,
        daily_limit: int = DEFAULT_DAILY_LIMIT,
    ) -> None:
        self.chat_proxy = chat_proxy
        self.observer = observer or ExchangeObserver()
        self.daily_limit = daily_limit
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def send(
        self,
        user_text: str,
        selection: Optional[Selection],
        awaiting_details: Optional[str],
        history: Sequence[ChatMessage],
        document_text: str,
        can_use_ai: bool = True,
        on_ai_use: Optional[Callable[[], None]] = None,
    ) -> TurnResult:
        """Run one chat turn and return the new history and optional mutation."""
        history = list(history)
        if not user_text.strip():
            return TurnResult(history=history, awaiting_details=awaiting_details)
        if self._busy:
            raise ConversationBusyError("A request is already in progress")

        if not can_use_ai:
            self.observer.log_quota_refused()
            history += [
                ChatMessage("user", user_text),
                ChatMessage("assistant", quota_refusal(self.daily_limit)),
            ]
            return TurnResult(history=history, awaiting_details=awaiting_details)

        # Selection is frozen; this reference is the snapshot used for the
        # mutation no matter what the editor does while the request is out.
        snapshot = selection

        outgoing_text = user_text
        flow = SECTION_FLOWS.get(awaiting_details) if awaiting_details else None
        if flow is not None:
            outgoing_text = f"{user_text}\n\n{flow.generate_prompt}"
        awaiting_details = None

        user_message = ChatMessage("user", user_text)
        messages = [m.to_dict() for m in history] + [{"role": "user", "content": outgoing_text}]
        history.append(user_message)

        intent = detect_intent(user_text)
        system_prompt = build_system_prompt(document_text, snapshot, intent)

        self._busy = True
        start = perf_counter()
        try:
            assistant_text = await self.chat_proxy.complete(system_prompt, messages)
        except ChatProxyError as exc:
            self.observer.log_error("chat_proxy", str(exc), (perf_counter() - start) * 1000)
            history.append(ChatMessage("assistant", CONNECTIVITY_ERROR))
            return TurnResult(history=history, awaiting_details=awaiting_details)
        finally:
            self._busy = False

        parsed = parse_insertion(assistant_text)
        mutation = None
        if parsed.insert_content:
            mutation = DocumentMutation(content=parsed.insert_content, selection=snapshot)

        history.append(ChatMessage("assistant", parsed.cleaned_message))
        self.observer.log_ai_request(
            intent=intent,
            has_selection=snapshot is not None,
            inserted=mutation is not None,
            duration_ms=(perf_counter() - start) * 1000,
        )
        if on_ai_use is not None:
            on_ai_use()

        return TurnResult(history=history, mutation=mutation, awaiting_details=awaiting_details, ai_used=True)

    def start_section_flow(self, action_id: str, history: Sequence[ChatMessage]) -> TurnResult:
        """Ask the flow's clarifying question; no network call."""
        if self._busy:
            raise ConversationBusyError("A request is already in progress")
        flow = SECTION_FLOWS.get(action_id)
        if flow is None:
            raise UnknownActionError(f"Unknown section flow: {action_id}")
        return TurnResult(
            history=[*history, ChatMessage("assistant", flow.question)],
            awaiting_details=action_id,
        )

    async def run_action(
        self,
        action_id: str,
        selection: Optional[Selection],
        awaiting_details: Optional[str],
        history: Sequence[ChatMessage],
        document_text: str,
        can_use_ai: bool = True,
        on_ai_use: Optional[Callable[[], None]] = None,
    ) -> TurnResult:
        """Dispatch a quick action button."""
        if action_id in SELECTION_ACTIONS:
            if selection is None:
                raise SelectionRequiredError(f"Select text before using '{action_id}'")
            return await self.send(
                SELECTION_ACTIONS[action_id],
                selection,
                awaiting_details,
                history,
                document_text,
                can_use_ai=can_use_ai,
                on_ai_use=on_ai_use,
            )
        if action_id in SECTION_FLOWS:
            return self.start_section_flow(action_id, history)
        raise UnknownActionError(f"Unknown quick action: {action_id}")


class JobKeywordMatcher:
    """One proxy call per analysis; unusable answers yield ``None``."""

    def __init__(self, chat_proxy: ChatProxy, observer: Optional[ExchangeObserver] = None) -> None:
        self.chat_proxy = chat_proxy
        self.observer = observer or ExchangeObserver()
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    async def analyze(self, job_description: str, document_text: str) -> Optional[KeywordAnalysis]:
        if not job_description.strip():
            return None
        if self._busy:
            raise ConversationBusyError("A keyword analysis is already in progress")

        self._busy = True
        start = perf_counter()
        try:
            raw = await self.chat_proxy.complete(
                KEYWORD_EXTRACTION_PROMPT,
                build_keyword_messages(job_description),
            )
        except ChatProxyError as exc:
            self.observer.log_error("keyword_analysis", str(exc), (perf_counter() - start) * 1000)
            return None
        finally:
            self._busy = False

        sets = extract_keyword_sets(raw)
        analysis = match_keywords(sets, document_text) if sets is not None else None
        self.observer.log_keyword_analysis(
            parsed=analysis is not None,
            match_percent=analysis.match_percent if analysis else None,
            duration_ms=(perf_counter() - start) * 1000,
        )
        return analysis
