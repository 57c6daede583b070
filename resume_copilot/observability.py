"""Observability for assistant exchanges - event log, logging setup and stats."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ExchangeEvent:
    """A single event recorded around an assistant request."""

    timestamp: datetime
    event_type: str  # "ai_request", "ai_error", "quota_refused", "keyword_analysis"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None


class ExchangeObserver:
    """
    Observability layer for chat and keyword-analysis requests.

    Collects events and logs them for debugging; never raises.
    """

    def __init__(self, session_id: Optional[str] = None, verbose: bool = False):
        self.events: List[ExchangeEvent] = []
        self.logger = logging.getLogger("resume_copilot")
        self.session_id = session_id
        self.verbose = verbose
        self._setup_logging()

    def _prefix(self) -> str:
        return f"[{self.session_id}] " if self.session_id else ""

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        if self.verbose:
            self.logger.setLevel(logging.INFO)

    def log_ai_request(self, intent: str, has_selection: bool, inserted: bool, duration_ms: float):
        """
        Log a successful chat exchange.

        Args:
            intent: Detected intent tag of the user message
            has_selection: Whether a selection snapshot was sent
            inserted: Whether the reply produced a document mutation
            duration_ms: Round-trip time of the proxy call
        """
        self.events.append(
            ExchangeEvent(
                timestamp=datetime.now(),
                event_type="ai_request",
                data={"intent": intent, "has_selection": has_selection, "inserted": inserted},
                duration_ms=duration_ms,
            )
        )
        self.logger.info(
            "%sAI request intent=%s selection=%s inserted=%s (%.2fms)",
            self._prefix(),
            intent,
            has_selection,
            inserted,
            duration_ms,
        )

    def log_error(self, error_type: str, message: str, duration_ms: Optional[float] = None):
        """Log a failed request; ``error_type`` is e.g. "chat_proxy" or "keyword_analysis"."""
        self.events.append(
            ExchangeEvent(
                timestamp=datetime.now(),
                event_type="ai_error",
                data={"error_type": error_type, "message": message},
                duration_ms=duration_ms,
            )
        )
        self.logger.error("%sError (%s): %s", self._prefix(), error_type, message)

    def log_quota_refused(self):
        self.events.append(ExchangeEvent(timestamp=datetime.now(), event_type="quota_refused", data={}))
        self.logger.info("%sAI request refused: quota exhausted", self._prefix())

    def log_keyword_analysis(self, parsed: bool, match_percent: Optional[int], duration_ms: float):
        self.events.append(
            ExchangeEvent(
                timestamp=datetime.now(),
                event_type="keyword_analysis",
                data={"parsed": parsed, "match_percent": match_percent},
                duration_ms=duration_ms,
            )
        )
        if parsed:
            self.logger.info("%sKeyword analysis %s%% (%.2fms)", self._prefix(), match_percent, duration_ms)
        else:
            self.logger.warning("%sKeyword analysis produced no result (%.2fms)", self._prefix(), duration_ms)

    def get_session_stats(self) -> Dict[str, Any]:
        """Aggregated statistics for the recorded events."""
        requests = [e for e in self.events if e.event_type == "ai_request"]
        return {
            "event_count": len(self.events),
            "ai_requests": len(requests),
            "insertions": sum(1 for e in requests if e.data.get("inserted")),
            "errors": sum(1 for e in self.events if e.event_type == "ai_error"),
            "quota_refusals": sum(1 for e in self.events if e.event_type == "quota_refused"),
            "total_duration_ms": sum(e.duration_ms or 0 for e in self.events),
        }

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
