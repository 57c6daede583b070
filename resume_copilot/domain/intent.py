"""Keyword-based classification of what the user wants from the assistant."""

from __future__ import annotations

from typing import List, Tuple

REVIEW = "review"
RATE = "rate"
ATS_CHECK = "ats-check"
GAPS = "gaps"
CRITIQUE = "critique"
GENERAL = "general"

# Order matters: the first rule with a matching keyword wins.
INTENT_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    (REVIEW, ("read", "review", "look at")),
    (RATE, ("rate", "score", "how good")),
    (ATS_CHECK, ("ats", "applicant tracking")),
    (GAPS, ("missing", "need", "add")),
    (CRITIQUE, ("weak", "wrong", "fix")),
]


def detect_intent(message: str) -> str:
    """Return the intent tag for *message* (plain substring matching)."""
    lower = message.lower()
    for intent, keywords in INTENT_RULES:
        if any(keyword in lower for keyword in keywords):
            return intent
    return GENERAL
