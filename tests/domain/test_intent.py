"""Tests for intent detection."""

import pytest

from resume_copilot.domain.intent import detect_intent


@pytest.mark.parametrize(
    ("message", "intent"),
    [
        ("Can you review my resume?", "review"),
        ("Please LOOK AT my summary", "review"),
        ("How good is this?", "rate"),
        ("Give it a score", "rate"),
        ("Is it ATS friendly?", "ats-check"),
        ("Will an applicant tracking system parse it", "ats-check"),
        ("What am I missing?", "gaps"),
        ("Add a projects section", "gaps"),
        ("Fix my bullet points", "critique"),
        ("What's wrong here", "critique"),
        ("Hello there", "general"),
        ("", "general"),
    ],
)
def test_detect_intent(message, intent):
    assert detect_intent(message) == intent


def test_earlier_rule_wins():
    # "read" (review) beats "score" (rate) and "fix" (critique).
    assert detect_intent("read it, score it and fix it") == "review"
    assert detect_intent("score my ats compatibility") == "rate"


def test_plain_substring_matching():
    # "already" contains "read"; no word boundaries are applied.
    assert detect_intent("I already updated it") == "review"
    assert detect_intent("that batsman") == "ats-check"


def test_review_precedes_gaps():
    assert detect_intent("please review, I need help") == "review"
