"""Pure domain logic for the heuristic ATS score shown beside the editor.

All functions operate on content strings -- no file I/O. The score starts at
100 and each failed check subtracts a fixed penalty.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

SECTION_PATTERNS: Dict[str, re.Pattern[str]] = {
    "summary": re.compile(r"summary|profile|objective", re.IGNORECASE),
    "experience": re.compile(r"experience|work history|employment", re.IGNORECASE),
    "skills": re.compile(r"skills|technical skills|core competencies", re.IGNORECASE),
    "education": re.compile(r"education|academic", re.IGNORECASE),
}

ACTION_VERBS: List[str] = [
    "led",
    "managed",
    "developed",
    "created",
    "built",
    "increased",
    "decreased",
    "improved",
    "designed",
    "implemented",
    "launched",
    "achieved",
    "delivered",
    "generated",
    "reduced",
    "streamlined",
    "coordinated",
    "established",
    "negotiated",
    "trained",
    "mentored",
]

PENALTIES: Dict[str, int] = {
    "summary": 10,
    "experience": 20,
    "skills": 10,
    "education": 5,
    "too_short": 15,
    "short": 5,
    "too_long": 10,
    "metrics": 15,
    "action_verbs": 10,
    "email": 5,
    "phone": 5,
    "special_chars": 10,
}

_METRIC_RE = re.compile(
    r"\d+%|\$[\d,]+|\d+\+?\s*(years|months|clients|customers|users|projects|team|people|members)",
    re.IGNORECASE | re.ASCII,
)
_ACTION_VERB_RE = re.compile(r"\b(" + "|".join(ACTION_VERBS) + r")\b", re.IGNORECASE | re.ASCII)
_EMAIL_RE = re.compile(r"[\w.-]+@[\w.-]+\.\w+", re.ASCII)
_PHONE_RE = re.compile(r"(\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}", re.ASCII)
# Box-drawing and bar glyphs that ATS parsers tend to mangle.
_SPECIAL_CHARS_RE = re.compile(r"[│┃┆┇┊┋╎╏║▎▏]")


@dataclass
class ScoreIssue:
    """A single failed check, in evaluation order."""

    type: str
    text: str
    priority: str  # "high" | "medium" | "low"


@dataclass
class ScoreResult:
    """Structured result from ATS scoring."""

    score: int
    issues: List[ScoreIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "issues": [asdict(issue) for issue in self.issues]}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def score_resume(content: str) -> ScoreResult:
    """Score resume *content* against the fixed rubric.

    Blank content short-circuits to a score of 0 with a single issue.
    """
    if not content or not content.strip():
        return ScoreResult(
            score=0,
            issues=[ScoreIssue(type="empty", text="Add content to your resume", priority="high")],
        )

    score = 100
    issues: List[ScoreIssue] = []
    for penalty, issue in _run_checks(content):
        score -= penalty
        issues.append(issue)

    return ScoreResult(score=max(0, min(100, score)), issues=issues)


def count_words(content: str) -> int:
    """Count whitespace-separated, non-empty tokens."""
    return len(content.split())


def score_label(score: int) -> str:
    """Short status line shown under the score dial."""
    if score >= 80:
        return "Looking good!"
    elif score >= 60:
        return "Needs improvement"
    else:
        return "Needs work"


# ---------------------------------------------------------------------------
# Formatting report (pure string output)
# ---------------------------------------------------------------------------


def format_score_report(result: ScoreResult) -> str:
    """Render a :class:`ScoreResult` as a human-readable report."""
    lines = [f"## ATS Score: {result.score}/100 ({score_label(result.score)})"]

    if result.issues:
        lines.append("")
        lines.append("### Suggestions")
        for i, issue in enumerate(result.issues, 1):
            lines.append(f"{i}. [{issue.priority}] {issue.text}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private checks
# ---------------------------------------------------------------------------


def _run_checks(content: str):
    yield from _check_sections(content)
    yield from _check_length(content)
    yield from _check_content(content)
    yield from _check_contact(content)
    yield from _check_formatting(content)


def _check_sections(content: str):
    if not SECTION_PATTERNS["summary"].search(content):
        yield PENALTIES["summary"], ScoreIssue("section", "Add a professional summary", "high")
    if not SECTION_PATTERNS["experience"].search(content):
        yield PENALTIES["experience"], ScoreIssue("section", "Add work experience section", "high")
    if not SECTION_PATTERNS["skills"].search(content):
        yield PENALTIES["skills"], ScoreIssue("section", "Add a skills section", "medium")
    if not SECTION_PATTERNS["education"].search(content):
        yield PENALTIES["education"], ScoreIssue("section", "Add education section", "low")


def _check_length(content: str):
    word_count = count_words(content)
    if word_count < 150:
        yield PENALTIES["too_short"], ScoreIssue(
            "length", "Resume is too short (aim for 400-700 words)", "high"
        )
    elif word_count < 300:
        yield PENALTIES["short"], ScoreIssue("length", "Consider adding more detail", "medium")
    elif word_count > 1000:
        yield PENALTIES["too_long"], ScoreIssue(
            "length", "Resume may be too long (aim for 1-2 pages)", "medium"
        )


def _check_content(content: str):
    if not _METRIC_RE.search(content):
        yield PENALTIES["metrics"], ScoreIssue(
            "content", "Add quantified achievements (%, $, numbers)", "high"
        )
    if not _ACTION_VERB_RE.search(content):
        yield PENALTIES["action_verbs"], ScoreIssue(
            "content", "Use strong action verbs (Led, Built, Increased, etc.)", "medium"
        )


def _check_contact(content: str):
    if not _EMAIL_RE.search(content):
        yield PENALTIES["email"], ScoreIssue("contact", "Add email address", "high")
    if not _PHONE_RE.search(content):
        yield PENALTIES["phone"], ScoreIssue("contact", "Add phone number", "medium")


def _check_formatting(content: str):
    if _SPECIAL_CHARS_RE.search(content):
        yield PENALTIES["special_chars"], ScoreIssue(
            "format", "Remove special characters (may confuse ATS)", "high"
        )
