"""Pure domain logic for matching job-description keywords against a resume.

Keyword extraction itself is done by the model; this module parses the
model's JSON answer and diffs it against the document text.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


class KeywordSets(BaseModel):
    """Schema of the extraction answer; all four lists are required."""

    model_config = ConfigDict(populate_by_name=True)

    keywords: List[str]
    skills: List[str]
    tools: List[str]
    soft_skills: List[str] = Field(alias="softSkills")

    def all_keywords(self) -> List[str]:
        """Union of the four lists, first occurrence wins."""
        seen: Dict[str, None] = {}
        for keyword in [*self.keywords, *self.skills, *self.tools, *self.soft_skills]:
            cleaned = keyword.strip()
            if cleaned and cleaned not in seen:
                seen[cleaned] = None
        return list(seen)


@dataclass
class KeywordAnalysis:
    """Structured result from keyword matching."""

    keywords: List[str]
    skills: List[str]
    tools: List[str]
    soft_skills: List[str]
    matched: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    match_percent: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keywords": self.keywords,
            "skills": self.skills,
            "tools": self.tools,
            "softSkills": self.soft_skills,
            "matched": self.matched,
            "missing": self.missing,
            "matchPercent": self.match_percent,
        }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def extract_keyword_sets(raw_response: str) -> Optional[KeywordSets]:
    """Parse the first ``{...}`` span of *raw_response*.

    Returns ``None`` when there is no span, it is not valid JSON, or it does
    not match :class:`KeywordSets`.
    """
    match = _JSON_OBJECT_RE.search(raw_response or "")
    if match is None:
        logger.warning("Keyword extraction returned no JSON object")
        return None
    try:
        return KeywordSets.model_validate(json.loads(match.group(0)))
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning("Keyword extraction answer rejected: %s", exc)
        return None


def match_keywords(sets: KeywordSets, document_text: str) -> KeywordAnalysis:
    """Split the extracted keywords into matched/missing for *document_text*."""
    content_lower = document_text.lower()
    candidates = sets.all_keywords()

    matched = [kw for kw in candidates if kw.lower() in content_lower]
    missing = [kw for kw in candidates if kw.lower() not in content_lower]

    return KeywordAnalysis(
        keywords=list(sets.keywords),
        skills=list(sets.skills),
        tools=list(sets.tools),
        soft_skills=list(sets.soft_skills),
        matched=matched,
        missing=missing,
        match_percent=_match_percent(len(matched), len(candidates)),
    )


def build_add_keywords_message(missing: List[str]) -> str:
    """Chat message asking the assistant to work *missing* keywords in."""
    return (
        "Help me naturally add these missing keywords from the job description to my resume: "
        f"{', '.join(missing)}. Suggest where each one fits and write the updated content."
    )


# ---------------------------------------------------------------------------
# Report formatting
# ---------------------------------------------------------------------------


def format_keyword_report(analysis: KeywordAnalysis) -> str:
    """Render a :class:`KeywordAnalysis` as a human-readable report."""
    lines = [f"## Keyword Match: {analysis.match_percent}%", ""]

    if analysis.matched:
        lines.append(f"### Found in your resume ({len(analysis.matched)})")
        lines.append(", ".join(analysis.matched))
        lines.append("")

    if analysis.missing:
        lines.append(f"### Missing ({len(analysis.missing)})")
        lines.append(", ".join(analysis.missing))

    return "\n".join(lines).rstrip()


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _match_percent(matched: int, total: int) -> int:
    if total == 0:
        return 0
    # Half-up rounding, not Python's banker's rounding.
    return int(math.floor(100 * matched / total + 0.5))
