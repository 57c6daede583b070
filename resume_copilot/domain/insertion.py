"""Extraction of ``[[INSERT]]`` payloads from assistant replies."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

INSERT_OPEN = "[[INSERT]]"
INSERT_CLOSE = "[[/INSERT]]"
DEFAULT_ACKNOWLEDGEMENT = "Done! I've updated your document."

_INSERT_SPAN_RE = re.compile(re.escape(INSERT_OPEN) + r"(.*?)" + re.escape(INSERT_CLOSE), re.DOTALL)


@dataclass
class InsertionResult:
    insert_content: Optional[str]
    cleaned_message: str


def parse_insertion(text: str) -> InsertionResult:
    """Split *text* into document content and the conversational remainder.

    Only the first span is honored; later markers stay in the message as
    literal text.
    """
    match = _INSERT_SPAN_RE.search(text)
    if match is None:
        return InsertionResult(insert_content=None, cleaned_message=text)

    cleaned = (text[: match.start()] + text[match.end() :]).strip()
    return InsertionResult(
        insert_content=match.group(1).strip(),
        cleaned_message=cleaned or DEFAULT_ACKNOWLEDGEMENT,
    )
