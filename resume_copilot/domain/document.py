"""In-memory resume document, selection and text splicing."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

DEFAULT_TITLE = "Untitled Resume"
APPEND_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class Selection:
    """Selected range of the document at the moment it was captured."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class Document:
    text: str = ""
    title: str = DEFAULT_TITLE

    @property
    def word_count(self) -> int:
        stripped = self.text.strip()
        return len(stripped.split()) if stripped else 0

    def is_blank(self) -> bool:
        return not self.text.strip()


@dataclass(frozen=True)
class DocumentMutation:
    """Content produced by the assistant and where it goes.

    ``selection`` is the snapshot taken when the request was issued; when it
    is ``None`` the content is appended.
    """

    content: str
    selection: Optional[Selection] = None

    @property
    def kind(self) -> str:
        return "replace" if self.selection is not None else "append"


def capture_selection(text: str, start: int, end: int) -> Optional[Selection]:
    """Snapshot ``text[start:end]``; a collapsed caret yields ``None``."""
    if not 0 <= start <= end <= len(text):
        raise ValueError(f"Selection [{start}, {end}) is outside the document (length {len(text)})")
    if start == end:
        return None
    return Selection(text=text[start:end], start=start, end=end)


def apply_mutation(document: Document, mutation: DocumentMutation) -> Tuple[Document, None]:
    """Apply *mutation* and return the new document with the selection cleared."""
    text = document.text
    snapshot = mutation.selection
    if snapshot is not None:
        new_text = text[: snapshot.start] + mutation.content + text[snapshot.end :]
    elif text.strip():
        new_text = text + APPEND_SEPARATOR + mutation.content
    else:
        new_text = mutation.content
    return replace(document, text=new_text), None
