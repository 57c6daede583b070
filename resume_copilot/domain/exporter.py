"""Pure domain logic for exporting the document.

All functions return bytes/strings -- writing or streaming them is the
caller's job.
"""

from __future__ import annotations

import html
import io

from docx import Document as DocxDocument
from docx.shared import Pt

from .document import Document

EXPORT_FORMATS = {
    "txt": "text/plain; charset=utf-8",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "html": "text/html; charset=utf-8",
}


class EmptyDocumentError(ValueError):
    """Raised when exporting a blank document."""


def export_filename(title: str, ext: str) -> str:
    return f"{title.strip() or 'resume'}.{ext}"


def export_document(document: Document, fmt: str) -> bytes:
    """Dispatch to the exporter for *fmt* (one of :data:`EXPORT_FORMATS`)."""
    if fmt == "txt":
        return to_plain_text(document)
    if fmt == "docx":
        return to_docx(document)
    if fmt == "html":
        return to_print_html(document).encode("utf-8")
    raise ValueError(f"Unsupported export format: {fmt}")


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


def to_plain_text(document: Document) -> bytes:
    _require_content(document)
    return document.text.encode("utf-8")


# ---------------------------------------------------------------------------
# DOCX
# ---------------------------------------------------------------------------


def to_docx(document: Document) -> bytes:
    """One paragraph per line, Calibri 12pt."""
    _require_content(document)
    doc = DocxDocument()
    for line in document.text.split("\n"):
        run = doc.add_paragraph().add_run(line)
        run.font.name = "Calibri"
        run.font.size = Pt(12)

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Print page
# ---------------------------------------------------------------------------

_PRINT_STYLES = """
        body { font-family: Georgia, serif; max-width: 8.5in; margin: 0.5in auto; }
        p { margin: 0 0 8px 0; font-size: 11pt; line-height: 1.4; }
"""


def to_print_html(document: Document) -> str:
    """Letter-sized page for the browser print dialog."""
    _require_content(document)
    paragraphs = "\n".join(
        f"        <p>{html.escape(line) if line else '&nbsp;'}</p>" for line in document.text.split("\n")
    )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>{html.escape(document.title.strip() or 'Resume')}</title>
    <style>
{_PRINT_STYLES}
    </style>
</head>
<body>
{paragraphs}
</body>
</html>"""


def _require_content(document: Document) -> None:
    if document.is_blank():
        raise EmptyDocumentError("Nothing to export: the document is empty")
