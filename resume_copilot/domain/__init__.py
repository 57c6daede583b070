"""Resume Copilot Domain - Pure domain logic for the editor.

This package contains pure functions with no network or LLM dependencies.
All I/O is handled by the controller and web layers; this package operates on strings.
"""

from .ats_scorer import ScoreIssue, ScoreResult, format_score_report, score_label, score_resume
from .document import Document, DocumentMutation, Selection, apply_mutation, capture_selection
from .exporter import EXPORT_FORMATS, EmptyDocumentError, export_document, export_filename
from .insertion import InsertionResult, parse_insertion
from .intent import detect_intent
from .keyword_matcher import (
    KeywordAnalysis,
    KeywordSets,
    build_add_keywords_message,
    extract_keyword_sets,
    format_keyword_report,
    match_keywords,
)

__all__ = [
    # Document
    "Document",
    "DocumentMutation",
    "Selection",
    "apply_mutation",
    "capture_selection",
    # ATS score
    "score_resume",
    "score_label",
    "ScoreIssue",
    "ScoreResult",
    "format_score_report",
    # Assistant reply handling
    "detect_intent",
    "parse_insertion",
    "InsertionResult",
    # Keyword matcher
    "KeywordSets",
    "KeywordAnalysis",
    "extract_keyword_sets",
    "match_keywords",
    "build_add_keywords_message",
    "format_keyword_report",
    # Export
    "EXPORT_FORMATS",
    "EmptyDocumentError",
    "export_document",
    "export_filename",
]
