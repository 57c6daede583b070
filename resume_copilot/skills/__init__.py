"""Prompt assets for the editor assistant."""

from .editor_prompt import EDITOR_PROMPT_TEMPLATE, build_system_prompt
from .keyword_prompt import KEYWORD_EXTRACTION_PROMPT, build_keyword_messages
from .quick_actions import (
    CONNECTIVITY_ERROR,
    GREETING,
    SECTION_FLOWS,
    SELECTION_ACTIONS,
    SectionFlow,
    quota_refusal,
)

__all__ = [
    "EDITOR_PROMPT_TEMPLATE",
    "build_system_prompt",
    "KEYWORD_EXTRACTION_PROMPT",
    "build_keyword_messages",
    "CONNECTIVITY_ERROR",
    "GREETING",
    "SECTION_FLOWS",
    "SELECTION_ACTIONS",
    "SectionFlow",
    "quota_refusal",
]
