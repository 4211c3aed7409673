"""Domain services module."""

from .prompt_service import (
    CONTEXT_HEADER,
    DEFAULT_CUSTOM_PROMPT,
    SYSTEM_PROMPTS,
    PromptResolver,
    construct_journal_entry_context,
    get_system_prompt,
)

__all__ = [
    "CONTEXT_HEADER",
    "DEFAULT_CUSTOM_PROMPT",
    "SYSTEM_PROMPTS",
    "PromptResolver",
    "construct_journal_entry_context",
    "get_system_prompt",
]
