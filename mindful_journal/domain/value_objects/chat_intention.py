"""Chat intention value objects."""

from enum import Enum
from typing import Any


class ChatIntention(str, Enum):
    """Conversational mode selected for a chat session."""
    REFLECT = "reflect"
    HELP_SEE_DIFFERENTLY = "help-see-differently"
    PROACTIVE = "proactive"
    THINKING_TRAPS = "thinking-traps"
    CUSTOM = "custom"


class MessageRole(str, Enum):
    """Author of a stored chat message."""
    USER = "user"
    ASSISTANT = "assistant"


_INTENTION_VALUES = frozenset(intention.value for intention in ChatIntention)


def is_valid_chat_intention(value: Any) -> bool:
    """Exact, case-sensitive membership test against the intention values."""
    if isinstance(value, ChatIntention):
        return True
    return isinstance(value, str) and value in _INTENTION_VALUES
