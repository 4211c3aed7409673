"""Domain value objects module."""

from .chat_intention import ChatIntention, MessageRole, is_valid_chat_intention

__all__ = [
    "ChatIntention",
    "MessageRole",
    "is_valid_chat_intention",
]
