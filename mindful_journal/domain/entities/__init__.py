"""Domain entities module."""

from .chat import ChatMessage, ChatSession, create_chat_message, create_chat_session, utc_timestamp
from .journal import JournalEntry, NamedRecord

__all__ = [
    "ChatMessage",
    "ChatSession",
    "create_chat_message",
    "create_chat_session",
    "utc_timestamp",
    "JournalEntry",
    "NamedRecord",
]
