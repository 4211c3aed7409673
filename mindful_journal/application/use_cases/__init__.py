"""Application use cases module."""

from .chat_session_controller import ChatSessionController

__all__ = [
    "ChatSessionController",
]
