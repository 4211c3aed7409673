"""External services module."""

from .completion_client import OpenAICompletionClient

__all__ = [
    "OpenAICompletionClient",
]
