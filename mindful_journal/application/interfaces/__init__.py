"""Application interfaces module."""

from .completion_service import ICompletionService

__all__ = [
    "ICompletionService",
]
