"""Mindful journal: chat sessions anchored to journal entries."""

__version__ = "1.0.0"
