"""Infrastructure repositories module."""

from .journal_repository import SQLJournalEntryRepository
from .settings_repository import SQLSettingsRepository
from .lookup_tables import EmotionLookup, LookupTable, TagLookup

__all__ = [
    "SQLJournalEntryRepository",
    "SQLSettingsRepository",
    "EmotionLookup",
    "LookupTable",
    "TagLookup",
]
