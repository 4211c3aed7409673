"""Infrastructure database module."""

from .connection import Base, DatabaseManager
from .models import JournalEntryModel, UserSettingModel

__all__ = [
    "Base",
    "DatabaseManager",
    "JournalEntryModel",
    "UserSettingModel",
]
