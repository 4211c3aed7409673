"""Domain repository interfaces."""

from .journal_repository import IJournalEntryRepository
from .settings_repository import ISettingsRepository
from .name_resolvers import IEmotionResolver, ITagResolver

__all__ = [
    "IJournalEntryRepository",
    "ISettingsRepository",
    "IEmotionResolver",
    "ITagResolver",
]
