"""Journal entry repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities import JournalEntry


class IJournalEntryRepository(ABC):
    """Journal entry repository interface.

    The chat session engine only uses ``get_by_id`` and ``update``; it
    never creates or deletes entries.
    """

    @abstractmethod
    async def get_by_id(self, entry_id: str) -> Optional[JournalEntry]:
        """Get journal entry by ID."""
        pass

    @abstractmethod
    async def update(self, entry: JournalEntry) -> JournalEntry:
        """Update journal entry, including its saved chat sessions."""
        pass

    @abstractmethod
    async def create(self, entry: JournalEntry) -> JournalEntry:
        """Create a new journal entry."""
        pass

    @abstractmethod
    async def get_all(self) -> List[JournalEntry]:
        """Get all journal entries, newest first."""
        pass

    @abstractmethod
    async def delete(self, entry_id: str) -> bool:
        """Delete journal entry."""
        pass
