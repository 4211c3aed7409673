"""User settings repository interface."""

from abc import ABC, abstractmethod
from typing import Optional


class ISettingsRepository(ABC):
    """Key/value store for user settings such as the API key."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get setting value, or None when unset."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store setting value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove setting."""
        pass
