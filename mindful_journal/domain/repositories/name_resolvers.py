"""Synchronous name lookups used to describe an entry."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities import NamedRecord


class IEmotionResolver(ABC):
    """Resolves emotion ids to emotions."""

    @abstractmethod
    def get_emotion_by_id(self, emotion_id: str) -> Optional[NamedRecord]:
        pass


class ITagResolver(ABC):
    """Resolves people and context tag ids to tags."""

    @abstractmethod
    def get_people_tag_by_id(self, tag_id: str) -> Optional[NamedRecord]:
        pass

    @abstractmethod
    def get_context_tag_by_id(self, tag_id: str) -> Optional[NamedRecord]:
        pass
