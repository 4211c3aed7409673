"""Journal entry domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .chat import ChatSession


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class NamedRecord:
    """Emotion or tag as seen by the chat context builder."""

    id: str
    name: str


@dataclass
class JournalEntry:
    """Journal entry domain entity.

    ``chat_sessions`` is ``None`` when the entry has never held a saved
    chat session.
    """

    id: str
    body: str = ""
    title: Optional[str] = None
    emotion_ids: List[str] = field(default_factory=list)
    people_tag_ids: List[str] = field(default_factory=list)
    context_tag_ids: List[str] = field(default_factory=list)
    chat_sessions: Optional[List[ChatSession]] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @property
    def display_title(self) -> str:
        return self.title or "Untitled entry"

    @property
    def chat_session_count(self) -> int:
        return len(self.chat_sessions or [])

    def find_chat_session(self, session_id: str) -> Optional[ChatSession]:
        for session in self.chat_sessions or []:
            if session.id == session_id:
                return session
        return None
