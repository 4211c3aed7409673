"""Chat domain entities."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union
from uuid import uuid4

from ..value_objects import ChatIntention, MessageRole


def utc_timestamp() -> str:
    """Current instant as an ISO-8601 UTC string, e.g. 2024-01-01T10:00:00.000Z."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class ChatMessage:
    """A single stored message of a chat session."""

    role: MessageRole
    content: str
    timestamp: str

    @property
    def is_user_message(self) -> bool:
        """Check if message is from user."""
        return self.role == MessageRole.USER

    @property
    def is_assistant_message(self) -> bool:
        """Check if message is from assistant."""
        return self.role == MessageRole.ASSISTANT

    def to_dict(self) -> Dict[str, str]:
        return {
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatMessage":
        return cls(
            role=MessageRole(data["role"]),
            content=data["content"],
            timestamp=data["timestamp"],
        )


@dataclass
class ChatSession:
    """Conversation anchored to one journal entry.

    Messages are append-only while the session is active. Persisted copies
    use the storage keys of the journal entry document (camelCase).
    """

    id: str
    journal_entry_id: str
    intention: ChatIntention
    created_at: str
    custom_prompt: Optional[str] = None
    messages: List[ChatMessage] = field(default_factory=list)

    @property
    def user_message_count(self) -> int:
        return sum(1 for msg in self.messages if msg.is_user_message)

    @property
    def assistant_message_count(self) -> int:
        return sum(1 for msg in self.messages if msg.is_assistant_message)

    @property
    def has_complete_exchange(self) -> bool:
        """At least two messages, with both a user and an assistant message."""
        return (
            len(self.messages) >= 2
            and self.user_message_count > 0
            and self.assistant_message_count > 0
        )

    def append_exchange(self, user_message: ChatMessage, assistant_message: ChatMessage) -> None:
        """Append a user message followed by the assistant reply."""
        self.messages.extend([user_message, assistant_message])

    def to_dict(self) -> Dict[str, Any]:
        """Plain, structurally independent snapshot of the session."""
        data: Dict[str, Any] = {
            "id": self.id,
            "journalEntryId": self.journal_entry_id,
            "intention": self.intention.value,
            "createdAt": self.created_at,
            "messages": [msg.to_dict() for msg in self.messages],
        }
        if self.custom_prompt is not None:
            data["customPrompt"] = self.custom_prompt
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChatSession":
        return cls(
            id=data["id"],
            journal_entry_id=data["journalEntryId"],
            intention=ChatIntention(data["intention"]),
            created_at=data["createdAt"],
            custom_prompt=data.get("customPrompt"),
            messages=[ChatMessage.from_dict(msg) for msg in data.get("messages") or []],
        )

    def snapshot(self) -> "ChatSession":
        """Detached deep copy built from the plain representation."""
        return ChatSession.from_dict(self.to_dict())


def create_chat_session(
    journal_entry_id: str,
    intention: Union[ChatIntention, str],
    custom_prompt: Optional[str] = None
) -> ChatSession:
    """Create a new session with a fresh id and an empty message list.

    The custom prompt is only kept for the custom intention and only when
    it is non-empty.
    """
    intention = ChatIntention(intention)
    session = ChatSession(
        id=str(uuid4()),
        journal_entry_id=journal_entry_id,
        intention=intention,
        created_at=utc_timestamp(),
    )

    if intention == ChatIntention.CUSTOM and custom_prompt:
        session.custom_prompt = custom_prompt

    return session


def create_chat_message(role: Union[MessageRole, str], content: str) -> ChatMessage:
    """Create a message stamped with the current time."""
    return ChatMessage(role=MessageRole(role), content=content, timestamp=utc_timestamp())
