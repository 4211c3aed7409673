"""Chat session controller.

Owns the single current (unsaved) chat session and drives the exchange with
the completion service. The controller is Idle when there is no current
session and Active otherwise. ``send`` and ``save`` are transient sub-states
reported through ``is_sending`` and ``is_saving``.

The context message describing the journal entry is sent only while the
session has no stored messages and is never stored itself. A failed send
leaves the stored messages untouched. Sessions are written to the entry as
plain snapshots, never as references to the live session object.
"""

import logging
from typing import Callable, Dict, List, Optional, Union

from ...domain.entities import (
    ChatSession,
    JournalEntry,
    create_chat_message,
    create_chat_session,
)
from ...domain.exceptions import (
    EntryNotFoundError,
    InsufficientExchangeError,
    InvalidIntentionError,
    JournalChatException,
    MalformedResponseError,
    MissingEntryReferenceError,
    NoActiveSessionError,
    PersistenceError,
    SessionNotFoundError,
)
from ...domain.repositories import IJournalEntryRepository
from ...domain.services import PromptResolver
from ...domain.value_objects import ChatIntention, MessageRole, is_valid_chat_intention
from ..interfaces import ICompletionService

logger = logging.getLogger(__name__)

StateListener = Callable[["ChatSessionController"], None]


class ChatSessionController:
    """State machine for one user's chat session on a journal entry."""

    def __init__(
        self,
        journal_repository: IJournalEntryRepository,
        completion_service: ICompletionService,
        prompt_resolver: PromptResolver
    ):
        self.journal_repository = journal_repository
        self.completion_service = completion_service
        self.prompt_resolver = prompt_resolver

        self._current_session: Optional[ChatSession] = None
        self._journal_entry_id: Optional[str] = None
        self._error: Optional[str] = None
        self._is_sending = False
        self._is_saving = False
        self._listeners: List[StateListener] = []

    # State

    @property
    def current_session(self) -> Optional[ChatSession]:
        return self._current_session

    @property
    def journal_entry_id(self) -> Optional[str]:
        return self._journal_entry_id

    @property
    def error(self) -> Optional[str]:
        """Message of the most recent failure, if any."""
        return self._error

    @property
    def is_active(self) -> bool:
        return self._current_session is not None

    @property
    def is_sending(self) -> bool:
        return self._is_sending

    @property
    def is_saving(self) -> bool:
        return self._is_saving

    @property
    def is_loading(self) -> bool:
        return self._is_sending or self._is_saving

    @property
    def has_unsaved_messages(self) -> bool:
        return self._current_session is not None and len(self._current_session.messages) > 0

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state change listener; returns the unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _set_error(self, error: Optional[Union[str, Exception]]) -> None:
        self._error = str(error) if error is not None else None
        self._notify()

    def _fail(self, exc: JournalChatException) -> JournalChatException:
        """Record the error and hand back the exception for raising."""
        self._set_error(exc)
        return exc

    def _set_current(self, session: Optional[ChatSession], entry_id: Optional[str]) -> None:
        self._current_session = session
        self._journal_entry_id = entry_id
        self._notify()

    # Persistence gateway access

    async def _fetch_entry(self, entry_id: str) -> JournalEntry:
        try:
            entry = await self.journal_repository.get_by_id(entry_id)
        except JournalChatException:
            raise
        except Exception as e:
            logger.error(f"Failed to load journal entry {entry_id}: {e}")
            raise PersistenceError("load journal entry", str(e)) from e

        if not entry:
            raise EntryNotFoundError(entry_id)
        return entry

    async def _write_sessions(self, entry: JournalEntry, sessions: List[ChatSession]) -> JournalEntry:
        updated = JournalEntry(
            id=entry.id,
            body=entry.body,
            title=entry.title,
            emotion_ids=list(entry.emotion_ids or []),
            people_tag_ids=list(entry.people_tag_ids or []),
            context_tag_ids=list(entry.context_tag_ids or []),
            chat_sessions=sessions,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
        try:
            return await self.journal_repository.update(updated)
        except JournalChatException:
            raise
        except Exception as e:
            logger.error(f"Failed to update journal entry {entry.id}: {e}")
            raise PersistenceError("update journal entry", str(e)) from e

    # Transitions

    async def start(
        self,
        entry_id: str,
        intention: Union[ChatIntention, str],
        custom_prompt: Optional[str] = None
    ) -> ChatSession:
        """Start a new session, replacing any unsaved current session."""
        self._set_error(None)

        if not is_valid_chat_intention(intention):
            raise self._fail(InvalidIntentionError(intention))

        if self.has_unsaved_messages:
            logger.info(
                f"Replacing unsaved chat session {self._current_session.id} "
                f"with {len(self._current_session.messages)} messages"
            )

        session = create_chat_session(entry_id, intention, custom_prompt)
        self._set_current(session, entry_id)

        logger.info(f"Started chat session {session.id} on entry {entry_id} ({session.intention.value})")
        return session

    def _build_outgoing_messages(
        self,
        session: ChatSession,
        entry: JournalEntry,
        user_text: str
    ) -> List[Dict[str, str]]:
        messages: List[Dict[str, str]] = []

        if not session.messages:
            messages.append({
                "role": MessageRole.USER.value,
                "content": self.prompt_resolver.entry_context(entry)
            })

        for msg in session.messages:
            messages.append({"role": msg.role.value, "content": msg.content})

        messages.append({"role": MessageRole.USER.value, "content": user_text})
        return messages

    async def send(self, user_text: str) -> str:
        """Exchange one user message with the assistant and return the reply."""
        self._set_error(None)

        session = self._current_session
        if session is None:
            raise self._fail(NoActiveSessionError())
        if not self._journal_entry_id:
            raise self._fail(MissingEntryReferenceError())

        try:
            entry = await self._fetch_entry(self._journal_entry_id)
        except JournalChatException as e:
            raise self._fail(e)

        outgoing = self._build_outgoing_messages(session, entry, user_text)
        system_prompt = self.prompt_resolver.system_prompt(session.intention, session.custom_prompt)

        self._is_sending = True
        self._notify()
        try:
            reply = await self.completion_service.send_message(outgoing, system_prompt)
        except JournalChatException as e:
            logger.warning(f"Chat message on session {session.id} failed: {e.code}")
            raise self._fail(e)
        except Exception as e:
            logger.error(f"Unexpected error sending chat message on session {session.id}: {e}")
            raise self._fail(MalformedResponseError()) from e
        finally:
            self._is_sending = False
            self._notify()

        # The session may have been discarded or replaced while waiting.
        if self._current_session is session:
            session.append_exchange(
                create_chat_message(MessageRole.USER, user_text),
                create_chat_message(MessageRole.ASSISTANT, reply)
            )
            self._notify()

        return reply

    async def save(self) -> JournalEntry:
        """Append the current session to its entry and return to Idle."""
        self._set_error(None)

        session = self._current_session
        if session is None:
            raise self._fail(NoActiveSessionError("No active chat session to save."))
        if not session.has_complete_exchange:
            raise self._fail(InsufficientExchangeError())
        if not self._journal_entry_id:
            raise self._fail(MissingEntryReferenceError())

        self._is_saving = True
        self._notify()
        try:
            entry = await self._fetch_entry(self._journal_entry_id)

            sessions = [stored.snapshot() for stored in entry.chat_sessions or []]
            sessions.append(session.snapshot())

            updated = await self._write_sessions(entry, sessions)
        except JournalChatException as e:
            logger.warning(f"Saving chat session {session.id} failed: {e}")
            raise self._fail(e)
        finally:
            self._is_saving = False
            self._notify()

        logger.info(f"Saved chat session {session.id} to entry {entry.id}")
        self._set_current(None, None)
        return updated

    def discard(self) -> None:
        """Drop the current session without touching storage."""
        self._current_session = None
        self._journal_entry_id = None
        self._error = None
        self._notify()

    async def load_sessions_for_entry(self, entry_id: str) -> List[ChatSession]:
        """Return detached copies of the sessions saved on an entry."""
        self._set_error(None)

        try:
            entry = await self._fetch_entry(entry_id)
        except JournalChatException as e:
            raise self._fail(e)

        return [stored.snapshot() for stored in entry.chat_sessions or []]

    async def load_one(self, entry_id: str, session_id: str) -> Optional[ChatSession]:
        """Install a detached copy of a saved session as the current session.

        Returns None and records the error when the session does not exist;
        the previous state is kept in that case.
        """
        self._set_error(None)

        try:
            entry = await self._fetch_entry(entry_id)
        except JournalChatException as e:
            raise self._fail(e)

        stored = entry.find_chat_session(session_id)
        if stored is None:
            self._set_error(SessionNotFoundError(session_id))
            return None

        session = stored.snapshot()
        self._set_current(session, entry_id)
        return session

    async def delete_session(self, entry_id: str, session_id: str) -> None:
        """Remove a saved session from an entry; unknown ids are a no-op."""
        self._set_error(None)

        try:
            entry = await self._fetch_entry(entry_id)
            stored_sessions = entry.chat_sessions or []
            remaining = [
                stored.snapshot() for stored in stored_sessions if stored.id != session_id
            ]
            if len(remaining) == len(stored_sessions):
                return

            await self._write_sessions(entry, remaining)
        except JournalChatException as e:
            raise self._fail(e)

        logger.info(f"Deleted chat session {session_id} from entry {entry_id}")
