"""SQL journal entry repository implementation."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError

from ...domain.entities import ChatSession, JournalEntry
from ...domain.exceptions import EntryNotFoundError, PersistenceError
from ...domain.repositories import IJournalEntryRepository
from ..database import DatabaseManager, JournalEntryModel

logger = logging.getLogger(__name__)


class SQLJournalEntryRepository(IJournalEntryRepository):
    """SQL implementation of journal entry repository."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    async def create(self, entry: JournalEntry) -> JournalEntry:
        """Create a new journal entry."""

        model = JournalEntryModel(
            id=entry.id,
            title=entry.title,
            body=entry.body or "",
            emotion_ids=list(entry.emotion_ids or []),
            people_tag_ids=list(entry.people_tag_ids or []),
            context_tag_ids=list(entry.context_tag_ids or []),
            chat_sessions=self._sessions_to_documents(entry.chat_sessions),
            created_at=entry.created_at,
            updated_at=entry.updated_at
        )

        try:
            async with self.db_manager.get_session() as session:
                session.add(model)
                await session.commit()
                await session.refresh(model)
                return self._to_entity(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create journal entry {entry.id}: {e}")
            raise PersistenceError("create journal entry", str(e)) from e

    async def get_by_id(self, entry_id: str) -> Optional[JournalEntry]:
        """Get journal entry by ID."""

        stmt = select(JournalEntryModel).where(JournalEntryModel.id == entry_id)
        try:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load journal entry {entry_id}: {e}")
            raise PersistenceError("load journal entry", str(e)) from e

        return self._to_entity(model) if model else None

    async def get_all(self) -> List[JournalEntry]:
        """Get all journal entries, newest first."""

        stmt = select(JournalEntryModel).order_by(JournalEntryModel.created_at.desc())
        try:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                models = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to load journal entries: {e}")
            raise PersistenceError("load journal entries", str(e)) from e

        return [self._to_entity(model) for model in models]

    async def update(self, entry: JournalEntry) -> JournalEntry:
        """Update journal entry."""

        stmt = (
            update(JournalEntryModel)
            .where(JournalEntryModel.id == entry.id)
            .values(
                title=entry.title,
                body=entry.body or "",
                emotion_ids=list(entry.emotion_ids or []),
                people_tag_ids=list(entry.people_tag_ids or []),
                context_tag_ids=list(entry.context_tag_ids or []),
                chat_sessions=self._sessions_to_documents(entry.chat_sessions),
                updated_at=datetime.now(timezone.utc)
            )
        )

        try:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to update journal entry {entry.id}: {e}")
            raise PersistenceError("update journal entry", str(e)) from e

        if result.rowcount == 0:
            raise EntryNotFoundError(entry.id)

        updated = await self.get_by_id(entry.id)
        if not updated:
            raise EntryNotFoundError(entry.id)
        return updated

    async def delete(self, entry_id: str) -> bool:
        """Delete journal entry."""

        stmt = delete(JournalEntryModel).where(JournalEntryModel.id == entry_id)
        try:
            async with self.db_manager.get_session() as session:
                result = await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete journal entry {entry_id}: {e}")
            raise PersistenceError("delete journal entry", str(e)) from e

        return result.rowcount > 0

    @staticmethod
    def _sessions_to_documents(
        sessions: Optional[List[ChatSession]]
    ) -> Optional[List[Dict[str, Any]]]:
        if sessions is None:
            return None
        return [chat_session.to_dict() for chat_session in sessions]

    def _to_entity(self, model: JournalEntryModel) -> JournalEntry:
        """Convert database model to domain entity."""

        chat_sessions = None
        if model.chat_sessions is not None:
            chat_sessions = [ChatSession.from_dict(doc) for doc in model.chat_sessions]

        return JournalEntry(
            id=model.id,
            title=model.title,
            body=model.body or "",
            emotion_ids=list(model.emotion_ids or []),
            people_tag_ids=list(model.people_tag_ids or []),
            context_tag_ids=list(model.context_tag_ids or []),
            chat_sessions=chat_sessions,
            created_at=model.created_at,
            updated_at=model.updated_at
        )
