"""SQLAlchemy database models."""

from sqlalchemy import JSON, Column, DateTime, Index, String, Text
from sqlalchemy.sql import func

from .connection import Base


class JournalEntryModel(Base):
    """Journal entry database model."""

    __tablename__ = "journal_entries"

    id = Column(String(36), primary_key=True, index=True)
    title = Column(String(255), nullable=True)
    body = Column(Text, nullable=False, default="")

    # Tagging
    emotion_ids = Column(JSON, nullable=False, default=list)
    people_tag_ids = Column(JSON, nullable=False, default=list)
    context_tag_ids = Column(JSON, nullable=False, default=list)

    # Saved chat sessions as plain documents; NULL until the first save
    chat_sessions = Column(JSON, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index('idx_journal_entries_created', 'created_at'),
    )


class UserSettingModel(Base):
    """User setting key/value model."""

    __tablename__ = "user_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)
