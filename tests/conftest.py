"""Shared fixtures for the mindful journal test suite."""

from unittest.mock import AsyncMock

import pytest

from mindful_journal.application.use_cases import ChatSessionController
from mindful_journal.domain.entities import JournalEntry, NamedRecord
from mindful_journal.domain.services import PromptResolver
from mindful_journal.infrastructure.repositories import EmotionLookup, TagLookup
from tests.fakes import InMemoryJournalRepository


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def emotion_resolver():
    """Emotion lookup with two known emotions"""
    return EmotionLookup([
        NamedRecord(id="emotion-1", name="Happy"),
        NamedRecord(id="emotion-2", name="Anxious"),
    ])


@pytest.fixture
def tag_resolver():
    """Tag lookup with known people and context tags"""
    return TagLookup(
        people_tags=[NamedRecord(id="person-1", name="Mom")],
        context_tags=[NamedRecord(id="context-1", name="Work Meeting")],
    )


@pytest.fixture
def prompt_resolver(emotion_resolver, tag_resolver):
    return PromptResolver(emotion_resolver, tag_resolver)


@pytest.fixture
def journal_entry():
    """Entry with tags that the lookups can resolve"""
    return JournalEntry(
        id="entry-1",
        title="A long day",
        body="Today was tiring but good.",
        emotion_ids=["emotion-1"],
        people_tag_ids=["person-1"],
        context_tag_ids=["context-1"],
    )


@pytest.fixture
def journal_repository(journal_entry):
    repository = InMemoryJournalRepository()
    repository.rows[journal_entry.id] = repository._to_row(journal_entry)
    return repository


@pytest.fixture
def completion_service():
    """Completion service stub that always replies Hi"""
    service = AsyncMock()
    service.send_message = AsyncMock(return_value="Hi")
    return service


@pytest.fixture
def controller(journal_repository, completion_service, prompt_resolver):
    return ChatSessionController(
        journal_repository=journal_repository,
        completion_service=completion_service,
        prompt_resolver=prompt_resolver,
    )
