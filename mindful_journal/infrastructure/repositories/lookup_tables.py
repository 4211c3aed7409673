"""In-memory name lookups for emotions and tags."""

from typing import Dict, Iterable, Optional

from ...domain.entities import NamedRecord
from ...domain.repositories import IEmotionResolver, ITagResolver


class LookupTable:
    """Id to record mapping loaded up front."""

    def __init__(self, records: Iterable[NamedRecord] = ()):
        self._records: Dict[str, NamedRecord] = {}
        self.load(records)

    def load(self, records: Iterable[NamedRecord]) -> None:
        for record in records:
            self._records[record.id] = record

    def get(self, record_id: str) -> Optional[NamedRecord]:
        return self._records.get(record_id)

    def __len__(self) -> int:
        return len(self._records)


class EmotionLookup(IEmotionResolver):
    """Emotion resolver over a lookup table."""

    def __init__(self, emotions: Iterable[NamedRecord] = ()):
        self.table = LookupTable(emotions)

    def get_emotion_by_id(self, emotion_id: str) -> Optional[NamedRecord]:
        return self.table.get(emotion_id)


class TagLookup(ITagResolver):
    """People and context tag resolver over two lookup tables."""

    def __init__(
        self,
        people_tags: Iterable[NamedRecord] = (),
        context_tags: Iterable[NamedRecord] = ()
    ):
        self.people = LookupTable(people_tags)
        self.context = LookupTable(context_tags)

    def get_people_tag_by_id(self, tag_id: str) -> Optional[NamedRecord]:
        return self.people.get(tag_id)

    def get_context_tag_by_id(self, tag_id: str) -> Optional[NamedRecord]:
        return self.context.get(tag_id)
