"""System prompts and journal entry context for chat sessions."""

from typing import Callable, Dict, Iterable, Optional, Union

from ..entities import JournalEntry, NamedRecord
from ..repositories import IEmotionResolver, ITagResolver
from ..value_objects import ChatIntention


SYSTEM_PROMPTS: Dict[ChatIntention, str] = {
    ChatIntention.REFLECT: (
        "You are a supportive reflection guide helping the user explore their journal entry. "
        "Use the entry's title, content, emotions, and tags to help them understand deeper "
        "meanings, recognize patterns in their thoughts and feelings, and gain self-awareness. "
        "Ask thoughtful, open-ended questions that encourage reflection. Keep conversations "
        "concise (3-5 exchanges). Be empathetic and non-judgmental. Do not make clinical diagnoses."
    ),
    ChatIntention.HELP_SEE_DIFFERENTLY: (
        "You are a perspective-shifting guide helping the user see their journal entry from "
        "different angles. Use the entry's context to gently challenge assumptions, suggest "
        "alternative viewpoints, and help them reframe their thinking. Ask questions that open "
        "up new possibilities. Keep conversations concise (3-5 exchanges). Be supportive and "
        "non-judgmental. Do not make clinical diagnoses."
    ),
    ChatIntention.PROACTIVE: (
        "You are a proactive planning assistant helping the user identify actionable steps "
        "based on their journal entry. Use the entry's context to help them move from "
        "reflection to action, identify concrete steps they can take, and develop proactive "
        "solutions. Ask questions that help them think about what they can do. Keep "
        "conversations concise (3-5 exchanges). Be encouraging and supportive. Do not make "
        "clinical diagnoses."
    ),
    ChatIntention.THINKING_TRAPS: (
        "You are a cognitive awareness guide helping the user identify unhelpful thinking "
        "patterns in their journal entry. Use the entry's context to gently point out potential "
        "cognitive distortions (like all-or-nothing thinking, catastrophizing, or "
        "overgeneralization) and help them reframe these thoughts. Ask questions that help them "
        "recognize thinking traps. Keep conversations concise (3-5 exchanges). Be educational "
        "and supportive, not critical. Do not make clinical diagnoses."
    ),
}

DEFAULT_CUSTOM_PROMPT = (
    "You are a supportive assistant helping the user explore their journal entry. Use the "
    "entry's context to have a helpful conversation based on the user's specific needs. Keep "
    "conversations concise (3-5 exchanges). Be empathetic and non-judgmental. Do not make "
    "clinical diagnoses."
)

CONTEXT_HEADER = "Journal Entry Context:"


def get_system_prompt(
    intention: Union[ChatIntention, str],
    custom_prompt: Optional[str] = None
) -> str:
    """Return the system instruction for a chat intention.

    For the custom intention the supplied prompt wins when it is non-empty,
    otherwise a generic default is used.
    """
    intention = ChatIntention(intention)
    if intention == ChatIntention.CUSTOM:
        return custom_prompt or DEFAULT_CUSTOM_PROMPT
    return SYSTEM_PROMPTS[intention]


def _resolve_names(
    ids: Optional[Iterable[str]],
    lookup: Callable[[str], Optional[NamedRecord]]
) -> str:
    # Unresolved ids are left out, never rendered as placeholders.
    names = []
    for record_id in ids or []:
        record = lookup(record_id)
        if record:
            names.append(record.name)
    return ", ".join(names) if names else "None"


def construct_journal_entry_context(
    entry: JournalEntry,
    emotion_resolver: IEmotionResolver,
    tag_resolver: ITagResolver
) -> str:
    """Build the context block sent ahead of the first message of a session.

    Sections are fixed and always present, in this order: title, emotions,
    people tags, context tags, content.
    """
    emotions_text = _resolve_names(entry.emotion_ids, emotion_resolver.get_emotion_by_id)
    people_tags_text = _resolve_names(entry.people_tag_ids, tag_resolver.get_people_tag_by_id)
    context_tags_text = _resolve_names(entry.context_tag_ids, tag_resolver.get_context_tag_by_id)

    return (
        f"{CONTEXT_HEADER}\n"
        f"Title: {entry.title or 'Untitled entry'}\n"
        f"Emotions: {emotions_text}\n"
        f"People Tags: {people_tags_text}\n"
        f"Context Tags: {context_tags_text}\n"
        f"Content:\n"
        f"{entry.body or ''}"
    )


class PromptResolver:
    """Prompt construction bound to the name lookups it needs."""

    def __init__(self, emotion_resolver: IEmotionResolver, tag_resolver: ITagResolver):
        self.emotion_resolver = emotion_resolver
        self.tag_resolver = tag_resolver

    def system_prompt(
        self,
        intention: Union[ChatIntention, str],
        custom_prompt: Optional[str] = None
    ) -> str:
        return get_system_prompt(intention, custom_prompt)

    def entry_context(self, entry: JournalEntry) -> str:
        return construct_journal_entry_context(entry, self.emotion_resolver, self.tag_resolver)
