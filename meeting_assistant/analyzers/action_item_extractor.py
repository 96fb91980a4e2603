"""
Action Item Extractor
- Splits recent entries into sentences and keeps those with an action verb
- Pulls assignees, a relative deadline, a cleaned task text, and a priority from each
- Appends only items that are not near-duplicates of known ones
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta
from loguru import logger

from meeting_assistant.analyzers.base_analyzer import BaseAnalyzer
from meeting_assistant.analyzers.patterns import (
    ACTION_VERBS,
    ASSIGNEE_PATTERNS,
    DEADLINE_PATTERNS,
    IMPORTANCE_WORDS,
    MODAL_PREFIX,
    RELATIVE_OFFSET_PATTERN,
    SELF_REFERENCE_PREFIX,
    SENTENCE_TERMINATORS,
    URGENCY_WORDS,
    contains_any,
)
from meeting_assistant.config import ProcessingConfig
from meeting_assistant.models import (
    ActionItem,
    AnalysisContext,
    Attendee,
    Priority,
    StatePatch,
    Suggestion,
    SuggestionType,
    TranscriptEntry,
    new_id,
)


def task_similarity(first: str, second: str) -> float:
    """Distinct shared words divided by the longer task's word count."""
    words1 = first.lower().split()
    words2 = second.lower().split()
    if not words1 or not words2:
        return 0.0
    shared = set(words1) & set(words2)
    return len(shared) / max(len(words1), len(words2))


def resolve_relative_deadline(text: str, today: date) -> Optional[date]:
    """
    Turn a relative phrase into a date. Only "tomorrow", "next week",
    "next month" and "in N days/weeks/months" are understood.
    """
    lowered = text.lower()

    if "tomorrow" in lowered:
        return today + timedelta(days=1)
    if "next week" in lowered:
        return today + timedelta(days=7)
    if "next month" in lowered:
        return today + relativedelta(months=1)

    match = RELATIVE_OFFSET_PATTERN.search(lowered)
    if match:
        amount = int(match.group(1))
        unit = match.group(2)
        if unit.startswith("day"):
            return today + timedelta(days=amount)
        if unit.startswith("week"):
            return today + timedelta(days=amount * 7)
        return today + relativedelta(months=amount)

    return None


class ActionItemExtractor(BaseAnalyzer):
    """Extracts action items from the recent transcript."""

    def __init__(self, config: Optional[ProcessingConfig] = None) -> None:
        super().__init__(name="action_item_extractor", config=config)

    def evaluate(self, context: AnalysisContext) -> Tuple[List[Suggestion], StatePatch]:
        state = context.state
        today = context.now.date()
        known: List[ActionItem] = list(state.action_items)
        new_items: List[ActionItem] = []
        suggestions: List[Suggestion] = []

        for entry in state.recent_entries(self.config.action_item_window):
            for item in self.extract_action_items(entry, state.attendees, today):
                if self.is_duplicate(item, known):
                    continue
                known.append(item)
                new_items.append(item)
                suggestions.append(self.suggest(
                    context,
                    SuggestionType.ACTION_ITEM,
                    prefix="action_item",
                    title="New Action Item Identified",
                    message=self.describe(item),
                    priority=Priority.HIGH,
                    action_item_id=item.id,
                    entry_id=entry.id,
                ))

        if new_items:
            logger.info(f"Extracted {len(new_items)} new action item(s)")
        return suggestions, StatePatch(action_items=new_items)

    def extract_action_items(
        self, entry: TranscriptEntry, attendees: Sequence[Attendee], today: date
    ) -> List[ActionItem]:
        items: List[ActionItem] = []
        for sentence in SENTENCE_TERMINATORS.split(entry.text):
            sentence = sentence.strip()
            if not sentence or not contains_any(sentence.lower(), ACTION_VERBS):
                continue
            item = self.parse_action_item(sentence, attendees, entry, today)
            if item:
                items.append(item)
        return items

    def parse_action_item(
        self, sentence: str, attendees: Sequence[Attendee], entry: TranscriptEntry, today: date
    ) -> Optional[ActionItem]:
        task = self.clean_task_text(sentence)
        if len(task) < self.config.min_task_length:
            return None

        return ActionItem(
            id=new_id("action"),
            task=task,
            assignees=self.extract_assignees(sentence, attendees),
            deadline=self.extract_deadline(sentence, today),
            priority=self.determine_priority(sentence),
            timestamp=entry.timestamp,
        )

    def extract_assignees(self, text: str, attendees: Sequence[Attendee]) -> List[str]:
        """
        Candidate is the pattern's capture group, or the whole match when the
        pattern has none; it is swapped for a roster name on a substring hit.
        """
        assignees: List[str] = []
        for pattern in ASSIGNEE_PATTERNS:
            match = pattern.search(text)
            if not match:
                continue
            candidate = (match.group(1) if pattern.groups else None) or match.group(0)
            lowered = candidate.lower()
            attendee = next(
                (a for a in attendees if a.name.lower() in lowered or lowered in a.name.lower()),
                None,
            )
            assignees.append(attendee.name if attendee else candidate)
        return list(dict.fromkeys(assignees))

    def extract_deadline(self, text: str, today: date) -> Optional[date]:
        for pattern in DEADLINE_PATTERNS:
            match = pattern.search(text)
            if match:
                deadline = resolve_relative_deadline(match.group(0), today)
                if deadline:
                    return deadline
        # "tomorrow" has no pattern of its own
        return resolve_relative_deadline(text, today)

    @staticmethod
    def clean_task_text(text: str) -> str:
        cleaned = SELF_REFERENCE_PREFIX.sub("", text.strip(), count=1).strip()
        cleaned = MODAL_PREFIX.sub("", cleaned, count=1).strip()
        if cleaned:
            cleaned = cleaned[0].upper() + cleaned[1:]
        return cleaned

    @staticmethod
    def determine_priority(text: str) -> Priority:
        lowered = text.lower()
        if contains_any(lowered, URGENCY_WORDS):
            return Priority.HIGH
        if contains_any(lowered, IMPORTANCE_WORDS):
            return Priority.MEDIUM
        return Priority.LOW

    def is_duplicate(self, item: ActionItem, known: Sequence[ActionItem]) -> bool:
        return any(
            task_similarity(existing.task, item.task) > self.config.similarity_threshold
            for existing in known
        )

    @staticmethod
    def describe(item: ActionItem) -> str:
        assignees = ", ".join(item.assignees) or "Not specified"
        deadline = item.deadline.isoformat() if item.deadline else "Not specified"
        return f'Task: "{item.task}" | Assignee(s): {assignees} | Deadline: {deadline}'
