"""
Goal Drift Tracker

Keeps the discussion tied to the current agenda item:
- drift: a trailing run of off-topic entries at or above the threshold
- overrun: the current item has run past its planned duration by the configured ratio
- completion: closing language about the current item in the last few entries
"""

from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from meeting_assistant.analyzers.base_analyzer import BaseAnalyzer
from meeting_assistant.analyzers.patterns import COMPLETION_PHRASES, OFF_TOPIC_PHRASES, contains_any
from meeting_assistant.config import ProcessingConfig
from meeting_assistant.models import (
    AgendaItem,
    AnalysisContext,
    Priority,
    StatePatch,
    Suggestion,
    SuggestionType,
    TranscriptEntry,
)

_PUNCTUATION = re.compile(r"[^\w\s]")


def extract_keywords(text: str) -> List[str]:
    """Lower-cased, punctuation-free, deduplicated words longer than 3 characters."""
    words = _PUNCTUATION.sub("", text.lower()).split()
    return list(dict.fromkeys(w for w in words if len(w) > 3))


def relevance_score(topic_keywords: Sequence[str], text_keywords: Sequence[str]) -> float:
    """
    Share of topic keywords found in the text, where a keyword matches when either
    word contains the other. Normalized by the larger keyword set.
    """
    if not topic_keywords or not text_keywords:
        return 0.0
    common = [
        keyword for keyword in topic_keywords
        if any(word in keyword or keyword in word for word in text_keywords)
    ]
    return len(common) / max(len(topic_keywords), len(text_keywords))


class GoalDriftTracker(BaseAnalyzer):
    """Tracks drift, time overrun, and completion of the current agenda item."""

    def __init__(self, config: Optional[ProcessingConfig] = None) -> None:
        super().__init__(name="goal_drift_tracker", config=config)

    def evaluate(self, context: AnalysisContext) -> Tuple[List[Suggestion], StatePatch]:
        state = context.state
        current_item = state.current_agenda
        recent = state.recent_entries(self.config.goal_window)
        suggestions: List[Suggestion] = []

        off_topic_count = self.trailing_off_topic_count(recent, current_item)
        if off_topic_count >= self.config.drift_threshold:
            item_title = current_item.title if current_item else "No current agenda item"
            suggestions.append(self.suggest(
                context,
                SuggestionType.GOAL_TRACKING,
                prefix="topic_drift",
                title="Conversation Drifting Off-Topic",
                message=(
                    f"The discussion has been off-topic for {off_topic_count} consecutive statements. "
                    f'Consider redirecting to the current agenda item: "{item_title}"'
                ),
                priority=Priority.MEDIUM,
                off_topic_count=off_topic_count,
            ))

        if current_item and self.is_over_time(current_item, context):
            suggestions.append(self.suggest(
                context,
                SuggestionType.GOAL_TRACKING,
                prefix="time_overrun",
                title="Agenda Item Taking Too Long",
                message=(
                    f'"{current_item.title}" has exceeded its planned duration of {current_item.duration:g} minutes. '
                    "Consider wrapping up or moving to the next item."
                ),
                priority=Priority.HIGH,
                agenda_item_id=current_item.id,
            ))

        if current_item and self.is_item_complete(state.recent_entries(self.config.completion_window)):
            suggestions.append(self.suggest(
                context,
                SuggestionType.GOAL_TRACKING,
                prefix="agenda_complete",
                title="Current Agenda Item Complete",
                message=f'"{current_item.title}" appears to be complete. Consider moving to the next agenda item.',
                priority=Priority.LOW,
                agenda_item_id=current_item.id,
            ))

        return suggestions, StatePatch()

    def trailing_off_topic_count(
        self, entries: Sequence[TranscriptEntry], current_item: Optional[AgendaItem]
    ) -> int:
        """Scan oldest to newest; an on-topic entry resets the run."""
        count = 0
        for entry in entries:
            if self.is_off_topic(entry.text, current_item):
                count += 1
            else:
                count = 0
        return count

    def is_off_topic(self, text: str, current_item: Optional[AgendaItem]) -> bool:
        if current_item is None:
            return False

        lowered = text.lower()
        if contains_any(lowered, OFF_TOPIC_PHRASES):
            return True

        topic = f"{current_item.title} {current_item.description or ''}"
        score = relevance_score(extract_keywords(topic), extract_keywords(lowered))
        return score < self.config.relevance_threshold

    def is_over_time(self, item: AgendaItem, context: AnalysisContext) -> bool:
        if not item.duration:
            return False
        started = item.start_time or context.state.start_time
        elapsed_minutes = (context.now - started).total_seconds() / 60
        if elapsed_minutes > item.duration * self.config.overrun_ratio:
            logger.debug(f"Agenda item '{item.title}' at {elapsed_minutes:.1f} of {item.duration:g} planned minutes")
            return True
        return False

    @staticmethod
    def is_item_complete(entries: Sequence[TranscriptEntry]) -> bool:
        recent_text = " ".join(entry.text.lower() for entry in entries)
        return contains_any(recent_text, COMPLETION_PHRASES)
