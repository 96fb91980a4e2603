"""
Ambiguity Detector
- Scans the recent transcript for hedged commitments and vague timelines
- Flags statements that read like tasks but name no owner
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from meeting_assistant.analyzers.base_analyzer import BaseAnalyzer
from meeting_assistant.analyzers.patterns import (
    ACTION_WORDS,
    AMBIGUOUS_PHRASES,
    ASSIGNEE_INDICATORS,
    VAGUE_TIME_PHRASES,
    contains_any,
    matching_phrases,
)
from meeting_assistant.config import ProcessingConfig
from meeting_assistant.models import (
    AnalysisContext,
    Priority,
    StatePatch,
    Suggestion,
    SuggestionType,
)


class AmbiguityDetector(BaseAnalyzer):
    def __init__(self, config: Optional[ProcessingConfig] = None) -> None:
        super().__init__(name="ambiguity_detector", config=config)

    def evaluate(self, context: AnalysisContext) -> Tuple[List[Suggestion], StatePatch]:
        suggestions: List[Suggestion] = []

        for entry in context.state.recent_entries(self.config.ambiguity_window):
            text = entry.text.lower()

            for phrase in matching_phrases(text, AMBIGUOUS_PHRASES):
                suggestions.append(self.suggest(
                    context,
                    SuggestionType.AMBIGUITY,
                    prefix="ambiguity",
                    title="Ambiguous Statement Detected",
                    message=(
                        f'"{entry.text}" - This statement lacks specificity. Consider asking: '
                        "Who will handle this? What exactly needs to be done? When should it be completed?"
                    ),
                    priority=Priority.MEDIUM,
                    entry_id=entry.id,
                    phrase=phrase,
                ))

            for phrase in matching_phrases(text, VAGUE_TIME_PHRASES):
                suggestions.append(self.suggest(
                    context,
                    SuggestionType.AMBIGUITY,
                    prefix="time_ambiguity",
                    title="Vague Timeline Detected",
                    message=(
                        f'"{entry.text}" - This timeline is unclear. '
                        "Consider asking for a specific date or deadline."
                    ),
                    priority=Priority.HIGH,
                    entry_id=entry.id,
                    phrase=phrase,
                ))

            if self.is_unassigned_task(text):
                suggestions.append(self.suggest(
                    context,
                    SuggestionType.AMBIGUITY,
                    prefix="missing_assignee",
                    title="Missing Assignee",
                    message=(
                        f'"{entry.text}" - This appears to be an action item but lacks a clear assignee. '
                        "Who should be responsible for this task?"
                    ),
                    priority=Priority.HIGH,
                    entry_id=entry.id,
                ))

        return suggestions, StatePatch()

    @staticmethod
    def is_unassigned_task(text: str) -> bool:
        """Action language with no first-person or named-team claim."""
        return contains_any(text, ACTION_WORDS) and not contains_any(text, ASSIGNEE_INDICATORS)
