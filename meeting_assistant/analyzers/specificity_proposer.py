"""
Specificity Proposer
- Suggests stronger verbs for weak ones ("look into", "consider", ...)
- Asks for a deadline, success criteria, and resources on action statements
- Flags vague scope words ("several", "everything", ...)
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from meeting_assistant.analyzers.base_analyzer import BaseAnalyzer
from meeting_assistant.analyzers.patterns import (
    ACTION_WORDS,
    DEADLINE_INDICATORS,
    RESOURCE_INDICATORS,
    SUCCESS_CRITERIA_INDICATORS,
    VAGUE_SCOPE_PHRASES,
    WEAK_VERBS,
    contains_any,
    matching_phrases,
    strong_alternatives,
)
from meeting_assistant.config import ProcessingConfig
from meeting_assistant.models import (
    AnalysisContext,
    Priority,
    StatePatch,
    Suggestion,
    SuggestionType,
    TranscriptEntry,
)


class SpecificityProposer(BaseAnalyzer):
    """Proposes concrete wording for the most recent statements."""

    def __init__(self, config: Optional[ProcessingConfig] = None) -> None:
        super().__init__(name="specificity_proposer", config=config)

    def evaluate(self, context: AnalysisContext) -> Tuple[List[Suggestion], StatePatch]:
        suggestions: List[Suggestion] = []
        for entry in context.state.recent_entries(self.config.specificity_window):
            suggestions.extend(self.weak_verb_suggestions(context, entry))
            suggestions.extend(self.missing_specifics_suggestions(context, entry))
            suggestions.extend(self.unclear_scope_suggestions(context, entry))
        return suggestions, StatePatch()

    def weak_verb_suggestions(self, context: AnalysisContext, entry: TranscriptEntry) -> List[Suggestion]:
        suggestions = []
        for verb in matching_phrases(entry.text.lower(), WEAK_VERBS):
            alternatives = strong_alternatives(verb)
            suggestions.append(self.suggest(
                context,
                SuggestionType.SPECIFICITY,
                prefix="weak_verb",
                title="Weak Action Verb Detected",
                message=(
                    f'"{verb}" is vague. Consider using more specific verbs like: '
                    f"{', '.join(alternatives)}. This will make the task more actionable."
                ),
                priority=Priority.MEDIUM,
                entry_id=entry.id,
                weak_verb=verb,
                alternatives=alternatives,
            ))
        return suggestions

    def missing_specifics_suggestions(self, context: AnalysisContext, entry: TranscriptEntry) -> List[Suggestion]:
        text = entry.text.lower()
        if not contains_any(text, ACTION_WORDS):
            return []

        suggestions = []
        if not contains_any(text, DEADLINE_INDICATORS):
            suggestions.append(self.suggest(
                context,
                SuggestionType.SPECIFICITY,
                prefix="missing_deadline",
                title="Missing Deadline",
                message=(
                    'This task lacks a specific deadline. Consider asking: '
                    '"When should this be completed?" or "What\'s the target date?"'
                ),
                priority=Priority.HIGH,
                entry_id=entry.id,
            ))

        if not contains_any(text, SUCCESS_CRITERIA_INDICATORS):
            suggestions.append(self.suggest(
                context,
                SuggestionType.SPECIFICITY,
                prefix="missing_criteria",
                title="Missing Success Criteria",
                message=(
                    'This task lacks clear success criteria. Consider asking: '
                    '"How will we know when this is complete?" or "What does success look like?"'
                ),
                priority=Priority.MEDIUM,
                entry_id=entry.id,
            ))

        if not contains_any(text, RESOURCE_INDICATORS):
            suggestions.append(self.suggest(
                context,
                SuggestionType.SPECIFICITY,
                prefix="missing_resources",
                title="Missing Resource Information",
                message=(
                    'This task lacks resource information. Consider asking: '
                    '"What resources are needed?" or "Who can provide support?"'
                ),
                priority=Priority.LOW,
                entry_id=entry.id,
            ))

        return suggestions

    def unclear_scope_suggestions(self, context: AnalysisContext, entry: TranscriptEntry) -> List[Suggestion]:
        return [
            self.suggest(
                context,
                SuggestionType.SPECIFICITY,
                prefix="unclear_scope",
                title="Unclear Scope",
                message=f'"{phrase}" is vague. Consider being more specific about what exactly needs to be done.',
                priority=Priority.MEDIUM,
                entry_id=entry.id,
                phrase=phrase,
            )
            for phrase in matching_phrases(entry.text.lower(), VAGUE_SCOPE_PHRASES)
        ]
