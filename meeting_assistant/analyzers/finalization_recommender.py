"""
Finalization Recommender
- Near the planned end: prompt verification of open decisions and action items
- On closing language: prompt a recap and a follow-up
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from meeting_assistant.analyzers.base_analyzer import BaseAnalyzer
from meeting_assistant.analyzers.patterns import CLOSING_PHRASES, contains_any
from meeting_assistant.config import ProcessingConfig
from meeting_assistant.models import (
    AnalysisContext,
    MeetingState,
    Priority,
    StatePatch,
    Suggestion,
    SuggestionType,
)


class FinalizationRecommender(BaseAnalyzer):
    def __init__(self, config: Optional[ProcessingConfig] = None) -> None:
        super().__init__(name="finalization_recommender", config=config)

    def evaluate(self, context: AnalysisContext) -> Tuple[List[Suggestion], StatePatch]:
        suggestions: List[Suggestion] = []
        if self.is_nearing_end(context):
            suggestions.extend(self.finalization_suggestions(context))
        if self.has_conclusion_signals(context.state):
            suggestions.extend(self.conclusion_suggestions(context))
        return suggestions, StatePatch()

    def is_nearing_end(self, context: AnalysisContext) -> bool:
        """
        Elapsed share of the planned meeting length. A planned end at or
        before the start counts as nearing end.
        """
        state = context.state
        if state.end_time is None:
            return False
        planned = (state.end_time - state.start_time).total_seconds()
        if planned <= 0:
            return True
        elapsed = (context.now - state.start_time).total_seconds()
        return elapsed / planned >= self.config.finalization_threshold

    def has_conclusion_signals(self, state: MeetingState) -> bool:
        recent_text = " ".join(e.text.lower() for e in state.recent_entries(self.config.conclusion_window))
        return contains_any(recent_text, CLOSING_PHRASES)

    def finalization_suggestions(self, context: AnalysisContext) -> List[Suggestion]:
        state = context.state
        suggestions: List[Suggestion] = []

        unverified_decisions = [d for d in state.decisions if not d.is_verified]
        if unverified_decisions:
            titles = ", ".join(d.title for d in unverified_decisions)
            suggestions.append(self.suggest(
                context,
                SuggestionType.FINALIZATION,
                prefix="verify_decisions",
                title="Verify Decisions",
                message=(
                    f"You have {len(unverified_decisions)} unverified decisions. "
                    f'Consider asking: "Let\'s confirm our decisions: {titles}"'
                ),
                priority=Priority.HIGH,
                decision_ids=[d.id for d in unverified_decisions],
            ))

        unverified_actions = [a for a in state.action_items if not a.is_verified]
        if unverified_actions:
            tasks = ", ".join(a.task for a in unverified_actions)
            suggestions.append(self.suggest(
                context,
                SuggestionType.FINALIZATION,
                prefix="verify_actions",
                title="Verify Action Items",
                message=(
                    f"You have {len(unverified_actions)} unverified action items. "
                    f'Consider asking: "Let\'s confirm our action items: {tasks}"'
                ),
                priority=Priority.HIGH,
                action_item_ids=[a.id for a in unverified_actions],
            ))

        incomplete = [item for item in state.agenda if not item.is_completed]
        if incomplete:
            titles = ", ".join(item.title for item in incomplete)
            suggestions.append(self.suggest(
                context,
                SuggestionType.FINALIZATION,
                prefix="incomplete_agenda",
                title="Incomplete Agenda Items",
                message=(
                    f"You have {len(incomplete)} incomplete agenda items: {titles}. "
                    "Consider prioritizing or rescheduling."
                ),
                priority=Priority.MEDIUM,
                agenda_item_ids=[item.id for item in incomplete],
            ))

        suggestions.append(self.suggest(
            context,
            SuggestionType.FINALIZATION,
            prefix="next_steps",
            title="Plan Next Steps",
            message=(
                'Consider asking: "What are our next steps?" or '
                '"What should we focus on before our next meeting?"'
            ),
            priority=Priority.MEDIUM,
        ))
        return suggestions

    def conclusion_suggestions(self, context: AnalysisContext) -> List[Suggestion]:
        return [
            self.suggest(
                context,
                SuggestionType.FINALIZATION,
                prefix="meeting_summary",
                title="Provide Meeting Summary",
                message=(
                    'Consider summarizing: "To recap, we decided on [decisions] and will take action on '
                    '[action items]. Our next steps are [next steps]."'
                ),
                priority=Priority.HIGH,
            ),
            self.suggest(
                context,
                SuggestionType.FINALIZATION,
                prefix="follow_up",
                title="Schedule Follow-up",
                message=(
                    'Consider asking: "When should we meet again to review progress?" or '
                    '"Who will send out the meeting summary?"'
                ),
                priority=Priority.MEDIUM,
            ),
        ]
