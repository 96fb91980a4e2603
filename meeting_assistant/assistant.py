"""
Meeting assistant: owns one meeting's state and runs the analyzer pipeline
over each incoming transcript entry.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from meeting_assistant.analyzers import BaseAnalyzer, default_analyzers
from meeting_assistant.config import AppConfig, get_config
from meeting_assistant.llm_client import LLMClient
from meeting_assistant.models import (
    ActionItem,
    AgendaItem,
    AnalysisContext,
    AnalysisResult,
    AnalyzerStatus,
    Attendee,
    Decision,
    MeetingState,
    MeetingSummary,
    ProcessResult,
    StatePatch,
    Suggestion,
    TranscriptEntry,
    as_local_naive,
)
from meeting_assistant.utils.insight_llm import generate_insight
from meeting_assistant.utils.summarizer import generate_meeting_summary


class MeetingAssistant:
    """Runs the analyzers for one meeting and keeps its canonical state."""

    def __init__(
        self,
        meeting_id: str,
        title: str,
        attendees: Optional[Sequence[Attendee]] = None,
        agenda: Optional[Sequence[AgendaItem]] = None,
        *,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        analyzers: Optional[Sequence[BaseAnalyzer]] = None,
        llm_client: Optional[LLMClient] = None,
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the assistant.

        Args:
            meeting_id: Identifier of the meeting
            title: Meeting title
            attendees: Invited attendees
            agenda: Ordered agenda items
            start_time: Meeting start; defaults to now
            end_time: Planned meeting end, if known
            analyzers: Ordered analyzers; defaults to the configured list
            llm_client: Client for insights and summaries
            config: Application config; defaults to the global one
            clock: Source of the current time
        """
        self.config = config or get_config()
        self.clock = clock or datetime.now
        self.analyzers: List[BaseAnalyzer] = (
            list(analyzers) if analyzers is not None else default_analyzers(self.config)
        )
        self.llm_client = llm_client or LLMClient(self.config.llm)

        self.state = MeetingState(
            id=meeting_id,
            title=title,
            start_time=start_time or self._now(),
            end_time=end_time,
            attendees=list(attendees or []),
            agenda=list(agenda or []),
        )

        logger.info(
            f"Meeting '{title}' ({meeting_id}) created with {len(self.state.attendees)} attendees, "
            f"{len(self.state.agenda)} agenda items, analyzers: {[a.name for a in self.analyzers]}"
        )

    async def process_transcript(self, entry: TranscriptEntry) -> ProcessResult:
        """
        Append `entry`, run every analyzer on one snapshot, commit the merged
        result, then request one insight.

        Returns:
            ProcessResult with this entry's suggestions and the committed state
        """
        if not self.state.is_active:
            logger.debug(f"Meeting {self.state.id} has ended; ignoring entry from {entry.speaker}")
            return ProcessResult(state=self.state)
        if not entry.text:
            logger.debug(f"Ignoring blank transcript entry from {entry.speaker}")
            return ProcessResult(state=self.state)

        self.state.transcript.append(entry)
        now = self._now()
        context = AnalysisContext(state=self.state.model_copy(deep=True), entry=entry, now=now)

        results = [analyzer.analyze(context) for analyzer in self.analyzers]
        failed = [r.analyzer_name for r in results if r.status == AnalyzerStatus.ERROR]

        if failed and self.config.processing.stop_on_error:
            logger.error(f"Discarding analysis for entry {entry.id}; failed analyzers: {failed}")
            return ProcessResult(state=self.state, failed_analyzers=failed)

        suggestions = self._commit(results)
        logger.info(
            f"Entry {len(self.state.transcript)} from {entry.speaker}: {len(suggestions)} suggestions"
            + (f", failed analyzers: {failed}" if failed else "")
        )

        insight = await self._request_insight(entry, suggestions, now)
        if insight:
            self.state.suggestions.append(insight)
            suggestions.append(insight)

        return ProcessResult(suggestions=suggestions, state=self.state, failed_analyzers=failed)

    def _commit(self, results: Sequence[AnalysisResult]) -> List[Suggestion]:
        suggestions: List[Suggestion] = []
        for result in results:
            if result.status != AnalyzerStatus.COMPLETED:
                continue
            suggestions.extend(result.suggestions)
            self._apply_patch(result.patch)
        self.state.suggestions.extend(suggestions)
        return suggestions

    def _apply_patch(self, patch: StatePatch) -> None:
        if patch.is_empty():
            return
        self.state.action_items.extend(patch.action_items)
        self.state.decisions.extend(patch.decisions)
        if patch.current_agenda_item is not None:
            self.state.current_agenda_item = patch.current_agenda_item

    async def _request_insight(
        self, entry: TranscriptEntry, suggestions: Sequence[Suggestion], now: datetime
    ) -> Optional[Suggestion]:
        if not self.config.insights.enabled or not self.llm_client.is_configured:
            return None
        return await generate_insight(
            self.llm_client, self.state, entry, suggestions, self.config.insights, now
        )

    def _now(self) -> datetime:
        return as_local_naive(self.clock())

    def get_meeting_state(self) -> MeetingState:
        return self.state

    def recent_suggestions(
        self, limit: Optional[int] = None, include_acknowledged: bool = True
    ) -> List[Suggestion]:
        """Suggestions newest first."""
        suggestions = [
            s for s in reversed(self.state.suggestions)
            if include_acknowledged or not s.is_acknowledged
        ]
        return suggestions[:limit] if limit is not None else suggestions

    def acknowledge_suggestion(self, suggestion_id: str) -> bool:
        suggestion = self.state.find_suggestion(suggestion_id)
        if suggestion is None:
            logger.warning(f"Unknown suggestion: {suggestion_id}")
            return False
        suggestion.is_acknowledged = True
        return True

    def add_decision(self, decision: Decision) -> bool:
        if any(d.id == decision.id for d in self.state.decisions):
            logger.warning(f"Decision {decision.id} already recorded")
            return False
        self.state.decisions.append(decision)
        logger.info(f"Decision recorded: {decision.title}")
        return True

    def verify_decision(self, decision_id: str) -> bool:
        decision = next((d for d in self.state.decisions if d.id == decision_id), None)
        if decision is None:
            logger.warning(f"Unknown decision: {decision_id}")
            return False
        decision.is_verified = True
        return True

    def update_action_item(self, action_item_id: str, updates: Dict[str, Any]) -> bool:
        """Apply a validated partial update; the id is never changed."""
        for index, item in enumerate(self.state.action_items):
            if item.id != action_item_id:
                continue
            changes = {k: v for k, v in updates.items() if k != "id"}
            unknown = sorted(set(changes) - set(ActionItem.model_fields))
            if unknown:
                logger.warning(f"Rejected update for action item {action_item_id}: unknown fields {unknown}")
                return False
            try:
                updated = ActionItem.model_validate({**item.model_dump(), **changes})
            except ValidationError as e:
                logger.warning(f"Rejected update for action item {action_item_id}: {e}")
                return False
            self.state.action_items[index] = updated
            return True

        logger.warning(f"Unknown action item: {action_item_id}")
        return False

    def update_agenda_item(self, index: int) -> bool:
        """Make agenda item `index` current, stamping observed end/start times."""
        if not 0 <= index < len(self.state.agenda):
            logger.warning(f"Agenda index {index} out of range")
            return False

        now = self._now()
        previous = self.state.current_agenda
        target = self.state.agenda[index]
        if previous is not None and previous is not target and previous.end_time is None:
            previous.end_time = now
        if target.start_time is None:
            target.start_time = now

        self.state.current_agenda_item = index
        logger.info(f"Current agenda item: {target.title}")
        return True

    def complete_agenda_item(self, index: Optional[int] = None) -> bool:
        if index is None:
            index = self.state.current_agenda_item or 0
        if not 0 <= index < len(self.state.agenda):
            logger.warning(f"Agenda index {index} out of range")
            return False

        item = self.state.agenda[index]
        item.is_completed = True
        if item.end_time is None:
            item.end_time = self._now()
        return True

    def end_meeting(self) -> None:
        self.state.is_active = False
        logger.info(f"Meeting '{self.state.title}' ended")

    async def generate_meeting_summary(self) -> MeetingSummary:
        return await generate_meeting_summary(
            self.llm_client, self.state, self.config.insights, self._now()
        )
