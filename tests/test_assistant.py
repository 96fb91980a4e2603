"""
Tests for the MeetingAssistant pipeline and its state mutators.

Tests:
1. End-to-end transcript scenario
2. Failure isolation and the stop_on_error boundary
3. Insight requests
4. Accessors and mutators
"""

from datetime import date, datetime, timedelta, timezone
from typing import List, Tuple

import pytest

from meeting_assistant.analyzers import ActionItemExtractor, BaseAnalyzer
from meeting_assistant.assistant import MeetingAssistant
from meeting_assistant.models import (
    ActionItemStatus,
    AgendaItem,
    AnalyzerStatus,
    Decision,
    StatePatch,
    Suggestion,
    SuggestionType,
    TokenUsage,
    TranscriptEntry,
)

pytestmark = pytest.mark.asyncio

OFF = "That's off-topic, by the way."


class ExplodingAnalyzer(BaseAnalyzer):
    def __init__(self, config=None):
        super().__init__(name="exploding", config=config)

    def evaluate(self, context) -> Tuple[List[Suggestion], StatePatch]:
        raise RuntimeError("boom")


class MutatingAnalyzer(BaseAnalyzer):
    def __init__(self, config=None):
        super().__init__(name="mutating", config=config)

    def evaluate(self, context) -> Tuple[List[Suggestion], StatePatch]:
        context.state.decisions.append(Decision(title="Snuck in"))
        return [], StatePatch()


@pytest.fixture
def make_assistant(app_config, attendees, budget_agenda, fake_llm, now):
    def _make(**kwargs) -> MeetingAssistant:
        kwargs.setdefault("config", app_config)
        kwargs.setdefault("llm_client", fake_llm)
        return MeetingAssistant(
            "meeting_1",
            "Weekly Sync",
            attendees,
            budget_agenda,
            start_time=now - timedelta(minutes=5),
            clock=lambda: now,
            **kwargs,
        )
    return _make


def say(text: str, speaker: str = "Bob") -> TranscriptEntry:
    return TranscriptEntry(speaker=speaker, text=text)


class TestEndToEnd:
    async def test_action_item_then_drift(self, make_assistant, now):
        assistant = make_assistant()

        results = []
        for text in ["I will send the report by tomorrow.", OFF, OFF, OFF]:
            results.append(await assistant.process_transcript(say(text)))

        action_suggestions = [
            s for r in results for s in r.suggestions if s.type == SuggestionType.ACTION_ITEM
        ]
        assert len(action_suggestions) == 1
        assert action_suggestions[0] in results[0].suggestions

        state = assistant.get_meeting_state()
        assert len(state.action_items) == 1
        item = state.action_items[0]
        assert item.assignees[0] == "I will"
        assert item.deadline == date(2026, 3, 3)

        drift = [s for s in results[3].suggestions if s.title == "Conversation Drifting Off-Topic"]
        assert len(drift) == 1
        assert not any(s.title == "Conversation Drifting Off-Topic" for s in results[1].suggestions)

        assert len(state.transcript) == 4
        assert state.suggestions == [s for r in results for s in r.suggestions]

    async def test_blank_entry_is_ignored(self, make_assistant):
        assistant = make_assistant()
        result = await assistant.process_transcript(say("   "))

        assert result.suggestions == []
        assert assistant.state.transcript == []

    async def test_entries_after_end_are_ignored(self, make_assistant):
        assistant = make_assistant()
        assistant.end_meeting()
        result = await assistant.process_transcript(say("I will send the report by tomorrow."))

        assert result.suggestions == []
        assert assistant.state.transcript == []
        assert assistant.state.is_active is False

    async def test_offset_aware_times_are_stored_as_local(self, app_config, attendees, fake_llm):
        utc_now = datetime(2026, 3, 2, 10, 30, tzinfo=timezone.utc)
        assistant = MeetingAssistant(
            "meeting_utc",
            "Weekly Sync",
            attendees,
            [AgendaItem(title="Budget Review", duration=10)],
            start_time=utc_now - timedelta(minutes=30),
            end_time=utc_now,
            config=app_config,
            llm_client=fake_llm,
            clock=lambda: utc_now,
        )
        result = await assistant.process_transcript(say("Budget numbers look fine"))

        assert result.failed_analyzers == []
        assert assistant.state.start_time.tzinfo is None
        assert any(s.title == "Agenda Item Taking Too Long" for s in result.suggestions)
        assert (await assistant.generate_meeting_summary()).duration == 30

    async def test_analyzers_see_a_snapshot(self, make_assistant, processing_config):
        assistant = make_assistant(analyzers=[MutatingAnalyzer(processing_config)])
        await assistant.process_transcript(say("Numbers look fine"))

        assert assistant.state.decisions == []


class TestFailureHandling:
    async def test_failing_analyzer_is_isolated(self, make_assistant, processing_config):
        assistant = make_assistant(
            analyzers=[ExplodingAnalyzer(processing_config), ActionItemExtractor(processing_config)]
        )
        result = await assistant.process_transcript(say("I will send the report by tomorrow."))

        assert result.failed_analyzers == ["exploding"]
        assert len(result.suggestions) == 1
        assert len(assistant.state.action_items) == 1

    async def test_stop_on_error_discards_the_batch(self, make_assistant, app_config, processing_config):
        app_config.processing.stop_on_error = True
        assistant = make_assistant(
            analyzers=[ActionItemExtractor(processing_config), ExplodingAnalyzer(processing_config)]
        )
        result = await assistant.process_transcript(say("I will send the report by tomorrow."))

        assert result.suggestions == []
        assert result.failed_analyzers == ["exploding"]
        assert assistant.state.action_items == []
        assert assistant.state.suggestions == []
        assert len(assistant.state.transcript) == 1

    async def test_analyze_records_error_status(self, make_context, processing_config):
        result = ExplodingAnalyzer(processing_config).analyze(make_context())

        assert result.status == AnalyzerStatus.ERROR
        assert result.error_message == "boom"
        assert result.suggestions == []


class TestInsights:
    async def test_insight_is_appended_and_stored(self, make_assistant, insight_config, fake_llm):
        assistant = make_assistant(config=insight_config)
        result = await assistant.process_transcript(say("I will send the report by tomorrow."))

        insight = result.suggestions[-1]
        assert insight.type == SuggestionType.AI_INSIGHT
        assert insight.title == "AI Meeting Insight"
        assert insight.message == "Ask Bob to confirm the report owner before moving on."
        assert assistant.state.suggestions[-1].id == insight.id

        fake_llm.complete_async.assert_awaited_once()
        kwargs = fake_llm.complete_async.await_args.kwargs
        assert kwargs["max_tokens"] == 500
        assert "Current agenda item: Budget Review" in kwargs["system_prompt"]

    async def test_insight_prompt_carries_meeting_context(self, make_assistant, insight_config, fake_llm):
        assistant = make_assistant(config=insight_config)
        assistant.add_decision(Decision(title="Adopt vendor A"))
        for text in ["Numbers look fine", "I will send the report by tomorrow.", "The vendor quote came in"]:
            await assistant.process_transcript(say(text, speaker="Tom"))
        result = await assistant.process_transcript(say("We'll figure it out"))

        args = fake_llm.complete_async.await_args
        prompt, system_prompt = args.args[0], args.kwargs["system_prompt"]
        state = assistant.state

        recent = "\n".join(entry.line for entry in state.transcript[-3:])
        assert f"- Recent transcript: {recent}\n" in system_prompt
        assert "Tom: Numbers look fine" not in system_prompt
        assert "- Current decisions: Adopt vendor A" in system_prompt
        assert state.action_items
        tasks = ", ".join(item.task for item in state.action_items)
        assert f"- Current action items: {tasks}" in system_prompt

        module_suggestions = [s for s in result.suggestions if s.type != SuggestionType.AI_INSIGHT]
        assert module_suggestions
        for suggestion in module_suggestions:
            assert f"- {suggestion.title}: {suggestion.message}" in prompt

    async def test_insight_failure_keeps_local_suggestions(self, make_assistant, insight_config, fake_llm):
        fake_llm.complete_async.side_effect = RuntimeError("service unavailable")
        assistant = make_assistant(config=insight_config)
        result = await assistant.process_transcript(say("I will send the report by tomorrow."))

        assert result.suggestions
        assert all(s.type != SuggestionType.AI_INSIGHT for s in result.suggestions)

    async def test_blank_insight_is_dropped(self, make_assistant, insight_config, fake_llm):
        fake_llm.complete_async.return_value = ("   ", TokenUsage())
        assistant = make_assistant(config=insight_config)
        result = await assistant.process_transcript(say("Numbers look fine"))

        assert result.suggestions == []

    async def test_disabled_insights_skip_the_service(self, make_assistant, fake_llm):
        assistant = make_assistant()
        await assistant.process_transcript(say("Numbers look fine"))

        fake_llm.complete_async.assert_not_awaited()


class TestMutators:
    async def test_acknowledge_is_idempotent(self, make_assistant):
        assistant = make_assistant()
        result = await assistant.process_transcript(say("We'll figure it out"))
        suggestion_id = result.suggestions[0].id

        assert assistant.acknowledge_suggestion(suggestion_id) is True
        once = assistant.state.model_dump()
        assert assistant.acknowledge_suggestion(suggestion_id) is True
        assert assistant.state.model_dump() == once
        assert assistant.acknowledge_suggestion("missing") is False

    async def test_recent_suggestions_newest_first(self, make_assistant):
        assistant = make_assistant()
        await assistant.process_transcript(say("We'll figure it out"))
        await assistant.process_transcript(say("Maybe we can ship Friday"))

        recent = assistant.recent_suggestions()
        assert recent == list(reversed(assistant.state.suggestions))
        assert assistant.recent_suggestions(limit=1) == recent[:1]

        assistant.acknowledge_suggestion(recent[0].id)
        assert recent[0] not in assistant.recent_suggestions(include_acknowledged=False)

    async def test_decisions(self, make_assistant):
        assistant = make_assistant()
        decision = Decision(title="Adopt vendor A")

        assert assistant.add_decision(decision) is True
        assert assistant.add_decision(decision) is False
        assert len(assistant.state.decisions) == 1

        assert assistant.verify_decision(decision.id) is True
        assert assistant.state.decisions[0].is_verified is True
        assert assistant.verify_decision("missing") is False

    async def test_update_action_item(self, make_assistant):
        assistant = make_assistant()
        await assistant.process_transcript(say("I will send the report by tomorrow."))
        item_id = assistant.state.action_items[0].id

        assert assistant.update_action_item(item_id, {"status": "completed", "id": "other"}) is True
        item = assistant.state.action_items[0]
        assert item.id == item_id
        assert item.status == ActionItemStatus.COMPLETED

        assert assistant.update_action_item(item_id, {"priority": "critical"}) is False
        assert assistant.state.action_items[0].priority == item.priority
        assert assistant.update_action_item(item_id, {"status": "pending", "bogus": 1}) is False
        assert assistant.state.action_items[0].status == ActionItemStatus.COMPLETED
        assert assistant.update_action_item("missing", {"is_verified": True}) is False

    async def test_agenda_navigation(self, make_assistant, now):
        assistant = make_assistant()
        assistant.state.agenda.append(AgendaItem(title="Hiring Plan"))

        assert assistant.update_agenda_item(1) is True
        first, second = assistant.state.agenda
        assert assistant.state.current_agenda_item == 1
        assert first.end_time == now
        assert second.start_time == now

        assert assistant.update_agenda_item(5) is False
        assert assistant.state.current_agenda_item == 1

        assert assistant.complete_agenda_item() is True
        assert second.is_completed is True
        assert assistant.complete_agenda_item(7) is False

    async def test_summary_uses_the_clock(self, make_assistant, fake_llm):
        fake_llm.complete_async.return_value = ("Summary text", TokenUsage())
        assistant = make_assistant()
        summary = await assistant.generate_meeting_summary()

        assert summary.duration == 5
        assert summary.title == "Weekly Sync"
