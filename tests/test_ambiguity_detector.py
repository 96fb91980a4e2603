"""Tests for the ambiguity detector."""

from meeting_assistant.analyzers import AmbiguityDetector
from meeting_assistant.models import Priority, SuggestionType


def titles(suggestions):
    return [s.title for s in suggestions]


class TestHedgedStatements:
    def test_hedging_phrase_yields_one_medium_suggestion(self, make_context, processing_config):
        context = make_context(["We'll figure it out"])
        suggestions, patch = AmbiguityDetector(processing_config).evaluate(context)

        assert titles(suggestions) == ["Ambiguous Statement Detected"]
        assert suggestions[0].type == SuggestionType.AMBIGUITY
        assert suggestions[0].priority == Priority.MEDIUM
        assert suggestions[0].details["phrase"] == "we'll figure it out"
        assert patch.is_empty()

    def test_vague_timeline_and_missing_assignee(self, make_context, processing_config):
        context = make_context(["Send the slides soon"])
        suggestions, _ = AmbiguityDetector(processing_config).evaluate(context)

        vague = [s for s in suggestions if s.title == "Vague Timeline Detected"]
        assert len(vague) == 1
        assert vague[0].priority == Priority.HIGH
        assert "Missing Assignee" in titles(suggestions)

    def test_claimed_task_has_no_missing_assignee(self, make_context, processing_config):
        context = make_context(["I will review the budget"])
        suggestions, _ = AmbiguityDetector(processing_config).evaluate(context)

        assert "Missing Assignee" not in titles(suggestions)

    def test_only_recent_window_is_scanned(self, make_context, processing_config):
        texts = ["We'll figure it out"] + ["Numbers look fine"] * processing_config.ambiguity_window
        suggestions, _ = AmbiguityDetector(processing_config).evaluate(make_context(texts))

        assert suggestions == []

    def test_entry_id_is_recorded(self, make_context, processing_config):
        context = make_context(["Maybe we can ship Friday"])
        suggestions, _ = AmbiguityDetector(processing_config).evaluate(context)

        assert suggestions[0].details["entry_id"] == context.state.transcript[-1].id
