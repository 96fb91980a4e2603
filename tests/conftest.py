"""
Shared test fixtures for the meeting assistant.

Provides:
- A fixed clock
- Explicit configs (no global config, insights off unless a test turns them on)
- A fake LLM client (bypasses the text-generation service)
- Builders for meeting state and analysis contexts
"""

from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from meeting_assistant.config import AppConfig, InsightConfig, LLMConfig, ProcessingConfig
from meeting_assistant.models import (
    AgendaItem,
    AnalysisContext,
    Attendee,
    MeetingState,
    TokenUsage,
    TranscriptEntry,
)

NOW = datetime(2026, 3, 2, 10, 30)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def processing_config() -> ProcessingConfig:
    return ProcessingConfig()


@pytest.fixture
def app_config() -> AppConfig:
    """Config with insights disabled and a dummy key."""
    return AppConfig(
        llm=LLMConfig(api_key="test-key"),
        insights=InsightConfig(enabled=False),
    )


@pytest.fixture
def insight_config() -> AppConfig:
    return AppConfig(llm=LLMConfig(api_key="test-key"))


@pytest.fixture
def fake_llm():
    """LLM client double returning a canned completion."""
    client = MagicMock()
    client.is_configured = True
    client.complete_async = AsyncMock(
        return_value=("Ask Bob to confirm the report owner before moving on.", TokenUsage(total_tokens=42))
    )
    return client


@pytest.fixture
def attendees():
    # Names without the letter "i": the bare pronoun "I" is matched against the roster by substring
    return [Attendee(name="Bob"), Attendee(name="Tom")]


@pytest.fixture
def budget_agenda():
    return [AgendaItem(title="Budget Review")]


@pytest.fixture
def make_state(attendees, budget_agenda) -> Callable[..., MeetingState]:
    def _make(
        texts: Iterable[str] = (),
        *,
        agenda=None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
        roster=None,
        **fields,
    ) -> MeetingState:
        state = MeetingState(
            title="Weekly Sync",
            start_time=start_time or NOW - timedelta(minutes=5),
            end_time=end_time,
            attendees=list(attendees if roster is None else roster),
            agenda=budget_agenda if agenda is None else agenda,
            **fields,
        )
        for text in texts:
            state.transcript.append(TranscriptEntry(speaker="Bob", text=text, timestamp=NOW))
        return state
    return _make


@pytest.fixture
def make_context(make_state) -> Callable[..., AnalysisContext]:
    """Context whose triggering entry is the last of `texts`."""
    def _make(texts: Iterable[str] = ("Numbers look fine",), **kwargs) -> AnalysisContext:
        state = make_state(texts, **kwargs)
        return AnalysisContext(state=state, entry=state.transcript[-1], now=NOW)
    return _make
