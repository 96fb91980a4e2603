from __future__ import annotations

from datetime import datetime
from typing import Optional

from loguru import logger

from meeting_assistant.config import InsightConfig
from meeting_assistant.models import MeetingState, MeetingSummary
from meeting_assistant.utils.context_builder import build_summary_context, render_prompt

EMPTY_SUMMARY = "Unable to generate summary"
FAILED_SUMMARY = "Error generating summary"


async def generate_meeting_summary(
    llm_client,
    state: MeetingState,
    config: InsightConfig,
    now: Optional[datetime] = None,
) -> MeetingSummary:
    """Summarize the meeting; the structured fields are filled even when the call fails."""
    now = now or datetime.now()
    duration = 0

    try:
        duration = round((now - state.start_time).total_seconds() / 60)
        system_prompt = render_prompt("summary_system", **build_summary_context(state, duration))
        response_text, usage = await llm_client.complete_async(
            "Generate the meeting summary.",
            system_prompt=system_prompt,
            temperature=config.summary_temperature,
            top_p=config.summary_top_p,
            max_tokens=config.summary_max_tokens,
        )
        summary = response_text or EMPTY_SUMMARY
        logger.info(f"Generated summary for '{state.title}' ({usage.total_tokens} tokens)")
    except Exception as e:
        logger.error(f"Error generating meeting summary: {e}")
        summary = FAILED_SUMMARY

    return MeetingSummary(
        title=state.title,
        date=state.start_time,
        duration=duration,
        attendees=list(state.attendees),
        absentees=[a for a in state.attendees if not a.is_present],
        summary=summary,
        decisions=list(state.decisions),
        action_items=list(state.action_items),
    )
