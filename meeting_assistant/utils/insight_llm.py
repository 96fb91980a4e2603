from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from loguru import logger

from meeting_assistant.config import InsightConfig
from meeting_assistant.models import (
    MeetingState,
    Priority,
    Suggestion,
    SuggestionType,
    TranscriptEntry,
    new_id,
)
from meeting_assistant.utils.context_builder import build_insight_context, render_prompt


async def generate_insight(
    llm_client,
    state: MeetingState,
    entry: TranscriptEntry,
    module_suggestions: Sequence[Suggestion],
    config: InsightConfig,
    now: Optional[datetime] = None,
) -> Optional[Suggestion]:
    """
    Ask the text-generation service for one organizer-facing insight.

    Returns None when the service answers with blank content or fails in any
    way; the caller treats that as "no additional suggestion".
    """
    try:
        context = build_insight_context(state, entry, module_suggestions, config.recent_transcript_lines)
        system_prompt = render_prompt("insight_system", **context)
        prompt = render_prompt("insight_user", **context)

        response_text, usage = await llm_client.complete_async(
            prompt,
            system_prompt=system_prompt,
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_tokens,
        )
    except Exception as e:
        logger.error(f"Error generating AI insights: {e}")
        return None

    if not response_text or not response_text.strip():
        logger.debug("Insight request returned no content")
        return None

    logger.debug(f"Insight generated ({usage.total_tokens} tokens)")
    return Suggestion(
        id=new_id("ai_insight"),
        type=SuggestionType.AI_INSIGHT,
        title="AI Meeting Insight",
        message=response_text,
        priority=Priority.HIGH,
        timestamp=now or datetime.now(),
    )
