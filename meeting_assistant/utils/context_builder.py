from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence

import jinja2

from meeting_assistant.models import MeetingState, Suggestion, TranscriptEntry

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"

_environment = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(PROMPTS_DIR)),
    undefined=jinja2.StrictUndefined,
    autoescape=False,
)


def render_prompt(name: str, **variables: Any) -> str:
    """Render `prompts/<name>.md` with the given variables."""
    return _environment.get_template(f"{name}.md").render(**variables)


def transcript_lines(entries: Sequence[TranscriptEntry]) -> List[str]:
    return [entry.line for entry in entries]


def current_agenda_title(state: MeetingState) -> str:
    item = state.current_agenda
    return item.title if item else "No current agenda item"


def build_insight_context(
    state: MeetingState,
    entry: TranscriptEntry,
    suggestions: Sequence[Suggestion],
    recent_lines: int = 3,
) -> Dict[str, Any]:
    """Variables for the insight prompts."""
    return {
        "title": state.title,
        "agenda_item": current_agenda_title(state),
        "recent_transcript": transcript_lines(state.recent_entries(recent_lines)),
        "decisions": [d.title for d in state.decisions],
        "action_items": [a.task for a in state.action_items],
        "entry_line": entry.line,
        "suggestions": list(suggestions),
    }


def build_summary_context(state: MeetingState, duration: int) -> Dict[str, Any]:
    """Variables for the summary prompt; action items carry their assignees."""
    return {
        "title": state.title,
        "duration": duration,
        "attendees": [a.name for a in state.attendees],
        "agenda": [item.title for item in state.agenda],
        "transcript": transcript_lines(state.transcript),
        "decisions": [d.title for d in state.decisions],
        "action_items": [f"{a.task} ({', '.join(a.assignees)})" for a in state.action_items],
    }
