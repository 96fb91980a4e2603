"""
API blueprint for the Meeting Assistant.

Endpoints:
- POST  /api/meeting                       (start a meeting, replacing any current one)
- GET   /api/meeting-state
- GET   /api/suggestions                   (?limit=N&include_acknowledged=false)
- POST  /api/transcript                    (run the analyzers on one entry)
- POST  /api/suggestions/<id>/acknowledge
- POST  /api/decisions
- POST  /api/decisions/<id>/verify
- PATCH /api/action-items/<id>
- POST  /api/agenda/current                ({ index: int })
- POST  /api/agenda/<index>/complete
- POST  /api/meeting/end
- GET   /api/meeting-summary               (?format=markdown)
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import List, Optional

from flask import Blueprint, Response, current_app, jsonify, request
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from meeting_assistant.assistant import MeetingAssistant
from meeting_assistant.models import AgendaItem, Attendee, Decision, TranscriptEntry, as_local_naive, new_id

from . import ASSISTANT_KEY, CONFIG_KEY, LLM_CLIENT_KEY

api_bp = Blueprint("api", __name__)


class CreateMeetingRequest(BaseModel):
    meeting_id: str = Field(default_factory=lambda: new_id("meeting"))
    title: str
    attendees: List[Attendee] = Field(default_factory=list)
    agenda: List[AgendaItem] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def local_times(cls, v):
        return as_local_naive(v)


def _assistant() -> Optional[MeetingAssistant]:
    return current_app.extensions.get(ASSISTANT_KEY)


def _no_meeting():
    return jsonify({"ok": False, "error": "No active meeting"}), 404


def _invalid(e: ValidationError):
    return jsonify({"ok": False, "error": "Invalid request", "details": str(e)}), 400


@api_bp.post("/meeting")
def api_create_meeting():
    """
    Start a meeting.
    Body: { title, meeting_id?, attendees?: [{name, ...}], agenda?: [{title, duration?, ...}], start_time?, end_time? }
    """
    data = request.get_json(silent=True) or {}
    try:
        body = CreateMeetingRequest.model_validate(data)
    except ValidationError as e:
        return _invalid(e)

    assistant = MeetingAssistant(
        body.meeting_id,
        body.title,
        body.attendees,
        body.agenda,
        start_time=body.start_time,
        end_time=body.end_time,
        llm_client=current_app.extensions[LLM_CLIENT_KEY],
        config=current_app.extensions[CONFIG_KEY],
    )
    current_app.extensions[ASSISTANT_KEY] = assistant
    return jsonify({"ok": True, "state": assistant.state.model_dump(mode="json")}), 201


@api_bp.get("/meeting-state")
def api_meeting_state():
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()
    return jsonify({"ok": True, "state": assistant.get_meeting_state().model_dump(mode="json")})


@api_bp.get("/suggestions")
def api_suggestions():
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()

    limit = request.args.get("limit", type=int)
    include_acknowledged = request.args.get("include_acknowledged", "true").lower() != "false"
    suggestions = assistant.recent_suggestions(limit=limit, include_acknowledged=include_acknowledged)
    return jsonify({"ok": True, "suggestions": [s.model_dump(mode="json") for s in suggestions]})


@api_bp.post("/transcript")
def api_transcript():
    """
    Analyze one transcript entry.
    Body: { speaker: str, text: str, timestamp?, confidence? }
    """
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"ok": False, "error": "JSON object body required"}), 400
    try:
        entry = TranscriptEntry.model_validate(data)
    except ValidationError as e:
        return _invalid(e)

    result = asyncio.run(assistant.process_transcript(entry))
    return jsonify(
        {
            "ok": True,
            "suggestions": [s.model_dump(mode="json") for s in result.suggestions],
            "failed_analyzers": result.failed_analyzers,
            "state": result.state.model_dump(mode="json"),
        }
    )


@api_bp.post("/suggestions/<suggestion_id>/acknowledge")
def api_acknowledge_suggestion(suggestion_id: str):
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()
    return jsonify({"ok": assistant.acknowledge_suggestion(suggestion_id)})


@api_bp.post("/decisions")
def api_add_decision():
    """
    Record a decision.
    Body: { title: str, description?, participants?: [str], id? }
    """
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"ok": False, "error": "JSON object body required"}), 400
    try:
        decision = Decision.model_validate(data)
    except ValidationError as e:
        return _invalid(e)

    added = assistant.add_decision(decision)
    return jsonify({"ok": added, "decision": decision.model_dump(mode="json")}), (201 if added else 200)


@api_bp.post("/decisions/<decision_id>/verify")
def api_verify_decision(decision_id: str):
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()
    return jsonify({"ok": assistant.verify_decision(decision_id)})


@api_bp.patch("/action-items/<action_item_id>")
def api_update_action_item(action_item_id: str):
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"ok": False, "error": "JSON object body required"}), 400
    return jsonify({"ok": assistant.update_action_item(action_item_id, data)})


@api_bp.post("/agenda/current")
def api_set_current_agenda_item():
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()

    data = request.get_json(silent=True) or {}
    index = data.get("index")
    if not isinstance(index, int) or isinstance(index, bool):
        return jsonify({"ok": False, "error": "index (int) is required"}), 400
    return jsonify({"ok": assistant.update_agenda_item(index)})


@api_bp.post("/agenda/<int:index>/complete")
def api_complete_agenda_item(index: int):
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()
    return jsonify({"ok": assistant.complete_agenda_item(index)})


@api_bp.post("/meeting/end")
def api_end_meeting():
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()
    assistant.end_meeting()
    return jsonify({"ok": True, "state": assistant.state.model_dump(mode="json")})


@api_bp.get("/meeting-summary")
def api_meeting_summary():
    assistant = _assistant()
    if assistant is None:
        return _no_meeting()

    summary = asyncio.run(assistant.generate_meeting_summary())
    logger.info(f"Summary requested for meeting {assistant.state.id}")
    if request.args.get("format") == "markdown":
        return Response(summary.to_markdown(), mimetype="text/markdown")
    return jsonify({"ok": True, "summary": summary.model_dump(mode="json")})
