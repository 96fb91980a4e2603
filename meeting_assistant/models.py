"""
Data models for the Meeting Assistant.
"""

import uuid
from typing import Dict, List, Optional, Any
from datetime import date, datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_id(prefix: str) -> str:
    """Build a unique, stable entity id."""
    return f"{prefix}_{uuid.uuid4().hex}"


def as_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an offset-aware datetime to naive local time; naive values pass through."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SuggestionType(str, Enum):
    """Which part of the pipeline produced a suggestion."""
    AMBIGUITY = "ambiguity"
    GOAL_TRACKING = "goal_tracking"
    ACTION_ITEM = "action_item"
    SPECIFICITY = "specificity"
    FINALIZATION = "finalization"
    AI_INSIGHT = "ai_insight"


class ActionItemStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class AnalyzerStatus(str, Enum):
    """Status of an analyzer during processing."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class TokenUsage(BaseModel):
    """Token usage tracking for LLM calls."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    max_tokens: Optional[int] = None


class Attendee(BaseModel):
    """A person invited to the meeting."""
    id: str = Field(default_factory=lambda: new_id("attendee"))
    name: str
    email: Optional[str] = None
    is_organizer: bool = False
    is_present: bool = True

    @field_validator('name')
    @classmethod
    def name_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Attendee name cannot be empty')
        return v.strip()


class AgendaItem(BaseModel):
    """One agenda topic; duration is in minutes."""
    id: str = Field(default_factory=lambda: new_id("agenda"))
    title: str
    description: Optional[str] = None
    duration: Optional[float] = None
    is_completed: bool = False
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Agenda item title cannot be empty')
        return v.strip()

    @field_validator('start_time', 'end_time')
    @classmethod
    def local_times(cls, v):
        return as_local_naive(v)


class TranscriptEntry(BaseModel):
    """One attributed utterance. Immutable once built."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("entry"))
    timestamp: datetime = Field(default_factory=datetime.now)
    speaker: str
    text: str
    confidence: Optional[float] = None

    @field_validator('text')
    @classmethod
    def normalize_text(cls, v):
        return (v or "").strip()

    @field_validator('timestamp')
    @classmethod
    def local_timestamp(cls, v):
        return as_local_naive(v)

    @property
    def line(self) -> str:
        return f"{self.speaker}: {self.text}"


class Decision(BaseModel):
    """A decision taken during the meeting."""
    id: str = Field(default_factory=lambda: new_id("decision"))
    title: str
    description: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)
    participants: List[str] = Field(default_factory=list)
    is_verified: bool = False

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Decision title cannot be empty')
        return v.strip()

    @field_validator('timestamp')
    @classmethod
    def local_timestamp(cls, v):
        return as_local_naive(v)


class ActionItem(BaseModel):
    """An action item extracted from the meeting."""
    id: str = Field(default_factory=lambda: new_id("action"))
    task: str
    assignees: List[str] = Field(default_factory=list)
    deadline: Optional[date] = None
    priority: Priority = Priority.LOW
    status: ActionItemStatus = ActionItemStatus.PENDING
    timestamp: datetime = Field(default_factory=datetime.now)
    is_verified: bool = False

    @field_validator('task')
    @classmethod
    def task_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError('Action item task cannot be empty')
        return v.strip()

    @field_validator('timestamp')
    @classmethod
    def local_timestamp(cls, v):
        return as_local_naive(v)


class Suggestion(BaseModel):
    """An advisory, organizer-facing recommendation."""
    id: str = Field(default_factory=lambda: new_id("suggestion"))
    type: SuggestionType
    title: str
    message: str
    priority: Priority
    timestamp: datetime = Field(default_factory=datetime.now)
    is_acknowledged: bool = False
    # Structured context for the dashboard (matched phrase, entry id, ...)
    details: Dict[str, Any] = Field(default_factory=dict)


class MeetingState(BaseModel):
    """Canonical state of one meeting. end_time is the planned end."""
    id: str = Field(default_factory=lambda: new_id("meeting"))
    title: str
    start_time: datetime = Field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    attendees: List[Attendee] = Field(default_factory=list)
    agenda: List[AgendaItem] = Field(default_factory=list)
    current_agenda_item: Optional[int] = 0
    transcript: List[TranscriptEntry] = Field(default_factory=list)
    decisions: List[Decision] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    is_active: bool = True

    @field_validator('start_time', 'end_time')
    @classmethod
    def local_times(cls, v):
        # Offset-aware input (e.g. "...Z") is stored as naive local time to match the clock
        return as_local_naive(v)

    @property
    def current_agenda(self) -> Optional[AgendaItem]:
        index = self.current_agenda_item or 0
        if 0 <= index < len(self.agenda):
            return self.agenda[index]
        return None

    def recent_entries(self, count: int) -> List[TranscriptEntry]:
        """Return the last `count` transcript entries, oldest first."""
        if count <= 0:
            return []
        return self.transcript[-count:]

    def find_suggestion(self, suggestion_id: str) -> Optional[Suggestion]:
        return next((s for s in self.suggestions if s.id == suggestion_id), None)


class StatePatch(BaseModel):
    """
    Partial state update returned by an analyzer.

    List fields are appended to the canonical state; scalar fields overwrite it
    when set.
    """
    action_items: List[ActionItem] = Field(default_factory=list)
    decisions: List[Decision] = Field(default_factory=list)
    current_agenda_item: Optional[int] = None

    def is_empty(self) -> bool:
        return not self.action_items and not self.decisions and self.current_agenda_item is None


class AnalysisContext(BaseModel):
    """What one analyzer sees for one incoming transcript entry."""
    state: MeetingState
    entry: TranscriptEntry
    now: datetime = Field(default_factory=datetime.now)

    @field_validator('now')
    @classmethod
    def local_now(cls, v):
        return as_local_naive(v)


class AnalysisResult(BaseModel):
    """Result from a single analyzer."""
    analyzer_name: str
    suggestions: List[Suggestion] = Field(default_factory=list)
    patch: StatePatch = Field(default_factory=StatePatch)
    processing_time: float = 0.0
    status: AnalyzerStatus = AnalyzerStatus.PENDING
    error_message: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)


class ProcessResult(BaseModel):
    """Consolidated output of one process_transcript call."""
    suggestions: List[Suggestion] = Field(default_factory=list)
    state: MeetingState
    failed_analyzers: List[str] = Field(default_factory=list)


class MeetingSummary(BaseModel):
    """End-of-meeting summary returned to collaborators."""
    title: str
    date: datetime
    duration: int = 0
    attendees: List[Attendee] = Field(default_factory=list)
    absentees: List[Attendee] = Field(default_factory=list)
    summary: str
    decisions: List[Decision] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)

    def to_markdown(self) -> str:
        """Render the summary as markdown."""
        date_str = self.date.strftime("%Y-%m-%d")
        lines = [f"# {date_str} - {self.title}\n"]

        lines.append(f"- **Duration**: {self.duration} minutes")
        lines.append("")

        if self.attendees:
            lines.append("## Attendees")
            for attendee in self.attendees:
                marker = "" if attendee.is_present else " (absent)"
                lines.append(f"- {attendee.name}{marker}")
            lines.append("")

        lines.append("## Summary")
        lines.append(self.summary)
        lines.append("")

        if self.decisions:
            lines.append("## Decisions")
            for decision in self.decisions:
                check = "x" if decision.is_verified else " "
                lines.append(f"- [{check}] **{decision.title}**")
                if decision.description:
                    lines.append(f"  - {decision.description}")
            lines.append("")

        if self.action_items:
            lines.append("## Action Items")
            for item in self.action_items:
                check = "x" if item.status == ActionItemStatus.COMPLETED else " "
                assignees = f" (@{', @'.join(item.assignees)})" if item.assignees else ""
                due = f" - Due: {item.deadline.isoformat()}" if item.deadline else ""
                lines.append(f"- [{check}] {item.task}{assignees}{due}")
            lines.append("")

        return "\n".join(lines)
