"""
Meeting Assistant - live transcript analysis for meeting organizers.
"""

from meeting_assistant.models import *
from meeting_assistant.config import get_config, set_config, reset_config
from meeting_assistant.llm_client import LLMClient
from meeting_assistant.assistant import MeetingAssistant

__version__ = "1.0.0"
__all__ = [
    "get_config",
    "set_config",
    "reset_config",
    "LLMClient",
    "MeetingAssistant",
]
