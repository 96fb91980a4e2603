"""
Lexical pattern tables shared by the analyzers.

Every lookup is a plain lower-cased substring test, so "will" also matches
"willing". Regexes are compiled case-insensitive and applied to the raw text.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List

# Hedged statements that leave owner, scope, or timing open
AMBIGUOUS_PHRASES: List[str] = [
    "we'll handle that",
    "sometime next week",
    "we should look into",
    "someone needs to",
    "we'll figure it out",
    "let's discuss later",
    "we'll get back to you",
    "we'll see",
    "maybe we can",
    "we might want to",
    "it would be good to",
    "we should probably",
    "we need to think about",
    "we'll work on it",
    "we'll take care of it",
]

VAGUE_TIME_PHRASES: List[str] = [
    "soon",
    "eventually",
    "when we get a chance",
    "in the near future",
    "asap",
    "when possible",
    "at some point",
    "down the road",
    "in due time",
]

# Words that mark a statement as a commitment to do something
ACTION_WORDS: List[str] = [
    "need to", "should", "must", "have to", "will", "going to",
    "implement", "create", "build", "develop", "fix", "update",
    "review", "analyze", "investigate", "research", "prepare",
    "send", "schedule", "organize", "plan", "coordinate",
]

ASSIGNEE_INDICATORS: List[str] = [
    "i will", "i'll", "i can", "i should",
    "john will", "sarah will", "the team will",
    "marketing will", "engineering will", "sales will",
    "assigned to", "responsible for", "owner is",
]

OFF_TOPIC_PHRASES: List[str] = [
    "unrelated", "off-topic", "side note", "by the way",
    "this reminds me", "speaking of", "while we're on the subject",
    "just to mention", "random thought", "completely different",
]

COMPLETION_PHRASES: List[str] = [
    "that's all for", "finished with", "done with", "completed",
    "let's move on", "next item", "that covers", "wrapping up",
]

ACTION_VERBS: List[str] = [
    "implement", "create", "build", "develop", "fix", "update", "modify",
    "review", "analyze", "investigate", "research", "prepare", "organize",
    "send", "schedule", "coordinate", "plan", "design", "test", "deploy",
    "write", "document", "present", "meet", "call", "email", "follow up",
]

# Order matters: the first pattern has no group, so its whole match
# ("I will", "I'll", ...) becomes the assignee candidate.
ASSIGNEE_PATTERNS: List[re.Pattern] = [
    re.compile(r"(?:i will|i'll|i can|i should)", re.IGNORECASE),
    re.compile(r"(?:(\w+)\s+will)", re.IGNORECASE),
    re.compile(r"(?:(\w+)\s+should)", re.IGNORECASE),
    re.compile(r"(?:(\w+)\s+needs to)", re.IGNORECASE),
    re.compile(r"(?:assigned to\s+(\w+))", re.IGNORECASE),
    re.compile(r"(?:(\w+)\s+is responsible)", re.IGNORECASE),
    re.compile(r"(?:(\w+)\s+will handle)", re.IGNORECASE),
]

DEADLINE_PATTERNS: List[re.Pattern] = [
    re.compile(r"(?:by|before|until)\s+(\w+\s+\d+)", re.IGNORECASE),
    re.compile(r"(?:due|deadline)\s+(?:on|by)\s+(\w+\s+\d+)", re.IGNORECASE),
    re.compile(r"(?:next\s+)(\w+day|week|month)", re.IGNORECASE),
    re.compile(r"(?:this\s+)(\w+day|week|month)", re.IGNORECASE),
    re.compile(r"(?:in\s+)(\d+)\s+(?:days?|weeks?|months?)", re.IGNORECASE),
]

RELATIVE_OFFSET_PATTERN = re.compile(r"in\s+(\d+)\s+(days?|weeks?|months?)", re.IGNORECASE)

SELF_REFERENCE_PREFIX = re.compile(r"^(?:i will|i'll|i can|i should|we will|we'll|we should)", re.IGNORECASE)
MODAL_PREFIX = re.compile(r"^(?:need to|should|must|have to)", re.IGNORECASE)

SENTENCE_TERMINATORS = re.compile(r"[.!?]+")

URGENCY_WORDS: List[str] = ["urgent", "asap", "immediately"]
IMPORTANCE_WORDS: List[str] = ["important", "priority", "soon"]

WEAK_VERBS: List[str] = [
    "look into", "check out", "think about", "consider", "explore",
    "investigate", "review", "analyze", "examine", "study",
]

STRONG_ALTERNATIVES: Dict[str, List[str]] = {
    "look into": ["investigate", "research", "analyze", "examine"],
    "check out": ["review", "evaluate", "assess", "audit"],
    "think about": ["decide", "determine", "resolve", "conclude"],
    "consider": ["evaluate", "assess", "decide", "choose"],
    "explore": ["investigate", "research", "analyze", "examine"],
    "investigate": ["research", "analyze", "examine", "audit"],
    "review": ["evaluate", "assess", "audit", "analyze"],
    "analyze": ["examine", "evaluate", "assess", "audit"],
    "examine": ["analyze", "evaluate", "assess", "audit"],
    "study": ["research", "analyze", "examine", "investigate"],
}

DEADLINE_INDICATORS: List[str] = [
    "by", "before", "until", "due", "deadline", "target",
    "next week", "tomorrow", "friday", "monday", "end of",
    "asap", "urgent", "immediately",
]

SUCCESS_CRITERIA_INDICATORS: List[str] = [
    "complete", "finished", "done", "delivered", "launched",
    "working", "functional", "tested", "approved", "validated",
    "successful", "effective", "meets requirements",
]

RESOURCE_INDICATORS: List[str] = [
    "budget", "funding", "team", "staff", "tools", "software",
    "equipment", "materials", "support", "help", "assistance",
    "resources", "time", "personnel", "technology",
]

VAGUE_SCOPE_PHRASES: List[str] = [
    "some of", "a few", "several", "various", "multiple",
    "all the", "everything", "anything", "whatever",
]

CLOSING_PHRASES: List[str] = [
    "wrapping up", "finishing", "concluding", "ending",
    "last thing", "final point", "before we go", "closing",
]


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """True when any phrase occurs in the (already lower-cased) text."""
    return any(phrase in text for phrase in phrases)


def matching_phrases(text: str, phrases: Iterable[str]) -> List[str]:
    """All phrases that occur in the (already lower-cased) text, in table order."""
    return [phrase for phrase in phrases if phrase in text]


def strong_alternatives(weak_verb: str) -> List[str]:
    return list(STRONG_ALTERNATIVES.get(weak_verb, []))
