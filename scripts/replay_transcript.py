#!/usr/bin/env python3
"""
Replay a recorded transcript through a MeetingAssistant and save a JSON report.

Each non-blank line of the input is "Speaker: text". Lines without a colon are
attributed to "Unknown".
"""

import argparse
import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path
from typing import List

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger

from meeting_assistant.assistant import MeetingAssistant
from meeting_assistant.config import get_config
from meeting_assistant.models import AgendaItem, Attendee, TranscriptEntry

# Configure logging
logger.remove()
logger.add(sys.stderr, level="INFO", format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>")


def parse_transcript(text: str) -> List[TranscriptEntry]:
    entries = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        speaker, sep, content = line.partition(":")
        if not sep:
            speaker, content = "Unknown", line
        entries.append(TranscriptEntry(speaker=speaker.strip(), text=content.strip()))
    return entries


async def replay(args: argparse.Namespace) -> dict:
    cfg = get_config()
    if args.no_insights:
        cfg.insights.enabled = False

    agenda = [AgendaItem(title=title) for title in args.agenda]
    attendees = [Attendee(name=name) for name in args.attendees]
    assistant = MeetingAssistant(
        f"replay_{datetime.now():%Y%m%d_%H%M%S}",
        args.title,
        attendees,
        agenda,
        config=cfg,
    )

    entries = parse_transcript(Path(args.transcript).read_text(encoding="utf-8"))
    logger.info(f"Replaying {len(entries)} entries from {args.transcript}")

    per_entry = []
    for entry in entries:
        result = await assistant.process_transcript(entry)
        per_entry.append(
            {
                "line": entry.line,
                "suggestions": [s.title for s in result.suggestions],
                "failed_analyzers": result.failed_analyzers,
            }
        )

    assistant.end_meeting()
    report = {
        "entries": per_entry,
        "state": assistant.get_meeting_state().model_dump(mode="json"),
    }
    if args.summary:
        summary = await assistant.generate_meeting_summary()
        report["summary"] = summary.model_dump(mode="json")
    return report


def main():
    parser = argparse.ArgumentParser(description="Replay a transcript through the meeting assistant")
    parser.add_argument("transcript", help="Path to a 'Speaker: text' transcript file")
    parser.add_argument("--title", default="Replayed Meeting")
    parser.add_argument("--agenda", action="append", default=[], help="Agenda item title (repeatable)")
    parser.add_argument("--attendees", action="append", default=[], help="Attendee name (repeatable)")
    parser.add_argument("--output", default="output/replay_report.json")
    parser.add_argument("--no-insights", action="store_true", help="Skip AI insights")
    parser.add_argument("--summary", action="store_true", help="Generate a meeting summary at the end")
    args = parser.parse_args()

    report = asyncio.run(replay(args))

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)

    suggestion_count = sum(len(e["suggestions"]) for e in report["entries"])
    logger.info(f"Wrote {output_path} ({suggestion_count} suggestions, {len(report['state']['action_items'])} action items)")


if __name__ == "__main__":
    main()
