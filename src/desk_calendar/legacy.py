"""
One-shot import of the old JSON event file into the database.

The JSON file held ``[{"title": ..., "start": ..., "end": ...}]``; only
title and start survive the import.
"""

import json
import logging
from pathlib import Path

from desk_calendar.events import EventStore
from desk_calendar.models import CalendarEvent
from desk_calendar.models import StorageError

logger = logging.getLogger(__name__)

LEGACY_FILE_NAME = "calendar.json"


def load_legacy_events(path: Path) -> list[CalendarEvent]:
    """Parse the legacy file. A missing file means no events."""
    if not path.exists():
        return []
    try:
        entries = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise StorageError(f"Cannot read legacy events from {path}: {e}") from e
    if not isinstance(entries, list):
        raise StorageError(f"{path}: expected a JSON list of events")

    events = []
    for i, entry in enumerate(entries):
        title = entry.get("title") if isinstance(entry, dict) else None
        start = entry.get("start") if isinstance(entry, dict) else None
        if not title or not str(title).strip() or not start:
            logger.warning("Skipping legacy entry #%d without title/start: %r", i, entry)
            continue
        events.append(CalendarEvent(title=str(title).strip(), date=str(start)))
    return events


def import_legacy_events(store: EventStore, path: Path) -> int:
    """Add every legacy event to ``store``; returns how many were imported."""
    events = load_legacy_events(path)
    for event in events:
        store.add_event(event.title, event.date)
    logger.info("Imported %d event(s) from %s", len(events), path)
    return len(events)
