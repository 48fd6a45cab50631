"""
Calendar event persistence.

Update and delete by id are idempotent: an id with no matching row is a
silent no-op, never an error.
"""

import logging

from desk_calendar.db import CalendarDatabase
from desk_calendar.models import CalendarEvent
from desk_calendar.models import ValidationError

logger = logging.getLogger(__name__)


def _require_title(title: str) -> None:
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Event title must not be empty")


def _row_to_event(row) -> CalendarEvent:
    return CalendarEvent(id=row["id"], title=row["title"], date=row["date"])


class EventStore:
    """CRUD over the calendar_events table."""

    def __init__(self, db: CalendarDatabase):
        self.db = db

    def list_events(self, start: str | None = None, end: str | None = None) -> list[CalendarEvent]:
        """Return events ordered by date.

        With both ``start`` and ``end`` only events whose date lies in
        ``[start, end]`` are returned. Bounds are compared as strings, so
        ``"2024-03-31T09:00"`` falls after an ``end`` of ``"2024-03-31"``.
        """
        sql = "SELECT id, title, date FROM calendar_events"
        params: tuple = ()
        if start and end:
            sql += " WHERE date >= ? AND date <= ?"
            params = (start, end)
        sql += " ORDER BY date ASC, id ASC"
        return [_row_to_event(row) for row in self.db.query(sql, params)]

    def get_event(self, event_id: int) -> CalendarEvent | None:
        rows = self.db.query(
            "SELECT id, title, date FROM calendar_events WHERE id = ?", (event_id,)
        )
        return _row_to_event(rows[0]) if rows else None

    def add_event(self, title: str, date: str) -> int:
        """Insert a new event and return its id."""
        _require_title(title)
        cursor = self.db.execute(
            "INSERT INTO calendar_events (title, date) VALUES (?, ?)", (title, date)
        )
        logger.debug("Added event %d: %s on %s", cursor.lastrowid, title, date)
        return cursor.lastrowid

    def update_event(self, event: CalendarEvent) -> None:
        """Replace title and date of an existing event."""
        if not event.id:
            raise ValidationError("Event ID is required for update")
        _require_title(event.title)
        cursor = self.db.execute(
            "UPDATE calendar_events SET title = ?, date = ? WHERE id = ?",
            (event.title, event.date, event.id),
        )
        logger.debug("Updated event %d (%d row(s))", event.id, cursor.rowcount)

    def move_event(self, event_id: int, date: str) -> None:
        """Change only the date of an event (drag and drop in the grid)."""
        if not event_id:
            raise ValidationError("Event ID is required for move")
        cursor = self.db.execute(
            "UPDATE calendar_events SET date = ? WHERE id = ?", (date, event_id)
        )
        logger.debug("Moved event %d to %s (%d row(s))", event_id, date, cursor.rowcount)

    def delete_event(self, event_id: int) -> None:
        cursor = self.db.execute("DELETE FROM calendar_events WHERE id = ?", (event_id,))
        logger.debug("Deleted event %d (%d row(s))", event_id, cursor.rowcount)
