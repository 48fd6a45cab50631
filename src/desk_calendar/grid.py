"""
Month-view helpers: visible weeks and per-day event buckets.
"""

import calendar
import logging
from datetime import date

from desk_calendar.models import CalendarEvent

logger = logging.getLogger(__name__)

SUNDAY = calendar.SUNDAY


def month_weeks(year: int, month: int, firstweekday: int = SUNDAY) -> list[list[date]]:
    """Return the weeks shown for a month, padded with adjacent-month days."""
    cal = calendar.Calendar(firstweekday=firstweekday)
    return cal.monthdatescalendar(year, month)


def visible_range(weeks: list[list[date]]) -> tuple[str, str]:
    """ISO bounds covering the grid, suitable for EventStore.list_events().

    The end bound is padded so that date-times on the last visible day
    still compare inside the range.
    """
    return weeks[0][0].isoformat(), weeks[-1][-1].isoformat() + "T23:59:59"


def events_by_day(events: list[CalendarEvent]) -> dict[date, list[CalendarEvent]]:
    """Group events by the calendar day of their ISO date prefix."""
    buckets: dict[date, list[CalendarEvent]] = {}
    for event in events:
        try:
            day = date.fromisoformat(event.date[:10])
        except ValueError:
            logger.warning("Skipping event %s with unparseable date %r", event.id, event.date)
            continue
        buckets.setdefault(day, []).append(event)
    return buckets


def day_label(day: date) -> str:
    """Day number without leading zero."""
    return str(day.day)


def weekday_names(firstweekday: int = SUNDAY) -> list[str]:
    return [calendar.day_abbr[(firstweekday + i) % 7] for i in range(7)]
