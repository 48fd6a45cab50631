"""
Pure data models — no sqlite imports.
"""

from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

DB_NAME = "calendar.db"
DEFAULT_DB = Path.home() / ".local/share/desk-calendar" / DB_NAME
DEFAULT_CONFIG = Path.home() / ".config/desk-calendar.conf"

# CSS custom properties consumed by the calendar widget, in stylesheet order.
THEME_CONFIG_KEYS = (
    "--other-month-day-title-color",
    "--day-border-color",
    "--other-month-day-background-color",
    "--month-color",
    "--year-color",
    "--day-title-color",
    "--week-title-color",
    "--month-change-color",
    "--event-background-color",
    "--event-text-color",
    "--blur-background-color",
    "--blur",
)


class CalendarStoreError(Exception):
    """Base exception for calendar store errors."""

    pass


class ValidationError(CalendarStoreError):
    """Input rejected before touching the database."""

    pass


class ConstraintError(CalendarStoreError):
    """A schema constraint (unique theme name) was violated."""

    pass


class StorageError(CalendarStoreError):
    """The database file could not be opened, read or written."""

    pass


@dataclass
class CalendarEvent:
    """A single calendar entry."""

    title: str
    date: str  # ISO-8601 date or date-time, compared lexically
    id: int | None = None


@dataclass
class CustomTheme:
    """A named theme; config maps every THEME_CONFIG_KEYS entry to a value."""

    name: str
    config: dict[str, str] = field(default_factory=dict)
    id: int | None = None


@dataclass
class WindowState:
    """Last-known window geometry."""

    x: int
    y: int
    width: int
    height: int
    monitor_name: str | None = None


DEFAULT_WINDOW_STATE = WindowState(x=0, y=0, width=880, height=1000)
