"""
Composition root: one database handle shared by the three stores.
"""

from pathlib import Path

from desk_calendar.db import CalendarDatabase
from desk_calendar.events import EventStore
from desk_calendar.themes import ThemeStore
from desk_calendar.window_state import WindowStateStore


class DeskCalendar:
    """Wires the stores to a single lazily-opened CalendarDatabase."""

    def __init__(self, db_path: Path):
        self.db = CalendarDatabase(db_path)
        self.events = EventStore(self.db)
        self.themes = ThemeStore(self.db)
        self.window = WindowStateStore(self.db)

    def __enter__(self):
        self.db.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.db.close()
