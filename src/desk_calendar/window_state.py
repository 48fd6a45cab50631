"""
Last-known window geometry, kept as a single row with id = 1.
"""

import dataclasses
import logging

from desk_calendar.db import CalendarDatabase
from desk_calendar.models import DEFAULT_WINDOW_STATE
from desk_calendar.models import WindowState

logger = logging.getLogger(__name__)


class WindowStateStore:
    """Get/replace access to the window_state singleton."""

    def __init__(self, db: CalendarDatabase):
        self.db = db

    def get_window_state(self) -> WindowState | None:
        """Return the saved state, or None if nothing was ever saved."""
        rows = self.db.query(
            "SELECT x, y, width, height, monitor_name FROM window_state WHERE id = 1"
        )
        if not rows:
            return None
        row = rows[0]
        return WindowState(
            x=row["x"],
            y=row["y"],
            width=row["width"],
            height=row["height"],
            monitor_name=row["monitor_name"],
        )

    def get_or_default(self) -> WindowState:
        saved = self.get_window_state()
        return saved if saved is not None else dataclasses.replace(DEFAULT_WINDOW_STATE)

    def save_window_state(self, state: WindowState) -> None:
        """Replace the stored geometry with ``state`` (all fields)."""
        self.db.execute(
            "INSERT OR REPLACE INTO window_state (id, x, y, width, height, monitor_name) "
            "VALUES (1, ?, ?, ?, ?, ?)",
            (state.x, state.y, state.width, state.height, state.monitor_name),
        )
        logger.debug(
            "Saved window state %dx%d+%d+%d on %s",
            state.width,
            state.height,
            state.x,
            state.y,
            state.monitor_name or "(unknown monitor)",
        )
