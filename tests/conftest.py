"""
Shared pytest fixtures and theme helpers.
"""

import pytest

from desk_calendar.db import CalendarDatabase
from desk_calendar.events import EventStore
from desk_calendar.models import THEME_CONFIG_KEYS
from desk_calendar.themes import ThemeStore
from desk_calendar.window_state import WindowStateStore


def make_theme_config(accent: str = "#3366ff") -> dict[str, str]:
    """Return a complete twelve-key theme config; ``--blur`` gets a pixel value."""
    config = {key: accent for key in THEME_CONFIG_KEYS}
    config["--blur"] = "8px"
    config["--blur-background-color"] = "rgba(0, 0, 0, 0.25)"
    return config


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "calendar.db"


@pytest.fixture
def database(db_path):
    with CalendarDatabase(db_path) as db:
        yield db


@pytest.fixture
def event_store(database):
    return EventStore(database)


@pytest.fixture
def theme_store(database):
    return ThemeStore(database)


@pytest.fixture
def window_store(database):
    return WindowStateStore(database)
