"""
Named theme persistence.

The style mapping is stored as a JSON blob in ``themes.config``; it is
encoded on write and decoded on read so callers only see dicts.
"""

import json
import logging

from desk_calendar.db import CalendarDatabase
from desk_calendar.models import THEME_CONFIG_KEYS
from desk_calendar.models import CustomTheme
from desk_calendar.models import StorageError
from desk_calendar.models import ValidationError

logger = logging.getLogger(__name__)


def theme_config_template() -> dict[str, str]:
    """Return a config with every key present and empty values."""
    return {key: "" for key in THEME_CONFIG_KEYS}


def validate_theme_config(config: dict) -> dict[str, str]:
    """Check that config has exactly the twelve style keys, all strings.

    Returns a copy ordered like THEME_CONFIG_KEYS.
    """
    if not isinstance(config, dict):
        raise ValidationError(f"Theme config must be a mapping, got {type(config).__name__}")
    missing = [key for key in THEME_CONFIG_KEYS if key not in config]
    unknown = sorted(set(config) - set(THEME_CONFIG_KEYS))
    if missing or unknown:
        parts = []
        if missing:
            parts.append(f"missing {', '.join(missing)}")
        if unknown:
            parts.append(f"unknown {', '.join(unknown)}")
        raise ValidationError(f"Invalid theme config: {'; '.join(parts)}")
    not_text = [key for key in THEME_CONFIG_KEYS if not isinstance(config[key], str)]
    if not_text:
        raise ValidationError(f"Theme values must be strings: {', '.join(not_text)}")
    return {key: config[key] for key in THEME_CONFIG_KEYS}


def _encode(config: dict) -> str:
    return json.dumps(validate_theme_config(config))


def _decode(blob: str) -> dict[str, str]:
    try:
        return json.loads(blob)
    except json.JSONDecodeError as e:
        raise StorageError(f"Corrupt theme config: {e}") from e


def _row_to_theme(row) -> CustomTheme:
    return CustomTheme(id=row["id"], name=row["name"], config=_decode(row["config"]))


class ThemeStore:
    """CRUD over the themes table."""

    def __init__(self, db: CalendarDatabase):
        self.db = db

    def list_themes(self) -> list[CustomTheme]:
        rows = self.db.query("SELECT id, name, config FROM themes ORDER BY id ASC")
        return [_row_to_theme(row) for row in rows]

    def get_theme_by_name(self, name: str) -> CustomTheme | None:
        rows = self.db.query("SELECT id, name, config FROM themes WHERE name = ?", (name,))
        return _row_to_theme(rows[0]) if rows else None

    def add_theme(self, name: str, config: dict) -> int:
        """Insert a theme; raises ConstraintError if the name is taken."""
        cursor = self.db.execute(
            "INSERT INTO themes (name, config) VALUES (?, ?)", (name, _encode(config))
        )
        logger.debug("Added theme %d: %s", cursor.lastrowid, name)
        return cursor.lastrowid

    def update_theme(self, theme: CustomTheme) -> None:
        if not theme.id:
            raise ValidationError("Theme ID is required for update")
        cursor = self.db.execute(
            "UPDATE themes SET name = ?, config = ? WHERE id = ?",
            (theme.name, _encode(theme.config), theme.id),
        )
        logger.debug("Updated theme %d (%d row(s))", theme.id, cursor.rowcount)

    def delete_theme(self, theme_id: int) -> None:
        cursor = self.db.execute("DELETE FROM themes WHERE id = ?", (theme_id,))
        logger.debug("Deleted theme %d (%d row(s))", theme_id, cursor.rowcount)
