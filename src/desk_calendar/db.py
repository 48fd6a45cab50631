"""
SQLite storage for events, themes and window state.
"""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from desk_calendar.models import ConstraintError
from desk_calendar.models import StorageError

logger = logging.getLogger(__name__)

TABLES = ("calendar_events", "themes", "window_state")


@contextmanager
def translate_errors():
    """Re-raise sqlite3 errors as store errors."""
    try:
        yield
    except sqlite3.IntegrityError as e:
        raise ConstraintError(str(e)) from e
    except sqlite3.Error as e:
        raise StorageError(str(e)) from e


class CalendarDatabase:
    """Owns the single SQLite connection shared by every store."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self.conn: sqlite3.Connection | None = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def open(self) -> "CalendarDatabase":
        """Open the database file and create missing tables.

        Safe to call repeatedly: once connected, the same handle (and
        connection) is returned untouched.
        """
        if self.conn is not None:
            return self
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create {self.db_path.parent}: {e}") from e
        logger.debug("Opening calendar database %s", self.db_path)
        with translate_errors():
            conn = sqlite3.connect(str(self.db_path))
            conn.row_factory = sqlite3.Row  # Enable column access by name
            try:
                self._init_schema(conn)
            except sqlite3.Error:
                conn.close()
                raise
        self.conn = conn
        return self

    @property
    def connection(self) -> sqlite3.Connection:
        """The live connection, opened on first access."""
        self.open()
        return self.conn

    @staticmethod
    def _init_schema(conn: sqlite3.Connection):
        """Create the three tables if they don't exist."""
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS calendar_events (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                date TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS themes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE,
                config TEXT NOT NULL
            );
            CREATE TABLE IF NOT EXISTS window_state (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                x INTEGER NOT NULL,
                y INTEGER NOT NULL,
                width INTEGER NOT NULL,
                height INTEGER NOT NULL,
                monitor_name TEXT
            );
        """)
        conn.commit()

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        """Run one write statement and commit it."""
        conn = self.connection
        with translate_errors():
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
        return cursor

    def query(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        """Run a read statement and return every row."""
        conn = self.connection
        with translate_errors():
            return conn.execute(sql, params).fetchall()

    def summary(self) -> dict[str, int]:
        """Row count per table."""
        return {
            table: self.query(f"SELECT COUNT(*) FROM {table}")[0][0]
            for table in TABLES
        }

    def close(self):
        """Close the database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
