"""
SQLite database integration.

This module provides the ``Database`` handle shared by all requests.
It is opened once when the application starts (``connect``), which
also applies the schema and pings the engine, and closed once at
shutdown (``close``).  Repositories obtain a cursor through the
``cursor`` context manager, which commits on success and rolls back
when the statement fails.

The schema is kept as an ordered list of migrations, each applied at
most once and recorded in the ``migrations`` table.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from .exceptions import DatabaseStartupError, StorageError


MIGRATIONS: List[Tuple[int, str]] = [
    # Migration 1: users table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            dob TEXT NOT NULL
        );
        """,
    ),
]

_SQLITE_URL_PREFIXES = ("sqlite:///", "sqlite://")


def resolve_database_path(database_url: str, base_dir: Optional[Path] = None) -> str:
    """Turn ``DATABASE_URL`` into a path ``sqlite3.connect`` understands.

    ``sqlite:///relative.db`` and ``sqlite:////abs/path.db`` URLs are
    reduced to their path component; a bare ``sqlite://`` and
    ``:memory:`` both mean an in-memory database.
    Relative paths are resolved against ``base_dir`` which defaults to
    the project root.
    """
    path = database_url
    for prefix in _SQLITE_URL_PREFIXES:
        if path.startswith(prefix):
            path = path[len(prefix):] or ":memory:"
            break
    if path == ":memory:" or os.path.isabs(path):
        return path
    if base_dir is None:
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / path).resolve())


class Database:
    """Process wide handle on the SQLite database."""

    def __init__(self, database_url: str, logger: Optional[logging.Logger] = None) -> None:
        self.path = resolve_database_path(database_url)
        self._logger = logger or logging.getLogger("user_api.db")
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def connect(self) -> None:
        """Open the connection, apply migrations and ping the engine.

        Raises ``DatabaseStartupError`` when any of these steps fails;
        the application treats that as fatal.
        """
        if self._conn is not None:
            return
        try:
            # All statements run on the event loop thread, but the
            # connection is created during lifespan startup which may
            # run elsewhere.
            conn = sqlite3.connect(self.path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            self._conn = conn
            self.migrate()
            self.ping()
        except (sqlite3.Error, StorageError) as exc:
            self.close()
            raise DatabaseStartupError(f"Unable to open database at {self.path}: {exc}") from exc
        self._logger.info("Successfully connected to database", extra={"database": self.path})

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        self._logger.info("Database connection closed")

    def ping(self) -> None:
        with self.cursor() as cursor:
            cursor.execute("SELECT 1")

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("Database is not connected")
        return self._conn

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on exit, roll back if the block raised."""
        conn = self.connection
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            cursor.close()

    def migrate(self) -> None:
        """Apply pending migrations from ``MIGRATIONS`` in order."""
        with self.cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.execute(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
                    self._logger.debug("Applied migration %s", version)
