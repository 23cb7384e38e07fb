"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running a unit of work inside a write
transaction (``transaction``) and applying migrations on application
start (``init_db``).

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            user_type TEXT NOT NULL CHECK (user_type IN ('volunteer', 'organization')),
            full_name TEXT,
            nik TEXT,
            organization_name TEXT,
            npwp TEXT,
            phone_number TEXT,
            profile_image_path TEXT,
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
        );

        -- The list of registered volunteers is not stored on the event; it
        -- is read from the participations table.  current_volunteer_count
        -- is only ever changed together with a participation insert.
        CREATE TABLE IF NOT EXISTS events (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            image_url TEXT,
            organizer_id TEXT NOT NULL,
            organizer_name TEXT,
            event_start_time TEXT,
            event_end_time TEXT,
            target_volunteer_count INTEGER NOT NULL DEFAULT 0,
            current_volunteer_count INTEGER NOT NULL DEFAULT 0,
            participation_fee_idr INTEGER NOT NULL DEFAULT 0,
            category TEXT NOT NULL,
            is_active INTEGER NOT NULL DEFAULT 1,
            location_country TEXT,
            location_province TEXT,
            location_city TEXT,
            location_district TEXT,
            location_village TEXT,
            location_rt_rw TEXT,
            location_latitude REAL,
            location_longitude REAL,
            created_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            FOREIGN KEY(organizer_id) REFERENCES users(id),
            CHECK (current_volunteer_count >= 0),
            CHECK (current_volunteer_count <= target_volunteer_count)
        );

        CREATE TABLE IF NOT EXISTS participations (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            event_id TEXT NOT NULL,
            donation_amount REAL NOT NULL DEFAULT 0,
            registration_date TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            FOREIGN KEY(event_id) REFERENCES events(id)
        );

        CREATE TABLE IF NOT EXISTS articles (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL,
            description TEXT,
            image_url TEXT,
            category TEXT,
            author_name TEXT,
            published_date TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now')),
            is_featured INTEGER NOT NULL DEFAULT 0,
            views INTEGER NOT NULL DEFAULT 0,
            is_active INTEGER NOT NULL DEFAULT 1
        );
        """,
    ),
    # Migration 2: one registration per user and event, plus lookup indices
    (
        2,
        """
        CREATE UNIQUE INDEX IF NOT EXISTS uq_participations_user_event
            ON participations(user_id, event_id);
        CREATE INDEX IF NOT EXISTS idx_participations_event_id ON participations(event_id);
        CREATE INDEX IF NOT EXISTS idx_events_organizer_id ON events(organizer_id);
        CREATE INDEX IF NOT EXISTS idx_articles_category ON articles(category);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # volunteer_api/
    return str((base_dir / db_url).resolve())


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  ``settings.db_timeout`` bounds how long the connection
    waits for another writer to release the database lock.
    """
    conn = sqlite3.connect(get_database_path(), timeout=settings.db_timeout)
    conn.row_factory = sqlite3.Row
    # Foreign keys are off by default in SQLite and must be enabled per connection.
    conn.execute("PRAGMA foreign_keys = ON")
    # Built-in LIKE and lower() only fold ASCII letters.
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


def like_pattern(term: str) -> str:
    """Build a ``LIKE ... ESCAPE '\\'`` pattern matching ``term`` as a substring.

    The term is case-folded, so compare it against ``casefold(column)``.
    """
    escaped = term.casefold().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def new_id(prefix: str) -> str:
    """Generate an opaque primary key such as ``event_3f9c…``."""
    return f"{prefix}_{uuid.uuid4().hex}"


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


@contextmanager
def transaction(immediate: bool = True) -> Iterator[sqlite3.Connection]:
    """Run a unit of work inside a single transaction.

    With ``immediate`` (the default) ``BEGIN IMMEDIATE`` acquires the
    database write lock before the first statement, so reads made
    inside the block cannot be invalidated by another writer before the
    block commits.  Pass ``immediate=False`` for read-only work that
    only needs a consistent snapshot across several queries.  The
    transaction is rolled back if the block raises.
    """
    conn = get_connection()
    try:
        conn.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    with get_cursor() as cursor:
        # WAL lets readers proceed while a registration holds the write lock.
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
