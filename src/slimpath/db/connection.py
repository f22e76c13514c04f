"""Database connection management using raw sqlite3."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from slimpath.db.schema import KNOWN_TABLES, get_schema_sql


class DatabaseConnection:
    """Manages SQLite database connections."""

    def __init__(self, db_path: Path):
        """Initialize database connection manager.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Create parent directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Context manager for database connections.

        Yields:
            sqlite3.Connection with Row factory and foreign keys enabled

        Example:
            with db.get_connection() as conn:
                record = TrackingQueries.get_latest(conn, user_id)
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize_schema(self) -> None:
        """Create all tables if they don't exist."""
        with self.get_connection() as conn:
            conn.executescript(get_schema_sql())

    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        query = """
            SELECT name FROM sqlite_master
            WHERE type='table' AND name=?
        """
        with self.get_connection() as conn:
            cursor = conn.execute(query, (table_name,))
            return cursor.fetchone() is not None

    def get_table_count(self, table_name: str) -> int:
        """Get the number of rows in a table.

        Args:
            table_name: One of the tables created by the schema

        Returns:
            Row count, or 0 if the table has not been created yet
        """
        if table_name not in KNOWN_TABLES:
            raise ValueError(f"Unknown table: {table_name}")
        if not self.table_exists(table_name):
            return 0
        with self.get_connection() as conn:
            cursor = conn.execute(f"SELECT COUNT(*) FROM {table_name}")
            result = cursor.fetchone()
            return result[0] if result else 0


# Global database instance (lazy loaded)
_db: Optional[DatabaseConnection] = None


def get_db() -> DatabaseConnection:
    """Get the global database instance.

    Lazily initializes the database connection using settings.
    """
    global _db
    if _db is None:
        from slimpath.config import get_settings

        settings = get_settings()
        _db = DatabaseConnection(settings.database.path)
    return _db


def set_db(db: Optional[DatabaseConnection]) -> None:
    """Set the global database instance.

    Useful for testing with a custom database. Passing None resets to the
    settings-derived default on next use.
    """
    global _db
    _db = db
