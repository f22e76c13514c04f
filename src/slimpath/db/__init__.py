"""SQLite storage for users and tracking records."""

from slimpath.db.connection import DatabaseConnection, get_db, set_db

__all__ = ["DatabaseConnection", "get_db", "set_db"]
