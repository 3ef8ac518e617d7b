"""Database layer for gaurakshak application."""

from gaurakshak.database.base import Database
from gaurakshak.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
