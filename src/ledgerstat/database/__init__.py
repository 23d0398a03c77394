"""Database layer for ledgerstat application."""

from ledgerstat.database.base import Database
from ledgerstat.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
