"""Database factory functions for creating database instances."""

from typing import Optional

from ledgerstat.config import get_settings
from ledgerstat.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(database_url: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a database instance.

    Args:
        database_url: SQLAlchemy URL. If None, falls back to the
            LEDGERSTAT_DATABASE_URL setting.

    Returns:
        SQLAlchemyDatabase instance

    Raises:
        ValueError: If no URL is given or configured
    """
    if database_url is None:
        database_url = get_settings().database_url
    if not database_url:
        raise ValueError("No database URL given and LEDGERSTAT_DATABASE_URL is not set")
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: str) -> SQLAlchemyDatabase:
    """Create a SQLite database instance for a file path."""
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
