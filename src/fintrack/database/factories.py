"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from fintrack.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "FINTRACK_DB_PATH"
DB_URL_ENV = "FINTRACK_DB_URL"

logger = logging.getLogger(__name__)


def default_database_path() -> Path:
    """Return ~/.fintrack/fintrack.db, creating the directory if needed."""
    db_dir = Path.home() / ".fintrack"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "fintrack.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, or ":memory:". If None,
            FINTRACK_DB_PATH is used, then ~/.fintrack/fintrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = database_path or os.environ.get(DB_PATH_ENV) or str(default_database_path())
    if path == ":memory:":
        return SQLAlchemyDatabase("sqlite://")
    logger.debug("Using SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")


def create_database(database_url: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a database from a SQLAlchemy URL.

    Falls back to FINTRACK_DB_URL, then to the SQLite file resolved by
    create_sqlite_database().
    """
    url = database_url or os.environ.get(DB_URL_ENV)
    if url is None:
        return create_sqlite_database()
    return SQLAlchemyDatabase(url)
