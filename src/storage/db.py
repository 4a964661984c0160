"""
Lightweight database wrapper for the applications store.

Handles:
- Database initialization
- Schema creation
- Connection management

SQLite by default (a file path); PostgreSQL when given a postgres:// URL.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator
import logging

import psycopg2


logger = logging.getLogger(__name__)

POSTGRES_SCHEMES = ("postgres://", "postgresql://")


class Database:
    """
    Database wrapper for benefit applications.

    Usage:
        db = Database("applications.db")
        with db.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM applications")
    """

    def __init__(self, url: str = "applications.db"):
        """
        Initialize database.

        Args:
            url: SQLite file path, or a PostgreSQL connection URL
        """
        self.url = url
        self.is_postgres = url.startswith(POSTGRES_SCHEMES)

        if not self.is_postgres:
            # Ensure parent directory exists
            Path(self.url).parent.mkdir(parents=True, exist_ok=True)

        # Initialize schema
        self._init_db()

        logger.info(f"Database initialized: {'postgres' if self.is_postgres else self.url}")

    @property
    def placeholder(self) -> str:
        """Parameter marker for the active driver."""
        return "%s" if self.is_postgres else "?"

    def _init_db(self):
        """Create database schema if it doesn't exist."""
        id_column = "SERIAL PRIMARY KEY" if self.is_postgres else "INTEGER PRIMARY KEY AUTOINCREMENT"

        with self.get_connection() as conn:
            cursor = conn.cursor()

            # Applications table
            cursor.execute(
                f"""
                CREATE TABLE IF NOT EXISTS applications (
                    id {id_column},
                    "benefitId" TEXT NOT NULL,
                    status TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP
                );
                """
            )

            # Create index on benefitId for grouped counts
            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_applications_benefit_id
                ON applications("benefitId");
                """
            )

            logger.debug("Database schema created/verified")

    @contextmanager
    def get_connection(self) -> Iterator:
        """
        Get a database connection context manager.

        Automatically commits on success, rolls back on error, closes on exit.

        Yields:
            sqlite3.Connection or psycopg2 connection
        """
        if self.is_postgres:
            conn = psycopg2.connect(self.url)
        else:
            conn = sqlite3.connect(self.url)
            conn.row_factory = sqlite3.Row  # Enable column access by name

        try:
            yield conn
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise
        finally:
            conn.close()
