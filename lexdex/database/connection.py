"""
SQLite connection management for the full-text indexes.

Every operation opens its own connection, so concurrent readers never
share a connection object. Without a configured database path the indexes
live in a uniquely named shared-cache in-memory database that stays alive
as long as the manager holds its anchor connection.
"""

import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from ..core import get_config, get_logger, DatabaseError

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages SQLite connections to the index database.

    Provides context managers for read connections and for write
    transactions that commit on success and roll back on any error.
    """

    def __init__(self, db_path: Path = None, in_memory: bool = None):
        """
        Initialize database manager.

        Args:
            db_path: Path to SQLite database file. Defaults to config value.
            in_memory: Force an in-memory database. Defaults to True when
                       no database path is configured.
        """
        if db_path is None and in_memory is None:
            db_path = get_config().paths.database_path

        self.in_memory = in_memory if in_memory is not None else db_path is None
        self._anchor: Optional[sqlite3.Connection] = None

        if self.in_memory:
            self.db_path = None
            self._target = f"file:lexdex-{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._anchor = self._create_connection()
        else:
            self.db_path = Path(db_path)
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._target = str(self.db_path)

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with the manager's settings."""
        try:
            conn = sqlite3.connect(
                self._target,
                uri=self.in_memory,
                check_same_thread=False,
                timeout=30.0
            )

            conn.row_factory = sqlite3.Row

            if not self.in_memory:
                conn.execute("PRAGMA journal_mode=WAL")
                conn.execute("PRAGMA synchronous=NORMAL")

            return conn

        except sqlite3.Error as e:
            raise DatabaseError(
                f"Failed to connect to database: {e}",
                {"target": self._target}
            )

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Context manager for read connections.

        Yields:
            SQLite connection with Row factory enabled.
        """
        conn = self._create_connection()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Cursor, None, None]:
        """
        Context manager for an explicit write transaction.

        DDL statements participate in the transaction, so a failure rolls
        back table creation as well as inserted rows.

        Yields:
            SQLite cursor inside an open transaction.
        """
        conn = self._create_connection()
        cursor = conn.cursor()

        try:
            cursor.execute("BEGIN")
            yield cursor
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            cursor.close()
            conn.close()

    @property
    def is_open(self) -> bool:
        """Whether the database is still reachable."""
        return not self.in_memory or self._anchor is not None

    def close(self) -> None:
        """Release the anchor connection, discarding an in-memory database."""
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None
            logger.debug("Closed in-memory index database")
