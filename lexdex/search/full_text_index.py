"""
Full-text index over dictionary entries using SQLite FTS5.

Each FullTextIndex wraps one FTS5 table keyed by permalink. Documents are
appended once while the service loads; afterwards the index only answers
queries, returning permalinks in BM25 relevance order.
"""

import sqlite3
from typing import Iterable, List, Tuple

from ..database import DatabaseManager
from ..database.schema import validate_table_name
from .query_parser import QueryParser


class FullTextIndex:
    """
    One tokenized search structure over ``title + " " + body`` texts.

    add_many() takes a cursor so that all indexes of a load are filled
    inside a single transaction. Search opens its own connection.
    """

    def __init__(self, db: DatabaseManager, table: str, parser: QueryParser = None):
        """
        Initialize the index wrapper.

        Args:
            db: Database holding the FTS5 table.
            table: Name of the FTS5 table, created by create_index_tables().
            parser: Query parser; defaults to exact-term matching.
        """
        self.db = db
        self.table = validate_table_name(table)
        self.parser = parser or QueryParser()

    def add_many(self, cursor: sqlite3.Cursor, documents: Iterable[Tuple[str, str]]) -> int:
        """
        Append (permalink, text) pairs.

        Returns:
            Number of documents added.
        """
        documents = list(documents)
        cursor.executemany(
            f"INSERT INTO {self.table} (permalink, content) VALUES (?, ?)",
            documents
        )
        return len(documents)

    def search(self, query: str, limit: int) -> List[str]:
        """
        Find permalinks of documents matching every query term.

        Args:
            query: Raw user query.
            limit: Maximum number of permalinks.

        Returns:
            Permalinks, most relevant first.

        Raises:
            sqlite3.Error: If the index cannot be queried.
        """
        expression = self.parser.parse(query)

        if not expression or limit <= 0:
            return []

        sql = f"""
            SELECT permalink
            FROM {self.table}
            WHERE {self.table} MATCH ?
            ORDER BY rank
            LIMIT ?
        """

        with self.db.connection() as conn:
            rows = conn.execute(sql, (expression, limit)).fetchall()

        return [row["permalink"] for row in rows]

    def __repr__(self) -> str:
        return f"FullTextIndex({self.table!r})"
