"""
Database schema definitions for the full-text indexes.

Each index is an FTS5 virtual table with an unindexed permalink column
and an indexed content column holding the headword followed by its
definition.
"""

import re
import sqlite3

from ..core import get_config, get_logger, DatabaseError

logger = get_logger(__name__)

USC_INDEX = "usc_fts"
BLD_INDEX = "bld_fts"
COMBINED_INDEX = "combined_fts"

INDEX_TABLES = (USC_INDEX, BLD_INDEX, COMBINED_INDEX)

_TABLE_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")


def validate_table_name(table: str) -> str:
    """Reject anything that is not a plain lowercase SQL identifier."""
    if not _TABLE_NAME.match(table):
        raise DatabaseError(f"Invalid index table name: {table!r}")
    return table


def get_fts_table_sql(table: str, tokenizer: str = None) -> str:
    """Generate FTS5 table creation SQL with the configured tokenizer."""
    if tokenizer is None:
        tokenizer = get_config().search.tokenizer

    return f"""
    CREATE VIRTUAL TABLE {validate_table_name(table)} USING fts5(
        permalink UNINDEXED,
        content,
        tokenize='{tokenizer}'
    )
    """


def create_index_tables(cursor: sqlite3.Cursor, tokenizer: str = None) -> None:
    """
    Drop and recreate all index tables on the given cursor.

    Intended to run inside DatabaseManager.transaction() so a failed
    load leaves no tables behind.

    Raises:
        DatabaseError: If FTS5 is unavailable or the tokenizer is invalid.
    """
    for table in INDEX_TABLES:
        cursor.execute(f"DROP TABLE IF EXISTS {validate_table_name(table)}")

        try:
            cursor.execute(get_fts_table_sql(table, tokenizer))
        except sqlite3.OperationalError as e:
            raise DatabaseError(
                f"Failed to create FTS table {table}: {e}",
                {"table": table, "tokenizer": tokenizer}
            )

    logger.debug(f"Created index tables: {', '.join(INDEX_TABLES)}")
