"""
Database module for the SQLite FTS5 full-text indexes.

Provides connection management and the index table schema.
"""

from .connection import DatabaseManager
from .schema import (
    USC_INDEX,
    BLD_INDEX,
    COMBINED_INDEX,
    INDEX_TABLES,
    create_index_tables
)

__all__ = [
    "DatabaseManager",
    "USC_INDEX",
    "BLD_INDEX",
    "COMBINED_INDEX",
    "INDEX_TABLES",
    "create_index_tables"
]
