"""
Search module for dictionary lookups.

Provides the SQLite FTS5 full-text index, query parsing, ranking and
deduplication, and the indexed and linear-scan search strategies.
"""

from .models import SearchResult, SearchScope, SearchStrategy
from .query_parser import QueryParser
from .full_text_index import FullTextIndex
from .ranking import dedupe_by_title, merge_candidates, rank_exact_first, to_results
from .strategies import IndexedSearch, LinearScanSearch

__all__ = [
    "SearchResult",
    "SearchScope",
    "SearchStrategy",
    "QueryParser",
    "FullTextIndex",
    "dedupe_by_title",
    "merge_candidates",
    "rank_exact_first",
    "to_results",
    "IndexedSearch",
    "LinearScanSearch"
]
