"""
Search strategies producing ranked results from the loaded corpora.

Both strategies share one contract: ``search(query, limit)`` returns at
most ``limit`` deduplicated SearchResult objects. The indexed strategy
trusts the full-text index's relevance order; the linear scan ranks exact
headword matches first and the rest alphabetically.
"""

from typing import Iterable, List, Mapping, Sequence, Tuple

from ..core import get_logger
from ..corpus import CorpusStore, Entry
from ..utils import fold_case
from .full_text_index import FullTextIndex
from .models import SearchResult, SearchStrategy
from .ranking import dedupe_by_title, merge_candidates, rank_exact_first, to_results

logger = get_logger(__name__)


class IndexedSearch:
    """
    Ranked search through one or more full-text indexes.

    Each index is asked for ``limit * overfetch_factor`` permalinks so that
    deduplication still leaves enough results. Hits are resolved back to
    entries through the permalink map; unknown permalinks are skipped.
    """

    strategy = SearchStrategy.INDEXED

    def __init__(
        self,
        indexes: Sequence[FullTextIndex],
        permalinks: Mapping[str, Entry],
        overfetch_factor: int = 2
    ):
        self.indexes = tuple(indexes)
        self.permalinks = permalinks
        self.overfetch_factor = overfetch_factor

    def candidates(self, query: str, limit: int) -> List[Entry]:
        """
        Query every index in order and resolve the hits.

        Raises:
            sqlite3.Error: Propagated from the index for the caller to handle.
        """
        fetch = limit * self.overfetch_factor

        return merge_candidates(*(
            self._resolve(index.search(query, fetch))
            for index in self.indexes
        ))

    def _resolve(self, permalinks: Iterable[str]) -> List[Entry]:
        resolved = []
        for permalink in permalinks:
            entry = self.permalinks.get(permalink)
            if entry is None:
                logger.debug(f"Skipping unresolved permalink {permalink!r}")
                continue
            resolved.append(entry)
        return resolved

    def search(self, query: str, limit: int) -> List[SearchResult]:
        return to_results(dedupe_by_title(self.candidates(query, limit)), limit)


class LinearScanSearch:
    """
    Substring search over the corpus entries, corpus by corpus.

    An entry matches when the case-folded query occurs in its case-folded
    title or body. Folded texts are computed once at construction.
    """

    strategy = SearchStrategy.LINEAR_SCAN

    def __init__(self, stores: Sequence[CorpusStore]):
        self.stores = tuple(stores)
        self._folded: Tuple[Tuple[Entry, str, str], ...] = tuple(
            (entry, entry.key, fold_case(entry.body))
            for store in self.stores
            for entry in store
        )

    def candidates(self, query: str) -> List[Entry]:
        needle = fold_case(query)

        return [
            entry for entry, title, body in self._folded
            if needle in title or needle in body
        ]

    def search(self, query: str, limit: int) -> List[SearchResult]:
        unique = dedupe_by_title(self.candidates(query))
        return to_results(rank_exact_first(unique, query), limit)
