"""
Dictionary service facade.

Owns the USC and BLD corpus stores, their full-text indexes and the
combined index, and answers exact lookups, ranked searches and statistics.
A service is built once, loaded once and then shared by reference with
every caller; all queries after load are pure reads.
"""

import threading
import time
from typing import Dict, List, Optional, Union

from ..core import get_config, get_logger, DatabaseError, LoadError, SearchError
from ..corpus import CorpusLoader, CorpusName, CorpusStore, Entry
from ..database import (
    BLD_INDEX,
    COMBINED_INDEX,
    USC_INDEX,
    DatabaseManager,
    create_index_tables
)
from ..search import (
    FullTextIndex,
    IndexedSearch,
    LinearScanSearch,
    QueryParser,
    SearchResult,
    SearchScope,
    SearchStrategy
)
from .models import DictionaryStats, ExactMatch

logger = get_logger(__name__)

CORPUS_TABLES = {
    CorpusName.USC: USC_INDEX,
    CorpusName.BLD: BLD_INDEX
}


class DictionaryService:
    """
    Lookup and search over the two legal-dictionary corpora.

    Queries issued before load() has completed return empty results and log
    a warning; they never see partially built structures. Faults on the
    indexed path are logged, counted and answered by a linear scan instead.
    """

    def __init__(self, loader: CorpusLoader = None, db: DatabaseManager = None):
        """
        Initialize an unloaded service.

        Args:
            loader: Source of the corpora. Defaults to the JSON files
                    named in config.
            db: Database for the full-text indexes. Defaults to a private
                in-memory database created by load().
        """
        self.config = get_config()
        self.loader = loader or CorpusLoader()

        self.default_limit = self.config.search.default_limit
        self.max_limit = self.config.search.max_limit
        self.overfetch_factor = self.config.search.overfetch_factor
        self.tokenizer = self.config.search.tokenizer
        self.default_strategy = SearchStrategy(self.config.search.default_strategy)
        self.enforce_unique_permalinks = self.config.loading.enforce_unique_permalinks
        self.parser = QueryParser(prefix_matching=self.config.search.prefix_matching)

        self._db = db
        self._owns_db = db is None

        self._load_lock = threading.Lock()
        self._counter_lock = threading.Lock()
        self._loaded = False
        self._degraded_searches = 0

        self._stores: Dict[CorpusName, CorpusStore] = {
            name: CorpusStore.empty(name) for name in CorpusName
        }
        self._permalinks: Dict[str, Entry] = {}
        self._combined_search: Optional[IndexedSearch] = None
        self._linear_search: Optional[LinearScanSearch] = None
        self._scoped_indexed: Dict[SearchScope, IndexedSearch] = {}
        self._scoped_linear: Dict[SearchScope, LinearScanSearch] = {}

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def degraded_searches(self) -> int:
        """Indexed searches answered by the linear-scan fallback."""
        return self._degraded_searches

    def load(self) -> None:
        """
        Read both corpora and build the exact-match tables and indexes.

        Runs at most once; concurrent callers wait for the first one and
        later calls return immediately. Nothing becomes visible to queries
        unless every step succeeds.

        Raises:
            LoadError: If a corpus is unreadable or invalid, or the indexes
                       cannot be built. The service stays unloaded.
        """
        if self._loaded:
            return

        with self._load_lock:
            if self._loaded:
                return

            start_time = time.time()
            logger.info("Loading dictionaries")

            try:
                corpora = self.loader.read_all(self.enforce_unique_permalinks)
            except LoadError as e:
                logger.error(f"Dictionary load failed: {e.message}")
                raise

            stores = {name: CorpusStore(name, entries) for name, entries in corpora.items()}
            permalinks = self._build_permalink_map(stores)

            try:
                db = self._db or DatabaseManager()
            except DatabaseError as e:
                logger.error(f"Dictionary load failed: {e.message}")
                raise LoadError(f"Cannot open index database: {e.message}", details=e.details)

            indexes = {
                name: FullTextIndex(db, table, self.parser)
                for name, table in CORPUS_TABLES.items()
            }
            combined = FullTextIndex(db, COMBINED_INDEX, self.parser)

            self._build_indexes(db, stores, indexes, combined)

            self._install(db, stores, permalinks, indexes, combined)

            elapsed = (time.time() - start_time) * 1000
            logger.info(
                f"Dictionaries loaded in {elapsed:.0f}ms: "
                f"{len(stores[CorpusName.USC])} USC entries, "
                f"{len(stores[CorpusName.BLD])} BLD entries"
            )

    def _build_permalink_map(self, stores: Dict[CorpusName, CorpusStore]) -> Dict[str, Entry]:
        """Map permalinks of visible entries to entries; first corpus wins."""
        permalinks: Dict[str, Entry] = {}
        for name in CorpusName:
            for entry in stores[name].visible_entries:
                permalinks.setdefault(entry.permalink, entry)
        return permalinks

    def _build_indexes(
        self,
        db: DatabaseManager,
        stores: Dict[CorpusName, CorpusStore],
        indexes: Dict[CorpusName, FullTextIndex],
        combined: FullTextIndex
    ) -> None:
        """Fill every index inside one transaction; roll back on failure."""
        current = None

        try:
            with db.transaction() as cur:
                create_index_tables(cur, self.tokenizer)

                for name in CorpusName:
                    current = name
                    documents = [
                        (entry.permalink, entry.indexed_text)
                        for entry in stores[name].entries
                    ]
                    added = indexes[name].add_many(cur, documents)
                    combined.add_many(cur, documents)
                    logger.debug(f"Indexed {added} {name.value} documents")

        except Exception as e:
            if self._owns_db:
                db.close()
            corpus = current.value if current else None
            logger.error(f"Failed to build full-text indexes: {e}")
            raise LoadError(
                f"Failed to build full-text indexes: {e}",
                corpus=corpus,
                details={"tokenizer": self.tokenizer, "error": type(e).__name__}
            )

    def _install(
        self,
        db: DatabaseManager,
        stores: Dict[CorpusName, CorpusStore],
        permalinks: Dict[str, Entry],
        indexes: Dict[CorpusName, FullTextIndex],
        combined: FullTextIndex
    ) -> None:
        """Attach fully built structures, then mark the service loaded."""
        combined_search = IndexedSearch([combined], permalinks, self.overfetch_factor)
        linear_search = LinearScanSearch([stores[name] for name in CorpusName])
        scoped_indexed = {
            scope: IndexedSearch(
                [indexes[name] for name in scope.corpora], permalinks, self.overfetch_factor
            )
            for scope in SearchScope
        }
        scoped_linear = {
            scope: LinearScanSearch([stores[name] for name in scope.corpora])
            for scope in SearchScope
        }

        self._db = db
        self._stores = stores
        self._permalinks = permalinks
        self._combined_search = combined_search
        self._linear_search = linear_search
        self._scoped_indexed = scoped_indexed
        self._scoped_linear = scoped_linear

        self._loaded = True

    def exact_match(self, word: str) -> ExactMatch:
        """
        Look a headword up in both corpora, ignoring case.

        Args:
            word: Headword to find.

        Returns:
            ExactMatch with the entry of each corpus that has the word.
        """
        if not self._loaded:
            self._warn_not_loaded("exact_match")
            return ExactMatch()

        return ExactMatch(
            usc=self._stores[CorpusName.USC].lookup(word),
            bld=self._stores[CorpusName.BLD].lookup(word)
        )

    def search(
        self,
        query: str,
        limit: int = None,
        use_index: bool = None
    ) -> List[SearchResult]:
        """
        Ranked search across both corpora.

        Args:
            query: Free-text query.
            limit: Maximum results. Defaults to config, capped at max_limit.
            use_index: Use the combined full-text index (True) or the linear
                       scan (False). Defaults to the configured strategy.

        Returns:
            Deduplicated results, at most ``limit``.

        Raises:
            SearchError: If ``limit`` is not an integer.
        """
        query = (query or "").strip()
        limit = self._resolve_limit(limit, query)

        if not query or limit <= 0:
            return []

        if not self._loaded:
            self._warn_not_loaded("search")
            return []

        if use_index is None:
            strategy = self.default_strategy
        else:
            strategy = SearchStrategy.INDEXED if use_index else SearchStrategy.LINEAR_SCAN

        start_time = time.time()

        if strategy is SearchStrategy.INDEXED:
            results = self._search_with_fallback(
                self._combined_search, self._linear_search, query, limit
            )
        else:
            results = self._linear_search.search(query, limit)

        logger.debug(
            f"Search ({strategy.value}) '{query}': {len(results)} results "
            f"in {(time.time() - start_time) * 1000:.1f}ms"
        )

        return results

    def search_scoped(
        self,
        source: Union[SearchScope, str],
        query: str,
        limit: int = None
    ) -> List[SearchResult]:
        """
        Indexed search restricted to one corpus or both.

        With ``both``, the USC and BLD indexes are queried separately and
        their hits concatenated, USC first, before deduplication.

        Args:
            source: "usc", "bld" or "both".
            query: Free-text query.
            limit: Maximum results. Defaults to config, capped at max_limit.

        Returns:
            Deduplicated results in index order, at most ``limit``.

        Raises:
            SearchError: If ``source`` is not a known scope or ``limit`` is
                         not an integer.
        """
        try:
            scope = SearchScope(source)
        except ValueError:
            raise SearchError(
                f"Unknown dictionary source: {source!r}",
                query=query,
                details={"allowed": [s.value for s in SearchScope]}
            )

        query = (query or "").strip()
        limit = self._resolve_limit(limit, query)

        if not query or limit <= 0:
            return []

        if not self._loaded:
            self._warn_not_loaded("search_scoped")
            return []

        start_time = time.time()

        results = self._search_with_fallback(
            self._scoped_indexed[scope], self._scoped_linear[scope], query, limit
        )

        logger.debug(
            f"Scoped search ({scope.value}) '{query}': {len(results)} results "
            f"in {(time.time() - start_time) * 1000:.1f}ms"
        )

        return results

    def _search_with_fallback(
        self,
        indexed: IndexedSearch,
        fallback: LinearScanSearch,
        query: str,
        limit: int
    ) -> List[SearchResult]:
        """Run an indexed search, degrading to the linear scan on any fault."""
        try:
            return indexed.search(query, limit)
        except Exception as e:
            with self._counter_lock:
                self._degraded_searches += 1
            logger.warning(
                f"Indexed search failed for '{query}', using linear scan: {e}"
            )
            return fallback.search(query, limit)

    def stats(self) -> DictionaryStats:
        """Snapshot of headword counts and load state; zeros until loaded."""
        if not self._loaded:
            return DictionaryStats(0, 0, 0, False, self._degraded_searches)

        usc_count = len(self._stores[CorpusName.USC])
        bld_count = len(self._stores[CorpusName.BLD])

        return DictionaryStats(
            usc_count=usc_count,
            bld_count=bld_count,
            total_count=usc_count + bld_count,
            loaded=True,
            degraded_searches=self._degraded_searches
        )

    def _resolve_limit(self, limit: Optional[int], query: str) -> int:
        """
        Raises:
            SearchError: If ``limit`` is not an integer.
        """
        if limit is None:
            limit = self.default_limit

        try:
            limit = int(limit)
        except (TypeError, ValueError):
            raise SearchError(
                f"Limit must be an integer, got {limit!r}",
                query=query,
                details={"limit": repr(limit)}
            )

        return min(limit, self.max_limit)

    def _warn_not_loaded(self, operation: str) -> None:
        logger.warning(f"{operation} called before dictionaries were loaded; returning no results")

    def close(self) -> None:
        """Release the index database if this service created it."""
        if self._owns_db and self._db is not None and self._db.is_open:
            self._db.close()

    def __enter__(self) -> "DictionaryService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
