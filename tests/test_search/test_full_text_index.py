"""
Tests for the SQLite FTS5 full-text index.
"""

import sqlite3
import pytest

from lexdex.database import DatabaseManager, create_index_tables
from lexdex.search import FullTextIndex, QueryParser


DOCUMENTS = [
    ("u1", "Contract An agreement."),
    ("u2", "Lien A charge on property for the payment of a debt."),
    ("u3", "Lien Lien lien, a lien upon a lien."),
    ("u4", "Security Interest An interest in property that secures payment."),
]


@pytest.fixture
def index(configured):
    db = DatabaseManager()
    fts = FullTextIndex(db, "usc_fts")

    with db.transaction() as cur:
        create_index_tables(cur, "unicode61")
        fts.add_many(cur, DOCUMENTS)

    yield fts
    db.close()


class TestFullTextIndex:
    """Tests for FullTextIndex."""

    def test_all_documents_indexed(self, index):
        with index.db.connection() as conn:
            assert conn.execute("SELECT COUNT(*) FROM usc_fts").fetchone()[0] == 4

    def test_search_returns_permalinks(self, index):
        assert set(index.search("lien", 10)) == {"u2", "u3"}

    def test_search_is_caseless(self, index):
        assert set(index.search("LIEN", 10)) == set(index.search("lien", 10))

    def test_terms_are_anded(self, index):
        """Every query term must occur."""
        assert set(index.search("property payment", 10)) == {"u2", "u4"}
        assert index.search("lien agreement", 10) == []

    def test_relevance_order(self, index):
        """The document repeating the term ranks first."""
        assert index.search("lien", 10)[0] == "u3"

    def test_limit(self, index):
        assert len(index.search("lien", 1)) == 1

    def test_zero_limit(self, index):
        assert index.search("lien", 0) == []

    def test_empty_query(self, index):
        assert index.search("   ", 10) == []

    def test_syntax_characters_are_safe(self, index):
        """Raw FTS5 syntax in the query does not raise."""
        assert index.search('lien" OR (NOT', 10) == []

    def test_whole_word_matching(self, index):
        """Without prefix matching a partial word finds nothing."""
        assert index.search("lie", 10) == []

    def test_prefix_matching(self, index):
        prefix = FullTextIndex(index.db, "usc_fts", QueryParser(prefix_matching=True))

        assert set(prefix.search("lie", 10)) == {"u2", "u3"}

    def test_add_many_appends(self, index):
        with index.db.transaction() as cur:
            added = index.add_many(cur, iter([("u5", "Vessel Every description of watercraft.")]))

        assert added == 1
        assert index.search("watercraft", 10) == ["u5"]

    def test_missing_table_raises(self, configured):
        """Querying an index that was never created raises sqlite3.Error."""
        db = DatabaseManager()
        fts = FullTextIndex(db, "bld_fts")

        with pytest.raises(sqlite3.Error):
            fts.search("lien", 10)

        db.close()
