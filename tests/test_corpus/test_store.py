"""
Tests for the in-memory corpus store.
"""

from lexdex.corpus import CorpusName, CorpusStore, validate_corpus


def _store(records, name=CorpusName.USC):
    return CorpusStore(name, validate_corpus(name, records))


class TestCorpusStore:
    """Tests for CorpusStore."""

    def test_lookup_is_caseless(self, usc_records):
        store = _store(usc_records)

        assert store.lookup("LIEN").permalink == "u2"
        assert store.lookup("lien") is store.lookup("Lien")
        assert store.lookup("security interest").permalink == "u4"

    def test_lookup_missing(self, usc_records):
        assert _store(usc_records).lookup("Easement") is None

    def test_len_counts_headwords(self, usc_records):
        assert len(_store(usc_records)) == 4

    def test_last_write_wins(self, make_record):
        """The later record with the same headword owns the exact-match slot."""
        store = _store([
            make_record("Lien", "Earlier definition.", "u1", "usc"),
            make_record("Tort", "A wrong.", "u2", "usc"),
            make_record("LIEN", "Later definition.", "u3", "usc")
        ])

        assert store.lookup("lien").body == "Later definition."
        assert len(store) == 2
        assert len(store.entries) == 3

    def test_visible_entries_skip_shadowed(self, make_record):
        """Shadowed records are kept but not visible, order is preserved."""
        store = _store([
            make_record("Lien", "Earlier definition.", "u1", "usc"),
            make_record("Tort", "A wrong.", "u2", "usc"),
            make_record("Lien", "Later definition.", "u3", "usc")
        ])

        assert [e.permalink for e in store.visible_entries] == ["u2", "u3"]
        assert [e.permalink for e in store] == ["u2", "u3"]
        assert [e.permalink for e in store.entries] == ["u1", "u2", "u3"]

    def test_empty_store(self):
        store = CorpusStore.empty(CorpusName.BLD)

        assert len(store) == 0
        assert store.lookup("anything") is None
        assert store.name is CorpusName.BLD
