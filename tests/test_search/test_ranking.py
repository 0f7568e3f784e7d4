"""
Tests for deduplication, ranking and truncation.
"""

from lexdex.corpus import Entry
from lexdex.search import SearchResult
from lexdex.search.ranking import dedupe_by_title, merge_candidates, rank_exact_first, to_results


def _entry(title: str, permalink: str, source: str = "usc") -> Entry:
    return Entry(title, title[:1].lower(), permalink, f"Definition of {title}.", "t", source)


class TestDedupeByTitle:
    """Tests for dedupe_by_title."""

    def test_first_occurrence_wins(self):
        entries = [_entry("Contract", "u1"), _entry("contract", "b1", "bld"), _entry("Tort", "b2", "bld")]

        unique = dedupe_by_title(entries)

        assert [e.permalink for e in unique] == ["u1", "b2"]

    def test_no_duplicates_untouched(self):
        entries = [_entry("Lien", "u1"), _entry("Levy", "u2")]

        assert dedupe_by_title(entries) == entries

    def test_empty(self):
        assert dedupe_by_title([]) == []


class TestRankExactFirst:
    """Tests for rank_exact_first."""

    def test_exact_match_first(self):
        entries = [_entry("Equitable Lien", "u1"), _entry("Attachment", "u2"), _entry("LIEN", "u3")]

        ranked = rank_exact_first(entries, "lien")

        assert [e.title for e in ranked] == ["LIEN", "Attachment", "Equitable Lien"]

    def test_alphabetical_is_caseless(self):
        entries = [_entry("banker's lien", "u1"), _entry("Agister's Lien", "u2"), _entry("Carrier's Lien", "u3")]

        ranked = rank_exact_first(entries, "lien")

        assert [e.permalink for e in ranked] == ["u2", "u1", "u3"]


class TestMergeAndProject:
    """Tests for merge_candidates and to_results."""

    def test_merge_keeps_order(self):
        first = [_entry("Lien", "u1")]
        second = [_entry("Tort", "b1", "bld"), _entry("Levy", "b2", "bld")]

        assert [e.permalink for e in merge_candidates(first, second)] == ["u1", "b1", "b2"]

    def test_to_results_truncates(self):
        entries = [_entry("Lien", "u1"), _entry("Levy", "u2"), _entry("Tort", "u3")]

        results = to_results(entries, 2)

        assert len(results) == 2
        assert results[0] == SearchResult("Lien", "Definition of Lien.", "usc", "u1", "l", "t")

    def test_to_results_negative_limit(self):
        assert to_results([_entry("Lien", "u1")], -1) == []

    def test_result_to_dict(self):
        result = to_results([_entry("Lien", "u1")], 1)[0]

        assert result.to_dict() == {
            "word": "Lien",
            "definition": "Definition of Lien.",
            "source": "usc",
            "permalink": "u1",
            "letter": "l",
            "published_at": "t"
        }
