"""
Deduplication, ranking and truncation of candidate entries.

Candidates arrive in strategy order: relevance order for indexed search,
corpus order (USC first) for the linear scan. Deduplication keeps the first
entry per case-folded headword in that order.
"""

from itertools import chain, islice
from typing import Iterable, List

from ..corpus import Entry
from ..utils import fold_case
from .models import SearchResult


def merge_candidates(*candidate_lists: Iterable[Entry]) -> List[Entry]:
    """Concatenate candidate lists, keeping their order."""
    return list(chain.from_iterable(candidate_lists))


def dedupe_by_title(entries: Iterable[Entry]) -> List[Entry]:
    """
    Drop entries whose case-folded title was already seen.

    Args:
        entries: Candidates in strategy order.

    Returns:
        First entry per headword, in input order.
    """
    seen = set()
    unique = []

    for entry in entries:
        if entry.key in seen:
            continue
        seen.add(entry.key)
        unique.append(entry)

    return unique


def rank_exact_first(entries: Iterable[Entry], query: str) -> List[Entry]:
    """
    Order entries with an exact headword match first, then alphabetically.

    Alphabetical order is caseless; the original title breaks ties so the
    order is deterministic.

    Args:
        entries: Deduplicated candidates.
        query: Trimmed user query.

    Returns:
        Ranked entries.
    """
    folded_query = fold_case(query)

    return sorted(
        entries,
        key=lambda entry: (entry.key != folded_query, entry.key, entry.title)
    )


def to_results(entries: Iterable[Entry], limit: int) -> List[SearchResult]:
    """Project the first ``limit`` entries to search results."""
    return [SearchResult.from_entry(entry) for entry in islice(entries, max(limit, 0))]
