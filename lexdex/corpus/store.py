"""
In-memory corpus store.

Holds one corpus's entries in file order together with the exact-match
table keyed by case-folded headword.
"""

from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..utils import fold_case
from .models import CorpusName, Entry


class CorpusStore:
    """
    Immutable collection of one corpus's entries.

    The exact-match table is last-write-wins: when several records share a
    case-folded title, the one appearing last in the file is kept and the
    earlier ones are shadowed. Shadowed records stay in ``entries`` but are
    excluded from ``visible_entries``, which is what search strategies scan.
    """

    def __init__(self, name: CorpusName, entries: Iterable[Entry]):
        self.name = CorpusName(name)
        self._entries: Tuple[Entry, ...] = tuple(entries)

        exact: Dict[str, Entry] = {}
        for entry in self._entries:
            exact[entry.key] = entry
        self._exact = exact

        self._visible: Tuple[Entry, ...] = tuple(
            entry for entry in self._entries
            if self._exact[entry.key] is entry
        )

    @classmethod
    def empty(cls, name: CorpusName) -> "CorpusStore":
        return cls(name, ())

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """All loaded entries in file order."""
        return self._entries

    @property
    def visible_entries(self) -> Tuple[Entry, ...]:
        """Entries that won their headword, in file order."""
        return self._visible

    def lookup(self, word: str) -> Optional[Entry]:
        """Exact, caseless headword lookup."""
        return self._exact.get(fold_case(word))

    def __len__(self) -> int:
        """Number of distinct headwords."""
        return len(self._exact)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._visible)

    def __repr__(self) -> str:
        return f"CorpusStore({self.name.value!r}, headwords={len(self)}, records={len(self._entries)})"
