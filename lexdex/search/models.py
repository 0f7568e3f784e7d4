"""
Data models for search functionality.

Defines the search strategy and scope variants and the result record
returned to callers.
"""

from dataclasses import dataclass
from enum import Enum

from ..corpus import CorpusName, Entry


class SearchStrategy(Enum):
    """How candidates for a ranked search are produced."""
    INDEXED = "indexed"
    LINEAR_SCAN = "linear_scan"


class SearchScope(str, Enum):
    """Which corpora a scoped search covers."""
    USC = "usc"
    BLD = "bld"
    BOTH = "both"

    @property
    def corpora(self):
        """Corpus names covered, USC first."""
        if self is SearchScope.BOTH:
            return (CorpusName.USC, CorpusName.BLD)
        return (CorpusName(self.value),)


@dataclass(frozen=True)
class SearchResult:
    """
    Represents a single search result, projected from an Entry.

    Attributes:
        word: The headword.
        definition: Definition text.
        source: Corpus tag of the entry.
        permalink: Entry identifier.
        letter: First-letter grouping.
        published_at: Opaque publication timestamp.
    """
    word: str
    definition: str
    source: str
    permalink: str
    letter: str
    published_at: str

    @classmethod
    def from_entry(cls, entry: Entry) -> "SearchResult":
        return cls(
            word=entry.title,
            definition=entry.body,
            source=entry.source,
            permalink=entry.permalink,
            letter=entry.letter,
            published_at=entry.published_at
        )

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "definition": self.definition,
            "source": self.source,
            "permalink": self.permalink,
            "letter": self.letter,
            "published_at": self.published_at
        }
