"""
Data models for dictionary corpora.

Defines the immutable Entry record and the names of the two corpora.
"""

from dataclasses import dataclass
from enum import Enum

from ..utils import fold_case


class CorpusName(str, Enum):
    """The two legal-dictionary sources."""
    USC = "usc"
    BLD = "bld"


ENTRY_FIELDS = ("title", "letter", "permalink", "body", "published_at", "source")


@dataclass(frozen=True)
class Entry:
    """
    One dictionary record.

    Attributes:
        title: The headword.
        letter: First-letter grouping.
        permalink: Identifier, unique across both corpora.
        body: Definition text.
        published_at: Opaque publication timestamp.
        source: Tag of the corpus the record came from.
    """
    title: str
    letter: str
    permalink: str
    body: str
    published_at: str
    source: str

    @property
    def key(self) -> str:
        """Case-folded title used for exact lookup and deduplication."""
        return fold_case(self.title)

    @property
    def indexed_text(self) -> str:
        """Text fed to the full-text indexes."""
        return f"{self.title} {self.body}"

    def to_dict(self) -> dict:
        """Render the record with its storage field names."""
        return {name: getattr(self, name) for name in ENTRY_FIELDS}
