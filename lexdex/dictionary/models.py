"""
Result models returned by the dictionary service.
"""

from dataclasses import dataclass
from typing import Optional

from ..corpus import Entry


@dataclass(frozen=True)
class ExactMatch:
    """
    Exact headword lookup result, one optional entry per corpus.

    Attributes:
        usc: Matching USC entry, if any.
        bld: Matching BLD entry, if any.
    """
    usc: Optional[Entry] = None
    bld: Optional[Entry] = None

    @property
    def found(self) -> bool:
        return self.usc is not None or self.bld is not None

    def to_dict(self) -> dict:
        """Render present sides only, as ``{"usc": {...}, "bld": {...}}``."""
        result = {}
        if self.usc is not None:
            result["usc"] = self.usc.to_dict()
        if self.bld is not None:
            result["bld"] = self.bld.to_dict()
        return result


@dataclass(frozen=True)
class DictionaryStats:
    """
    Snapshot of the service state.

    Attributes:
        usc_count: Distinct USC headwords.
        bld_count: Distinct BLD headwords.
        total_count: Sum of both counts.
        loaded: Whether load() completed successfully.
        degraded_searches: Indexed searches that fell back to a linear scan.
    """
    usc_count: int
    bld_count: int
    total_count: int
    loaded: bool
    degraded_searches: int = 0

    def to_dict(self) -> dict:
        return {
            "uscCount": self.usc_count,
            "bldCount": self.bld_count,
            "totalCount": self.total_count,
            "loaded": self.loaded,
            "degradedSearches": self.degraded_searches
        }
