"""
Corpus module: dictionary records, per-corpus stores and loading.

Depends on the core and utils modules only.
"""

from .models import CorpusName, Entry, ENTRY_FIELDS
from .store import CorpusStore
from .loader import (
    CorpusLoader,
    RecordValidation,
    validate_record,
    validate_corpus,
    check_unique_permalinks
)

__all__ = [
    "CorpusName",
    "Entry",
    "ENTRY_FIELDS",
    "CorpusStore",
    "CorpusLoader",
    "RecordValidation",
    "validate_record",
    "validate_corpus",
    "check_unique_permalinks"
]
