"""
Dictionary service module.

Exposes the DictionaryService facade that owns the corpus stores and
full-text indexes, and the result models it returns.
"""

from .models import ExactMatch, DictionaryStats
from .service import DictionaryService

__all__ = [
    "ExactMatch",
    "DictionaryStats",
    "DictionaryService"
]
