"""
Utility module providing shared text helpers.

Depends only on the standard library.
"""

from .text_utils import (
    fold_case,
    format_text,
    truncate_text
)

__all__ = [
    "fold_case",
    "format_text",
    "truncate_text"
]
