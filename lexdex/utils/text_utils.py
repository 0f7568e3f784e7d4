"""
Text utility functions for the dictionary search engine.

Provides the case-folding used for lookup and deduplication keys,
whitespace reformatting and word-boundary truncation.
"""

import re

_BLANK_LINES = re.compile(r"\n[ \t]*\n\s*")
_INLINE_SPACE = re.compile(r"[^\S\n]+")


def fold_case(text: str) -> str:
    """
    Case-fold text for caseless comparison.

    This is the key of the exact-match tables and of result deduplication.

    Args:
        text: Headword or query text.

    Returns:
        Case-folded text.
    """
    return text.casefold()


def format_text(text: str) -> str:
    """
    Normalize whitespace in free text.

    Collapses runs of spaces and tabs to one space, keeps paragraph
    breaks as a single blank line and joins wrapped lines.

    Args:
        text: Raw text, e.g. a definition body.

    Returns:
        Reformatted text.
    """
    if not text:
        return ""

    paragraphs = _BLANK_LINES.split(text.strip())

    return "\n\n".join(
        _INLINE_SPACE.sub(" ", paragraph.replace("\n", " ")).strip()
        for paragraph in paragraphs
    )


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.

    Returns:
        Truncated text or original if within limit.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")

    if last_space > truncate_at * 0.7:
        truncated = truncated[:last_space]

    return truncated + suffix
