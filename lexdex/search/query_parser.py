"""
Query parser for FTS5 full-text search.

Turns free text into a MATCH expression of quoted terms joined by
implicit AND, so user input can never be read as FTS5 syntax.
"""

from typing import List

from ..core import get_logger

logger = get_logger(__name__)


# Characters with special meaning in FTS5 that need removing
FTS5_SPECIAL_CHARS = set('"\'*-+():^{}[],.;')


class QueryParser:
    """
    Parses and sanitizes search queries for FTS5.

    Every surviving term is wrapped in double quotes, which also neutralizes
    bare AND, OR, NOT and NEAR keywords.
    """

    def __init__(self, prefix_matching: bool = False):
        """
        Args:
            prefix_matching: Match each term as a prefix ("lie" finds "lien").
        """
        self.prefix_matching = prefix_matching

    def terms(self, query: str) -> List[str]:
        """
        Split a raw query into clean search terms.

        Terms without any letter or digit are dropped since the tokenizer
        would reduce them to nothing.

        Args:
            query: Raw user input.

        Returns:
            List of terms in input order.
        """
        if not query or not query.strip():
            return []

        cleaned = "".join(
            char if char not in FTS5_SPECIAL_CHARS else " "
            for char in query
        )

        return [
            term for term in cleaned.split()
            if any(char.isalnum() for char in term)
        ]

    def parse(self, query: str) -> str:
        """
        Build the FTS5 MATCH expression for a query.

        Args:
            query: Raw user input.

        Returns:
            MATCH expression, or "" if nothing searchable remains.
        """
        suffix = "*" if self.prefix_matching else ""

        expression = " ".join(f'"{term}"{suffix}' for term in self.terms(query))

        if not expression:
            logger.debug(f"Query {query!r} has no searchable terms")

        return expression
