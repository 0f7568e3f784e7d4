"""
Custom exception hierarchy for the legal dictionary search engine.

Provides specific exception types for different failure modes:
configuration errors, database issues, corpus loading failures and
invalid search arguments.
"""


class LexDexError(Exception):
    """Base exception for all dictionary search engine errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(LexDexError):
    """Raised when configuration is invalid or missing."""
    pass


class DatabaseError(LexDexError):
    """Raised when SQLite operations fail."""
    pass


class LoadError(LexDexError):
    """Raised when a corpus cannot be read, decoded or validated."""

    def __init__(self, message: str, corpus: str = None, details: dict = None):
        """
        Initialize load error.

        Args:
            message: Error description.
            corpus: Name of the offending corpus ("usc" or "bld").
            details: Additional context, such as the rejected records.
        """
        super().__init__(message, details)
        self.corpus = corpus


class SearchError(LexDexError):
    """Raised when search arguments are invalid."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query
