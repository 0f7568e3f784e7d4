"""
Legal Dictionary Search Engine Package.

Loads the USC and BLD legal-dictionary corpora into exact-match tables and
SQLite FTS5 full-text indexes, and answers lookup and ranked-search queries.
"""

__version__ = "1.0.0"
