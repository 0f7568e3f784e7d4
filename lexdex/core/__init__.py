"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, Config, SearchConfig, LoadingConfig
from .logger import get_logger
from .exceptions import (
    LexDexError,
    ConfigurationError,
    DatabaseError,
    LoadError,
    SearchError
)

__all__ = [
    "get_config",
    "Config",
    "SearchConfig",
    "LoadingConfig",
    "get_logger",
    "LexDexError",
    "ConfigurationError",
    "DatabaseError",
    "LoadError",
    "SearchError"
]
