"""
Logging setup for the dictionary search engine.

All modules log through children of the ``lexdex`` logger. Handlers are
attached to that package logger only, once per process: explicitly with
setup_logging(), or on the first get_logger() call using config.json.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .exceptions import ConfigurationError

PACKAGE_LOGGER = "lexdex"
LOG_FILENAME = "lexdex.log"

_logger_initialized = False


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    # stdout belongs to CLI output
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    return handler


def _file_handler(
    logs_directory: Path,
    formatter: logging.Formatter,
    max_file_size_mb: int,
    backup_count: int
) -> logging.Handler:
    logs_directory = Path(logs_directory)
    logs_directory.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        logs_directory / LOG_FILENAME,
        maxBytes=max_file_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding="utf-8"
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    logs_directory: Path = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> None:
    """
    Attach handlers to the package logger. Later calls are no-ops.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Format string for log messages.
        logs_directory: Directory for the rotating log file. If None,
                        only stderr output is configured.
        max_file_size_mb: Maximum size of each log file in MB.
        backup_count: Number of rotated files to keep.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    formatter = logging.Formatter(log_format)
    handlers = [_console_handler(formatter)]
    if logs_directory:
        handlers.append(_file_handler(logs_directory, formatter, max_file_size_mb, backup_count))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    for handler in handlers:
        package_logger.addHandler(handler)

    _logger_initialized = True


def _setup_from_config() -> None:
    """Configure logging from config.json, or with defaults if there is none."""
    from .config_loader import get_config

    try:
        config = get_config()
    except ConfigurationError:
        setup_logging()
        return

    setup_logging(
        log_level=config.logging.level,
        log_format=config.logging.format,
        logs_directory=config.paths.logs_directory,
        max_file_size_mb=config.logging.max_file_size_mb,
        backup_count=config.logging.backup_count
    )


def reset_logging() -> None:
    """Detach and close the package handlers so setup can run again."""
    global _logger_initialized

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(logging.NOTSET)

    _logger_initialized = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger, setting up package logging on first use.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Returns:
        Logger instance.
    """
    if not _logger_initialized:
        _setup_from_config()

    return logging.getLogger(name)
