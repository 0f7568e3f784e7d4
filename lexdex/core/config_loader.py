"""
Configuration loader for the legal dictionary search engine.

config/config.json is split into typed sections (paths, loading, search,
logging), each a dataclass built from its JSON object with defaults for
missing keys. The parsed Config is cached as a process-wide singleton.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .exceptions import ConfigurationError

CONFIG_RELATIVE_PATH = Path("config") / "config.json"
SEARCH_STRATEGIES = ("indexed", "linear_scan")


def _resolve(value: Union[str, Path], base: Path) -> Path:
    """Anchor a relative path at ``base``; absolute paths pass through."""
    path = Path(value)
    return path if path.is_absolute() else base / path


@dataclass
class PathsConfig:
    """
    File system locations.

    Corpus file names are resolved against ``corpus_directory``; every other
    relative path is resolved against the project root (the parent of the
    config directory). No ``database_path`` means in-memory indexes.
    """
    corpus_directory: Path
    usc_corpus: Path
    bld_corpus: Path
    database_path: Optional[Path]
    logs_directory: Path

    @classmethod
    def from_dict(cls, data: dict, project_root: Path) -> "PathsConfig":
        corpus_directory = _resolve(data.get("corpus_directory", "data/dex"), project_root)
        database_path = data.get("database_path")

        return cls(
            corpus_directory=corpus_directory,
            usc_corpus=_resolve(data.get("usc_corpus", "usc.json"), corpus_directory),
            bld_corpus=_resolve(data.get("bld_corpus", "bld.json"), corpus_directory),
            database_path=_resolve(database_path, project_root) if database_path else None,
            logs_directory=_resolve(data.get("logs_directory", "output/logs"), project_root)
        )


@dataclass
class LoadingConfig:
    """Corpus loading rules."""
    enforce_unique_permalinks: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "LoadingConfig":
        return cls(enforce_unique_permalinks=bool(data.get("enforce_unique_permalinks", True)))


@dataclass
class SearchConfig:
    """Search limits, index tokenizer and strategy selection."""
    default_limit: int = 10
    max_limit: int = 200
    overfetch_factor: int = 2
    tokenizer: str = "unicode61"
    prefix_matching: bool = False
    default_strategy: str = "indexed"

    @classmethod
    def from_dict(cls, data: dict) -> "SearchConfig":
        defaults = cls()
        search = cls(
            default_limit=data.get("default_limit", defaults.default_limit),
            max_limit=data.get("max_limit", defaults.max_limit),
            overfetch_factor=data.get("overfetch_factor", defaults.overfetch_factor),
            tokenizer=data.get("tokenizer", defaults.tokenizer),
            prefix_matching=data.get("prefix_matching", defaults.prefix_matching),
            default_strategy=data.get("default_strategy", defaults.default_strategy)
        )
        search.validate()
        return search

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: On a value the service cannot work with.
        """
        if self.overfetch_factor < 1:
            raise ConfigurationError(
                "search.overfetch_factor must be at least 1",
                {"overfetch_factor": self.overfetch_factor}
            )

        if self.max_limit < 1:
            raise ConfigurationError(
                "search.max_limit must be at least 1",
                {"max_limit": self.max_limit}
            )

        if self.default_strategy not in SEARCH_STRATEGIES:
            raise ConfigurationError(
                f"Unknown search strategy: {self.default_strategy}",
                {"default_strategy": self.default_strategy, "allowed": list(SEARCH_STRATEGIES)}
            )


@dataclass
class LoggingConfig:
    """Log level, format and rotation."""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_file_size_mb: int = 10
    backup_count: int = 5

    @classmethod
    def from_dict(cls, data: dict) -> "LoggingConfig":
        defaults = cls()
        level = str(data.get("level", defaults.level)).upper()

        if not isinstance(logging.getLevelName(level), int):
            raise ConfigurationError(f"Unknown log level: {level}", {"level": level})

        return cls(
            level=level,
            format=data.get("format", defaults.format),
            max_file_size_mb=data.get("max_file_size_mb", defaults.max_file_size_mb),
            backup_count=data.get("backup_count", defaults.backup_count)
        )


@dataclass
class Config:
    """
    All configuration sections.

    Use get_config() for the shared instance; Config.from_file() parses a
    file without touching the singleton.
    """
    paths: PathsConfig
    loading: LoadingConfig
    search: SearchConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "Config":
        """
        Parse a config.json file.

        Args:
            config_path: Path to the file. Its grandparent directory is
                         taken as the project root.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If the file is missing, unreadable, not a
                                JSON object or holds invalid values.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path), "line": e.lineno}
            )
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        return cls.from_dict(data, config_path.parent.parent)

    @classmethod
    def from_dict(cls, data: dict, project_root: Path) -> "Config":
        """Build a Config from already decoded JSON."""
        return cls(
            paths=PathsConfig.from_dict(data.get("paths", {}), project_root),
            loading=LoadingConfig.from_dict(data.get("loading", {})),
            search=SearchConfig.from_dict(data.get("search", {})),
            logging=LoggingConfig.from_dict(data.get("logging", {})),
            project_root=project_root
        )


_config_instance: Optional[Config] = None


def get_config(config_path: Union[str, Path] = None) -> Config:
    """
    Get the shared Config instance.

    Args:
        config_path: Load this file and make it the shared instance. If not
                     provided, the cached instance is returned, or
                     config/config.json is looked up from the working
                     directory upward on first use.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if config_path is not None:
        _config_instance = Config.from_file(config_path)
    elif _config_instance is None:
        _config_instance = Config.from_file(_find_config_file())

    return _config_instance


def _find_config_file(start: Path = None) -> Path:
    """Return the nearest config/config.json at or above ``start``."""
    start = (start or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        candidate = directory / CONFIG_RELATIVE_PATH
        if candidate.is_file():
            return candidate

    raise ConfigurationError(
        f"Could not find {CONFIG_RELATIVE_PATH} in {start} or its parents",
        {"start": str(start)}
    )


def reload_config(config_path: Union[str, Path] = None) -> Config:
    """
    Drop the cached instance and load configuration again.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)
