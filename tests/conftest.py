"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, sample corpora, and temporary configurations
so tests never touch the real dictionary files.
"""

import json
import pytest
import tempfile
import shutil
from pathlib import Path
from typing import Callable, Generator, List

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def _record(title: str, body: str, permalink: str, source: str, /, **overrides) -> dict:
    record = {
        "title": title,
        "letter": title[:1].lower(),
        "permalink": permalink,
        "body": body,
        "published_at": "2024-01-01T00:00:00Z",
        "source": source
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_record() -> Callable[..., dict]:
    """
    Factory for raw corpus records.

    Returns:
        Function(title, body, permalink, source, **overrides) -> dict.
    """
    return _record


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="lexdex_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def usc_records() -> List[dict]:
    """Raw USC records with unique titles."""
    return [
        _record("Contract", "An agreement.", "u1", "usc"),
        _record("Lien", "A charge on property for the payment of a debt.", "u2", "usc"),
        _record("Person", "Includes corporations and individuals.", "u3", "usc"),
        _record("Security Interest", "An interest in property that secures payment.", "u4", "usc"),
    ]


@pytest.fixture
def bld_records() -> List[dict]:
    """Raw BLD records; "contract" repeats a USC headword in lower case."""
    return [
        _record("contract", "A binding promise.", "b1", "bld"),
        _record("Easement", "A right to use the land of another.", "b2", "bld"),
        _record("Mechanic's Lien", "A statutory lien securing payment for labor.", "b3", "bld"),
        _record("Tort", "A civil wrong other than breach of contract.", "b4", "bld"),
    ]


@pytest.fixture
def write_corpus() -> Callable[[Path, object], Path]:
    """
    Write a JSON corpus file.

    Returns:
        Function(path, records) -> path.
    """
    def _write(path: Path, records) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f)
        return path

    return _write


@pytest.fixture
def temp_config(temp_dir: Path, usc_records, bld_records, write_corpus) -> Generator[Path, None, None]:
    """
    Create a temporary config.json with sample corpora next to it.

    Args:
        temp_dir: Temporary directory fixture.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir()

    dex_dir = temp_dir / "data" / "dex"
    write_corpus(dex_dir / "usc.json", usc_records)
    write_corpus(dex_dir / "bld.json", bld_records)

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    config_data = {
        "paths": {
            "corpus_directory": str(dex_dir),
            "usc_corpus": "usc.json",
            "bld_corpus": "bld.json",
            "database_path": None,
            "logs_directory": str(logs_dir)
        },
        "loading": {
            "enforce_unique_permalinks": True
        },
        "search": {
            "default_limit": 10,
            "max_limit": 50,
            "overfetch_factor": 2,
            "tokenizer": "unicode61",
            "prefix_matching": False,
            "default_strategy": "indexed"
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def temp_database(temp_dir: Path) -> Path:
    """Path where a file-backed test database should be created."""
    return temp_dir / "index.db"


@pytest.fixture
def reset_config_singleton():
    """
    Reset the config singleton between tests.

    This ensures each test gets a fresh config instance.
    """
    from lexdex.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """Detach package log handlers before and after the test."""
    from lexdex.core.logger import reset_logging
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def configured(temp_config, reset_config_singleton):
    """
    Load the temporary config as the active configuration.

    Yields:
        The active Config instance.
    """
    from lexdex.core.config_loader import get_config
    yield get_config(temp_config)


@pytest.fixture
def service(configured):
    """An unloaded DictionaryService over the sample corpora."""
    from lexdex.dictionary import DictionaryService
    svc = DictionaryService()
    yield svc
    svc.close()


@pytest.fixture
def loaded_service(service):
    """A DictionaryService with the sample corpora loaded."""
    service.load()
    return service


@pytest.fixture
def service_for(configured):
    """
    Factory building a DictionaryService over in-memory records.

    Returns:
        Function(usc=[...], bld=[...], load=True) -> DictionaryService.
    """
    from lexdex.corpus import CorpusLoader
    from lexdex.dictionary import DictionaryService

    created = []

    def _build(usc=None, bld=None, load: bool = True) -> DictionaryService:
        svc = DictionaryService(loader=CorpusLoader.from_records(usc=usc, bld=bld))
        created.append(svc)
        if load:
            svc.load()
        return svc

    yield _build

    for svc in created:
        svc.close()
