"""
Corpus loading and record validation.

Reads the USC and BLD corpora from JSON files (or from in-memory records)
and turns every raw record into a typed validation result. A corpus with
any rejected record fails as a whole, before anything is indexed.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core import get_config, get_logger, LoadError
from .models import ENTRY_FIELDS, CorpusName, Entry

logger = get_logger(__name__)

REQUIRED_TEXT_FIELDS = ("title", "body")

# Rejected records listed in a LoadError's details
MAX_REPORTED_ERRORS = 20


@dataclass(frozen=True)
class RecordValidation:
    """
    Outcome of validating one raw corpus record.

    Attributes:
        position: Zero-based index of the record in its corpus.
        entry: The validated entry, or None if rejected.
        error: Reason for rejection, or None if valid.
    """
    position: int
    entry: Optional[Entry] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.entry is not None


def _is_utf8_encodable(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_record(record: Any, position: int) -> RecordValidation:
    """
    Validate one raw record into an Entry.

    All six fields must be present and be strings encodable as UTF-8;
    title and body must also be non-blank.

    Args:
        record: Decoded JSON value.
        position: Index of the record within its corpus.

    Returns:
        RecordValidation carrying either the entry or the rejection reason.
    """
    if not isinstance(record, dict):
        return RecordValidation(position, error=f"expected an object, got {type(record).__name__}")

    missing = [name for name in ENTRY_FIELDS if name not in record]
    if missing:
        return RecordValidation(position, error=f"missing fields: {', '.join(missing)}")

    wrong_type = [name for name in ENTRY_FIELDS if not isinstance(record[name], str)]
    if wrong_type:
        return RecordValidation(position, error=f"fields must be strings: {', '.join(wrong_type)}")

    blank = [name for name in REQUIRED_TEXT_FIELDS if not record[name].strip()]
    if blank:
        return RecordValidation(position, error=f"empty fields: {', '.join(blank)}")

    # JSON \u escapes can decode to lone surrogates
    unencodable = [name for name in ENTRY_FIELDS if not _is_utf8_encodable(record[name])]
    if unencodable:
        return RecordValidation(position, error=f"fields are not valid UTF-8 text: {', '.join(unencodable)}")

    return RecordValidation(
        position,
        entry=Entry(**{name: record[name] for name in ENTRY_FIELDS})
    )


def validate_corpus(name: CorpusName, records: Any) -> List[Entry]:
    """
    Validate every record of a corpus.

    Args:
        name: Corpus the records belong to.
        records: Decoded JSON document; must be a list of records.

    Returns:
        Entries in record order.

    Raises:
        LoadError: If the document is not a list or any record is rejected.
    """
    if not isinstance(records, list):
        raise LoadError(
            f"Corpus {name.value} must be a list of records, got {type(records).__name__}",
            corpus=name.value
        )

    results = [validate_record(record, i) for i, record in enumerate(records)]
    rejected = [r for r in results if not r.ok]

    if rejected:
        raise LoadError(
            f"Corpus {name.value} has {len(rejected)} invalid record(s); "
            f"first at position {rejected[0].position}: {rejected[0].error}",
            corpus=name.value,
            details={
                "rejected": len(rejected),
                "errors": [
                    {"position": r.position, "error": r.error}
                    for r in rejected[:MAX_REPORTED_ERRORS]
                ]
            }
        )

    return [r.entry for r in results]


def check_unique_permalinks(corpora: Dict[CorpusName, List[Entry]]) -> None:
    """
    Ensure no permalink appears twice across all corpora.

    Raises:
        LoadError: Naming the corpus of the second occurrence.
    """
    seen: Dict[str, CorpusName] = {}

    for name, entries in corpora.items():
        for entry in entries:
            if entry.permalink in seen:
                raise LoadError(
                    f"Duplicate permalink {entry.permalink!r} in corpus {name.value}",
                    corpus=name.value,
                    details={
                        "permalink": entry.permalink,
                        "first_corpus": seen[entry.permalink].value
                    }
                )
            seen[entry.permalink] = name


class CorpusLoader:
    """
    Reads and validates both corpora.

    Sources are either JSON files (the default, taken from config) or
    in-memory record lists built with from_records().
    """

    def __init__(self, usc_path: Path = None, bld_path: Path = None):
        """
        Initialize a file-backed loader.

        Args:
            usc_path: Path to usc.json. Defaults to config value.
            bld_path: Path to bld.json. Defaults to config value.
        """
        if usc_path is None or bld_path is None:
            paths = get_config().paths
            usc_path = usc_path or paths.usc_corpus
            bld_path = bld_path or paths.bld_corpus

        self.paths: Dict[CorpusName, Path] = {
            CorpusName.USC: Path(usc_path),
            CorpusName.BLD: Path(bld_path)
        }
        self._records: Optional[Dict[CorpusName, Any]] = None

    @classmethod
    def from_records(cls, usc: Any = None, bld: Any = None) -> "CorpusLoader":
        """
        Build a loader over already decoded records.

        Args:
            usc: Raw USC records (a list of dicts, as decoded from JSON).
            bld: Raw BLD records.
        """
        loader = cls.__new__(cls)
        loader.paths = {}
        loader._records = {
            CorpusName.USC: [] if usc is None else usc,
            CorpusName.BLD: [] if bld is None else bld
        }
        return loader

    def read(self, name: CorpusName) -> List[Entry]:
        """
        Read and validate one corpus.

        Raises:
            LoadError: If the source is unreadable, not UTF-8, not JSON,
                       or contains an invalid record.
        """
        name = CorpusName(name)

        if self._records is not None:
            records = self._records[name]
        else:
            records = self._read_json(name, self.paths[name])

        entries = validate_corpus(name, records)
        logger.debug(f"Validated {len(entries)} {name.value} records")
        return entries

    def read_all(self, enforce_unique_permalinks: bool = True) -> Dict[CorpusName, List[Entry]]:
        """
        Read and validate both corpora, USC first.

        Nothing is returned unless both corpora are valid.

        Args:
            enforce_unique_permalinks: Reject permalinks shared by two records.

        Raises:
            LoadError: On the first corpus that fails.
        """
        corpora = {name: self.read(name) for name in (CorpusName.USC, CorpusName.BLD)}

        if enforce_unique_permalinks:
            check_unique_permalinks(corpora)

        return corpora

    @staticmethod
    def _read_json(name: CorpusName, path: Path) -> Any:
        """Decode a corpus file, mapping every failure to LoadError."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except OSError as e:
            raise LoadError(
                f"Cannot read corpus {name.value} from {path}: {e}",
                corpus=name.value,
                details={"path": str(path)}
            )
        except UnicodeDecodeError as e:
            raise LoadError(
                f"Corpus {name.value} is not valid UTF-8: {e}",
                corpus=name.value,
                details={"path": str(path)}
            )
        except json.JSONDecodeError as e:
            raise LoadError(
                f"Invalid JSON in corpus {name.value}: {e}",
                corpus=name.value,
                details={"path": str(path), "line": e.lineno}
            )
