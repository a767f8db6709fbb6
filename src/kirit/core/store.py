"""JSON file storage for the kirit collections.

Each collection (notes, todos, ideas) lives in one JSON array file inside
the data directory. A file that cannot be parsed as a JSON array fails open
to an empty collection. Array items that do not validate as records are
held aside untouched and written back after the valid records on the next
save, so a hand edit never costs the rest of the file. Writes replace the
whole file.

Key components:
    - StoragePaths: data directory and the three file paths
    - RecordStore: typed load/save for one collection
    - Stores: the three stores built from one StoragePaths
    - init_storage(): create the directory and seed missing files
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

import pydantic

from kirit.core.models import Idea, Note, Record, Todo
from kirit.core.result import Err, Ok, Result, StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Record)

NOTES_FILENAME = "notes.json"
TODOS_FILENAME = "todos.json"
IDEAS_FILENAME = "ideas.json"
JSON_INDENT = 2


@dataclass(frozen=True)
class StoragePaths:
    data_dir: Path
    notes_file: Path
    todos_file: Path
    ideas_file: Path

    @classmethod
    def from_dir(cls, data_dir: Path) -> StoragePaths:
        root = data_dir.expanduser()
        return cls(
            data_dir=root,
            notes_file=root / NOTES_FILENAME,
            todos_file=root / TODOS_FILENAME,
            ideas_file=root / IDEAS_FILENAME,
        )

    @property
    def files(self) -> tuple[Path, Path, Path]:
        return (self.notes_file, self.todos_file, self.ideas_file)


def _dump(payload: list[dict[str, Any]]) -> str:
    return json.dumps(payload, indent=JSON_INDENT, ensure_ascii=False)


def _write_atomic(path: Path, text: str) -> None:
    """Write to a sibling temp file, then replace the target in one step."""
    temp_path = path.with_name(f".{path.name}.tmp")
    try:
        with temp_path.open("w", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(temp_path, path)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise StorageWriteError(
            f"Cannot write {path.name}: {exc.strerror or exc}", context={"path": str(path)}
        ) from exc


def init_storage(paths: StoragePaths) -> None:
    """Create the data directory and seed each missing collection file with ``[]``."""
    try:
        paths.data_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageWriteError(
            f"Cannot create data directory: {exc.strerror or exc}",
            context={"path": str(paths.data_dir)},
        ) from exc

    for path in paths.files:
        if not path.exists():
            logger.debug("Seeding empty collection at %s", path)
            _write_atomic(path, _dump([]))


class RecordStore(Generic[R]):
    """Load and save one collection of records backed by a JSON array file."""

    def __init__(self, path: Path, model: type[R]) -> None:
        self.path = path
        self.model = model
        # raw items from the last read that failed validation
        self.held: list[Any] = []

    def __repr__(self) -> str:
        return f"RecordStore({self.model.__name__}, {self.path})"

    def read(self) -> Result[list[R], StorageReadError]:
        """Parse the backing file, reporting why it could not be read.

        Items that fail validation are kept in ``held`` rather than failing
        the whole read.
        """
        self.held = []
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Err(StorageReadError(f"{self.path.name} does not exist"))
        except (OSError, UnicodeDecodeError) as exc:
            return Err(StorageReadError(f"Cannot read {self.path.name}: {exc}"))

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            return Err(StorageReadError(f"Invalid JSON in {self.path.name}: {exc}"))

        if not isinstance(data, list):
            return Err(StorageReadError(f"{self.path.name} must contain a JSON array"))

        records: list[R] = []
        for position, item in enumerate(data, start=1):
            try:
                records.append(self.model.model_validate(item))
            except pydantic.ValidationError as exc:
                logger.debug(
                    "Holding malformed record %d in %s: %s",
                    position,
                    self.path.name,
                    exc.errors(include_url=False),
                )
                self.held.append(item)
        return Ok(records)

    def load(self) -> list[R]:
        """Return every record, or an empty list when the file is unreadable."""
        match self.read():
            case Ok(records):
                return records
            case Err(err):
                logger.debug("Treating %s as empty: %s", self.path, err)
                return []

    def save(self, records: Sequence[R]) -> None:
        """Overwrite the file with ``records`` followed by any held items.

        Raises StorageWriteError on failure.
        """
        payload = [record.to_json() for record in records] + self.held
        _write_atomic(self.path, _dump(payload))
        logger.debug(
            "Saved %d record(s) and %d held item(s) to %s", len(records), len(self.held), self.path
        )

    def clear(self) -> None:
        self.held = []
        self.save([])


@dataclass(frozen=True)
class Stores:
    notes: RecordStore[Note]
    todos: RecordStore[Todo]
    ideas: RecordStore[Idea]

    @classmethod
    def open(cls, paths: StoragePaths) -> Stores:
        return cls(
            notes=RecordStore(paths.notes_file, Note),
            todos=RecordStore(paths.todos_file, Todo),
            ideas=RecordStore(paths.ideas_file, Idea),
        )


__all__ = [
    "RecordStore",
    "StoragePaths",
    "Stores",
    "init_storage",
]
