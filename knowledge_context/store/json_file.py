"""Knowledge store persisted to a single JSON file."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterable
from pathlib import Path

from knowledge_context.models import KnowledgeItem
from knowledge_context.store.base import KnowledgeStore, StorageError, StoreRegistry

logger = logging.getLogger(__name__)

_PATH_LOCKS: dict[Path, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """Return the lock shared by every store on the same resolved *path*."""
    key = path.resolve()
    with _PATH_LOCKS_GUARD:
        return _PATH_LOCKS.setdefault(key, threading.Lock())


def write_json_atomic(path: Path, data: object) -> None:
    """Write *data* as JSON through a temporary sibling and ``os.replace``.

    Raises
    ------
    OSError
        If the file cannot be written. No temporary file is left behind.
    """
    payload = json.dumps(data, indent=2, ensure_ascii=False)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as fh:
            tmp_name = fh.name
            fh.write(payload + "\n")
        os.replace(tmp_name, path)
    except OSError:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


@StoreRegistry.register("json")
class JsonFileKnowledgeStore(KnowledgeStore):
    """Store that keeps the whole corpus in one JSON array on disk.

    Every write rewrites the file through a temporary sibling and
    ``os.replace``, so readers never observe a half-written file. Writes
    are serialized across all store instances that share a file path.

    Parameters
    ----------
    path : str | Path
        Location of the JSON file. A missing file is an empty corpus.
    """

    name = "json"

    def __init__(self, path: str | Path = "knowledge.json", **kwargs) -> None:
        self._path = Path(path)
        self._lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def add_item(self, item: KnowledgeItem) -> None:
        with self._lock:
            items = self._read()
            items.append(item)
            self._write(items)

    def bulk_add_items(self, items: Iterable[KnowledgeItem]) -> None:
        batch = list(items)
        with self._lock:
            current = self._read()
            current.extend(batch)
            self._write(current)
        logger.debug("Added %d items to %s", len(batch), self._path)

    def get_all_items(self) -> list[KnowledgeItem]:
        with self._lock:
            return self._read()

    def clear(self) -> None:
        with self._lock:
            self._write([])

    def count(self) -> int:
        return len(self.get_all_items())

    def _read(self) -> list[KnowledgeItem]:
        if not self._path.exists():
            return []
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Failed to read knowledge file {self._path}: {exc}"
            raise StorageError(msg) from exc
        if not isinstance(data, list):
            msg = f"Knowledge file {self._path} must contain a JSON array"
            raise StorageError(msg)
        try:
            return [KnowledgeItem.from_dict(entry) for entry in data]
        except ValueError as exc:
            msg = f"Malformed item in knowledge file {self._path}: {exc}"
            raise StorageError(msg) from exc

    def _write(self, items: list[KnowledgeItem]) -> None:
        try:
            write_json_atomic(self._path, [item.to_dict() for item in items])
        except OSError as exc:
            msg = f"Failed to write knowledge file {self._path}: {exc}"
            raise StorageError(msg) from exc
