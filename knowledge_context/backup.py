"""JSON export, import and periodic backup of the knowledge corpus."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from knowledge_context.models import KnowledgeItem
from knowledge_context.store.base import KnowledgeStore, StorageError
from knowledge_context.store.json_file import write_json_atomic

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
DEFAULT_BACKUP_INTERVAL_DAYS = 7


def export_knowledge(store: KnowledgeStore, path: str | Path) -> int:
    """Write every item in *store* to *path* as a JSON array.

    The file is replaced atomically, so a failed export leaves any
    previous backup intact.

    Returns
    -------
    int
        Number of items written.

    Raises
    ------
    StorageError
        If the file cannot be written.
    """
    items = store.get_all_items()
    path = Path(path)
    try:
        write_json_atomic(path, [item.to_dict() for item in items])
    except OSError as exc:
        msg = f"Failed to write backup {path}: {exc}"
        raise StorageError(msg) from exc
    logger.info("Exported %d knowledge items to %s", len(items), path)
    return len(items)


def import_knowledge(store: KnowledgeStore, path: str | Path, *, replace: bool = True) -> int:
    """Load a JSON export into *store*.

    Every entry is validated before the store is modified, so a malformed
    file leaves the store untouched.

    Parameters
    ----------
    store : KnowledgeStore
        Target store.
    path : str | Path
        JSON file produced by :func:`export_knowledge`.
    replace : bool
        Clear the store first; otherwise append.

    Returns
    -------
    int
        Number of items imported.

    Raises
    ------
    StorageError
        If the file cannot be read or is malformed.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        msg = f"Failed to read backup {path}: {exc}"
        raise StorageError(msg) from exc
    if not isinstance(data, list):
        msg = f"Backup {path} must contain a JSON array"
        raise StorageError(msg)
    try:
        items = [KnowledgeItem.from_dict(entry) for entry in data]
    except ValueError as exc:
        msg = f"Malformed item in backup {path}: {exc}"
        raise StorageError(msg) from exc

    if replace:
        store.clear()
    store.bulk_add_items(items)
    logger.info("Imported %d knowledge items from %s (replace=%s)", len(items), path, replace)
    return len(items)


def backup_if_due(
    store: KnowledgeStore,
    path: str | Path,
    *,
    interval_days: float = DEFAULT_BACKUP_INTERVAL_DAYS,
    now: int | None = None,
) -> bool:
    """Export *store* to *path* when the last backup is older than the interval.

    The time of the last backup is kept next to the backup in
    ``<path>.state.json``.

    Parameters
    ----------
    store : KnowledgeStore
        Store to back up.
    path : str | Path
        Backup file.
    interval_days : float
        Minimum age of the previous backup before a new one is written.
    now : int | None
        Current time in epoch milliseconds; defaults to the wall clock.

    Returns
    -------
    bool
        ``True`` if a backup was written.
    """
    path = Path(path)
    state_path = path.with_name(path.name + ".state.json")
    now = now if now is not None else int(time.time() * 1000)

    last = _read_last_backup(state_path)
    if last is not None and now - last < interval_days * DAY_MS:
        logger.debug("Backup not due (last=%d now=%d)", last, now)
        return False

    export_knowledge(store, path)
    try:
        write_json_atomic(state_path, {"last_backup": now})
    except OSError as exc:
        msg = f"Failed to write backup state {state_path}: {exc}"
        raise StorageError(msg) from exc
    return True


def _read_last_backup(state_path: Path) -> int | None:
    """Return the recorded backup time, or ``None`` if unknown."""
    if not state_path.exists():
        return None
    try:
        data = json.loads(state_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        logger.warning("Unreadable backup state %s, treating backup as due", state_path)
        return None
    last = data.get("last_backup") if isinstance(data, dict) else None
    return int(last) if isinstance(last, (int, float)) else None
