"""Key/value storage port standing in for browser local storage."""
from __future__ import annotations

import json
import logging
import re
import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from studio_app.errors import StorageError

LOGGER = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")


def _validate_key(key: str) -> str:
    if not _KEY_PATTERN.match(key or ""):
        raise ValueError(f"Invalid storage key {key!r}")
    return key


class LocalStorage:
    """Interface for string-valued persistent state."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    def keys(self) -> List[str]:
        raise NotImplementedError


class InMemoryLocalStorage(LocalStorage):
    """Dictionary-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._values[_validate_key(key)] = str(value)

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return sorted(self._values)


class JSONFileLocalStorage(LocalStorage):
    """One file per key under a directory, suitable for local runs."""

    def __init__(self, base_dir: str | Path = "data/storage") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{_validate_key(key)}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        with self._lock:
            if not path.exists():
                return None
            return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        with self._lock:
            tmp_path.write_text(str(value), encoding="utf-8")
            tmp_path.replace(path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        with self._lock:
            if path.exists():
                path.unlink()

    def keys(self) -> List[str]:
        return sorted(path.stem for path in self.base_dir.glob("*.json"))


class SQLiteLocalStorage(LocalStorage):
    """SQLite-backed storage for lightweight durability."""

    def __init__(self, db_path: str | Path = "data/storage.db") -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )

    def get_item(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO kv(key, value) VALUES (?, ?)\n"
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (_validate_key(key), str(value)),
            )

    def remove_item(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        return [row["key"] for row in rows]


def read_json(storage: LocalStorage, key: str, default: Any) -> Any:
    """Decode a stored JSON value, falling back to ``default`` on any corruption."""

    raw = storage.get_item(key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        LOGGER.warning("Discarding corrupt stored value", extra={"storage_key": key})
        return default


def write_json(storage: LocalStorage, key: str, value: Any) -> None:
    """Persist ``value``; backend failures surface as :class:`StorageError`."""

    try:
        storage.set_item(key, json.dumps(value))
    except (OSError, sqlite3.Error) as exc:
        LOGGER.error("Storage write failed", extra={"storage_key": key, "error": str(exc)})
        raise StorageError("Your changes could not be saved. Please try again.") from exc


def build_local_storage(backend: str, path: str | None = None) -> LocalStorage:
    """Create the configured storage backend."""

    if backend == "memory":
        return InMemoryLocalStorage()
    if backend == "sqlite":
        return SQLiteLocalStorage(path or "data/storage.db")
    if backend == "json":
        return JSONFileLocalStorage(path or "data/storage")
    raise ValueError(f"Unsupported storage backend '{backend}'")


__all__ = [
    "LocalStorage",
    "InMemoryLocalStorage",
    "JSONFileLocalStorage",
    "SQLiteLocalStorage",
    "build_local_storage",
    "read_json",
    "write_json",
]
