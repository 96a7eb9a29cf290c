"""Key-value store abstractions backing client-side persistence."""
from __future__ import annotations

import json
import logging
import os
import sqlite3
import tempfile
import time
from pathlib import Path
from typing import Dict, Optional


LOGGER = logging.getLogger(__name__)


class KeyValueStore:
    """Interface for flat text persistence keyed by name."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store for tests and throwaway sessions."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JSONKeyValueStore(KeyValueStore):
    """Single JSON-file-backed store suitable for local runs."""

    def __init__(self, path: str = "data/stilo_store.json") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> Dict[str, str]:
        """Read the store file; an unreadable file counts as empty until the next write."""

        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text() or "{}")
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            LOGGER.warning("Discarding unreadable store file", extra={"path": str(self.path), "reason": str(exc)})
            return {}
        if not isinstance(data, dict):
            LOGGER.warning("Discarding store file without a JSON object", extra={"path": str(self.path)})
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as handle:
                handle.write(json.dumps(data, indent=2))
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise


class SQLiteKeyValueStore(KeyValueStore):
    """SQLite-backed store for lightweight durability."""

    def __init__(self, db_path: str = "data/stilo_store.db") -> None:
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
                    value TEXT NOT NULL,
                    updated_at REAL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?)\n"
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
                (key, value, time.time()),
            )


__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JSONKeyValueStore",
    "SQLiteKeyValueStore",
]
