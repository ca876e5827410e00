"""
Key-Value Store
===============
Flat string key -> string value persistence used for whole-snapshot storage.

Each component receives a :class:`NamespacedStore` so the entry store and the
profile store never read or overwrite each other's keys:

    entries:snapshot      -> JSON array of MoodEntry
    personality:profile   -> JSON object of UserPersonality

Backends:
- InMemoryKeyValueStore: tests and throwaway sessions
- FileKeyValueStore: one JSON object on local disk, rewritten atomically
- SupabaseKeyValueStore: a two-column table (key, value) upserted on key

Every backend raises :class:`StorageError` on failure so callers handle one
exception type regardless of where the bytes live.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from moodjournal.config import get_settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class StorageError(Exception):
    """A backend could not read or write a key."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Storage error for key {key!r}: {reason}")


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


# ---------------------------------------------------------------------------
# Backends
# ---------------------------------------------------------------------------


class InMemoryKeyValueStore:
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileKeyValueStore:
    """All keys in one JSON object file.

    Writes go to a temporary file in the same directory which is then
    renamed over the original, so a crash mid-write leaves the previous
    document intact.

    A document that cannot be decoded is moved aside to ``<name>.corrupt``
    and the store continues empty, so the next write starts a fresh file.
    """

    CORRUPT_SUFFIX = ".corrupt"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> Optional[str]:
        return self._read_all(key).get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all(key)
        data[key] = value
        self._write_all(key, data)

    def delete(self, key: str) -> None:
        data = self._read_all(key)
        if key in data:
            del data[key]
            self._write_all(key, data)

    def _read_all(self, key: str) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(key, str(exc)) from exc
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._quarantine(key, f"not valid JSON: {exc}")
            return {}
        if not isinstance(data, dict):
            self._quarantine(key, "not a JSON object")
            return {}
        return data

    def _quarantine(self, key: str, reason: str) -> None:
        backup = self._path.with_name(self._path.name + self.CORRUPT_SUFFIX)
        try:
            os.replace(self._path, backup)
        except OSError as exc:
            raise StorageError(key, f"could not move aside unreadable file: {exc}") from exc
        logger.warning("Settings file %s is %s, moved to %s", self._path, reason, backup)

    def _write_all(self, key: str, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            raise StorageError(key, str(exc)) from exc


class SupabaseKeyValueStore:
    """Key/value rows in a Supabase table with a UNIQUE(key) constraint."""

    def __init__(self, client, table: str = "kv_settings") -> None:
        self._db = client
        self._table = table

    def get(self, key: str) -> Optional[str]:
        try:
            result = (
                self._db.table(self._table)
                .select("value")
                .eq("key", key)
                .maybe_single()
                .execute()
            )
        except Exception as exc:
            raise StorageError(key, str(exc)) from exc

        # maybe_single() returns None instead of a response when no row matches
        if result is None or not result.data:
            return None
        return result.data["value"]

    def set(self, key: str, value: str) -> None:
        try:
            result = (
                self._db.table(self._table)
                .upsert({"key": key, "value": value}, on_conflict="key")
                .execute()
            )
        except Exception as exc:
            raise StorageError(key, str(exc)) from exc

        if not result.data:
            raise StorageError(key, "upsert returned no rows")

    def delete(self, key: str) -> None:
        try:
            self._db.table(self._table).delete().eq("key", key).execute()
        except Exception as exc:
            raise StorageError(key, str(exc)) from exc


# ---------------------------------------------------------------------------
# Namespacing
# ---------------------------------------------------------------------------


class NamespacedStore:
    """Prefixes every key with ``<namespace>:``."""

    def __init__(self, store: KeyValueStore, namespace: str) -> None:
        if not namespace or ":" in namespace:
            raise ValueError(f"Invalid namespace: {namespace!r}")
        self._store = store
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> Optional[str]:
        return self._store.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._store.set(self._key(key), value)

    def delete(self, key: str) -> None:
        self._store.delete(self._key(key))


# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_default_store: KeyValueStore | None = None


def get_kv_store() -> KeyValueStore:
    global _default_store
    if _default_store is None:
        settings = get_settings()
        if settings.storage_backend == "supabase":
            from moodjournal.db.supabase import get_supabase_client

            _default_store = SupabaseKeyValueStore(
                get_supabase_client(), table=settings.supabase_kv_table
            )
        elif settings.storage_backend == "file":
            _default_store = FileKeyValueStore(settings.storage_path)
        else:
            _default_store = InMemoryKeyValueStore()
        logger.info("Using %s key-value storage", settings.storage_backend)
    return _default_store
