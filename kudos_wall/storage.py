"""Key/value storage backends for client-side session data.

``FileStore`` is durable: a single JSON object under the kudos home
directory, kept across CLI invocations. ``MemoryStore`` is session
scoped: it lives exactly as long as the process (or ``kudos shell``).
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Optional, Protocol


class StorageUnavailableError(Exception):
    """The backing storage could not be read or written."""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set_many(self, items: Mapping[str, str]) -> None: ...

    def remove_many(self, keys: Iterable[str]) -> None: ...

    def clear(self) -> None: ...


class StorageScope(str, Enum):
    """Lifetime of stored session data."""

    durable = "durable"
    session = "session"


class MemoryStore:
    """In-process store; contents vanish with the object."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        self._data.update(items)

    def remove_many(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class FileStore:
    """JSON-file store. Each write is one read-modify-write of the file.

    Storage path defaults to ``~/.kudos/session.json``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path is not None else Path.home() / ".kudos" / "session.json"

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            raise StorageUnavailableError(f"Cannot read {self._path}: {e}") from e
        return {str(k): str(v) for k, v in data.items()} if isinstance(data, dict) else {}

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            raise StorageUnavailableError(f"Cannot write {self._path}: {e}") from e

    # ------------------------------------------------------------------
    # KeyValueStore
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        data = self._read()
        data.update(items)
        self._write(data)

    def remove_many(self, keys: Iterable[str]) -> None:
        data = self._read()
        keys = [k for k in keys if k in data]
        if not keys:
            return
        for key in keys:
            del data[key]
        self._write(data)

    def clear(self) -> None:
        self._write({})


def open_store(scope: StorageScope, home_dir: Optional[Path] = None) -> KeyValueStore:
    """Return the store backing *scope*."""
    if StorageScope(scope) is StorageScope.session:
        return MemoryStore()
    base = Path(home_dir) if home_dir is not None else Path.home() / ".kudos"
    return FileStore(base / "session.json")
