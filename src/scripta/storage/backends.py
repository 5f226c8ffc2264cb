"""Key-value storage backends for saved scripts."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Protocol, runtime_checkable
from uuid import uuid4

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@runtime_checkable
class KeyValueStorage(Protocol):
    """Synchronous string-to-string storage."""

    def get_item(self, key: str) -> str | None:
        """Return the value stored under ``key`` or None."""
        ...

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def remove_item(self, key: str) -> None:
        """Delete ``key``; missing keys are ignored."""
        ...

    def keys(self) -> list[str]:
        """Return all stored keys."""
        ...


class MemoryStorage:
    """In-process storage, keys kept in insertion order."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class FileStorage:
    """One ``<key>.json`` file per key inside a directory.

    Writes go through a temporary file and an atomic rename so a crash never
    leaves a half-written record behind.
    """

    suffix = ".json"

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not key or _UNSAFE_KEY_CHARS.search(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.suffix}"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.is_file():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        temp_path = self.directory / f".{path.name}.{uuid4().hex}.tmp"
        try:
            with temp_path.open("w", encoding="utf-8") as handle:
                handle.write(value)
                handle.flush()
                os.fsync(handle.fileno())
            temp_path.replace(path)
        finally:
            if temp_path.exists():
                temp_path.unlink()

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            path.name[: -len(self.suffix)]
            for path in self.directory.iterdir()
            if path.is_file()
            and path.name.endswith(self.suffix)
            and not path.name.startswith(".")
        )
