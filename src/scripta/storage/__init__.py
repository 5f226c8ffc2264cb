"""Storage of saved scripts."""

from scripta.storage.backends import FileStorage, KeyValueStorage, MemoryStorage
from scripta.storage.repository import (
    DEFAULT_KEY_PREFIX,
    ScriptRecord,
    ScriptRepository,
)

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "ScriptRecord",
    "ScriptRepository",
]
