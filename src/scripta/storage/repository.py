"""Persist scripts as JSON records in a key-value storage."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from scripta.config import get_logger
from scripta.exceptions import StorageError
from scripta.models import Scene, ScreenplayElement
from scripta.storage.backends import KeyValueStorage

logger = get_logger(__name__)

DEFAULT_KEY_PREFIX = "scripta-script-"


class ScriptRecord(BaseModel):
    """The persisted form of a script.

    Characters are not stored; they are re-derived from the elements on load.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    author: str = ""
    elements: list[ScreenplayElement] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)
    saved_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), alias="savedAt"
    )

    def to_json(self) -> str:
        """Serialize with the camelCase field names used on disk."""
        return self.model_dump_json(by_alias=True)


class ScriptRepository:
    """Save and load :class:`ScriptRecord` objects by script id."""

    def __init__(
        self, storage: KeyValueStorage, key_prefix: str = DEFAULT_KEY_PREFIX
    ) -> None:
        self.storage = storage
        self.key_prefix = key_prefix

    def key_for(self, script_id: str) -> str:
        """Return the storage key of ``script_id``."""
        return f"{self.key_prefix}{script_id}"

    def script_keys(self) -> list[str]:
        """Return every storage key that holds a script."""
        return [k for k in self.storage.keys() if k.startswith(self.key_prefix)]

    def save(self, record: ScriptRecord) -> None:
        """Write ``record`` under its id.

        Raises:
            StorageError: If serialization or the storage write fails.
        """
        key = self.key_for(record.id)
        try:
            payload = record.to_json()
            self.storage.set_item(key, payload)
        except (OSError, ValueError, TypeError) as e:
            raise StorageError(
                message=f"Failed to save script {record.id}",
                hint="Check that the storage location is writable and has free space",
                details={"key": key, "error": f"{type(e).__name__}: {e}"},
            ) from e
        logger.debug("Saved script", script_id=record.id, key=key, size=len(payload))

    def load(self, script_id: str | None = None) -> ScriptRecord | None:
        """Read a script record.

        Without ``script_id`` the first stored script is returned.

        Returns:
            The record, or None when nothing is stored or it cannot be read.
        """
        if script_id:
            key: str | None = self.key_for(script_id)
        else:
            keys = self.script_keys()
            key = keys[0] if keys else None
        if key is None:
            logger.debug("No saved script found", key_prefix=self.key_prefix)
            return None

        try:
            data = self.storage.get_item(key)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read saved script", key=key, error=str(e))
            return None
        if not data:
            return None

        try:
            return ScriptRecord.model_validate_json(data)
        except PydanticValidationError as e:
            logger.warning(
                "Saved script is malformed",
                key=key,
                error_count=e.error_count(),
            )
            return None

    def list_records(self) -> list[ScriptRecord]:
        """Return every readable saved script."""
        records = []
        for key in self.script_keys():
            record = self.load(key[len(self.key_prefix) :])
            if record is not None:
                records.append(record)
        return records

    def delete(self, script_id: str) -> None:
        """Remove a saved script; unknown ids are ignored."""
        self.storage.remove_item(self.key_for(script_id))
        logger.info("Deleted script", script_id=script_id)
