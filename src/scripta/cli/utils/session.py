"""Open and save scripts for CLI commands."""

from __future__ import annotations

from scripta.config import ScriptaSettings, get_settings
from scripta.document import DocumentStore
from scripta.exceptions import ScriptNotFoundError, StorageError, ValidationError
from scripta.models import ElementType, ScreenplayElement, type_for_shortcut
from scripta.storage import FileStorage


def create_store(settings: ScriptaSettings | None = None) -> DocumentStore:
    """A store backed by the configured storage directory."""
    settings = settings or get_settings()
    return DocumentStore(FileStorage(settings.storage_path), settings)


def open_store(
    script_id: str | None = None, settings: ScriptaSettings | None = None
) -> DocumentStore:
    """Load a saved script into a new store.

    Raises:
        ScriptNotFoundError: If no matching script is saved.
    """
    store = create_store(settings)
    if not store.load(script_id):
        raise ScriptNotFoundError(
            message=(
                f"No saved script with id '{script_id}'"
                if script_id
                else "No saved scripts found"
            ),
            hint="Run 'scripta list' to see saved scripts or 'scripta new' to start one",
            details={"storage_path": str(store.settings.storage_path)},
        )
    return store


def save_store(store: DocumentStore) -> None:
    """Persist the store.

    Raises:
        StorageError: If the script could not be written.
    """
    if not store.save():
        raise StorageError(
            message="Failed to save script",
            hint="Check that the storage directory is writable",
            details={"storage_path": str(store.settings.storage_path)},
        )


def resolve_element(store: DocumentStore, ref: str) -> ScreenplayElement:
    """Find an element by 1-based position or by id.

    Raises:
        ValidationError: If nothing matches ``ref``.
    """
    elements = store.elements
    if ref.isdigit() and 1 <= int(ref) <= len(elements):
        return elements[int(ref) - 1]
    element = store.get_element(ref)
    if element is None:
        raise ValidationError(
            message=f"No element '{ref}'",
            hint=f"Use a position between 1 and {len(elements)} or an element id",
        )
    return element


def parse_element_type(value: str) -> ElementType:
    """Accept an element type by name ("scene-heading", "scene_heading") or digit.

    Raises:
        ValidationError: If ``value`` names no element type.
    """
    normalized = value.strip().lower().replace("_", "-")
    if normalized.isdigit():
        by_digit = type_for_shortcut(normalized)
        if by_digit is not None:
            return by_digit
    try:
        return ElementType(normalized)
    except ValueError as e:
        raise ValidationError(
            message=f"Unknown element type '{value}'",
            hint="Choose one of: " + ", ".join(t.value for t in ElementType),
        ) from e
