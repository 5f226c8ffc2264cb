"""The screenplay document: store, derived state and autosave."""

from scripta.document.autosave import AutosaveScheduler
from scripta.document.derive import (
    DerivedState,
    derive_scenes,
    derive_state,
    extract_characters,
    validate_invariants,
)
from scripta.document.store import DEFAULT_TITLE, DocumentStore, ScriptState

__all__ = [
    "DEFAULT_TITLE",
    "AutosaveScheduler",
    "DerivedState",
    "DocumentStore",
    "ScriptState",
    "derive_scenes",
    "derive_state",
    "extract_characters",
    "validate_invariants",
]
