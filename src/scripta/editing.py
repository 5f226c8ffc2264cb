"""Keyboard behaviour inside an element, and autocomplete suggestions.

These functions translate editor input into :class:`DocumentStore`
operations. They hold no state of their own.
"""

from __future__ import annotations

from dataclasses import dataclass

from scripta.document.store import DocumentStore
from scripta.models import SCENE_PREFIXES, TRANSITIONS, ElementType, type_for_shortcut


@dataclass(frozen=True)
class KeyPress:
    """A key event inside an element's text field.

    ``caret`` is the cursor offset in the element content; None means the
    cursor is somewhere in the middle (or unknown).
    """

    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    caret: int | None = None


def suggestions_for(element_type: ElementType, content: str) -> list[str]:
    """Autocomplete candidates for what has been typed so far."""
    if not content:
        return []
    typed = content.upper()
    if element_type == ElementType.SCENE_HEADING:
        if len(content) > 4:
            return []
        return [p for p in SCENE_PREFIXES if p.startswith(typed) and p != typed]
    if element_type == ElementType.TRANSITION:
        return [t for t in TRANSITIONS if t.startswith(typed) and t != typed]
    return []


def handle_key(store: DocumentStore, element_id: str, press: KeyPress) -> bool:
    """Apply ``press`` to the element ``element_id``.

    Returns:
        True if the key was consumed; False leaves it to the text field
        (for example Shift+Enter, which inserts a line break).
    """
    element = store.get_element(element_id)
    if element is None:
        return False

    key = press.key

    if key == "Tab" and not press.shift:
        store.cycle_element_type(element_id)
        return True

    if key == "Enter":
        if press.shift:
            return False
        store.insert_element_after(
            element_id, store.get_next_element_type(element.type)
        )
        return True

    if key == "Backspace" and element.content == "":
        # The first element is kept even when empty
        if store.index_of(element_id) > 0:
            store.delete_element(element_id)
        return True

    if (press.ctrl or press.meta) and len(key) == 1 and key in "1234567":
        forced = type_for_shortcut(key)
        if forced is not None:
            store.set_element_type(element_id, forced)
        return True

    if key == "ArrowUp" and press.caret == 0:
        store.move_to_prev_element()
        return True

    if key == "ArrowDown" and press.caret == len(element.content):
        store.move_to_next_element()
        return True

    return False
