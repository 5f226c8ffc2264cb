"""The document store: sole owner and mutator of the active script."""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, Field

from scripta.analytics import ScriptAnalytics, compute_analytics
from scripta.config import ScriptaSettings, get_logger, get_settings
from scripta.document.derive import derive_state
from scripta.exceptions import StorageError
from scripta.models import (
    ELEMENT_CONFIG,
    Character,
    ElementType,
    Scene,
    ScreenplayElement,
    create_element,
    generate_id,
    next_in_cycle,
    normalize_element_content,
)
from scripta.storage import (
    KeyValueStorage,
    MemoryStorage,
    ScriptRecord,
    ScriptRepository,
)

logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled Screenplay"

Listener = Callable[[], None]


def _now() -> datetime:
    return datetime.now(UTC)


class ScriptState(BaseModel):
    """Everything the editor knows about the active script."""

    id: str = Field(default_factory=generate_id)
    title: str = DEFAULT_TITLE
    author: str = ""
    elements: list[ScreenplayElement] = Field(
        default_factory=lambda: [create_element(ElementType.SCENE_HEADING)]
    )
    scenes: list[Scene] = Field(default_factory=list)
    characters: dict[str, Character] = Field(default_factory=dict)
    active_element_id: str | None = None
    # View flags, never persisted
    focus_mode: bool = False
    left_panel_open: bool = True
    right_panel_open: bool = True
    is_dirty: bool = False
    last_saved: datetime | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @classmethod
    def fresh(cls) -> ScriptState:
        """A new script holding one empty scene heading, which is active."""
        state = cls()
        state.scenes = derive_state(state.elements).scenes
        state.active_element_id = state.elements[0].id
        return state

    def index_of(self, element_id: str | None) -> int:
        """Position of ``element_id`` in the element sequence, or -1."""
        if element_id is None:
            return -1
        for index, element in enumerate(self.elements):
            if element.id == element_id:
                return index
        return -1

    def to_record(self) -> ScriptRecord:
        """Build the persisted form of this script."""
        return ScriptRecord(
            id=self.id,
            title=self.title,
            author=self.author,
            elements=[e.model_copy() for e in self.elements],
            scenes=[s.model_copy(deep=True) for s in self.scenes],
        )


class DocumentStore:
    """Holds one script and exposes every editing operation on it.

    Operations are synchronous. Each mutation re-derives scenes and
    characters where the element sequence changed, marks the script dirty
    and notifies subscribers before returning. Ids that do not exist are
    ignored rather than raising. Persistence is only performed by
    :meth:`save`; timed autosaving lives in
    :class:`scripta.document.autosave.AutosaveScheduler`.

    All operations, including :meth:`save`, hold one re-entrant lock, so a
    save running on a timer thread never interleaves with an edit.
    Listeners are called with the lock held.
    """

    def __init__(
        self,
        storage: KeyValueStorage | None = None,
        settings: ScriptaSettings | None = None,
    ) -> None:
        """Initialize the store with a fresh script.

        Args:
            storage: Where scripts are persisted; in-memory when omitted
            settings: Settings to use; the global settings when omitted
        """
        self.settings = settings or get_settings()
        self.storage = storage if storage is not None else MemoryStorage()
        self.repository = ScriptRepository(self.storage, self.settings.key_prefix)
        self._lock = threading.RLock()
        self._revision = 0
        self._state = ScriptState.fresh()
        self._listeners: list[Listener] = []

    # Reading

    @property
    def state(self) -> ScriptState:
        """A snapshot of the current script; changing it has no effect."""
        with self._lock:
            return self._state.model_copy(deep=True)

    @property
    def elements(self) -> list[ScreenplayElement]:
        """Copies of the elements in script order."""
        with self._lock:
            return [e.model_copy() for e in self._state.elements]

    @property
    def is_dirty(self) -> bool:
        """Whether the script has changes that are not yet saved."""
        return self._state.is_dirty

    @property
    def revision(self) -> int:
        """Counter bumped by every change to the script."""
        return self._revision

    @property
    def active_element(self) -> ScreenplayElement | None:
        """A copy of the element that has focus, if any."""
        with self._lock:
            index = self._state.index_of(self._state.active_element_id)
            if index == -1:
                return None
            return self._state.elements[index].model_copy()

    def index_of(self, element_id: str | None) -> int:
        """Position of an element in the script, or -1."""
        with self._lock:
            return self._state.index_of(element_id)

    def get_element(self, element_id: str) -> ScreenplayElement | None:
        """Look up an element by id.

        Returns:
            A copy of the element, or None if no element has ``element_id``.
        """
        with self._lock:
            index = self._state.index_of(element_id)
            if index == -1:
                return None
            return self._state.elements[index].model_copy()

    def get_analytics(self) -> ScriptAnalytics:
        """Compute analytics for the current script."""
        with self._lock:
            return compute_analytics(
                self._state.elements,
                self._state.scenes,
                self._state.characters,
                lines_per_page=self.settings.lines_per_page,
                chars_per_line=self.settings.chars_per_line,
            )

    # Subscriptions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every change; returns an unsubscribe function."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _commit(self, *, derive: bool = False) -> None:
        if derive:
            self.update_derived_state()
        self._revision += 1
        self._state.is_dirty = True
        self._state.updated_at = _now()
        self._notify()

    def update_derived_state(self) -> None:
        """Recompute scenes and characters from the element sequence."""
        with self._lock:
            derived = derive_state(self._state.elements, self._state.scenes)
            self._state.scenes = derived.scenes
            self._state.characters = derived.characters

    # Metadata

    def set_title(self, title: str) -> None:
        """Set the script title."""
        with self._lock:
            self._state.title = title
            self._commit()

    def set_author(self, author: str) -> None:
        """Set the script author."""
        with self._lock:
            self._state.author = author
            self._commit()

    # Elements

    def update_element(self, element_id: str, content: str) -> None:
        """Replace the content of an element, applying its casing rule.

        Args:
            element_id: Element to change; unknown ids are ignored
            content: New text, upper-cased for types that require it
        """
        with self._lock:
            index = self._state.index_of(element_id)
            if index == -1:
                return
            element = self._state.elements[index]
            element.content = normalize_element_content(element.type, content)
            self._commit(derive=True)

    def set_element_type(self, element_id: str, element_type: ElementType) -> None:
        """Change the type of an element; content is re-cased for the new type."""
        with self._lock:
            index = self._state.index_of(element_id)
            if index == -1:
                return
            element_type = ElementType(element_type)
            element = self._state.elements[index]
            element.type = element_type
            element.content = normalize_element_content(
                element_type, element.content
            )
            self._commit(derive=True)

    def insert_element_after(
        self, after_id: str, element_type: ElementType, content: str = ""
    ) -> ScreenplayElement | None:
        """Insert a new element right after ``after_id`` and make it active.

        Returns:
            A copy of the new element, or None if ``after_id`` is unknown.
        """
        with self._lock:
            index = self._state.index_of(after_id)
            if index == -1:
                return None

            element_type = ElementType(element_type)
            anchor = self._state.elements[index]
            element = create_element(
                element_type,
                normalize_element_content(element_type, content),
                anchor.scene_id,
            )
            self._state.elements.insert(index + 1, element)
            self._state.active_element_id = element.id
            logger.debug(
                "Inserted element",
                element_id=element.id,
                element_type=element_type.value,
                position=index + 1,
            )
            self._commit(derive=True)
            return element.model_copy()

    def delete_element(self, element_id: str) -> None:
        """Remove an element; the last remaining element is never removed.

        Focus moves to the element before the deleted one.
        """
        with self._lock:
            elements = self._state.elements
            if len(elements) <= 1:
                return
            index = self._state.index_of(element_id)
            if index == -1:
                return

            del elements[index]
            self._state.active_element_id = elements[max(0, index - 1)].id
            logger.debug("Deleted element", element_id=element_id, position=index)
            self._commit(derive=True)

    def cycle_element_type(self, element_id: str) -> None:
        """Advance an element to the next type in the Tab cycle."""
        with self._lock:
            element = self.get_element(element_id)
            if element is None:
                return
            self.set_element_type(element_id, next_in_cycle(element.type))

    def get_next_element_type(self, current_type: ElementType) -> ElementType:
        """The type Enter should create after an element of ``current_type``."""
        return ELEMENT_CONFIG[ElementType(current_type)].next_element

    # Focus

    def set_active_element(self, element_id: str | None) -> None:
        """Give focus to an element, or clear focus with None.

        Unknown ids leave focus where it is.
        """
        with self._lock:
            if element_id is not None and self._state.index_of(element_id) == -1:
                return
            self._state.active_element_id = element_id
            self._commit()

    def move_to_next_element(self) -> None:
        """Move focus one element down; stays put on the last element."""
        with self._lock:
            index = self._state.index_of(self._state.active_element_id)
            if index == -1 or index >= len(self._state.elements) - 1:
                return
            self._state.active_element_id = self._state.elements[index + 1].id
            self._commit()

    def move_to_prev_element(self) -> None:
        """Move focus one element up; stays put on the first element."""
        with self._lock:
            index = self._state.index_of(self._state.active_element_id)
            if index <= 0:
                return
            self._state.active_element_id = self._state.elements[index - 1].id
            self._commit()

    # View flags

    def toggle_focus_mode(self) -> None:
        """Switch distraction-free mode on or off."""
        with self._lock:
            self._state.focus_mode = not self._state.focus_mode
            self._commit()

    def toggle_left_panel(self) -> None:
        """Show or hide the scene navigator panel."""
        with self._lock:
            self._state.left_panel_open = not self._state.left_panel_open
            self._commit()

    def toggle_right_panel(self) -> None:
        """Show or hide the tools panel."""
        with self._lock:
            self._state.right_panel_open = not self._state.right_panel_open
            self._commit()

    # Scenes

    def reorder_scenes(self, from_index: int, to_index: int) -> None:
        """Move a scene, with all of its elements, to another position.

        ``to_index`` is clamped into range. Elements that belong to no scene
        (those before the first heading) are moved to the end of the script,
        where the next derive pass attaches them to the last scene.
        """
        with self._lock:
            scenes = list(self._state.scenes)
            if not 0 <= from_index < len(scenes):
                return
            to_index = max(0, min(to_index, len(scenes) - 1))

            moved = scenes.pop(from_index)
            scenes.insert(to_index, moved)
            for number, scene in enumerate(scenes, start=1):
                scene.number = number

            by_id = {e.id: e for e in self._state.elements}
            reordered: list[ScreenplayElement] = []
            placed: set[str] = set()
            for scene in scenes:
                for element_id in scene.element_ids:
                    element = by_id.get(element_id)
                    if element is not None and element_id not in placed:
                        reordered.append(element)
                        placed.add(element_id)

            stray = [e for e in self._state.elements if e.id not in placed]
            if stray:
                logger.warning(
                    "Appending elements outside any scene",
                    count=len(stray),
                    element_ids=[e.id for e in stray],
                )
            reordered.extend(stray)

            self._state.scenes = scenes
            self._state.elements = reordered
            logger.debug(
                "Reordered scenes", from_index=from_index, to_index=to_index
            )
            self._commit(derive=True)

    # Whole-document operations

    def new_script(self) -> None:
        """Discard the current script and start an empty one."""
        with self._lock:
            self._state = ScriptState.fresh()
            self._revision += 1
            logger.info("Started new script", script_id=self._state.id)
            self._notify()

    def save(self) -> bool:
        """Persist the script.

        The script is marked clean only if nothing changed between taking
        the record and finishing the write; otherwise it stays dirty so the
        later change is saved too.

        Returns:
            True on success. On failure the error is logged and the script
            stays dirty.
        """
        with self._lock:
            revision = self._revision
            record = self._state.to_record()
            try:
                self.repository.save(record)
            except StorageError as e:
                logger.error(
                    "Failed to save script",
                    script_id=record.id,
                    error=e.message,
                    details=e.details,
                )
                return False

            self._state.last_saved = record.saved_at
            if self._revision == revision:
                self._state.is_dirty = False
            else:
                logger.debug(
                    "Script changed during save, keeping it dirty",
                    script_id=record.id,
                )
            logger.info("Saved script", script_id=record.id)
            self._notify()
            return True

    def load(self, script_id: str | None = None) -> bool:
        """Replace the script with a saved one.

        Without ``script_id`` the first saved script is loaded.

        Returns:
            False when nothing could be loaded; the current script is kept.
        """
        with self._lock:
            record = self.repository.load(script_id)
            if record is None:
                return False
            if not record.elements:
                logger.warning("Saved script has no elements", script_id=record.id)
                return False

            state = ScriptState(
                id=record.id,
                title=record.title,
                author=record.author,
                elements=[e.model_copy() for e in record.elements],
                scenes=[s.model_copy(deep=True) for s in record.scenes],
                focus_mode=self._state.focus_mode,
                left_panel_open=self._state.left_panel_open,
                right_panel_open=self._state.right_panel_open,
                last_saved=record.saved_at,
            )
            state.active_element_id = state.elements[0].id
            self._state = state
            self._revision += 1
            self.update_derived_state()
            logger.info(
                "Loaded script",
                script_id=record.id,
                elements=len(state.elements),
                scenes=len(state.scenes),
            )
            self._notify()
            return True
