"""Tests for the document store."""

import json
import threading
from unittest.mock import MagicMock

import pytest

from scripta.document import DEFAULT_TITLE, DocumentStore, validate_invariants
from scripta.models import ElementType
from scripta.storage import MemoryStorage


def assert_consistent(store):
    """The store's derived state agrees with its element sequence."""
    state = store.state
    assert state.elements
    assert validate_invariants(state.elements, state.scenes, state.characters) == []


class TestFreshScript:
    """Test the initial state of a store."""

    def test_fresh_script_has_one_heading(self, store):
        """A new store holds one empty, active scene heading."""
        state = store.state
        assert len(state.elements) == 1
        assert state.elements[0].type == ElementType.SCENE_HEADING
        assert state.elements[0].content == ""
        assert state.active_element_id == state.elements[0].id
        assert state.title == DEFAULT_TITLE
        assert not state.is_dirty
        assert_consistent(store)

    def test_state_is_a_snapshot(self, store):
        """Changing a snapshot does not change the store."""
        snapshot = store.state
        snapshot.elements[0].content = "CHANGED"
        snapshot.title = "Changed"

        assert store.elements[0].content == ""
        assert store.state.title == DEFAULT_TITLE


class TestMetadata:
    """Test title and author changes."""

    def test_set_title_and_author(self, store):
        """Metadata is replaced and the script marked dirty."""
        store.set_title("Brick")
        store.set_author("Rian")

        assert store.state.title == "Brick"
        assert store.state.author == "Rian"
        assert store.is_dirty


class TestUpdateElement:
    """Test content edits."""

    def test_update_uppercases_heading(self, store):
        """Scene heading content is stored upper-cased."""
        element_id = store.elements[0].id
        store.update_element(element_id, "int. house - day")

        assert store.get_element(element_id).content == "INT. HOUSE - DAY"
        assert store.state.scenes[0].heading == "INT. HOUSE - DAY"

    def test_update_keeps_action_case(self, store):
        """Action content keeps its case."""
        first = store.elements[0].id
        action = store.insert_element_after(first, ElementType.ACTION)
        store.update_element(action.id, "John enters.")

        assert store.get_element(action.id).content == "John enters."

    def test_unknown_id_is_noop(self, store):
        """Editing an unknown element changes nothing and notifies nobody."""
        listener = MagicMock()
        store.subscribe(listener)
        before = store.state

        store.update_element("missing", "text")

        assert store.state.elements == before.elements
        assert not store.is_dirty
        listener.assert_not_called()


class TestSetElementType:
    """Test forcing element types."""

    def test_set_type_recases_content(self, store):
        """Switching to an uppercase type upper-cases existing content."""
        first = store.elements[0].id
        action = store.insert_element_after(first, ElementType.ACTION, "john")

        store.set_element_type(action.id, ElementType.CHARACTER)

        element = store.get_element(action.id)
        assert element.type == ElementType.CHARACTER
        assert element.content == "JOHN"
        assert "JOHN" in store.state.characters

    def test_set_type_to_heading_opens_scene(self, populated_store):
        """Turning an action into a heading splits its scene."""
        action = populated_store.elements[1]

        populated_store.set_element_type(action.id, ElementType.SCENE_HEADING)

        assert len(populated_store.state.scenes) == 3
        assert_consistent(populated_store)

    def test_unknown_id_is_noop(self, store):
        """Retyping an unknown element changes nothing."""
        store.set_element_type("missing", ElementType.ACTION)
        assert not store.is_dirty


class TestInsertElement:
    """Test inserting elements."""

    def test_insert_after_last_appends_and_activates(self, store):
        """Inserting after the last element appends it and makes it active."""
        last = store.elements[-1]

        new = store.insert_element_after(last.id, ElementType.ACTION, "Rain.")

        elements = store.elements
        assert elements[-1].id == new.id
        assert len(elements) == 2
        assert store.active_element.id == new.id
        assert new.type == ElementType.ACTION
        assert new.content == "Rain."

    def test_insert_in_middle(self, populated_store):
        """A new element lands right after its anchor."""
        anchor = populated_store.elements[2]

        new = populated_store.insert_element_after(
            anchor.id, ElementType.PARENTHETICAL, "quietly"
        )

        assert populated_store.index_of(new.id) == 3
        assert_consistent(populated_store)

    def test_insert_joins_anchor_scene(self, populated_store):
        """The new element belongs to the scene of its anchor."""
        anchor = populated_store.elements[5]

        new = populated_store.insert_element_after(anchor.id, ElementType.ACTION)

        assert populated_store.get_element(new.id).scene_id == anchor.scene_id

    def test_insert_uppercases_content(self, store):
        """Inserted cues are upper-cased like edited ones."""
        new = store.insert_element_after(
            store.elements[0].id, ElementType.CHARACTER, "mary"
        )
        assert new.content == "MARY"

    def test_insert_after_unknown_returns_none(self, store):
        """Unknown anchors insert nothing."""
        assert store.insert_element_after("missing", ElementType.ACTION) is None
        assert len(store.elements) == 1
        assert not store.is_dirty


class TestDeleteElement:
    """Test deleting elements."""

    def test_last_remaining_element_is_kept(self, store):
        """The only element of a script can never be deleted."""
        only = store.elements[0].id
        store.delete_element(only)

        assert [e.id for e in store.elements] == [only]
        assert not store.is_dirty

    def test_delete_moves_focus_to_previous(self, populated_store):
        """Focus moves to the element before the deleted one."""
        elements = populated_store.elements

        populated_store.delete_element(elements[3].id)

        assert populated_store.active_element.id == elements[2].id
        assert len(populated_store.elements) == len(elements) - 1
        assert_consistent(populated_store)

    def test_delete_first_moves_focus_to_new_first(self, populated_store):
        """Deleting the first element focuses the new first element."""
        elements = populated_store.elements

        populated_store.delete_element(elements[0].id)

        assert populated_store.active_element.id == elements[1].id
        assert populated_store.state.scenes[0].heading == "EXT. GARDEN - NIGHT"
        assert_consistent(populated_store)

    def test_delete_unknown_is_noop(self, populated_store):
        """Deleting an unknown id changes nothing."""
        before = populated_store.elements
        populated_store.delete_element("missing")
        assert populated_store.elements == before

    def test_delete_cue_updates_characters(self, populated_store):
        """Removing MARY's only cue removes MARY."""
        mary = next(e for e in populated_store.elements if e.content == "MARY")

        populated_store.delete_element(mary.id)

        assert "MARY" not in populated_store.state.characters


class TestCycleElementType:
    """Test cycling element types."""

    def test_transition_cycles_to_scene_heading(self, store):
        """A transition cycles to a scene heading."""
        element = store.insert_element_after(
            store.elements[0].id, ElementType.TRANSITION, "CUT TO:"
        )

        store.cycle_element_type(element.id)

        assert store.get_element(element.id).type == ElementType.SCENE_HEADING
        assert len(store.state.scenes) == 2

    def test_heading_cycles_to_action(self, store):
        """A scene heading cycles to action."""
        first = store.elements[0].id
        store.cycle_element_type(first)
        assert store.get_element(first).type == ElementType.ACTION
        assert store.state.scenes == []

    def test_unknown_id_is_noop(self, store):
        """Cycling an unknown id changes nothing."""
        store.cycle_element_type("missing")
        assert not store.is_dirty

    def test_next_element_type(self, store):
        """Enter after a cue produces dialogue."""
        assert (
            store.get_next_element_type(ElementType.CHARACTER) == ElementType.DIALOGUE
        )


class TestFocus:
    """Test moving the active element."""

    def test_move_next_and_prev(self, populated_store):
        """Focus moves one element at a time."""
        elements = populated_store.elements
        populated_store.set_active_element(elements[0].id)

        populated_store.move_to_next_element()
        assert populated_store.active_element.id == elements[1].id

        populated_store.move_to_prev_element()
        assert populated_store.active_element.id == elements[0].id

    def test_moving_past_ends_is_noop(self, populated_store):
        """Focus stays put at either end of the script."""
        elements = populated_store.elements

        populated_store.set_active_element(elements[0].id)
        populated_store.move_to_prev_element()
        assert populated_store.active_element.id == elements[0].id

        populated_store.set_active_element(elements[-1].id)
        populated_store.move_to_next_element()
        assert populated_store.active_element.id == elements[-1].id

    def test_clear_active_element(self, store):
        """The active element can be cleared."""
        store.set_active_element(None)
        assert store.active_element is None

    def test_set_unknown_active_is_noop(self, store):
        """An unknown id does not change focus."""
        active = store.active_element.id
        store.set_active_element("missing")
        assert store.active_element.id == active


class TestViewFlags:
    """Test the UI-only flags."""

    def test_toggles(self, store):
        """Each toggle flips its own flag."""
        store.toggle_focus_mode()
        store.toggle_left_panel()
        store.toggle_right_panel()

        state = store.state
        assert state.focus_mode is True
        assert state.left_panel_open is False
        assert state.right_panel_open is False

    def test_flags_are_not_persisted(self, store, memory_storage):
        """Saved records do not carry view flags."""
        store.toggle_focus_mode()
        store.save()

        record = json.loads(memory_storage.get_item(memory_storage.keys()[0]))

        assert "focusMode" not in record
        assert "focus_mode" not in record


class TestSubscriptions:
    """Test change notification."""

    def test_listener_called_on_each_mutation(self, store):
        """Every mutation notifies subscribers once."""
        listener = MagicMock()
        store.subscribe(listener)

        store.set_title("One")
        store.update_element(store.elements[0].id, "INT. A - DAY")

        assert listener.call_count == 2

    def test_listener_sees_derived_state(self, store):
        """Derived state is up to date when listeners run."""
        seen = []
        store.subscribe(lambda: seen.append(len(store.state.scenes)))

        store.insert_element_after(
            store.elements[0].id, ElementType.SCENE_HEADING, "INT. B - DAY"
        )

        assert seen == [2]

    def test_unsubscribe(self, store):
        """Unsubscribed listeners are no longer called."""
        listener = MagicMock()
        unsubscribe = store.subscribe(listener)

        unsubscribe()
        unsubscribe()
        store.set_title("Quiet")

        listener.assert_not_called()


class TestReorderScenes:
    """Test moving scenes."""

    def test_move_second_scene_first(self, populated_store):
        """A scene moves with all of its elements as a block."""
        before = populated_store.state
        first, second = before.scenes

        populated_store.reorder_scenes(1, 0)

        state = populated_store.state
        assert [s.id for s in state.scenes] == [second.id, first.id]
        assert [s.number for s in state.scenes] == [1, 2]
        assert [e.id for e in state.elements] == second.element_ids + first.element_ids
        assert_consistent(populated_store)

    def test_to_index_is_clamped(self, populated_store):
        """Targets beyond the last scene move the scene to the end."""
        first = populated_store.state.scenes[0]

        populated_store.reorder_scenes(0, 10)

        assert populated_store.state.scenes[-1].id == first.id
        assert_consistent(populated_store)

    def test_out_of_range_from_index_is_noop(self, populated_store):
        """An unknown source scene changes nothing."""
        before = populated_store.elements
        populated_store.reorder_scenes(5, 0)
        assert populated_store.elements == before

    def test_elements_outside_scenes_are_appended(self, store):
        """Elements before the first heading move to the end of the script."""
        first = store.elements[0].id
        store.set_element_type(first, ElementType.ACTION)
        store.update_element(first, "Opening image.")
        a = store.insert_element_after(first, ElementType.SCENE_HEADING, "INT. A - DAY")
        b = store.insert_element_after(a.id, ElementType.SCENE_HEADING, "INT. B - DAY")

        store.reorder_scenes(1, 0)

        ids = [e.id for e in store.elements]
        assert ids == [b.id, a.id, first]
        assert store.get_element(first).scene_id == store.state.scenes[-1].id
        assert_consistent(store)

    def test_reorder_keeps_characters(self, populated_store):
        """Characters survive a reorder with the same counts."""
        before = populated_store.state.characters

        populated_store.reorder_scenes(1, 0)

        after = populated_store.state.characters
        assert {n: c.dialogue_count for n, c in after.items()} == {
            n: c.dialogue_count for n, c in before.items()
        }


class TestNewScript:
    """Test discarding the current script."""

    def test_new_script_resets_state(self, populated_store):
        """A new script has a new id and a single empty heading."""
        old_id = populated_store.state.id

        populated_store.new_script()

        state = populated_store.state
        assert state.id != old_id
        assert len(state.elements) == 1
        assert state.characters == {}
        assert not state.is_dirty

    def test_new_script_does_not_persist(self, populated_store, memory_storage):
        """The discarded script is not written anywhere."""
        populated_store.new_script()
        assert memory_storage.keys() == []


class TestPersistence:
    """Test save and load."""

    def test_round_trip(self, populated_store, memory_storage, settings):
        """Saving then loading reproduces elements, scenes and characters."""
        populated_store.set_title("Garden")
        populated_store.set_author("Ann")
        assert populated_store.save()
        saved = populated_store.state

        other = DocumentStore(memory_storage, settings)
        assert other.load(saved.id)

        loaded = other.state
        assert loaded.id == saved.id
        assert loaded.title == "Garden"
        assert loaded.author == "Ann"
        assert loaded.elements == saved.elements
        assert loaded.scenes == saved.scenes
        assert loaded.characters == saved.characters
        assert not loaded.is_dirty
        assert loaded.last_saved is not None

    def test_save_clears_dirty(self, store):
        """A successful save clears the dirty flag."""
        store.set_title("Draft")
        assert store.is_dirty

        assert store.save()

        assert not store.is_dirty
        assert store.state.last_saved is not None

    def test_record_uses_camel_case_keys(self, populated_store, memory_storage):
        """The persisted record uses the documented field names."""
        populated_store.save()

        key = memory_storage.keys()[0]
        record = json.loads(memory_storage.get_item(key))

        assert key == f"scripta-script-{populated_store.state.id}"
        assert set(record) == {"id", "title", "author", "elements", "scenes", "savedAt"}
        assert "sceneId" in record["elements"][0]
        assert "elementIds" in record["scenes"][0]

    def test_save_failure_keeps_dirty(self, settings):
        """A failing write is logged and leaves the script dirty."""
        storage = MemoryStorage()
        storage.set_item = MagicMock(side_effect=OSError("quota exceeded"))
        store = DocumentStore(storage, settings)
        store.set_title("Unsaved")

        assert store.save() is False
        assert store.is_dirty

    def test_edit_during_write_keeps_dirty(self, settings):
        """A change made while the record is being written is not marked saved."""
        storage = MemoryStorage()
        store = DocumentStore(storage, settings)
        heading = store.elements[0].id
        write = storage.set_item

        def set_item_with_edit(key, value):
            write(key, value)
            store.update_element(heading, "int. later edit")

        storage.set_item = set_item_with_edit

        assert store.save()

        assert store.is_dirty
        assert "INT. LATER EDIT" not in storage.get_item(storage.keys()[0])

        storage.set_item = write
        assert store.save()
        assert not store.is_dirty
        assert "INT. LATER EDIT" in storage.get_item(storage.keys()[0])

    def test_edits_wait_for_a_save_on_another_thread(self, settings):
        """An edit from another thread runs after the write, never during it."""
        storage = MemoryStorage()
        store = DocumentStore(storage, settings)
        heading = store.elements[0].id
        writing = threading.Event()
        edited = threading.Event()
        write = storage.set_item
        edited_during_write = []

        def slow_set_item(key, value):
            writing.set()
            edited_during_write.append(edited.wait(0.2))
            write(key, value)

        def edit():
            writing.wait(5)
            store.update_element(heading, "int. kitchen - day")
            edited.set()

        storage.set_item = slow_set_item
        editor = threading.Thread(target=edit)
        editor.start()

        assert store.save()
        editor.join(5)

        assert edited_during_write == [False]
        assert edited.is_set()
        assert store.elements[0].content == "INT. KITCHEN - DAY"
        assert store.is_dirty

    def test_revision_counts_changes(self, store):
        """Every change bumps the revision; saving does not."""
        start = store.revision

        store.set_title("One")
        store.toggle_focus_mode()
        store.save()

        assert store.revision == start + 2

    def test_load_without_id_uses_first_script(
        self, populated_store, memory_storage, settings
    ):
        """Loading without an id falls back to the first saved script."""
        populated_store.save()

        other = DocumentStore(memory_storage, settings)

        assert other.load()
        assert other.state.id == populated_store.state.id

    def test_load_nothing_saved(self, store):
        """Loading with no saved scripts fails and keeps the fresh script."""
        before = store.state.id
        assert store.load() is False
        assert store.state.id == before

    def test_load_unknown_id(self, populated_store):
        """Loading an unknown id fails and keeps the current script."""
        before = populated_store.elements
        assert populated_store.load("missing") is False
        assert populated_store.elements == before

    def test_load_record_without_elements(self, store, memory_storage):
        """A record with no elements is rejected."""
        memory_storage.set_item(
            "scripta-script-empty",
            json.dumps({"id": "empty", "title": "Empty", "elements": [], "scenes": []}),
        )
        assert store.load("empty") is False

    def test_load_keeps_view_flags(self, populated_store, memory_storage, settings):
        """View flags belong to the editor, not to the script."""
        populated_store.save()
        other = DocumentStore(memory_storage, settings)
        other.toggle_focus_mode()

        other.load(populated_store.state.id)

        assert other.state.focus_mode is True

    def test_load_rederives_stale_scenes(self, store, memory_storage):
        """Stored scene ids stay, stale scene pointers are corrected."""
        memory_storage.set_item(
            "scripta-script-abc",
            json.dumps(
                {
                    "id": "abc",
                    "title": "T",
                    "author": "",
                    "elements": [
                        {"id": "h1", "type": "scene-heading", "content": "INT. A"},
                        {"id": "a1", "type": "action", "sceneId": "bogus"},
                        {"id": "c1", "type": "character", "content": "JOHN"},
                    ],
                    "scenes": [
                        {"id": "s1", "number": 1, "elementIds": ["h1"]}
                    ],
                    "savedAt": "2026-01-01T00:00:00Z",
                }
            ),
        )

        assert store.load("abc")

        state = store.state
        assert state.scenes[0].id == "s1"
        assert state.scenes[0].element_ids == ["h1", "a1", "c1"]
        assert all(e.scene_id == "s1" for e in state.elements)
        assert state.characters["JOHN"].scene_appearances == ["s1"]
        assert state.active_element_id == "h1"


class TestAnalytics:
    """Test analytics computed from the store."""

    def test_get_analytics(self, populated_store):
        """Analytics reflect the current script."""
        analytics = populated_store.get_analytics()

        assert analytics.scene_count == 2
        assert analytics.character_count == 2
        assert analytics.page_count == 1
        assert [c.name for c in analytics.characters] == ["JOHN", "MARY"]


class TestInvariantsUnderMutation:
    """Random-ish mutation sequences never break the document structure."""

    @pytest.mark.parametrize("seed", range(5))
    def test_mutation_sequence(self, store, seed):
        """Every operation leaves a consistent, non-empty document."""
        kinds = list(ElementType)
        for step in range(40):
            elements = store.elements
            target = elements[(step * 7 + seed) % len(elements)].id
            operation = (step + seed) % 6
            if operation == 0:
                store.insert_element_after(
                    target, kinds[(step + seed) % len(kinds)], f"line {step}"
                )
            elif operation == 1:
                store.delete_element(target)
            elif operation == 2:
                store.cycle_element_type(target)
            elif operation == 3:
                store.update_element(target, f"text {seed} {step}")
            elif operation == 4:
                scenes = store.state.scenes
                if scenes:
                    store.reorder_scenes(step % len(scenes), seed % len(scenes))
            else:
                store.set_element_type(target, kinds[step % len(kinds)])
            assert_consistent(store)
