"""Recompute scenes and characters from the element sequence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from scripta.models import (
    Character,
    ElementType,
    Scene,
    ScreenplayElement,
    create_scene,
)


@dataclass
class DerivedState:
    """Scenes and characters computed by one derive pass."""

    scenes: list[Scene] = field(default_factory=list)
    characters: dict[str, Character] = field(default_factory=dict)


def derive_scenes(
    elements: Sequence[ScreenplayElement],
    previous: Sequence[Scene] | None = None,
) -> list[Scene]:
    """Group elements into numbered scenes, stamping each element's scene id.

    Elements before the first scene heading are left without a scene. A scene
    whose heading element already anchored a scene in ``previous`` keeps that
    scene's id and act.
    """
    known = {s.element_ids[0]: s for s in previous or () if s.element_ids}
    scenes: list[Scene] = []
    current: Scene | None = None

    for element in elements:
        if element.type == ElementType.SCENE_HEADING:
            current = create_scene(element, len(scenes) + 1)
            earlier = known.get(element.id)
            if earlier is not None:
                current.id = earlier.id
                current.act = earlier.act
            scenes.append(current)
            element.scene_id = current.id
        elif current is not None:
            current.element_ids.append(element.id)
            element.scene_id = current.id
        else:
            element.scene_id = None

    return scenes


def extract_characters(elements: Sequence[ScreenplayElement]) -> dict[str, Character]:
    """Aggregate character cues by normalized name.

    Each cue counts once towards ``dialogue_count``. The scene of a cue is
    whatever scene heading precedes it.
    """
    characters: dict[str, Character] = {}
    current_scene_id: str | None = None

    for element in elements:
        if element.type == ElementType.SCENE_HEADING:
            current_scene_id = element.scene_id

        if element.type != ElementType.CHARACTER or not element.content.strip():
            continue

        name = element.content.strip().upper()
        existing = characters.get(name)
        if existing is not None:
            existing.dialogue_count += 1
            if current_scene_id and current_scene_id not in existing.scene_appearances:
                existing.scene_appearances.append(current_scene_id)
        else:
            characters[name] = Character(
                name=name,
                dialogue_count=1,
                scene_appearances=[current_scene_id] if current_scene_id else [],
            )

    return characters


def derive_state(
    elements: Sequence[ScreenplayElement],
    previous: Sequence[Scene] | None = None,
) -> DerivedState:
    """Run a full derive pass over ``elements``."""
    scenes = derive_scenes(elements, previous)
    return DerivedState(scenes=scenes, characters=extract_characters(elements))


def validate_invariants(
    elements: Sequence[ScreenplayElement],
    scenes: Sequence[Scene],
    characters: dict[str, Character] | None = None,
) -> list[str]:
    """Check a document for structural inconsistencies.

    Returns:
        Human-readable violations; empty when the document is consistent.
    """
    problems: list[str] = []

    if not elements:
        problems.append("document has no elements")

    owner: dict[str, str] = {}
    for scene in scenes:
        for element_id in scene.element_ids:
            if element_id in owner:
                problems.append(
                    f"element {element_id} belongs to scenes "
                    f"{owner[element_id]} and {scene.id}"
                )
            owner[element_id] = scene.id

    for element in elements:
        expected = owner.get(element.id)
        if element.scene_id != expected:
            problems.append(
                f"element {element.id} points at scene {element.scene_id!r}, "
                f"expected {expected!r}"
            )

    numbers = [scene.number for scene in scenes]
    if numbers != list(range(1, len(scenes) + 1)):
        problems.append(f"scene numbers are not contiguous: {numbers}")

    headings = [e.id for e in elements if e.type == ElementType.SCENE_HEADING]
    anchors = [scene.element_ids[0] if scene.element_ids else None for scene in scenes]
    if headings != anchors:
        problems.append("scene order does not match scene headings")

    if characters is not None:
        cue_counts: dict[str, int] = {}
        for element in elements:
            if element.type == ElementType.CHARACTER and element.content.strip():
                name = element.content.strip().upper()
                cue_counts[name] = cue_counts.get(name, 0) + 1
        for name, character in characters.items():
            if cue_counts.get(name, 0) != character.dialogue_count:
                problems.append(
                    f"character {name} counts {character.dialogue_count} cues, "
                    f"found {cue_counts.get(name, 0)}"
                )
        for name in cue_counts.keys() - characters.keys():
            problems.append(f"character {name} is missing from the registry")

    return problems
