"""Scripta Data Models.

This module defines the screenplay document model: the typed elements a
script is made of, the per-type editing configuration, and the scene and
character aggregates derived from the element sequence.
"""

from __future__ import annotations

import secrets
import string
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 13


class ElementType(str, Enum):
    """Screenplay element types, in shortcut order."""

    SCENE_HEADING = "scene-heading"
    ACTION = "action"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    TRANSITION = "transition"
    SHOT = "shot"


class ElementConfig(BaseModel):
    """Editing behaviour of one element type."""

    model_config = ConfigDict(frozen=True)

    label: str
    shortcut: str
    placeholder: str
    next_element: ElementType
    auto_uppercase: bool


ELEMENT_CONFIG: dict[ElementType, ElementConfig] = {
    ElementType.SCENE_HEADING: ElementConfig(
        label="Scene Heading",
        shortcut="1",
        placeholder="INT./EXT. LOCATION - TIME",
        next_element=ElementType.ACTION,
        auto_uppercase=True,
    ),
    ElementType.ACTION: ElementConfig(
        label="Action",
        shortcut="2",
        placeholder="Action description...",
        next_element=ElementType.ACTION,
        auto_uppercase=False,
    ),
    ElementType.CHARACTER: ElementConfig(
        label="Character",
        shortcut="3",
        placeholder="CHARACTER NAME",
        next_element=ElementType.DIALOGUE,
        auto_uppercase=True,
    ),
    ElementType.DIALOGUE: ElementConfig(
        label="Dialogue",
        shortcut="4",
        placeholder="Dialogue...",
        next_element=ElementType.CHARACTER,
        auto_uppercase=False,
    ),
    ElementType.PARENTHETICAL: ElementConfig(
        label="Parenthetical",
        shortcut="5",
        placeholder="(emotion/direction)",
        next_element=ElementType.DIALOGUE,
        auto_uppercase=False,
    ),
    ElementType.TRANSITION: ElementConfig(
        label="Transition",
        shortcut="6",
        placeholder="CUT TO:",
        next_element=ElementType.SCENE_HEADING,
        auto_uppercase=True,
    ),
    ElementType.SHOT: ElementConfig(
        label="Shot",
        shortcut="7",
        placeholder="ANGLE ON:",
        next_element=ElementType.ACTION,
        auto_uppercase=True,
    ),
}

# Tab order; shots are only reachable through their shortcut
TYPE_CYCLE: tuple[ElementType, ...] = (
    ElementType.SCENE_HEADING,
    ElementType.ACTION,
    ElementType.CHARACTER,
    ElementType.DIALOGUE,
    ElementType.PARENTHETICAL,
    ElementType.TRANSITION,
)

# Auto-complete vocabularies
SCENE_PREFIXES = ["INT.", "EXT.", "INT./EXT.", "I/E."]
TIME_SUFFIXES = ["DAY", "NIGHT", "MORNING", "EVENING", "LATER", "CONTINUOUS", "SAME"]
TRANSITIONS = [
    "CUT TO:",
    "FADE IN:",
    "FADE OUT.",
    "FADE TO BLACK.",
    "DISSOLVE TO:",
    "SMASH CUT TO:",
    "MATCH CUT TO:",
    "JUMP CUT TO:",
    "TIME CUT:",
]


def next_in_cycle(element_type: ElementType) -> ElementType:
    """Return the type Tab advances to.

    Types outside the cycle (shots) restart it at the first member.
    """
    try:
        index = TYPE_CYCLE.index(element_type)
    except ValueError:
        return TYPE_CYCLE[0]
    return TYPE_CYCLE[(index + 1) % len(TYPE_CYCLE)]


def type_for_shortcut(digit: str) -> ElementType | None:
    """Map a shortcut digit ("1".."7") to its element type."""
    for element_type, config in ELEMENT_CONFIG.items():
        if config.shortcut == digit:
            return element_type
    return None


def normalize_element_content(element_type: ElementType, content: str) -> str:
    """Apply the casing rule of ``element_type`` to ``content``."""
    if ELEMENT_CONFIG[element_type].auto_uppercase:
        return content.upper()
    return content


def generate_id() -> str:
    """Generate an opaque base36 identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class ScreenplayElement(BaseModel):
    """One typed line-unit of a screenplay."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_id)
    type: ElementType
    content: str = ""
    scene_id: str | None = Field(default=None, alias="sceneId")


class Scene(BaseModel):
    """A heading and the elements that follow it up to the next heading."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_id)
    number: int = Field(ge=1)
    heading: str = ""
    element_ids: list[str] = Field(default_factory=list, alias="elementIds")
    act: int | None = None


class Character(BaseModel):
    """A speaking role aggregated from character cues."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    dialogue_count: int = Field(default=0, alias="dialogueCount")
    scene_appearances: list[str] = Field(
        default_factory=list, alias="sceneAppearances"
    )
    notes: str | None = None


def create_element(
    element_type: ElementType, content: str = "", scene_id: str | None = None
) -> ScreenplayElement:
    """Create a new element with a fresh id."""
    return ScreenplayElement(type=element_type, content=content, scene_id=scene_id)


def create_scene(heading_element: ScreenplayElement, number: int) -> Scene:
    """Open a scene anchored on ``heading_element``."""
    return Scene(
        number=number,
        heading=heading_element.content,
        element_ids=[heading_element.id],
    )


__all__ = [
    "ELEMENT_CONFIG",
    "SCENE_PREFIXES",
    "TIME_SUFFIXES",
    "TRANSITIONS",
    "TYPE_CYCLE",
    "Character",
    "ElementConfig",
    "ElementType",
    "Scene",
    "ScreenplayElement",
    "create_element",
    "create_scene",
    "generate_id",
    "next_in_cycle",
    "normalize_element_content",
    "type_for_shortcut",
]
