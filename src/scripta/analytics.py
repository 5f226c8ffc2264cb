"""Page-count and dialogue/action analytics over a script's elements."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from pydantic import BaseModel, Field

from scripta.models import Character, ElementType, Scene, ScreenplayElement

LINES_PER_PAGE = 55
CHARS_PER_LINE = 60

# Lines added on top of the wrapped content, or a fixed line count
_SPACING: dict[ElementType, int] = {
    ElementType.SCENE_HEADING: 2,
    ElementType.ACTION: 1,
    ElementType.DIALOGUE: 0,
}
_FIXED_LINES: dict[ElementType, int] = {
    ElementType.CHARACTER: 1,
    ElementType.PARENTHETICAL: 1,
    ElementType.TRANSITION: 2,
    ElementType.SHOT: 2,
}


def text_length(content: str) -> int:
    """Length of ``content`` in UTF-16 code units.

    Characters outside the Basic Multilingual Plane, such as most emoji,
    count as two.
    """
    return len(content.encode("utf-16-le")) // 2


class DialogueActionRatio(BaseModel):
    """Share of dialogue and action text, as whole percentages."""

    dialogue: int = 0
    action: int = 0
    ratio: str = "0:0"


class ScriptAnalytics(BaseModel):
    """Summary shown in the analytics view."""

    page_count: int = Field(ge=1)
    scene_count: int = 0
    character_count: int = 0
    dialogue: int = 0
    action: int = 0
    ratio: str = "0:0"
    characters: list[Character] = Field(default_factory=list)

    @property
    def estimated_runtime_minutes(self) -> int:
        """Roughly one minute of screen time per page."""
        return self.page_count


def element_line_count(
    element: ScreenplayElement, chars_per_line: int = CHARS_PER_LINE
) -> int:
    """Estimate the printed lines one element occupies."""
    if element.type in _FIXED_LINES:
        return _FIXED_LINES[element.type]
    content_lines = max(1, math.ceil(text_length(element.content) / chars_per_line))
    return content_lines + _SPACING[element.type]


def calculate_page_count(
    elements: Iterable[ScreenplayElement],
    lines_per_page: int = LINES_PER_PAGE,
    chars_per_line: int = CHARS_PER_LINE,
) -> int:
    """Estimate the page count of a script; never less than one page."""
    line_count = sum(element_line_count(e, chars_per_line) for e in elements)
    return max(1, math.ceil(line_count / lines_per_page))


def dialogue_action_ratio(
    elements: Iterable[ScreenplayElement],
) -> DialogueActionRatio:
    """Compare the amount of dialogue text with the amount of action text."""
    dialogue_chars = 0
    action_chars = 0
    for element in elements:
        if element.type == ElementType.DIALOGUE:
            dialogue_chars += text_length(element.content)
        elif element.type == ElementType.ACTION:
            action_chars += text_length(element.content)

    total = dialogue_chars + action_chars
    if total == 0:
        return DialogueActionRatio()

    # Half-up like the editor's rounding; round() would bank to even
    dialogue_percent = math.floor(dialogue_chars / total * 100 + 0.5)
    action_percent = 100 - dialogue_percent
    return DialogueActionRatio(
        dialogue=dialogue_percent,
        action=action_percent,
        ratio=f"{dialogue_percent}:{action_percent}",
    )


def compute_analytics(
    elements: Sequence[ScreenplayElement],
    scenes: Sequence[Scene],
    characters: dict[str, Character],
    lines_per_page: int = LINES_PER_PAGE,
    chars_per_line: int = CHARS_PER_LINE,
) -> ScriptAnalytics:
    """Build the analytics summary for a script.

    Characters are ordered by cue count, most frequent first; ties keep the
    order in which the characters first appear.
    """
    ratio = dialogue_action_ratio(elements)
    ranked = sorted(characters.values(), key=lambda c: -c.dialogue_count)
    return ScriptAnalytics(
        page_count=calculate_page_count(elements, lines_per_page, chars_per_line),
        scene_count=len(scenes),
        character_count=len(characters),
        dialogue=ratio.dialogue,
        action=ratio.action,
        ratio=ratio.ratio,
        characters=[c.model_copy(deep=True) for c in ranked],
    )
