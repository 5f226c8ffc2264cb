"""Inputs shared by the exporters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from scripta.models import ScreenplayElement

if TYPE_CHECKING:
    from scripta.document.store import ScriptState


class ExportOptions(BaseModel):
    """What to export and how."""

    title: str = ""
    author: str = ""
    elements: list[ScreenplayElement] = Field(default_factory=list)
    include_title_page: bool = True

    @classmethod
    def from_state(
        cls, state: ScriptState, include_title_page: bool = True
    ) -> ExportOptions:
        """Export options for the script held in ``state``."""
        return cls(
            title=state.title,
            author=state.author,
            elements=[e.model_copy() for e in state.elements],
            include_title_page=include_title_page,
        )
