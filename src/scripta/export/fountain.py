"""Plain-text (Fountain) export."""

from __future__ import annotations

import re
from pathlib import Path

from scripta.config import get_logger
from scripta.exceptions import ExportError
from scripta.export.options import ExportOptions
from scripta.models import ElementType, ScreenplayElement

logger = get_logger(__name__)

FOUNTAIN_EXTENSION = ".fountain"

_BOUNDARY_PARENS = re.compile(r"\A\(|\)\Z")
_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


# (template, upper-case) per element type
_FRAMING: dict[ElementType, tuple[str, bool]] = {
    ElementType.SCENE_HEADING: ("\n{}\n\n", True),
    ElementType.ACTION: ("{}\n\n", False),
    ElementType.CHARACTER: ("\n{}\n", True),
    ElementType.DIALOGUE: ("{}\n", False),
    ElementType.PARENTHETICAL: ("({})\n", False),
    ElementType.TRANSITION: ("\n> {}\n\n", True),
    ElementType.SHOT: ("\n{}\n\n", True),
}


def format_element(element: ScreenplayElement) -> str:
    """Render one element with its Fountain framing."""
    template, uppercase = _FRAMING[element.type]
    content = element.content
    if element.type == ElementType.PARENTHETICAL:
        content = _BOUNDARY_PARENS.sub("", content)
    if uppercase:
        content = content.upper()
    return template.format(content)


def export_to_fountain(options: ExportOptions) -> str:
    """Render a script as Fountain text.

    The output starts with a title block::

        Title: <title>
        Author: <author>

        ===

    followed by one block per element.
    """
    parts = [
        f"Title: {options.title or 'Untitled Screenplay'}\n",
        f"Author: {options.author or 'Unknown'}\n",
        "\n===\n\n",
    ]
    parts.extend(format_element(element) for element in options.elements)
    return "".join(parts)


def fountain_filename(title: str) -> str:
    """File name a Fountain export of ``title`` is saved under."""
    stem = _UNSAFE_FILENAME_CHARS.sub("_", title).strip() or "screenplay"
    return f"{stem}{FOUNTAIN_EXTENSION}"


def write_fountain(options: ExportOptions, directory: Path | str) -> Path:
    """Write the Fountain export into ``directory``.

    Returns:
        Path of the written file.

    Raises:
        ExportError: If the file cannot be written.
    """
    path = Path(directory) / fountain_filename(options.title)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(export_to_fountain(options), encoding="utf-8")
    except OSError as e:
        raise ExportError(
            message=f"Could not write {path}",
            hint="Check that the output directory is writable",
            details={"path": str(path), "error": str(e)},
        ) from e
    logger.info("Exported Fountain file", path=str(path))
    return path
