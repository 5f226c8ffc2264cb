"""Hand formatted scripts to the platform's print pipeline."""

from __future__ import annotations

import tempfile
import webbrowser
from pathlib import Path
from typing import Protocol

from scripta.config import get_logger
from scripta.exceptions import PrintError
from scripta.export.html import generate_print_html
from scripta.export.options import ExportOptions

logger = get_logger(__name__)


class PrintPipeline(Protocol):
    """Something that can turn a formatted document into paper or PDF."""

    def print(self, document: str) -> None:
        """Print ``document``.

        Raises:
            PrintError: If the platform refuses to open a rendering surface.
        """
        ...


class BrowserPrintPipeline:
    """Open the document in the default browser, whose print dialog saves PDFs."""

    def __init__(self, directory: Path | None = None) -> None:
        self.directory = directory

    def print(self, document: str) -> None:
        with tempfile.NamedTemporaryFile(
            "w",
            suffix=".html",
            prefix="scripta-print-",
            dir=self.directory,
            delete=False,
            encoding="utf-8",
        ) as handle:
            handle.write(document)
            path = Path(handle.name)

        try:
            opened = webbrowser.open(path.as_uri(), new=2)
        except webbrowser.Error as e:
            raise PrintError(details={"file": str(path), "error": str(e)}) from e
        if not opened:
            raise PrintError(details={"file": str(path)})
        logger.info("Opened print preview", file=str(path))


def export_to_pdf(options: ExportOptions, pipeline: PrintPipeline) -> None:
    """Render ``options`` for print and hand it to ``pipeline``.

    Raises:
        PrintError: Propagated from the pipeline; the script is unaffected.
    """
    pipeline.print(generate_print_html(options))
