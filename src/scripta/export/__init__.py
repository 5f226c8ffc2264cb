"""Exporters: Fountain text, print HTML and PDF via the print pipeline."""

from scripta.export.fountain import (
    export_to_fountain,
    format_element,
    fountain_filename,
    write_fountain,
)
from scripta.export.html import ELEMENT_MARGINS, PRINT_CONFIG, generate_print_html
from scripta.export.options import ExportOptions
from scripta.export.printing import BrowserPrintPipeline, PrintPipeline, export_to_pdf

__all__ = [
    "ELEMENT_MARGINS",
    "PRINT_CONFIG",
    "BrowserPrintPipeline",
    "ExportOptions",
    "PrintPipeline",
    "export_to_fountain",
    "export_to_pdf",
    "format_element",
    "fountain_filename",
    "generate_print_html",
    "write_fountain",
]
