# vellum/vellum_io/__init__.py
# Package initialization & exports for Vellum I/O operations

from .documents import export_document, load_document, save_document
from .generics import read_json_safe, write_json_safe, ensure_parent
from .markdown import MarkdownExport, export_markdown, to_markdown_string
from .markup import from_markup_string, to_markup_string
from .pdf import to_pdf_bytes

__all__ = [
    "export_document",
    "load_document",
    "save_document",
    "read_json_safe",
    "write_json_safe",
    "ensure_parent",
    "MarkdownExport",
    "export_markdown",
    "to_markdown_string",
    "from_markup_string",
    "to_markup_string",
    "to_pdf_bytes",
]
