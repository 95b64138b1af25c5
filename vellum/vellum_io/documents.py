# vellum/vellum_io/documents.py
# Document persistence (tree JSON) & export-to-file dispatch for markdown, markup & PDF

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..core.exceptions import ExportError, JSONParsingError, SchemaError
from ..editor.nodes import DocumentNode, NodeKind
from ..editor.tree import DocumentTree
from .generics import read_json_safe, write_bytes_safe, write_json_safe, write_text_safe
from .markdown import export_markdown
from .markup import to_markup_string
from .pdf import to_pdf_bytes

# ! bump when the persisted node shape changes
DOCUMENT_FORMAT_VERSION = 1

EXPORT_FORMATS = ("md", "html", "pdf", "json")


# * Persist a document tree as JSON
def save_document(tree: DocumentTree | DocumentNode, path: Path) -> None:
    root = tree.root if isinstance(tree, DocumentTree) else tree
    payload: dict[str, Any] = {
        "version": DOCUMENT_FORMAT_VERSION,
        "document": root.to_dict(),
    }
    write_json_safe(payload, Path(path))


# * Load a document tree saved by save_document
def load_document(path: Path) -> DocumentTree:
    data = read_json_safe(Path(path))
    version = data.get("version")
    if version != DOCUMENT_FORMAT_VERSION:
        raise JSONParsingError(
            f"Unsupported document version in {path}: {version!r} (expected {DOCUMENT_FORMAT_VERSION})"
        )
    document = data.get("document")
    if not isinstance(document, dict):
        raise JSONParsingError(f"Missing 'document' object in {path}")

    root = DocumentNode.from_dict(document)
    if root.kind is not NodeKind.DOC:
        raise SchemaError(f"Document root must be 'doc', got '{root.kind.value}'")
    return DocumentTree(root)


# * Write a tree to path in the given format; returns any markdown losses
def export_document(
    root: DocumentNode, path: Path, fmt: str, page_format: str = "A4"
) -> list[str]:
    path = Path(path)
    if fmt == "md":
        result = export_markdown(root)
        write_text_safe(result.text + "\n", path)
        return result.losses
    if fmt == "html":
        write_text_safe(to_markup_string(root) + "\n", path)
        return []
    if fmt == "pdf":
        write_bytes_safe(to_pdf_bytes(root, page_format, title=path.stem), path)
        return []
    if fmt == "json":
        save_document(root, path)
        return []
    raise ExportError(
        f"Unknown export format '{fmt}' (expected one of {', '.join(EXPORT_FORMATS)})",
        fmt,
    )
