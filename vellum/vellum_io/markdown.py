# vellum/vellum_io/markdown.py
# Markdown export for document trees (lossy: positions, sizes, underline, color & alignment are dropped)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from ..core.verbose import vlog
from ..editor.nodes import ABSOLUTE, DocumentNode, NodeKind, check_exhaustive

# heading levels the normalizer reads back as headings
MAX_MARKDOWN_HEADING = 3


@dataclass
class MarkdownExport:
    text: str
    losses: list[str] = field(default_factory=list)  # attribute kinds dropped by the export


# * Render a document tree as markdown text
def to_markdown_string(root: DocumentNode) -> str:
    return export_markdown(root).text


# * Render a document tree as markdown & report what could not be represented
def export_markdown(root: DocumentNode) -> MarkdownExport:
    losses: list[str] = []
    text = _render(root, losses)
    if losses:
        vlog("MARKDOWN", "Lossy export", ", ".join(losses))
    return MarkdownExport(text=text, losses=losses)


def _render(node: DocumentNode, losses: list[str]) -> str:
    return _RENDERERS[node.kind](node, losses)


def _render_doc(node: DocumentNode, losses: list[str]) -> str:
    blocks = (_render(c, losses) for c in node.children)
    return "\n\n".join(b for b in blocks if b)


def _render_paragraph(node: DocumentNode, losses: list[str]) -> str:
    _note_alignment(node, losses)
    return _render_inline(node, losses)


def _render_heading(node: DocumentNode, losses: list[str]) -> str:
    _note_alignment(node, losses)
    level = int(node.attributes.get("level", 1))
    if level > MAX_MARKDOWN_HEADING:
        _lose(losses, "heading levels above 3")
    content = _render_inline(node, losses)
    return f"{'#' * level} {content}" if content else ""


def _render_list(node: DocumentNode, losses: list[str]) -> str:
    items = (_render(c, losses) for c in node.children)
    return "\n".join(i for i in items if i)


def _render_list_item(node: DocumentNode, losses: list[str]) -> str:
    _note_alignment(node, losses)
    content = _render_inline(node, losses)
    return f"- {content}" if content.strip() else ""


def _render_text(node: DocumentNode, losses: list[str]) -> str:
    attrs = node.attributes
    value = attrs.get("text", "")
    if attrs.get("underline"):
        _lose(losses, "underline")
    if attrs.get("color"):
        _lose(losses, "color")

    bold, italic = bool(attrs.get("bold")), bool(attrs.get("italic"))
    if bold and italic:
        marker = "***"
    elif bold:
        marker = "**"
    elif italic:
        marker = "*"
    else:
        return value
    # emphasis never spans a line break
    return "\n".join(_wrap(line, marker) for line in value.split("\n"))


def _render_image(node: DocumentNode, losses: list[str]) -> str:
    _note_geometry(node, losses)
    attrs = node.attributes
    return f"![{attrs.get('alt') or ''}]({attrs.get('src', '')})"


def _render_text_box(node: DocumentNode, losses: list[str]) -> str:
    _note_geometry(node, losses)
    return node.attributes.get("textContent", "").strip()


_RENDERERS: dict[NodeKind, Callable[[DocumentNode, list[str]], str]] = check_exhaustive(
    {
        NodeKind.DOC: _render_doc,
        NodeKind.PARAGRAPH: _render_paragraph,
        NodeKind.HEADING: _render_heading,
        NodeKind.BULLET_LIST: _render_list,
        NodeKind.LIST_ITEM: _render_list_item,
        NodeKind.TEXT: _render_text,
        NodeKind.IMAGE: _render_image,
        NodeKind.TEXT_BOX: _render_text_box,
    },
    "markdown renderer",
)


def _render_inline(node: DocumentNode, losses: list[str]) -> str:
    return "".join(_render(c, losses) for c in node.children)


# markers hug the text; surrounding whitespace stays outside
def _wrap(segment: str, marker: str) -> str:
    core = segment.strip()
    if not core:
        return segment
    lead = segment[: len(segment) - len(segment.lstrip())]
    trail = segment[len(segment.rstrip()) :]
    return f"{lead}{marker}{core}{marker}{trail}"


def _note_alignment(node: DocumentNode, losses: list[str]) -> None:
    if (node.attributes.get("textAlign") or "left") != "left":
        _lose(losses, "alignment")


def _note_geometry(node: DocumentNode, losses: list[str]) -> None:
    attrs = node.attributes
    if attrs.get("positioning") == ABSOLUTE:
        _lose(losses, "positions")
    if attrs.get("width") is not None or attrs.get("height") is not None:
        _lose(losses, "sizes")


def _lose(losses: list[str], what: str) -> None:
    if what not in losses:
        losses.append(what)
