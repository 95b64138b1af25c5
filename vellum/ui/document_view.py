# vellum/ui/document_view.py
# Rich rendering of document trees, overlay state & export results for the terminal

from __future__ import annotations

from typing import Callable

from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ..editor.nodes import ABSOLUTE, DocumentNode, NodeKind, check_exhaustive
from ..editor.overlay import OverlayController

PREVIEW_LENGTH = 60


def _preview(value: str) -> str:
    value = value.replace("\n", " / ")
    if len(value) > PREVIEW_LENGTH:
        value = value[: PREVIEW_LENGTH - 3] + "..."
    return escape(value)


def _id(node: DocumentNode) -> str:
    return f"[dim]{node.id}[/]"


def _align(node: DocumentNode) -> str:
    align = node.attributes.get("textAlign") or "left"
    return "" if align == "left" else f" [magenta]{align}[/]"


def _geometry(node: DocumentNode) -> str:
    attrs = node.attributes
    size = ""
    if attrs.get("width") is not None or attrs.get("height") is not None:
        size = f" {attrs.get('width') or '?'}x{attrs.get('height') or '?'}"
    if attrs.get("positioning") == ABSOLUTE:
        return f"[yellow]@({attrs.get('x')}, {attrs.get('y')}){size}[/]"
    return f"[yellow]flow{size}[/]"


def _label_doc(node: DocumentNode) -> str:
    return f"[bold]document[/] {_id(node)}"


def _label_paragraph(node: DocumentNode) -> str:
    return f"[cyan]paragraph[/] {_id(node)}{_align(node)}"


def _label_heading(node: DocumentNode) -> str:
    return f"[bold cyan]h{node.attributes.get('level', 1)}[/] {_id(node)}{_align(node)}"


def _label_list(node: DocumentNode) -> str:
    return f"[cyan]bulletList[/] {_id(node)}"


def _label_item(node: DocumentNode) -> str:
    return f"[cyan]listItem[/] {_id(node)}{_align(node)}"


def _label_text(node: DocumentNode) -> str:
    attrs = node.attributes
    marks = [m for m in ("bold", "italic", "underline") if attrs.get(m)]
    if attrs.get("color"):
        marks.append(f"color={attrs['color']}")
    suffix = f" [green]{escape(' '.join(marks))}[/]" if marks else ""
    return f'"{_preview(attrs.get("text", ""))}"{suffix}'


def _label_image(node: DocumentNode) -> str:
    attrs = node.attributes
    return (
        f"[bold yellow]image[/] {_id(node)} {_geometry(node)} "
        f"{_preview(attrs.get('alt') or attrs.get('src', ''))}"
    )


def _label_text_box(node: DocumentNode) -> str:
    return (
        f"[bold yellow]textBox[/] {_id(node)} {_geometry(node)} "
        f'"{_preview(node.attributes.get("textContent", ""))}"'
    )


_LABELS: dict[NodeKind, Callable[[DocumentNode], str]] = check_exhaustive(
    {
        NodeKind.DOC: _label_doc,
        NodeKind.PARAGRAPH: _label_paragraph,
        NodeKind.HEADING: _label_heading,
        NodeKind.BULLET_LIST: _label_list,
        NodeKind.LIST_ITEM: _label_item,
        NodeKind.TEXT: _label_text,
        NodeKind.IMAGE: _label_image,
        NodeKind.TEXT_BOX: _label_text_box,
    },
    "document view",
)


# * Build a Rich Tree of the document (text runs shown as leaves)
def render_document_tree(root: DocumentNode, title: str | None = None) -> Tree:
    tree = Tree(title or _LABELS[root.kind](root), guide_style="dim")
    for child in root.children:
        _add(tree, child)
    return tree


def _add(parent: Tree, node: DocumentNode) -> None:
    branch = parent.add(_LABELS[node.kind](node))
    for child in node.children:
        _add(branch, child)


# * Summary table of the overlay controller & its selected node
def render_overlay_state(overlay: OverlayController) -> Table:
    state = overlay.state
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("mode", f"[bold]{state.mode.value}[/]")
    table.add_row("selected", state.selected_id or "-")
    if state.selected_id is not None and state.selected_id in overlay.tree:
        box = overlay.geometry_of(state.selected_id)
        table.add_row(
            "geometry", f"x={box.x:g} y={box.y:g} w={box.width:g} h={box.height:g}"
        )
    return table


# * One-line markdown loss notice (empty Text when nothing was dropped)
def render_losses(losses: list[str]) -> Text:
    if not losses:
        return Text("")
    return Text.assemble(
        ("Markdown export dropped: ", "yellow"), (", ".join(losses), "bold yellow")
    )
