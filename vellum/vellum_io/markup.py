# vellum/vellum_io/markup.py
# HTML markup export & import for document trees; floating positions survive the round trip

from __future__ import annotations

import html
from typing import Any, Callable

from bs4 import BeautifulSoup, NavigableString, Tag

from ..core.verbose import vlog
from ..editor.nodes import (
    ABSOLUTE,
    ALIGNMENTS,
    FLOW,
    TEXT_BOX_DEFAULTS,
    DocumentNode,
    NodeKind,
    bullet_list,
    check_exhaustive,
    doc,
    heading,
    image,
    list_item,
    merge_runs,
    paragraph,
    text,
    text_box,
)

TEXT_BOX_TYPE = "draggable-text-box"
GEOMETRY_KEYS = ("x", "y", "width", "height")


# ===== EXPORT =====


# * Render a document tree as an HTML fragment
def to_markup_string(root: DocumentNode) -> str:
    return _render(root)


def _render(node: DocumentNode) -> str:
    return _RENDERERS[node.kind](node)


def _render_doc(node: DocumentNode) -> str:
    return "\n".join(_render(c) for c in node.children)


def _render_block(tag: str) -> Callable[[DocumentNode], str]:
    def render(node: DocumentNode) -> str:
        inner = "".join(_render(c) for c in node.children)
        return f"<{tag}{_align_attr(node)}>{inner}</{tag}>"

    return render


def _render_heading(node: DocumentNode) -> str:
    level = int(node.attributes.get("level", 1))
    return _render_block(f"h{level}")(node)


def _render_list(node: DocumentNode) -> str:
    items = "".join(_render(c) for c in node.children)
    return f"<ul>{items}</ul>"


def _render_text(node: DocumentNode) -> str:
    attrs = node.attributes
    out = html.escape(attrs.get("text", ""), quote=False)
    if attrs.get("color"):
        out = f'<span style="color: {html.escape(attrs["color"])}">{out}</span>'
    if attrs.get("underline"):
        out = f"<u>{out}</u>"
    if attrs.get("italic"):
        out = f"<em>{out}</em>"
    if attrs.get("bold"):
        out = f"<strong>{out}</strong>"
    return out


def _render_image(node: DocumentNode) -> str:
    attrs = node.attributes
    parts = [
        f'src="{html.escape(attrs.get("src", ""))}"',
        f'alt="{html.escape(attrs.get("alt") or "")}"',
    ]
    parts.extend(_floating_attrs(node))
    return f"<img {' '.join(parts)} />"


def _render_text_box(node: DocumentNode) -> str:
    content = html.escape(node.attributes.get("textContent", ""), quote=False)
    parts = [f'data-type="{TEXT_BOX_TYPE}"', *_floating_attrs(node)]
    return f"<div {' '.join(parts)}>{content}</div>"


_RENDERERS: dict[NodeKind, Callable[[DocumentNode], str]] = check_exhaustive(
    {
        NodeKind.DOC: _render_doc,
        NodeKind.PARAGRAPH: _render_block("p"),
        NodeKind.HEADING: _render_heading,
        NodeKind.BULLET_LIST: _render_list,
        NodeKind.LIST_ITEM: _render_block("li"),
        NodeKind.TEXT: _render_text,
        NodeKind.IMAGE: _render_image,
        NodeKind.TEXT_BOX: _render_text_box,
    },
    "markup renderer",
)


def _align_attr(node: DocumentNode) -> str:
    align = node.attributes.get("textAlign") or "left"
    if align == "left":
        return ""
    return f' style="text-align: {align}"'


# data-* attributes plus inline positioning styles for a floating node
def _floating_attrs(node: DocumentNode) -> list[str]:
    attrs = node.attributes
    positioning = attrs.get("positioning") or FLOW
    parts = [f'data-positioning="{positioning}"']
    for key in GEOMETRY_KEYS:
        if attrs.get(key) is not None:
            parts.append(f'data-{key}="{_fmt(attrs[key])}"')

    styles = []
    if positioning == ABSOLUTE:
        styles.append("position: absolute")
        if attrs.get("x") is not None:
            styles.append(f"left: {_fmt(attrs['x'])}px")
        if attrs.get("y") is not None:
            styles.append(f"top: {_fmt(attrs['y'])}px")
    if attrs.get("width") is not None:
        styles.append(f"width: {_fmt(attrs['width'])}px")
    if attrs.get("height") is not None:
        styles.append(f"height: {_fmt(attrs['height'])}px")
    if styles:
        parts.append(f'style="{"; ".join(styles)}"')
    return parts


def _fmt(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ===== IMPORT =====


# * Parse markup produced by to_markup_string (or similar HTML) back into a tree
def from_markup_string(markup: str) -> DocumentNode:
    soup = BeautifulSoup(markup, "html.parser")
    container = soup.body or soup
    blocks: list[DocumentNode] = []

    for element in container.children:
        if isinstance(element, NavigableString):
            if element.strip():
                blocks.append(paragraph(element.strip()))
            continue
        if not isinstance(element, Tag):
            continue
        block = _parse_block(element)
        if block is not None:
            blocks.append(block)

    if not blocks:
        blocks.append(paragraph())
    vlog("MARKUP", f"Parsed {len(blocks)} blocks from markup")
    return doc(*blocks)


def _parse_block(element: Tag) -> DocumentNode | None:
    name = element.name
    align = _alignment(element)

    if name == "p":
        return paragraph(*_parse_runs(element), align=align)
    if name in ("h1", "h2", "h3", "h4", "h5", "h6"):
        return heading(int(name[1]), *_parse_runs(element), align=align)
    if name in ("ul", "ol"):
        items = [
            list_item(*_parse_runs(li), align=_alignment(li))
            for li in element.find_all("li", recursive=False)
        ]
        return bullet_list(*items) if items else None
    if name == "img":
        return _parse_image(element)
    if name == "div" and element.get("data-type") == TEXT_BOX_TYPE:
        return _parse_text_box(element)
    if name in ("script", "style", "head", "title"):
        return None

    # unknown container: keep its text as a plain paragraph
    content = element.get_text()
    return paragraph(content.strip()) if content.strip() else None


def _parse_image(element: Tag) -> DocumentNode:
    geometry = _geometry(element)
    positioning = element.get("data-positioning") or _styles(element).get("position")
    positioned = positioning == ABSOLUTE
    return image(
        str(element.get("src", "")),
        str(element.get("alt", "")),
        geometry.get("width"),
        geometry.get("height"),
        x=geometry.get("x") if positioned else None,
        y=geometry.get("y") if positioned else None,
    )


def _parse_text_box(element: Tag) -> DocumentNode:
    geometry = _geometry(element)
    return text_box(
        x=geometry.get("x", TEXT_BOX_DEFAULTS["x"]),
        y=geometry.get("y", TEXT_BOX_DEFAULTS["y"]),
        width=geometry.get("width", TEXT_BOX_DEFAULTS["width"]),
        height=geometry.get("height", TEXT_BOX_DEFAULTS["height"]),
        content=element.get_text(),
    )


# collect text runs under an inline container, accumulating marks from wrapping tags
def _parse_runs(element: Tag) -> list[DocumentNode]:
    runs: list[DocumentNode] = []
    _collect_runs(element, {}, runs)
    return merge_runs(runs)


def _collect_runs(element: Tag, marks: dict[str, Any], runs: list[DocumentNode]) -> None:
    for child in element.children:
        if isinstance(child, NavigableString):
            runs.append(text(str(child), **marks))
            continue
        if not isinstance(child, Tag):
            continue
        if child.name == "br":
            runs.append(text("\n", **marks))
            continue

        nested = dict(marks)
        if child.name in ("strong", "b"):
            nested["bold"] = True
        elif child.name in ("em", "i"):
            nested["italic"] = True
        elif child.name == "u":
            nested["underline"] = True
        color = _styles(child).get("color")
        if color:
            nested["color"] = color
        _collect_runs(child, nested, runs)


def _styles(element: Tag) -> dict[str, str]:
    raw = element.get("style") or ""
    styles: dict[str, str] = {}
    for declaration in str(raw).split(";"):
        if ":" in declaration:
            key, value = declaration.split(":", 1)
            styles[key.strip().lower()] = value.strip()
    return styles


def _alignment(element: Tag) -> str:
    align = _styles(element).get("text-align", "left")
    return align if align in ALIGNMENTS else "left"


# geometry from data-* attributes, falling back to inline left/top/width/height styles
def _geometry(element: Tag) -> dict[str, int | float]:
    styles = _styles(element)
    fallbacks = {"x": "left", "y": "top", "width": "width", "height": "height"}
    geometry: dict[str, int | float] = {}
    for key in GEOMETRY_KEYS:
        value = _number(element.get(f"data-{key}"))
        if value is None:
            value = _number(styles.get(fallbacks[key]))
        if value is not None:
            geometry[key] = value
    return geometry


def _number(raw: Any) -> int | float | None:
    if raw is None:
        return None
    value = str(raw).strip().removesuffix("px")
    try:
        number = float(value)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number
