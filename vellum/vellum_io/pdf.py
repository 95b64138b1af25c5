# vellum/vellum_io/pdf.py
# PDF export w/ fpdf2: flow blocks paginate to the page format, floating nodes sit at their px position on page 1

from __future__ import annotations

from pathlib import Path
from typing import Callable

from fpdf import FPDF
from fpdf.errors import FPDFException

from ..core.debug import debug_error
from ..core.exceptions import ExportError
from ..core.verbose import vlog
from ..editor.nodes import ABSOLUTE, DocumentNode, NodeKind, check_exhaustive

# CSS px (96 dpi) -> mm
PX_TO_MM = 0.2646

FONT = "Helvetica"
BODY_SIZE = 10
LINE_HEIGHT = 5
HEADING_SIZES = {1: 20, 2: 15, 3: 12.5, 4: 11.5, 5: 11, 6: 10}
PLACEHOLDER_HEIGHT_MM = 25
ALIGN_CODES = {"left": "L", "center": "C", "right": "R", "justify": "J"}

# core PDF fonts are latin-1 only
_LATIN1_REPLACEMENTS = {
    "\u2022": "-",
    "\u2013": "-",
    "\u2014": "-",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u00a0": " ",
}


def _latin1(value: str) -> str:
    for char, replacement in _LATIN1_REPLACEMENTS.items():
        value = value.replace(char, replacement)
    return value.encode("latin-1", "replace").decode("latin-1")


# "#rgb" / "#rrggbb" -> (r, g, b); anything else renders black
def parse_color(value: str | None) -> tuple[int, int, int]:
    if not value or not value.startswith("#"):
        return (0, 0, 0)
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6:
        return (0, 0, 0)
    try:
        return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]
    except ValueError:
        return (0, 0, 0)


class ResumePDF(FPDF):

    def __init__(self, page_format: str = "A4") -> None:
        super().__init__(orientation="P", unit="mm", format=page_format)
        self.set_margins(15, 15, 15)
        self.set_auto_page_break(auto=True, margin=15)
        self.set_creator("Vellum")

    # * Text-bearing block: per-run styling when left-aligned, plain aligned text otherwise
    def add_text_block(
        self,
        node: DocumentNode,
        size: float = BODY_SIZE,
        base_style: str = "",
        prefix: str = "",
    ) -> None:
        align = node.attributes.get("textAlign") or "left"
        line_height = max(LINE_HEIGHT, size * 0.5)
        self.set_x(self.l_margin)

        if align != "left":
            self.set_font(FONT, base_style, size)
            self.set_text_color(0, 0, 0)
            self.multi_cell(
                0, line_height, _latin1(prefix + node.text), align=ALIGN_CODES[align]
            )
            return

        if prefix:
            self.set_font(FONT, base_style, size)
            self.set_text_color(0, 0, 0)
            self.write(line_height, prefix)
        for run in node.children:
            attrs = run.attributes
            style = base_style
            if attrs.get("bold") and "B" not in style:
                style += "B"
            if attrs.get("italic"):
                style += "I"
            if attrs.get("underline"):
                style += "U"
            self.set_font(FONT, style, size)
            self.set_text_color(*parse_color(attrs.get("color")))
            self.write(line_height, _latin1(attrs.get("text", "")))
        self.ln(line_height)

    def add_image_block(self, node: DocumentNode) -> None:
        attrs = node.attributes
        width = (attrs.get("width") or 0) * PX_TO_MM
        height = (attrs.get("height") or 0) * PX_TO_MM
        if not self._embed(attrs.get("src", ""), None, None, width, height):
            self.set_x(self.l_margin)
            self.placeholder(
                self.l_margin,
                self.get_y(),
                width or self.epw / 3,
                height or PLACEHOLDER_HEIGHT_MM,
                f"[Image: {attrs.get('alt') or attrs.get('src', '')}]",
            )
            self.ln(height or PLACEHOLDER_HEIGHT_MM)

    # * Floating node at its absolute px position (page-relative, inside the margins)
    def add_floating(self, node: DocumentNode) -> None:
        attrs = node.attributes
        x = self.l_margin + (attrs.get("x") or 0) * PX_TO_MM
        y = self.t_margin + (attrs.get("y") or 0) * PX_TO_MM
        width = (attrs.get("width") or 200) * PX_TO_MM
        height = (attrs.get("height") or 100) * PX_TO_MM

        if node.kind is NodeKind.TEXT_BOX:
            self.set_draw_color(160, 160, 160)
            self.rect(x, y, width, height)
            self.set_xy(x + 1, y + 1)
            self.set_font(FONT, "", BODY_SIZE)
            self.set_text_color(0, 0, 0)
            self.multi_cell(width - 2, LINE_HEIGHT, _latin1(attrs.get("textContent", "")))
            return

        if not self._embed(attrs.get("src", ""), x, y, width, height):
            self.placeholder(
                x, y, width, height, f"[Image: {attrs.get('alt') or attrs.get('src', '')}]"
            )

    def placeholder(self, x: float, y: float, w: float, h: float, label: str) -> None:
        self.set_draw_color(160, 160, 160)
        self.rect(x, y, w, h)
        self.set_xy(x, y + h / 2 - LINE_HEIGHT / 2)
        self.set_font(FONT, "I", 8)
        self.set_text_color(110, 110, 110)
        self.cell(w, LINE_HEIGHT, _latin1(label), align="C")

    # embed a readable local image; False when the source can't be used
    def _embed(
        self, src: str, x: float | None, y: float | None, w: float, h: float
    ) -> bool:
        if not src or not Path(src).is_file():
            return False
        try:
            self.image(src, x=x, y=y, w=w, h=h)
        except Exception as e:
            debug_error(e, f"Embedding image {src}")
            return False
        return True


# ===== BLOCK RENDERERS =====


def _paragraph(pdf: ResumePDF, node: DocumentNode) -> None:
    pdf.add_text_block(node)
    pdf.ln(1.5)


def _heading(pdf: ResumePDF, node: DocumentNode) -> None:
    level = int(node.attributes.get("level", 1))
    pdf.ln(2 if level > 1 else 0)
    pdf.add_text_block(node, size=HEADING_SIZES.get(level, BODY_SIZE), base_style="B")
    if level <= 2:
        y = pdf.get_y()
        pdf.set_draw_color(200, 200, 200)
        pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
    pdf.ln(1.5)


def _bullet_list(pdf: ResumePDF, node: DocumentNode) -> None:
    for item in node.children:
        _render(pdf, item)
    pdf.ln(1.5)


def _list_item(pdf: ResumePDF, node: DocumentNode) -> None:
    pdf.add_text_block(node, prefix="  - ")


def _image(pdf: ResumePDF, node: DocumentNode) -> None:
    if node.attributes.get("positioning") != ABSOLUTE:
        pdf.add_image_block(node)


def _text_box(pdf: ResumePDF, node: DocumentNode) -> None:
    # text boxes are always floating
    return None


def _doc(pdf: ResumePDF, node: DocumentNode) -> None:
    for child in node.children:
        _render(pdf, child)


def _text(pdf: ResumePDF, node: DocumentNode) -> None:
    pdf.set_font(FONT, "", BODY_SIZE)
    pdf.write(LINE_HEIGHT, _latin1(node.attributes.get("text", "")))


_RENDERERS: dict[NodeKind, Callable[[ResumePDF, DocumentNode], None]] = check_exhaustive(
    {
        NodeKind.DOC: _doc,
        NodeKind.PARAGRAPH: _paragraph,
        NodeKind.HEADING: _heading,
        NodeKind.BULLET_LIST: _bullet_list,
        NodeKind.LIST_ITEM: _list_item,
        NodeKind.TEXT: _text,
        NodeKind.IMAGE: _image,
        NodeKind.TEXT_BOX: _text_box,
    },
    "pdf renderer",
)


def _render(pdf: ResumePDF, node: DocumentNode) -> None:
    _RENDERERS[node.kind](pdf, node)


# * Render a document tree to PDF bytes
def to_pdf_bytes(root: DocumentNode, page_format: str = "A4", title: str = "") -> bytes:
    try:
        pdf = ResumePDF(page_format)
        if title:
            pdf.set_title(_latin1(title))
        pdf.add_page()

        # floating nodes first, w/o page breaks, then flow content from the top
        floating = [
            c
            for c in root.children
            if c.kind is NodeKind.TEXT_BOX
            or (c.is_floating and c.attributes.get("positioning") == ABSOLUTE)
        ]
        if floating:
            pdf.set_auto_page_break(auto=False)
            for node in floating:
                pdf.add_floating(node)
            pdf.set_auto_page_break(auto=True, margin=15)
            pdf.set_xy(pdf.l_margin, pdf.t_margin)

        _render(pdf, root)
        data = bytes(pdf.output())
    except (FPDFException, KeyError, ValueError) as e:
        raise ExportError(f"PDF export failed: {e}", "pdf") from e

    vlog("PDF", f"Rendered {pdf.pages_count} page(s)", f"{len(data):,} bytes, {page_format}")
    return data
