# tests/unit/vellum_io/test_markup_export.py
# Unit tests for HTML markup export & import (floating positions survive the round trip)

from vellum.editor.nodes import (
    NodeKind,
    bullet_list,
    doc,
    heading,
    image,
    list_item,
    paragraph,
    text,
    text_box,
)
from vellum.vellum_io.markup import from_markup_string, to_markup_string


def _structure(root):
    # kind + attributes w/o ids, for comparing trees across a round trip
    def visit(node):
        attrs = {k: v for k, v in node.attributes.items() if v not in (None, False, "")}
        return (node.kind.value, attrs, [visit(c) for c in node.children])

    return visit(root)


class TestExport:

    def test_blocks_and_marks(self):
        root = doc(
            heading(1, "Jane Doe"),
            paragraph(text("Lead ", bold=True), text("dev", italic=True, underline=True)),
            bullet_list(list_item("Built X")),
        )
        assert to_markup_string(root) == (
            "<h1>Jane Doe</h1>\n"
            "<p><strong>Lead </strong><em><u>dev</u></em></p>\n"
            "<ul><li>Built X</li></ul>"
        )

    def test_alignment_and_color(self):
        root = doc(paragraph(text("red", color="#cc0000"), align="center"))
        assert to_markup_string(root) == (
            '<p style="text-align: center"><span style="color: #cc0000">red</span></p>'
        )

    def test_text_is_escaped(self):
        root = doc(paragraph("R&D <team>"), text_box(content="a < b"))
        out = to_markup_string(root)
        assert "R&amp;D &lt;team&gt;" in out
        assert ">a &lt; b</div>" in out

    # * Verify floating nodes carry absolute positioning styles
    def test_absolute_image_styles(self):
        root = doc(image("me.png", "Me", 120, 80, x=40, y=60))
        out = to_markup_string(root)
        assert 'data-positioning="absolute"' in out
        assert 'style="position: absolute; left: 40px; top: 60px; width: 120px; height: 80px"' in out

    def test_integral_floats_render_as_ints(self):
        root = doc(text_box(x=10.0, y=20.5, width=200.0, height=100))
        out = to_markup_string(root)
        assert 'data-x="10"' in out
        assert 'data-y="20.5"' in out
        assert 'data-type="draggable-text-box"' in out


class TestImport:

    # * Verify a full tree survives export & re-import
    def test_round_trip(self):
        root = doc(
            heading(2, "Experience", align="right"),
            paragraph(
                "Plain ",
                text("bold", bold=True),
                text(" red", color="#cc0000", underline=True),
            ),
            bullet_list(list_item("one"), list_item(text("two", italic=True))),
            image("me.png", "Me", 120, 80, x=40, y=60),
            image("flow.png", "Flow"),
            text_box(300, 20, 180, 90, "Open to relocation"),
        )
        restored = from_markup_string(to_markup_string(root))
        assert _structure(restored) == _structure(root)

    def test_positions_survive(self):
        root = doc(text_box(x=312, y=48, width=150, height=75, content="Note"))
        box = from_markup_string(to_markup_string(root)).children[0]
        assert box.kind is NodeKind.TEXT_BOX
        assert (box.attributes["x"], box.attributes["y"]) == (312, 48)
        assert (box.attributes["width"], box.attributes["height"]) == (150, 75)

    def test_style_fallback_for_geometry(self):
        markup = '<img src="a.png" style="position: absolute; left: 12px; top: 34px; width: 56px">'
        node = from_markup_string(markup).children[0]
        assert node.attributes["positioning"] == "absolute"
        assert (node.attributes["x"], node.attributes["y"]) == (12, 34)
        assert node.attributes["width"] == 56

    def test_html_synonyms_and_breaks(self):
        node = from_markup_string("<p><b>a</b><i>b</i>c<br>d</p>").children[0]
        assert node.text == "abc\nd"
        assert node.children[0].attributes["bold"] is True
        assert node.children[1].attributes["italic"] is True

    def test_unknown_tags_degrade_to_paragraphs(self):
        root = from_markup_string("<section>Loose text</section><script>x()</script>")
        assert [(c.kind, c.text) for c in root.children] == [(NodeKind.PARAGRAPH, "Loose text")]

    def test_empty_markup(self):
        root = from_markup_string("")
        assert [c.kind for c in root.children] == [NodeKind.PARAGRAPH]
