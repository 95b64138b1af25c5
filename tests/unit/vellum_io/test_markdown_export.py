# tests/unit/vellum_io/test_markdown_export.py
# Unit tests for lossy markdown export & its loss report

from vellum.editor.nodes import (
    bullet_list,
    doc,
    heading,
    image,
    list_item,
    paragraph,
    text,
    text_box,
)
from vellum.editor.normalizer import normalize
from vellum.vellum_io.markdown import export_markdown, to_markdown_string


class TestRender:

    def test_sample_round_trips_exactly(self, sample_markdown):
        assert to_markdown_string(normalize(sample_markdown)) == sample_markdown

    # * Verify exporting a normalized document twice gives the same text
    def test_idempotent_after_one_pass(self):
        source = (
            "#  Spaced  title\n"
            "line one\nline two\n\n"
            "- *italic* item\n"
            "  - nested **bold**\n\n"
            "#### too deep\n\n"
            "Unclosed **bold"
        )
        once = to_markdown_string(normalize(source))
        twice = to_markdown_string(normalize(once))
        assert once == twice

    def test_whitespace_moves_outside_markers(self):
        root = doc(paragraph(text("Hello ", bold=True), "world"))
        assert to_markdown_string(root) == "**Hello** world"

    def test_emphasis_does_not_span_lines(self):
        root = doc(paragraph(text("a\nb", italic=True)))
        assert to_markdown_string(root) == "*a*\n*b*"

    def test_empty_blocks_skipped(self):
        root = doc(paragraph(), heading(2), paragraph("kept"), bullet_list(list_item("")))
        assert to_markdown_string(root) == "kept"

    def test_floating_nodes(self):
        root = doc(image("me.png", "Me"), text_box(content="  Note  "))
        assert to_markdown_string(root) == "![Me](me.png)\n\nNote"


class TestLosses:

    def test_no_losses_for_plain_content(self, sample_markdown):
        assert export_markdown(normalize(sample_markdown)).losses == []

    # * Verify each dropped attribute kind is reported once
    def test_reports_dropped_attributes(self):
        root = doc(
            heading(5, "Deep", align="center"),
            paragraph(text("u", underline=True), text("c", color="#123456")),
            paragraph(text("u2", underline=True)),
            image("me.png", width=100, x=1, y=2),
        )
        losses = export_markdown(root).losses
        assert sorted(losses) == sorted(
            ["alignment", "heading levels above 3", "underline", "color", "positions", "sizes"]
        )
        assert len(losses) == len(set(losses))

    def test_flow_image_without_size_is_lossless(self):
        assert export_markdown(doc(image("me.png"))).losses == []
