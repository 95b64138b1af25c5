# tests/unit/editor/test_editor_surface.py
# Unit tests for EditorSurface content replacement, insertion & generation results

from vellum.ai.types import GenerateResult
from vellum.editor.geometry import Point
from vellum.editor.nodes import TEXT_BOX_DEFAULTS, NodeKind
from vellum.editor.overlay import OverlayMode
from vellum.editor.surface import EditorSurface


class TestContent:

    def test_load_markdown_reports_degradations(self):
        surface = EditorSurface()
        result = surface.load_markdown("# Title\n\nBroken **bold")
        assert result.root is surface.root
        assert len(surface.degradations) == 1

    def test_set_content_resets_overlay_and_selection(self):
        surface = EditorSurface()
        box = surface.insert_text_box(0, 0)
        surface.overlay.select(box)
        surface.load_markdown("new content")
        assert surface.overlay.mode is OverlayMode.IDLE
        assert surface.selection.is_empty
        assert box not in surface.tree

    # * Verify a successful generation replaces the whole document
    def test_apply_successful_generation(self):
        surface = EditorSurface()
        applied = surface.apply_generation(
            GenerateResult(success=True, text="# Jane Doe\n\n- Built X")
        )
        assert applied is True
        kinds = [c.kind for c in surface.root.children]
        assert kinds == [NodeKind.HEADING, NodeKind.BULLET_LIST]

    # * Verify failures become readable document text instead of raising
    def test_apply_failed_generation(self):
        surface = EditorSurface()
        applied = surface.apply_generation(GenerateResult(success=False, error="model offline"))
        assert applied is False
        assert [b.text for b in surface.tree.text_blocks()] == ["Error: model offline"]

    def test_failed_generation_keeps_existing_prefix(self):
        surface = EditorSurface()
        surface.apply_generation(GenerateResult(success=False, error="Request failed: timeout"))
        assert surface.tree.text_blocks()[0].text == "Request failed: timeout"


class TestInsertion:

    def test_insert_after_caret_block(self):
        surface = EditorSurface()
        surface.load_markdown("first\n\nsecond")
        surface.select_text(surface.root.children[0].id, 2, 2)
        box = surface.insert_text_box(10, 10)
        assert [c.id for c in surface.root.children].index(box) == 1

    def test_default_text_box_matches_node_defaults(self):
        surface = EditorSurface()
        attrs = surface.tree.get(surface.insert_text_box()).attributes
        for key in ("x", "y", "width", "height", "textContent"):
            assert attrs[key] == TEXT_BOX_DEFAULTS[key]

    def test_insert_after_list_containing_caret(self):
        surface = EditorSurface()
        surface.load_markdown("- a\n- b\n\nafter")
        item = surface.root.children[0].children[1]
        surface.select_text(item.id)
        image_id = surface.insert_image("me.png", "Me")
        assert surface.root.children[1].id == image_id

    def test_insert_without_selection_appends(self):
        surface = EditorSurface()
        image_id = surface.insert_image("me.png", x=5, y=6)
        assert surface.root.children[-1].id == image_id
        assert surface.tree.get(image_id).attributes["positioning"] == "absolute"

    def test_remove_selected_node_resets_overlay(self):
        surface = EditorSurface()
        box = surface.insert_text_box(0, 0)
        surface.overlay.click(Point(10, 10))
        surface.remove(box)
        assert surface.overlay.mode is OverlayMode.IDLE
        assert box not in surface.tree

    def test_select_all_spans_every_block(self):
        surface = EditorSurface()
        surface.load_markdown("# A\n\nbody text")
        selection = surface.select_all()
        assert selection.anchor.block_id == surface.root.children[0].id
        assert selection.head.offset == len("body text")
