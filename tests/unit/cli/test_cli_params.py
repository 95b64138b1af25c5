# tests/unit/cli/test_cli_params.py
# Unit tests for shared CLI option parsing, helpers & the error decorator

import pytest
import typer

from vellum.cli.decorators import handle_vellum_error
from vellum.cli.helpers import flow_layout, load_surface, new_surface, save_surface
from vellum.cli.params import parse_formats, parse_handle
from vellum.core.exceptions import FileReadError, NodeNotFoundError
from vellum.editor.geometry import Geometry, Handle
from vellum.vellum_io.console import configure_console


class TestParsers:

    @pytest.mark.parametrize(
        "raw,handle",
        [("right", Handle.RIGHT), ("Top_Left", Handle.TOP_LEFT), ("bottom right", Handle.BOTTOM_RIGHT)],
    )
    def test_parse_handle(self, raw, handle):
        assert parse_handle(raw) is handle

    def test_parse_handle_invalid(self):
        with pytest.raises(typer.BadParameter, match="Choose"):
            parse_handle("middle")

    def test_parse_formats_default(self):
        assert parse_formats(None) == ["md", "html", "pdf"]

    def test_parse_formats_normalizes_and_dedupes(self):
        assert parse_formats(["markdown", ".PDF", "md", "json"]) == ["md", "pdf", "json"]

    def test_parse_formats_invalid(self):
        with pytest.raises(typer.BadParameter):
            parse_formats(["docx"])


class TestHelpers:

    def test_flow_layout_places_floats_at_origin(self):
        surface = new_surface()
        image_id = surface.insert_image("me.png", width=120)
        layout = flow_layout(surface.tree)
        assert layout(image_id) == Geometry(0, 0, 120, 50)
        assert layout(surface.root.children[0].id) is None

    def test_load_missing_document(self, tmp_path):
        with pytest.raises(FileReadError, match="vellum blank"):
            load_surface(tmp_path / "none.json")

    def test_save_and_load_keeps_layout(self, tmp_path):
        surface = new_surface()
        surface.insert_image("me.png", width=80, height=80)
        path = tmp_path / "doc.json"
        save_surface(surface, path)
        loaded = load_surface(path)
        assert loaded.overlay.layout is not None
        assert loaded.tree.to_dict() == surface.tree.to_dict()


class TestDecorator:

    # * Verify Vellum errors print a labeled message & exit 1
    def test_vellum_error_exits(self):
        console = configure_console(width=120, record=True)

        @handle_vellum_error
        def boom():
            raise NodeNotFoundError("n9")

        with pytest.raises(SystemExit) as exc:
            boom()
        assert exc.value.code == 1
        assert "Document Error: Node not found: n9" in console.export_text()

    def test_typer_exceptions_pass_through(self):
        @handle_vellum_error
        def bad():
            raise typer.BadParameter("nope")

        with pytest.raises(typer.BadParameter):
            bad()

    def test_unexpected_error(self):
        console = configure_console(width=120, record=True)

        @handle_vellum_error
        def crash():
            raise RuntimeError("[weird] text")

        with pytest.raises(SystemExit):
            crash()
        assert "Unexpected Error: [weird] text" in console.export_text()
