# tests/unit/vellum_io/test_document_store.py
# Unit tests for document JSON persistence & export dispatch

import json

import pytest

from vellum.core.exceptions import ExportError, JSONParsingError, SchemaError
from vellum.editor.nodes import doc, heading, paragraph, text, text_box
from vellum.editor.tree import DocumentTree
from vellum.vellum_io.documents import (
    DOCUMENT_FORMAT_VERSION,
    export_document,
    load_document,
    save_document,
)


@pytest.fixture
def root():
    return doc(
        heading(1, "Jane Doe"),
        paragraph(text("underlined", underline=True), align="right"),
        text_box(10, 20, 150, 60, "Note"),
    )


class TestPersistence:

    # * Verify ids & attributes survive save/load
    def test_round_trip(self, tmp_path, root):
        path = tmp_path / "nested" / "resume.json"
        save_document(DocumentTree(root), path)
        loaded = load_document(path)
        assert loaded.to_dict() == root.to_dict()
        assert json.loads(path.read_text())["version"] == DOCUMENT_FORMAT_VERSION

    def test_accepts_bare_node(self, tmp_path, root):
        path = tmp_path / "resume.json"
        save_document(root, path)
        assert load_document(path).root.children[2].attributes["x"] == 10

    def test_version_mismatch(self, tmp_path):
        path = tmp_path / "resume.json"
        path.write_text(json.dumps({"version": 99, "document": {"kind": "doc"}}))
        with pytest.raises(JSONParsingError, match="Unsupported document version"):
            load_document(path)

    def test_missing_document_object(self, tmp_path):
        path = tmp_path / "resume.json"
        path.write_text(json.dumps({"version": DOCUMENT_FORMAT_VERSION}))
        with pytest.raises(JSONParsingError):
            load_document(path)

    def test_root_must_be_doc(self, tmp_path):
        path = tmp_path / "resume.json"
        payload = {"version": DOCUMENT_FORMAT_VERSION, "document": {"kind": "paragraph"}}
        path.write_text(json.dumps(payload))
        with pytest.raises(SchemaError):
            load_document(path)


class TestExport:

    def test_markdown_returns_losses(self, tmp_path, root):
        target = tmp_path / "out" / "resume.md"
        losses = export_document(root, target, "md")
        assert target.read_text().startswith("# Jane Doe")
        assert "underline" in losses
        assert "alignment" in losses

    def test_html(self, tmp_path, root):
        target = tmp_path / "resume.html"
        assert export_document(root, target, "html") == []
        assert 'data-type="draggable-text-box"' in target.read_text()

    def test_pdf(self, tmp_path, root):
        target = tmp_path / "resume.pdf"
        export_document(root, target, "pdf", "Letter")
        assert target.read_bytes().startswith(b"%PDF")

    def test_json_is_loadable(self, tmp_path, root):
        target = tmp_path / "copy.json"
        export_document(root, target, "json")
        assert load_document(target).to_dict() == root.to_dict()

    def test_unknown_format(self, tmp_path, root):
        with pytest.raises(ExportError) as exc:
            export_document(root, tmp_path / "resume.docx", "docx")
        assert exc.value.format == "docx"
