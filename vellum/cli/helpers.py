# vellum/cli/helpers.py
# Shared CLI helpers: document path resolution, surface load/save & reporting

from __future__ import annotations

from pathlib import Path

from rich.markup import escape

from ..config.settings import VellumSettings
from ..core.exceptions import FileReadError
from ..editor.geometry import MIN_HEIGHT, MIN_WIDTH, Geometry
from ..editor.normalizer import NormalizationDegradation
from ..editor.overlay import LayoutProvider
from ..editor.surface import EditorSurface
from ..editor.tree import DocumentTree
from ..vellum_io.console import console
from ..vellum_io.documents import load_document, save_document
from ..vellum_io.profile_store import Profile, ProfileStore
from ..ui.document_view import render_document_tree


# * Document path from --doc or settings
def resolve_doc_path(settings: VellumSettings, doc: Path | None) -> Path:
    return doc if doc is not None else settings.document_path


# headless layout: flow-positioned floating nodes sit at the page origin w/ their stored size
def flow_layout(tree: DocumentTree) -> LayoutProvider:
    def layout(node_id: str) -> Geometry | None:
        node = tree.find(node_id)
        if node is None or not node.is_floating:
            return None
        attrs = node.attributes
        return Geometry(
            x=0,
            y=0,
            width=attrs.get("width") or MIN_WIDTH,
            height=attrs.get("height") or MIN_HEIGHT,
        )

    return layout


# * Fresh surface w/ the headless layout attached
def new_surface() -> EditorSurface:
    surface = EditorSurface()
    surface.overlay.layout = flow_layout(surface.tree)
    return surface


# * Load a saved document into a surface (missing file -> hint to create one)
def load_surface(path: Path) -> EditorSurface:
    if not path.exists():
        raise FileReadError(
            f"No document at {path}. Run 'vellum generate' or 'vellum blank' first.", path
        )
    surface = new_surface()
    surface.set_content(load_document(path).root)
    return surface


def save_surface(surface: EditorSurface, path: Path) -> None:
    save_document(surface.tree, path)


# * Stored profile, or the contents of an explicit profile file
def load_profile(settings: VellumSettings, profile_path: Path | None = None) -> Profile:
    if profile_path is not None:
        return ProfileStore(profile_path).load()
    return ProfileStore(settings.profile_path).load()


def print_document(surface: EditorSurface, title: str | None = None) -> None:
    console.print(render_document_tree(surface.root, title))


def print_degradations(degradations: list[NormalizationDegradation]) -> None:
    if not degradations:
        return
    console.print(f"[yellow]{len(degradations)} block(s) kept as plain text:[/]")
    for d in degradations:
        console.print(f"  [dim]line {d.line}:[/] {escape(d.reason)}")


def print_saved(path: Path) -> None:
    console.print(f"[green]Saved[/] {escape(str(path))}")
