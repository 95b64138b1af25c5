# vellum/cli/commands/edit.py
# Headless editing: insert floating nodes, replay pointer gestures & apply formatting commands

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ...config.settings import get_settings
from ...core.exceptions import InteractionError
from ...editor.geometry import Geometry, Point, handle_boxes
from ...editor.surface import EditorSurface
from ...vellum_io.console import console
from ...ui.document_view import render_overlay_state
from ..app import app
from ..decorators import handle_vellum_error
from ..helpers import load_surface, print_saved, resolve_doc_path, save_surface
from ..params import DocOpt, NodeIdArg, parse_handle

insert_app = typer.Typer(rich_markup_mode="rich", help="Insert floating nodes")
app.add_typer(insert_app, name="insert")


# * Insert a draggable text box after the current block (or at the end)
@insert_app.command("textbox", help="Insert a draggable text box")
@handle_vellum_error
def insert_textbox(
    ctx: typer.Context,
    x: int = typer.Option(0, "--x", help="Left offset in px"),
    y: int = typer.Option(0, "--y", help="Top offset in px"),
    width: int = typer.Option(200, "--width", min=50, help="Width in px"),
    height: int = typer.Option(100, "--height", min=50, help="Height in px"),
    content: str = typer.Option("Double-click to edit", "--content", "-t"),
    doc: Optional[Path] = DocOpt(),
) -> None:
    path = resolve_doc_path(get_settings(ctx), doc)
    surface = load_surface(path)
    node_id = surface.insert_text_box(x, y, width, height, content)
    save_surface(surface, path)
    console.print(f"[green]Inserted text box[/] {node_id}")


# * Insert an image; flow-positioned unless both --x & --y are given
@insert_app.command("image", help="Insert an image")
@handle_vellum_error
def insert_image(
    ctx: typer.Context,
    src: str = typer.Argument(..., help="Image path or URL"),
    alt: str = typer.Option("", "--alt", help="Alternative text"),
    width: Optional[int] = typer.Option(None, "--width", min=1),
    height: Optional[int] = typer.Option(None, "--height", min=1),
    x: Optional[int] = typer.Option(None, "--x", help="Left offset in px"),
    y: Optional[int] = typer.Option(None, "--y", help="Top offset in px"),
    doc: Optional[Path] = DocOpt(),
) -> None:
    if (x is None) != (y is None):
        raise typer.BadParameter("Pass both --x and --y to position the image, or neither")
    path = resolve_doc_path(get_settings(ctx), doc)
    surface = load_surface(path)
    node_id = surface.insert_image(src, alt, width, height, x, y)
    save_surface(surface, path)
    console.print(f"[green]Inserted image[/] {node_id}")


# * Replay one pointer gesture on a floating node: drag, resize or edit its text
@app.command(help="Drag, resize or edit a floating node")
@handle_vellum_error
def gesture(
    ctx: typer.Context,
    node_id: str = NodeIdArg(),
    action: str = typer.Argument(..., help="drag | resize | edit"),
    dx: float = typer.Option(0, "--dx", help="Pointer movement along x in px"),
    dy: float = typer.Option(0, "--dy", help="Pointer movement along y in px"),
    handle: Optional[str] = typer.Option(
        None, "--handle", help="Resize handle, e.g. right, bottom-left, top-left"
    ),
    text: Optional[str] = typer.Option(None, "--text", "-t", help="New text box content"),
    doc: Optional[Path] = DocOpt(),
) -> None:
    path = resolve_doc_path(get_settings(ctx), doc)
    surface = load_surface(path)
    overlay = surface.overlay
    overlay.select(node_id)

    action = action.strip().lower()
    if action == "drag":
        start = _center(overlay.geometry_of(node_id))
        _replay(surface, node_id, start, dx, dy)
    elif action == "resize":
        if handle is None:
            raise typer.BadParameter("--handle is required for resize")
        box = handle_boxes(overlay.geometry_of(node_id))[parse_handle(handle)]
        _replay(surface, node_id, _center(box), dx, dy)
    elif action == "edit":
        if text is None:
            raise typer.BadParameter("--text is required for edit")
        overlay.begin_edit(node_id)
        overlay.edit_text(text)
        overlay.blur()
    else:
        raise typer.BadParameter(f"Unknown action '{action}'. Choose: drag|resize|edit")

    console.print(render_overlay_state(overlay))
    save_surface(surface, path)
    print_saved(path)


def _center(box: Geometry) -> Point:
    return Point(box.x + box.width / 2, box.y + box.height / 2)


def _replay(surface: EditorSurface, node_id: str, start: Point, dx: float, dy: float) -> None:
    overlay = surface.overlay
    hit = overlay.hit_test(start)
    if hit is None or hit[0] != node_id:
        raise InteractionError(f"{node_id} is covered by another node at ({start.x:g}, {start.y:g})")
    overlay.pointer_down(start)
    overlay.pointer_move(Point(start.x + dx, start.y + dy))
    overlay.pointer_up(Point(start.x + dx, start.y + dy))


# * Apply formatting commands to a block's text (or a character range of it)
@app.command("format", help="Apply formatting to a block's text")
@handle_vellum_error
def format_cmd(
    ctx: typer.Context,
    block: Optional[str] = typer.Argument(None, help="Block id (omit with --all)"),
    start: int = typer.Option(0, "--start", min=0, help="First character offset"),
    end: Optional[int] = typer.Option(None, "--end", min=0, help="End character offset"),
    select_all: bool = typer.Option(False, "--all", help="Select the whole document"),
    bold: bool = typer.Option(False, "--bold", help="Toggle bold"),
    italic: bool = typer.Option(False, "--italic", help="Toggle italic"),
    underline: bool = typer.Option(False, "--underline", help="Toggle underline"),
    color: Optional[str] = typer.Option(None, "--color", help="Text color ('none' clears)"),
    heading: Optional[int] = typer.Option(None, "--heading", min=1, max=6, help="Heading level"),
    align: Optional[str] = typer.Option(None, "--align", help="left|center|right|justify"),
    bullet: bool = typer.Option(False, "--bullet", help="Toggle bullet list"),
    doc: Optional[Path] = DocOpt(),
) -> None:
    if block is None and not select_all:
        raise typer.BadParameter("Pass a block id or --all")
    path = resolve_doc_path(get_settings(ctx), doc)
    surface = load_surface(path)
    if select_all:
        surface.select_all()
    else:
        surface.select_text(block, start, end)

    commands = surface.commands
    applied: list[str] = []
    if bold and commands.toggle_bold():
        applied.append("bold")
    if italic and commands.toggle_italic():
        applied.append("italic")
    if underline and commands.toggle_underline():
        applied.append("underline")
    if color is not None and commands.set_color(None if color.lower() == "none" else color):
        applied.append(f"color {color}")
    try:
        if heading is not None and commands.set_heading(heading):
            applied.append(f"heading {heading}")
        if align is not None and commands.set_text_align(align):
            applied.append(f"align {align}")
    except ValueError as e:
        raise typer.BadParameter(str(e))
    if bullet and commands.toggle_bullet_list():
        applied.append("bullet list")

    if not applied:
        console.print("[yellow]Nothing changed[/]")
        return
    save_surface(surface, path)
    console.print(f"[green]Applied[/] {escape(', '.join(applied))}")
    print_saved(path)
