# vellum/cli/commands/export.py
# Show a document in the terminal & export it to markdown, HTML, PDF or JSON

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from ...config.settings import get_settings
from ...vellum_io.console import console
from ...vellum_io.documents import export_document
from ...vellum_io.markdown import to_markdown_string
from ...vellum_io.markup import to_markup_string
from ...ui.document_view import render_losses
from ..app import app
from ..decorators import handle_vellum_error
from ..helpers import load_profile, load_surface, print_document, resolve_doc_path
from ..params import DocOpt, FormatOpt, parse_formats


# * Print the document tree (or its markdown/markup rendering)
@app.command(help="Show the current document")
@handle_vellum_error
def show(
    ctx: typer.Context,
    doc: Optional[Path] = DocOpt(),
    markdown: bool = typer.Option(False, "--markdown", help="Print as markdown"),
    markup: bool = typer.Option(False, "--html", help="Print as HTML markup"),
) -> None:
    settings = get_settings(ctx)
    path = resolve_doc_path(settings, doc)
    surface = load_surface(path)

    if markdown:
        console.print(to_markdown_string(surface.root), markup=False, highlight=False)
    elif markup:
        console.print(to_markup_string(surface.root), markup=False, highlight=False)
    else:
        print_document(surface, f"[bold]{escape(path.name)}[/]")


# * Write the document to each requested format as <out-dir>/<name>.<ext>
@app.command(help="Export the document to md, html, pdf and/or json")
@handle_vellum_error
def export(
    ctx: typer.Context,
    formats: Optional[List[str]] = FormatOpt(),
    out_dir: Optional[Path] = typer.Option(
        None, "--out-dir", "-o", help="Output directory (default: settings.output_dir)"
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="File stem (default: profile name, else 'resume')"
    ),
    page_format: Optional[str] = typer.Option(
        None, "--page-format", help="PDF page format: A4|Letter|Legal"
    ),
    doc: Optional[Path] = DocOpt(),
) -> None:
    settings = get_settings(ctx)
    surface = load_surface(resolve_doc_path(settings, doc))
    selected = parse_formats(formats)
    stem = name or load_profile(settings).file_stem
    target_dir = out_dir if out_dir is not None else Path(settings.output_dir)

    for fmt in selected:
        target = target_dir / f"{stem}.{fmt}"
        losses = export_document(
            surface.root, target, fmt, page_format or settings.page_format
        )
        console.print(f"[green]Exported[/] {escape(str(target))}")
        if losses:
            console.print(render_losses(losses))
