# vellum/cli/commands/enhance.py
# Enhance a single statement w/ the local model, optionally writing it into a document block

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ...ai.resume_service import DEFAULT_ENHANCE_CONTEXT, enhance as enhance_text
from ...config.settings import get_settings
from ...core.exceptions import AIError
from ...editor.nodes import text as text_run
from ...vellum_io.console import console
from ..app import app
from ..decorators import handle_vellum_error
from ..helpers import load_surface, print_saved, resolve_doc_path, save_surface
from ..params import DocOpt, ModelOpt


# * Rewrite TEXT (or the text of --block) as a concise, achievement-oriented resume line
@app.command(help="Rewrite a statement as a professional resume line")
@handle_vellum_error
def enhance(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Statement to enhance"),
    context: str = typer.Option(
        DEFAULT_ENHANCE_CONTEXT, "--context", "-c", help="What the statement describes"
    ),
    block: Optional[str] = typer.Option(
        None, "--block", "-b", help="Enhance this block's text & replace it in the document"
    ),
    model: Optional[str] = ModelOpt(),
    doc: Optional[Path] = DocOpt(),
) -> None:
    settings = get_settings(ctx)
    surface = None
    if block is not None:
        path = resolve_doc_path(settings, doc)
        surface = load_surface(path)
        text = surface.tree.block_text(block)

    with console.status("Enhancing..."):
        result = enhance_text(text or "", context, model)
    if not result.success:
        raise AIError(result.error)

    console.print(escape(result.text))

    if surface is not None and block is not None:
        surface.tree.replace_children(block, [text_run(result.text)])
        save_surface(surface, path)
        print_saved(path)
