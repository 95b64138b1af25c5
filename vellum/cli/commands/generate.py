# vellum/cli/commands/generate.py
# Generate a resume document from the stored profile, or start a blank one

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ...ai.resume_service import generate as generate_resume
from ...config.settings import get_settings
from ...editor.generation import GenerationDispatcher
from ...vellum_io.console import console
from ..app import app
from ..decorators import handle_vellum_error
from ..helpers import (
    load_profile,
    new_surface,
    print_degradations,
    print_document,
    print_saved,
    resolve_doc_path,
    save_surface,
)
from ..params import DocOpt, InstructionsOpt, ModelOpt, ProfilePathOpt


# * Send the profile & instructions to the local model & save the normalized document
@app.command(help="Generate a resume document from your profile with the local model")
@handle_vellum_error
def generate(
    ctx: typer.Context,
    instructions: Optional[str] = InstructionsOpt(),
    model: Optional[str] = ModelOpt(),
    profile_path: Optional[Path] = ProfilePathOpt(),
    doc: Optional[Path] = DocOpt(),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Don't print the document tree"),
) -> None:
    settings = get_settings(ctx)
    path = resolve_doc_path(settings, doc)
    profile = load_profile(settings, profile_path)
    if profile.is_empty:
        console.print("[yellow]Profile is empty; set fields with 'vellum profile set'.[/]")

    surface = new_surface()
    with console.status(f"Generating with [bold]{escape(model or settings.model)}[/]..."):
        with GenerationDispatcher(
            surface, lambda p, i: generate_resume(p, i, model)
        ) as dispatcher:
            result = dispatcher.wait(dispatcher.request(profile, instructions or ""))

    save_surface(surface, path)
    if not result.success:
        console.print(f"[red]Generation failed:[/] {escape(result.error)}")
        print_saved(path)
        raise typer.Exit(1)

    if not quiet:
        print_document(surface)
    print_degradations(surface.degradations)
    print_saved(path)


# * Start a document containing only the profile name as a title
@app.command(help="Start a blank document titled with your profile name")
@handle_vellum_error
def blank(
    ctx: typer.Context,
    doc: Optional[Path] = DocOpt(),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing document"),
) -> None:
    settings = get_settings(ctx)
    path = resolve_doc_path(settings, doc)
    if path.exists() and not force:
        console.print(f"[yellow]{escape(str(path))} exists; pass --force to overwrite.[/]")
        raise typer.Exit(1)

    profile = load_profile(settings)
    surface = new_surface()
    surface.load_markdown(f"# {profile.name or 'Name'}\n\n")
    save_surface(surface, path)
    print_document(surface)
    print_saved(path)

