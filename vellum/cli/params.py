# vellum/cli/params.py
# CLI argument & option definitions shared across commands

from __future__ import annotations

from typing import Any

import typer

from ..editor.geometry import Handle
from ..vellum_io.documents import EXPORT_FORMATS


def DocOpt() -> Any:
    return typer.Option(
        None,
        "--doc",
        "-d",
        help="Document JSON to operate on (default: <output_dir>/<document_filename>)",
        dir_okay=False,
        resolve_path=True,
    )


def ModelOpt() -> Any:
    return typer.Option(
        None, "--model", "-m", help="Local Ollama model (default: settings / OLLAMA_MODEL)"
    )


def InstructionsOpt() -> Any:
    return typer.Option(
        None,
        "--instructions",
        "-i",
        help="Free-text instructions for the resume (default: settings.default_instructions)",
    )


def ProfilePathOpt() -> Any:
    return typer.Option(
        None,
        "--profile",
        "-p",
        help="Profile JSON to use instead of the stored profile",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    )


def FormatOpt() -> Any:
    return typer.Option(
        None,
        "--format",
        "-f",
        help=f"Export format, repeatable ({'|'.join(EXPORT_FORMATS)}; default: md, html, pdf)",
    )


def NodeIdArg() -> Any:
    return typer.Argument(..., help="Node id as shown by 'vellum show'")


# normalize a handle name ("top-left", "top_left", "TOP LEFT") to a Handle
def parse_handle(value: str) -> Handle:
    key = value.strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return Handle(key)
    except ValueError:
        names = "|".join(h.value for h in Handle)
        raise typer.BadParameter(f"Invalid handle '{value}'. Choose: {names}")


def parse_formats(values: list[str] | None) -> list[str]:
    if not values:
        return ["md", "html", "pdf"]
    formats: list[str] = []
    for value in values:
        fmt = value.strip().lower().lstrip(".")
        if fmt == "markdown":
            fmt = "md"
        if fmt not in EXPORT_FORMATS:
            raise typer.BadParameter(
                f"Invalid format '{value}'. Choose: {'|'.join(EXPORT_FORMATS)}"
            )
        if fmt not in formats:
            formats.append(fmt)
    return formats
