# vellum/cli/app.py
# Root `vellum` Typer app: .env & settings loading, --verbose/--log-file wiring, command registration
#
# ! Command modules import `app`, so they are imported at the bottom of this file.

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from ..config.settings import settings_manager
from ..vellum_io.console import console

app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    help="Build, edit & export AI-generated resumes from the terminal.",
    context_settings={"help_option_names": ["--help", "-h"]},
)


# * Load environment & settings, set up verbose logging, show usage when no subcommand is used
@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Print model calls, gestures, file I/O & config lines"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Append verbose lines to a plain-text log (implies --verbose)"
    ),
) -> None:
    # .env may set OLLAMA_URL / OLLAMA_MODEL; settings read them on load
    load_dotenv()
    settings_manager.invalidate()

    # ctx.obj may already hold VellumSettings passed in by a caller
    if getattr(ctx, "obj", None) is None:
        ctx.obj = settings_manager.load()

    from ..core.verbose import cleanup_verbose, init_verbose, vlog_config

    verbose_enabled = verbose or log_file is not None
    dev_mode = getattr(ctx.obj, "dev_mode", False)
    init_verbose(enabled=verbose_enabled, log_file=log_file, dev_mode=dev_mode)
    ctx.call_on_close(cleanup_verbose)

    vlog_config("model", getattr(ctx.obj, "model", None))
    vlog_config("ollama_host", getattr(ctx.obj, "ollama_host", None))

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


# ! each command module registers its commands on import
from .commands import generate as _generate  # noqa: E402, F401
from .commands import enhance as _enhance  # noqa: E402, F401
from .commands import export as _export  # noqa: E402, F401
from .commands import edit as _edit  # noqa: E402, F401
from .commands import profile as _profile  # noqa: E402, F401
from .commands import config as _config  # noqa: E402, F401
