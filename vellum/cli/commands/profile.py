# vellum/cli/commands/profile.py
# Profile subcommands (show/set/unset/clear/import) backed by ~/.vellum/profile.json

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from ...config.settings import get_settings
from ...vellum_io.console import console
from ...vellum_io.profile_store import Profile, ProfileStore
from ..app import app
from ..decorators import handle_vellum_error

profile_app = typer.Typer(rich_markup_mode="rich", help="Manage your resume profile")
app.add_typer(profile_app, name="profile")


def _store(ctx: typer.Context) -> ProfileStore:
    return ProfileStore(get_settings(ctx).profile_path)


def _print_profile(profile: Profile, path: Path) -> None:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(style="bold cyan")
    table.add_column()
    for key, value in profile.to_dict().items():
        table.add_row(key, escape(value) if value else "[dim]-[/]")
    console.print(table)
    console.print(f"[dim]Profile file: {escape(str(path))}[/]")


@profile_app.callback(invoke_without_command=True)
def profile_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        store = _store(ctx)
        _print_profile(store.load(), store.path)


@profile_app.command(help="Show the stored profile")
@handle_vellum_error
def show(ctx: typer.Context) -> None:
    store = _store(ctx)
    _print_profile(store.load(), store.path)


# * Set a profile field; '-' reads the value from stdin (for multi-line fields)
@profile_app.command(name="set", help="Set a profile field")
@handle_vellum_error
def set_cmd(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Field name, e.g. name, title, experience"),
    value: str = typer.Argument(..., help="Field value ('-' reads stdin)"),
) -> None:
    if value == "-":
        value = typer.get_text_stream("stdin").read().rstrip("\n")
    _store(ctx).set(key.strip(), value)
    console.print(f"[green]Set[/] {escape(key)}")


@profile_app.command(help="Blank a standard field or remove an extra one")
@handle_vellum_error
def unset(ctx: typer.Context, key: str = typer.Argument(...)) -> None:
    try:
        _store(ctx).unset(key)
    except KeyError:
        raise typer.BadParameter(f"Unknown profile field: {key}")
    console.print(f"[green]Unset[/] {escape(key)}")


@profile_app.command(help="Reset the profile to empty standard fields")
@handle_vellum_error
def clear(ctx: typer.Context) -> None:
    _store(ctx).clear()
    console.print("[green]Profile cleared[/]")


@profile_app.command(name="import", help="Replace the profile with a JSON file")
@handle_vellum_error
def import_cmd(
    ctx: typer.Context,
    source: Path = typer.Argument(..., exists=True, dir_okay=False, resolve_path=True),
) -> None:
    store = _store(ctx)
    profile = store.import_file(source)
    _print_profile(profile, store.path)
