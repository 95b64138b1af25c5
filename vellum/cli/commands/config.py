# vellum/cli/commands/config.py
# `vellum config` list/get/set/reset/path over ~/.vellum/config.json; env overrides are flagged

from __future__ import annotations

import json
import os
from typing import Any

import typer
from rich.markup import escape

from ...config.settings import ENV_OVERRIDES, VellumSettings, setting_names, settings_manager
from ...vellum_io.console import console
from ..app import app

config_app = typer.Typer(rich_markup_mode="rich", help="Manage Vellum settings")
app.add_typer(config_app, name="config")


def KeyArg() -> Any:
    return typer.Argument(..., help="Setting name, e.g. model, temperature, page_format")


def _require_known(key: str) -> None:
    if key not in setting_names():
        names = ", ".join(sorted(setting_names()))
        raise typer.BadParameter(f"Unknown setting: {key}. Known settings: {names}")


# string settings keep the text as typed ("7" stays a model name); others parse as JSON
def _parse_value(key: str, raw: str) -> Any:
    if isinstance(getattr(VellumSettings(), key), str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _from_environment() -> set[str]:
    return {field for var, field in ENV_OVERRIDES.items() if os.environ.get(var)}


def _show_settings() -> None:
    overridden = _from_environment()
    console.print("\n[bold cyan]Current Configuration[/]")
    console.print(f"[dim]Config file: {escape(str(settings_manager.config_path))}[/]\n")
    for key, value in settings_manager.list_settings().items():
        note = " [yellow](from environment)[/]" if key in overridden else ""
        console.print(f"  [cyan]{key}[/] = {escape(json.dumps(value))}{note}")
    console.print("\n[dim]Change a value w/ [/][cyan]vellum config set KEY VALUE[/]")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _show_settings()


@config_app.command(name="list", help="Show every setting")
def list_cmd() -> None:
    _show_settings()


# * Print one effective value as JSON
@config_app.command(help="Print one setting as JSON")
def get(key: str = KeyArg()) -> None:
    _require_known(key)
    console.print(escape(json.dumps(settings_manager.get(key))), highlight=False)


# * Store one value; validation failures are usage errors & leave the file untouched
@config_app.command(name="set", help="Store a setting")
def set_cmd(key: str = KeyArg(), value: str = typer.Argument(..., help="New value")) -> None:
    _require_known(key)
    parsed = _parse_value(key, value)
    try:
        settings_manager.set(key, parsed)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    console.print(f"[green]Set {key}[/] {escape(json.dumps(parsed))}")


@config_app.command(help="Restore default settings")
def reset() -> None:
    settings_manager.reset()
    console.print("[green]Reset settings to defaults[/]")


@config_app.command(help="Print the config file location")
def path() -> None:
    console.print(escape(str(settings_manager.config_path)), highlight=False)
