# vellum/vellum_io/console.py
# Shared Rich console; modules import the proxy once & tests swap what it points at

from __future__ import annotations

from typing import Any

from rich.console import Console


class _ConsoleProxy:
    __slots__ = ("target",)

    def __init__(self) -> None:
        self.target = Console()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.target, name)


console = _ConsoleProxy()


def get_console() -> Console:
    return console.target


# * Point the shared console at a new Console (wide output for CliRunner, record=True to export text)
def configure_console(
    width: int | None = None,
    force_terminal: bool | None = None,
    record: bool = False,
) -> Console:
    console.target = Console(width=width, force_terminal=force_terminal, record=record)
    return console.target


def reset_console() -> Console:
    console.target = Console()
    return console.target


__all__ = ["console", "get_console", "configure_console", "reset_console"]
