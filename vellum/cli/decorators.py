# vellum/cli/decorators.py
# CLI decorator for error handling w/ Rich output

import functools
from typing import Any, Callable, TypeVar, cast

import typer
from rich.markup import escape

from ..core.exceptions import (
    AIError,
    ConfigurationError,
    DocumentError,
    ExportError,
    FileOperationError,
    InteractionError,
    JSONParsingError,
    VellumError,
    format_error_message,
)

F = TypeVar("F", bound=Callable[..., Any])

# most specific first
_ERROR_LABELS: list[tuple[type[Exception], str]] = [
    (JSONParsingError, "JSON Parsing Error"),
    (AIError, "AI Error"),
    (ConfigurationError, "Configuration Error"),
    (DocumentError, "Document Error"),
    (InteractionError, "Interaction Error"),
    (ExportError, "Export Error"),
    (FileOperationError, "File Error"),
    (VellumError, "Error"),
]


# * Decorator for handling Vellum errors in CLI commands w/ Rich output
def handle_vellum_error(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        # ! Lazy import to avoid circular dependencies
        from ..vellum_io.console import console

        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, typer.BadParameter):
            raise
        except VellumError as e:
            label = next(lbl for cls, lbl in _ERROR_LABELS if isinstance(e, cls))
            console.print(format_error_message(label, escape(str(e))))
            raise SystemExit(1)
        except Exception as e:
            console.print(format_error_message("Unexpected Error", escape(str(e))))
            raise SystemExit(1)

    return cast(F, wrapper)
