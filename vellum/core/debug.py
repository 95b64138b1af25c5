# vellum/core/debug.py
# Developer-only trace lines (--verbose w/ dev_mode) for ignored input & recovered failures

from .output import get_output_manager


def debug_print(message: str, category: str = "DEBUG") -> None:
    get_output_manager().debug(message, category)


# * Trace a caught exception w/ the action that raised it
def debug_error(error: Exception, action: str = "") -> None:
    detail = f"{type(error).__name__}: {error}"
    get_output_manager().debug(f"{action} failed - {detail}" if action else detail, "ERROR")
