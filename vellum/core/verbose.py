# vellum/core/verbose.py
# Categorized --verbose lines for model calls, normalization, gestures, config & file I/O

from __future__ import annotations

from pathlib import Path
from typing import Any

from .output import OutputLevel, get_output_manager, set_output_manager

PREVIEW_LENGTH = 60


# * Register an OutputManager for this CLI run (--verbose, --log-file, dev_mode)
def init_verbose(
    enabled: bool = False,
    log_file: Path | None = None,
    dev_mode: bool = False,
) -> None:
    from ..cli.output_manager import OutputManager

    level = OutputLevel.NORMAL
    if enabled:
        level = OutputLevel.DEBUG if dev_mode else OutputLevel.VERBOSE

    manager = OutputManager()
    manager.initialize(requested_level=level, dev_mode=dev_mode, log_file=log_file)
    set_output_manager(manager)
    manager.start_session()


def cleanup_verbose() -> None:
    get_output_manager().end_session()


def vlog(category: str, message: str, detail: str | None = None) -> None:
    get_output_manager().verbose(message, category, detail)


def _preview(raw: str) -> str:
    return raw if len(raw) <= PREVIEW_LENGTH else raw[: PREVIEW_LENGTH - 3] + "..."


# * Model call about to be sent
def vlog_ai_call(provider: str, model: str, prompt_chars: int, temperature: float) -> None:
    vlog("AI", f"Request to {provider}", f"model: {model}, prompt: {prompt_chars:,} chars, temperature: {temperature}")


# * Model call finished; error set means the call failed
def vlog_ai_result(
    provider: str,
    model: str,
    *,
    chars: int = 0,
    error: str | None = None,
    duration_ms: float | None = None,
) -> None:
    took = f" in {duration_ms:.0f}ms" if duration_ms is not None else ""
    if error:
        vlog("AI", f"[red]{provider} call failed[/]{took}", f"model: {model}\n{error}")
    else:
        vlog("AI", f"Response from {provider}{took}", f"model: {model}, reply: {chars:,} chars")


def vlog_file(action: str, path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    vlog("FILE", f"{action}: {path}{size_str}")


# * Markdown block kept as plain text by the normalizer
def vlog_degradation(line: int, reason: str, raw: str) -> None:
    vlog("NORMALIZE", f"Line {line}: {reason}", _preview(raw))


# * Overlay controller transition (select, drag end, resize end, edit commit ...)
def vlog_gesture(event: str, node_id: str | None, detail: str | None = None) -> None:
    vlog("GESTURE", f"{event} ({node_id or '-'})", detail)


def vlog_config(key: str, value: Any) -> None:
    vlog("CONFIG", f"{key} = {value}")
