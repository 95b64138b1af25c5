# vellum/cli/output_manager.py
# Rich console & plain-text log file sink for verbose/debug lines, registered by init_verbose

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from rich.markup import escape

from ..core.output import OutputLevel

SESSION_RULE = "=" * 60


class OutputManager:

    def __init__(self) -> None:
        self.level = OutputLevel.NORMAL
        self.dev_mode = False
        self._started = time.monotonic()
        self._log: TextIO | None = None
        self.log_path: Path | None = None

    # * Resolve the effective level: --quiet wins, DEBUG needs dev_mode
    def initialize(
        self,
        requested_level: OutputLevel = OutputLevel.NORMAL,
        dev_mode: bool = False,
        quiet: bool = False,
        log_file: Path | None = None,
    ) -> None:
        self.dev_mode = dev_mode
        ceiling = OutputLevel.DEBUG if dev_mode else OutputLevel.VERBOSE
        self.level = OutputLevel.QUIET if quiet else min(requested_level, ceiling)
        self._started = time.monotonic()
        self._open_log(log_file)

    def enabled(self, level: OutputLevel) -> bool:
        return self.level >= level

    def debug(self, msg: str, category: str = "DEBUG") -> None:
        if self.enabled(OutputLevel.DEBUG):
            self._emit(f"[magenta]\\[{category}][/] {msg}", f"[{self._clock()}] [{category}] {msg}")

    # detail lines are printed literally (model output & file paths may contain brackets)
    def verbose(self, msg: str, category: str = "INFO", detail: Optional[str] = None) -> None:
        if not self.enabled(OutputLevel.VERBOSE):
            return
        clock = self._clock()
        self._emit(
            f"[dim][{clock}][/] [bold cyan]\\[{category}][/] {msg}",
            f"[{clock}] [{category}] {msg}",
        )
        for line in (detail or "").splitlines():
            self._emit(f"  [dim]{escape(line)}[/]", f"  {line}")

    def start_session(self) -> None:
        self._started = time.monotonic()
        mode = "Mode: Developer (dev_mode enabled)" if self.dev_mode else ""
        self._banner("Session Started", f"Level: {self.level.name}", mode)

    def end_session(self) -> None:
        self._banner("Session Ended")
        self.close()

    def close(self) -> None:
        if self._log is not None:
            self._log.close()
            self._log = None

    def _clock(self) -> str:
        return f"{time.monotonic() - self._started:.2f}s"

    def _emit(self, rich_line: str, plain_line: str) -> None:
        from ..vellum_io.console import console

        console.print(rich_line)
        self._write(plain_line)

    def _banner(self, title: str, *lines: str) -> None:
        body = [f"{title}: {datetime.now().isoformat()}", *(line for line in lines if line)]
        self._write("\n".join(["", SESSION_RULE, *body, SESSION_RULE, ""]))

    # ! an unwritable log path downgrades to console-only output w/ a warning
    def _open_log(self, log_file: Path | None) -> None:
        self.close()
        self.log_path = None
        if log_file is None:
            return
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._log = open(log_file, "a", encoding="utf-8")
            self.log_path = log_file
        except OSError as e:
            from ..vellum_io.console import console

            console.print(f"[yellow]Cannot open log file {escape(str(log_file))}: {escape(str(e))}[/]")

    def _write(self, text: str) -> None:
        if self._log is not None:
            self._log.write(f"{text}\n")
            self._log.flush()
