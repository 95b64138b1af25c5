# vellum/core/output.py
# Output levels & the process-wide output manager slot used by editor, IO & AI code
# * No I/O here; OutputManager in vellum/cli/output_manager.py does the printing

from __future__ import annotations

from enum import IntEnum
from typing import Optional, Protocol, runtime_checkable


class OutputLevel(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


@runtime_checkable
class OutputInterface(Protocol):
    def enabled(self, level: OutputLevel) -> bool: ...

    def debug(self, msg: str, category: str = "DEBUG") -> None: ...

    def verbose(self, msg: str, category: str = "INFO", detail: Optional[str] = None) -> None: ...

    def start_session(self) -> None: ...

    def end_session(self) -> None: ...


# * Stand-in until the CLI registers a real manager; library use stays silent
class NullOutputManager:
    def enabled(self, level: OutputLevel) -> bool:
        return level <= OutputLevel.NORMAL

    def debug(self, msg: str, category: str = "DEBUG") -> None:
        return None

    def verbose(self, msg: str, category: str = "INFO", detail: Optional[str] = None) -> None:
        return None

    def start_session(self) -> None:
        return None

    def end_session(self) -> None:
        return None


_output_manager: OutputInterface = NullOutputManager()


def set_output_manager(manager: OutputInterface) -> None:
    global _output_manager
    _output_manager = manager


def get_output_manager() -> OutputInterface:
    return _output_manager


def reset_output_manager() -> None:
    set_output_manager(NullOutputManager())
