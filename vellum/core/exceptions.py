# vellum/core/exceptions.py
# Exception hierarchy for documents, gestures, the local model, config & file I/O (no I/O here)

from pathlib import Path
from typing import Any


# * Rich-markup "Label: message" line printed by the CLI error decorator
def format_error_message(error_type: str, message: str) -> str:
    return f"[red]{error_type}:[/] {message}"


class VellumError(Exception):
    # extra attributes shown in repr(), e.g. ("path",)
    context_fields: tuple[str, ...] = ()

    def __repr__(self) -> str:
        extras: list[Any] = [repr(self.args[0])] if self.args else []
        extras += [f"{name}={getattr(self, name)!r}" for name in self.context_fields]
        return f"{self.__class__.__name__}({', '.join(extras)})"


class DocumentError(VellumError):
    pass


class NodeNotFoundError(DocumentError):
    context_fields = ("node_id",)

    def __init__(self, node_id: str, message: str | None = None):
        super().__init__(message or f"Node not found: {node_id}")
        self.node_id = node_id


# * Child kind not allowed under its parent (or a malformed node in a saved document)
class SchemaError(DocumentError):
    pass


# * Pointer or edit event the overlay cannot accept in its current mode
class InteractionError(VellumError):
    pass


class AIError(VellumError):
    pass


# * Server-side or transport failure reported by a model provider
class ProviderError(AIError):
    context_fields = ("provider",)

    def __init__(self, message: str, provider: str):
        super().__init__(message)
        self.provider = provider


class ConfigurationError(VellumError):
    pass


class JSONParsingError(VellumError):
    pass


class ExportError(VellumError):
    context_fields = ("format",)

    def __init__(self, message: str, format: str):
        super().__init__(message)
        self.format = format


class FileOperationError(VellumError):
    context_fields = ("path",)

    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path)


class FileReadError(FileOperationError):
    pass


class FileWriteError(FileOperationError):
    pass
