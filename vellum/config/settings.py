# vellum/config/settings.py
# Vellum settings (paths, Ollama host & model, PDF page format) persisted at ~/.vellum/config.json

import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import typer

from ..core.exceptions import JSONParsingError
from ..vellum_io.generics import read_json_safe, write_json_safe

# * Environment variables that override stored settings (never written back)
ENV_OVERRIDES: dict[str, str] = {
    "OLLAMA_URL": "ollama_host",
    "OLLAMA_MODEL": "model",
}

PAGE_FORMATS = ("A4", "Letter", "Legal")

DEFAULT_INSTRUCTIONS = "Create a clear, concise resume tailored to the target job."


@dataclass
class VellumSettings:
    # document location, relative to the working directory
    output_dir: str = "output"
    document_filename: str = "resume.json"

    # profile location, under the home directory
    base_dir: str = ".vellum"
    profile_filename: str = "profile.json"

    # local model
    ollama_host: str = "http://127.0.0.1:11434"
    model: str = "llama2"
    temperature: float = 0.7
    default_instructions: str = DEFAULT_INSTRUCTIONS

    page_format: str = "A4"

    # debug lines under --verbose
    dev_mode: bool = False

    def __post_init__(self) -> None:
        for problem in self._problems():
            raise ValueError(problem)

    def _problems(self) -> Iterator[str]:
        temperature = self.temperature
        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
            yield f"temperature must be a number, got {type(temperature).__name__}"
        elif not 0.0 <= temperature <= 2.0:
            yield f"temperature must be 0.0-2.0, got {temperature}"

        if self.page_format not in PAGE_FORMATS:
            yield f"page_format must be one of {', '.join(PAGE_FORMATS)}, got '{self.page_format}'"

        # strict bool, "yes"/1 are rejected
        if not isinstance(self.dev_mode, bool):
            yield f"dev_mode must be true or false, got {self.dev_mode!r}"

        if not isinstance(self.model, str) or not self.model.strip():
            yield "model must be a non-empty string"

    @property
    def document_path(self) -> Path:
        return Path(self.output_dir) / self.document_filename

    @property
    def profile_path(self) -> Path:
        return Path.home() / self.base_dir / self.profile_filename


def setting_names() -> set[str]:
    return {f.name for f in fields(VellumSettings)}


class SettingsManager:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or Path.home() / ".vellum" / "config.json"
        self._settings: Optional[VellumSettings] = None

    # * Stored settings w/ environment overrides applied, cached until invalidated
    def load(self) -> VellumSettings:
        if self._settings is None:
            self._settings = apply_env_overrides(self._read(warn=True))
        return self._settings

    def save(self, settings: VellumSettings) -> None:
        write_json_safe(asdict(settings), self.config_path)
        self.invalidate()

        # a cached server status may belong to the previous host
        from ..ai.cache import AICache

        AICache.invalidate_all()

    def get(self, key: str) -> Any:
        return getattr(self.load(), key, None)

    # * Change one stored value; VellumSettings validation runs before anything is written
    def set(self, key: str, value: Any) -> None:
        if key not in setting_names():
            raise ValueError(f"Unknown setting: {key}")
        self.save(replace(self._read(), **{key: value}))

    def reset(self) -> None:
        self.save(VellumSettings())

    def list_settings(self) -> Dict[str, Any]:
        return asdict(self.load())

    def invalidate(self) -> None:
        self._settings = None

    # file contents only; a broken file reads as defaults
    def _read(self, warn: bool = False) -> VellumSettings:
        if not self.config_path.exists():
            return VellumSettings()
        try:
            return VellumSettings(**read_json_safe(self.config_path))
        except (JSONParsingError, TypeError, ValueError) as e:
            if warn:
                typer.echo(f"Warning: Invalid config file {self.config_path}: {e}")
                typer.echo("Using default settings")
            return VellumSettings()


def apply_env_overrides(settings: VellumSettings) -> VellumSettings:
    overrides = {
        field: os.environ[var]
        for var, field in ENV_OVERRIDES.items()
        if os.environ.get(var)
    }
    return replace(settings, **overrides) if overrides else settings


settings_manager = SettingsManager()


# * Settings injected on the Typer context (root callback or tests), else the global manager
def get_settings(ctx: Any, provided: Optional[VellumSettings] = None) -> VellumSettings:
    if provided is not None:
        return provided
    node = ctx
    while node is not None:
        obj = getattr(node, "obj", None)
        if isinstance(obj, VellumSettings):
            return obj
        node = getattr(node, "parent", None)
    return settings_manager.load()
