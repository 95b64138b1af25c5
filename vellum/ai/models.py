# vellum/ai/models.py
# Local model defaults & name resolution for the Ollama provider

from __future__ import annotations

# * Default local model when neither settings nor environment name one
DEFAULT_OLLAMA_MODEL = "llama2"

# * Default Ollama server address
DEFAULT_OLLAMA_HOST = "http://127.0.0.1:11434"


# * Resolve model name: explicit argument > settings
def resolve_model(model: str | None = None) -> str:
    if model:
        return model
    from ..config.settings import settings_manager

    return settings_manager.load().model or DEFAULT_OLLAMA_MODEL


# * Match a requested model against installed tags ("llama2" matches "llama2:latest")
def find_installed(model: str, installed: list[str]) -> str | None:
    if model in installed:
        return model
    if ":" not in model and f"{model}:latest" in installed:
        return f"{model}:latest"
    return None
