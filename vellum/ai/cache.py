# vellum/ai/cache.py
# Ollama server status cached per host, so preflight & model validation list models once

from __future__ import annotations

from .types import OllamaStatus


class AICache:
    _ollama: dict[str, OllamaStatus] = {}

    # * Drop every cached status (settings saves call this)
    @classmethod
    def invalidate_all(cls) -> None:
        cls._ollama.clear()

    @classmethod
    def ollama_status(cls, host: str) -> OllamaStatus | None:
        return cls._ollama.get(host)

    @classmethod
    def store_ollama_status(cls, host: str, status: OllamaStatus) -> OllamaStatus:
        cls._ollama[host] = status
        return status
