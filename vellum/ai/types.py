# vellum/ai/types.py
# Generation results & Ollama server status passed between clients, services & the editor

from __future__ import annotations

from dataclasses import dataclass, field


# * Outcome of generate/enhance; failures are returned, never raised
@dataclass(slots=True)
class GenerateResult:
    success: bool
    text: str = ""  # markdown (generate) or one statement (enhance)
    raw_text: str = ""  # untouched model reply
    error: str = ""
    model: str = ""  # installed tag that answered

    @classmethod
    def failure(cls, error: str, raw_text: str = "") -> "GenerateResult":
        return cls(success=False, error=error, raw_text=raw_text)


@dataclass(slots=True)
class OllamaStatus:
    available: bool
    models: list[str] = field(default_factory=list)  # installed tags, e.g. "llama2:latest"
    error: str = ""
