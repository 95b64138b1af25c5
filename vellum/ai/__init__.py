# vellum/ai/__init__.py
# Local model client, prompts & resume generation service

from .types import GenerateResult, OllamaStatus


# * Lazy proxies to avoid importing the ollama SDK at package import time
def generate(profile, instructions=None, model=None) -> GenerateResult:  # type: ignore[no-untyped-def]
    from .resume_service import generate as _generate

    return _generate(profile, instructions, model)


def enhance(text, context="resume description", model=None) -> GenerateResult:  # type: ignore[no-untyped-def]
    from .resume_service import enhance as _enhance

    return _enhance(text, context, model)


__all__ = ["GenerateResult", "OllamaStatus", "generate", "enhance"]
