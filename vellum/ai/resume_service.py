# vellum/ai/resume_service.py
# Resume generation & statement enhancement against the local model; both always return a result

from __future__ import annotations

from typing import Any

from .clients.ollama_client import run_generate
from .models import resolve_model
from .prompts import build_enhance_prompt, build_generate_prompt
from .types import GenerateResult
from .utils import clean_enhanced_text, format_profile
from ..core.verbose import vlog

DEFAULT_ENHANCE_CONTEXT = "resume description"


# * Generate a markdown resume from a profile (dict, Profile or text) & free-text instructions
def generate(
    profile: Any, instructions: str | None = None, model: str | None = None
) -> GenerateResult:
    if not instructions or not instructions.strip():
        from ..config.settings import settings_manager

        instructions = settings_manager.load().default_instructions

    prompt = build_generate_prompt(format_profile(profile), instructions)
    resolved = resolve_model(model)
    vlog("GENERATE", f"Generating resume with {resolved}", f"prompt: {len(prompt)} chars")
    return run_generate(prompt, resolved)


# * Rewrite one statement as a concise resume line
def enhance(
    text: str,
    context: str | None = DEFAULT_ENHANCE_CONTEXT,
    model: str | None = None,
) -> GenerateResult:
    if not text or not text.strip():
        return GenerateResult.failure("Text is required")

    prompt = build_enhance_prompt(text, context or DEFAULT_ENHANCE_CONTEXT)
    result = run_generate(prompt, resolve_model(model))
    if not result.success:
        return result

    cleaned = clean_enhanced_text(result.text)
    if not cleaned:
        return GenerateResult.failure("Model returned no enhanced text", raw_text=result.raw_text)
    return GenerateResult(success=True, text=cleaned, raw_text=result.raw_text, model=result.model)
