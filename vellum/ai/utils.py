# vellum/ai/utils.py
# Shared utility functions for AI response processing & prompt inputs

import json
import re
from dataclasses import dataclass
from typing import Any

THINKING_RE = re.compile(r"<think>.*?</think>\s*", re.DOTALL)
CODE_BLOCK_RE = re.compile(r"^```[\w-]*\s*\n(.*?)\n```\s*$", re.DOTALL)
FENCE_LINE_RE = re.compile(r"^```.*\n?", re.MULTILINE)
WRAPPING_QUOTES_RE = re.compile(r"^\s*[\"']|[\"']\s*$")


# * Context object for API call results (used by BaseClient._process_response)
@dataclass(slots=True)
class APICallContext:
    raw_text: str  # raw response text from provider
    provider_name: str  # provider ID: "ollama"
    model: str  # model used for the call


# strip <think>...</think> reasoning blocks emitted by some local models
def strip_thinking_tokens(text: str) -> str:
    return THINKING_RE.sub("", text).strip()


# strip thinking tokens & a code fence wrapping the whole response
def strip_markdown_code_blocks(text: str) -> str:
    text = strip_thinking_tokens(text)
    match = CODE_BLOCK_RE.match(text)
    if match:
        return match.group(1).strip()
    return text


# * Clean an enhanced statement: trim, drop fence lines & surrounding quotes
def clean_enhanced_text(text: str) -> str:
    cleaned = strip_thinking_tokens(text)
    cleaned = FENCE_LINE_RE.sub("", cleaned)
    cleaned = cleaned.replace("```", "")
    cleaned = WRAPPING_QUOTES_RE.sub("", cleaned.strip())
    return cleaned.strip()


# * Render a profile for the prompt: mappings as indented JSON, text as-is
def format_profile(profile: Any) -> str:
    if isinstance(profile, str):
        return profile
    to_dict = getattr(profile, "to_dict", None)
    if callable(to_dict):
        profile = to_dict()
    return json.dumps(profile, indent=2, ensure_ascii=False)
