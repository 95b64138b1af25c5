# tests/unit/ai/test_ai_text_utils.py
# Unit tests for response cleanup helpers, prompt building & model resolution

import pytest

from vellum.ai.models import find_installed, resolve_model
from vellum.ai.prompts import (
    ANTI_INJECTION_GUARD,
    CONTENT_ONLY_RULE,
    build_enhance_prompt,
    build_generate_prompt,
)
from vellum.ai.utils import (
    clean_enhanced_text,
    format_profile,
    strip_markdown_code_blocks,
    strip_thinking_tokens,
)
from vellum.vellum_io.profile_store import Profile


class TestCleanup:

    def test_strip_thinking_tokens(self):
        assert strip_thinking_tokens("<think>plan\nmore</think>\n# Jane") == "# Jane"

    def test_strip_wrapping_code_fence(self):
        assert strip_markdown_code_blocks("```markdown\n# Jane\n\n- X\n```") == "# Jane\n\n- X"

    def test_inner_fences_kept(self):
        text = "# Jane\n\n```\ncode\n```\n\ntrailing"
        assert strip_markdown_code_blocks(text) == text

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('"Led a team of 5 engineers."', "Led a team of 5 engineers."),
            ("```\nShipped v2 ahead of schedule.\n```", "Shipped v2 ahead of schedule."),
            ("<think>hmm</think>  'Cut costs by 20%.'  ", "Cut costs by 20%."),
            ("   ", ""),
        ],
    )
    def test_clean_enhanced_text(self, raw, expected):
        assert clean_enhanced_text(raw) == expected


class TestFormatProfile:

    def test_text_passes_through(self):
        assert format_profile("Jane, engineer") == "Jane, engineer"

    def test_mapping_as_json(self):
        assert format_profile({"name": "Zoë"}) == '{\n  "name": "Zoë"\n}'

    def test_profile_uses_to_dict(self):
        out = format_profile(Profile({"name": "Jane"}))
        assert '"name": "Jane"' in out
        assert '"education": ""' in out


class TestPrompts:

    def test_generate_prompt_contents(self):
        prompt = build_generate_prompt('{"name": "Jane"}', "  Target a staff role.  ")
        assert "Target a staff role." in prompt
        assert '{"name": "Jane"}' in prompt
        assert ANTI_INJECTION_GUARD in prompt
        assert prompt.rstrip().endswith(CONTENT_ONLY_RULE)

    def test_enhance_prompt_contents(self):
        prompt = build_enhance_prompt(" did stuff ", "job duty")
        assert "Original text: did stuff" in prompt
        assert "Context: job duty" in prompt


class TestModels:

    def test_find_installed(self):
        installed = ["llama2:latest", "mistral:7b"]
        assert find_installed("llama2", installed) == "llama2:latest"
        assert find_installed("mistral:7b", installed) == "mistral:7b"
        assert find_installed("mistral", installed) is None

    def test_resolve_model_prefers_argument(self):
        assert resolve_model("phi3") == "phi3"

    def test_resolve_model_from_settings_and_env(self, monkeypatch):
        from vellum.config.settings import settings_manager

        assert resolve_model() == "llama2"
        monkeypatch.setenv("OLLAMA_MODEL", "qwen2")
        settings_manager.invalidate()
        assert resolve_model() == "qwen2"
