# tests/unit/ai/test_ollama_generation.py
# Unit tests for the Ollama client & resume service against a fake SDK client

import ollama

from vellum.ai import resume_service
from vellum.ai.cache import AICache
from vellum.ai.clients.ollama_client import OllamaClient, check_ollama_status, run_generate

DEFAULT_HOST = "http://127.0.0.1:11434"


class TestStatus:

    def test_available_models_cached(self, fake_ollama):
        status = check_ollama_status()
        assert status.available
        assert status.models == ["llama2:latest"]
        assert AICache.ollama_status(DEFAULT_HOST) is status

        fake_ollama.list_error = ConnectionError("gone")
        assert check_ollama_status().available

    def test_name_key_fallback(self, fake_ollama):
        fake_ollama.models = [{"name": "old:tag"}]
        assert check_ollama_status().models == ["old:tag"]

    # * Verify an unreachable server is reported, cached & never raised
    def test_unreachable_server(self, fake_ollama):
        fake_ollama.list_error = ConnectionError("Connection refused")
        status = check_ollama_status()
        assert status.available is False
        assert status.models == []
        assert "Please ensure Ollama is running" in status.error
        assert AICache.ollama_status(DEFAULT_HOST).available is False

    def test_hosts_cached_separately(self, fake_ollama):
        assert check_ollama_status().available
        fake_ollama.list_error = ConnectionError("no route")
        assert check_ollama_status("http://gpu-box:11434").available is False
        assert check_ollama_status().available

    def test_settings_save_invalidates_cache(self, fake_ollama):
        from vellum.config.settings import settings_manager

        check_ollama_status()
        settings_manager.set("temperature", 0.3)
        assert AICache.ollama_status(DEFAULT_HOST) is None

    def test_blank_host_is_configuration_failure(self, fake_ollama):
        result = OllamaClient(host="   ").run_generate("p", "llama2")
        assert result.success is False
        assert "No Ollama host configured" in result.error
        assert fake_ollama.calls == []


class TestRunGenerate:

    def test_success_uses_installed_tag_and_settings(self, fake_ollama):
        fake_ollama.reply = "<think>draft</think>```markdown\n# Jane Doe\n```"
        result = run_generate("prompt", "llama2")
        assert result.success
        assert result.text == "# Jane Doe"
        assert result.model == "llama2:latest"
        call = fake_ollama.calls[0]
        assert call["model"] == "llama2:latest"
        assert call["options"] == {"temperature": 0.7}
        assert call["host"] == "http://127.0.0.1:11434"
        assert call["messages"] == [{"role": "user", "content": "prompt"}]

    def test_explicit_host(self, fake_ollama):
        OllamaClient(host="http://gpu-box:11434").run_generate("p", "llama2")
        assert fake_ollama.calls[0]["host"] == "http://gpu-box:11434"

    def test_env_host_override(self, fake_ollama, monkeypatch):
        from vellum.config.settings import settings_manager

        monkeypatch.setenv("OLLAMA_URL", "http://10.0.0.5:11434")
        settings_manager.invalidate()
        run_generate("p", "llama2")
        assert fake_ollama.calls[0]["host"] == "http://10.0.0.5:11434"

    # * Verify a missing model lists what is installed
    def test_model_not_found(self, fake_ollama):
        fake_ollama.models = [{"model": "mistral:7b"}]
        result = run_generate("p", "llama2")
        assert result.success is False
        assert "Model 'llama2' not found" in result.error
        assert "mistral:7b" in result.error
        assert fake_ollama.calls == []

    def test_no_models_installed(self, fake_ollama):
        fake_ollama.models = []
        result = run_generate("p", "llama2")
        assert "no local models available" in result.error

    def test_server_down(self, fake_ollama):
        fake_ollama.list_error = ConnectionError("refused")
        result = run_generate("p", "llama2")
        assert result.success is False
        assert result.error.startswith("Ollama server error:")

    def test_response_error(self, fake_ollama):
        fake_ollama.chat_error = ollama.ResponseError("model crashed")
        result = run_generate("p", "llama2")
        assert result.success is False
        assert "Ollama API error" in result.error

    def test_connection_dropped_mid_call(self, fake_ollama):
        fake_ollama.chat_error = ConnectionError("reset by peer")
        result = run_generate("p", "llama2")
        assert "Ollama connection failed" in result.error

    def test_unexpected_error_is_wrapped(self, fake_ollama):
        fake_ollama.chat_error = RuntimeError("boom")
        result = run_generate("p", "llama2")
        assert result.error == "Unexpected error in ollama: boom"

    def test_empty_reply(self, fake_ollama):
        fake_ollama.reply = "<think>nothing to say</think>"
        result = run_generate("p", "llama2")
        assert result.success is False
        assert "Empty response" in result.error


class TestResumeService:

    def test_generate_builds_prompt_from_profile(self, fake_ollama, sample_profile_data):
        result = resume_service.generate(sample_profile_data, "Emphasize leadership")
        assert result.success
        prompt = fake_ollama.calls[0]["messages"][0]["content"]
        assert "Emphasize leadership" in prompt
        assert '"name": "Jane Doe"' in prompt

    def test_generate_blank_instructions_use_default(self, fake_ollama):
        from vellum.config.settings import DEFAULT_INSTRUCTIONS

        resume_service.generate("Jane Doe, engineer", "   ")
        assert DEFAULT_INSTRUCTIONS in fake_ollama.calls[0]["messages"][0]["content"]

    def test_generate_model_override(self, fake_ollama):
        fake_ollama.models = [{"model": "phi3:latest"}, {"model": "llama2:latest"}]
        resume_service.generate({}, "x", model="phi3")
        assert fake_ollama.calls[0]["model"] == "phi3:latest"

    # * Verify enhance strips quotes & fences from the model's answer
    def test_enhance_cleans_output(self, fake_ollama):
        fake_ollama.reply = '"Led a 5-person team to ship v2."'
        result = resume_service.enhance("i led team", "job duty")
        assert result.success
        assert result.text == "Led a 5-person team to ship v2."
        prompt = fake_ollama.calls[0]["messages"][0]["content"]
        assert "Context: job duty" in prompt

    def test_enhance_requires_text(self, fake_ollama):
        result = resume_service.enhance("   ")
        assert result.success is False
        assert result.error == "Text is required"
        assert fake_ollama.calls == []

    def test_enhance_empty_after_cleanup(self, fake_ollama):
        fake_ollama.reply = '""'
        result = resume_service.enhance("text")
        assert result.success is False
        assert result.error == "Model returned no enhanced text"

    def test_enhance_propagates_failure(self, fake_ollama):
        fake_ollama.list_error = ConnectionError("down")
        result = resume_service.enhance("text")
        assert result.success is False
        assert "Ollama server error" in result.error
