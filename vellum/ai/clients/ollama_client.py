# vellum/ai/clients/ollama_client.py
# Ollama client: server status per host, installed-model matching & chat completion

from __future__ import annotations

from typing import Any

import ollama

from .base import BaseClient
from ..cache import AICache
from ..models import find_installed
from ..types import GenerateResult, OllamaStatus
from ..utils import APICallContext
from ...config.settings import settings_manager
from ...core.debug import debug_print
from ...core.exceptions import AIError, ConfigurationError, ProviderError


class OllamaClient(BaseClient):

    provider_name = "ollama"

    def __init__(self, host: str | None = None):
        self.host = host

    @property
    def resolved_host(self) -> str:
        host = (self.host or settings_manager.load().ollama_host).strip()
        if not host:
            raise ConfigurationError(
                "No Ollama host configured. Set OLLAMA_URL or run 'vellum config set ollama_host <url>'."
            )
        return host

    def preflight(self) -> None:
        status = self.status()
        if not status.available:
            raise AIError(f"Ollama server error: {status.error}")

    # * Map the requested name to an installed tag ("llama2" accepts "llama2:latest")
    def validate_model(self, model: str) -> str:
        installed = self.status().models
        match = find_installed(model, installed)
        if match is not None:
            return match

        hint = f"Run 'ollama pull {model}' to install it."
        if installed:
            detail = f"Model '{model}' not found locally. Available models: {', '.join(installed)}. {hint}"
        else:
            detail = f"Model '{model}' not found & no local models available. {hint}"
        raise AIError(f"Ollama model error: {detail}")

    def make_call(self, prompt: str, model: str, temperature: float) -> APICallContext:
        debug_print(f"chat model={model} temperature={temperature}", "AI")
        try:
            response = self._client().chat(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                options={"temperature": temperature},
            )
        except ollama.ResponseError as e:
            raise ProviderError(f"Ollama API error: {e}", provider="ollama") from e
        except (ConnectionError, OSError) as e:
            raise ProviderError(
                f"Ollama connection failed: {e}. Check if Ollama is running.",
                provider="ollama",
            ) from e

        return APICallContext(
            raw_text=_message_content(response), provider_name=self.provider_name, model=model
        )

    # * Server reachability & installed tags, listed once per host until settings change
    def status(self) -> OllamaStatus:
        host = self.resolved_host
        cached = AICache.ollama_status(host)
        if cached is not None:
            return cached

        try:
            response = self._client().list()
        except Exception as e:
            debug_print(f"{host} unreachable - {type(e).__name__}: {e}", "AI")
            return AICache.store_ollama_status(
                host,
                OllamaStatus(
                    available=False,
                    error=f"Ollama server connection failed: {e}. Please ensure Ollama is running locally.",
                ),
            )

        models = [name for entry in response["models"] if (name := _model_name(entry))]
        debug_print(f"{host} has {len(models)} model(s): {', '.join(models) or '-'}", "AI")
        return AICache.store_ollama_status(host, OllamaStatus(available=True, models=models))

    def _client(self) -> ollama.Client:
        return ollama.Client(host=self.resolved_host)


# chat responses are subscriptable models (or plain dicts)
def _message_content(response: Any) -> str:
    message = response["message"]
    content = message["content"] if message is not None else ""
    return content or ""


# list entries carry "model" (older servers used "name")
def _model_name(entry: Any) -> str:
    return entry.get("model") or entry.get("name") or ""


def run_generate(prompt: str, model: str) -> GenerateResult:
    return OllamaClient().run_generate(prompt, model)


def check_ollama_status(host: str | None = None) -> OllamaStatus:
    return OllamaClient(host).status()
