# vellum/ai/clients/base.py
# Template-method base for local model clients: preflight, model check, call & reply cleanup

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from ..types import GenerateResult
from ..utils import APICallContext, strip_markdown_code_blocks
from ...config.settings import settings_manager
from ...core.exceptions import AIError, ConfigurationError
from ...core.verbose import vlog_ai_call, vlog_ai_result


class BaseClient(ABC):

    provider_name: str = ""

    # * preflight -> validate_model -> make_call -> _process_response; never raises
    def run_generate(self, prompt: str, model: str) -> GenerateResult:
        temperature = settings_manager.load().temperature
        try:
            self.preflight()
            installed = self.validate_model(model)
            vlog_ai_call(self.provider_name, installed, len(prompt), temperature)

            started = time.perf_counter()
            ctx = self.make_call(prompt, installed, temperature)
            elapsed_ms = (time.perf_counter() - started) * 1000
        except (AIError, ConfigurationError) as e:
            return self._failed(model, str(e))
        except Exception as e:
            return self._failed(model, f"Unexpected error in {self.provider_name}: {e}")

        result = self._process_response(ctx)
        vlog_ai_result(
            self.provider_name,
            installed,
            chars=len(ctx.raw_text),
            error=result.error or None,
            duration_ms=elapsed_ms,
        )
        return result

    def preflight(self) -> None:
        return None

    # resolve the requested name to what the provider will accept
    def validate_model(self, model: str) -> str:
        return model

    @abstractmethod
    def make_call(self, prompt: str, model: str, temperature: float) -> APICallContext:
        pass

    # strip thinking tokens & a wrapping fence; nothing left counts as a failure
    def _process_response(self, ctx: APICallContext) -> GenerateResult:
        text = strip_markdown_code_blocks(ctx.raw_text or "")
        if not text:
            return GenerateResult.failure(
                f"Empty response from model '{ctx.model}'", raw_text=ctx.raw_text
            )
        return GenerateResult(success=True, text=text, raw_text=ctx.raw_text, model=ctx.model)

    def _failed(self, model: str, message: str) -> GenerateResult:
        vlog_ai_result(self.provider_name, model, error=message)
        return GenerateResult.failure(message)
