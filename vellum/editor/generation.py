# vellum/editor/generation.py
# Off-thread generation requests; results are queued & applied to the surface on the event thread

from __future__ import annotations

import queue
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

from ..ai.types import GenerateResult
from ..core.debug import debug_error
from ..core.verbose import vlog
from .surface import EditorSurface

GenerateFn = Callable[[Any, str], GenerateResult]


class GenerationDispatcher:
    # No request fencing: whichever response resolves last overwrites the document on drain()

    def __init__(
        self,
        surface: EditorSurface,
        generate_fn: GenerateFn | None = None,
        max_workers: int = 2,
    ):
        if generate_fn is None:
            from ..ai.resume_service import generate as generate_fn

        self.surface = surface
        self._generate = generate_fn
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="vellum-generate"
        )
        self._completed: "queue.Queue[GenerateResult]" = queue.Queue()

    # * Submit a generation; the future resolves w/ a result, never an exception
    def request(self, profile: Any, instructions: str) -> "Future[GenerateResult]":
        vlog("GENERATE", "Request dispatched", f"instructions: {len(instructions)} chars")
        return self._executor.submit(self._run, profile, instructions)

    # * Apply queued results in completion order; returns how many were applied
    def drain(self) -> int:
        applied = 0
        while True:
            try:
                result = self._completed.get_nowait()
            except queue.Empty:
                return applied
            self.surface.apply_generation(result)
            applied += 1

    # block until the future resolves, then apply everything queued so far
    def wait(self, future: "Future[GenerateResult]") -> GenerateResult:
        result = future.result()
        self.drain()
        return result

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "GenerationDispatcher":
        return self

    def __exit__(self, *exc: object) -> None:
        self.shutdown()

    def _run(self, profile: Any, instructions: str) -> GenerateResult:
        try:
            result = self._generate(profile, instructions)
        except Exception as e:
            debug_error(e, "Generation request")
            result = GenerateResult.failure(f"Request failed: {e}")
        self._completed.put(result)
        return result
