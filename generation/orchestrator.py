"""
Prompt orchestration for product copy generation.

One generation request fans out to several independent subprompts that run
concurrently; the orchestrator waits for all of them and returns a
name -> GenerationResult map. A failing subprompt never blocks or cancels its
siblings.

Per subprompt call:
- the system prompt is the shared base block + the subprompt's own prompt
- rate-limit failures are retried with exponential backoff (explicit loop)
- every attempt runs under a timeout; a timeout is a failure, not a retry
- structured subprompts must return a JSON object containing `result_key`

Request states: IDLE -> DISPATCHING -> (per subprompt) AWAITING -> PARSING ->
DONE | FAILED.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, Mapping, Optional, Tuple

from config.settings import (
    GENERATION_BASE_DELAY_SECONDS,
    GENERATION_MAX_RETRIES,
    GENERATION_TIMEOUT_SECONDS,
)
from domain.errors import GenerationFailed, GenerationTimeout, InvalidGeneratedShape, RateLimited
from domain.generation import GenerationResult, PromptContext, SubpromptSpec

from .llm_client import TextGenerator, openai_generate
from .prompts import BASE_SYSTEM_PROMPT, SUBPROMPTS

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    AWAITING = "awaiting"
    PARSING = "parsing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RequestTrace:
    """State of one generation request: overall and per subprompt."""

    state: GenerationState = GenerationState.IDLE
    subprompts: Dict[str, GenerationState] = field(default_factory=dict)

    def move(self, name: str, state: GenerationState) -> None:
        self.subprompts[name] = state
        logger.debug("Subprompt %s -> %s", name, state.value)


@dataclass(frozen=True)
class RetryPolicy:
    """Retry bound and backoff for rate-limited calls."""

    max_retries: int = GENERATION_MAX_RETRIES
    base_delay: float = GENERATION_BASE_DELAY_SECONDS
    exponential_base: float = 2.0

    def delay_for(self, retry: int) -> float:
        """Delay before retry number `retry` (1-based): base, 2x base, 4x base, ..."""
        return self.base_delay * (self.exponential_base ** (retry - 1))


def _extract_json_from_text(text: str) -> str:
    """Extract the first JSON object from a response that may include markdown or extra text."""
    text = (text or "").strip()

    if "```" in text:
        match = re.search(r"```(?:json)?\s*(\{.*?\})\s*```", text, flags=re.DOTALL)
        if match:
            return match.group(1)
        text = re.sub(r"```(?:json)?", "", text).strip()

    match = re.search(r"\{.*\}", text, flags=re.DOTALL)
    return match.group(0) if match else text


def parse_structured(raw: str, spec: SubpromptSpec) -> Dict[str, Any]:
    """Parse a structured response; anything but a JSON object with `result_key` is rejected."""
    json_text = _extract_json_from_text(raw)

    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        try:
            parsed = json.loads(re.sub(r",\s*([}\]])", r"\1", json_text))
        except json.JSONDecodeError:
            raise InvalidGeneratedShape(
                f"Invalid JSON from {spec.name} (position {e.pos}: {e.msg})", subprompt=spec.name
            ) from e

    if not isinstance(parsed, dict):
        raise InvalidGeneratedShape(f"{spec.name} returned {type(parsed).__name__}, expected object",
                                    subprompt=spec.name)
    if spec.result_key and spec.result_key not in parsed:
        raise InvalidGeneratedShape(f"{spec.name} response lacks '{spec.result_key}'", subprompt=spec.name)
    return parsed


class PromptOrchestrator:
    """Runs subprompts concurrently with per-call retry, timeout and parsing."""

    def __init__(
        self,
        generator: Optional[TextGenerator] = None,
        subprompts: Mapping[str, SubpromptSpec] = SUBPROMPTS,
        retry: Optional[RetryPolicy] = None,
        timeout: float = GENERATION_TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        base_prompt: str = BASE_SYSTEM_PROMPT,
    ):
        self.generator = generator or openai_generate
        self.subprompts = dict(subprompts)
        self.retry = retry or RetryPolicy()
        self.timeout = timeout
        self.sleep = sleep
        self.base_prompt = base_prompt

    async def _generate_with_retry(self, spec: SubpromptSpec, system: str, user: str) -> Tuple[str, int]:
        """Return (text, attempts). Only RateLimited is retried."""
        attempt = 0
        while True:
            attempt += 1
            try:
                text = await asyncio.wait_for(
                    self.generator(system, user, spec.temperature, spec.max_tokens, spec.structured),
                    timeout=self.timeout,
                )
                return text, attempt
            except asyncio.TimeoutError as e:
                raise GenerationTimeout(f"{spec.name} timed out after {self.timeout}s", subprompt=spec.name) from e
            except RateLimited as e:
                retry = attempt
                if retry > self.retry.max_retries:
                    raise RateLimited(f"{spec.name} still rate limited after {attempt} attempts",
                                      subprompt=spec.name) from e
                delay = self.retry.delay_for(retry)
                logger.warning("Subprompt %s rate limited (attempt %d), retrying in %.1fs", spec.name, attempt, delay)
                await self.sleep(delay)

    async def execute_subprompt(
        self,
        name: str,
        context: PromptContext,
        trace: Optional[RequestTrace] = None,
    ) -> GenerationResult:
        trace = trace or RequestTrace()
        spec = self.subprompts.get(name)
        if spec is None:
            trace.move(name, GenerationState.FAILED)
            return GenerationResult.failed(f"Unknown subprompt: {name}")

        system = f"{self.base_prompt}\n\n{spec.system_prompt(context)}"
        user = spec.user_prompt(context)
        attempts = 0

        try:
            trace.move(name, GenerationState.AWAITING)
            raw, attempts = await self._generate_with_retry(spec, system, user)

            trace.move(name, GenerationState.PARSING)
            data = parse_structured(raw, spec) if spec.structured else raw
        except Exception as e:
            if not isinstance(e, GenerationFailed):
                logger.exception("Subprompt %s raised an unexpected error", name)
            else:
                logger.warning("Subprompt %s failed: %s", name, e)
            trace.move(name, GenerationState.FAILED)
            return GenerationResult.failed(str(e) or type(e).__name__, attempts=attempts)

        trace.move(name, GenerationState.DONE)
        logger.info("Subprompt %s done after %d attempt(s)", name, attempts)
        return GenerationResult.ok(data, attempts=attempts)

    async def execute_multiple(
        self,
        names: Iterable[str],
        context: PromptContext,
        trace: Optional[RequestTrace] = None,
    ) -> Dict[str, GenerationResult]:
        """Run all requested subprompts concurrently and collect every result."""
        trace = trace or RequestTrace()
        names = list(dict.fromkeys(names))

        trace.state = GenerationState.DISPATCHING
        results = await asyncio.gather(*(self.execute_subprompt(n, context, trace) for n in names))

        outcome = dict(zip(names, results))
        failed = [n for n, r in outcome.items() if not r.success]
        trace.state = GenerationState.FAILED if failed and len(failed) == len(names) else GenerationState.DONE
        if failed:
            logger.warning("Subprompts failed: %s", ", ".join(failed))
        return outcome
