"""
OpenAI client factory and text generator.

This module initializes environment variables (via dotenv) and exposes a single
shared async OpenAI client for the application. The client reads credentials
(e.g., OPENAI_API_KEY) from the environment.

`openai_generate` implements the generator contract used by the orchestrator:
(system prompt, user prompt, temperature, max tokens, structured) -> text.
Retries and timeouts are owned by the orchestrator, so the SDK's own retries
are disabled.
"""

from __future__ import annotations

from typing import Awaitable, Callable

import openai
from dotenv import load_dotenv
from openai import AsyncOpenAI

from config.settings import DEFAULT_MODEL, OPENAI_BASE_URL
from domain.errors import GenerationFailed, RateLimited

load_dotenv()

TextGenerator = Callable[[str, str, float, int, bool], Awaitable[str]]

_client: AsyncOpenAI | None = None


def get_client() -> AsyncOpenAI:
    """Return a singleton AsyncOpenAI client instance."""
    global _client
    if _client is None:
        _client = AsyncOpenAI(base_url=OPENAI_BASE_URL, max_retries=0)
    return _client


async def openai_generate(
    system_prompt: str,
    user_prompt: str,
    temperature: float,
    max_tokens: int,
    structured: bool,
    model: str = DEFAULT_MODEL,
) -> str:
    """Run one chat completion and return the message text."""
    client = get_client()
    extra = {"response_format": {"type": "json_object"}} if structured else {}

    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
            **extra,
        )
    except openai.RateLimitError as e:
        raise RateLimited(f"Rate limited: {e}") from e

    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise GenerationFailed("LLM returned empty response")
    return content.strip()
