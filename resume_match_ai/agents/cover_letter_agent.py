"""Cover letter agent: send the structured prompt to the LLM with timeout and bounded retries."""

import asyncio
from typing import Any, Optional

import httpx
import openai
from openai import AsyncOpenAI

from resume_match_ai.config import (
    GENERATION_MAX_RETRIES,
    GENERATION_MAX_TOKENS,
    GENERATION_RETRY_BACKOFF_SECONDS,
    GENERATION_TEMPERATURE,
    GENERATION_TIMEOUT_SECONDS,
    MODEL_NAME,
    OPENAI_API_KEY,
)
from resume_match_ai.errors import GenerationError, GenerationErrorCategory
from resume_match_ai.schemas.generation import GenerationPrompt
from resume_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def classify_generation_error(error: Exception) -> GenerationError:
    """Map a client exception to a categorized GenerationError."""
    if isinstance(error, GenerationError):
        return error
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        category = GenerationErrorCategory.AUTH
    elif isinstance(error, openai.RateLimitError):
        category = GenerationErrorCategory.RATE_LIMIT
    elif isinstance(error, (openai.APITimeoutError, asyncio.TimeoutError, httpx.TimeoutException)):
        category = GenerationErrorCategory.TIMEOUT
    else:
        category = GenerationErrorCategory.UNKNOWN
    return GenerationError(str(error) or type(error).__name__, category)


async def _complete(client: Any, prompt: GenerationPrompt, timeout_seconds: float) -> str:
    response = await asyncio.wait_for(
        client.chat.completions.create(
            model=MODEL_NAME,
            messages=prompt.to_messages(),
            temperature=GENERATION_TEMPERATURE,
            max_tokens=GENERATION_MAX_TOKENS,
        ),
        timeout=timeout_seconds,
    )
    choice = response.choices[0] if response.choices else None
    if not choice or not choice.message or not choice.message.content:
        raise GenerationError("Text generation service returned an empty response")
    return choice.message.content.strip()


async def generate_cover_letter_async(
    prompt: GenerationPrompt,
    client: Any,
    max_attempts: int = GENERATION_MAX_RETRIES,
    backoff_seconds: float = GENERATION_RETRY_BACKOFF_SECONDS,
    timeout_seconds: float = GENERATION_TIMEOUT_SECONDS,
) -> str:
    """
    Generate the letter, retrying rate-limit and timeout failures up to max_attempts
    with a fixed backoff. Raises GenerationError carrying the failure category.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            letter = await _complete(client, prompt, timeout_seconds)
        except Exception as e:
            error = classify_generation_error(e)
            if error.retryable and attempt < max_attempts:
                logger.warning(
                    "Cover letter generation failed (%s), attempt %s/%s; retrying in %ss",
                    error.category.value,
                    attempt,
                    max_attempts,
                    backoff_seconds,
                )
                await asyncio.sleep(backoff_seconds)
                continue
            logger.error("Cover letter generation failed after %s attempt(s): %s", attempt, error)
            if error is e:
                raise
            raise error from e
        logger.info("Cover letter generated: %s characters, attempt %s", len(letter), attempt)
        return letter


def generate_cover_letter(
    prompt: GenerationPrompt,
    client: Optional[Any] = None,
    max_attempts: int = GENERATION_MAX_RETRIES,
    backoff_seconds: float = GENERATION_RETRY_BACKOFF_SECONDS,
) -> str:
    """
    Generate a cover letter from a structured prompt. Safe to call from sync context (e.g. Streamlit).
    Raises GenerationError (category auth when no API key is configured).
    """
    owns_client = client is None
    if owns_client:
        if not OPENAI_API_KEY:
            raise GenerationError("OPENAI_API_KEY is not set", GenerationErrorCategory.AUTH)
        # Retries are handled here, not by the SDK
        client = AsyncOpenAI(
            api_key=OPENAI_API_KEY,
            timeout=httpx.Timeout(GENERATION_TIMEOUT_SECONDS),
            max_retries=0,
        )
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(
            generate_cover_letter_async(prompt, client, max_attempts, backoff_seconds)
        )
    finally:
        if owns_client:
            loop.run_until_complete(client.close())
        loop.close()
