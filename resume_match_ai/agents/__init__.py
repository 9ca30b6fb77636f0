"""Agent exports."""

from .cover_letter_agent import classify_generation_error, generate_cover_letter, generate_cover_letter_async
from .prompt_builder import build_generation_prompt

__all__ = [
    "build_generation_prompt",
    "generate_cover_letter",
    "generate_cover_letter_async",
    "classify_generation_error",
]
