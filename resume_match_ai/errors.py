"""Exceptions raised at the pipeline boundaries.

Individual extractors never raise: an empty or invalid field is an expected
degradation and is dropped silently. Only two things reach the caller:
insufficient input text and failures of the external text generator.
"""

from enum import Enum


class ResumeMatchError(Exception):
    """Base class for errors surfaced to callers."""


class PreconditionFailure(ResumeMatchError):
    """Input does not satisfy a precondition of the pipeline. Not retryable."""


class InsufficientContentError(PreconditionFailure):
    """Document text is missing or too short to extract a profile from."""

    def __init__(self, length: int, min_length: int) -> None:
        super().__init__(
            f"Insufficient content: extracted text has {length} characters, at least {min_length} required"
        )
        self.length = length
        self.min_length = min_length


class GenerationErrorCategory(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class GenerationError(ResumeMatchError):
    """The text-generation service failed; category tells the caller whether to retry."""

    def __init__(self, message: str, category: GenerationErrorCategory = GenerationErrorCategory.UNKNOWN) -> None:
        super().__init__(message)
        self.category = category

    @property
    def retryable(self) -> bool:
        return self.category in (GenerationErrorCategory.RATE_LIMIT, GenerationErrorCategory.TIMEOUT)

    def __str__(self) -> str:
        return f"[{self.category.value}] {super().__str__()}"
