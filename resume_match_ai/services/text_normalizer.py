"""Normalize extracted document text into canonical text and an ordered line sequence."""

import re
import unicodedata
from typing import List, NamedTuple

from resume_match_ai.config import MIN_TEXT_LENGTH
from resume_match_ai.errors import InsufficientContentError


class NormalizedDocument(NamedTuple):
    text: str
    lines: List[str]


def normalize_text(raw_text: str) -> str:
    """
    Canonicalize raw extracted text: NFC unicode, '\\n' line endings,
    runs of spaces/tabs collapsed, trailing whitespace removed per line.
    Never reorders or drops non-blank content.
    """
    if not raw_text:
        return ""
    text = unicodedata.normalize("NFC", raw_text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    # Non-breaking and zero-width spaces from PDF extraction
    text = text.replace("\u00a0", " ").replace("\u200b", "")
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def split_lines(text: str) -> List[str]:
    """Ordered non-empty trimmed lines."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def normalize_document(raw_text: str) -> NormalizedDocument:
    text = normalize_text(raw_text)
    return NormalizedDocument(text=text, lines=split_lines(text))


def require_usable_text(raw_text: str, min_length: int = MIN_TEXT_LENGTH) -> str:
    """Return the stripped text, or raise InsufficientContentError when it is too short to parse."""
    stripped = (raw_text or "").strip()
    if len(stripped) < min_length:
        raise InsufficientContentError(len(stripped), min_length)
    return stripped
