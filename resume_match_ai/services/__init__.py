"""Service exports."""

from .text_normalizer import NormalizedDocument, normalize_document, normalize_text, require_usable_text, split_lines

__all__ = [
    "NormalizedDocument",
    "normalize_document",
    "normalize_text",
    "split_lines",
    "require_usable_text",
]
