"""Résumé upload pipeline: text extraction, field extraction, section records, merge."""

from .cv_extractor import extract_profile, run_cv_pipeline
from .profile_merge import merge_profile
from .section_segmenter import find_section, find_sections
from .text_extractor import extract_text_from_file

__all__ = [
    "extract_profile",
    "run_cv_pipeline",
    "merge_profile",
    "find_section",
    "find_sections",
    "extract_text_from_file",
]
