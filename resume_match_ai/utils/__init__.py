"""Utility exports."""

from .date_parser import DateRange, parse_duration
from .helpers import (
    clean_skill_list,
    deduplicate_case_insensitive,
    extract_emails,
    validate_skill,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "extract_emails",
    "parse_duration",
    "DateRange",
    "validate_skill",
    "clean_skill_list",
    "deduplicate_case_insensitive",
]
