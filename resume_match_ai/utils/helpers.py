"""Helper utilities shared by the extractors, schemas and matcher."""

import re
from typing import Iterable, List, Optional

from resume_match_ai.utils.taxonomy import exclusion_patterns

SKILL_MIN_LENGTH = 2
SKILL_MAX_LENGTH = 50

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")


def extract_emails(text: str) -> List[str]:
    """Extract email addresses from text using regex, in document order."""
    if not text:
        return []
    return list(dict.fromkeys(EMAIL_PATTERN.findall(text)))


def collapse_spaces(value: str) -> str:
    return re.sub(r"\s+", " ", value or "").strip()


def deduplicate_case_insensitive(items: Iterable[str]) -> List[str]:
    """Trim entries, drop empties and keep the first spelling of each case-insensitive duplicate."""
    seen: set[str] = set()
    result: List[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        cleaned = collapse_spaces(item)
        key = cleaned.lower()
        if cleaned and key not in seen:
            seen.add(key)
            result.append(cleaned)
    return result


def validate_skill(skill: str) -> Optional[str]:
    """
    Return the cleaned skill, or None when it is not a plausible skill.
    A skill is 2-50 characters, contains a letter and matches no exclusion pattern.
    Idempotent: validate_skill(validate_skill(s)) == validate_skill(s).
    """
    if not isinstance(skill, str):
        return None
    cleaned = collapse_spaces(skill).strip(" ,;:|•*-")
    if not SKILL_MIN_LENGTH <= len(cleaned) <= SKILL_MAX_LENGTH:
        return None
    if not re.search(r"[A-Za-z]", cleaned):
        return None
    lowered = cleaned.lower()
    if any(p.search(lowered) for p in exclusion_patterns()):
        return None
    return cleaned


def clean_skill_list(skills: Iterable[str]) -> List[str]:
    """Validate every skill and de-duplicate case-insensitively."""
    valid = (validate_skill(s) for s in skills)
    return deduplicate_case_insensitive(s for s in valid if s)
