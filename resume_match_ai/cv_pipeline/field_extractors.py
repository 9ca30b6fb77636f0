"""
Heuristic field extractors over normalized résumé text.

Every extractor takes (text, lines) and returns a value or an empty default.
Each one tries its strategies in a fixed order and returns the first plausible result.
"""

import re
from functools import lru_cache
from typing import List, Optional, Pattern

from email_validator import EmailNotValidError, validate_email

from resume_match_ai.config import (
    DEFAULT_INDUSTRY,
    DEFAULT_PROFESSION,
    LOCATION_SCAN_LINES,
    NAME_SCAN_LINES,
    TITLE_SCAN_LINES,
)
from resume_match_ai.cv_pipeline.section_segmenter import classify_header, find_sections
from resume_match_ai.services.text_normalizer import split_lines
from resume_match_ai.utils.helpers import clean_skill_list, collapse_spaces, extract_emails
from resume_match_ai.utils.logger import get_logger
from resume_match_ai.utils.taxonomy import load_lexicon, skill_patterns, term_pattern

logger = get_logger(__name__)

SKILL_SOURCE_SECTIONS = ("skills", "experience", "projects")
# Skills-section list items longer than this are prose, not skills
MAX_SKILL_WORDS = 4

_PHONE_PATTERNS = (
    # +1 555 123 4567 / +44 (20) 7946 0958 / +92-300-1234567
    re.compile(r"\+\d{1,3}[\s.-]?\(?\d{1,4}\)?(?:[\s.-]?\d{2,4}){2,4}"),
    # (555) 123-4567
    re.compile(r"\(\d{3}\)\s*\d{3}[\s.-]?\d{4}"),
    # 555-123-4567 / 5551234567
    re.compile(r"(?<![\d+])(?:\d{3}[\s.-]\d{3}[\s.-]\d{4}|\d{10,12})(?!\d)"),
)
_NAME_LABEL = re.compile(r"^(?:full\s+)?name\s*[:\-]\s*(.+)$", re.IGNORECASE)
_NAME_TOKEN = re.compile(r"^(?:[A-Z][A-Za-z'\-]*|[A-Z]\.?)$")
_LINKEDIN_SLUG = re.compile(r"linkedin\.com/in/([A-Za-z0-9_\-]+)", re.IGNORECASE)
_LOCATION_LABEL = re.compile(r"^(?:location|based in|address|city)\s*[:\-]\s*(.+)$", re.IGNORECASE)
_SALARY_LABEL = re.compile(
    r"^(?:salary expectations?|expected salary|desired salary|salary)\s*[:\-]\s*(.+)$",
    re.IGNORECASE,
)
_CITY = r"((?:[A-Z][A-Za-z.'\-]+\s?){1,3})"
_SEGMENT_SPLIT = re.compile(r"\s*[|•·]\s*")
_SKILL_ITEM_SPLIT = re.compile(r"\s*(?:[,;|•·]|\s+and\s+|\s+&\s+)\s*", re.IGNORECASE)


def _lines(text: str, lines: Optional[List[str]]) -> List[str]:
    return lines if lines is not None else split_lines(text)


# ---- contact -----------------------------------------------------------------


def _fix_domain_typo(email: str) -> str:
    local, _, domain = email.rpartition("@")
    fixed = load_lexicon().email_domain_typos.get(domain.lower(), domain)
    return f"{local}@{fixed}"


def extract_email(text: str, lines: Optional[List[str]] = None) -> str:
    """First email in the document with common domain typos corrected; empty if invalid."""
    found = extract_emails(text)
    if not found:
        return ""
    candidate = _fix_domain_typo(found[0])
    try:
        return validate_email(candidate, check_deliverability=False).normalized
    except EmailNotValidError as e:
        logger.debug("Rejected email %s: %s", candidate, e)
        return ""


def extract_phone(text: str, lines: Optional[List[str]] = None) -> str:
    if not text:
        return ""
    for pattern in _PHONE_PATTERNS:
        m = pattern.search(text)
        if m:
            return m.group(0).strip()
    return ""


# ---- name --------------------------------------------------------------------


@lru_cache(maxsize=None)
def _name_deny_terms() -> frozenset:
    lexicon = load_lexicon()
    return frozenset(t.lower() for t in lexicon.name_deny_terms + lexicon.title_suffixes)


def is_plausible_name(candidate: str) -> bool:
    """1-4 capitalised tokens or initials, 3-50 chars, no résumé boilerplate words."""
    candidate = collapse_spaces(candidate)
    if not 3 <= len(candidate) <= 50:
        return False
    tokens = candidate.split(" ")
    if not 1 <= len(tokens) <= 4:
        return False
    if not all(_NAME_TOKEN.match(t) for t in tokens):
        return False
    words = set(re.findall(r"[a-z]+", candidate.lower()))
    return not (words & _name_deny_terms())


def _format_name(candidate: str) -> str:
    candidate = collapse_spaces(candidate)
    return candidate.title() if candidate.isupper() else candidate


def _name_from_parts(parts: List[str]) -> str:
    words = [p for p in parts if p.isalpha()]
    return " ".join(w.capitalize() for w in words)


def _name_from_email(email: str) -> str:
    local = email.partition("@")[0]
    return _name_from_parts(re.split(r"[._\-]+", re.sub(r"\d+", "", local)))


def _name_from_linkedin(text: str) -> str:
    m = _LINKEDIN_SLUG.search(text)
    if not m:
        return ""
    return _name_from_parts(m.group(1).split("-"))


def extract_name(text: str, lines: Optional[List[str]] = None) -> str:
    lines = _lines(text, lines)
    if not lines:
        return ""

    # (a) first line, or its first segment when contact details share the line
    first = lines[0]
    for candidate in (first, _SEGMENT_SPLIT.split(first)[0]):
        if is_plausible_name(candidate):
            return _format_name(candidate)

    # (b) labelled field, then a capitalised 2-4 word line near the top
    for line in lines:
        m = _NAME_LABEL.match(line)
        if m and is_plausible_name(m.group(1)):
            return _format_name(m.group(1))
    for line in lines[:NAME_SCAN_LINES]:
        if 2 <= len(line.split()) <= 4 and not classify_header(line) and is_plausible_name(line):
            return _format_name(line)

    # (c) email local part, (d) LinkedIn slug
    email = extract_email(text, lines)
    for candidate in (_name_from_email(email) if email else "", _name_from_linkedin(text)):
        if candidate and is_plausible_name(candidate):
            return candidate
    return ""


# ---- title / profession ------------------------------------------------------


@lru_cache(maxsize=None)
def _title_pattern() -> Pattern[str]:
    return term_pattern(load_lexicon().title_suffixes)


def _is_contact_line(line: str) -> bool:
    lowered = line.lower()
    if "@" in line or "http" in lowered or "www." in lowered or "linkedin" in lowered:
        return True
    return len(re.findall(r"\d", line)) >= 7


def extract_title(text: str, lines: Optional[List[str]] = None) -> str:
    """Line near the top containing a role suffix (developer, engineer, manager...)."""
    for line in _lines(text, lines)[:TITLE_SCAN_LINES]:
        header = classify_header(line)
        if header:
            if header[0] == "summary":
                continue
            break
        if _is_contact_line(line) or len(line.split()) > 8:
            continue
        if _title_pattern().search(line):
            return collapse_spaces(line.strip(" |•-"))
    return ""


def extract_profession(text: str, lines: Optional[List[str]] = None) -> str:
    title = extract_title(text, lines)
    if title:
        return title
    for keyword in load_lexicon().profession_keywords:
        if re.search(keyword.pattern, text or "", re.IGNORECASE):
            return keyword.profession
    return DEFAULT_PROFESSION


# ---- location ----------------------------------------------------------------


@lru_cache(maxsize=None)
def _location_patterns() -> tuple:
    lexicon = load_lexicon()
    states = "|".join(lexicon.us_states)
    countries = "|".join(re.escape(c) for c in sorted(lexicon.countries, key=len, reverse=True))
    return (
        re.compile(rf"{_CITY},\s*({states})(?![A-Za-z])"),
        re.compile(rf"{_CITY},\s*({countries})(?![A-Za-z])"),
    )


def extract_location(text: str, lines: Optional[List[str]] = None, name: str = "") -> str:
    """Labelled location, else 'City, ST' / 'City, Country' near the top. Never the candidate's name."""
    lines = _lines(text, lines)
    candidates: List[str] = []
    for line in lines:
        m = _LOCATION_LABEL.match(line)
        if m:
            candidates.append(_SEGMENT_SPLIT.split(m.group(1))[0])
    for line in lines[:LOCATION_SCAN_LINES]:
        for pattern in _location_patterns():
            for m in pattern.finditer(line):
                candidates.append(f"{m.group(1).strip()}, {m.group(2)}")
    for candidate in candidates:
        candidate = collapse_spaces(candidate).strip(" ,")
        if candidate and candidate.lower() != (name or "").strip().lower():
            return candidate
    return ""


# ---- skills ------------------------------------------------------------------


def find_skills_in_text(text: str) -> List[str]:
    """Taxonomy skills mentioned in text, ordered by first mention."""
    if not text:
        return []
    positions = []
    for skill, pattern in skill_patterns():
        m = pattern.search(text)
        if m:
            positions.append((m.start(), skill))
    positions.sort(key=lambda p: p[0])
    return clean_skill_list(skill for _, skill in positions)


def canonical_skill(token: str) -> str:
    """Taxonomy display name when token is a known spelling of a skill, else the token."""
    for skill, pattern in skill_patterns():
        if pattern.fullmatch(token.strip()):
            return skill
    return token


def listed_skills(section_text: str) -> List[str]:
    """Free-form items of a Skills section ('Languages: Python, Go; Jira')."""
    items: List[str] = []
    for line in split_lines(section_text):
        line = line.lstrip("•*-· ").strip()
        if ":" in line:
            line = line.split(":", 1)[1]
        for item in _SKILL_ITEM_SPLIT.split(line):
            item = item.strip(" .()")
            if item and len(item.split()) <= MAX_SKILL_WORDS:
                items.append(canonical_skill(item))
    return items


def extract_skills(text: str, lines: Optional[List[str]] = None) -> List[str]:
    """
    Skills from the Skills, Experience and Projects sections (whole document when none exists).
    Taxonomy matches come first, then listed Skills-section items outside the taxonomy.
    """
    sections = find_sections(_lines(text, lines))
    present = [sections[name] for name in SKILL_SOURCE_SECTIONS if name in sections]
    if not present:
        logger.debug("No skill source sections found; scanning whole document")
        return find_skills_in_text(text)
    found: List[str] = []
    for body in present:
        found.extend(find_skills_in_text(body))
    found.extend(listed_skills(sections.get("skills", "")))
    return clean_skill_list(found)


# ---- preferences -------------------------------------------------------------


@lru_cache(maxsize=None)
def _remote_pattern() -> Pattern[str]:
    return term_pattern(load_lexicon().remote_terms)


@lru_cache(maxsize=None)
def _industry_patterns() -> tuple:
    return tuple((label, term_pattern(keywords)) for label, keywords in load_lexicon().industries.items())


def extract_remote_preference(text: str, lines: Optional[List[str]] = None) -> bool:
    return bool(text) and bool(_remote_pattern().search(text))


def extract_industries(text: str, lines: Optional[List[str]] = None) -> List[str]:
    matched = [label for label, pattern in _industry_patterns() if text and pattern.search(text)]
    return matched or [DEFAULT_INDUSTRY]


def extract_salary_expectation(text: str, lines: Optional[List[str]] = None) -> str:
    for line in _lines(text, lines):
        m = _SALARY_LABEL.match(line)
        if m:
            return collapse_spaces(m.group(1))
    return ""
