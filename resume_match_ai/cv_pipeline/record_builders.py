"""
Turn segmented section bodies into ordered typed records.

Entries start on heading-shaped lines; bullets become achievements and the remaining
lines the description. Output keeps the earliest entries up to a per-category cap.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, NamedTuple, Optional, Pattern, Tuple

from resume_match_ai.config import (
    MAX_CERTIFICATION_ENTRIES,
    MAX_EDUCATION_ENTRIES,
    MAX_EXPERIENCE_ENTRIES,
    MAX_PROJECT_ENTRIES,
)
from resume_match_ai.cv_pipeline.field_extractors import canonical_skill, find_skills_in_text
from resume_match_ai.schemas.profile import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    ProjectEntry,
)
from resume_match_ai.services.text_normalizer import split_lines
from resume_match_ai.utils.date_parser import PRESENT, DateRange, parse_duration
from resume_match_ai.utils.helpers import collapse_spaces
from resume_match_ai.utils.logger import get_logger
from resume_match_ai.utils.taxonomy import load_lexicon, term_pattern

logger = get_logger(__name__)

MAX_HEADING_WORDS = 12
MAX_PROJECT_TITLE_WORDS = 6
MAX_SPLIT_PART_LENGTH = 50
MIN_DESCRIPTION_LENGTH = 10
MIN_ACHIEVEMENT_LENGTH = 5

_BULLET = re.compile(r"^(?:[•\-*·▪◦➢►]\s*|\d+[.)]\s+)")
_URL = re.compile(r"(?:https?://|www\.)\S+", re.IGNORECASE)
_DASH_SPLIT = re.compile(r"^(.+?)(?:\s+-\s+|\s*[–—]\s*)(.+)$")
_AT_SPLIT = re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE)
_SEPARATOR_SPLIT = re.compile(r"^(.+?)\s*[|,]\s*(.+)$")
_PART_SPLIT = re.compile(r"\s+-\s+|\s*[–—|]\s*|,\s*")
_WORK_MODE = re.compile(r"^(?:remote|hybrid|on-?site)$", re.IGNORECASE)
_CITY_REGION = re.compile(r"^[A-Z][A-Za-z .'\-]+,\s*([A-Za-z .]+)$")
_FIELD_OF_STUDY = re.compile(r"^(.+?)\s+in\s+(.+)$", re.IGNORECASE)
_TECH_LINE = re.compile(
    r"^(?:technologies used|technologies|tech stack|built with|tools|stack|developed in)\s*[:\-]?\s*(.+)$",
    re.IGNORECASE,
)
_TECH_ITEM_SPLIT = re.compile(r"\s*[,;|/•]\s*|\s+and\s+", re.IGNORECASE)


class HeadingSplit(NamedTuple):
    first: str
    second: str
    rule: str  # "dash", "at", "separator" or "" when the heading did not split


@dataclass
class _EntryDraft:
    heading: str = ""
    second_heading: str = ""
    duration: DateRange = field(default_factory=DateRange)
    description: List[str] = field(default_factory=list)
    achievements: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)
    link: str = ""

    @property
    def has_content(self) -> bool:
        return bool(self.description or self.achievements or self.technologies)

    def content_text(self) -> str:
        return " ".join(self.description + self.achievements)


# ---- line helpers ------------------------------------------------------------


@lru_cache(maxsize=None)
def _job_title_pattern() -> Pattern[str]:
    return term_pattern(load_lexicon().job_title_words)


@lru_cache(maxsize=None)
def _institution_pattern() -> Pattern[str]:
    return term_pattern(load_lexicon().institution_terms)


@lru_cache(maxsize=None)
def _degree_patterns() -> Tuple[Pattern[str], Pattern[str]]:
    """Long degree terms match any case; two-letter ones (BS, MA) only in capitals."""
    terms = load_lexicon().degree_terms
    long_terms = [t for t in terms if len(t) > 2]
    short_terms = "|".join(re.escape(t.upper()) for t in terms if len(t) <= 2)
    return term_pattern(long_terms), re.compile(rf"(?<![\w.])(?:{short_terms})(?![\w])")


@lru_cache(maxsize=None)
def _action_verb_pattern() -> Pattern[str]:
    verbs = "|".join(re.escape(v) for v in load_lexicon().project_action_verbs)
    return re.compile(rf"^(?:{verbs})\b", re.IGNORECASE)


def has_job_title_word(text: str) -> bool:
    return bool(_job_title_pattern().search(text or ""))


def _has_degree(text: str) -> bool:
    # A trailing state code ("Boston, MA") is not a degree
    m = re.search(r",\s*([A-Z]{2})\s*$", text)
    if m and m.group(1) in load_lexicon().us_states:
        text = text[: m.start()]
    long_pattern, short_pattern = _degree_patterns()
    return bool(long_pattern.search(text) or short_pattern.search(text))


def _has_institution(text: str) -> bool:
    return bool(_institution_pattern().search(text))


def is_bullet(line: str) -> bool:
    return bool(_BULLET.match(line))


def strip_bullet(line: str) -> str:
    return _BULLET.sub("", line, count=1).strip()


def _strip_duration(line: str, duration: DateRange) -> str:
    if not duration.matched_text:
        return line
    remainder = line.replace(duration.matched_text, " ", 1)
    remainder = re.sub(r"\(\s*\)", " ", remainder)
    return collapse_spaces(remainder).strip(" |,-–—:")


def _looks_like_heading(line: str) -> bool:
    if not line or is_bullet(line) or line.endswith("."):
        return False
    if not (line[0].isupper() or line[0].isdigit()):
        return False
    return len(line.split()) <= MAX_HEADING_WORDS


def is_location(text: str) -> bool:
    """'Remote', 'City, ST' or 'City, Country'."""
    text = text.strip()
    if _WORK_MODE.match(text):
        return True
    m = _CITY_REGION.match(text)
    if not m:
        return False
    lexicon = load_lexicon()
    region = m.group(1).strip()
    return region in lexicon.us_states or region.lower() in (c.lower() for c in lexicon.countries)


def _is_date_line(remainder: str) -> bool:
    """Line that carries only a duration, optionally with a location."""
    return not remainder or not re.search(r"[A-Za-z]", remainder) or is_location(remainder)


def split_heading(line: str) -> HeadingSplit:
    """
    Split a heading into two parts using, in order: 'A - B', 'A at B', then 'A | B' / 'A, B'.
    Only the first separator is used; for the last rule the second part stops at the next '|'.
    """
    line = collapse_spaces(line)
    m = _DASH_SPLIT.match(line)
    if m:
        return HeadingSplit(m.group(1).strip(), m.group(2).strip(), "dash")
    m = _AT_SPLIT.match(line)
    if m:
        return HeadingSplit(m.group(1).strip(), m.group(2).strip(), "at")
    m = _SEPARATOR_SPLIT.match(line)
    if m and len(m.group(1)) < MAX_SPLIT_PART_LENGTH and len(m.group(2)) < MAX_SPLIT_PART_LENGTH:
        return HeadingSplit(m.group(1).strip(), m.group(2).split("|")[0].strip(), "separator")
    return HeadingSplit(line, "", "")


def _cap(records: list, limit: int, kind: str) -> list:
    if len(records) > limit:
        logger.debug("Keeping first %s of %s %s entries", limit, len(records), kind)
    return records[:limit]


def _dates(duration: DateRange) -> dict:
    return {
        "start_date": duration.start_date,
        "end_date": duration.end_date,
        "current": duration.current,
    }


# ---- experience --------------------------------------------------------------


def _company_position(draft: _EntryDraft) -> Tuple[str, str]:
    parts = split_heading(draft.heading)
    if parts.rule == "at":
        return parts.second, parts.first
    if parts.rule == "dash":
        return parts.first, parts.second
    if parts.rule == "separator":
        if has_job_title_word(parts.first) and not has_job_title_word(parts.second):
            return parts.second, parts.first
        return parts.first, parts.second
    if draft.second_heading:
        if has_job_title_word(draft.heading) and not has_job_title_word(draft.second_heading):
            return draft.second_heading, draft.heading
        return draft.heading, draft.second_heading
    if has_job_title_word(draft.heading):
        return "", draft.heading
    return draft.heading, ""


def _starts_experience(heading: str, current: Optional[_EntryDraft], duration: DateRange) -> bool:
    if not _looks_like_heading(heading) or _action_verb_pattern().match(heading):
        return False
    if current is None:
        return True
    rule = split_heading(heading).rule
    if rule in ("dash", "at"):
        return True
    if rule == "separator":
        parts = split_heading(heading)
        if has_job_title_word(parts.first) or has_job_title_word(parts.second):
            return True
    if duration.matched_text and current.duration.matched_text:
        return True
    return has_job_title_word(heading) and (current.has_content or bool(current.second_heading))


def _takes_second_heading(line: str, current: Optional[_EntryDraft]) -> bool:
    return (
        current is not None
        and bool(current.heading)
        and not current.second_heading
        and not current.has_content
        and not split_heading(current.heading).rule
        and _looks_like_heading(line)
        and len(line.split()) <= 8
        and not _action_verb_pattern().match(line)
    )


def build_experience(section_text: str, max_entries: int = MAX_EXPERIENCE_ENTRIES) -> List[ExperienceEntry]:
    drafts: List[_EntryDraft] = []
    current: Optional[_EntryDraft] = None
    for line in split_lines(section_text):
        if is_bullet(line):
            if current is None:
                current = _EntryDraft()
                drafts.append(current)
            achievement = strip_bullet(line)
            if len(achievement) > MIN_ACHIEVEMENT_LENGTH:
                current.achievements.append(achievement)
            continue

        duration = parse_duration(line)
        remainder = _strip_duration(line, duration)
        if duration.matched_text and _is_date_line(remainder):
            if current is None:
                current = _EntryDraft()
                drafts.append(current)
            if not current.duration.matched_text:
                current.duration = duration
            continue

        if _starts_experience(remainder, current, duration):
            current = _EntryDraft(heading=remainder, duration=duration)
            drafts.append(current)
        elif _takes_second_heading(remainder, current):
            current.second_heading = remainder
            if duration.matched_text and not current.duration.matched_text:
                current.duration = duration
        elif len(line) > MIN_DESCRIPTION_LENGTH:
            if current is None:
                current = _EntryDraft()
                drafts.append(current)
            current.description.append(line)

    entries: List[ExperienceEntry] = []
    for draft in drafts:
        company, position = _company_position(draft)
        if not (company or position):
            continue
        entries.append(
            ExperienceEntry(
                company=company,
                position=position,
                description=" ".join(draft.description),
                achievements=draft.achievements,
                skills=find_skills_in_text(draft.content_text()),
                **_dates(draft.duration),
            )
        )
    return _cap(entries, max_entries, "experience")


# ---- education ---------------------------------------------------------------


def _split_degree(text: str) -> Tuple[str, str]:
    """'Bachelor of Science in Computer Science' -> (degree, field)."""
    m = _FIELD_OF_STUDY.match(text)
    if m:
        return m.group(1).strip(), m.group(2).strip()
    return text.strip(), ""


def _apply_education_line(record: dict, line: str) -> None:
    parts = [p.strip() for p in _PART_SPLIT.split(line) if p and p.strip()]
    leftovers: List[str] = []
    for part in parts:
        if not record["institution"] and _has_institution(part):
            record["institution"] = part
        elif not record["degree"] and _has_degree(part) and part not in load_lexicon().us_states:
            record["degree"], study = _split_degree(part)
            record["field_of_study"] = record["field_of_study"] or study
        else:
            leftovers.append(part)
    for part in leftovers:
        if record["degree"] and not record["field_of_study"] and not is_location(part):
            record["field_of_study"] = part
        elif record["institution"] and not _has_degree(line):
            record["institution"] = f"{record['institution']}, {part}"
        else:
            record["description"].append(part)


def _new_education() -> dict:
    return {
        "institution": "",
        "degree": "",
        "field_of_study": "",
        "description": [],
        "duration": DateRange(),
    }


def build_education(section_text: str, max_entries: int = MAX_EDUCATION_ENTRIES) -> List[EducationEntry]:
    records: List[dict] = []
    current: Optional[dict] = None
    for line in split_lines(section_text):
        if is_bullet(line):
            if current is not None:
                current["description"].append(strip_bullet(line))
            continue
        duration = parse_duration(line)
        remainder = _strip_duration(line, duration)
        if duration.matched_text and _is_date_line(remainder):
            if current is not None and not current["duration"].matched_text:
                current["duration"] = duration
            continue

        has_institution = _has_institution(remainder)
        has_degree = _has_degree(remainder)
        if has_institution or has_degree:
            starts_new = (
                current is None
                or (has_institution and bool(current["institution"]))
                or (has_degree and bool(current["degree"]))
            )
            if starts_new:
                current = _new_education()
                records.append(current)
            _apply_education_line(current, remainder)
            if duration.matched_text and not current["duration"].matched_text:
                current["duration"] = duration
        elif current is not None:
            current["description"].append(line)

    entries = [
        EducationEntry(
            institution=r["institution"],
            degree=r["degree"],
            field_of_study=r["field_of_study"],
            description=" ".join(r["description"]),
            **_dates(r["duration"]),
        )
        for r in records
        if r["institution"] or r["degree"]
    ]
    return _cap(entries, max_entries, "education")


# ---- projects ----------------------------------------------------------------


def _technologies_from(text: str) -> List[str]:
    """Skills named in a 'Tech stack: ...' style list, taxonomy names first."""
    found = find_skills_in_text(text)
    for item in _TECH_ITEM_SPLIT.split(text):
        item = item.strip(" .()")
        if item and len(item.split()) <= 3:
            found.append(canonical_skill(item))
    return found


def _is_project_title(line: str, current: Optional[_EntryDraft]) -> bool:
    if not _looks_like_heading(line) or len(line) < 3 or len(line) >= 80:
        return False
    if _URL.search(line) or "@" in line or _action_verb_pattern().match(line):
        return False
    has_separator = bool(re.search(r"\s-\s|[–—|]", line))
    if not has_separator and len(line.split()) > MAX_PROJECT_TITLE_WORDS:
        return False
    return current is None or current.has_content or bool(current.link) or has_separator


def build_projects(section_text: str, max_entries: int = MAX_PROJECT_ENTRIES) -> List[ProjectEntry]:
    drafts: List[_EntryDraft] = []
    current: Optional[_EntryDraft] = None
    for line in split_lines(section_text):
        url = _URL.search(line)
        if url and current is not None:
            current.link = current.link or url.group(0).rstrip(".,)")
            continue

        if is_bullet(line):
            if current is not None:
                achievement = strip_bullet(line)
                if len(achievement) > MIN_ACHIEVEMENT_LENGTH:
                    current.achievements.append(achievement)
            continue

        tech = _TECH_LINE.match(line)
        if tech and current is not None:
            current.technologies.extend(_technologies_from(tech.group(1)))
            continue

        duration = parse_duration(line)
        remainder = _strip_duration(line, duration)
        if duration.matched_text and _is_date_line(remainder):
            if current is not None and not current.duration.matched_text:
                current.duration = duration
            continue

        if _is_project_title(remainder, current):
            parts = split_heading(remainder)
            current = _EntryDraft(heading=remainder, duration=duration)
            if parts.rule in ("dash", "separator") and find_skills_in_text(parts.second):
                # "Title | React, Node.js" form
                current.heading = parts.first
                current.technologies.extend(_technologies_from(parts.second))
            drafts.append(current)
        elif current is not None and len(line) > MIN_DESCRIPTION_LENGTH:
            current.description.append(line)

    entries = [
        ProjectEntry(
            title=draft.heading,
            description=" ".join(draft.description),
            technologies=draft.technologies + find_skills_in_text(draft.content_text()),
            link=draft.link,
            achievements=draft.achievements,
            **_dates(draft.duration),
        )
        for draft in drafts
        if draft.heading
    ]
    return _cap(entries, max_entries, "project")


# ---- certifications ----------------------------------------------------------


def build_certifications(
    section_text: str, max_entries: int = MAX_CERTIFICATION_ENTRIES
) -> List[CertificationEntry]:
    """One certification per line: 'Name - Issuer (2021)', 'Name, Issuer, Jan 2021 - Jan 2024'."""
    entries: List[CertificationEntry] = []
    for line in split_lines(section_text):
        line = strip_bullet(line)
        duration = parse_duration(line)
        remainder = _strip_duration(line, duration)
        if not re.search(r"[A-Za-z]", remainder):
            continue
        parts = split_heading(remainder)
        expiry = duration.end_date if duration.is_range and duration.end_date != PRESENT else ""
        entries.append(
            CertificationEntry(
                name=parts.first,
                issuer=parts.second,
                date=duration.start_date,
                expiry_date=expiry,
            )
        )
    return _cap(entries, max_entries, "certification")
