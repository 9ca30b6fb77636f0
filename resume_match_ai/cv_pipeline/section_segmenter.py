"""Locate named résumé sections by header line and slice their bodies."""

import re
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple, Union

from resume_match_ai.services.text_normalizer import split_lines
from resume_match_ai.utils.logger import get_logger
from resume_match_ai.utils.taxonomy import load_section_vocabulary

logger = get_logger(__name__)

# Header lines are short; longer lines are content even if they start with a header word.
MAX_HEADER_LENGTH = 50

Lines = Union[str, Sequence[str]]


def _correct_typos(phrase: str) -> str:
    corrections = load_section_vocabulary().typo_corrections
    return " ".join(corrections.get(word, word) for word in phrase.split())


def normalize_header(line: str) -> str:
    """Lowercase, strip decoration and a trailing colon, fix known typos."""
    phrase = (line or "").strip().lower()
    phrase = re.sub(r"^[\W_]+|[\W_]+$", "", phrase)
    phrase = re.sub(r"\s+", " ", phrase)
    return _correct_typos(phrase)


@lru_cache(maxsize=None)
def _header_index() -> Dict[str, str]:
    """Header phrase -> section name."""
    index: Dict[str, str] = {}
    for section, phrases in load_section_vocabulary().headers.items():
        for phrase in phrases:
            index.setdefault(phrase.lower(), section)
    return index


def canonical_section(name: str) -> Optional[str]:
    """Map a section name or any of its header phrases (typos allowed) to the section key."""
    normalized = normalize_header(name)
    if normalized in load_section_vocabulary().headers:
        return normalized
    return _header_index().get(normalized)


def classify_header(line: str) -> Optional[Tuple[str, str]]:
    """
    Return (section, inline_content) when the line is a section header, else None.
    Inline content ('Skills: Python, SQL') is accepted only for inline-content sections.
    """
    if not line or len(line) > MAX_HEADER_LENGTH * 4:
        return None
    if len(line) <= MAX_HEADER_LENGTH:
        section = _header_index().get(normalize_header(line))
        if section:
            return section, ""
    m = re.match(r"^\s*([A-Za-z][A-Za-z &/]{1,40}?)\s*:\s*(.+)$", line)
    if m:
        section = _header_index().get(normalize_header(m.group(1)))
        if section and section in load_section_vocabulary().inline_content_sections:
            return section, m.group(2).strip()
    return None


def _as_lines(lines: Lines) -> List[str]:
    if isinstance(lines, str):
        return split_lines(lines)
    return [line.strip() for line in lines if line and line.strip()]


def _section_headers(lines: List[str]) -> List[Optional[Tuple[str, str]]]:
    """
    Header classification per line. A labelled line ('Skills: Python, SQL') opens its
    section only outside any other section; inside one it is ordinary content.
    """
    headers: List[Optional[Tuple[str, str]]] = []
    active: Optional[str] = None
    for line in lines:
        header = classify_header(line)
        if header and header[1] and active not in (None, header[0]):
            header = None
        if header:
            active = header[0]
        headers.append(header)
    return headers


def _inline_contents(lines: List[str], target: str) -> List[str]:
    contents = []
    for line in lines:
        header = classify_header(line)
        if header and header[0] == target and header[1]:
            contents.append(header[1])
    return contents


def find_section(lines: Lines, section_name: str) -> str:
    """
    Body text of the first section matching section_name, up to the next header
    of a different section. Empty string when the header is absent or the body is empty.
    Without a section header, labelled lines of an inline-content section are used.
    """
    target = canonical_section(section_name)
    if not target:
        logger.debug("Unknown section name: %s", section_name)
        return ""
    all_lines = _as_lines(lines)
    body: List[str] = []
    inside = False
    for line, header in zip(all_lines, _section_headers(all_lines)):
        if not inside:
            if header and header[0] == target:
                inside = True
                if header[1]:
                    body.append(header[1])
            continue
        if header:
            if header[0] != target:
                break
            if header[1]:
                body.append(header[1])
            continue
        body.append(line)
    if not inside and target in load_section_vocabulary().inline_content_sections:
        return "\n".join(_inline_contents(all_lines, target))
    return "\n".join(body)


def find_sections(lines: Lines) -> Dict[str, str]:
    """Every recognised section present in the document -> its body (first occurrence)."""
    all_lines = _as_lines(lines)
    present: List[str] = []
    for header in _section_headers(all_lines):
        if header and header[0] not in present:
            present.append(header[0])
    for section in load_section_vocabulary().inline_content_sections:
        if section not in present and _inline_contents(all_lines, section):
            present.append(section)
    return {section: find_section(all_lines, section) for section in present}
