"""Versioned static vocabularies (skills, section headers, lexicon) shipped as JSON data."""

import json
import re
from functools import lru_cache
from importlib import resources
from typing import Dict, List, Pattern, Tuple

from pydantic import BaseModel, Field

from resume_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

DATA_PACKAGE = "resume_match_ai.data"

# Term boundaries: a "." before the term means it is part of a dotted name ("node.js" is not "js").
_TERM_PREFIX = r"(?<![\w.])"
_TERM_SUFFIX = r"(?![\w])"


class SkillTaxonomy(BaseModel):
    """Skill vocabulary grouped by category, with spelling variations and exclusions."""

    version: str
    categories: Dict[str, List[str]] = Field(default_factory=dict)
    variations: Dict[str, List[str]] = Field(default_factory=dict, description="lowercase skill -> extra spellings")
    variation_only: List[str] = Field(default_factory=list, description="Skills matched only via their variations")
    exclusion_patterns: List[str] = Field(default_factory=list, description="Regexes rejecting non-skill strings")

    def all_skills(self) -> List[str]:
        seen: set[str] = set()
        result: List[str] = []
        for skills in self.categories.values():
            for skill in skills:
                if skill.lower() not in seen:
                    seen.add(skill.lower())
                    result.append(skill)
        return result

    def category_of(self, skill: str) -> str:
        key = skill.strip().lower()
        for category, skills in self.categories.items():
            if any(s.lower() == key for s in skills):
                return category
        return ""

    def spellings(self, skill: str) -> List[str]:
        """All lowercase spellings that count as a mention of skill."""
        base = skill.lower()
        forms: List[str] = []
        if base not in self.variation_only:
            forms.extend([
                base,
                base if base.startswith(".") else base.replace(".", ""),
                base.replace(" ", ""),
                base.replace(" ", "-"),
                base.replace("-", " "),
                base.replace("-", ""),
            ])
        forms.extend(v.lower() for v in self.variations.get(base, []))
        return [f for f in dict.fromkeys(forms) if len(f) >= 2]


class SectionVocabulary(BaseModel):
    """Résumé section header vocabulary with typo corrections."""

    version: str
    headers: Dict[str, List[str]]
    inline_content_sections: List[str] = Field(default_factory=list)
    typo_corrections: Dict[str, str] = Field(default_factory=dict)


class ProfessionKeyword(BaseModel):
    profession: str
    pattern: str


class Lexicon(BaseModel):
    """Word lists used by the field extractors and record builders."""

    version: str
    name_deny_terms: List[str]
    title_suffixes: List[str]
    job_title_words: List[str]
    profession_keywords: List[ProfessionKeyword]
    remote_terms: List[str]
    industries: Dict[str, List[str]]
    email_domain_typos: Dict[str, str]
    us_states: List[str]
    countries: List[str]
    institution_terms: List[str]
    degree_terms: List[str]
    project_action_verbs: List[str]
    tech_indicators: List[str]


def _read_json(filename: str) -> dict:
    with resources.files(DATA_PACKAGE).joinpath(filename).open("r", encoding="utf-8") as fh:
        return json.load(fh)


@lru_cache(maxsize=None)
def load_skill_taxonomy() -> SkillTaxonomy:
    taxonomy = SkillTaxonomy(**_read_json("skills.json"))
    logger.debug("Loaded skill taxonomy %s with %s skills", taxonomy.version, len(taxonomy.all_skills()))
    return taxonomy


@lru_cache(maxsize=None)
def load_section_vocabulary() -> SectionVocabulary:
    return SectionVocabulary(**_read_json("sections.json"))


@lru_cache(maxsize=None)
def load_lexicon() -> Lexicon:
    return Lexicon(**_read_json("lexicon.json"))


def term_pattern(terms: List[str]) -> Pattern[str]:
    """Case-insensitive, boundary-aware alternation over literal terms (longest first)."""
    ordered = sorted(set(terms), key=len, reverse=True)
    body = "|".join(re.escape(t) for t in ordered)
    return re.compile(rf"{_TERM_PREFIX}(?:{body}){_TERM_SUFFIX}", re.IGNORECASE)


@lru_cache(maxsize=None)
def skill_patterns() -> Tuple[Tuple[str, Pattern[str]], ...]:
    """(display name, compiled pattern) for every taxonomy skill, in taxonomy order."""
    taxonomy = load_skill_taxonomy()
    return tuple(
        (skill, term_pattern(taxonomy.spellings(skill)))
        for skill in taxonomy.all_skills()
        if taxonomy.spellings(skill)
    )


@lru_cache(maxsize=None)
def exclusion_patterns() -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in load_skill_taxonomy().exclusion_patterns)
