"""Fuzzy matching of required job skills against a candidate's skills."""

from typing import Dict, Iterable, List, NamedTuple

from rapidfuzz.distance import Levenshtein

from resume_match_ai.config import SKILL_MATCH_THRESHOLD
from resume_match_ai.utils.helpers import deduplicate_case_insensitive


class SkillMatchOutcome(NamedTuple):
    matched: List[str]
    missing: List[str]
    scores: Dict[str, float]  # required skill -> best similarity
    best_candidates: Dict[str, str]  # matched required skill -> candidate skill that matched it


def skill_similarity(required: str, candidate: str) -> float:
    """
    1.0 for case-insensitive equality; min/max length ratio when one contains the other;
    otherwise 1 - Levenshtein distance / longer length.
    """
    a = (required or "").strip().lower()
    b = (candidate or "").strip().lower()
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    longest = max(len(a), len(b))
    if a in b or b in a:
        return min(len(a), len(b)) / longest
    return 1.0 - Levenshtein.distance(a, b) / longest


def match_skills(
    required_skills: Iterable[str],
    candidate_skills: Iterable[str],
    threshold: float = SKILL_MATCH_THRESHOLD,
) -> SkillMatchOutcome:
    """A required skill is matched when its best candidate similarity reaches threshold."""
    required = deduplicate_case_insensitive(required_skills)
    candidates = deduplicate_case_insensitive(candidate_skills)
    matched: List[str] = []
    missing: List[str] = []
    scores: Dict[str, float] = {}
    best_candidates: Dict[str, str] = {}
    for skill in required:
        best_score, best_candidate = 0.0, ""
        for candidate in candidates:
            score = skill_similarity(skill, candidate)
            # strict '>' keeps the first candidate reaching the best score
            if score > best_score:
                best_score, best_candidate = score, candidate
            if best_score == 1.0:
                break
        scores[skill] = round(best_score, 4)
        if best_score >= threshold:
            matched.append(skill)
            best_candidates[skill] = best_candidate
        else:
            missing.append(skill)
    return SkillMatchOutcome(matched, missing, scores, best_candidates)
