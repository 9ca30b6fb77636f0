"""Job/profile matching: required skills, fuzzy skill matching, experience and scoring."""

from .experience import compute_experience_duration
from .job_requirements import extract_required_skills, parse_job_requirement
from .match_scorer import compute_score, derive_recommendation, score_match
from .skill_matcher import SkillMatchOutcome, match_skills, skill_similarity

__all__ = [
    "score_match",
    "compute_score",
    "derive_recommendation",
    "compute_experience_duration",
    "extract_required_skills",
    "parse_job_requirement",
    "match_skills",
    "skill_similarity",
    "SkillMatchOutcome",
]
