"""Score a candidate profile against a job description."""

import math
from datetime import date
from typing import Optional, Tuple

from resume_match_ai.config import (
    EXPERIENCE_BONUS_CAP,
    EXPERIENCE_BONUS_PER_YEAR,
    SKILL_MATCH_THRESHOLD,
    TRUTHFULNESS_MARGIN,
)
from resume_match_ai.matching.experience import compute_experience_duration
from resume_match_ai.matching.job_requirements import parse_job_requirement
from resume_match_ai.matching.skill_matcher import match_skills
from resume_match_ai.schemas.match_result import MatchResult, Recommendation
from resume_match_ai.schemas.profile import CandidateProfile
from resume_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

# (minimum score, minimum match ratio, recommendation), checked top-down
RECOMMENDATION_THRESHOLDS = (
    (80, 0.8, Recommendation.STRONG_MATCH),
    (60, 0.6, Recommendation.GOOD_MATCH),
    (40, 0.4, Recommendation.PARTIAL_MATCH),
    (25, 0.0, Recommendation.CONSIDER_WITH_CAUTION),
)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_score(
    matched_count: int,
    required_count: int,
    total_years: int,
    bonus_per_year: float = EXPERIENCE_BONUS_PER_YEAR,
    bonus_cap: float = EXPERIENCE_BONUS_CAP,
) -> Tuple[int, float]:
    """
    Return (final score, match ratio).
    base = 100 with no required skills, else 100 * matched / required;
    final = min(100, round(base + min(cap, per_year * years))).
    """
    if required_count <= 0:
        base, ratio = 100.0, 1.0
    else:
        ratio = matched_count / required_count
        base = 100.0 * ratio
    bonus = min(bonus_cap, bonus_per_year * max(0, total_years))
    return min(100, _round_half_up(base + bonus)), ratio


def derive_recommendation(score: int, match_ratio: float) -> Recommendation:
    for min_score, min_ratio, recommendation in RECOMMENDATION_THRESHOLDS:
        if score >= min_score and match_ratio >= min_ratio:
            return recommendation
    return Recommendation.POOR_MATCH


def score_match(
    job_description_text: str,
    profile: CandidateProfile,
    now: Optional[date] = None,
    threshold: float = SKILL_MATCH_THRESHOLD,
    bonus_per_year: float = EXPERIENCE_BONUS_PER_YEAR,
    bonus_cap: float = EXPERIENCE_BONUS_CAP,
) -> MatchResult:
    """
    Match the profile against the job description.
    Blank job text, or required skills against a profile with neither skills nor
    experience, gives score 0 with recommendation insufficient_data.
    """
    experience = compute_experience_duration(profile.experience, now)
    if not job_description_text or not job_description_text.strip():
        logger.info("Empty job description; nothing to match")
        return MatchResult(user_experience=experience)

    required = parse_job_requirement(job_description_text).required_skills
    candidate_skills = profile.all_skills()
    if required and not candidate_skills and not profile.experience:
        logger.info("Profile has no skills or experience to match %s required skills", len(required))
        return MatchResult(
            required_skills=required,
            missing_skills=required,
            skill_scores={skill: 0.0 for skill in required},
            user_experience=experience,
        )

    outcome = match_skills(required, candidate_skills, threshold)
    score, ratio = compute_score(
        len(outcome.matched), len(required), experience.total_years, bonus_per_year, bonus_cap
    )
    recommendation = derive_recommendation(score, ratio)
    logger.info(
        "Match score %s (%s/%s skills, %s years): %s",
        score,
        len(outcome.matched),
        len(required),
        experience.total_years,
        recommendation.value,
    )
    return MatchResult(
        score=score,
        matched_skills=outcome.matched,
        missing_skills=outcome.missing,
        required_skills=required,
        skill_scores=outcome.scores,
        match_ratio=round(ratio, 4),
        user_experience=experience,
        recommendation=recommendation,
        truthfulness_score=min(100, score + TRUTHFULNESS_MARGIN),
    )
