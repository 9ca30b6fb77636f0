"""Résumé Match AI: résumé profile extraction and job/profile match scoring."""

from resume_match_ai.agents import build_generation_prompt, generate_cover_letter
from resume_match_ai.cv_pipeline import extract_profile, merge_profile, run_cv_pipeline
from resume_match_ai.errors import (
    GenerationError,
    GenerationErrorCategory,
    InsufficientContentError,
    PreconditionFailure,
    ResumeMatchError,
)
from resume_match_ai.matching import extract_required_skills, score_match
from resume_match_ai.schemas import CandidateProfile, GenerationPrompt, MatchResult, Recommendation

__version__ = "0.1.0"

__all__ = [
    "extract_profile",
    "score_match",
    "build_generation_prompt",
    "merge_profile",
    "extract_required_skills",
    "run_cv_pipeline",
    "generate_cover_letter",
    "CandidateProfile",
    "MatchResult",
    "Recommendation",
    "GenerationPrompt",
    "ResumeMatchError",
    "PreconditionFailure",
    "InsufficientContentError",
    "GenerationError",
    "GenerationErrorCategory",
]
