"""Schema exports."""

from .generation import GenerationPrompt
from .match_result import JobRequirement, MatchResult, Recommendation, UserExperience
from .profile import (
    CandidateProfile,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    JobPreferences,
    ProjectEntry,
)

__all__ = [
    "CandidateProfile",
    "JobPreferences",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "CertificationEntry",
    "JobRequirement",
    "MatchResult",
    "Recommendation",
    "UserExperience",
    "GenerationPrompt",
]
