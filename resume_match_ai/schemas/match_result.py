"""Match result schema: job/profile score, skill overlap and recommendation."""

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from resume_match_ai.utils.helpers import clean_skill_list


class Recommendation(str, Enum):
    STRONG_MATCH = "strong_match"
    GOOD_MATCH = "good_match"
    PARTIAL_MATCH = "partial_match"
    CONSIDER_WITH_CAUTION = "consider_with_caution"
    POOR_MATCH = "poor_match"
    INSUFFICIENT_DATA = "insufficient_data"


class _PayloadModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class UserExperience(_PayloadModel):
    total_years: int = Field(default=0, ge=0)
    total_months: int = Field(default=0, ge=0)
    position_count: int = Field(default=0, ge=0, description="Number of experience entries")
    has_detailed_experience: bool = Field(default=False, description="At least one entry has a parseable start date")


class JobRequirement(_PayloadModel):
    """Skills required by a job description. Derived per request, never persisted."""

    required_skills: List[str] = Field(default_factory=list)

    @field_validator("required_skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> List[str]:
        return clean_skill_list(value or [])


class MatchResult(_PayloadModel):
    score: int = Field(default=0, ge=0, le=100)
    matched_skills: List[str] = Field(default_factory=list)
    missing_skills: List[str] = Field(default_factory=list)
    required_skills: List[str] = Field(default_factory=list)
    skill_scores: Dict[str, float] = Field(default_factory=dict, description="Best similarity per required skill")
    match_ratio: float = Field(default=0.0, ge=0.0, le=1.0)
    user_experience: UserExperience = Field(default_factory=UserExperience)
    recommendation: Recommendation = Recommendation.INSUFFICIENT_DATA
    truthfulness_score: int = Field(default=0, ge=0, le=100)

    @property
    def cover_letter_recommended(self) -> bool:
        return self.recommendation not in (Recommendation.POOR_MATCH, Recommendation.INSUFFICIENT_DATA)
