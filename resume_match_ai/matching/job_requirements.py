"""Required skills extracted from a job description."""

import re
from typing import List

from resume_match_ai.cv_pipeline.field_extractors import find_skills_in_text, listed_skills
from resume_match_ai.schemas.match_result import JobRequirement
from resume_match_ai.utils.logger import get_logger

logger = get_logger(__name__)

_REQUIREMENT_LABEL = re.compile(
    r"^(?:required skills|skills required|key skills|skills|must have|requirements|tech stack)\s*:\s*(.+)$",
    re.IGNORECASE | re.MULTILINE,
)


def parse_job_requirement(job_text: str) -> JobRequirement:
    """
    Taxonomy skills mentioned anywhere in the job text, followed by items of
    labelled lists ('Required skills: Kafka, Airflow') the taxonomy does not know.
    """
    if not job_text or not job_text.strip():
        return JobRequirement()
    skills = find_skills_in_text(job_text)
    for m in _REQUIREMENT_LABEL.finditer(job_text):
        skills.extend(listed_skills(m.group(1)))
    requirement = JobRequirement(required_skills=skills)
    logger.debug("Extracted %s required skills from job description", len(requirement.required_skills))
    return requirement


def extract_required_skills(job_text: str) -> List[str]:
    return parse_job_requirement(job_text).required_skills
