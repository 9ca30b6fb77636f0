"""Compose the field extractors and record builders into a structured candidate profile."""

from typing import Optional

from resume_match_ai.cv_pipeline.field_extractors import (
    extract_email,
    extract_industries,
    extract_location,
    extract_name,
    extract_phone,
    extract_profession,
    extract_remote_preference,
    extract_salary_expectation,
    extract_skills,
    extract_title,
)
from resume_match_ai.cv_pipeline.profile_merge import merge_profile
from resume_match_ai.cv_pipeline.record_builders import (
    build_certifications,
    build_education,
    build_experience,
    build_projects,
)
from resume_match_ai.cv_pipeline.section_segmenter import find_sections
from resume_match_ai.cv_pipeline.text_extractor import extract_text_from_file
from resume_match_ai.schemas.profile import CandidateProfile, JobPreferences
from resume_match_ai.services.text_normalizer import normalize_document, require_usable_text
from resume_match_ai.utils.logger import get_logger

logger = get_logger(__name__)


def _build_profile(raw_text: str) -> CandidateProfile:
    text, lines = normalize_document(raw_text)
    if not text:
        return CandidateProfile()
    sections = find_sections(lines)
    name = extract_name(text, lines)
    preferences = JobPreferences(
        title=extract_title(text, lines),
        location=extract_location(text, lines, name=name),
        remote=extract_remote_preference(text, lines),
        skills=extract_skills(text, lines),
        preferred_industries=extract_industries(text, lines),
        salary_expectation=extract_salary_expectation(text, lines),
    )
    return CandidateProfile(
        name=name,
        email=extract_email(text, lines),
        phone=extract_phone(text, lines),
        profession=extract_profession(text, lines),
        job_preferences=preferences,
        experience=build_experience(sections.get("experience", "")),
        education=build_education(sections.get("education", "")),
        projects=build_projects(sections.get("projects", "")),
        certifications=build_certifications(sections.get("certifications", "")),
    )


def extract_profile(raw_text: str) -> CandidateProfile:
    """
    Extract a structured profile from raw résumé text.
    Never raises: on total failure returns a profile with every field at its default.
    """
    try:
        profile = _build_profile(raw_text or "")
    except Exception as e:
        logger.exception("Profile extraction failed; returning empty profile: %s", e)
        return CandidateProfile()
    logger.info(
        "Extracted profile: %s skills, %s experience, %s education, %s projects, %s certifications",
        len(profile.job_preferences.skills),
        len(profile.experience),
        len(profile.education),
        len(profile.projects),
        len(profile.certifications),
    )
    return profile


def run_cv_pipeline(
    file_bytes: bytes,
    filename: str,
    mime_type: Optional[str] = None,
    previous: Optional[CandidateProfile] = None,
) -> CandidateProfile:
    """
    Run the full upload pipeline: extract text from the file, check it is usable,
    extract the profile and merge it over the previously stored one.
    Raises InsufficientContentError when the document yields too little text.
    """
    raw_text = extract_text_from_file(file_bytes, filename, mime_type)
    text = require_usable_text(raw_text)
    profile = extract_profile(text)
    return merge_profile(previous, profile)
