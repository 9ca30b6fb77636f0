"""Structured prompt for the cover-letter writer, built from verified profile data only."""

from typing import List

from resume_match_ai.schemas.generation import GenerationPrompt
from resume_match_ai.schemas.match_result import MatchResult
from resume_match_ai.schemas.profile import CandidateProfile

# Job description text passed to the writer is capped
MAX_JOB_DESCRIPTION_CHARS = 6000
MAX_ACHIEVEMENTS_PER_ENTRY = 3

COVER_LETTER_SYSTEM_PROMPT = """You are a professional cover letter writer.
Write a tailored cover letter for the candidate and job below.
Rules:
- Use only facts present in the candidate profile. Never invent employers, titles, dates, degrees or skills.
- Lead with the matched skills and the most relevant experience.
- Do not claim any of the missing skills; you may express willingness to learn them.
- 250 to 400 words, three to five paragraphs, plain text, no markdown, no placeholders like [Company].
- Address the hiring manager generically when no name is given.
- Close with the candidate's name."""


def _experience_lines(profile: CandidateProfile) -> List[str]:
    lines = []
    for entry in profile.experience:
        role = " at ".join(p for p in (entry.position, entry.company) if p)
        end = "Present" if entry.current else entry.end_date
        dates = f" ({entry.start_date} - {end})" if entry.start_date else ""
        lines.append(f"- {role}{dates}")
        for achievement in entry.achievements[:MAX_ACHIEVEMENTS_PER_ENTRY]:
            lines.append(f"  * {achievement}")
        if entry.description and not entry.achievements:
            lines.append(f"  * {entry.description}")
    return lines


def _education_lines(profile: CandidateProfile) -> List[str]:
    lines = []
    for entry in profile.education:
        degree = " in ".join(p for p in (entry.degree, entry.field_of_study) if p)
        lines.append("- " + ", ".join(p for p in (degree, entry.institution) if p))
    return lines


def _project_lines(profile: CandidateProfile) -> List[str]:
    lines = []
    for project in profile.projects:
        tech = f" [{', '.join(project.technologies)}]" if project.technologies else ""
        summary = f": {project.description}" if project.description else ""
        lines.append(f"- {project.title}{tech}{summary}")
    return lines


def summarize_profile(profile: CandidateProfile) -> str:
    """Plain-text candidate summary embedded in the user prompt."""
    prefs = profile.job_preferences
    parts = [
        f"Name: {profile.name or 'Not provided'}",
        f"Profession: {profile.profession}",
    ]
    if prefs.title:
        parts.append(f"Current title: {prefs.title}")
    if prefs.location:
        parts.append(f"Location: {prefs.location}")
    if profile.email:
        parts.append(f"Email: {profile.email}")
    if profile.phone:
        parts.append(f"Phone: {profile.phone}")
    skills = profile.all_skills()
    if skills:
        parts.append("Skills: " + ", ".join(skills))
    for title, lines in (
        ("Experience", _experience_lines(profile)),
        ("Education", _education_lines(profile)),
        ("Projects", _project_lines(profile)),
        ("Certifications", [f"- {c.name}" + (f" ({c.issuer})" if c.issuer else "") for c in profile.certifications]),
    ):
        if lines:
            parts.append(f"{title}:\n" + "\n".join(lines))
    return "\n".join(parts)


def _match_summary(match_result: MatchResult) -> str:
    experience = match_result.user_experience
    return "\n".join(
        [
            f"Match score: {match_result.score}/100 ({match_result.recommendation.value})",
            f"Matched skills: {', '.join(match_result.matched_skills) or 'none'}",
            f"Missing skills: {', '.join(match_result.missing_skills) or 'none'}",
            f"Total experience: {experience.total_years} years across {experience.position_count} positions",
        ]
    )


def build_generation_prompt(
    job_description_text: str, profile: CandidateProfile, match_result: MatchResult
) -> GenerationPrompt:
    job_text = (job_description_text or "").strip()[:MAX_JOB_DESCRIPTION_CHARS]
    user_prompt = (
        f"Job description:\n{job_text}\n\n"
        f"Candidate profile:\n{summarize_profile(profile)}\n\n"
        f"Match analysis:\n{_match_summary(match_result)}\n\n"
        "Write the cover letter now."
    )
    return GenerationPrompt(system_prompt=COVER_LETTER_SYSTEM_PROMPT, user_prompt=user_prompt)
