"""Field-level merge of a freshly extracted profile over the previously stored one."""

from typing import Optional, TypeVar

from resume_match_ai.schemas.profile import CandidateProfile, JobPreferences

T = TypeVar("T")


def _pick(new: T, old: T) -> T:
    """New value unless it is empty."""
    return new if new else old


def merge_profile(old: Optional[CandidateProfile], new: CandidateProfile) -> CandidateProfile:
    """
    Keep the previous value of every field the new extraction left empty or at its placeholder.
    Non-empty new values always win; lists are replaced, not unioned.
    """
    if old is None:
        return new
    old_prefs, new_prefs = old.job_preferences, new.job_preferences
    industries = (
        old_prefs.preferred_industries
        if new.has_default_industries() and old_prefs.preferred_industries
        else new_prefs.preferred_industries
    )
    preferences = JobPreferences(
        title=_pick(new_prefs.title, old_prefs.title),
        location=_pick(new_prefs.location, old_prefs.location),
        remote=new_prefs.remote or old_prefs.remote,
        skills=_pick(new_prefs.skills, old_prefs.skills),
        preferred_industries=industries,
        salary_expectation=_pick(new_prefs.salary_expectation, old_prefs.salary_expectation),
    )
    return CandidateProfile(
        name=_pick(new.name, old.name),
        email=_pick(new.email, old.email),
        phone=_pick(new.phone, old.phone),
        profession=old.profession if new.has_default_profession() else new.profession,
        job_preferences=preferences,
        experience=_pick(new.experience, old.experience),
        education=_pick(new.education, old.education),
        projects=_pick(new.projects, old.projects),
        certifications=_pick(new.certifications, old.certifications),
    )
