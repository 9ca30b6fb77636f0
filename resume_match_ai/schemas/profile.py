"""Structured candidate profile extracted from an uploaded résumé."""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from resume_match_ai.config import DEFAULT_INDUSTRY, DEFAULT_PROFESSION
from resume_match_ai.utils.date_parser import PRESENT, is_valid_month_year
from resume_match_ai.utils.helpers import (
    clean_skill_list,
    collapse_spaces,
    deduplicate_case_insensitive,
    extract_emails,
)


class ProfileModel(BaseModel):
    """Base for profile records: trimmed strings, camelCase payload aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _trim_strings(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with the camelCase field names API callers depend on."""
        return self.model_dump(by_alias=True)

    def dedupe_key(self) -> Tuple[str, ...]:
        """Case-insensitive identity used to drop repeated records."""
        return tuple(str(v).lower() for v in self.model_dump().values() if isinstance(v, str))


def _clean_date(value: Any, allow_present: bool = False) -> str:
    value = (value or "").strip() if isinstance(value, str) else ""
    if allow_present and value.lower() == PRESENT.lower():
        return PRESENT
    return value if is_valid_month_year(value) else ""


class ExperienceEntry(ProfileModel):
    company: str = Field(default="", description="Employer name")
    position: str = Field(default="", description="Job title held")
    description: str = Field(default="", description="Free-text description joined from non-bullet lines")
    start_date: str = Field(default="", description="MM/YYYY or empty")
    end_date: str = Field(default="", description="MM/YYYY, 'Present' or empty; ignored when current")
    current: bool = Field(default=False, description="True when the entry text mentions 'present'")
    achievements: List[str] = Field(default_factory=list, description="Bullet lines, marker stripped")
    skills: List[str] = Field(default_factory=list, description="Skills mentioned in this entry")

    def dedupe_key(self) -> Tuple[str, ...]:
        return (self.company.lower(), self.position.lower(), self.start_date)

    @field_validator("start_date", mode="before")
    @classmethod
    def _start(cls, value: Any) -> str:
        return _clean_date(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _end(cls, value: Any) -> str:
        return _clean_date(value, allow_present=True)

    @field_validator("achievements", mode="before")
    @classmethod
    def _achievements(cls, value: Any) -> List[str]:
        return deduplicate_case_insensitive(value or [])

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> List[str]:
        return clean_skill_list(value or [])


class EducationEntry(ProfileModel):
    institution: str = Field(default="", description="School, college or university")
    degree: str = Field(default="", description="Degree or qualification")
    field_of_study: str = Field(default="", description="Major / field")
    start_date: str = Field(default="", description="MM/YYYY or empty")
    end_date: str = Field(default="", description="MM/YYYY, 'Present' or empty")
    current: bool = False
    description: str = ""

    def dedupe_key(self) -> Tuple[str, ...]:
        return (self.institution.lower(), self.degree.lower(), self.field_of_study.lower())

    @field_validator("start_date", mode="before")
    @classmethod
    def _start(cls, value: Any) -> str:
        return _clean_date(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _end(cls, value: Any) -> str:
        return _clean_date(value, allow_present=True)


class ProjectEntry(ProfileModel):
    title: str = Field(default="", description="Project name")
    description: str = ""
    technologies: List[str] = Field(default_factory=list, description="Technologies used in the project")
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    link: str = Field(default="", description="Project URL if listed")
    achievements: List[str] = Field(default_factory=list)

    def dedupe_key(self) -> Tuple[str, ...]:
        return (self.title.lower(),)

    @field_validator("start_date", mode="before")
    @classmethod
    def _start(cls, value: Any) -> str:
        return _clean_date(value)

    @field_validator("end_date", mode="before")
    @classmethod
    def _end(cls, value: Any) -> str:
        return _clean_date(value, allow_present=True)

    @field_validator("technologies", mode="before")
    @classmethod
    def _technologies(cls, value: Any) -> List[str]:
        return clean_skill_list(value or [])

    @field_validator("achievements", mode="before")
    @classmethod
    def _achievements(cls, value: Any) -> List[str]:
        return deduplicate_case_insensitive(value or [])


class CertificationEntry(ProfileModel):
    name: str = Field(default="", description="Certification name")
    issuer: str = Field(default="", description="Issuing organization")
    date: str = Field(default="", description="Issue date, MM/YYYY or empty")
    expiry_date: str = Field(default="", description="Expiry date, MM/YYYY or empty")
    description: str = ""

    def dedupe_key(self) -> Tuple[str, ...]:
        return (self.name.lower(), self.issuer.lower())

    @field_validator("date", "expiry_date", mode="before")
    @classmethod
    def _dates(cls, value: Any) -> str:
        return _clean_date(value)


class JobPreferences(ProfileModel):
    title: str = Field(default="", description="Preferred / current job title")
    location: str = Field(default="", description="Location preference")
    remote: bool = Field(default=False, description="Candidate mentions remote work")
    skills: List[str] = Field(default_factory=list, description="Aggregated, validated skills")
    preferred_industries: List[str] = Field(default_factory=list, description="Industry labels")
    salary_expectation: str = Field(default="", description="Salary expectation if stated")

    @field_validator("skills", mode="before")
    @classmethod
    def _skills(cls, value: Any) -> List[str]:
        return clean_skill_list(value or [])

    @field_validator("preferred_industries", mode="before")
    @classmethod
    def _industries(cls, value: Any) -> List[str]:
        return deduplicate_case_insensitive(value or [])


class CandidateProfile(ProfileModel):
    """Structured résumé content. Every field has an empty/default value on failed extraction."""

    name: str = Field(default="", description="Candidate full name")
    email: str = Field(default="", description="Validated email address or empty")
    phone: str = Field(default="", description="Phone number as written, or empty")
    profession: str = Field(default=DEFAULT_PROFESSION, description="Detected profession or placeholder")
    job_preferences: JobPreferences = Field(default_factory=JobPreferences)
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)

    @field_validator("experience", "education", "projects", "certifications", mode="after")
    @classmethod
    def _unique_records(cls, value: List[ProfileModel]) -> List[ProfileModel]:
        seen: set = set()
        unique = []
        for record in value:
            key = record.dedupe_key()
            if key not in seen:
                seen.add(key)
                unique.append(record)
        return unique

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value: Any) -> str:
        if not isinstance(value, str):
            return ""
        found = extract_emails(value.strip())
        return found[0] if len(found) == 1 and found[0] == value.strip() else ""

    @field_validator("profession", mode="before")
    @classmethod
    def _profession(cls, value: Any) -> str:
        cleaned = collapse_spaces(value) if isinstance(value, str) else ""
        return cleaned or DEFAULT_PROFESSION

    def all_skills(self) -> List[str]:
        """Profile skills plus per-entry experience skills and project technologies."""
        skills: List[str] = list(self.job_preferences.skills)
        for entry in self.experience:
            skills.extend(entry.skills)
        for project in self.projects:
            skills.extend(project.technologies)
        return deduplicate_case_insensitive(skills)

    def has_default_profession(self) -> bool:
        return self.profession == DEFAULT_PROFESSION

    def has_default_industries(self) -> bool:
        return self.job_preferences.preferred_industries in ([], [DEFAULT_INDUSTRY])

    def is_empty(self) -> bool:
        return not (self.name or self.email or self.phone or self.all_skills() or self.experience)
