"""
Résumé Match AI – Streamlit frontend.
No business logic in layout; extraction, scoring and generation live in the pipeline packages.
"""

import json
from typing import Optional

import streamlit as st

from resume_match_ai.agents import build_generation_prompt, generate_cover_letter
from resume_match_ai.config import OPENAI_API_KEY, SUPPORTED_EXTENSIONS
from resume_match_ai.cv_pipeline import run_cv_pipeline
from resume_match_ai.errors import GenerationError, InsufficientContentError
from resume_match_ai.matching import score_match
from resume_match_ai.schemas import CandidateProfile, MatchResult, Recommendation

RECOMMENDATION_LABELS = {
    Recommendation.STRONG_MATCH: "Strong match",
    Recommendation.GOOD_MATCH: "Good match",
    Recommendation.PARTIAL_MATCH: "Partial match",
    Recommendation.CONSIDER_WITH_CAUTION: "Consider with caution",
    Recommendation.POOR_MATCH: "Poor match",
    Recommendation.INSUFFICIENT_DATA: "Insufficient data",
}


def _init_state() -> None:
    for key, default in (
        ("profile", None),
        ("match_result", None),
        ("cover_letter", ""),
        ("error", None),
    ):
        if key not in st.session_state:
            st.session_state[key] = default


def _render_profile(profile: CandidateProfile) -> None:
    prefs = profile.job_preferences
    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"### {profile.name or 'Name not detected'}")
        st.caption(f"**Profession:** {profile.profession}")
        if prefs.title:
            st.caption(f"**Title:** {prefs.title}")
        st.caption(f"**Location:** {prefs.location or '-'} · **Remote:** {'Yes' if prefs.remote else 'No'}")
    with col2:
        st.caption(f"**Email:** {profile.email or '-'}")
        st.caption(f"**Phone:** {profile.phone or '-'}")
        st.caption(f"**Industries:** {', '.join(prefs.preferred_industries) or '-'}")
    skills = profile.all_skills()
    if skills:
        st.markdown(" ".join(f"`{s}`" for s in skills[:40]))

    for entry in profile.experience:
        with st.expander(f"{entry.position or 'Role'} · {entry.company or 'Company'}"):
            end = "Present" if entry.current else entry.end_date
            if entry.start_date:
                st.caption(f"{entry.start_date} – {end or '?'}")
            if entry.description:
                st.markdown(entry.description)
            for achievement in entry.achievements:
                st.markdown(f"- {achievement}")
    if profile.education:
        st.markdown("**Education**")
        for edu in profile.education:
            st.markdown(f"- {edu.degree or ''} {edu.field_of_study or ''} · {edu.institution}".strip())
    if profile.projects:
        st.markdown("**Projects**")
        for project in profile.projects:
            tech = f" ({', '.join(project.technologies)})" if project.technologies else ""
            st.markdown(f"- **{project.title}**{tech}")
    if profile.certifications:
        st.markdown("**Certifications**")
        for cert in profile.certifications:
            st.markdown(f"- {cert.name}" + (f" · {cert.issuer}" if cert.issuer else ""))

    st.download_button(
        "Export profile (JSON)",
        data=json.dumps(profile.to_payload(), indent=2).encode("utf-8"),
        file_name="profile.json",
        mime="application/json",
        key="export_profile",
    )


def _render_match(result: MatchResult) -> None:
    col1, col2, col3 = st.columns(3)
    col1.metric("Match score", f"{result.score}/100")
    col2.metric("Skills matched", f"{len(result.matched_skills)}/{len(result.required_skills)}")
    col3.metric("Experience", f"{result.user_experience.total_years} yrs")
    st.markdown(f"**Recommendation:** {RECOMMENDATION_LABELS[result.recommendation]}")
    if result.matched_skills:
        st.markdown("**Matched:** " + " ".join(f"`{s}`" for s in result.matched_skills))
    if result.missing_skills:
        st.markdown("**Missing:** " + " ".join(f"`{s}`" for s in result.missing_skills))


def render_layout() -> None:
    """Streamlit page layout: upload → profile → job description → match → cover letter."""
    st.set_page_config(page_title="Résumé Match AI", layout="wide")
    st.title("Résumé Match AI")
    st.markdown("*Parse your résumé, score it against a job description and draft a cover letter.*")
    st.divider()
    _init_state()

    # ----- Résumé upload -----
    st.subheader("Upload Résumé")
    uploaded = st.file_uploader(
        "Résumé file",
        type=[ext.lstrip(".") for ext in SUPPORTED_EXTENSIONS],
        key="resume_file",
    )
    if st.button("Parse résumé", type="primary", key="parse_btn", disabled=uploaded is None):
        previous: Optional[CandidateProfile] = st.session_state["profile"]
        try:
            with st.spinner("Extracting profile…"):
                st.session_state["profile"] = run_cv_pipeline(
                    uploaded.getvalue(), uploaded.name, uploaded.type, previous=previous
                )
            st.session_state["match_result"] = None
            st.session_state["cover_letter"] = ""
            st.session_state["error"] = None
        except InsufficientContentError as e:
            st.session_state["error"] = f"Could not read enough text from the file. {e}"

    if st.session_state.get("error"):
        st.error(st.session_state["error"])

    profile: Optional[CandidateProfile] = st.session_state["profile"]
    if profile is None:
        st.info("Upload a PDF, DOCX or TXT résumé and click **Parse résumé**.")
        return
    _render_profile(profile)
    st.divider()

    # ----- Job description and match -----
    st.subheader("Job Description")
    job_text = st.text_area("Paste the job description", height=220, key="job_text")
    if st.button("Score match", key="score_btn"):
        st.session_state["match_result"] = score_match(job_text, profile)
        st.session_state["cover_letter"] = ""

    result: Optional[MatchResult] = st.session_state["match_result"]
    if result is None:
        return
    _render_match(result)
    st.divider()

    # ----- Cover letter -----
    st.subheader("Cover Letter")
    if not result.cover_letter_recommended:
        st.warning("The match is weak; a cover letter is not recommended for this job.")
    if not OPENAI_API_KEY:
        st.caption("OPENAI_API_KEY is not set. Add it to your .env file to generate cover letters.")
    if st.button("Generate cover letter", key="letter_btn", disabled=not OPENAI_API_KEY):
        prompt = build_generation_prompt(job_text, profile, result)
        try:
            with st.spinner("Writing cover letter…"):
                st.session_state["cover_letter"] = generate_cover_letter(prompt)
        except GenerationError as e:
            retry_hint = " Please try again in a moment." if e.retryable else ""
            st.error(f"Cover letter generation failed: {e}.{retry_hint}")
    if st.session_state["cover_letter"]:
        st.text_area("Cover letter", value=st.session_state["cover_letter"], height=400, key="letter_out")
        st.caption(f"Truthfulness score: {result.truthfulness_score}/100")


if __name__ == "__main__":
    render_layout()
