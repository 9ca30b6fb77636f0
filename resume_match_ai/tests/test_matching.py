"""Tests for skill similarity, experience duration and match scoring."""

import unittest
from datetime import date

from resume_match_ai.cv_pipeline import extract_profile
from resume_match_ai.matching import (
    compute_experience_duration,
    compute_score,
    derive_recommendation,
    extract_required_skills,
    match_skills,
    parse_job_requirement,
    score_match,
    skill_similarity,
)
from resume_match_ai.schemas import (
    CandidateProfile,
    ExperienceEntry,
    JobPreferences,
    JobRequirement,
    Recommendation,
)
from resume_match_ai.tests.sample_data import SAMPLE_JOB_DESCRIPTION, SAMPLE_RESUME

NOW = date(2024, 1, 1)


class TestSkillSimilarity(unittest.TestCase):

    def test_equal_ignoring_case(self):
        self.assertEqual(skill_similarity("Python", "python"), 1.0)

    def test_edit_distance(self):
        self.assertAlmostEqual(skill_similarity("Node.js", "nodejs"), 6 / 7)

    def test_containment_uses_length_ratio(self):
        self.assertAlmostEqual(skill_similarity("Java", "JavaScript"), 0.4)
        self.assertAlmostEqual(skill_similarity("React Native", "React"), 5 / 12)

    def test_empty(self):
        self.assertEqual(skill_similarity("", "Python"), 0.0)


class TestMatchSkills(unittest.TestCase):

    def test_threshold(self):
        outcome = match_skills(["Node.js", "Java", "SQL"], ["nodejs", "JavaScript", "PostgreSQL"])
        self.assertEqual(outcome.matched, ["Node.js"])
        self.assertEqual(outcome.missing, ["Java", "SQL"])
        self.assertEqual(outcome.scores["Node.js"], 0.8571)
        self.assertEqual(outcome.best_candidates, {"Node.js": "nodejs"})

    def test_custom_threshold(self):
        outcome = match_skills(["Java"], ["JavaScript"], threshold=0.4)
        self.assertEqual(outcome.matched, ["Java"])

    def test_required_deduplicated(self):
        outcome = match_skills(["AWS", "aws"], ["AWS"])
        self.assertEqual(outcome.matched, ["AWS"])


class TestExperienceDuration(unittest.TestCase):

    def test_closed_and_current_entries(self):
        entries = [
            ExperienceEntry(company="A", start_date="01/2020", end_date="06/2020"),
            ExperienceEntry(company="B", start_date="01/2023", end_date="Present", current=True),
        ]
        experience = compute_experience_duration(entries, now=NOW)
        self.assertEqual(experience.total_months, 5 + 12)
        self.assertEqual(experience.total_years, 1)
        self.assertEqual(experience.position_count, 2)
        self.assertTrue(experience.has_detailed_experience)

    def test_current_overrides_end_date(self):
        entry = ExperienceEntry(company="A", start_date="01/2022", end_date="06/2022", current=True)
        self.assertEqual(compute_experience_duration([entry], now=NOW).total_months, 24)

    def test_unparseable_and_reversed_skipped(self):
        entries = [
            ExperienceEntry(company="A"),
            ExperienceEntry(company="B", start_date="06/2021", end_date="01/2020"),
        ]
        experience = compute_experience_duration(entries, now=NOW)
        self.assertEqual(experience.total_months, 0)
        self.assertEqual(experience.position_count, 2)
        self.assertTrue(experience.has_detailed_experience)

    def test_no_entries(self):
        experience = compute_experience_duration([], now=NOW)
        self.assertEqual((experience.total_years, experience.position_count), (0, 0))
        self.assertFalse(experience.has_detailed_experience)


class TestComputeScore(unittest.TestCase):

    def test_ratio_plus_bonus(self):
        self.assertEqual(compute_score(8, 10, 3), (86, 0.8))

    def test_no_required_skills(self):
        self.assertEqual(compute_score(0, 0, 0), (100, 1.0))

    def test_rounds_half_up(self):
        self.assertEqual(compute_score(1, 8, 0)[0], 13)
        self.assertEqual(compute_score(1, 3, 0)[0], 33)
        self.assertEqual(compute_score(2, 3, 0)[0], 67)

    def test_bonus_capped(self):
        self.assertEqual(compute_score(0, 1, 30)[0], 20)
        self.assertEqual(compute_score(10, 10, 30)[0], 100)

    def test_overridable_constants(self):
        self.assertEqual(compute_score(1, 2, 5, bonus_per_year=1, bonus_cap=3)[0], 53)


class TestRecommendation(unittest.TestCase):

    def test_bands(self):
        self.assertEqual(derive_recommendation(86, 0.8), Recommendation.STRONG_MATCH)
        self.assertEqual(derive_recommendation(90, 0.7), Recommendation.GOOD_MATCH)
        self.assertEqual(derive_recommendation(70, 0.5), Recommendation.PARTIAL_MATCH)
        self.assertEqual(derive_recommendation(30, 0.1), Recommendation.CONSIDER_WITH_CAUTION)
        self.assertEqual(derive_recommendation(20, 0.0), Recommendation.POOR_MATCH)


class TestRequiredSkills(unittest.TestCase):

    def test_taxonomy_and_labelled_items(self):
        job = "Backend role using Python and Docker.\nRequired skills: Kafka, Airflow"
        self.assertEqual(extract_required_skills(job), ["Python", "Docker", "Kafka", "Airflow"])

    def test_blank(self):
        self.assertEqual(extract_required_skills("   "), [])

    def test_job_requirement_model(self):
        requirement = parse_job_requirement("Must have: Kafka, kafka, Terraform")
        self.assertIsInstance(requirement, JobRequirement)
        self.assertEqual(requirement.required_skills, ["Terraform", "Kafka"])
        self.assertEqual(requirement.to_payload(), {"requiredSkills": ["Terraform", "Kafka"]})

    def test_blank_job_requirement(self):
        self.assertEqual(parse_job_requirement(""), JobRequirement())


class TestScoreMatch(unittest.TestCase):

    def test_sample_resume_against_job(self):
        profile = extract_profile(SAMPLE_RESUME)
        result = score_match(SAMPLE_JOB_DESCRIPTION, profile, now=NOW)
        self.assertEqual(result.required_skills, ["Python", "Django", "AWS", "Kubernetes", "Rust"])
        self.assertEqual(result.matched_skills, ["Python", "Django", "AWS", "Kubernetes"])
        self.assertEqual(result.missing_skills, ["Rust"])
        self.assertEqual(result.match_ratio, 0.8)
        self.assertEqual(result.user_experience.total_months, 107)
        self.assertEqual(result.user_experience.total_years, 8)
        self.assertEqual(result.score, 96)
        self.assertEqual(result.recommendation, Recommendation.STRONG_MATCH)
        self.assertEqual(result.truthfulness_score, 100)
        self.assertTrue(result.cover_letter_recommended)

    def test_job_without_skills(self):
        result = score_match("We are hiring a friendly person", CandidateProfile(), now=NOW)
        self.assertEqual(result.score, 100)
        self.assertEqual(result.recommendation, Recommendation.STRONG_MATCH)

    def test_empty_profile_is_insufficient(self):
        result = score_match("Python and SQL", CandidateProfile(), now=NOW)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.recommendation, Recommendation.INSUFFICIENT_DATA)
        self.assertEqual(result.missing_skills, ["Python", "SQL"])

    def test_blank_job_description(self):
        result = score_match("  ", extract_profile(SAMPLE_RESUME), now=NOW)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.recommendation, Recommendation.INSUFFICIENT_DATA)
        self.assertEqual(result.user_experience.position_count, 2)

    def test_fuzzy_match_counts(self):
        profile = CandidateProfile(job_preferences=JobPreferences(skills=["nodejs", "Postgres"]))
        result = score_match("Looking for Node.js engineers", profile, now=NOW)
        self.assertEqual(result.matched_skills, ["Node.js"])
        self.assertEqual(result.score, 100)

    def test_poor_match(self):
        profile = CandidateProfile(job_preferences=JobPreferences(skills=["Excel"]))
        result = score_match("Rust, Go, Kubernetes, Terraform", profile, now=NOW)
        self.assertEqual(result.score, 0)
        self.assertEqual(result.recommendation, Recommendation.POOR_MATCH)
        self.assertFalse(result.cover_letter_recommended)


if __name__ == "__main__":
    unittest.main()
