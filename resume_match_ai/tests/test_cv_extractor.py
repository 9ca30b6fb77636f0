"""End-to-end tests for résumé profile extraction and the upload pipeline."""

import unittest
from unittest.mock import patch

from resume_match_ai.cv_pipeline import extract_profile, merge_profile, run_cv_pipeline
from resume_match_ai.errors import InsufficientContentError
from resume_match_ai.schemas import CandidateProfile, ExperienceEntry, JobPreferences
from resume_match_ai.tests.sample_data import SAMPLE_RESUME


class TestExtractProfile(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.profile = extract_profile(SAMPLE_RESUME)

    def test_contact_fields(self):
        self.assertEqual(self.profile.name, "Jane Doe")
        self.assertEqual(self.profile.email, "jane.doe@gmail.com")
        self.assertEqual(self.profile.phone, "(555) 123-4567")
        self.assertEqual(self.profile.profession, "Senior Software Engineer")

    def test_preferences(self):
        prefs = self.profile.job_preferences
        self.assertEqual(prefs.title, "Senior Software Engineer")
        self.assertEqual(prefs.location, "San Francisco, CA")
        self.assertTrue(prefs.remote)
        self.assertIn("Technology", prefs.preferred_industries)
        self.assertIn("Kubernetes", prefs.skills)

    def test_records(self):
        self.assertEqual([e.company for e in self.profile.experience], ["Acme Corp", "Globex"])
        self.assertEqual(self.profile.education[0].institution, "Stanford University")
        self.assertEqual(self.profile.education[0].field_of_study, "Computer Science")
        self.assertEqual(self.profile.projects[0].title, "Expense Tracker")
        self.assertEqual(self.profile.certifications[0].issuer, "Amazon Web Services")

    def test_payload_round_trips_through_model(self):
        payload = self.profile.to_payload()
        self.assertEqual(CandidateProfile(**payload), self.profile)

    def test_labelled_skills_line_inside_experience(self):
        text = "\n".join([
            "Jane Doe",
            "jane.doe@example.com",
            "EXPERIENCE",
            "Acme Corp - Developer",
            "Jan 2019 - Dec 2020",
            "- Built billing APIs",
            "Skills: Python, Docker",
            "Globex - Senior Engineer",
            "Jan 2021 - Present",
            "- Built services in Go and Kubernetes",
            "EDUCATION",
            "Boston University",
            "SKILLS",
            "Java, Rust",
        ])
        profile = extract_profile(text)
        self.assertEqual([e.company for e in profile.experience], ["Acme Corp", "Globex"])
        self.assertIn("Java", profile.job_preferences.skills)
        self.assertIn("Rust", profile.job_preferences.skills)

    def test_empty_text(self):
        profile = extract_profile("")
        self.assertEqual(profile, CandidateProfile())

    def test_plain_text_without_sections(self):
        profile = extract_profile("Experienced with python and docker, happy to work remotely")
        self.assertEqual(profile.job_preferences.skills, ["Python", "Docker"])
        self.assertEqual(profile.experience, [])
        self.assertEqual(profile.job_preferences.preferred_industries, ["General"])

    def test_never_raises(self):
        with patch("resume_match_ai.cv_pipeline.cv_extractor.find_sections", side_effect=RuntimeError("boom")):
            profile = extract_profile(SAMPLE_RESUME)
        self.assertEqual(profile, CandidateProfile())


class TestRunCvPipeline(unittest.TestCase):

    def test_text_upload(self):
        profile = run_cv_pipeline(SAMPLE_RESUME.encode("utf-8"), "resume.txt", "text/plain")
        self.assertEqual(profile.name, "Jane Doe")
        self.assertEqual(len(profile.experience), 2)

    def test_insufficient_content(self):
        with self.assertRaises(InsufficientContentError):
            run_cv_pipeline(b"Jane Doe", "resume.txt")

    def test_unsupported_file_is_insufficient(self):
        with self.assertRaises(InsufficientContentError):
            run_cv_pipeline(SAMPLE_RESUME.encode("utf-8"), "resume.png", "image/png")

    def test_merges_over_previous_profile(self):
        previous = CandidateProfile(
            name="Old Name",
            profession="Data Analyst",
            job_preferences=JobPreferences(salary_expectation="$100k"),
        )
        text = "Experienced with python and docker on many data heavy projects for clients"
        profile = run_cv_pipeline(text.encode("utf-8"), "notes.txt", previous=previous)
        self.assertEqual(profile.name, "Old Name")
        self.assertEqual(profile.profession, "Data Analyst")
        self.assertEqual(profile.job_preferences.salary_expectation, "$100k")
        self.assertEqual(profile.job_preferences.skills, ["Python", "Docker"])


class TestMergeProfile(unittest.TestCase):

    def test_no_previous(self):
        new = CandidateProfile(name="Jane Doe")
        self.assertIs(merge_profile(None, new), new)

    def test_new_values_win(self):
        old = CandidateProfile(name="Old", email="old@gmail.com", job_preferences=JobPreferences(skills=["Java"]))
        new = CandidateProfile(name="New", job_preferences=JobPreferences(skills=["Python"]))
        merged = merge_profile(old, new)
        self.assertEqual(merged.name, "New")
        self.assertEqual(merged.email, "old@gmail.com")
        self.assertEqual(merged.job_preferences.skills, ["Python"])

    def test_lists_replaced_not_unioned(self):
        old = CandidateProfile(experience=[ExperienceEntry(company="Acme"), ExperienceEntry(company="Globex")])
        new = CandidateProfile(experience=[ExperienceEntry(company="Initech")])
        self.assertEqual([e.company for e in merge_profile(old, new).experience], ["Initech"])

    def test_empty_list_keeps_previous(self):
        old = CandidateProfile(experience=[ExperienceEntry(company="Acme")])
        self.assertEqual(merge_profile(old, CandidateProfile()).experience, old.experience)

    def test_placeholder_profession_and_industries(self):
        old = CandidateProfile(
            profession="Nurse",
            job_preferences=JobPreferences(preferred_industries=["Healthcare"], remote=True),
        )
        new = CandidateProfile(job_preferences=JobPreferences(preferred_industries=["General"]))
        merged = merge_profile(old, new)
        self.assertEqual(merged.profession, "Nurse")
        self.assertEqual(merged.job_preferences.preferred_industries, ["Healthcare"])
        self.assertTrue(merged.job_preferences.remote)


if __name__ == "__main__":
    unittest.main()
