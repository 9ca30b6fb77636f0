"""Tests for the heuristic résumé field extractors."""

import unittest

from resume_match_ai.cv_pipeline.field_extractors import (
    canonical_skill,
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
    find_skills_in_text,
    is_plausible_name,
    listed_skills,
)
from resume_match_ai.services.text_normalizer import normalize_document
from resume_match_ai.tests.sample_data import SAMPLE_RESUME

TEXT, LINES = normalize_document(SAMPLE_RESUME)


class TestContactFields(unittest.TestCase):

    def test_email_domain_typo_corrected(self):
        self.assertEqual(extract_email(TEXT, LINES), "jane.doe@gmail.com")

    def test_invalid_email_dropped(self):
        self.assertEqual(extract_email("reach me: jane..doe@gmail.com"), "")
        self.assertEqual(extract_email("no address here"), "")

    def test_phone_formats(self):
        self.assertEqual(extract_phone(TEXT, LINES), "(555) 123-4567")
        self.assertEqual(extract_phone("Call +1 555 123 4567 today"), "+1 555 123 4567")
        self.assertEqual(extract_phone("Phone: 555.123.4567"), "555.123.4567")
        self.assertEqual(extract_phone("Graduated 2015"), "")


class TestName(unittest.TestCase):

    def test_all_caps_first_line(self):
        self.assertEqual(extract_name(TEXT, LINES), "Jane Doe")

    def test_first_segment_of_contact_line(self):
        self.assertEqual(extract_name("Maria Garcia | maria@gmail.com | Boston, MA"), "Maria Garcia")

    def test_labelled(self):
        self.assertEqual(extract_name("Curriculum Vitae\nName: John Smith\nPhone: 555-123-4567"), "John Smith")

    def test_from_email(self):
        text = "RESUME\nSoftware developer with many years\nContact: john.smith@gmail.com"
        self.assertEqual(extract_name(text), "John Smith")

    def test_from_linkedin(self):
        text = "PROFILE\nlinkedin.com/in/maria-garcia-1234\nSeasoned professional"
        self.assertEqual(extract_name(text), "Maria Garcia")

    def test_plausibility(self):
        self.assertTrue(is_plausible_name("Mary J. Blige"))
        self.assertFalse(is_plausible_name("Software Engineer"))
        self.assertFalse(is_plausible_name("Professional Experience"))
        self.assertFalse(is_plausible_name("jane doe"))
        self.assertFalse(is_plausible_name("One Two Three Four Five"))


class TestTitleAndProfession(unittest.TestCase):

    def test_title_line(self):
        self.assertEqual(extract_title(TEXT, LINES), "Senior Software Engineer")
        self.assertEqual(extract_profession(TEXT, LINES), "Senior Software Engineer")

    def test_title_not_taken_from_sections(self):
        text = "Jane Doe\nEXPERIENCE\nSenior Developer"
        self.assertEqual(extract_title(text), "")

    def test_profession_keyword(self):
        self.assertEqual(extract_profession("Taught algebra as a high school educator"), "Teacher")

    def test_default_profession(self):
        self.assertEqual(extract_profession("Hello world"), "Professional")


class TestLocationAndPreferences(unittest.TestCase):

    def test_city_state(self):
        self.assertEqual(extract_location(TEXT, LINES), "San Francisco, CA")

    def test_labelled_location(self):
        self.assertEqual(extract_location("Location: Austin, TX | Open to relocation"), "Austin, TX")

    def test_city_country(self):
        self.assertEqual(extract_location("Ali Khan\nLahore, Pakistan"), "Lahore, Pakistan")

    def test_location_is_never_the_name(self):
        self.assertEqual(extract_location("Jane Doe\nLocation: Jane Doe", name="Jane Doe"), "")

    def test_remote(self):
        self.assertTrue(extract_remote_preference(TEXT, LINES))
        self.assertFalse(extract_remote_preference("Office based in Chicago"))

    def test_industries(self):
        self.assertIn("Technology", extract_industries(TEXT, LINES))
        self.assertEqual(extract_industries("Nothing relevant here"), ["General"])

    def test_salary(self):
        text = "Jane Doe\nExpected salary: $120,000 - $140,000"
        self.assertEqual(extract_salary_expectation(text), "$120,000 - $140,000")
        self.assertEqual(extract_salary_expectation(TEXT, LINES), "")


class TestSkills(unittest.TestCase):

    def test_sample_resume_skills(self):
        skills = extract_skills(TEXT, LINES)
        for skill in ("Python", "JavaScript", "Go", "Docker", "Kubernetes", "Jira",
                      "Django", "AWS", "Node.js", "React", "Firebase", "REST API"):
            self.assertIn(skill, skills)
        self.assertNotIn("Java", skills)
        self.assertEqual(len(skills), len({s.lower() for s in skills}))

    def test_whole_document_fallback(self):
        self.assertEqual(extract_skills("Experienced with python and docker"), ["Python", "Docker"])

    def test_ordered_by_first_mention(self):
        self.assertEqual(find_skills_in_text("Kubernetes, then AWS, then k8s again"), ["Kubernetes", "AWS"])

    def test_dotted_names(self):
        self.assertEqual(find_skills_in_text("Built APIs in Node.js"), ["Node.js"])

    def test_canonical_skill(self):
        self.assertEqual(canonical_skill("golang"), "Go")
        self.assertEqual(canonical_skill("reactjs"), "React")
        self.assertEqual(canonical_skill("Snowflake"), "Snowflake")

    def test_listed_skills(self):
        section = "Languages: Python, Go; Jira\n• Problem solving and teamwork"
        self.assertEqual(listed_skills(section), ["Python", "Go", "Jira", "Problem Solving", "Teamwork"])


if __name__ == "__main__":
    unittest.main()
