import dataclasses

import pytest
from fastapi.testclient import TestClient

from resume_parser.api.routes import parse as parse_routes
from resume_parser.core.errors import InvalidInputError
from resume_parser.core.schemas import StructuredRecord
from resume_parser.core.text_parser import parse_text_to_response, parse_text_to_structured_data
from resume_parser.main import app

client = TestClient(app)

SAMPLE_RESUME = """JOHN DOE
Software Engineer
john.doe@email.com | (555) 123-4567
San Francisco, CA

PROFESSIONAL SUMMARY
Experienced software engineer with 5+ years of experience in full-stack development.

WORK EXPERIENCE
Senior Software Engineer
Tech Solutions Inc.
Jan 2020 - Present
• Led development of microservices architecture
• Mentored junior developers

Software Engineer
Global Systems Corp.
Jun 2017 - Dec 2019
• Built REST APIs with Python and Django

EDUCATION
Bachelor of Science in Computer Science
University of California, Berkeley
2013 - 2017

SKILLS
JavaScript (Advanced), Python (Intermediate), React v18, Node.js
"""

MULTI_PAGE_RESUME = """=== PAGE 1 ===
John Doe
john@example.com | (555) 123-4567
New York, NY

SUMMARY
Backend engineer focused on data platforms.

EXPERIENCE
Senior Engineer
Acme Corp
2019 - Present
• Built streaming pipelines
=== PAGE 2 ===
• Cut batch runtimes by 40%

Software Engineer
Beta Systems
2015 - 2019
• Maintained billing services

EDUCATION
BSc Computer Science
Springfield College
2011 - 2015
=== PAGE 3 ===
SKILLS
Python, Go, SQL, Kafka, Spark, Airflow
Docker, Kubernetes, Terraform, AWS, PostgreSQL, Redis
"""


def test_full_resume_data_organization():
    record = parse_text_to_structured_data(SAMPLE_RESUME)

    assert record.contact.first_name == "JOHN"
    assert record.contact.last_name == "DOE"
    assert record.contact.desired_job_title == "Software Engineer"
    assert record.contact.email == "john.doe@email.com"
    assert record.contact.phone == "(555) 123-4567"
    assert record.contact.city == "San Francisco"

    assert record.summary.startswith("Experienced software engineer")

    assert len(record.experiences) == 2
    first = record.experiences[0]
    assert first.job_title == "Senior Software Engineer"
    assert first.company == "Tech Solutions Inc."
    assert (first.start_date, first.end_date) == ("Jan 2020", "Present")
    assert first.bullets == ["Led development of microservices architecture", "Mentored junior developers"]
    assert record.experiences[1].start_date == "Jun 2017"
    assert record.experiences[1].end_date == "Dec 2019"

    assert len(record.education) == 1
    assert record.education[0].degree == "Bachelor of Science in Computer Science"
    assert record.education[0].end_date == "2017"

    assert [s.name for s in record.skills] == ["JavaScript", "Python", "React", "Node.js"]
    assert record.skills[2].level == "v18"


def test_response_metadata():
    resp = parse_text_to_response(SAMPLE_RESUME)

    assert resp.sections_detected == ["summary", "experience", "education", "skills"]
    assert resp.confidence.overall_score == 100
    assert resp.confidence.parse_quality == "high"
    assert not resp.is_multi_page
    assert resp.warnings == []


def test_personal_information_section():
    text = """PERSONAL INFORMATION
Name: Jane Smith
Email: jane.smith@example.com
Phone: (555) 987-6543
Location: Austin, TX

SKILLS
Python, SQL
"""
    record = parse_text_to_structured_data(text)

    assert record.contact.first_name == "Jane"
    assert record.contact.last_name == "Smith"
    assert record.contact.email == "jane.smith@example.com"
    assert record.contact.phone == "(555) 987-6543"
    assert record.contact.city == "Austin"


def test_graduation_year_is_not_a_phone():
    text = """Jane Smith
jane@example.com
Graduation: 2020

EDUCATION
BSc Computer Science
Springfield College
2016 - 2020
"""
    resp = parse_text_to_response(text)

    assert resp.record.contact.phone == ""
    assert resp.confidence.overall_score == 40
    assert resp.confidence.suggestions[0] == "Add a phone number to your contact information"


def test_stacked_experience_template():
    resp = parse_text_to_response("EXPERIENCE\nSenior Developer\nABC Company\nNew York, NY\n2018-2020\nLed development team")
    exp = resp.record.experiences[0]

    assert exp.id == 1
    assert exp.job_title == "Senior Developer"
    assert exp.company == "ABC Company"
    assert exp.location == "New York, NY"
    assert (exp.start_date, exp.end_date) == ("2018", "2020")
    assert exp.bullets == ["Led development team"]
    assert "No email address or phone number found" in resp.warnings


def test_undated_experience_entries():
    record = parse_text_to_structured_data("WORK EXPERIENCE\nSenior Developer\nABC Company\nJunior Developer\nXYZ Corp")

    assert [(e.job_title, e.company) for e in record.experiences] == [
        ("Senior Developer", "ABC Company"),
        ("Junior Developer", "XYZ Corp"),
    ]


def test_role_named_after_a_section():
    """A job called "Education Coordinator" stays in the work history."""
    record = parse_text_to_structured_data("EXPERIENCE\nEducation Coordinator\nSpringfield Schools\n2019 - 2021")

    assert len(record.experiences) == 1
    assert record.experiences[0].job_title == "Education Coordinator"
    assert record.experiences[0].company == "Springfield Schools"
    assert record.education == []


def test_less_common_section_headers():
    text = """Jane Smith
jane@example.com

ABOUT
Backend engineer who likes data.

CAREER
Senior Developer
ABC Company
2018 - 2020

EXPERTISE
Python, SQL

ACHIEVEMENTS
Employee of the Year 2019
"""
    record = parse_text_to_structured_data(text)

    assert record.summary == "Backend engineer who likes data."
    assert [e.job_title for e in record.experiences] == ["Senior Developer"]
    assert [s.name for s in record.skills] == ["Python", "SQL"]
    assert [a.title for a in record.awards] == ["Employee of the Year 2019"]


def test_references_and_hobbies():
    resp = parse_text_to_response("SKILLS\nPython\n\nREFERENCES\nAvailable upon request\n\nHOBBIES\nHiking, Chess")
    record = resp.record

    assert [r.title for r in record.references] == ["Available upon request"]
    assert [(h.id, h.title) for h in record.hobbies] == [(1, "Hiking"), (2, "Chess")]

    r = client.post("/parse", json={"text": "HOBBIES\nHiking, Chess", "include_confidence": False})
    assert [h["title"] for h in r.json()["record"]["hobbies"]] == ["Hiking", "Chess"]


def test_duplicate_skills_removed():
    resp = parse_text_to_response("SKILLS\nPython, python, SQL")

    assert [(s.id, s.name) for s in resp.record.skills] == [(1, "Python"), (2, "SQL")]
    assert "Removed 1 duplicate entries" in resp.warnings


def test_no_headers_warning():
    resp = parse_text_to_response("Jane Smith\njane@example.com")

    assert resp.record.contact.first_name == "Jane"
    assert "No section headers detected" in resp.warnings
    assert resp.sections_detected == []


def test_multi_page_resume():
    resp = parse_text_to_response(MULTI_PAGE_RESUME)

    assert resp.is_multi_page
    assert sorted(resp.pages) == [1, 2, 3]
    assert resp.pages[3].content.startswith("SKILLS")
    assert "Multi-page document detected (3 pages)" in resp.warnings

    record = resp.record
    assert record.contact.first_name == "John"
    assert record.contact.last_name == "Doe"
    assert record.contact.city == "New York"
    assert len(record.skills) == 12
    assert len(record.experiences) == 2
    assert record.experiences[0].bullets == ["Built streaming pipelines", "Cut batch runtimes by 40%"]
    assert resp.confidence.overall_score == 100


def test_empty_input():
    assert parse_text_to_structured_data("") == StructuredRecord()

    resp = parse_text_to_response("   \n  ")
    assert resp.warnings == ["Resume text is empty"]
    assert resp.confidence.overall_score == 0


def test_non_string_input_raises():
    with pytest.raises(InvalidInputError):
        parse_text_to_structured_data(None)
    with pytest.raises(ValueError):
        parse_text_to_response(123)


def test_parse_endpoint_camel_case_record():
    r = client.post("/parse", json={"text": SAMPLE_RESUME})
    assert r.status_code == 200
    data = r.json()

    assert data["record"]["contact"]["firstName"] == "JOHN"
    assert data["record"]["experiences"][0]["jobTitle"] == "Senior Software Engineer"
    assert data["record"]["experiences"][0]["startDate"] == "Jan 2020"
    assert data["confidence"]["overall_score"] == 100
    assert data["sections_detected"] == ["summary", "experience", "education", "skills"]


def test_parse_endpoint_without_confidence():
    r = client.post("/parse", json={"text": SAMPLE_RESUME, "include_confidence": False})
    assert r.status_code == 200
    assert r.json()["confidence"] is None


def test_parse_endpoint_rejects_missing_text():
    assert client.post("/parse", json={"text": None}).status_code == 422
    assert client.post("/parse", json={}).status_code == 422


def test_parse_endpoint_rejects_oversized_text(monkeypatch):
    monkeypatch.setattr(parse_routes, "settings", dataclasses.replace(parse_routes.settings, max_input_chars=10))

    r = client.post("/parse", json={"text": "x" * 11})
    assert r.status_code == 413


def test_parse_file_txt():
    files = {"file": ("resume.txt", SAMPLE_RESUME.encode(), "text/plain")}
    r = client.post("/parse/file", files=files)
    assert r.status_code == 200
    assert r.json()["record"]["contact"]["email"] == "john.doe@email.com"


def test_parse_file_without_confidence():
    files = {"file": ("resume.md", SAMPLE_RESUME.encode(), "text/markdown")}
    r = client.post("/parse/file", files=files, params={"include_confidence": "false"})
    assert r.status_code == 200
    assert r.json()["confidence"] is None


def test_parse_file_rejects_pdf():
    files = {"file": ("resume.pdf", b"%PDF-1.4 fake", "application/pdf")}
    r = client.post("/parse/file", files=files)
    assert r.status_code == 415


def test_parse_file_rejects_empty_upload():
    files = {"file": ("resume.txt", b"", "text/plain")}
    r = client.post("/parse/file", files=files)
    assert r.status_code == 400


def test_root_and_health():
    assert client.get("/").json() == {"service": "resume-parser", "status": "running"}
    assert client.get("/health").json() == {"status": "ok"}
