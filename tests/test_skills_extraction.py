"""Comprehensive tests for skills, languages and list-section extraction."""

from resume_parser.core.skills_parser import (
    extract_hobbies,
    extract_languages,
    extract_list_entries,
    extract_skills,
    parse_skill_token,
)


def test_inline_skills_with_levels():
    skills = extract_skills("JavaScript (Advanced), Python (Intermediate), React v18, Node.js")

    assert [(s.name, s.level) for s in skills] == [
        ("JavaScript", "Advanced"),
        ("Python", "Intermediate"),
        ("React", "v18"),
        ("Node.js", None),
    ]
    assert [s.id for s in skills] == [1, 2, 3, 4]


def test_labelled_lines_and_bullets():
    """Sub-labels like "Languages:" are dropped; bullets are stripped."""
    content = "Languages: Python, JavaScript\nFrameworks: Django, FastAPI\n• Docker\n• Git"
    names = [s.name for s in extract_skills(content)]

    assert names == ["Python", "JavaScript", "Django", "FastAPI", "Docker", "Git"]
    assert "Languages" not in names
    assert "Frameworks" not in names


def test_commas_inside_parentheses_do_not_split():
    skills = extract_skills("Python (Django, Flask)")

    assert len(skills) == 1
    assert skills[0].name == "Python (Django, Flask)"


def test_semicolon_and_dot_separators():
    assert [s.name for s in extract_skills("Python; SQL • Docker")] == ["Python", "SQL", "Docker"]


def test_version_level():
    assert parse_skill_token("Python 3.11") == ("Python", "3.11")


def test_dash_level_only_for_proficiency_words():
    assert parse_skill_token("Spanish - Fluent") == ("Spanish", "Fluent")
    assert parse_skill_token("CI - CD") == ("CI - CD", None)


def test_junk_tokens_dropped():
    skills = extract_skills("Python, ---, " + "x" * 120)

    assert [s.name for s in skills] == ["Python"]


def test_languages():
    langs = extract_languages("English (Native), Spanish - Fluent")

    assert [(l.name, l.level) for l in langs] == [("English", "Native"), ("Spanish", "Fluent")]


def test_list_entries():
    entries = extract_list_entries("• AWS Certified Solutions Architect\n\nPMP")

    assert [e.title for e in entries] == ["AWS Certified Solutions Architect", "PMP"]
    assert [e.id for e in entries] == [1, 2]


def test_hobbies():
    hobbies = extract_hobbies("Hiking, Chess\n• Photography")

    assert [h.title for h in hobbies] == ["Hiking", "Chess", "Photography"]
    assert [h.id for h in hobbies] == [1, 2, 3]
