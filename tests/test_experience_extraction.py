"""Comprehensive tests for work experience extraction."""

from resume_parser.core.experience_parser import (
    cut_date_range,
    extract_experiences,
    new_entry,
    parse_entry_header,
)


def test_stacked_entries_with_blank_line():
    """Title, company, location and dates on their own lines, entries separated by a blank line."""
    content = """Senior Developer
ABC Company
New York, NY
2018-2020
Led development team

Junior Developer
XYZ Corp
Boston, MA
2016-2018
Developed features"""

    exps = extract_experiences(content)

    assert len(exps) == 2
    first, second = exps
    assert first.id == 1
    assert first.job_title == "Senior Developer"
    assert first.company == "ABC Company"
    assert first.location == "New York, NY"
    assert (first.start_date, first.end_date) == ("2018", "2020")
    assert first.description == "Led development team"

    assert second.id == 2
    assert second.job_title == "Junior Developer"
    assert second.company == "XYZ Corp"
    assert second.start_date == "2016"


def test_company_suffixes_with_period():
    content = """Software Engineer
Tech Solutions Inc.
2019-2021

Data Analyst
Global Systems Corp.
2017-2019"""

    exps = extract_experiences(content)

    assert [e.company for e in exps] == ["Tech Solutions Inc.", "Global Systems Corp."]
    assert [e.job_title for e in exps] == ["Software Engineer", "Data Analyst"]


def test_pipe_header_with_dates():
    exps = extract_experiences("Senior Engineer | Acme | 2020 - Present\n• Built the billing API")

    assert len(exps) == 1
    exp = exps[0]
    assert exp.job_title == "Senior Engineer"
    assert exp.company == "Acme"
    assert (exp.start_date, exp.end_date) == ("2020", "Present")
    assert exp.description == "• Built the billing API"


def test_title_at_company_with_location():
    exps = extract_experiences("Software Engineer at Tech Corp, Austin, TX\nJan 2020 - Present")

    exp = exps[0]
    assert exp.job_title == "Software Engineer"
    assert exp.company == "Tech Corp"
    assert exp.location == "Austin, TX"
    assert exp.start_date == "Jan 2020"
    assert exp.end_date == "Present"


def test_company_with_location_first():
    """Company-and-location line above the title line."""
    content = """Acme Corp, Denver, CO
Product Manager
2019 - 2022
• Owned roadmap"""

    exp = extract_experiences(content)[0]

    assert exp.company == "Acme Corp"
    assert exp.location == "Denver, CO"
    assert exp.job_title == "Product Manager"
    assert (exp.start_date, exp.end_date) == ("2019", "2022")


def test_new_entry_without_blank_line():
    content = """Senior Developer
ABC Company
2018-2020
Junior Developer
XYZ Corp
2016-2018"""

    exps = extract_experiences(content)

    assert len(exps) == 2
    assert exps[1].job_title == "Junior Developer"
    assert exps[1].company == "XYZ Corp"


def test_bullet_after_blank_line_continues_previous_entry():
    exps = extract_experiences("Senior Developer\nABC Company\n2018-2020\n\n• Mentored two interns")

    assert len(exps) == 1
    assert exps[0].description == "• Mentored two interns"


def test_dates_only_chunk_is_folded():
    exps = extract_experiences("Senior Developer\nABC Company\n2018-2020\n\n2015-2016")

    assert len(exps) == 1
    assert "2015-2016" in exps[0].description


def test_dates_only_input_gives_no_entries():
    assert extract_experiences("2018-2020") == []
    assert extract_experiences("") == []


def test_single_date_is_start_date():
    exp = extract_experiences("Consultant\nFreelance\n2021")[0]

    assert exp.job_title == "Consultant"
    assert exp.company == "Freelance"
    assert exp.start_date == "2021"
    assert exp.end_date == ""


def test_cut_date_range_returns_rest_of_line():
    entry = new_entry()
    rest = cut_date_range("Senior Engineer | Acme | 2020-Present", entry)

    assert rest == "Senior Engineer | Acme"
    assert entry["start_date"] == "2020"
    assert entry["end_date"] == "Present"


def test_parse_entry_header_colon_form():
    header = parse_entry_header("Acme Corp: Territory Manager: New York")

    assert header["org"] == "Acme Corp"
    assert header["title"] == "Territory Manager"
    assert header["location"] == "New York"


def test_parse_entry_header_plain_line():
    assert parse_entry_header("Led development team") is None
    assert parse_entry_header("• Senior Developer | Acme") is None


def test_undated_jobs_without_blank_lines():
    """A new job title after a complete title + company opens the next entry even without dates."""
    exps = extract_experiences("Senior Developer\nABC Company\nJunior Developer\nXYZ Corp")

    assert [(e.id, e.job_title, e.company) for e in exps] == [
        (1, "Senior Developer", "ABC Company"),
        (2, "Junior Developer", "XYZ Corp"),
    ]
    assert exps[0].description == ""
