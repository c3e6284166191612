"""
Education parsing module for detecting and extracting education entries from resumes.

Provides deterministic, rule-based classification of the lines of an education
block into school, degree, location and dates. Degree and institution keywords
are strong signals; when neither fires, the first unknown line is taken as the
degree and the next as the school.
"""

import re
import logging
from typing import Dict, List

from resume_parser.core.experience_parser import PIPE_SPLIT_RE, cut_date_range, group_entries
from resume_parser.core.line_classifier import is_bullet, is_location_line, is_single_date, split_location
from resume_parser.core.schemas import Education

logger = logging.getLogger(__name__)


# ===== DEGREE KEYWORDS (Strong Signal) =====
# Matched as whole words, so "ma" never fires inside "manager"

DEGREE_KEYWORDS = {
    "bachelor",
    "bachelor of",
    "bachelor's",
    "master",
    "master of",
    "master's",
    "associate of",
    "associate's",
    "associate degree",
    "b.s.",
    "b.a.",
    "bsc",
    "b.sc.",
    "msc",
    "m.sc.",
    "m.s.",
    "m.a.",
    "mba",
    "m.b.a.",
    "ph.d.",
    "phd",
    "doctor of",
    "doctorate",
    "doctoral",
    "graduate degree",
    "postgraduate",
    "diploma",
    "certificate",
    "ged",
}

# ===== INSTITUTION KEYWORDS =====

INSTITUTION_KEYWORDS = {
    "university",
    "college",
    "institute",
    "institute of",
    "school",
    "academy",
    "high school",
    "secondary school",
    "prep school",
    "polytechnic",
    "state university",
    "community college",
    "trade school",
    "conservatory",
}

# ===== EDUCATION-SPECIFIC DETAIL KEYWORDS =====

EDUCATION_DETAIL_KEYWORDS = {
    "major:",
    "minor:",
    "focus in",
    "concentration",
    "focus:",
    "honors:",
    "dean's list",
    "cum laude",
    "magna cum laude",
    "summa cum laude",
    "gpa",
    "scholarship",
    "award:",
    "relevant coursework",
    "coursework:",
    "thesis",
}

# "Diploma in Nursing", "Licence of Law"
DEGREE_SHAPE_RE = re.compile(r"^[A-Z][A-Za-z.']*(?:\s+[A-Za-z.']+){0,3}\s+(?:in|of)\s+[A-Z]")


def _contains_keyword(text: str, keywords) -> bool:
    text_lower = text.lower()
    for keyword in keywords:
        if re.search(rf"(?<![a-z]){re.escape(keyword)}(?![a-z])", text_lower):
            return True
    return False


def has_degree_keyword(text: str) -> bool:
    """
    Check if text contains degree keywords.
    This is a STRONG signal that a line names the degree.

    Args:
        text: Text to check

    Returns:
        True if degree keyword found (case-insensitive, whole words)
    """
    return _contains_keyword(text, DEGREE_KEYWORDS)


def is_institution_keyword(text: str) -> bool:
    """
    Check if text contains institution-specific keywords.

    Args:
        text: Text to check

    Returns:
        True if institution keyword found
    """
    return _contains_keyword(text, INSTITUTION_KEYWORDS)


def is_education_detail(text: str) -> bool:
    """
    Check if a line is an education detail (GPA, honors, coursework)
    rather than a school or degree.

    Args:
        text: Line to check

    Returns:
        True if this is an education detail line
    """
    text_lower = text.lower()
    return any(keyword in text_lower for keyword in EDUCATION_DETAIL_KEYWORDS)


def looks_like_degree(text: str) -> bool:
    """
    Examples:
        "Bachelor of Science in Computer Science" -> True
        "MBA"                                     -> True
        "Diploma in Nursing"                      -> True
        "University of Technology"                -> False (institution)
    """
    if has_degree_keyword(text):
        return True
    return bool(DEGREE_SHAPE_RE.match(text.strip())) and not is_institution_keyword(text)


def new_education_entry() -> Dict[str, any]:
    return {
        "school": "",
        "degree": "",
        "location": "",
        "start_date": "",
        "end_date": "",
        "description": [],
        "lines": [],
        "degree_is_guess": False,
    }


def _take_part(entry: Dict[str, any], part: str) -> bool:
    """Try to place one line (or pipe-separated piece) into a field. False means leftover."""
    if looks_like_degree(part) and not (is_institution_keyword(part) and not has_degree_keyword(part)):
        if not entry["degree"]:
            entry["degree"] = part
            return True
        if entry["degree_is_guess"]:
            # the first unknown line was the school after all
            if not entry["school"]:
                entry["school"] = entry["degree"]
            entry["degree"] = part
            entry["degree_is_guess"] = False
            return True
        return False

    if is_institution_keyword(part):
        if entry["school"]:
            return False
        loc = split_location(part)
        if loc and loc.prefix:
            entry["school"] = loc.prefix
            entry["location"] = entry["location"] or loc.text
        else:
            entry["school"] = part
        return True

    if is_location_line(part):
        if entry["location"]:
            return False
        entry["location"] = split_location(part).text
        return True

    loc = split_location(part)
    if loc and loc.prefix and not entry["school"]:
        entry["school"] = loc.prefix
        entry["location"] = entry["location"] or loc.text
        return True

    if not entry["degree"] and not entry["school"]:
        entry["degree"] = part
        entry["degree_is_guess"] = True
        return True
    if not entry["school"]:
        entry["school"] = part
        return True
    if not entry["degree"]:
        entry["degree"] = part
        return True
    return False


def _assign_education_line(entry: Dict[str, any], text: str) -> None:
    entry["lines"].append(text)
    t = text.strip()

    if is_bullet(t):
        entry["description"].append(t)
        return

    # A lone year under a degree is the graduation date
    t = cut_date_range(t, entry, single_date_field="end_date")
    if not t:
        return

    if is_education_detail(t):
        entry["description"].append(t)
        return

    parts = [p for p in PIPE_SPLIT_RE.split(t) if p] if "|" in t else [t]
    leftovers = []
    for part in parts:
        if is_single_date(part) and not entry["end_date"]:
            entry["end_date"] = part
        elif not _take_part(entry, part):
            leftovers.append(part)
    if leftovers:
        entry["description"].append(" | ".join(leftovers))


def _starts_new_education(entry: Dict[str, any], text: str) -> bool:
    if not (entry["start_date"] or entry["end_date"]):
        return False
    t = text.strip()
    if is_bullet(t) or is_education_detail(t):
        return False
    if entry["degree"] and not entry["degree_is_guess"] and has_degree_keyword(t):
        return True
    return bool(entry["school"] and is_institution_keyword(t))


def extract_education(content: str) -> List[Education]:
    """
    Example:
      "Bachelor of Science in Computer Science\\nUniversity of Technology\\n2016-2020"
      -> [Education(id=1, degree="Bachelor of Science in Computer Science",
                    school="University of Technology", start_date="2016", end_date="2020")]
    """
    drafts = group_entries(
        content,
        assign=_assign_education_line,
        starts_new=_starts_new_education,
        has_identity=lambda e: bool(e["school"] or e["degree"]),
        make_entry=new_education_entry,
    )

    education: List[Education] = []
    for draft in drafts:
        education.append(
            Education(
                id=len(education) + 1,
                school=draft["school"],
                degree=draft["degree"],
                location=draft["location"],
                start_date=draft["start_date"],
                end_date=draft["end_date"],
                description="\n".join(draft["description"]),
            )
        )
    logger.debug(f"Extracted {len(education)} education entries")
    return education
