"""
Field normalization applied to a parsed record before it is returned.

Every helper is idempotent: running it on its own output changes nothing, so
normalize_record(normalize_record(r)) == normalize_record(r).
"""

import re
from typing import Optional

from resume_parser.core.line_classifier import OPEN_ENDED_DATES
from resume_parser.core.schemas import StructuredRecord

VERSION_LEVEL_RE = re.compile(r"^v?\d+(?:\.\d+)*$", re.IGNORECASE)


def _collapse_ws(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def normalize_phone(phone: str) -> str:
    """
    Examples:
      "  (555) 123-4567  " -> "(555) 123-4567"
      "555.123.4567"       -> "(555) 123-4567"
      "+1 555-123-4567"    -> "+1 (555) 123-4567"
      "+44 20 7946 0958"   -> "+44 20 7946 0958"
    """
    t = _collapse_ws(phone)
    if not t:
        return ""
    digits = re.sub(r"\D", "", t)
    if len(digits) == 10 and not t.startswith("+"):
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return t


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def normalize_date(value: str) -> str:
    """
    "present" / "current" / "now" / "ongoing" -> "Present";
    otherwise month words get a leading capital ("jan 2020" -> "Jan 2020").
    """
    t = _collapse_ws(value)
    if t.lower() in OPEN_ENDED_DATES:
        return "Present"
    return re.sub(r"[A-Za-z]+", lambda m: m.group(0)[0].upper() + m.group(0)[1:], t)


def normalize_skill_level(level: Optional[str]) -> Optional[str]:
    if level is None:
        return None
    t = _collapse_ws(level)
    if not t:
        return None
    if VERSION_LEVEL_RE.match(t):
        return t
    return " ".join(w[:1].upper() + w[1:].lower() for w in t.split(" "))


def normalize_record(record: StructuredRecord) -> StructuredRecord:
    """Return a normalized copy; the input record is left untouched."""
    contact = record.contact.model_copy(
        update={
            "first_name": _collapse_ws(record.contact.first_name),
            "last_name": _collapse_ws(record.contact.last_name),
            "desired_job_title": _collapse_ws(record.contact.desired_job_title),
            "phone": normalize_phone(record.contact.phone),
            "email": normalize_email(record.contact.email),
            "city": _collapse_ws(record.contact.city),
            "country": _collapse_ws(record.contact.country),
            "address": _collapse_ws(record.contact.address),
            "post_code": _collapse_ws(record.contact.post_code),
        }
    )

    experiences = [
        exp.model_copy(
            update={
                "job_title": _collapse_ws(exp.job_title),
                "company": _collapse_ws(exp.company),
                "location": _collapse_ws(exp.location),
                "start_date": normalize_date(exp.start_date),
                "end_date": normalize_date(exp.end_date),
                "bullets": list(exp.bullets),
            }
        )
        for exp in record.experiences
    ]

    education = [
        edu.model_copy(
            update={
                "school": _collapse_ws(edu.school),
                "degree": _collapse_ws(edu.degree),
                "location": _collapse_ws(edu.location),
                "start_date": normalize_date(edu.start_date),
                "end_date": normalize_date(edu.end_date),
                "bullets": list(edu.bullets),
            }
        )
        for edu in record.education
    ]

    skills = [
        skill.model_copy(update={"name": _collapse_ws(skill.name), "level": normalize_skill_level(skill.level)})
        for skill in record.skills
    ]
    languages = [
        lang.model_copy(update={"name": _collapse_ws(lang.name), "level": normalize_skill_level(lang.level)})
        for lang in record.languages
    ]

    return record.model_copy(
        update={
            "contact": contact,
            "experiences": experiences,
            "education": education,
            "skills": skills,
            "summary": _collapse_ws(record.summary),
            "languages": languages,
            "certifications": [c.model_copy() for c in record.certifications],
            "awards": [a.model_copy() for a in record.awards],
            "websites": [w.model_copy() for w in record.websites],
            "references": [r.model_copy() for r in record.references],
            "hobbies": [h.model_copy() for h in record.hobbies],
        }
    )
