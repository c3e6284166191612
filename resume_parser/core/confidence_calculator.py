"""
Completeness scoring for parsed resumes.

The score is a checklist of five structural items, 20 points each:

  contact      : email or phone present (a suggestion still asks for
                 the other one when only one is there)
  experiences  : at least one entry
  education    : at least one entry
  skills       : at least one entry
  summary      : non-empty after trimming

Quality tiers:
  "high"   : score >= 80
  "medium" : score >= 40
  "low"    : otherwise
"""

from typing import Any, Dict, List, Mapping, Union

from resume_parser.core.schemas import ConfidenceReport, StructuredRecord

POINTS_PER_SECTION = 20

SUGGESTIONS = {
    "contact": "Add an email address and a phone number to your contact information",
    "experiences": "Add your work experience",
    "education": "Add your education history",
    "skills": "Add a list of your skills",
    "summary": "Add a professional summary",
}


class ConfidenceCalculator:
    """Central place for all completeness scoring logic."""

    @staticmethod
    def _as_mapping(record: Union[StructuredRecord, Mapping[str, Any], None]) -> Dict[str, Any]:
        if record is None:
            return {}
        if isinstance(record, StructuredRecord):
            return record.model_dump(by_alias=True)
        return dict(record)

    @staticmethod
    def has_contact(data: Dict[str, Any]) -> bool:
        contact = data.get("contact") or {}
        return bool(str(contact.get("email") or "").strip() or str(contact.get("phone") or "").strip())

    @staticmethod
    def weak_contact_suggestion(data: Dict[str, Any]) -> str:
        contact = data.get("contact") or {}
        if not str(contact.get("phone") or "").strip():
            return "Add a phone number to your contact information"
        if not str(contact.get("email") or "").strip():
            return "Add an email address to your contact information"
        return ""

    @staticmethod
    def section_checks(data: Dict[str, Any]) -> Dict[str, bool]:
        return {
            "contact": ConfidenceCalculator.has_contact(data),
            "experiences": bool(data.get("experiences")),
            "education": bool(data.get("education")),
            "skills": bool(data.get("skills")),
            "summary": bool(str(data.get("summary") or "").strip()),
        }

    @staticmethod
    def calculate_overall_parse_quality(score: int) -> str:
        if score >= 80:
            return "high"
        elif score >= 40:
            return "medium"
        else:
            return "low"

    @staticmethod
    def calculate_parsing_confidence(
        record: Union[StructuredRecord, Mapping[str, Any], None],
    ) -> ConfidenceReport:
        """
        Score a record (or a plain, possibly partial mapping shaped like one).

        Examples:
          fully populated record          -> 100, missing_sections == []
          {"contact": {"email": "a@b.c"}} -> 20, four missing sections,
                                             plus a nudge to add a phone number
        """
        data = ConfidenceCalculator._as_mapping(record)
        checks = ConfidenceCalculator.section_checks(data)

        found: List[str] = [name for name, ok in checks.items() if ok]
        missing: List[str] = [name for name, ok in checks.items() if not ok]
        score = POINTS_PER_SECTION * len(found)

        suggestions = [SUGGESTIONS[name] for name in missing]
        weak = ConfidenceCalculator.weak_contact_suggestion(data)
        if checks["contact"] and weak:
            suggestions.insert(0, weak)

        return ConfidenceReport(
            overall_score=score,
            sections_found=found,
            missing_sections=missing,
            suggestions=suggestions,
            parse_quality=ConfidenceCalculator.calculate_overall_parse_quality(score),
        )
