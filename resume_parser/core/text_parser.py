import logging
from typing import List, Tuple

from resume_parser.core.bullet_splitter import split_into_bullets
from resume_parser.core.confidence_calculator import ConfidenceCalculator
from resume_parser.core.contact_parser import extract_contact, extract_websites
from resume_parser.core.deduplicator import deduplicate
from resume_parser.core.education_parser import extract_education
from resume_parser.core.errors import InvalidInputError
from resume_parser.core.experience_parser import extract_experiences
from resume_parser.core.normalizer import normalize_record
from resume_parser.core.schemas import ConfidenceReport, ParseResponse, SegmentedDocument, StructuredRecord
from resume_parser.core.section_segmenter import segment, split_lines
from resume_parser.core.skills_parser import extract_hobbies, extract_languages, extract_list_entries, extract_skills

logger = logging.getLogger(__name__)


def _check_input(text) -> None:
    if text is None or not isinstance(text, str):
        raise InvalidInputError(f"Resume text must be a string, got {type(text).__name__}.")


def _renumber(items: List, with_bullets: bool = False) -> List:
    renumbered = []
    for i, item in enumerate(items, start=1):
        update = {"id": i}
        if with_bullets:
            update["bullets"] = split_into_bullets(item.description)
        renumbered.append(item.model_copy(update=update))
    return renumbered


def _parse(text: str) -> Tuple[StructuredRecord, SegmentedDocument, int]:
    """Run the full pipeline; also hands back the segmentation and the number of dropped duplicates."""
    doc = segment(text)
    all_lines = split_lines(text)

    def span_contents(kind: str) -> List[str]:
        return [span.content for span in doc.spans_of(kind)]

    # --- 1) Extract ---
    contact_lines = list(doc.preamble)
    for span in doc.spans_of("contact"):
        contact_lines.extend(span.content_lines)

    experiences = [exp for content in span_contents("experience") for exp in extract_experiences(content)]
    education = [edu for content in span_contents("education") for edu in extract_education(content)]
    skills = [skill for content in span_contents("skills") for skill in extract_skills(content)]
    languages = [lang for content in span_contents("languages") for lang in extract_languages(content)]
    certifications = [c for content in span_contents("certifications") for c in extract_list_entries(content)]
    awards = [a for content in span_contents("awards") for a in extract_list_entries(content)]
    references = [r for content in span_contents("references") for r in extract_list_entries(content)]
    hobbies = [h for content in span_contents("interests") for h in extract_hobbies(content)]

    summary = ""
    summary_spans = doc.spans_of("summary")
    if summary_spans:
        summary = " ".join(ln.strip() for ln in summary_spans[-1].content_lines if ln.strip())

    record = StructuredRecord(
        contact=extract_contact(contact_lines, fallback_lines=all_lines),
        experiences=experiences,
        education=education,
        skills=skills,
        summary=summary,
        languages=languages,
        certifications=_renumber(certifications),
        awards=_renumber(awards),
        websites=extract_websites(all_lines),
        references=_renumber(references),
        hobbies=_renumber(hobbies),
    )

    # --- 2) Normalize, then dedup on normalized values ---
    record = normalize_record(record)

    before = len(record.experiences) + len(record.education) + len(record.skills) + len(record.languages)
    record = record.model_copy(
        update={
            "experiences": _renumber(deduplicate(record.experiences), with_bullets=True),
            "education": _renumber(deduplicate(record.education), with_bullets=True),
            "skills": _renumber(deduplicate(record.skills)),
            "languages": _renumber(deduplicate(record.languages)),
        }
    )
    after = len(record.experiences) + len(record.education) + len(record.skills) + len(record.languages)

    logger.debug(
        f"Parsed resume: {len(record.experiences)} experiences, {len(record.education)} education, "
        f"{len(record.skills)} skills, {before - after} duplicates dropped"
    )
    return record, doc, before - after


def parse_text_to_structured_data(text: str) -> StructuredRecord:
    """
    Parse plain resume text into a structured record.

    Empty or whitespace-only text gives an empty record. Anything that is not a
    string raises InvalidInputError.
    """
    _check_input(text)
    if not text.strip():
        return StructuredRecord()
    record, _doc, _dropped = _parse(text)
    return record


def calculate_parsing_confidence(record) -> ConfidenceReport:
    """Score a record on its own, e.g. after a user edited the parsed result."""
    return ConfidenceCalculator.calculate_parsing_confidence(record)


def parse_text_to_response(text: str, include_confidence: bool = True) -> ParseResponse:
    _check_input(text)
    if not text.strip():
        record = StructuredRecord()
        return ParseResponse(
            record=record,
            confidence=calculate_parsing_confidence(record) if include_confidence else None,
            warnings=["Resume text is empty"],
        )

    record, doc, dropped = _parse(text)

    sections_detected: List[str] = []
    for span in doc.spans:
        if span.kind not in sections_detected:
            sections_detected.append(span.kind)

    warnings: List[str] = []
    if not doc.spans:
        warnings.append("No section headers detected")
    if doc.is_multi_page:
        warnings.append(f"Multi-page document detected ({len(doc.pages)} pages)")
    if dropped:
        warnings.append(f"Removed {dropped} duplicate entries")
    if not record.contact.email and not record.contact.phone:
        warnings.append("No email address or phone number found")

    return ParseResponse(
        record=record,
        confidence=calculate_parsing_confidence(record) if include_confidence else None,
        sections_detected=sections_detected,
        is_multi_page=doc.is_multi_page,
        pages=doc.pages,
        warnings=warnings,
    )
