import logging
from typing import Optional

from fastapi import APIRouter, UploadFile, File, HTTPException, Query

from resume_parser.core.config import settings
from resume_parser.core.errors import InvalidInputError
from resume_parser.core.schemas import ConfidenceReport, ParseRequest, ParseResponse, StructuredRecord
from resume_parser.core.text_parser import calculate_parsing_confidence, parse_text_to_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

TEXT_CONTENT_TYPES = {"text/plain", "text/markdown", "text/x-markdown"}
TEXT_EXTENSIONS = (".txt", ".md")

EXAMPLE_RESPONSE = {
    "record": {
        "contact": {
            "firstName": "John",
            "lastName": "Doe",
            "desiredJobTitle": "Software Engineer",
            "phone": "(555) 123-4567",
            "email": "john@example.com",
            "country": "",
            "city": "San Francisco",
            "address": "",
            "postCode": "",
        },
        "experiences": [
            {
                "id": 1,
                "jobTitle": "Senior Engineer",
                "company": "Tech Corp",
                "location": "San Francisco, CA",
                "startDate": "Jan 2020",
                "endDate": "Present",
                "description": "• Led the platform team",
                "bullets": ["Led the platform team"],
            }
        ],
        "education": [],
        "skills": [{"id": 1, "name": "Python", "level": "Advanced"}],
        "summary": "Backend engineer with 8 years of experience.",
        "languages": [],
        "certifications": [],
        "awards": [],
        "websites": [],
        "references": [],
        "hobbies": [],
    },
    "confidence": {
        "overall_score": 80,
        "sections_found": ["contact", "experiences", "skills", "summary"],
        "missing_sections": ["education"],
        "suggestions": ["Add your education history"],
        "parse_quality": "high",
    },
    "sections_detected": ["summary", "experience", "skills"],
    "is_multi_page": False,
    "pages": {},
    "warnings": [],
}


def _run_parser(text: Optional[str], include_confidence: Optional[bool]) -> ParseResponse:
    if text is not None and len(text) > settings.max_input_chars:
        raise HTTPException(
            status_code=413,
            detail=f"Resume text exceeds {settings.max_input_chars} characters.",
        )
    if include_confidence is None:
        include_confidence = settings.include_confidence_default
    try:
        return parse_text_to_response(text, include_confidence=include_confidence)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Resume Text",
    description="Extract a structured resume record from plain text. Returns the record, an optional completeness score, detected sections and page bookkeeping.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {"application/json": {"example": EXAMPLE_RESPONSE}},
        },
        413: {"description": "Resume text too long"},
        422: {"description": "Resume text missing or not a string"},
    }
)
def parse_resume_text(request: ParseRequest):
    """
    Parse plain resume text.

    **Returns:**
    - **record**: contact, experiences, education, skills, summary, languages, certifications, awards, websites
    - **confidence**: completeness score (0-100) with missing sections and suggestions
    - **sections_detected**: section kinds in document order
    - **warnings**: notes about the parse (no headers, multi-page input, duplicates removed)
    """
    return _run_parser(request.text, request.include_confidence)


@router.post(
    "/parse/file",
    response_model=ParseResponse,
    summary="Parse Resume File",
    description="Parse an uploaded plain-text (.txt) or Markdown (.md) resume. Convert PDF/DOCX to text before uploading.",
    responses={
        400: {"description": "Empty file uploaded"},
        413: {"description": "Resume text too long"},
        415: {"description": "Unsupported file format"},
    }
)
async def parse_resume_file(
    file: UploadFile = File(..., description="Resume file (TXT or MD format)"),
    include_confidence: Optional[bool] = Query(None),
):
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").split(";")[0].strip().lower()

    if not (filename.endswith(TEXT_EXTENSIONS) or content_type in TEXT_CONTENT_TYPES):
        raise HTTPException(
            status_code=415,
            detail=f"Unsupported content type: {file.content_type}. Convert the document to plain text first.",
        )

    text = raw.decode("utf-8", errors="replace")
    logger.debug(f"Parsing uploaded file {file.filename!r} ({len(text)} chars)")
    return _run_parser(text, include_confidence)


@router.post(
    "/confidence",
    response_model=ConfidenceReport,
    summary="Score Resume Record",
    description="Recompute the completeness score of a (possibly edited) structured record without re-parsing.",
)
def score_record(record: StructuredRecord):
    return calculate_parsing_confidence(record)
