from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Literal, Optional


ParseQuality = Literal["high", "medium", "low"]


class RecordModel(BaseModel):
    """Record types serialize as camelCase (firstName, jobTitle) and accept either spelling."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Contact(RecordModel):
    first_name: str = ""
    last_name: str = ""
    desired_job_title: str = ""
    phone: str = ""
    email: str = ""
    country: str = ""
    city: str = ""
    address: str = ""
    post_code: str = ""


class Experience(RecordModel):
    id: int = Field(default=0, description="1-based position in document order")
    job_title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""  # or "Present"
    description: str = ""
    bullets: List[str] = Field(default_factory=list)  # description split into bullet units


class Education(RecordModel):
    id: int = 0
    school: str = ""
    degree: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    bullets: List[str] = Field(default_factory=list)


class Skill(RecordModel):
    id: int = 0
    name: str = ""
    level: Optional[str] = None  # proficiency word ("Advanced") or version ("v18")


class Language(RecordModel):
    id: int = 0
    name: str = ""
    level: Optional[str] = None


class ListEntry(RecordModel):
    """Single-line entry of a list section (certifications, awards, references, hobbies)."""
    id: int = 0
    title: str = ""


class Website(RecordModel):
    id: int = 0
    label: str = ""
    url: str = ""


class StructuredRecord(RecordModel):
    contact: Contact = Field(default_factory=Contact)
    experiences: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    summary: str = ""
    languages: List[Language] = Field(default_factory=list)
    certifications: List[ListEntry] = Field(default_factory=list)
    awards: List[ListEntry] = Field(default_factory=list)
    websites: List[Website] = Field(default_factory=list)
    references: List[ListEntry] = Field(default_factory=list)
    hobbies: List[ListEntry] = Field(default_factory=list)


class SectionSpan(BaseModel):
    kind: str
    start_line: int = Field(..., description="Index of the header line")
    end_line: int = Field(..., description="Index of the last line belonging to the span")
    content_lines: List[str] = Field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.content_lines).strip("\n")


class PageContext(BaseModel):
    content: str
    line_start: int
    line_end: int


class SegmentedDocument(BaseModel):
    sections: Dict[str, str] = Field(default_factory=dict, description="kind -> content of the last span of that kind")
    spans: List[SectionSpan] = Field(default_factory=list)
    preamble: List[str] = Field(default_factory=list, description="Lines before the first recognized header")
    pages: Dict[int, PageContext] = Field(default_factory=dict)
    is_multi_page: bool = False

    def spans_of(self, kind: str) -> List[SectionSpan]:
        return [span for span in self.spans if span.kind == kind]


class ConfidenceReport(BaseModel):
    overall_score: int = Field(..., ge=0, le=100)
    sections_found: List[str] = Field(default_factory=list)
    missing_sections: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    parse_quality: ParseQuality = "low"


class ParseResponse(BaseModel):
    record: StructuredRecord
    confidence: Optional[ConfidenceReport] = None
    sections_detected: List[str] = Field(default_factory=list)
    is_multi_page: bool = False
    pages: Dict[int, PageContext] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)


class ParseRequest(BaseModel):
    text: Optional[str] = Field(None, description="Plain resume text, as produced by an upstream PDF/DOCX converter")
    include_confidence: Optional[bool] = Field(None, description="Defaults to INCLUDE_CONFIDENCE_DEFAULT")
