"""
Split raw resume text into section spans.

segment() is a single left-to-right fold over the lines of the document:

  - page markers ("=== PAGE 2 ===", "=== SECTION 3 ===") and bare page-number
    lines are page bookkeeping, never content
  - a header line closes the open span and opens a new one
  - any other line is appended to the open span's buffer
  - lines before the first header form the preamble (usually the contact block)

Sections stay open across page boundaries, so a work history that continues on
page 2 is still one experience span.
"""

import re
import logging
from typing import Dict, List, Optional

from resume_parser.core.line_classifier import match_section_header, names_a_role
from resume_parser.core.schemas import PageContext, SectionSpan, SegmentedDocument

logger = logging.getLogger(__name__)

PAGE_MARKER_RE = re.compile(r"^\s*=== (?:PAGE|SECTION) (\d+) ===\s*$")
PAGE_NUMBER_LINE_RE = re.compile(r"^\s*\d{1,3}\s*$")


def split_lines(text: str) -> List[str]:
    return re.split(r"\r\n|\r|\n", text)


def is_page_marker(line: str) -> bool:
    return bool(PAGE_MARKER_RE.match(line))


def is_page_number_line(line: str) -> bool:
    return bool(PAGE_NUMBER_LINE_RE.match(line))


def is_multi_page(text: str) -> bool:
    """True for explicit page markers, or more than one bare page-number line."""
    lines = split_lines(text)
    if any(is_page_marker(ln) for ln in lines):
        return True
    return sum(1 for ln in lines if is_page_number_line(ln)) > 1


def build_page_context(text: str) -> Dict[int, PageContext]:
    """
    Map page number -> content and 0-based line bounds.

    Explicit markers open the page they name. Without markers, a bare
    page-number line closes the page it numbers (footer style). Single-page
    documents get an empty mapping.
    """
    if not is_multi_page(text):
        return {}

    lines = split_lines(text)
    has_markers = any(is_page_marker(ln) for ln in lines)
    pages: Dict[int, PageContext] = {}

    current_page = 1
    buffer: List[str] = []
    buffer_start = 0

    def flush(page: int, end_index: int) -> None:
        if any(ln.strip() for ln in buffer):
            pages[page] = PageContext(
                content="\n".join(buffer),
                line_start=buffer_start,
                line_end=end_index,
            )

    for i, line in enumerate(lines):
        if has_markers:
            m = PAGE_MARKER_RE.match(line)
            if m:
                flush(current_page, i - 1)
                current_page = int(m.group(1))
                buffer = []
                buffer_start = i + 1
                continue
        elif is_page_number_line(line):
            flush(int(line.strip()), i - 1)
            current_page = int(line.strip()) + 1
            buffer = []
            buffer_start = i + 1
            continue
        buffer.append(line)

    flush(current_page, len(lines) - 1)
    return pages


def segment(text: str) -> SegmentedDocument:
    """
    Example:
      "Jane Roe\\nSKILLS\\nPython, SQL\\n\\nEDUCATION\\nBSc Physics"
      -> preamble ["Jane Roe"], spans [skills, education],
         sections {"skills": "Python, SQL", "education": "BSc Physics"}
    """
    lines = split_lines(text)
    multi_page = is_multi_page(text)

    spans: List[SectionSpan] = []
    sections: Dict[str, str] = {}
    preamble: List[str] = []

    open_kind: Optional[str] = None
    open_start = 0
    buffer: List[str] = []
    last_index = 0

    def close(end_index: int) -> None:
        if open_kind is None:
            return
        if not any(ln.strip() for ln in buffer):
            logger.debug(f"Dropping empty '{open_kind}' section at line {open_start}")
            return
        span = SectionSpan(kind=open_kind, start_line=open_start, end_line=end_index, content_lines=list(buffer))
        spans.append(span)
        sections[open_kind] = span.content

    for i, line in enumerate(lines):
        if is_page_marker(line):
            continue
        if multi_page and is_page_number_line(line):
            continue

        header = match_section_header(line)
        if header is not None and open_kind == "experience" and names_a_role(line):
            # "Education Coordinator" inside a work history is a job, not a section
            header = None
        if header is not None:
            close(last_index)
            logger.debug(f"Section '{header.kind}' opens at line {i}: {line.strip()!r}")
            open_kind = header.kind
            open_start = i
            buffer = [header.inline_content] if header.inline_content else []
            last_index = i
            continue

        if open_kind is None:
            preamble.append(line)
        else:
            buffer.append(line)
        last_index = i

    close(last_index)

    return SegmentedDocument(
        sections=sections,
        spans=spans,
        preamble=preamble,
        pages=build_page_context(text),
        is_multi_page=multi_page,
    )
