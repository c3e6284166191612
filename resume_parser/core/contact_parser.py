import re
import logging
from typing import List, Optional

from resume_parser.core.line_classifier import (
    FIELD_SEPARATOR_RE,
    LABEL_RE,
    LINKEDIN_RE,
    URL_RE,
    find_email,
    find_phone,
    is_date_like,
    is_location_line,
    is_section_header_like,
    looks_like_job_title,
    split_location,
)
from resume_parser.core.schemas import Contact, Website

logger = logging.getLogger(__name__)

NAME_LABEL_RE = re.compile(r"^\s*(?:full\s+)?name\s*:\s*", re.IGNORECASE)
NAME_CHARS_RE = re.compile(r"[A-Za-z][A-Za-z .'-]*")
NAME_MAX_WORDS = 5
NAME_MAX_LENGTH = 50

# "123 Main St", "42 Ocean Avenue"
STREET_RE = re.compile(
    r"^\d+\s+[A-Za-z0-9.\s]+?\b(?:Street|St|Avenue|Ave|Road|Rd|Drive|Dr|Lane|Ln|Boulevard|Blvd|Way|Court|Ct|Place|Pl)\b\.?"
)

WEBSITE_LABELS = (
    ("linkedin.com", "LinkedIn"),
    ("github.com", "GitHub"),
    ("twitter.com", "Twitter"),
    ("instagram.com", "Instagram"),
)


def _is_contact_data(line: str) -> bool:
    return bool(find_email(line) or find_phone(line) or URL_RE.search(line) or LINKEDIN_RE.search(line))


def looks_like_name(line: str) -> bool:
    """
    Examples:
      "JOHN DOE"             -> True
      "Mary Ann O'Neil"      -> True
      "john@example.com"     -> False
      "Email: jd@x.com"      -> False
      "San Francisco, CA"    -> False
    """
    t = NAME_LABEL_RE.sub("", line.strip()).split("|", 1)[0].strip()
    if not t or len(t) > NAME_MAX_LENGTH:
        return False
    if re.search(r"[0-9@]", t):
        return False
    if is_section_header_like(t) or _is_contact_data(t) or is_date_like(t) or is_location_line(t):
        return False
    if LABEL_RE.match(t) or looks_like_job_title(t):
        return False
    if not NAME_CHARS_RE.fullmatch(t):
        return False
    return len(t.split()) <= NAME_MAX_WORDS


def identify_website_label(url: str) -> str:
    lowered = url.lower()
    for domain, label in WEBSITE_LABELS:
        if domain in lowered:
            return label
    return "Website"


def extract_websites(lines: List[str]) -> List[Website]:
    """Every http(s) URL plus bare linkedin.com/in/... handles, first occurrence kept."""
    urls: List[str] = []
    for line in lines:
        for m in URL_RE.finditer(line):
            url = m.group(0).rstrip(".,;")
            if url not in urls:
                urls.append(url)
        for m in LINKEDIN_RE.finditer(line):
            url = "https://" + m.group(0).rstrip(".,;")
            bare = url.replace("https://www.", "https://")
            if not any(u.replace("://www.", "://").rstrip("/") == bare.rstrip("/") for u in urls):
                urls.append(url)
    return [Website(id=i + 1, label=identify_website_label(u), url=u) for i, u in enumerate(urls)]


def extract_contact(lines: List[str], fallback_lines: Optional[List[str]] = None) -> Contact:
    """
    Pull the contact block fields out of the lines before the first section
    header (plus any explicit contact section).

    Phone and email fall back to the whole document when the block has none.
    Phone matching follows the phone-shape precedence, so "Graduation: 2020"
    is never mistaken for a number.
    """
    contact = Contact()

    # --- 1) Phone + email ---
    def first_match(candidates: List[str], finder) -> str:
        for line in candidates:
            found = finder(line)
            if found:
                return found
        return ""

    contact.email = first_match(lines, find_email)
    contact.phone = first_match(lines, find_phone)
    if fallback_lines:
        if not contact.email:
            contact.email = first_match(fallback_lines, find_email)
        if not contact.phone:
            contact.phone = first_match(fallback_lines, find_phone)

    # --- 2) Name, then desired job title directly below it ---
    name_idx: Optional[int] = None
    for idx, line in enumerate(lines):
        if not line.strip():
            continue
        if looks_like_name(line):
            name = NAME_LABEL_RE.sub("", line.strip()).split("|", 1)[0].strip()
            parts = re.split(r"\s+", name, maxsplit=1)
            contact.first_name = parts[0]
            contact.last_name = parts[1] if len(parts) > 1 else ""
            name_idx = idx
            logger.debug(f"Name line {idx}: {name!r}")
            break

    if name_idx is not None and name_idx + 1 < len(lines):
        below = lines[name_idx + 1].strip()
        if below and not _is_contact_data(below) and looks_like_job_title(below):
            contact.desired_job_title = below

    # --- 3) Street address + city / region / post code ---
    for line in lines:
        text = line.strip()
        labelled = LABEL_RE.match(text)
        if labelled and labelled.group("value").strip() and not URL_RE.search(text):
            # "Location: Austin, TX"
            text = labelled.group("value").strip()
        for piece in FIELD_SEPARATOR_RE.split(text):
            piece = piece.strip()
            if not piece or _is_contact_data(piece):
                continue

            street = STREET_RE.match(piece)
            if street and not contact.address:
                contact.address = street.group(0).strip().rstrip(",")

            if contact.city:
                continue
            loc = split_location(piece)
            if loc is None or not loc.region:
                continue
            if loc.prefix and not STREET_RE.match(loc.prefix):
                continue
            contact.city = loc.city
            contact.post_code = loc.post_code
            if not loc.is_us_state:
                contact.country = loc.region

    return contact
