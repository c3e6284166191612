import re
import logging
from typing import Callable, Dict, List, Optional

from resume_parser.core.line_classifier import (
    TITLE_AT_COMPANY_RE,
    find_date_range,
    is_bullet,
    is_date_like,
    is_location_line,
    is_single_date,
    is_title_cased,
    looks_like_job_title,
    split_location,
)
from resume_parser.core.schemas import Experience

logger = logging.getLogger(__name__)

PIPE_SPLIT_RE = re.compile(r"\s*\|\s*")
COLON_SPLIT_RE = re.compile(r"\s*:\s*")
COMPANY_SUFFIXES = ("inc.", "corp.", "co.", "ltd.", "llc.", "l.l.c.", "s.a.")
HEADER_MAX_WORDS = 6


def new_entry() -> Dict[str, any]:
    return {
        "title": "",
        "org": "",
        "location": "",
        "start_date": "",
        "end_date": "",
        "description": [],
        "lines": [],
        "title_is_guess": False,
    }


def cut_date_range(text: str, entry: Dict[str, any], single_date_field: str = "start_date") -> str:
    """
    Record the first date range (or lone date) of an entry and return what is
    left of the line.

    Examples:
      "Senior Engineer | Acme | 2020-Present" -> "Senior Engineer | Acme"
      "2018 - 2020"                            -> ""
    """
    if entry["start_date"] or entry["end_date"]:
        return text
    rng = find_date_range(text)
    if rng:
        entry["start_date"] = rng.start
        entry["end_date"] = rng.end
        start, end = rng.span
        rest = f"{text[:start]} {text[end:]}"
        rest = re.sub(r"\(\s*\)", " ", rest)
        return re.sub(r"\s{2,}", " ", rest).strip(" |,;–—-()")
    if is_single_date(text):
        entry[single_date_field] = text.strip()
        return ""
    return text


def is_company_shaped(text: str) -> bool:
    t = text.strip()
    if not t or len(t) > 80 or len(t.split()) > 8:
        return False
    if t.endswith(".") and not t.lower().endswith(COMPANY_SUFFIXES):
        return False
    return t.isupper() or is_title_cased(t)


def _split_header_parts(parts: List[str]) -> Dict[str, str]:
    """Assign the pieces of a "Title | Company | Location" style header."""
    found = {"title": "", "org": "", "location": ""}
    rest: List[str] = []
    for part in parts:
        if not found["location"] and is_location_line(part):
            found["location"] = split_location(part).text
        elif not found["title"] and looks_like_job_title(part):
            found["title"] = part
        else:
            rest.append(part)
    if not found["title"] and rest:
        found["title"] = rest.pop(0)
    if rest:
        found["org"] = rest.pop(0)
    return found


def parse_entry_header(text: str) -> Optional[Dict[str, str]]:
    """
    Recognize one-line entry headers.

    Examples:
      "Software Engineer at Tech Corp"           -> title, org
      "Senior Developer | Acme"                  -> title, org
      "ACME CORP: TERRITORY MANAGER: NEW YORK"   -> org, title, location
    """
    t = text.strip()
    if not t or is_bullet(t):
        return None

    if "|" in t:
        parts = [p for p in PIPE_SPLIT_RE.split(t) if p]
        if len(parts) >= 2:
            return _split_header_parts(parts)

    m = TITLE_AT_COMPANY_RE.match(t)
    if m and looks_like_job_title(m.group("title")):
        org = m.group("company").strip()
        location = ""
        loc = split_location(org)
        if loc and loc.prefix:
            org, location = loc.prefix, loc.text
        return {"title": m.group("title").strip(), "org": org, "location": location}

    # "Company: Title" / "Company: Title: Location"
    if ":" in t:
        parts = [p for p in COLON_SPLIT_RE.split(t.rstrip(":")) if p]
        if 2 <= len(parts) <= 3 and all(len(p.split()) <= HEADER_MAX_WORDS for p in parts):
            if any(looks_like_job_title(p) for p in parts):
                found = _split_header_parts(parts)
                if not found["location"] and len(parts) == 3:
                    found["location"] = parts[2]
                return found

    return None


def _assign_line(entry: Dict[str, any], text: str) -> None:
    entry["lines"].append(text)
    t = text.strip()

    if is_bullet(t):
        entry["description"].append(t)
        return

    t = cut_date_range(t, entry)
    if not t:
        return

    if not entry["title"] and not entry["org"]:
        header = parse_entry_header(t)
        if header:
            entry["title"] = header["title"]
            entry["org"] = header["org"]
            entry["location"] = entry["location"] or header["location"]
            return

    if not entry["location"] and is_location_line(t):
        entry["location"] = split_location(t).text
        return

    loc = split_location(t)
    if not entry["org"] and loc and loc.prefix and not looks_like_job_title(loc.prefix):
        entry["org"] = loc.prefix
        entry["location"] = entry["location"] or loc.text
        return

    if looks_like_job_title(t):
        if not entry["title"]:
            entry["title"] = t
            return
        if entry["title_is_guess"] and not entry["org"]:
            # "Acme Corp" came first and was taken as the title
            entry["org"], entry["title"] = entry["title"], t
            entry["title_is_guess"] = False
            return

    if not entry["title"] and not entry["org"] and is_company_shaped(t) and not is_date_like(t):
        entry["title"] = t
        entry["title_is_guess"] = True
        return

    if not entry["org"] and (not entry["start_date"] or is_title_cased(t)) and is_company_shaped(t):
        entry["org"] = t
        return

    entry["description"].append(t)


def _starts_new_entry(entry: Dict[str, any], text: str) -> bool:
    t = text.strip()
    if is_bullet(t):
        return False
    # Undated job lists: a complete title + company is followed by the next title
    if entry["title"] and entry["org"] and not entry["title_is_guess"] and looks_like_job_title(t):
        return True
    if not (entry["start_date"] or entry["end_date"]):
        return False
    if "|" in t or TITLE_AT_COMPANY_RE.match(t):
        header = parse_entry_header(t)
        if header and looks_like_job_title(header["title"]):
            return True
    if entry["title"] and looks_like_job_title(t):
        return True
    loc = split_location(t)
    return bool(entry["org"] and loc and loc.prefix and not looks_like_job_title(loc.prefix))


def group_entries(
    content: str,
    assign: Callable[[Dict[str, any], str], None],
    starts_new: Callable[[Dict[str, any], str], bool],
    has_identity: Callable[[Dict[str, any]], bool],
    make_entry: Callable[[], Dict[str, any]] = new_entry,
) -> List[Dict[str, any]]:
    """
    Fold the lines of an entry section into entry drafts.

    Blank-line runs close an entry. Inside a chunk a new entry opens when the
    current one already has its dates and the line looks like the start of
    another. A chunk opening with a bullet, or one that never produced an
    identity (title/company, school/degree), is folded into the previous
    entry's description.
    """
    entries: List[Dict[str, any]] = []
    current: Optional[Dict[str, any]] = None
    chunk_start = True

    def close() -> None:
        nonlocal current
        if current is None:
            return
        if has_identity(current):
            entries.append(current)
        elif entries:
            logger.debug(f"Folding orphan lines into previous entry: {current['lines']}")
            entries[-1]["description"].extend(current["lines"])
        else:
            logger.debug(f"Discarding entry without identity: {current['lines']}")
        current = None

    for raw in content.splitlines():
        t = raw.strip()
        if not t:
            close()
            chunk_start = True
            continue

        if current is None:
            if chunk_start and is_bullet(t) and entries:
                entries[-1]["description"].append(t)
                entries[-1]["lines"].append(t)
                continue
            current = make_entry()
        elif starts_new(current, t):
            close()
            current = make_entry()

        chunk_start = False
        assign(current, t)

    close()
    return entries


def extract_experiences(content: str) -> List[Experience]:
    """
    Example:
      "Senior Developer\\nABC Company\\nNew York, NY\\n2018-2020\\nLed development team"
      -> [Experience(id=1, job_title="Senior Developer", company="ABC Company",
                     location="New York, NY", start_date="2018", end_date="2020",
                     description="Led development team")]
    """
    drafts = group_entries(
        content,
        assign=_assign_line,
        starts_new=_starts_new_entry,
        has_identity=lambda e: bool(e["title"] or e["org"]),
    )

    experiences: List[Experience] = []
    for draft in drafts:
        experiences.append(
            Experience(
                id=len(experiences) + 1,
                job_title=draft["title"],
                company=draft["org"],
                location=draft["location"],
                start_date=draft["start_date"],
                end_date=draft["end_date"],
                description="\n".join(draft["description"]),
            )
        )
    logger.debug(f"Extracted {len(experiences)} experience entries")
    return experiences
