"""
Single-line classification for resume text.

Everything here looks at one line at a time and has no side effects. The rest of
the parser asks these helpers whether a line is a bullet, a phone number, a date
range, an email, a section header, a location or a job title, and builds its
larger decisions on top of the answers.

Phone vs. date precedence is expressed as an ordered list of phone shapes
(PHONE_SHAPE_PATTERNS). Year-shaped candidates are rejected even when they sit
on a line labelled "Phone".
"""

import re
from typing import Dict, List, NamedTuple, Optional, Tuple


# ===== BULLETS =====

# Glyph bullets, "1. ", "a) ", "ii) ", "A. " / "B) "
BULLET_MARKER_RE = re.compile(
    r"^(?:"
    r"[•\-*▪▫▸▹▻▽▼●◦]"
    r"|\d+\."
    r"|[a-z]\)"
    r"|[ivx]+\)"
    r"|[IVX]+\)"
    r"|[A-Z][.)]"
    r")\s+"
)


def is_bullet(line: str) -> bool:
    return bool(BULLET_MARKER_RE.match(line.strip()))


def extract_bullet_content(line: str) -> str:
    """
    Strip exactly the leading bullet marker and return the trimmed remainder.

    Examples:
      "• Led a team of 5"  -> "Led a team of 5"
      "2. Shipped v2"      -> "Shipped v2"
      "b) Reduced costs"   -> "Reduced costs"
    """
    t = line.strip()
    m = BULLET_MARKER_RE.match(t)
    if not m:
        return t
    return t[m.end():].strip()


# ===== PHONE NUMBERS =====

_PHONE_PREFIX = r"(?:\+?1[\s.-]?)?"

# Checked in this order; the first shape that matches wins.
PHONE_SHAPE_PATTERNS: Tuple[Tuple[str, "re.Pattern[str]"], ...] = (
    ("parenthesized", re.compile(r"(?<![\w+])" + _PHONE_PREFIX + r"\(\d{3}\)\s*\d{3}[\s.-]?\d{4}(?!\d)")),
    ("hyphenated", re.compile(r"(?<![\w+-])" + _PHONE_PREFIX + r"\d{3}-\d{3}-\d{4}(?![\d-])")),
    ("dotted", re.compile(r"(?<![\w+.])" + _PHONE_PREFIX + r"\d{3}\.\d{3}\.\d{4}(?!\d)")),
    ("international", re.compile(r"(?<![\w+])\+\d{1,3}[\s.-]\(?\d{2,4}\)?[\s.-]\d{3,4}[\s.-]\d{3,4}(?!\d)")),
    ("local", re.compile(r"(?<![\w-])\d{3}-\d{4}(?![\d-])")),
)

# A bare year or a year range is never a phone number.
YEAR_SHAPE_RE = re.compile(r"^\d{4}(?:\s*[-–—]\s*(?:\d{4}|present|current))?$", re.IGNORECASE)


def is_year_shaped(token: str) -> bool:
    return bool(YEAR_SHAPE_RE.match(token.strip()))


def find_phone(text: str) -> Optional[str]:
    """
    Return the first phone-shaped token in text, honoring shape precedence.

    Examples:
      "Phone: (555) 123-4567"        -> "(555) 123-4567"
      "Phone: 2020"                  -> None
      "Experience: 2018-2022"        -> None
      "john@x.com | 555.123.4567"    -> "555.123.4567"
    """
    for _shape, pattern in PHONE_SHAPE_PATTERNS:
        for m in pattern.finditer(text):
            candidate = m.group(0).strip()
            if is_year_shaped(candidate):
                continue
            return candidate
    return None


# ===== DATES =====

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June", "July", "August",
    "September", "October", "November", "December",
    "Sept", "Jan", "Feb", "Mar", "Apr", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
OPEN_ENDED_DATES = ("present", "current", "now", "ongoing")

_MONTH = r"(?:" + "|".join(MONTH_NAMES) + r")\.?"
_DATE = rf"(?:{_MONTH}\s+\d{{4}}|\d{{1,2}}/\d{{1,2}}/\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
_OPEN_END = r"(?:" + "|".join(OPEN_ENDED_DATES) + r")"

# Examples: "2018-2020", "Jan 2020 - Present", "01/2019 – 04/2025", "2016 to 2018"
DATE_RANGE_RE = re.compile(
    rf"(?<![\w/])(?P<start>{_DATE})\s*(?:-|–|—|to)\s*(?P<end>{_DATE}|{_OPEN_END})(?![\w/])",
    re.IGNORECASE,
)
SINGLE_DATE_RE = re.compile(rf"^(?:{_DATE}|{_OPEN_END})$", re.IGNORECASE)


class DateRange(NamedTuple):
    start: str
    end: str
    span: Tuple[int, int]


def find_date_range(text: str) -> Optional[DateRange]:
    m = DATE_RANGE_RE.search(text)
    if not m:
        return None
    return DateRange(m.group("start").strip(), m.group("end").strip(), m.span())


def is_single_date(text: str) -> bool:
    return bool(SINGLE_DATE_RE.match(text.strip()))


def is_date_like(line: str) -> bool:
    t = line.strip()
    if not t:
        return False
    return bool(DATE_RANGE_RE.search(t)) or is_single_date(t)


# ===== EMAIL / URLS =====

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
URL_RE = re.compile(r"\bhttps?://[^\s)>\]]+\b", re.IGNORECASE)
LINKEDIN_RE = re.compile(r"(?<![/\w.])(?:www\.)?linkedin\.com/in/[^\s)>\]]+\b", re.IGNORECASE)


def _user_looks_like_phone(user: str) -> bool:
    digit_count = sum(1 for c in user if c.isdigit())
    return user.startswith("+") or (digit_count >= 7 and "-" in user)


def find_email(text: str) -> Optional[str]:
    """
    Return the first email address in text.

    Rejects phone+email concatenations where the user part is really a phone
    number glued to the address, e.g. "366-5713k.o.harbaugh@gmail.com".
    """
    for m in EMAIL_RE.finditer(text):
        user = m.group(0).split("@", 1)[0]
        if not _user_looks_like_phone(user):
            return m.group(0)
    return None


# ===== SECTION HEADERS =====

# Canonical kind -> synonyms. Table order is the tie-break order.
SECTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "contact": ("personal information", "contact information", "contact details", "personal details", "contact"),
    "experience": (
        "experience", "work experience", "professional experience", "employment",
        "employment history", "work history", "career", "career history",
    ),
    "education": ("education", "academic background"),
    "skills": (
        "skills", "technical skills", "core competencies", "competencies", "proficiencies",
        "expertise", "areas of expertise", "technical expertise", "technologies",
    ),
    "summary": (
        "summary", "professional summary", "profile", "objective", "career objective",
        "about", "about me", "overview",
    ),
}

# Generic words that name a section only when they open a short heading-shaped
# line ("Acme Technologies" is a company, "About 40% of sales" is prose).
LEADING_ONLY_SYNONYMS = frozenset({"career", "expertise", "technologies", "about", "overview"})

# These only count when they open the line, so "Led 3 projects" stays prose.
SUPPLEMENTARY_SECTION_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "languages": ("languages", "language skills", "linguistic skills"),
    "certifications": (
        "certifications", "certificates", "licenses", "licenses and certifications",
        "credentials", "professional certifications",
    ),
    "awards": ("awards", "honors", "honours", "awards and honors", "achievements", "recognition", "accolades"),
    "projects": ("projects", "personal projects"),
    "references": ("references",),
    "interests": ("interests", "hobbies", "hobbies and interests"),
}

HEADER_MAX_LENGTH = 50
SUPPLEMENTARY_HEADER_MAX_WORDS = 4

LABEL_RE = re.compile(r"^(?P<label>[^:]{1,40}):\s*(?P<value>.*)$")


class HeaderMatch(NamedTuple):
    kind: str
    inline_content: str  # text after "Skills:" on the header line itself


def _header_key(text: str) -> str:
    key = re.sub(r"\s+", " ", text).strip().lower()
    return key.strip(" :-–—|")


def _synonym_at(key: str, synonym: str) -> Optional[int]:
    m = re.search(rf"(?<![\w-]){re.escape(synonym)}(?![\w-])", key)
    return m.start() if m else None


def match_section_header(line: str) -> Optional[HeaderMatch]:
    """
    Decide whether a line is a section header and for which kind.

    A header contains one of the kind's synonyms as a whole word AND is either
    short (< 50 chars) or starts with the synonym. The longest matching synonym
    wins, then table order.

    Examples:
      "WORK EXPERIENCE"                       -> experience
      "Technical Skills: Python, SQL"         -> skills, inline "Python, SQL"
      "Experienced engineer with ... (long)"  -> None
      "Programming Languages: Python"         -> None (label is not a synonym)
    """
    t = line.strip()
    if not t or is_bullet(t) or find_email(t) or find_phone(t) or URL_RE.search(t):
        return None

    label_match = LABEL_RE.match(t)
    if label_match and label_match.group("value").strip():
        label = _header_key(label_match.group("label"))
        for kind, synonyms in list(SECTION_KEYWORDS.items()) + list(SUPPLEMENTARY_SECTION_KEYWORDS.items()):
            if label in synonyms:
                return HeaderMatch(kind, label_match.group("value").strip())
        return None

    key = _header_key(t)
    if not key:
        return None

    best: Optional[Tuple[str, str]] = None
    # "Built user profile service" is prose, "Skills & Tools Summary" is a heading
    heading_shaped = t.isupper() or is_title_cased(t)

    def consider(kind: str, synonym: str) -> None:
        nonlocal best
        if best is None or len(synonym) > len(best[1]):
            best = (kind, synonym)

    for kind, synonyms in SECTION_KEYWORDS.items():
        for synonym in synonyms:
            pos = _synonym_at(key, synonym)
            if pos is None:
                continue
            if synonym in LEADING_ONLY_SYNONYMS:
                if pos == 0 and len(t) < HEADER_MAX_LENGTH and heading_shaped:
                    consider(kind, synonym)
                continue
            if pos == 0 or (len(t) < HEADER_MAX_LENGTH and heading_shaped):
                consider(kind, synonym)

    if len(key.split()) <= SUPPLEMENTARY_HEADER_MAX_WORDS:
        for kind, synonyms in SUPPLEMENTARY_SECTION_KEYWORDS.items():
            for synonym in synonyms:
                if _synonym_at(key, synonym) == 0:
                    consider(kind, synonym)

    if best is None:
        return None
    return HeaderMatch(best[0], "")


def is_section_header_like(line: str) -> bool:
    return match_section_header(line) is not None


# ===== CLASSIFY =====

class LineClass(NamedTuple):
    is_bullet: bool
    is_phone_like: bool
    is_date_like: bool
    is_email_like: bool
    is_section_header_like: bool


def classify(line: str) -> LineClass:
    return LineClass(
        is_bullet=is_bullet(line),
        is_phone_like=find_phone(line) is not None,
        is_date_like=is_date_like(line),
        is_email_like=find_email(line) is not None,
        is_section_header_like=is_section_header_like(line),
    )


# ===== FIELD SHAPES (locations, titles) =====

US_STATES = frozenset({
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN",
    "IA", "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV",
    "NH", "NJ", "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN",
    "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY", "DC",
})
MULTI_WORD_STATES = frozenset({
    "new york", "new mexico", "new hampshire", "new jersey", "north carolina", "north dakota",
    "south carolina", "south dakota", "west virginia", "rhode island", "puerto rico",
})
COUNTRY_CODES = frozenset({"UK", "US", "USA", "UAE", "EU"})
REMOTE_WORDS = frozenset({"remote", "hybrid", "on-site", "onsite"})

# Words that disqualify a "City" or "Region" candidate.
NON_LOCATION_WORDS = frozenset(
    {m.lower() for m in MONTH_NAMES}
    | set(OPEN_ENDED_DATES)
    | {
        "inc", "inc.", "corp", "corp.", "llc", "ltd", "ltd.", "co", "company", "corporation",
        "group", "solutions", "technologies", "systems", "partners", "university", "college",
        "institute", "school", "academy", "study", "abroad", "program", "semester", "trimester",
    }
)

CITY_RE = re.compile(
    r"(?:^|,\s*|\s+[|•·–—-]\s+)(?P<city>(?:[A-Z][A-Za-z.'-]*\s+){0,2}[A-Z][A-Za-z.'-]*)$"
)
ZIP_TAIL_RE = re.compile(r"\s+(?P<zip>\d{5}(?:-\d{4})?)$")


class Location(NamedTuple):
    prefix: str  # text before the location ("Google" in "Google, Mountain View, CA")
    city: str
    region: str
    post_code: str

    @property
    def text(self) -> str:
        if not self.region:
            return self.city
        return f"{self.city}, {self.region}"

    @property
    def is_us_state(self) -> bool:
        return self.region.upper() in US_STATES or self.region.lower() in MULTI_WORD_STATES


def _is_region(region: str) -> bool:
    if not region:
        return False
    if region in US_STATES or region in COUNTRY_CODES:
        return True
    if region.lower() in MULTI_WORD_STATES:
        return True
    if region.lower().rstrip(".") in NON_LOCATION_WORDS:
        return False
    return bool(re.fullmatch(r"[A-Z][a-z]{3,}(?:\s+[A-Z][a-z]+)?", region))


def split_location(text: str) -> Optional[Location]:
    """
    Find a trailing "City, ST" / "City, Country" location in a line.

    Examples:
      "New York, NY"                -> Location("", "New York", "NY", "")
      "Google, Mountain View, CA"   -> Location("Google", "Mountain View", "CA", "")
      "Austin, TX 78701"            -> Location("", "Austin", "TX", "78701")
      "Harvard University, Boston"  -> None  (institution is not a city)
    """
    t = text.strip().rstrip(";.")
    if not t:
        return None
    if t.lower() in REMOTE_WORDS:
        return Location("", t, "", "")

    post_code = ""
    zm = ZIP_TAIL_RE.search(t)
    if zm:
        post_code = zm.group("zip")
        t = t[: zm.start()].rstrip()

    comma = t.rfind(",")
    if comma == -1:
        return None
    region = t[comma + 1:].strip()
    if not _is_region(region):
        return None

    before = t[:comma].rstrip()
    cm = CITY_RE.search(before)
    if not cm:
        return None
    city = cm.group("city").strip()
    if any(w.lower().strip(".,") in NON_LOCATION_WORDS for w in city.split()):
        return None

    prefix = before[: cm.start()].strip().rstrip(",|•·–—-").strip()
    return Location(prefix, city, region, post_code)


def is_location_line(text: str) -> bool:
    loc = split_location(text)
    return loc is not None and not loc.prefix


SMALL_WORDS = frozenset({"of", "and", "at", "in", "for", "the", "to", "a", "an", "with", "on", "&", "-", "|"})

JOB_TITLE_KEYWORDS = frozenset({
    "developer", "engineer", "manager", "director", "specialist", "analyst", "designer",
    "consultant", "coordinator", "supervisor", "assistant", "associate", "lead", "senior",
    "junior", "principal", "architect", "intern", "officer", "administrator", "scientist",
    "representative", "executive", "technician", "programmer", "head", "president",
    "founder", "co-founder", "accountant", "teacher", "nurse", "editor", "writer", "advisor",
    "owner", "vp", "cto", "ceo", "cfo", "coo", "trainee", "instructor",
    "researcher", "strategist",
})

TITLE_AT_COMPANY_RE = re.compile(r"^(?P<title>.+?)\s+(?:at|@)\s+(?P<company>[A-Z0-9].*)$")
FIELD_SEPARATOR_RE = re.compile(r"\s+[|•·]\s+|\s+[–—]\s+(?=[A-Z])")


def _words(text: str) -> List[str]:
    return re.findall(r"[A-Za-z][A-Za-z0-9.&'+#/-]*", text)


def is_title_cased(text: str) -> bool:
    """Most words (ignoring "of", "and", "at", ...) start with an uppercase letter."""
    words = [w for w in _words(text) if w.lower() not in SMALL_WORDS]
    if not words:
        return False
    upper = sum(1 for w in words if w[0].isupper())
    return upper / len(words) >= 0.75


def looks_like_job_title(text: str) -> bool:
    """
    Title-cased short line that names a role.

    Examples:
      "Senior Developer"               -> True
      "Software Engineer at Tech Corp" -> True
      "Led development team"           -> False
      "ABC Company"                    -> False (no role word)
    """
    t = text.strip()
    if not t or len(t) > 80:
        return False
    if is_bullet(t) or find_email(t) or find_phone(t) or URL_RE.search(t) or is_date_like(t):
        return False
    if ":" in t or t.endswith(("!", "?")):
        return False
    at_match = TITLE_AT_COMPANY_RE.match(t)
    if at_match:
        t = at_match.group("title")
    words = _words(t)
    if not words or len(words) > 8:
        return False
    if not is_title_cased(t):
        return False
    return any(w.lower().strip(".") in JOB_TITLE_KEYWORDS for w in words)


def names_a_role(text: str) -> bool:
    """
    Job title ending in a role noun.

    Examples:
      "Education Coordinator" -> True
      "Executive Summary"     -> False
    """
    words = _words(text)
    return bool(words) and words[-1].lower().strip(".") in JOB_TITLE_KEYWORDS and looks_like_job_title(text)
