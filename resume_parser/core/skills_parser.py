import re
import logging
from typing import List, Optional, Tuple

from resume_parser.core.line_classifier import extract_bullet_content
from resume_parser.core.schemas import Language, ListEntry, Skill

logger = logging.getLogger(__name__)

# Commas inside parentheses ("Python (Django, Flask)") do not split
TOKEN_SPLIT_RE = re.compile(r"[,;•·|\n](?![^()]*\))")

# "Frameworks: React" -> "React"; only short labels are stripped
LABEL_PREFIX_RE = re.compile(r"^(?P<label>[^:]{1,40}):\s*(?P<rest>.+)$")
LABEL_MAX_WORDS = 4

PAREN_LEVEL_RE = re.compile(r"^(?P<name>[^()]+?)\s*\((?P<level>[^(),]+)\)$")
VERSION_LEVEL_RE = re.compile(r"^(?P<name>.+?)\s+(?P<level>v\d+(?:\.\d+)*|\d+(?:\.\d+)+)$", re.IGNORECASE)
DASH_LEVEL_RE = re.compile(r"^(?P<name>.+?)\s+[-–—]\s+(?P<level>[A-Za-z][A-Za-z ]*)$")

PROFICIENCY_WORDS = frozenset({
    "beginner", "elementary", "basic", "novice", "intermediate", "advanced", "expert",
    "proficient", "fluent", "native", "native speaker", "conversational", "professional",
    "professional working proficiency", "working proficiency", "limited", "bilingual",
    "mother tongue", "upper intermediate",
})

MAX_SKILL_LENGTH = 100
ALNUM_RE = re.compile(r"[A-Za-z0-9]")


def parse_skill_token(token: str) -> Tuple[str, Optional[str]]:
    """
    Split one skill token into (name, level).

    Examples:
      "JavaScript (Advanced)"  -> ("JavaScript", "Advanced")
      "React v18"              -> ("React", "v18")
      "Python 3.11"            -> ("Python", "3.11")
      "Spanish - Fluent"       -> ("Spanish", "Fluent")
      "Node.js"                -> ("Node.js", None)
    """
    t = token.strip()
    m = PAREN_LEVEL_RE.match(t)
    if m:
        return m.group("name").strip(), m.group("level").strip()
    m = VERSION_LEVEL_RE.match(t)
    if m:
        return m.group("name").strip(), m.group("level")
    m = DASH_LEVEL_RE.match(t)
    if m and m.group("level").strip().lower() in PROFICIENCY_WORDS:
        return m.group("name").strip(), m.group("level").strip()
    return t, None


def _strip_label(token: str) -> str:
    m = LABEL_PREFIX_RE.match(token)
    if m and len(m.group("label").split()) <= LABEL_MAX_WORDS:
        return m.group("rest").strip()
    return token


def split_tokens(content: str) -> List[str]:
    lines = [extract_bullet_content(ln) for ln in content.splitlines()]
    tokens: List[str] = []
    for raw in TOKEN_SPLIT_RE.split("\n".join(lines)):
        token = _strip_label(raw.strip()).strip().rstrip(".").strip()
        if not token or not ALNUM_RE.search(token):
            continue
        if len(token) > MAX_SKILL_LENGTH:
            logger.debug(f"Dropping overlong skill token ({len(token)} chars)")
            continue
        tokens.append(token)
    return tokens


def extract_skills(content: str) -> List[Skill]:
    skills: List[Skill] = []
    for token in split_tokens(content):
        name, level = parse_skill_token(token)
        skills.append(Skill(id=len(skills) + 1, name=name, level=level))
    return skills


def extract_languages(content: str) -> List[Language]:
    """"English (Native), Spanish - Fluent" -> two languages with levels."""
    languages: List[Language] = []
    for token in split_tokens(content):
        name, level = parse_skill_token(token)
        languages.append(Language(id=len(languages) + 1, name=name, level=level))
    return languages


def extract_list_entries(content: str) -> List[ListEntry]:
    """One entry per non-empty line (certifications, awards)."""
    entries: List[ListEntry] = []
    for line in content.splitlines():
        title = extract_bullet_content(line)
        if title:
            entries.append(ListEntry(id=len(entries) + 1, title=title))
    return entries


def extract_hobbies(content: str) -> List[ListEntry]:
    """"Hiking, Chess\\n• Photography" -> three entries; same separators as skills."""
    return [ListEntry(id=i + 1, title=token) for i, token in enumerate(split_tokens(content))]
