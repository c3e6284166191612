import re
import logging
from typing import List, NamedTuple

from resume_parser.core.line_classifier import extract_bullet_content, is_bullet

logger = logging.getLogger(__name__)

# Paragraphs at or under this many characters are never split heuristically.
LONG_DESCRIPTION_THRESHOLD = 200
MIN_PIECE_LENGTH = 20
MIN_ACTION_CONTENT = 10

COLON_CLAUSE_RE = re.compile(r"([A-Z][^:]*):\s*([^.!?]*[.!?]?)")

ACTION_VERBS = (
    "managed", "led", "developed", "implemented", "designed", "created", "built", "improved",
    "optimized", "increased", "reduced", "achieved", "delivered", "collaborated", "mentored",
    "trained", "supervised", "analyzed", "researched", "maintained", "supported", "configured",
    "deployed", "integrated", "automated", "streamlined", "enhanced", "established", "ensures",
    "defines", "manages", "tech skills", "responsible", "oversaw", "coordinated", "facilitated",
    "executed", "administered", "monitored", "evaluated", "planned", "organized", "directed",
)

# Tried in order; period before a capital, semicolon, comma before "Word word".
SEPARATOR_PATTERNS = (
    re.compile(r"\.\s+(?=[A-Z])"),
    re.compile(r";\s+"),
    re.compile(r",\s+(?=[A-Z][a-z]*\s+[a-z])"),
)

SENTENCE_BOUNDARY_RE = re.compile(r"([.!?])\s+")


class BulletItem(NamedTuple):
    text: str
    is_bullet: bool


def _split_on_colon_clauses(text: str) -> List[str]:
    pieces = []
    for m in COLON_CLAUSE_RE.finditer(text):
        title = m.group(1).strip()
        content = m.group(2).strip()
        if content:
            pieces.append(f"{title}: {content}")
    return pieces


def _split_on_action_verbs(text: str) -> List[str]:
    for verb in ACTION_VERBS:
        pattern = re.compile(rf"\b{re.escape(verb)}\b[:\s]+([^.!?]*[.!?]?)", re.IGNORECASE)
        matches = list(pattern.finditer(text))
        if len(matches) <= 1:
            continue
        label = verb[0].upper() + verb[1:]
        pieces = []
        for m in matches:
            content = m.group(1).strip()
            if len(content) > MIN_ACTION_CONTENT:
                pieces.append(f"{label}: {content}")
        if len(pieces) > 1:
            return pieces
    return []


def _split_on_separators(text: str) -> List[str]:
    for pattern in SEPARATOR_PATTERNS:
        parts = pattern.split(text)
        if len(parts) <= 2:
            continue
        pieces = [p.strip() for p in parts if len(p.strip()) > MIN_PIECE_LENGTH]
        if len(pieces) > 1:
            return pieces
    return []


def _split_on_sentences(text: str) -> List[str]:
    # split() with a capture group alternates text, delimiter, text, ...
    parts = SENTENCE_BOUNDARY_RE.split(text)
    if len(parts) <= 2:
        return []
    pieces = []
    for i in range(0, len(parts), 2):
        sentence = parts[i].strip()
        if i + 1 < len(parts):
            sentence += parts[i + 1]
        if len(sentence) > MIN_PIECE_LENGTH:
            pieces.append(sentence)
    return pieces


SPLIT_STRATEGIES = (
    ("colon clauses", _split_on_colon_clauses),
    ("action verbs", _split_on_action_verbs),
    ("separators", _split_on_separators),
    ("sentences", _split_on_sentences),
)


def split_long_description(text: str) -> List[str]:
    """
    Break one long unbulleted paragraph into bullet units.

    The first strategy that yields more than one piece wins; if none does the
    paragraph comes back as a single unit. The ordering is a heuristic and can
    give different counts for borderline paragraphs.
    """
    for name, strategy in SPLIT_STRATEGIES:
        pieces = strategy(text)
        if len(pieces) > 1:
            logger.debug(f"Split description into {len(pieces)} pieces via {name}")
            return pieces
    return [text]


def process_description(paragraph: str) -> List[BulletItem]:
    """
    Turn a description into display items flagged as bullet or plain text.

    Examples:
      "• Led team\\n• Shipped v2"  -> [("Led team", True), ("Shipped v2", True)]
      "Intro\\n- Built API"        -> [("Intro", False), ("Built API", True)]
      "Short paragraph."          -> [("Short paragraph.", False)]
    """
    if not paragraph or not paragraph.strip():
        return []

    lines = [ln.strip() for ln in re.split(r"\r\n|\r|\n", paragraph)]
    lines = [ln for ln in lines if ln]

    if any(is_bullet(ln) for ln in lines):
        items = []
        for ln in lines:
            if is_bullet(ln):
                content = extract_bullet_content(ln)
                if content:
                    items.append(BulletItem(content, True))
            else:
                items.append(BulletItem(ln, False))
        return items

    text = paragraph.strip()
    if len(text) > LONG_DESCRIPTION_THRESHOLD:
        pieces = split_long_description(text)
        if len(pieces) > 1:
            return [BulletItem(p, True) for p in pieces]
    return [BulletItem(text, False)]


def split_into_bullets(paragraph: str) -> List[str]:
    return [item.text for item in process_description(paragraph)]
