"""
Display labels: shorten noisy material descriptions for chart axes and wrap
long labels onto several lines.

Shortening is cosmetic only. Grouping always uses the original description.
"""

import re

from .config import MAX_LABEL_LENGTH, MIN_WORD_BOUNDARY, UNIT_TOKENS

_UNIT_PATTERN = re.compile(
    r"\b[0-9.]+\s*(" + "|".join(re.escape(unit) for unit in UNIT_TOKENS) + r")\b",
    re.IGNORECASE,
)
_QUALIFIER_PATTERN = re.compile(
    r"\b(SIZE\s+[A-Z]+|BALE OF \d+|PART NO\.?\s*[A-Z0-9]+)\b",
    re.IGNORECASE,
)
_PARENS_PATTERN = re.compile(r"\([^)]*\)")
# trailing "- FINE", "- 2 ROLLS" style qualifiers
_TRAILING_DASH_PATTERN = re.compile(r"-\s*[a-zA-Z0-9\s]+$")
_NON_LETTER_PATTERN = re.compile(r"[^a-zA-Z\s-]")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def _title_words(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def shorten_material_name(description: str | None) -> str:
    """Canonicalise a material description into a short title-cased label.

    "HW;  10MM Galvanized Bolt (Grade 8)" -> "Galvanized Bolt"

    Steps run in order: take the segment after the first ";" (if any), drop
    number+unit tokens, SIZE / BALE OF / PART NO qualifiers, parenthesised
    text and a trailing "- ..." qualifier, keep only letters, spaces and
    hyphens, then title-case and cap at 30 characters on a word boundary.
    Falls back to the title-cased first segment when nothing survives.
    """
    if not description:
        return "Unknown"

    parts = description.split(";")
    first = parts[0].strip()
    text = parts[1].strip() if len(parts) > 1 else first

    text = _UNIT_PATTERN.sub("", text)
    text = _QUALIFIER_PATTERN.sub("", text)
    text = _PARENS_PATTERN.sub("", text)
    text = _TRAILING_DASH_PATTERN.sub("", text)
    text = _NON_LETTER_PATTERN.sub(" ", text)

    text = _WHITESPACE_PATTERN.sub(" ", text.strip())
    text = _title_words(text)

    if len(text) > MAX_LABEL_LENGTH:
        text = text[:MAX_LABEL_LENGTH]
        last_space = text.rfind(" ")
        if last_space > MIN_WORD_BOUNDARY:
            text = text[:last_space]

    return text.strip() or _title_words(first)[:MAX_LABEL_LENGTH]


def wrap_label(label: str, width: int = MAX_LABEL_LENGTH) -> str | list[str]:
    """Greedily word-wrap a label longer than ``width`` into lines.

    Labels that fit are returned unchanged as a string; longer ones become a
    list of lines. A single word longer than ``width`` keeps its own line.
    """
    if len(label) <= width:
        return label

    lines = [""]
    for word in label.split(" "):
        if len(lines[-1] + word) > width and lines[-1]:
            lines.append("")
        lines[-1] += (" " if lines[-1] else "") + word
    return lines
