"""
Bulk word list parsing and language probes
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Supports "go, went, gone - идти", "word — перевод", "word: перевод",
# "word | перевод" and "word<TAB>перевод"
SEPARATOR_PATTERN = re.compile(r"\s*[-—:|\t]\s*")
LINE_PATTERN = re.compile(r"\r?\n")
ARROW = "→"

_RUSSIAN_PATTERN = re.compile(r"[а-яё]", re.IGNORECASE)
_ENGLISH_PATTERN = re.compile(r"[a-z]", re.IGNORECASE)


@dataclass
class ParsedWord:
    """One successfully parsed bulk-import record"""

    headword: str
    translation: str
    forms: list[str] | None = None


def is_russian(text: str | None) -> bool:
    """Check if text contains Cyrillic letters"""
    return bool(_RUSSIAN_PATTERN.search(text or ""))


def is_english(text: str | None) -> bool:
    """Check if text contains Latin letters"""
    return bool(_ENGLISH_PATTERN.search(text or ""))


def split_forms(left: str) -> list[str] | None:
    """Split a left part into an ordered forms list, if it is one"""
    if ARROW in left:
        raw_forms = left.split(ARROW)
    elif "," in left:
        raw_forms = left.split(",")
    else:
        return None

    cleaned = [form.strip() for form in raw_forms if form.strip()]
    if len(cleaned) >= 2:
        return cleaned
    return None


def parse_bulk_line(line: str) -> ParsedWord | None:
    """
    Parse a single "left <sep> translation" record

    Args:
        line: One line of user input

    Returns:
        ParsedWord, or None when the line has no separator or an empty side
    """
    if not line or not line.strip():
        return None

    parts = SEPARATOR_PATTERN.split(line.strip(), maxsplit=1)
    if len(parts) < 2:
        return None

    left = parts[0].strip()
    translation = parts[1].strip()
    if not left or not translation:
        return None

    forms = split_forms(left)
    headword = forms[0] if forms else left
    return ParsedWord(headword=headword, translation=translation, forms=forms)


def parse_bulk_text(text: str | None) -> list[ParsedWord]:
    """Parse newline-delimited records, silently skipping malformed lines"""
    if not text or not text.strip():
        return []

    parsed = []
    skipped = 0
    for line in LINE_PATTERN.split(text.strip()):
        line = line.strip()
        if not line:
            continue
        word = parse_bulk_line(line)
        if word is None:
            skipped += 1
            continue
        parsed.append(word)

    logger.info(f"Parsed {len(parsed)} words from bulk text, skipped {skipped} lines")
    return parsed
