# extractors/text_utils.py
"""
Text normalisation helpers shared by the extractors.
"""

import re
import unicodedata
from typing import Optional, Tuple

from logger import ScrapingConstants

_WHITESPACE = re.compile(r"\s+")
_ID = re.compile(ScrapingConstants.ID_PATTERN)
_MINUTE = re.compile(ScrapingConstants.MINUTE_PATTERN)
_TRAILING_MINUTE = re.compile(ScrapingConstants.TRAILING_MINUTE_PATTERN)
_PUNCTUATION_ONLY = re.compile(ScrapingConstants.PUNCTUATION_ONLY_PATTERN)
_GLYPHS = re.compile(f"[{ScrapingConstants.MINUTE_GLYPHS}]")


def clean_text(value) -> str:
    """Collapse runs of whitespace and trim; None becomes an empty string."""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def strip_diacritics(value: str) -> str:
    """Remove combining accent marks (á -> a). Leaves ð/þ/æ/ö alone."""
    decomposed = unicodedata.normalize("NFD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold_icelandic(value: str) -> str:
    """
    Fold Icelandic text to ASCII.

    Accent stripping alone is not enough: ð, þ and æ are letters of their
    own, so "Lið" only becomes "Lid" through the substitution table.
    """
    folded = strip_diacritics(value)
    for letter, replacement in ScrapingConstants.ICELANDIC_FOLDS.items():
        folded = folded.replace(letter, replacement)
    return folded


def norm_header(value: str) -> str:
    """Header comparison form: folded, lower-cased, whitespace collapsed."""
    return clean_text(fold_icelandic(value).lower())


def to_int(value) -> Optional[int]:
    """
    Parse a table cell as an integer, keeping only digits and minus signs.

    "12" -> 12, "+5" -> 5, "-3" -> -3, "" or "-" -> None
    """
    if value is None:
        return None
    digits = re.sub(r"[^\d-]", "", str(value)).strip()
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        return None


def extract_id(href: Optional[str]) -> Optional[str]:
    """Pull the numeric ``id`` query parameter out of a link."""
    if not href:
        return None
    match = _ID.search(href)
    return match.group(1) if match else None


def parse_minute(text: str) -> Tuple[Optional[int], Optional[int]]:
    """
    Find the first minute marker in a text.

    Returns:
        (minute, stoppage) with both None when no marker is present,
        e.g. "90+2´" -> (90, 2), "22´" -> (22, None)
    """
    match = _MINUTE.search(clean_text(text))
    if not match:
        return None, None
    stoppage = int(match.group(2)) if match.group(2) else None
    return int(match.group(1)), stoppage


def count_minute_markers(text: str) -> int:
    return len(_MINUTE.findall(text or ""))


def strip_minute_tokens(text: str) -> str:
    return clean_text(_MINUTE.sub(" ", text or ""))


def strip_trailing_minutes(name: str) -> str:
    """'Jón Jónsson 55´' -> 'Jón Jónsson'"""
    return _TRAILING_MINUTE.sub("", name or "").strip()


def strip_minute_glyphs(text: str) -> str:
    return clean_text(_GLYPHS.sub(" ", text or ""))


def is_punctuation_only(text: str) -> bool:
    return bool(_PUNCTUATION_ONLY.match(text))
