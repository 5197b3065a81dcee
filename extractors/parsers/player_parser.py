# extractors/parsers/player_parser.py
"""Player profile extraction."""

import re
from datetime import datetime, timezone
from typing import Optional

from bs4 import BeautifulSoup

from logger import HTMLConstants, ScrapingConstants

from ..text_utils import clean_text

_BIRTH_YEAR = re.compile(ScrapingConstants.BIRTH_YEAR_PATTERN)


def extract_birth_year(document: BeautifulSoup, current_year: Optional[int] = None) -> Optional[int]:
    """
    Birth year from a player profile.

    The first ``span.eyebrow-2`` holds it on current pages; older profiles
    only show it somewhere inside the first ``.col-span-12`` card.
    """
    current_year = current_year or datetime.now(timezone.utc).year

    primary = document.select_one(f"span.{HTMLConstants.BIRTH_YEAR_CLASS}")
    year = _plausible_year(primary.get_text() if primary else "", current_year)
    if year is not None:
        return year

    block = document.find(class_=HTMLConstants.PROFILE_BLOCK_CLASS)
    return _plausible_year(block.get_text(" ") if block else "", current_year)


def _plausible_year(text: str, current_year: int) -> Optional[int]:
    match = _BIRTH_YEAR.search(clean_text(text))
    if not match:
        return None
    year = int(match.group(1))
    if ScrapingConstants.MIN_BIRTH_YEAR <= year <= current_year:
        return year
    return None
