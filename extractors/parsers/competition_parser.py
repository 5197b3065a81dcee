# extractors/parsers/competition_parser.py

"""
Competition listing parser and name classifier.

Listing pages only carry a link per competition; gender and division are
inferred from the display name, which varies with sponsors over the years.
"""

import re
from typing import Dict, List, Optional, Tuple

from bs4 import BeautifulSoup

from logger import Competition, HTMLConstants, ScrapingConstants

from ..text_utils import clean_text, strip_diacritics

_ID = re.compile(ScrapingConstants.ID_PATTERN)
_PATH_ID = re.compile(ScrapingConstants.COMPETITION_PATH_ID_PATTERN)


def extract_competition_id(href: Optional[str]) -> Optional[str]:
    """``?id=123`` first, then ``/mot/123``."""
    if not href:
        return None
    match = _ID.search(href) or _PATH_ID.search(href)
    return match.group(1) if match else None


def extract_competition_links(document: BeautifulSoup) -> List[Tuple[str, str]]:
    """
    (competition id, display name) pairs from a listing page, in page order.

    Duplicates are kept; the caller decides which name wins.
    """
    links = []
    for anchor in document.find_all("a", href=True):
        href = anchor["href"]
        if HTMLConstants.COMPETITION_LINK_MARKER not in href:
            continue
        competition_id = extract_competition_id(href)
        if not competition_id:
            continue
        name = clean_text(anchor.get_text())
        if not name:
            continue
        links.append((competition_id, name))
    return links


class CompetitionClassifier:
    """
    Maps competition display names onto gender and men's division tier.
    """

    GENDER_FEMALE = "Female"
    GENDER_MALE = "Male"

    DRAFT_MARKER = re.compile(r"\s*DR[ÖO]G\b", re.IGNORECASE)
    TRAILING_HYPHEN = re.compile(r"\s*-\s*$")

    # ***> sponsor names change, the division numbering does not <***
    TIER_PATTERNS: List[Tuple[int, re.Pattern]] = [
        (1, re.compile(r"(besta\s*deild|bestadeild|pepsi\s*max|urvalsdeild).*karla", re.I)),
        (2, re.compile(r"(lengjudeild|inkasso|1\.\s*deild).*karla", re.I)),
        (3, re.compile(r"2\.\s*deild.*karla", re.I)),
        (4, re.compile(r"3\.\s*deild.*karla", re.I)),
        (5, re.compile(r"4\.\s*deild.*karla", re.I)),
        (6, re.compile(r"5\.\s*deild.*karla", re.I)),
    ]

    def clean_name(self, name: str) -> str:
        """Drop the draft marker, collapse spaces and a dangling hyphen."""
        cleaned = self.DRAFT_MARKER.sub("", name or "")
        cleaned = clean_text(cleaned)
        return self.TRAILING_HYPHEN.sub("", cleaned).strip()

    def infer_gender(self, name: str) -> Optional[str]:
        folded = strip_diacritics(name or "").lower()
        if "kvenna" in folded or "kvk" in folded:
            return self.GENDER_FEMALE
        if "karla" in folded:
            return self.GENDER_MALE
        return None

    def infer_tier(self, name: str) -> Optional[int]:
        folded = strip_diacritics(name or "")
        for tier, pattern in self.TIER_PATTERNS:
            if pattern.search(folded):
                return tier
        return None

    def classify(
        self, competition_id: str, raw_name: str, season: int, category: str
    ) -> Optional[Competition]:
        """
        Build a Competition for a men's league with a known tier, else None.
        """
        name = self.clean_name(raw_name)
        gender = self.infer_gender(name)
        if gender != self.GENDER_MALE:
            return None

        tier = self.infer_tier(name)
        if tier is None:
            return None

        return Competition(
            ksi_competition_id=str(competition_id),
            season_year=int(season),
            name=name,
            gender=gender,
            category=category,
            tier=tier,
        )

    def classify_all(
        self, found: Dict[str, str], season: int, category: str
    ) -> List[Competition]:
        competitions = []
        for competition_id, raw_name in found.items():
            competition = self.classify(competition_id, raw_name, season, category)
            if competition is not None:
                competitions.append(competition)
        return competitions
