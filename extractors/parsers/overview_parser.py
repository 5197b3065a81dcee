# extractors/parsers/overview_parser.py
"""
Match overview extraction: teams, score, kickoff and venue.
"""

import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag

from logger import MatchOverview, ScrapingConstants

from ..base_extractor import BaseDataExtractor
from ..text_utils import clean_text

_SCORE = re.compile(ScrapingConstants.SCORE_PATTERN)
_KICKOFF = re.compile(ScrapingConstants.KICKOFF_PATTERN)
_VENUE_SUFFIX = re.compile(ScrapingConstants.VENUE_SUFFIX_PATTERN, re.IGNORECASE)
_CLOCK = re.compile(r"^\d{1,2}:\d{2}$")


class OverviewParser(BaseDataExtractor):
    """
    Reads the banner of a match overview page.

    Every field is optional: an unplayed fixture has no score, an old
    fixture sometimes no venue. Missing pieces come back as None.
    """

    def parse(self, document: BeautifulSoup) -> MatchOverview:
        teams = self.extract_teams(document)
        home = teams[0] if len(teams) > 0 else (None, None)
        away = teams[1] if len(teams) > 1 else (None, None)
        home_score, away_score = self.extract_score(document)

        return MatchOverview(
            home_team_id=home[0],
            away_team_id=away[0],
            home_team_name=home[1],
            away_team_name=away[1],
            home_score=home_score,
            away_score=away_score,
            kickoff_at=self.extract_kickoff(document),
            venue=self.extract_venue(document),
        )

    def extract_teams(self, document: BeautifulSoup) -> List[Tuple[str, str]]:
        """
        Team (id, name) pairs in page order, first one being the home side.
        """
        banner = document.find(class_=self.html.MATCH_BANNER_CLASS)
        anchors = self.team_links(banner) if banner is not None else []
        if len(anchors) < 2:
            anchors = self.team_links(document)

        teams = []
        seen = set()
        for anchor in anchors:
            team_id = self.link_id(anchor)
            name = self.element_text(anchor)
            if not team_id or not name or team_id in seen:
                continue
            seen.add(team_id)
            teams.append((team_id, name))
        return teams

    def extract_score(self, document: BeautifulSoup) -> Tuple[Optional[int], Optional[int]]:
        """
        First short text shaped like ``2 - 1``; both sides or neither.
        """
        root = document.body or document
        for element in root.find_all(True):
            text = self.element_text(element)
            if not text or len(text) > self.html.MAX_SCORE_TEXT:
                continue
            if _CLOCK.match(text):
                continue
            match = _SCORE.search(text)
            if match:
                return int(match.group(1)), int(match.group(2))
        return None, None

    def extract_kickoff(self, document: BeautifulSoup) -> Optional[str]:
        """'Fös 27. júní 2025 19:15' -> '2025-06-27T19:15:00Z'"""
        match = _KICKOFF.search(self.page_text(document))
        if not match:
            return None

        day, month_name, year, clock = match.groups()
        month = ScrapingConstants.ICELANDIC_MONTHS.get(month_name.lower())
        if month is None:
            return None
        hours, minutes = clock.split(":")
        return f"{year}-{month:02d}-{int(day):02d}T{int(hours):02d}:{minutes}:00Z"

    def extract_venue(self, document: BeautifulSoup) -> Optional[str]:
        root = document.body or document
        for text in root.find_all(string=True):
            if isinstance(text.parent, Tag) and text.parent.name in ("script", "style"):
                continue
            candidate = clean_text(text)
            if not candidate or len(candidate) > ScrapingConstants.MAX_VENUE_TEXT:
                continue
            if _VENUE_SUFFIX.search(candidate):
                return candidate
        return None

    def page_text(self, document: BeautifulSoup) -> str:
        return self.element_text(document.body or document)


def team_ids_from_banner(document: BeautifulSoup) -> Tuple[Optional[str], Optional[str]]:
    """Home and away team ids, used when a match row lacks them."""
    teams = OverviewParser().extract_teams(document)
    home = teams[0][0] if len(teams) > 0 else None
    away = teams[1][0] if len(teams) > 1 else None
    return home, away

