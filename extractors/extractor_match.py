# extractors/extractor_match.py
"""
Match page extraction: locate a region, then hand it to its parser.
"""

import logging
from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

from logger import LineupEntry, MatchEvent, MatchOverview, Side

from .locators import EVENTS, LINEUP, RegionLocator
from .parsers.event_parser import EventParser
from .parsers.lineup_parser import LineupParser
from .parsers.overview_parser import OverviewParser

logger = logging.getLogger(__name__)


class MatchDataExtractor:
    """
    Extracts lineups, events and overview fields from match pages.

    A page without a recognisable region yields an empty list, never an
    error: many fixtures simply have no report yet.
    """

    def __init__(
        self,
        reversed_row_side: str = Side.AWAY,
        icon_variants: Iterable[str] = ("current", "legacy"),
        locator: Optional[RegionLocator] = None,
    ):
        self.locator = locator or RegionLocator()
        self.lineup_parser = LineupParser()
        self.event_parser = EventParser(
            reversed_row_side=reversed_row_side, icon_variants=icon_variants
        )
        self.overview_parser = OverviewParser()

    @classmethod
    def from_config(cls, config) -> "MatchDataExtractor":
        return cls(
            reversed_row_side=config.reversed_row_side,
            icon_variants=config.icon_variants,
        )

    def extract_lineups(
        self,
        document: BeautifulSoup,
        ksi_match_id: str,
        home_team_id: Optional[str] = None,
        away_team_id: Optional[str] = None,
    ) -> List[LineupEntry]:
        handle = self.locator.locate(document, LINEUP)
        if handle is None:
            logger.debug("match %s: no lineup region", ksi_match_id)
            return []
        logger.debug("match %s: lineup region via %s", ksi_match_id, handle.strategy)
        return self.lineup_parser.parse(
            handle.element, ksi_match_id, home_team_id, away_team_id
        )

    def extract_events(
        self,
        document: BeautifulSoup,
        ksi_match_id: str,
        home_team_id: Optional[str] = None,
        away_team_id: Optional[str] = None,
        player_to_team: Optional[Dict[str, str]] = None,
    ) -> List[MatchEvent]:
        handle = self.locator.locate(document, EVENTS)
        if handle is None:
            logger.debug("match %s: no events region", ksi_match_id)
            return []
        logger.debug("match %s: events region via %s", ksi_match_id, handle.strategy)
        return self.event_parser.parse(
            handle.element, ksi_match_id, home_team_id, away_team_id, player_to_team
        )

    def extract_overview(self, document: BeautifulSoup) -> MatchOverview:
        return self.overview_parser.parse(document)
