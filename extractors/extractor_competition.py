# extractors/extractor_competition.py
"""
Competition page extraction: standings tables and listing classification.
"""

import logging
from typing import Dict, List

from bs4 import BeautifulSoup

from logger import Competition, StandingsTable

from .locators import STANDINGS, locate_all
from .parsers.competition_parser import CompetitionClassifier
from .parsers.standings_parser import StandingsParser

logger = logging.getLogger(__name__)


class CompetitionDataExtractor:
    """
    Extracts standings from competition pages and classifies listings.
    """

    def __init__(self):
        self.standings_parser = StandingsParser()
        self.classifier = CompetitionClassifier()

    def extract_standings(self, document: BeautifulSoup) -> List[StandingsTable]:
        """
        Every standings table on the page; an empty list when there is none.
        """
        handles = locate_all(document, STANDINGS)
        tables = self.standings_parser.parse_tables(handle.element for handle in handles)
        logger.debug("standings: %d candidate tables, %d kept", len(handles), len(tables))
        return tables

    def classify_listing(
        self, found: Dict[str, str], season: int, category: str
    ) -> List[Competition]:
        competitions = self.classifier.classify_all(found, season, category)
        logger.debug(
            "season %d: %d links, %d competitions kept", season, len(found), len(competitions)
        )
        return competitions
