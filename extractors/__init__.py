from .base_extractor import BaseDataExtractor
from .extraction_url_utils import URLParser
from .extractor_competition import CompetitionDataExtractor
from .extractor_match import MatchDataExtractor
from .fetcher import PageFetcher, polite_sleep, retrying
from .locators import EVENTS, LINEUP, STANDINGS, RegionHandle, RegionLocator, locate
from .navigation import (
    NavigationConfig,
    discover_competitions,
    discover_match_ids,
    extract_match_ids,
)
from .parsers import (
    CompetitionClassifier,
    EventParser,
    LineupParser,
    OverviewParser,
    StandingsParser,
    extract_birth_year,
    map_columns,
)

__all__ = [
    "BaseDataExtractor",
    "URLParser",
    "PageFetcher",
    "polite_sleep",
    "retrying",
    "RegionLocator",
    "RegionHandle",
    "locate",
    "LINEUP",
    "EVENTS",
    "STANDINGS",
    "MatchDataExtractor",
    "CompetitionDataExtractor",
    "LineupParser",
    "EventParser",
    "StandingsParser",
    "OverviewParser",
    "CompetitionClassifier",
    "extract_birth_year",
    "map_columns",
    "NavigationConfig",
    "discover_competitions",
    "discover_match_ids",
    "extract_match_ids",
]
