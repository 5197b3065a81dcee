from .constants import HTMLConstants, ScrapingConstants
from .constants_match import (
    Competition,
    EventType,
    LineupEntry,
    MatchEvent,
    MatchOverview,
    Side,
    Squad,
    StandingRow,
    StandingsTable,
)
from .logger import ColoredFormatter, setup_logger
from .run_summary import RunStats, render_run_summary

__all__ = [
    "HTMLConstants",
    "ScrapingConstants",
    "Side",
    "Squad",
    "EventType",
    "LineupEntry",
    "MatchEvent",
    "StandingRow",
    "StandingsTable",
    "MatchOverview",
    "Competition",
    "ColoredFormatter",
    "setup_logger",
    "RunStats",
    "render_run_summary",
]
