from .column_mapper import VARIANT_CLASSIC, VARIANT_NEW, ColumnMap, map_columns
from .competition_parser import (
    CompetitionClassifier,
    extract_competition_id,
    extract_competition_links,
)
from .event_parser import EventParser, build_notes, order_events
from .lineup_parser import LineupParser
from .overview_parser import OverviewParser, team_ids_from_banner
from .parser_config import IconVariant, ParserConfig
from .player_parser import extract_birth_year
from .standings_parser import StandingsParser, parse_goals_pair, split_rank

__all__ = [
    "ParserConfig",
    "IconVariant",
    "ColumnMap",
    "VARIANT_NEW",
    "VARIANT_CLASSIC",
    "map_columns",
    "LineupParser",
    "EventParser",
    "build_notes",
    "order_events",
    "StandingsParser",
    "parse_goals_pair",
    "split_rank",
    "OverviewParser",
    "team_ids_from_banner",
    "CompetitionClassifier",
    "extract_competition_id",
    "extract_competition_links",
    "extract_birth_year",
]
