from .base_repository import BaseRepository
from .competition_repository import CompetitionRepository
from .league_table_repository import ComputedStandingsRepository, StandingsRepository
from .match_repository import EventRepository, LineupRepository, MatchRepository
from .team_repository import PlayerRepository, TeamRepository

__all__ = [
    "BaseRepository",
    "CompetitionRepository",
    "TeamRepository",
    "PlayerRepository",
    "MatchRepository",
    "LineupRepository",
    "EventRepository",
    "StandingsRepository",
    "ComputedStandingsRepository",
]
