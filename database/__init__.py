from .base import Base
from .core.database_manager import DatabaseManager
from .factory.database_factory import DatabaseFactory, Repositories
from .repositories import (
    CompetitionRepository,
    ComputedStandingsRepository,
    EventRepository,
    LineupRepository,
    MatchRepository,
    PlayerRepository,
    StandingsRepository,
    TeamRepository,
)
from .store import SqlAlchemyTableStore, TableStore, chunked

__all__ = [
    "Base",
    "DatabaseManager",
    "DatabaseFactory",
    "Repositories",
    "TableStore",
    "SqlAlchemyTableStore",
    "chunked",
    "CompetitionRepository",
    "TeamRepository",
    "PlayerRepository",
    "MatchRepository",
    "LineupRepository",
    "EventRepository",
    "StandingsRepository",
    "ComputedStandingsRepository",
]
