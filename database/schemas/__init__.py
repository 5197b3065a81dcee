# database/schemas/__init__.py

# Teams first: matches, lineups and events reference them
from .team_schema import Player, Team

from .competition_schema import Competition
from .match_schema import Match, MatchEvent, MatchLineup
from .standings_schema import ComputedStanding, LeagueTable, LeagueTableRow

__all__ = [
    "Competition",
    "Team",
    "Player",
    "Match",
    "MatchLineup",
    "MatchEvent",
    "LeagueTable",
    "LeagueTableRow",
    "ComputedStanding",
]
