# logger/constants_match.py
"""
Value records produced by the extractors.

Records carry no identity of their own; the natural keys (match id plus
lineup/event index, competition id plus season) are assigned during
extraction and normalisation.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


class Side:
    HOME = "home"
    AWAY = "away"
    ALL = (HOME, AWAY)


class Squad:
    STARTING = "xi"
    BENCH = "bench"
    ALL = (STARTING, BENCH)


class EventType:
    GOAL = "goal"
    OWN_GOAL = "own_goal"
    PENALTY = "penalty"
    YELLOW = "yellow"
    SECOND_YELLOW = "second_yellow"
    RED = "red"
    SUBSTITUTION = "substitution"
    UNKNOWN = "unknown"

    SCORING = (GOAL, OWN_GOAL, PENALTY)
    DISMISSALS = (SECOND_YELLOW, RED)
    ALL = (
        GOAL,
        OWN_GOAL,
        PENALTY,
        YELLOW,
        SECOND_YELLOW,
        RED,
        SUBSTITUTION,
        UNKNOWN,
    )


@dataclass(frozen=True)
class LineupEntry:
    """
    One player row of a match lineup
    """

    ksi_match_id: str
    lineup_idx: int
    side: str
    squad: str
    ksi_team_id: Optional[str]
    ksi_player_id: Optional[str]
    player_name: str
    shirt_number: Optional[int] = None
    is_gk: Optional[bool] = None
    minute_in: Optional[int] = None
    minute_out: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MatchEvent:
    """
    One timeline entry of a match
    """

    ksi_match_id: str
    event_idx: int
    minute: int
    stoppage: Optional[int]
    event_type: str
    ksi_team_id: Optional[str]
    ksi_player_id: Optional[str] = None
    player_name: Optional[str] = None
    sub_on_ksi_player_id: Optional[str] = None
    sub_off_ksi_player_id: Optional[str] = None
    sub_on_name: Optional[str] = None
    sub_off_name: Optional[str] = None
    notes: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def dedupe_key(self) -> Tuple:
        return (
            self.minute,
            self.stoppage,
            self.event_type,
            self.ksi_team_id,
            self.ksi_player_id,
            self.sub_on_ksi_player_id,
            self.sub_off_ksi_player_id,
        )

    def sort_key(self) -> Tuple:
        # ***> player ids break ties left by (minute, stoppage, team, type) <***
        return (
            self.minute,
            self.stoppage or 0,
            self.ksi_team_id or "",
            self.event_type,
            self.ksi_player_id or "",
            self.sub_on_ksi_player_id or "",
            self.sub_off_ksi_player_id or "",
        )

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StandingRow:
    """
    One team line of a league table. Columns the page omits stay None.
    """

    team_name: str
    position: Optional[int] = None
    ksi_team_id: Optional[str] = None
    played: Optional[int] = None
    wins: Optional[int] = None
    draws: Optional[int] = None
    losses: Optional[int] = None
    goals_for: Optional[int] = None
    goals_against: Optional[int] = None
    goal_diff: Optional[int] = None
    points: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StandingsTable:
    """
    A complete standings table found on a competition page
    """

    table_index: int
    phase_name: str
    variant: str
    headers: Tuple[str, ...]
    rows: Tuple[StandingRow, ...]


@dataclass(frozen=True)
class MatchOverview:
    """
    Header facts from a match overview page
    """

    home_team_id: Optional[str] = None
    away_team_id: Optional[str] = None
    home_team_name: Optional[str] = None
    away_team_name: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    kickoff_at: Optional[str] = None
    venue: Optional[str] = None

    @property
    def has_score(self) -> bool:
        return self.home_score is not None and self.away_score is not None


@dataclass(frozen=True)
class Competition:
    """
    A classified competition for one season
    """

    ksi_competition_id: str
    season_year: int
    name: str
    gender: Optional[str]
    category: str
    tier: Optional[int]
    is_phase: bool = False
    parent_competition_id: Optional[str] = None

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)
