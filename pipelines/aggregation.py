# pipelines/aggregation.py
"""
Read-side aggregation over stored rows.

Pure functions over row dicts (as returned by the store), plus a couple
of thin loaders. Nothing here writes except ``store_computed_standings``.
"""

import logging
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from logger import EventType, Squad

logger = logging.getLogger(__name__)

FULL_MATCH = 90
POINTS_WIN = 3
POINTS_DRAW = 1
LIKELY_XI_SIZE = 11


def minutes_from_lineup_row(minute_in: Optional[int], minute_out: Optional[int]) -> int:
    """
    Minutes on the pitch: in defaults to kick-off, out to full time, both
    clamped to 0..90.
    """
    start = min(FULL_MATCH, max(0, minute_in if minute_in is not None else 0))
    end = min(FULL_MATCH, max(0, minute_out if minute_out is not None else FULL_MATCH))
    return max(0, end - start)


def appeared(row: Dict[str, Any]) -> bool:
    """Starters always appear; bench players only once subbed on."""
    return row.get("squad") == Squad.STARTING or row.get("minute_in") is not None


def minutes_played(row: Dict[str, Any]) -> int:
    if not appeared(row):
        return 0
    return minutes_from_lineup_row(row.get("minute_in"), row.get("minute_out"))


@dataclass
class PlayerSeasonRow:
    ksi_team_id: Optional[str]
    ksi_player_id: str
    player_name: Optional[str]
    season_year: Optional[int] = None
    matches_played: int = 0
    starts: int = 0
    minutes: int = 0
    goals: int = 0
    yellows: int = 0
    reds: int = 0

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


def player_season_rows(
    lineups: Iterable[Dict[str, Any]],
    events: Iterable[Dict[str, Any]],
    matches: Iterable[Dict[str, Any]],
) -> List[PlayerSeasonRow]:
    """
    Per (team, player) appearances, starts, minutes, goals and cards.

    Only lineup rows of the given matches count. A second yellow counts
    as a yellow and as a dismissal; own goals are not credited.
    """
    seasons = {m["ksi_match_id"]: m.get("season_year") for m in matches}
    rows: Dict[tuple, PlayerSeasonRow] = {}
    team_of: Dict[tuple, str] = {}

    for lineup in lineups:
        match_id = lineup["ksi_match_id"]
        player_id = lineup.get("ksi_player_id")
        if match_id not in seasons or not player_id:
            continue
        key = (lineup.get("ksi_team_id"), player_id)
        team_of[(match_id, player_id)] = lineup.get("ksi_team_id")

        row = rows.get(key)
        if row is None:
            row = rows[key] = PlayerSeasonRow(
                ksi_team_id=lineup.get("ksi_team_id"),
                ksi_player_id=player_id,
                player_name=lineup.get("player_name"),
                season_year=seasons[match_id],
            )
        if appeared(lineup):
            row.matches_played += 1
        if lineup.get("squad") == Squad.STARTING:
            row.starts += 1
        row.minutes += minutes_played(lineup)

    for event in events:
        player_id = event.get("ksi_player_id")
        match_id = event.get("ksi_match_id")
        if not player_id or (match_id, player_id) not in team_of:
            continue
        row = rows[(team_of[(match_id, player_id)], player_id)]
        event_type = event.get("event_type")
        if event_type in (EventType.GOAL, EventType.PENALTY):
            row.goals += 1
        if event_type in (EventType.YELLOW, EventType.SECOND_YELLOW):
            row.yellows += 1
        if event_type in EventType.DISMISSALS:
            row.reds += 1

    return sorted(rows.values(), key=lambda r: (-r.minutes, r.ksi_player_id))


def _result(goals_for: int, goals_against: int) -> str:
    if goals_for > goals_against:
        return "W"
    if goals_for < goals_against:
        return "L"
    return "D"


def _played(match: Dict[str, Any]) -> bool:
    return match.get("home_score") is not None and match.get("away_score") is not None


def team_season_summary(
    matches: Iterable[Dict[str, Any]],
    events: Iterable[Dict[str, Any]],
    team_id: str,
) -> Dict[str, Any]:
    """
    Played, W/D/L, points, goals and cards of one team over the matches.
    """
    summary = {
        "ksi_team_id": team_id,
        "played": 0,
        "wins": 0,
        "draws": 0,
        "losses": 0,
        "points": 0,
        "goals_for": 0,
        "goals_against": 0,
        "goal_diff": 0,
        "yellows": 0,
        "reds": 0,
    }
    match_ids = set()
    for match in matches:
        if team_id not in (match.get("home_team_ksi_id"), match.get("away_team_ksi_id")):
            continue
        match_ids.add(match["ksi_match_id"])
        if not _played(match):
            continue

        is_home = match.get("home_team_ksi_id") == team_id
        scored = match["home_score"] if is_home else match["away_score"]
        conceded = match["away_score"] if is_home else match["home_score"]

        summary["played"] += 1
        summary["goals_for"] += scored
        summary["goals_against"] += conceded
        outcome = _result(scored, conceded)
        if outcome == "W":
            summary["wins"] += 1
            summary["points"] += POINTS_WIN
        elif outcome == "D":
            summary["draws"] += 1
            summary["points"] += POINTS_DRAW
        else:
            summary["losses"] += 1

    summary["goal_diff"] = summary["goals_for"] - summary["goals_against"]

    for event in events:
        if event.get("ksi_match_id") not in match_ids or event.get("ksi_team_id") != team_id:
            continue
        if event.get("event_type") in (EventType.YELLOW, EventType.SECOND_YELLOW):
            summary["yellows"] += 1
        if event.get("event_type") in EventType.DISMISSALS:
            summary["reds"] += 1

    return summary


def likely_xi(player_rows: Sequence[Any], size: int = LIKELY_XI_SIZE) -> List[Any]:
    """
    Most-started players first (minutes break ties), filled up to ``size``
    with the remaining players by minutes.
    """

    def value(row, name):
        return (row.get(name) if isinstance(row, dict) else getattr(row, name, None)) or 0

    ranked = sorted(player_rows, key=lambda r: (-value(r, "starts"), -value(r, "minutes")))
    starters = [row for row in ranked if value(row, "starts") > 0][:size]
    if len(starters) == size:
        return starters
    chosen = {id(row) for row in starters}
    fill = [row for row in ranked if id(row) not in chosen][: size - len(starters)]
    return starters + fill


def compute_standings(matches: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    League table from stored results: 3 points a win, 1 a draw, ranked by
    points, goal difference, goals for, then team id.
    """
    table: Dict[str, Dict[str, int]] = defaultdict(
        lambda: {
            "played": 0,
            "wins": 0,
            "draws": 0,
            "losses": 0,
            "goals_for": 0,
            "goals_against": 0,
            "points": 0,
        }
    )
    for match in matches:
        home = match.get("home_team_ksi_id")
        away = match.get("away_team_ksi_id")
        if not home or not away or not _played(match):
            continue
        for team_id, scored, conceded in (
            (home, match["home_score"], match["away_score"]),
            (away, match["away_score"], match["home_score"]),
        ):
            entry = table[team_id]
            entry["played"] += 1
            entry["goals_for"] += scored
            entry["goals_against"] += conceded
            outcome = _result(scored, conceded)
            if outcome == "W":
                entry["wins"] += 1
                entry["points"] += POINTS_WIN
            elif outcome == "D":
                entry["draws"] += 1
                entry["points"] += POINTS_DRAW
            else:
                entry["losses"] += 1

    rows = []
    for team_id, entry in table.items():
        rows.append(
            {
                "ksi_team_id": team_id,
                **entry,
                "goal_diff": entry["goals_for"] - entry["goals_against"],
            }
        )
    rows.sort(key=lambda r: (-r["points"], -r["goal_diff"], -r["goals_for"], r["ksi_team_id"]))
    for position, row in enumerate(rows, start=1):
        row["position"] = position
    return rows


def _kickoff_sort_value(value) -> float:
    if value is None:
        return 0.0
    if isinstance(value, datetime):
        return value.timestamp()
    return datetime.fromisoformat(str(value).replace("Z", "+00:00")).timestamp()


def recent_appearances(
    lineups: Iterable[Dict[str, Any]],
    matches: Iterable[Dict[str, Any]],
    last_x: int,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Last ``last_x`` lineup rows per player, newest kickoff first, joined
    with the match's teams and score.
    """
    by_id = {m["ksi_match_id"]: m for m in matches}
    grouped: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
    for row in lineups:
        player_id = row.get("ksi_player_id")
        match = by_id.get(row.get("ksi_match_id"))
        if not player_id or match is None:
            continue
        grouped[player_id].append(
            {
                "ksi_player_id": player_id,
                "ksi_match_id": row["ksi_match_id"],
                "ksi_team_id": row.get("ksi_team_id"),
                "side": row.get("side"),
                "squad": row.get("squad"),
                "minute_in": row.get("minute_in"),
                "minute_out": row.get("minute_out"),
                "minutes": minutes_played(row),
                "kickoff_at": match.get("kickoff_at"),
                "home_team_ksi_id": match.get("home_team_ksi_id"),
                "away_team_ksi_id": match.get("away_team_ksi_id"),
                "home_score": match.get("home_score"),
                "away_score": match.get("away_score"),
            }
        )

    return {
        player_id: sorted(
            rows,
            key=lambda r: (-_kickoff_sort_value(r["kickoff_at"]), r["ksi_match_id"]),
        )[:last_x]
        for player_id, rows in grouped.items()
    }


def store_computed_standings(repositories, competition_id: str, season_year: int) -> List[Dict[str, Any]]:
    """
    Recompute one competition season from its stored matches and replace
    the ``computed_standings`` rows.
    """
    matches = repositories.matches.list_matches(
        season_year, season_year, competition_ids=[competition_id]
    )
    rows = compute_standings(matches)
    repositories.computed_standings.replace(competition_id, season_year, rows)
    logger.debug("computed standings %s/%s: %d teams", competition_id, season_year, len(rows))
    return rows
