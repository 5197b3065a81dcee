# database/repositories/match_repository.py
"""
Match, lineup and event repositories.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from logger import LineupEntry, MatchEvent, MatchOverview

from .base_repository import BaseRepository, parse_timestamp, utc_now
from .competition_repository import _season_filter
from .team_repository import TeamRepository

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository):
    table = "matches"
    conflict_columns = ("ksi_match_id",)

    def __init__(self, store, teams: TeamRepository):
        super().__init__(store)
        self.teams = teams

    def upsert_discovered(self, competition_id: str, season_year: int, match_ids: Iterable[str]) -> int:
        """
        Register discovered match ids.

        Only identifying columns are written, so a re-discovery leaves
        scraped fields (teams, score, kickoff) as they are.
        """
        rows = [
            {
                "ksi_match_id": match_id,
                "ksi_competition_id": competition_id,
                "season_year": season_year,
            }
            for match_id in dict.fromkeys(match_ids)
        ]
        return self.upsert_rows(rows)

    def apply_overview(self, match_id: str, overview: MatchOverview) -> int:
        """
        Patch a match with overview fields; teams are ensured first.
        """
        self.teams.ensure_teams(
            [
                (overview.home_team_id, overview.home_team_name),
                (overview.away_team_id, overview.away_team_name),
            ]
        )
        values = {
            "home_team_ksi_id": overview.home_team_id,
            "away_team_ksi_id": overview.away_team_id,
            "kickoff_at": parse_timestamp(overview.kickoff_at),
            "venue": overview.venue,
            "scraped_overview_at": utc_now(),
        }
        # ***> both scores or neither <***
        if overview.has_score:
            values["home_score"] = overview.home_score
            values["away_score"] = overview.away_score
        # ***> never blank out fields an earlier pass already filled <***
        values = {k: v for k, v in values.items() if v is not None}
        return self.store.update(self.table, values, {"ksi_match_id": match_id})

    def set_teams(self, match_id: str, home_team_id: Optional[str], away_team_id: Optional[str]) -> int:
        self.teams.ensure_teams([(home_team_id, None), (away_team_id, None)])
        values = {
            key: value
            for key, value in (
                ("home_team_ksi_id", home_team_id),
                ("away_team_ksi_id", away_team_id),
            )
            if value
        }
        return self.store.update(self.table, values, {"ksi_match_id": match_id})

    def mark_report_scraped(self, match_id: str) -> int:
        return self.store.update(
            self.table, {"scraped_report_at": utc_now()}, {"ksi_match_id": match_id}
        )

    def list_matches(
        self,
        season_from: Optional[int] = None,
        season_to: Optional[int] = None,
        competition_ids: Optional[Sequence[str]] = None,
        match_ids: Optional[Sequence[str]] = None,
        extra_filters: Optional[Dict] = None,
    ) -> List[Dict]:
        filters: Dict = dict(extra_filters or {})
        _season_filter(filters, season_from, season_to)
        if competition_ids:
            filters["ksi_competition_id"] = ("in", list(competition_ids))
        if match_ids is not None:
            filters["ksi_match_id"] = ("in", list(match_ids))
        return self.select_all(filters, order_by=["season_year", "ksi_match_id"])

    def needing_overview(self, season_from=None, season_to=None) -> List[Dict]:
        """Matches still missing kickoff, either team or the score."""
        return [
            row
            for row in self.list_matches(season_from, season_to)
            if row["kickoff_at"] is None
            or row["home_team_ksi_id"] is None
            or row["away_team_ksi_id"] is None
            or row["home_score"] is None
        ]


class LineupRepository(BaseRepository):
    table = "match_lineups"
    conflict_columns = ("ksi_match_id", "side", "squad", "lineup_idx")

    def __init__(self, store, teams: TeamRepository):
        super().__init__(store)
        self.teams = teams

    def save(self, match_id: str, entries: Sequence[LineupEntry], replace: bool = False) -> int:
        """
        Upsert a match's lineup; ``replace`` clears the old rows first.
        """
        if replace:
            self.delete_for_match(match_id)
        if not entries:
            return 0
        self.teams.ensure_teams((entry.ksi_team_id, None) for entry in entries)
        # ***> backfilled minutes survive a re-scrape of the report <***
        return self.upsert_rows(
            [entry.to_row() for entry in entries],
            only_missing=("minute_in", "minute_out"),
        )

    def delete_for_match(self, match_id: str) -> int:
        return self.store.delete(self.table, {"ksi_match_id": match_id})

    def for_matches(self, match_ids: Sequence[str]) -> List[Dict]:
        return self.select_in("ksi_match_id", match_ids)

    def player_team_map(self, match_id: str) -> Dict[str, str]:
        """Player id -> team id from a match's stored lineup."""
        rows = self.select(
            {"ksi_match_id": match_id, "ksi_player_id": ("not_null", None)},
            columns=["ksi_player_id", "ksi_team_id"],
        )
        return {row["ksi_player_id"]: row["ksi_team_id"] for row in rows if row["ksi_team_id"]}

    def matches_missing_player_ids(self) -> List[str]:
        rows = self.select_all({"ksi_player_id": ("is", None)}, columns=["ksi_match_id"])
        return sorted({row["ksi_match_id"] for row in rows})

    def matches_with_lineups(self) -> List[str]:
        rows = self.select_all(columns=["ksi_match_id"])
        return sorted({row["ksi_match_id"] for row in rows})

    def player_names(self) -> Dict[str, Optional[str]]:
        """Every player id seen in a lineup, with the first non-empty name."""
        rows = self.select_all(
            {"ksi_player_id": ("not_null", None)},
            columns=["ksi_player_id", "player_name"],
        )
        names: Dict[str, Optional[str]] = {}
        for row in rows:
            if names.get(row["ksi_player_id"]) is None:
                names[row["ksi_player_id"]] = row["player_name"] or None
        return names

    def set_minutes(self, key: Dict, minute_in: Optional[int], minute_out: Optional[int]) -> int:
        values = {}
        if minute_in is not None:
            values["minute_in"] = minute_in
        if minute_out is not None:
            values["minute_out"] = minute_out
        filters = {column: key[column] for column in self.conflict_columns}
        return self.store.update(self.table, values, filters)


class EventRepository(BaseRepository):
    table = "match_events"
    conflict_columns = ("ksi_match_id", "event_idx")

    def __init__(self, store, teams: TeamRepository):
        super().__init__(store)
        self.teams = teams

    def save(self, match_id: str, events: Sequence[MatchEvent], replace: bool = False) -> int:
        if replace:
            self.store.delete(self.table, {"ksi_match_id": match_id})
        if not events:
            return 0
        self.teams.ensure_teams((event.ksi_team_id, None) for event in events)
        return self.upsert_rows([event.to_row() for event in events])

    def for_matches(self, match_ids: Sequence[str]) -> List[Dict]:
        return self.select_in("ksi_match_id", match_ids)
