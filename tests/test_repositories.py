"""
Tests for the repositories on top of the row store.
"""

import pytest

from database import Repositories
from exceptions import DatabaseOperationError
from logger import (
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


def _competition(cid="100", season=2024, tier=1, gender="Male", name="Besta deild karla"):
    return Competition(
        ksi_competition_id=cid,
        season_year=season,
        name=name,
        gender=gender,
        category="Adults",
        tier=tier,
    )


def _lineup(match_id, idx, player_id, side=Side.HOME, squad=Squad.STARTING, team="10", **extra):
    return LineupEntry(
        ksi_match_id=match_id,
        lineup_idx=idx,
        side=side,
        squad=squad,
        ksi_team_id=team,
        ksi_player_id=player_id,
        player_name="Leikmaður %s" % player_id,
        **extra,
    )


def _event(match_id, idx, minute, event_type, team="10", **extra):
    return MatchEvent(
        ksi_match_id=match_id,
        event_idx=idx,
        minute=minute,
        stoppage=None,
        event_type=event_type,
        ksi_team_id=team,
        **extra,
    )


class TestCompetitions:
    def test_upsert_is_idempotent(self, repositories):
        repositories.competitions.upsert_competitions([_competition()])
        repositories.competitions.upsert_competitions([_competition()])

        assert len(repositories.competitions.list_competitions()) == 1

    def test_scope_filters(self, repositories):
        repositories.competitions.upsert_competitions(
            [
                _competition("1", 2022, 1),
                _competition("2", 2023, 2),
                _competition("3", 2024, 1),
                _competition("4", 2023, 1, gender="Female", name="Besta deild kvenna"),
            ]
        )
        rows = repositories.competitions.list_competitions(2023, 2024)
        assert [(r["ksi_competition_id"], r["season_year"]) for r in rows] == [
            ("2", 2023),
            ("3", 2024),
        ]

        assert len(repositories.competitions.list_competitions(season_from=2023)) == 2
        assert len(repositories.competitions.list_competitions(season_to=2022)) == 1
        assert len(repositories.competitions.list_competitions(tiers=[1])) == 2


class TestTeams:
    def test_first_writer_wins(self, repositories):
        repositories.teams.ensure_teams([("10", "Víkingur R.")])
        repositories.teams.ensure_teams([("10", "Víkingur")])
        repositories.teams.ensure_teams([("10", None)])

        assert repositories.teams.names_by_id(["10"]) == {"10": "Víkingur R."}

    def test_name_fills_empty(self, repositories):
        repositories.teams.ensure_teams([("10", None)])
        repositories.teams.ensure_teams([("10", "Víkingur R.")])

        assert repositories.teams.names_by_id(["10"]) == {"10": "Víkingur R."}

    def test_overwrite_mode(self, store):
        repositories = Repositories.build(store, overwrite_team_names=True)
        repositories.teams.ensure_teams([("10", "Víkingur")])
        repositories.teams.ensure_teams([("10", "Víkingur R.")])
        repositories.teams.ensure_teams([("10", None)])

        assert repositories.teams.names_by_id(["10"]) == {"10": "Víkingur R."}

    def test_ids_without_value_ignored(self, repositories):
        assert repositories.teams.ensure_teams([(None, "Nafnlaust"), ("", None)]) == 0


class TestMatches:
    def test_rediscovery_keeps_scraped_fields(self, repositories):
        matches = repositories.matches
        matches.upsert_discovered("100", 2024, ["1", "2", "1"])
        matches.apply_overview("1", MatchOverview("10", "20", "Víkingur R.", "KR", 2, 1,
                                                  "2025-06-27T19:15:00Z", "Víkingsvöllur"))
        matches.upsert_discovered("100", 2024, ["1", "2", "3"])

        rows = {r["ksi_match_id"]: r for r in matches.list_matches()}
        assert set(rows) == {"1", "2", "3"}
        assert rows["1"]["home_score"] == 2
        assert rows["1"]["home_team_ksi_id"] == "10"
        assert rows["1"]["venue"] == "Víkingsvöllur"

    def test_overview_never_blanks(self, repositories):
        matches = repositories.matches
        matches.upsert_discovered("100", 2024, ["1"])
        matches.apply_overview("1", MatchOverview("10", "20", "Víkingur R.", "KR", 2, 1,
                                                  "2025-06-27T19:15:00Z", "Víkingsvöllur"))
        matches.apply_overview("1", MatchOverview(home_team_id="10", away_team_id="20"))

        row = matches.list_matches()[0]
        assert (row["home_score"], row["away_score"]) == (2, 1)
        assert row["venue"] == "Víkingsvöllur"
        assert row["kickoff_at"] is not None

    def test_needing_overview(self, repositories):
        matches = repositories.matches
        matches.upsert_discovered("100", 2024, ["1", "2"])
        matches.apply_overview("1", MatchOverview("10", "20", "A", "B", 1, 1,
                                                  "2024-05-01T19:15:00Z", None))

        assert [r["ksi_match_id"] for r in matches.needing_overview(2024, 2024)] == ["2"]

    def test_set_teams(self, repositories):
        repositories.matches.upsert_discovered("100", 2024, ["1"])
        repositories.matches.set_teams("1", "10", None)

        row = repositories.matches.list_matches()[0]
        assert row["home_team_ksi_id"] == "10"
        assert row["away_team_ksi_id"] is None


class TestLineupsAndEvents:
    def setup_method(self):
        self.entries = [
            _lineup("1", 0, "101"),
            _lineup("1", 1, "102"),
            _lineup("1", 2, "201", side=Side.AWAY, team="20"),
            _lineup("1", 3, "103", squad=Squad.BENCH),
            _lineup("1", 4, None, squad=Squad.BENCH),
        ]

    def _seed(self, repositories):
        repositories.matches.upsert_discovered("100", 2024, ["1"])
        repositories.lineups.save("1", self.entries)

    def test_save_is_idempotent(self, repositories, store):
        self._seed(repositories)
        repositories.lineups.save("1", self.entries)

        assert store.count("match_lineups") == 5
        assert store.count("teams") == 2

    def test_replace_clears_old_rows(self, repositories, store):
        self._seed(repositories)
        repositories.lineups.save("1", self.entries[:2], replace=True)

        assert store.count("match_lineups") == 2

    def test_backfilled_minutes_survive_rescrape(self, repositories):
        self._seed(repositories)
        key = {"ksi_match_id": "1", "side": Side.HOME, "squad": Squad.BENCH, "lineup_idx": 3}
        repositories.lineups.set_minutes(key, 60, None)
        repositories.lineups.save("1", self.entries)

        rows = {r["lineup_idx"]: r for r in repositories.lineups.for_matches(["1"])}
        assert rows[3]["minute_in"] == 60

    def test_lookups(self, repositories):
        self._seed(repositories)

        assert repositories.lineups.player_team_map("1") == {
            "101": "10",
            "102": "10",
            "201": "20",
            "103": "10",
        }
        assert repositories.lineups.matches_missing_player_ids() == ["1"]
        assert repositories.lineups.matches_with_lineups() == ["1"]
        assert repositories.lineups.player_names()["201"] == "Leikmaður 201"

    def test_lineup_needs_match_row(self, repositories):
        with pytest.raises(DatabaseOperationError):
            repositories.lineups.save("999", [_lineup("999", 0, "1")])

    def test_events_save(self, repositories, store):
        self._seed(repositories)
        events = [
            _event("1", 0, 10, EventType.GOAL, ksi_player_id="101"),
            _event("1", 1, 30, EventType.YELLOW, team="30", ksi_player_id="301"),
        ]
        repositories.events.save("1", events)
        repositories.events.save("1", events)

        assert store.count("match_events") == 2
        assert repositories.teams.names_by_id(["30"]) == {"30": None}

        repositories.events.save("1", events[:1], replace=True)
        assert len(repositories.events.for_matches(["1"])) == 1


class TestPlayers:
    def test_birth_year_not_erased(self, repositories):
        players = repositories.players
        players.upsert_players([{"ksi_player_id": "1", "name": "Jón", "birth_year": 1995}])
        players.upsert_players([{"ksi_player_id": "1", "name": "Jón", "birth_year": None}])

        assert players.known_birth_years() == {"1": 1995}


class TestStandings:
    def _table(self, rows, index=0, phase="Besta deild karla"):
        return StandingsTable(
            table_index=index,
            phase_name=phase,
            variant="new",
            headers=("Lið", "S", "U", "J", "T", "M", "+/-", "S"),
            rows=tuple(rows),
        )

    def test_replace_table(self, repositories):
        standings = repositories.standings
        first = self._table([StandingRow("Víkingur R.", 1, "10"), StandingRow("KR", 2, "20")])
        second = self._table([StandingRow("KR", 1, "20")])

        assert standings.replace_table("100", 2024, first) == 2
        assert standings.replace_table("100", 2024, second) == 1

        tables = standings.tables_for("100", 2024)
        assert len(tables) == 1
        rows = standings.rows_for(tables[0]["id"])
        assert [(r["row_idx"], r["team_name"]) for r in rows] == [(0, "KR")]

    def test_tables_kept_apart(self, repositories):
        standings = repositories.standings
        standings.replace_table("100", 2024, self._table([StandingRow("A", 1)], 0, "Efri hluti"))
        standings.replace_table("100", 2024, self._table([StandingRow("B", 1)], 1, "Neðri hluti"))

        assert [t["phase_name"] for t in standings.tables_for("100", 2024)] == [
            "Efri hluti",
            "Neðri hluti",
        ]
