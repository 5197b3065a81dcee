"""
Tests for normalisation, minute backfill and aggregation.
"""

from datetime import datetime, timezone

from logger import EventType, LineupEntry, MatchEvent, Side, Squad
from pipelines import (
    assign_lineup_slots,
    backfill_substitution_minutes,
    compute_standings,
    dedupe_by_key,
    likely_xi,
    minutes_from_lineup_row,
    player_season_rows,
    recent_appearances,
    records_frame,
    sort_and_index_events,
    store_computed_standings,
    team_season_summary,
)


def _row(match_id, idx, player_id, squad=Squad.STARTING, team="10", side=Side.HOME, **extra):
    row = {
        "ksi_match_id": match_id,
        "lineup_idx": idx,
        "side": side,
        "squad": squad,
        "ksi_team_id": team,
        "ksi_player_id": player_id,
        "player_name": "Leikmaður %s" % player_id,
        "minute_in": None,
        "minute_out": None,
    }
    row.update(extra)
    return row


def _sub(match_id, idx, minute, on_id, off_id, team="10"):
    return {
        "ksi_match_id": match_id,
        "event_idx": idx,
        "minute": minute,
        "event_type": EventType.SUBSTITUTION,
        "ksi_team_id": team,
        "ksi_player_id": None,
        "sub_on_ksi_player_id": on_id,
        "sub_off_ksi_player_id": off_id,
    }


def _card(match_id, idx, minute, event_type, player_id, team="10"):
    return {
        "ksi_match_id": match_id,
        "event_idx": idx,
        "minute": minute,
        "event_type": event_type,
        "ksi_team_id": team,
        "ksi_player_id": player_id,
    }


def _match(match_id, home, away, home_score, away_score, season=2024, kickoff=None):
    return {
        "ksi_match_id": match_id,
        "season_year": season,
        "home_team_ksi_id": home,
        "away_team_ksi_id": away,
        "home_score": home_score,
        "away_score": away_score,
        "kickoff_at": kickoff,
    }


class TestNormalization:
    def test_assign_lineup_slots(self):
        entries = [
            LineupEntry("1", 7, Side.HOME, Squad.STARTING, "10", "a", "A"),
            LineupEntry("1", 7, Side.AWAY, Squad.STARTING, "20", "b", "B"),
            LineupEntry("1", 2, Side.HOME, Squad.BENCH, "10", "c", "C"),
        ]
        slotted = assign_lineup_slots(entries)

        assert [e.lineup_idx for e in slotted] == [0, 1, 2]
        assert [e.ksi_player_id for e in slotted] == ["a", "b", "c"]

    def test_sort_and_index_events(self):
        events = [
            MatchEvent("1", 9, 80, None, EventType.GOAL, "10", "7"),
            MatchEvent("1", 9, 45, 2, EventType.YELLOW, "20", "8"),
            MatchEvent("1", 9, 45, None, EventType.YELLOW, "20", "9"),
        ]
        ordered = sort_and_index_events(events)

        assert [(e.minute, e.stoppage) for e in ordered] == [(45, None), (45, 2), (80, None)]
        assert [e.event_idx for e in ordered] == [0, 1, 2]

    def test_dedupe_by_key(self):
        assert dedupe_by_key([3, 1, 3, 2, 1], key=lambda x: x) == [3, 1, 2]

    def test_records_frame_drops_raw(self):
        entries = [LineupEntry("1", 0, Side.HOME, Squad.STARTING, "10", "a", "A", raw={"x": 1})]
        frame = records_frame(entries)

        assert "raw" not in frame.columns
        assert frame.loc[0, "player_name"] == "A"
        assert records_frame([]).empty


class TestBackfill:
    def test_minutes_from_substitutions(self):
        lineups = [
            _row("1", 0, "off"),
            _row("1", 11, "on", squad=Squad.BENCH),
            _row("1", 12, "unused", squad=Squad.BENCH),
        ]
        patches = backfill_substitution_minutes(lineups, [_sub("1", 0, 63, "on", "off")])

        by_player = {p.lineup_idx: p for p in patches}
        assert set(by_player) == {0, 11}
        assert by_player[0].minute_out == 63 and by_player[0].minute_in is None
        assert by_player[11].minute_in == 63 and by_player[11].minute_out is None

    def test_existing_minutes_not_overwritten(self):
        lineups = [_row("1", 11, "on", squad=Squad.BENCH, minute_in=60)]
        assert backfill_substitution_minutes(lineups, [_sub("1", 0, 63, "on", "x")]) == []

    def test_first_substitution_wins(self):
        lineups = [_row("1", 11, "p", squad=Squad.BENCH)]
        events = [_sub("1", 3, 80, "p", "y"), _sub("1", 1, 55, "p", "x")]

        assert backfill_substitution_minutes(lineups, events)[0].minute_in == 55

    def test_other_match_ignored(self):
        lineups = [_row("1", 0, "off")]
        assert backfill_substitution_minutes(lineups, [_sub("2", 0, 63, "on", "off")]) == []

    def test_patch_key(self):
        patch = backfill_substitution_minutes([_row("1", 0, "off")], [_sub("1", 0, 70, "on", "off")])[0]
        assert patch.key == {
            "ksi_match_id": "1",
            "side": Side.HOME,
            "squad": Squad.STARTING,
            "lineup_idx": 0,
        }


class TestMinutes:
    def test_clamped(self):
        assert minutes_from_lineup_row(None, None) == 90
        assert minutes_from_lineup_row(60, None) == 30
        assert minutes_from_lineup_row(None, 70) == 70
        assert minutes_from_lineup_row(None, 95) == 90
        assert minutes_from_lineup_row(85, 80) == 0


class TestPlayerSeason:
    def test_counts(self):
        matches = [_match("1", "10", "20", 2, 0), _match("2", "20", "10", 1, 1)]
        lineups = [
            _row("1", 0, "a", minute_out=70),
            _row("1", 11, "b", squad=Squad.BENCH, minute_in=70),
            _row("1", 12, "c", squad=Squad.BENCH),
            _row("2", 0, "a"),
            _row("3", 0, "a"),
        ]
        events = [
            _card("1", 0, 10, EventType.GOAL, "a"),
            _card("1", 1, 20, EventType.PENALTY, "a"),
            _card("1", 2, 30, EventType.OWN_GOAL, "a"),
            _card("2", 0, 40, EventType.YELLOW, "a"),
            _card("2", 1, 80, EventType.SECOND_YELLOW, "a"),
            _card("1", 3, 85, EventType.RED, "b"),
        ]
        rows = {r.ksi_player_id: r for r in player_season_rows(lineups, events, matches)}

        a = rows["a"]
        assert (a.matches_played, a.starts, a.minutes) == (2, 2, 160)
        assert a.goals == 2
        assert (a.yellows, a.reds) == (2, 1)

        b = rows["b"]
        assert (b.matches_played, b.starts, b.minutes, b.reds) == (1, 0, 20, 1)

        c = rows["c"]
        assert (c.matches_played, c.minutes) == (0, 0)

    def test_likely_xi(self):
        rows = [
            {"ksi_player_id": str(i), "starts": 12 - i, "minutes": 1000 - i} for i in range(9)
        ] + [
            {"ksi_player_id": "sub1", "starts": 0, "minutes": 300},
            {"ksi_player_id": "sub2", "starts": 0, "minutes": 500},
            {"ksi_player_id": "sub3", "starts": 0, "minutes": 100},
        ]
        chosen = [r["ksi_player_id"] for r in likely_xi(rows)]

        assert len(chosen) == 11
        assert chosen[:9] == [str(i) for i in range(9)]
        assert chosen[9:] == ["sub2", "sub1"]


class TestTeamAggregates:
    def setup_method(self):
        self.matches = [
            _match("1", "10", "20", 2, 0),
            _match("2", "20", "10", 1, 1),
            _match("3", "30", "10", 3, 1),
            _match("4", "10", "30", None, None),
        ]

    def test_team_season_summary(self):
        events = [
            _card("1", 0, 10, EventType.YELLOW, "a"),
            _card("3", 0, 10, EventType.SECOND_YELLOW, "b"),
            _card("3", 1, 10, EventType.YELLOW, "z", team="30"),
        ]
        summary = team_season_summary(self.matches, events, "10")

        assert (summary["played"], summary["wins"], summary["draws"], summary["losses"]) == (3, 1, 1, 1)
        assert summary["points"] == 4
        assert (summary["goals_for"], summary["goals_against"], summary["goal_diff"]) == (4, 4, 0)
        assert (summary["yellows"], summary["reds"]) == (2, 1)

    def test_compute_standings(self):
        table = compute_standings(self.matches)

        assert [(r["ksi_team_id"], r["position"], r["points"]) for r in table] == [
            ("10", 1, 4),
            ("30", 2, 3),
            ("20", 3, 1),
        ]
        assert table[0]["played"] == 3
        assert table[1]["played"] == 1

    def test_tiebreak_by_goal_difference(self):
        matches = [_match("1", "a", "b", 3, 0), _match("2", "c", "d", 1, 0)]
        assert [r["ksi_team_id"] for r in compute_standings(matches)] == ["a", "c", "d", "b"]

    def test_recent_appearances(self):
        matches = [
            _match("1", "10", "20", 1, 0, kickoff=datetime(2024, 5, 1, tzinfo=timezone.utc)),
            _match("2", "10", "30", 2, 2, kickoff="2024-06-01T19:15:00Z"),
            _match("3", "40", "10", 0, 1, kickoff="2024-07-01T19:15:00Z"),
        ]
        lineups = [_row("1", 0, "a"), _row("2", 0, "a"), _row("3", 0, "a", side=Side.AWAY)]
        recent = recent_appearances(lineups, matches, 2)

        assert [r["ksi_match_id"] for r in recent["a"]] == ["3", "2"]
        assert recent["a"][0]["minutes"] == 90


class TestStoredStandings:
    def test_store_computed_standings(self, repositories, store):
        matches = repositories.matches
        matches.upsert_discovered("100", 2024, ["1", "2"])
        store.upsert("teams", [{"ksi_team_id": t, "name": t} for t in ("10", "20")], ["ksi_team_id"])
        for match_id, home, away, hs, as_ in (("1", "10", "20", 2, 0), ("2", "20", "10", 0, 0)):
            store.update(
                "matches",
                {"home_team_ksi_id": home, "away_team_ksi_id": away, "home_score": hs, "away_score": as_},
                {"ksi_match_id": match_id},
            )

        rows = store_computed_standings(repositories, "100", 2024)
        stored = repositories.computed_standings.for_competition("100", 2024)

        assert len(rows) == 2
        assert [(r["ksi_team_id"], r["points"]) for r in stored] == [("10", 4), ("20", 1)]

        store_computed_standings(repositories, "100", 2024)
        assert len(repositories.computed_standings.for_competition("100", 2024)) == 2
