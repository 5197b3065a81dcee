"""
End-to-end runs of the orchestrators against canned pages and an
in-memory store.
"""

import pytest

from exceptions import ConfigurationError
from extractors.extraction_url_utils import URLParser
from logger import Competition
from pipelines.orchestrators import (
    CompetitionOrchestrator,
    MatchOrchestrator,
    PlayerOrchestrator,
)

from conftest import FakeFetcher
from page_builders import (
    competition_listing,
    event_row,
    events_grid,
    full_report_page,
    goal_body,
    match_listing,
    new_layout_row,
    new_layout_table,
    overview_page,
    page,
    substitution_body,
)

URLS = URLParser()


@pytest.fixture
def season_config(config):
    config.season_from = 2024
    config.season_to = 2024
    return config


def _orchestrator(cls, config, repositories, pages, console):
    return cls(config, repositories=repositories, fetcher=FakeFetcher(pages), console=console)


def _seed_competitions(repositories, *ids):
    repositories.competitions.upsert_competitions(
        Competition(
            ksi_competition_id=cid,
            season_year=2024,
            name="Besta deild karla",
            gender="Male",
            category="Adults",
            tier=1,
        )
        for cid in ids
    )


def _match_pages(match_id="1"):
    events = events_grid(
        [
            event_row(23, goal_body("1005", "Heima Leikmaður 5"), event_id=1),
            event_row(
                60,
                substitution_body("1101", "Heima vara Leikmaður 1", "1001", "Heima Leikmaður 1"),
                event_id=2,
            ),
        ]
    )
    return {
        URLS.match_url(match_id, "overview"): overview_page(events_html=events),
        URLS.match_url(match_id, "report"): full_report_page(),
    }


class TestConfiguration:
    def test_invalid_config_rejected(self, config, repositories):
        config.max_pages = 0
        with pytest.raises(ConfigurationError):
            MatchOrchestrator(config, repositories=repositories, fetcher=FakeFetcher())

    def test_database_info(self, config, repositories):
        info = MatchOrchestrator(
            config, repositories=repositories, fetcher=FakeFetcher()
        ).get_database_info()

        assert info["database_type"] == "sqlite"
        assert info["database_url"] == "sqlite:///:memory:"
        assert info["pool_class"] == "StaticPool"


class TestCompetitionOrchestrator:
    def test_discover_competitions(self, season_config, repositories, console):
        url = URLS.competition_listing_url(2024, "Adults", 1, season_config.competition_page_size)
        listing = competition_listing(
            [("100", "Besta deild karla"), ("101", "Besta deild kvenna"), ("102", "2. deild karla")]
        )
        with _orchestrator(
            CompetitionOrchestrator, season_config, repositories, {url: listing}, console
        ) as orchestrator:
            stats = orchestrator.discover_competitions()

        assert (stats.ok, stats.fail) == (1, 0)
        assert stats.totals["links"] == 3
        assert stats.totals["competitions"] == 2
        stored = repositories.competitions.list_competitions(2024, 2024)
        assert [(r["ksi_competition_id"], r["tier"]) for r in stored] == [("100", 1), ("102", 3)]

    def test_discover_competitions_dry(self, season_config, repositories, console):
        season_config.dry_run = True
        url = URLS.competition_listing_url(2024, "Adults", 1, season_config.competition_page_size)
        pages = {url: competition_listing([("100", "Besta deild karla")])}

        stats = _orchestrator(
            CompetitionOrchestrator, season_config, repositories, pages, console
        ).discover_competitions()

        assert stats.ok == 1
        assert repositories.competitions.list_competitions() == []

    def test_fetch_and_compute_standings(self, season_config, repositories, console):
        _seed_competitions(repositories, "100", "200")
        table = new_layout_table(
            [
                new_layout_row(1, "10", "Víkingur R.", 2, 1, 1, 0, "3-1", 2, 4),
                new_layout_row(2, "20", "KR", 2, 0, 1, 1, "1-3", -2, 1),
            ]
        )
        pages = {
            URLS.competition_url("100"): page(table),
            URLS.competition_url("200"): page("<p>Engin staða</p>"),
        }
        orchestrator = _orchestrator(
            CompetitionOrchestrator, season_config, repositories, pages, console
        )
        stats = orchestrator.fetch_standings()

        assert (stats.ok, stats.fail) == (2, 0)
        assert stats.totals["rows"] == 2
        assert stats.totals["no_table"] == 1
        tables = repositories.standings.tables_for("100", 2024)
        assert len(repositories.standings.rows_for(tables[0]["id"])) == 2

        repositories.matches.upsert_discovered("100", 2024, ["1"])
        repositories.matches.set_teams("1", "10", "20")
        repositories.store.update(
            "matches", {"home_score": 1, "away_score": 0}, {"ksi_match_id": "1"}
        )
        stats = orchestrator.compute_standings()

        assert stats.ok == 2
        computed = repositories.computed_standings.for_competition("100", 2024)
        assert [(r["ksi_team_id"], r["points"]) for r in computed] == [("10", 3), ("20", 0)]


class TestMatchOrchestrator:
    def test_discover_matches_with_failing_competition(self, season_config, repositories, console):
        _seed_competitions(repositories, "100", "200")
        pages = {
            URLS.competition_matches_url("100", 1, season_config.page_size): match_listing(["1", "2"]),
            URLS.competition_matches_url("100", 2, season_config.page_size): match_listing(["1", "2"]),
        }
        stats = _orchestrator(
            MatchOrchestrator, season_config, repositories, pages, console
        ).discover_matches()

        assert (stats.ok, stats.fail) == (1, 1)
        assert "200" in stats.failures[0]
        assert stats.totals["match_ids"] == 2
        assert [r["ksi_match_id"] for r in repositories.matches.list_matches()] == ["1", "2"]

    def test_full_match_flow(self, season_config, repositories, console):
        repositories.matches.upsert_discovered("100", 2024, ["1"])
        orchestrator = _orchestrator(
            MatchOrchestrator, season_config, repositories, _match_pages(), console
        )

        assert orchestrator.scrape_overview().ok == 1
        match = repositories.matches.list_matches()[0]
        assert (match["home_team_ksi_id"], match["away_team_ksi_id"]) == ("10", "20")
        assert (match["home_score"], match["away_score"]) == (2, 1)

        assert orchestrator.scrape_report().totals["lineups"] == 32
        assert repositories.store.count("match_lineups") == 32
        # ***> report already scraped: nothing left to do <***
        assert orchestrator.scrape_report().processed == 0

        events_stats = orchestrator.scrape_events()
        assert events_stats.totals["events"] == 2
        stored_events = repositories.events.for_matches(["1"])
        assert {e["ksi_team_id"] for e in stored_events} == {"10"}

        assert orchestrator.backfill_minutes().totals["patched_rows"] == 2
        lineups = {r["ksi_player_id"]: r for r in repositories.lineups.for_matches(["1"])}
        assert lineups["1101"]["minute_in"] == 60
        assert lineups["1001"]["minute_out"] == 60

        # ***> a second report scrape keeps the backfilled minutes <***
        repositories.store.update("matches", {"scraped_report_at": None}, {"ksi_match_id": "1"})
        orchestrator.scrape_report()
        lineups = {r["ksi_player_id"]: r for r in repositories.lineups.for_matches(["1"])}
        assert lineups["1101"]["minute_in"] == 60

    def test_events_fill_missing_teams(self, season_config, repositories, console):
        repositories.matches.upsert_discovered("100", 2024, ["1"])
        stats = _orchestrator(
            MatchOrchestrator, season_config, repositories, _match_pages(), console
        ).scrape_events()

        assert stats.ok == 1
        match = repositories.matches.list_matches()[0]
        assert (match["home_team_ksi_id"], match["away_team_ksi_id"]) == ("10", "20")

    def test_missing_page_counts_as_failure(self, season_config, repositories, console):
        repositories.matches.upsert_discovered("100", 2024, ["1", "2"])
        stats = _orchestrator(
            MatchOrchestrator, season_config, repositories, _match_pages("1"), console
        ).scrape_report()

        assert (stats.ok, stats.fail) == (1, 1)
        assert "match 2" in stats.failures[0]

    def test_limit_and_dry_run(self, season_config, repositories, console):
        season_config.dry_run = True
        season_config.limit = 1
        repositories.matches.upsert_discovered("100", 2024, ["1", "2"])
        pages = {**_match_pages("1"), **_match_pages("2")}

        stats = _orchestrator(
            MatchOrchestrator, season_config, repositories, pages, console
        ).scrape_report()

        assert stats.ok == 1
        assert repositories.store.count("match_lineups") == 0

    def test_repair_lineups(self, season_config, repositories, console):
        repositories.matches.upsert_discovered("100", 2024, ["1", "2"])
        repositories.store.upsert(
            "match_lineups",
            [
                {
                    "ksi_match_id": "2",
                    "side": "home",
                    "squad": "xi",
                    "lineup_idx": 0,
                    "ksi_player_id": None,
                    "player_name": "Óþekktur",
                }
            ],
            ["ksi_match_id", "side", "squad", "lineup_idx"],
        )
        fetcher_pages = {URLS.match_url("2", "report"): full_report_page()}
        stats = _orchestrator(
            MatchOrchestrator, season_config, repositories, fetcher_pages, console
        ).repair_lineups()

        assert stats.ok == 1
        rows = repositories.lineups.for_matches(["2"])
        first = [r for r in rows if r["lineup_idx"] == 0][0]
        assert first["ksi_player_id"] == "1001"


class TestPlayerOrchestrator:
    def test_scrape_players(self, season_config, repositories, console):
        repositories.matches.upsert_discovered("100", 2024, ["1"])
        repositories.store.upsert(
            "match_lineups",
            [
                {"ksi_match_id": "1", "side": "home", "squad": "xi", "lineup_idx": i,
                 "ksi_player_id": pid, "player_name": name}
                for i, (pid, name) in enumerate([("7", "Jón"), ("8", "Páll"), ("9", "Ari")])
            ],
            ["ksi_match_id", "side", "squad", "lineup_idx"],
        )
        repositories.players.upsert_players([{"ksi_player_id": "9", "name": "Ari", "birth_year": 1990}])
        pages = {
            URLS.player_url("7"): page('<span class="eyebrow-2">1998</span>'),
        }

        fetcher = FakeFetcher(pages)
        stats = PlayerOrchestrator(
            season_config, repositories=repositories, fetcher=fetcher, console=console
        ).scrape_players()

        assert (stats.ok, stats.fail) == (1, 1)
        assert URLS.player_url("9") not in fetcher.requested
        assert repositories.players.known_birth_years() == {"7": 1998, "9": 1990}
