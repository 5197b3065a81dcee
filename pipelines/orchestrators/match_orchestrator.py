# pipelines/orchestrators/match_orchestrator.py
"""
Match-specific orchestrator.
Discovers match ids and scrapes overview, report and event pages into
the match tables.
"""

import logging
from typing import Dict, List

from exceptions import CrawlError, DatabaseServiceError, FetchError
from extractors import MatchDataExtractor, NavigationConfig, discover_match_ids, retrying
from extractors.parsers import team_ids_from_banner
from logger import RunStats
from pipelines.backfill import backfill_substitution_minutes

from .base_orchestrator import BaseOrchestrator
from .orchestrator_config import OrchestratorConfig

logger = logging.getLogger(__name__)


def _match_label(row: Dict) -> str:
    return "match %s" % row["ksi_match_id"]


class MatchOrchestrator(BaseOrchestrator):
    """
    Orchestrates the match-level ingestion commands.
    """

    SCRIPT_NAME = OrchestratorConfig.MATCH_SCRIPT_NAME

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # ***> Initialize match-specific components <***
        self.extractor = MatchDataExtractor.from_config(self.config)
        self.paging = NavigationConfig.for_matches(self.config)

    def _matches_in_range(self, **filters) -> List[Dict]:
        season_from, season_to = self.season_bounds()
        return self.repositories.matches.list_matches(
            season_from, season_to, extra_filters=filters or None
        )

    # =================================================================
    #                           DISCOVERY                             |
    # =================================================================

    def discover_matches(self) -> RunStats:
        """
        Crawl the results listing of every competition in scope and register
        the match ids found.
        """

        def work(row: Dict, stats: RunStats) -> None:
            competition_id = row["ksi_competition_id"]

            def crawl() -> List[str]:
                found: List[str] = []
                discover_match_ids(self.fetcher, competition_id, self.paging, found=found)
                return found

            try:
                found = retrying(crawl, self.config.max_retries)()
            except FetchError as error:
                raise CrawlError(
                    "match discovery for competition %s/%s failed"
                    % (competition_id, row["season_year"]),
                    error,
                ) from error

            stats.add("match_ids", len(found))
            logger.info("  match ids=%d", len(found))
            if self.config.debug:
                logger.debug("  sample ids: %s", found[: OrchestratorConfig.PREVIEW_ROWS])

            if self.dry_run:
                logger.info("  DRY: would upsert matches=%d", len(found))
                return
            self.repositories.matches.upsert_discovered(
                competition_id, row["season_year"], found
            )

        return self.run_units(
            "discover-matches",
            self.scoped_competitions(),
            lambda row: "competition %s (%s)" % (row["ksi_competition_id"], row["season_year"]),
            work,
        )

    # =================================================================
    #                           OVERVIEW                              |
    # =================================================================

    def scrape_overview(self) -> RunStats:
        """
        Fill teams, score, kickoff and venue for matches still missing them.
        """
        season_from, season_to = self.season_bounds()
        units = (
            self._matches_in_range()
            if self.config.replace
            else self.repositories.matches.needing_overview(season_from, season_to)
        )

        def work(row: Dict, stats: RunStats) -> None:
            match_id = row["ksi_match_id"]
            url = self.fetcher.urls.match_url(match_id, "overview")
            overview = self.extractor.extract_overview(self.fetcher.fetch_soup(url))

            logger.info(
                "  %s - %s score=%s-%s kickoff=%s",
                overview.home_team_name or overview.home_team_id or "?",
                overview.away_team_name or overview.away_team_id or "?",
                overview.home_score,
                overview.away_score,
                overview.kickoff_at or "-",
            )
            if overview.has_score:
                stats.add("scores")
            self.preview("overview", [overview])

            if self.dry_run:
                return
            self.repositories.matches.apply_overview(match_id, overview)

        return self.run_units("scrape-overview", units, _match_label, work)

    # =================================================================
    #                            REPORT                               |
    # =================================================================

    def _scrape_report(self, row: Dict, stats: RunStats) -> None:
        match_id = row["ksi_match_id"]
        url = self.fetcher.urls.match_url(match_id, "report")
        entries = self.extractor.extract_lineups(
            self.fetcher.fetch_soup(url),
            match_id,
            row.get("home_team_ksi_id"),
            row.get("away_team_ksi_id"),
        )

        stats.add("lineups", len(entries))
        logger.info("  parsed lineups=%d", len(entries))
        self.preview("lineups", entries)

        if self.dry_run:
            logger.info("  DRY: would upsert lineups=%d", len(entries))
            return
        self.repositories.lineups.save(match_id, entries, replace=self.config.replace)
        self.repositories.matches.mark_report_scraped(match_id)

    def scrape_report(self) -> RunStats:
        """
        Scrape lineups from report pages not scraped yet (all with --replace).
        """
        if self.config.replace:
            units = self._matches_in_range()
        else:
            units = self._matches_in_range(scraped_report_at=("is", None))
        return self.run_units("scrape-report", units, _match_label, self._scrape_report)

    def repair_lineups(self) -> RunStats:
        """
        Re-scrape report pages of matches whose lineup rows lack player ids.
        """
        missing = set(self.repositories.lineups.matches_missing_player_ids())
        units = [row for row in self._matches_in_range() if row["ksi_match_id"] in missing]
        logger.info("matches with lineup rows lacking player ids: %d", len(missing))
        return self.run_units("repair-lineups", units, _match_label, self._scrape_report)

    # =================================================================
    #                            EVENTS                               |
    # =================================================================

    def _ensure_match_teams(self, row: Dict, document) -> Dict:
        """
        Team ids for a match, filled from the page banner when the stored
        row has none. Storing them is best effort.
        """
        home_id = row.get("home_team_ksi_id")
        away_id = row.get("away_team_ksi_id")
        if home_id and away_id:
            return {"home": home_id, "away": away_id}

        banner_home, banner_away = team_ids_from_banner(document)
        home_id = home_id or banner_home
        away_id = away_id or banner_away

        if (banner_home or banner_away) and not self.dry_run:
            try:
                self.repositories.matches.set_teams(row["ksi_match_id"], home_id, away_id)
            except DatabaseServiceError as error:
                logger.warning(
                    "  could not store teams for match %s: %s", row["ksi_match_id"], error
                )
        return {"home": home_id, "away": away_id}

    def scrape_events(self) -> RunStats:
        """
        Scrape the event timeline of every match in range.
        """

        def work(row: Dict, stats: RunStats) -> None:
            match_id = row["ksi_match_id"]
            url = self.fetcher.urls.match_url(match_id, "overview")
            document = self.fetcher.fetch_soup(url)

            teams = self._ensure_match_teams(row, document)
            player_to_team = self.repositories.lineups.player_team_map(match_id)
            events = self.extractor.extract_events(
                document, match_id, teams["home"], teams["away"], player_to_team
            )

            stats.add("events", len(events))
            logger.info("  parsed events=%d", len(events))
            self.preview("events", events)

            if self.dry_run:
                logger.info("  DRY: would upsert events=%d", len(events))
                return
            self.repositories.events.save(match_id, events, replace=self.config.replace)

        return self.run_units("scrape-events", self._matches_in_range(), _match_label, work)

    # =================================================================
    #                           BACKFILL                              |
    # =================================================================

    def backfill_minutes(self) -> RunStats:
        """
        Copy substitution minutes from stored events onto lineup rows.
        """
        with_lineups = set(self.repositories.lineups.matches_with_lineups())
        units = [row for row in self._matches_in_range() if row["ksi_match_id"] in with_lineups]

        def work(row: Dict, stats: RunStats) -> None:
            match_id = row["ksi_match_id"]
            lineups = self.repositories.lineups.for_matches([match_id])
            events = self.repositories.events.for_matches([match_id])
            patches = backfill_substitution_minutes(lineups, events)

            stats.add("patched_rows", len(patches))
            if patches:
                logger.info("  minute patches=%d", len(patches))
            self.preview("patches", patches)

            if self.dry_run:
                return
            for patch in patches:
                self.repositories.lineups.set_minutes(
                    patch.key, patch.minute_in, patch.minute_out
                )

        return self.run_units("backfill-minutes", units, _match_label, work, delay=0)
