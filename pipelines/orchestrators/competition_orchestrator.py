# pipelines/orchestrators/competition_orchestrator.py
"""
Competition-specific orchestrator.
Discovers competitions per season, stores league tables and recomputes
standings from stored results.
"""

import logging
from typing import Optional

from exceptions import CrawlError, FetchError
from extractors import (
    CompetitionDataExtractor,
    NavigationConfig,
    discover_competitions,
    retrying,
)
from logger import RunStats
from pipelines.aggregation import compute_standings, store_computed_standings

from .base_orchestrator import BaseOrchestrator
from .orchestrator_config import OrchestratorConfig

logger = logging.getLogger(__name__)


def _competition_label(row: dict) -> str:
    return "competition %s (%s, tier %s) %s" % (
        row["ksi_competition_id"],
        row["season_year"],
        row["tier"],
        row["name"],
    )


class CompetitionOrchestrator(BaseOrchestrator):
    """
    Orchestrates the competition-level ingestion commands.
    """

    SCRIPT_NAME = OrchestratorConfig.COMPETITION_SCRIPT_NAME

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        # ***> Initialize competition-specific components <***
        self.extractor = CompetitionDataExtractor()
        self.paging = NavigationConfig.for_competitions(self.config)

    # =================================================================
    #                           DISCOVERY                             |
    # =================================================================

    def discover_competitions(self, category: Optional[str] = None) -> RunStats:
        """
        Walk the competition listing of every season in range and store the
        men's league competitions it classifies.
        """
        category = category or OrchestratorConfig.DEFAULT_CATEGORY

        def work(season: int, stats: RunStats) -> None:
            try:
                found = retrying(discover_competitions, self.config.max_retries)(
                    self.fetcher, season, category, self.paging
                )
            except FetchError as error:
                raise CrawlError(
                    "competition listing %s/%s failed" % (season, category), error
                ) from error

            competitions = self.extractor.classify_listing(found, season, category)
            stats.add("links", len(found))
            stats.add("competitions", len(competitions))
            logger.info("  links=%d kept=%d", len(found), len(competitions))
            self.preview("competitions", competitions)

            if self.dry_run:
                logger.info("  DRY: would upsert competitions=%d", len(competitions))
                return
            self.repositories.competitions.upsert_competitions(competitions)

        return self.run_units(
            "discover-competitions",
            self.season_years(),
            lambda season: "season %s (%s)" % (season, category),
            work,
        )

    # =================================================================
    #                           STANDINGS                             |
    # =================================================================

    def fetch_standings(self) -> RunStats:
        """
        Fetch each competition page in scope and replace its stored tables.
        """

        def work(row: dict, stats: RunStats) -> None:
            competition_id = row["ksi_competition_id"]
            url = self.fetcher.urls.competition_url(competition_id)
            tables = self.extractor.extract_standings(self.fetcher.fetch_soup(url))

            if not tables:
                logger.info("  no standings table")
                stats.add("no_table")
                return

            stats.add("tables", len(tables))
            stats.add("rows", sum(len(table.rows) for table in tables))
            for table in tables:
                logger.info(
                    "  table %d %s: rows=%d",
                    table.table_index,
                    table.phase_name or "-",
                    len(table.rows),
                )
                self.preview("rows", table.rows)
                if not self.dry_run:
                    self.repositories.standings.replace_table(
                        competition_id, row["season_year"], table
                    )

        return self.run_units(
            "fetch-standings", self.scoped_competitions(), _competition_label, work
        )

    def compute_standings(self) -> RunStats:
        """
        Rebuild ``computed_standings`` from stored results, per competition.
        """

        def work(row: dict, stats: RunStats) -> None:
            competition_id = row["ksi_competition_id"]
            season_year = row["season_year"]

            if self.dry_run:
                matches = self.repositories.matches.list_matches(
                    season_year, season_year, competition_ids=[competition_id]
                )
                rows = compute_standings(matches)
                self.preview("standings", rows)
                logger.info("  DRY: would store teams=%d", len(rows))
            else:
                rows = store_computed_standings(self.repositories, competition_id, season_year)
            stats.add("teams", len(rows))

        return self.run_units(
            "compute-standings",
            self.scoped_competitions(),
            _competition_label,
            work,
            delay=0,
        )
