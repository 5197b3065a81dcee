# pipelines/orchestrators/base_orchestrator.py
"""
Base orchestrator class with common functionality.
Provides the per-unit run loop shared by every ingestion command.
"""

import logging
from abc import ABC
from datetime import date
from typing import Any, Callable, Iterable, List, Optional, Tuple

from rich.console import Console

from configurations import ConfigFactory, ScraperConfig
from database import DatabaseFactory, Repositories
from exceptions import (
    ConfigurationError,
    DatabaseServiceError,
    ParsingError,
    ScrapingError,
)
from extractors import PageFetcher, polite_sleep, retrying
from logger import RunStats, render_run_summary
from pipelines.normalization import records_frame

from .orchestrator_config import OrchestratorConfig

logger = logging.getLogger(__name__)

# ***> failures a unit may have without stopping the run <***
UNIT_ERRORS = (ScrapingError, ParsingError, DatabaseServiceError)


class BaseOrchestrator(ABC):
    """
    Abstract base class for orchestrator implementations.

    Every command is a list of units (a season, a competition, a match, a
    player) processed one at a time: a unit either succeeds or is counted
    as failed, logged, and skipped.
    """

    SCRIPT_NAME: str = ""

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        repositories: Optional[Repositories] = None,
        fetcher: Optional[PageFetcher] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize base orchestrator with configuration validation.

        Args:
            config: Scraper configuration (uses development if None)
            repositories: Repository bundle; built from the config on first use
            fetcher: Page fetcher; one is created from the config if None
            console: Rich console for the run summary

        Raises:
            ConfigurationError: If configuration is invalid
        """
        # ***> Initialize configuration using factory pattern <***
        self.config = config or ConfigFactory.development()

        # ***> Validate configuration before proceeding <***
        self._validate_configuration()

        self._repositories = repositories
        self.console = console
        self.fetcher = fetcher or PageFetcher(
            script_name=self.SCRIPT_NAME,
            source=self.config.source,
            timeout=self.config.timeout,
        )

    def _validate_configuration(self) -> None:
        """
        Validate the provided configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            self.config.validate()
        except ValueError as error:
            raise ConfigurationError("Invalid configuration: %s" % error) from error

    @property
    def repositories(self) -> Repositories:
        if self._repositories is None:
            self._repositories = DatabaseFactory.create_repositories(self.config)
        return self._repositories

    def get_database_info(self) -> dict:
        """
        Connection details of the store behind the repositories.

        Returns:
            Dictionary with database information
        """
        db_manager = getattr(self.repositories.store, "db_manager", None)
        if db_manager is None:
            return {"status": "not_initialized"}
        return db_manager.get_connection_info()

    @property
    def dry_run(self) -> bool:
        return self.config.dry_run

    def season_bounds(self) -> Tuple[Optional[int], Optional[int]]:
        """Configured season bounds; None means open-ended."""
        return self.config.season_from, self.config.season_to

    def season_years(self) -> List[int]:
        """
        Concrete seasons for crawls that need one, defaulting to the
        current year for a missing bound.
        """
        season_from = self.config.season_from or self.config.season_to or date.today().year
        season_to = self.config.season_to or season_from
        return list(range(season_from, season_to + 1))

    def scoped_competitions(self) -> List[dict]:
        season_from, season_to = self.season_bounds()
        return self.repositories.competitions.list_competitions(
            season_from,
            season_to,
            gender=OrchestratorConfig.SCOPE_GENDER,
            category=OrchestratorConfig.SCOPE_CATEGORY,
            tiers=OrchestratorConfig.SCOPE_TIERS,
        )

    def run_units(
        self,
        name: str,
        units: Iterable[Any],
        label: Callable[[Any], str],
        work: Callable[[Any, RunStats], None],
        delay: Optional[float] = None,
    ) -> RunStats:
        """
        Process units one by one and render the run summary.

        ``work(unit, stats)`` does one unit; a FetchError re-runs it up to
        ``max_retries`` times, any other unit error counts it as failed.
        Errors outside UNIT_ERRORS propagate and end the run.

        Args:
            name: Run title for the summary
            units: Units to process, truncated to ``limit``
            label: Progress text for a unit
            work: Callable processing one unit
            delay: Seconds between units, ``request_delay`` when None

        Returns:
            The run's counters
        """
        stats = RunStats(name)
        units = list(units)
        target = units[: self.config.limit] if self.config.limit else units
        delay = self.config.request_delay if delay is None else delay

        logger.info(
            "%s | dry=%s | units=%d | processing=%d",
            name,
            "YES" if self.dry_run else "NO",
            len(units),
            len(target),
        )

        attempt = retrying(work, self.config.max_retries)
        for idx, unit in enumerate(target, start=1):
            text = label(unit)
            logger.info("[#%d/%d] %s", idx, len(target), text)
            try:
                attempt(unit, stats)
                stats.ok += 1
            except UNIT_ERRORS as error:
                logger.error("  %s failed: %s", text, error)
                stats.record_failure(text, error)

            if idx < len(target):
                polite_sleep(delay)

        render_run_summary(stats, logger, self.console)
        return stats

    def preview(self, what: str, records: Iterable[Any]) -> None:
        """
        Log a few parsed records as a table on dry runs and with --debug.
        """
        if not (self.dry_run or self.config.debug):
            return
        frame = records_frame(records, OrchestratorConfig.PREVIEW_ROWS)
        if frame.empty:
            return
        level = logging.INFO if self.dry_run else logging.DEBUG
        logger.log(level, "  sample %s:\n%s", what, frame.to_string(index=False))

    def cleanup(self) -> None:
        """
        Release the HTTP session.
        """
        self.fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
