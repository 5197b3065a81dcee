# configurations/settings_orchestrator.py
"""
Main ingestion configuration combining all components.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .settings_database import DatabaseConfig
from .settings_source import SourceSiteConfig

logger = logging.getLogger(__name__)

ROW_SIDES = ("home", "away")


@dataclass
class ScraperConfig:
    """
    Combined configuration for crawling, extraction and storage.
    """

    # Core configurations
    source: SourceSiteConfig = field(default_factory=SourceSiteConfig)
    database: DatabaseConfig = field(
        default_factory=lambda: DatabaseConfig.development()
    )

    # Request settings
    request_delay: float = 0.25
    page_delay: float = 0.15
    max_retries: int = 1
    timeout: Optional[float] = None

    # Pagination settings
    max_pages: int = 80
    page_size: int = 200
    competition_max_pages: int = 50
    competition_page_size: int = 200

    # Storage settings
    batch_size: int = 500
    select_page_size: int = 1000
    overwrite_team_names: bool = False

    # Run scope
    dry_run: bool = False
    debug: bool = False
    replace: bool = False
    limit: int = 0
    season_from: Optional[int] = None
    season_to: Optional[int] = None

    # Event layout conventions
    reversed_row_side: str = "away"
    icon_variants: Tuple[str, ...] = ("current", "legacy")

    # Logging settings
    log_level: str = "INFO"
    log_file: Optional[str] = "logs/ingest.log"

    # Environment tracking
    _environment: Optional[str] = None

    @property
    def environment(self) -> str:
        return self._environment or "unknown"

    def validate(self) -> bool:
        """
        Validate configuration settings

        Raises:
            ValueError: On the first setting that makes no sense
        """
        if self.max_pages <= 0:
            raise ValueError("max_pages must be greater than 0")

        if self.competition_max_pages <= 0:
            raise ValueError("competition_max_pages must be greater than 0")

        if self.page_size <= 0 or self.competition_page_size <= 0:
            raise ValueError("page sizes must be greater than 0")

        if self.batch_size <= 0:
            raise ValueError("batch_size must be greater than 0")

        if self.request_delay < 0 or self.page_delay < 0:
            raise ValueError("delays cannot be negative")

        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be greater than 0")

        if self.limit < 0:
            raise ValueError("limit cannot be negative")

        if (
            self.season_from is not None
            and self.season_to is not None
            and self.season_from > self.season_to
        ):
            raise ValueError("season_from must be <= season_to")

        if self.reversed_row_side not in ROW_SIDES:
            raise ValueError(f"reversed_row_side must be one of {ROW_SIDES}")

        if not self.icon_variants:
            raise ValueError("at least one icon variant must be enabled")

        if not self.database.database_url:
            raise ValueError("database_url cannot be empty")

        return True

    def get_summary(self) -> dict:
        """
        Get a summary of the current configuration
        """
        return {
            "environment": self.environment,
            "scraping": {
                "max_pages": self.max_pages,
                "page_size": self.page_size,
                "request_delay": f"{self.request_delay}s",
                "max_retries": self.max_retries,
                "timeout": self.timeout,
                "limit": self.limit or "unlimited",
                "seasons": f"{self.season_from or '-'}..{self.season_to or '-'}",
            },
            "events": {
                "reversed_row_side": self.reversed_row_side,
                "icon_variants": list(self.icon_variants),
            },
            "database": {
                "dry_run": self.dry_run,
                "replace": self.replace,
                "url_type": self.database.database_type,
                "batch_size": self.batch_size,
            },
        }

    def __post_init__(self):
        if self._environment != "testing":
            try:
                self.validate()
            except ValueError as e:
                logger.warning("Configuration validation failed: %s", e)
