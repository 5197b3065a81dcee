# configurations/factory.py
"""
Configuration factory for creating environment-specific configurations.
"""

from typing import Optional

from .settings_base import resolve_environment
from .settings_database import DatabaseConfig
from .settings_orchestrator import ScraperConfig
from .settings_source import SourceSiteConfig


class ConfigFactory:
    """
    Factory for creating environment-specific configurations
    """

    @staticmethod
    def development() -> ScraperConfig:
        return ScraperConfig(
            source=SourceSiteConfig(),
            database=DatabaseConfig.development(),
            log_level="DEBUG",
            request_delay=0.25,
            log_file="logs/ingest_development.log",
            _environment="development",
        )

    @staticmethod
    def testing() -> ScraperConfig:
        """
        Testing environment configuration: in-memory database, no delays
        """
        return ScraperConfig(
            source=SourceSiteConfig(),
            database=DatabaseConfig.testing(),
            log_level="ERROR",
            request_delay=0.0,
            page_delay=0.0,
            max_pages=5,
            competition_max_pages=5,
            batch_size=50,
            log_file=None,
            _environment="testing",
        )

    @staticmethod
    def production() -> ScraperConfig:
        return ScraperConfig(
            source=SourceSiteConfig(),
            database=DatabaseConfig.production(),
            log_level="INFO",
            request_delay=0.5,
            log_file="logs/ingest.log",
            _environment="production",
        )

    @staticmethod
    def custom(
        environment: str = "development",
        database_url: Optional[str] = None,
        **kwargs,
    ) -> ScraperConfig:
        """
        Create a custom configuration with specified parameters.

        Unknown keyword arguments are tried against the database settings
        with a ``db_`` prefix and the source settings with ``source_``.
        """
        config = get_config(environment)
        config._environment = f"custom-{config.environment}"

        if database_url:
            config.database = DatabaseConfig.from_url(database_url)

        for key, value in kwargs.items():
            if value is None:
                continue
            if hasattr(config, key):
                setattr(config, key, value)
            elif key.startswith("db_") and hasattr(config.database, key[3:]):
                setattr(config.database, key[3:], value)
            elif key.startswith("source_") and hasattr(config.source, key[7:]):
                setattr(config.source, key[7:], value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        return config


def get_config(environment: Optional[str] = None) -> ScraperConfig:
    """
    Get configuration for specified environment
    """
    environment = resolve_environment(environment)

    if environment == "testing":
        return ConfigFactory.testing()
    if environment == "production":
        return ConfigFactory.production()
    return ConfigFactory.development()
