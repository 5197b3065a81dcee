# configurations/__init__.py
"""
configuration module
"""

from .factory import ConfigFactory, get_config
from .settings_base import EnvironmentVariables, resolve_environment
from .settings_database import DatabaseConfig
from .settings_orchestrator import ScraperConfig
from .settings_source import SourceSiteConfig

__all__ = [
    "EnvironmentVariables",
    "DatabaseConfig",
    "ScraperConfig",
    "SourceSiteConfig",
    "ConfigFactory",
    "get_config",
    "resolve_environment",
]
