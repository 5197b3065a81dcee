from .database import (
    DatabaseConfigurationError,
    DatabaseConnectionError,
    DatabaseOperationError,
    DatabaseQueryError,
    DatabaseServiceError,
)
from .extractor import ConfigurationError, CrawlError, FetchError, ScrapingError
from .parsers import ParsingError

__all__ = [
    "DatabaseServiceError",
    "DatabaseConnectionError",
    "DatabaseQueryError",
    "DatabaseOperationError",
    "DatabaseConfigurationError",
    "ScrapingError",
    "FetchError",
    "CrawlError",
    "ConfigurationError",
    "ParsingError",
]
