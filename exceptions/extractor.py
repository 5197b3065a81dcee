# pylint: disable=unnecessary-pass
"""
Custom exceptions for page fetching and crawling.
"""

from typing import Optional


class ScrapingError(Exception):
    """
    Base exception for scraping errors
    """

    pass


class FetchError(ScrapingError):
    """
    Raised when a page cannot be fetched (non-2xx or network failure)
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} [HTTP {self.status_code}] {self.url}"
        return f"{self.message} {self.url}".strip()


class CrawlError(ScrapingError):
    """
    Raised when a discovery unit (competition + season) fails
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message} (Original: {self.original_error})"
        return self.message


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid
    """

    pass
