# extractors/fetcher.py
"""
HTTP page fetching for the ingestion scripts.

One GET per call, no retry: a failed fetch fails the unit that asked for
it. Unit-level retries are layered on top by ``retrying``.
"""

import logging
import time
from typing import Callable, Optional

import backoff
import requests
from bs4 import BeautifulSoup

from configurations.settings_source import SourceSiteConfig
from exceptions import FetchError

from .extraction_url_utils import URLParser

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Fetches ksi.is pages on a shared requests Session.
    """

    def __init__(
        self,
        script_name: str = "",
        source: Optional[SourceSiteConfig] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.source = source or SourceSiteConfig()
        self.urls = URLParser(self.source)
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "User-Agent": self.source.user_agent(script_name),
                "Accept": "text/html,application/xhtml+xml",
                "Accept-Language": self.source.accept_language,
            }
        )

    def fetch(self, url: str) -> str:
        """
        GET a page and return its markup.

        Raises:
            FetchError: On a non-2xx status or any transport failure
        """
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, allow_redirects=True, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Fetch failed: {e}", url=url) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(
                "Fetch failed",
                url=url,
                status_code=response.status_code,
            )
        return response.text

    def fetch_soup(self, url: str) -> BeautifulSoup:
        return BeautifulSoup(self.fetch(url), "html.parser")

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def polite_sleep(seconds: float):
    if seconds and seconds > 0:
        time.sleep(seconds)


def retrying(func: Callable, max_tries: int = 1) -> Callable:
    """
    Wrap a whole unit of work so a FetchError re-runs it with exponential
    backoff. ``max_tries=1`` returns the function unchanged.
    """
    if max_tries <= 1:
        return func
    return backoff.on_exception(
        backoff.expo, FetchError, max_tries=max_tries, logger=logger
    )(func)
