"""
Shared fixtures: testing configuration, an in-memory store and a fetcher
that serves canned pages instead of going to the network.
"""

import io

import pytest
from rich.console import Console

from configurations import ConfigFactory
from database import DatabaseFactory, Repositories
from exceptions import FetchError
from extractors import PageFetcher


class FakeFetcher(PageFetcher):
    """
    PageFetcher serving markup from a url -> html mapping; unknown URLs
    fail like a 404.
    """

    def __init__(self, pages=None):
        super().__init__(script_name="tests")
        self.pages = dict(pages or {})
        self.requested = []

    def fetch(self, url: str) -> str:
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError("Fetch failed", url=url, status_code=404)
        return self.pages[url]


@pytest.fixture
def config():
    return ConfigFactory.testing()


@pytest.fixture
def store(config):
    """A fresh in-memory SQLite store per test."""
    store = DatabaseFactory.create_table_store(config.database, batch_size=50, page_size=1000)
    yield store
    store.db_manager.dispose()


@pytest.fixture
def repositories(store):
    return Repositories.build(store)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)
