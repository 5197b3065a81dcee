# extractors/navigation/competition_discovery.py
"""
Competition discovery over the season listing.
"""

import logging
from typing import Dict, Optional

from ..fetcher import PageFetcher, polite_sleep
from ..parsers.competition_parser import extract_competition_links
from .navigation_config import NavigationConfig

logger = logging.getLogger(__name__)


def discover_competitions(
    fetcher: PageFetcher,
    season: int,
    category: str = "Adults",
    paging: Optional[NavigationConfig] = None,
) -> Dict[str, str]:
    """
    Collect competition id -> display name for one season.

    The first name seen for an id is kept. The walk stops on a page that
    gains nothing, or fewer ids than ``paging.min_gain()``, which is how a
    short final page shows up.
    """
    paging = paging or NavigationConfig(max_pages=50)
    found: Dict[str, str] = {}

    for page in range(1, paging.max_pages + 1):
        url = fetcher.urls.competition_listing_url(season, category, page, paging.page_size)
        logger.debug("fetch: %s", url)
        links = extract_competition_links(fetcher.fetch_soup(url))

        before = len(found)
        for competition_id, name in links:
            found.setdefault(competition_id, name)
        gained = len(found) - before

        logger.debug("season %d page %d: gained=%d total=%d", season, page, gained, len(found))
        if gained <= 0 or gained < paging.min_gain():
            break
        polite_sleep(paging.page_delay)

    return found
