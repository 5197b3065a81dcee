# extractors/navigation/match_discovery.py
"""
Match id discovery over a competition's paginated results listing.
"""

import logging
from typing import List, Optional, Set

from bs4 import BeautifulSoup

from logger import HTMLConstants

from ..fetcher import PageFetcher, polite_sleep
from ..text_utils import extract_id
from .navigation_config import NavigationConfig

logger = logging.getLogger(__name__)


def extract_match_ids(document: BeautifulSoup) -> List[str]:
    """Match ids linked from a page, de-duplicated, in page order."""
    ids = []
    for anchor in document.find_all("a", href=True):
        href = anchor["href"]
        if HTMLConstants.MATCH_LINK_MARKER not in href:
            continue
        match_id = extract_id(href)
        if match_id and match_id not in ids:
            ids.append(match_id)
    return ids


def discover_match_ids(
    fetcher: PageFetcher,
    competition_id: str,
    paging: Optional[NavigationConfig] = None,
    seen: Optional[Set[str]] = None,
    found: Optional[List[str]] = None,
) -> Set[str]:
    """
    Walk the results listing page by page until a page adds no new id.

    The stop test counts *new* ids, not ids on the page: out-of-range page
    numbers make the site serve an earlier page again. ``paging.max_pages``
    bounds the walk regardless.

    Args:
        fetcher: Page fetcher; its errors propagate to the caller
        competition_id: Competition whose listing is walked
        paging: Page cap, page size and delay between pages
        seen: Ids already known; extended in place and returned
        found: Optional list collecting new ids in discovery order

    Returns:
        The ``seen`` set with every discovered id added
    """
    paging = paging or NavigationConfig()
    seen = set() if seen is None else seen

    for page in range(1, paging.max_pages + 1):
        url = fetcher.urls.competition_matches_url(competition_id, page, paging.page_size)
        logger.debug("fetch: %s", url)
        ids = extract_match_ids(fetcher.fetch_soup(url))

        gained = 0
        for match_id in ids:
            if match_id in seen:
                continue
            seen.add(match_id)
            if found is not None:
                found.append(match_id)
            gained += 1

        logger.debug(
            "page %d: ids=%d gained=%d total=%d", page, len(ids), gained, len(seen)
        )
        if gained == 0:
            break
        polite_sleep(paging.page_delay)
    else:
        logger.warning(
            "competition %s: stopped at max_pages=%d with ids still coming",
            competition_id,
            paging.max_pages,
        )

    return seen
