# extractors/extraction_url_utils.py
"""
URL construction for the ksi.is pages the ingestion reads.
"""

from typing import Optional
from urllib.parse import urlencode, urljoin

from configurations.settings_source import SourceSiteConfig

MATCH_TABS = ("overview", "report")


class URLParser:
    """
    Builds absolute page URLs from ids and paging parameters.
    """

    def __init__(self, source: Optional[SourceSiteConfig] = None):
        self.source = source or SourceSiteConfig()

    def _url(self, path: str, params: dict) -> str:
        base = urljoin(self.source.base_url, path)
        return f"{base}?{urlencode(params)}" if params else base

    def competition_listing_url(
        self, season: int, category: str = "Adults", page: int = 1, page_size: int = 200
    ) -> str:
        return self._url(
            self.source.competition_listing_path,
            {"category": category, "season": season, "pageSize": page_size, "page": page},
        )

    def competition_matches_url(
        self, competition_id: str, page: int = 1, page_size: int = 200
    ) -> str:
        """
        Matches-and-results tab of a competition. Page 1 carries no page
        parameter, matching the link the site itself renders.
        """
        params = {
            "id": competition_id,
            "banner-tab": "matches-and-results",
            "pageSize": page_size,
        }
        if page > 1:
            params["page"] = page
        return self._url(self.source.competition_path, params)

    def competition_url(self, competition_id: str) -> str:
        return self._url(self.source.competition_path, {"id": competition_id})

    def match_url(self, match_id: str, tab: str = "overview") -> str:
        if tab not in MATCH_TABS:
            raise ValueError(f"Unknown match tab: {tab} (expected one of {MATCH_TABS})")
        return self._url(self.source.match_path, {"id": match_id, "banner-tab": tab})

    def player_url(self, player_id: str) -> str:
        return self._url(self.source.player_path, {"id": player_id})

    def make_absolute_url(self, url: str) -> str:
        return urljoin(self.source.base_url, url)
