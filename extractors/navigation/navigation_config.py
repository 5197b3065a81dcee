# extractors/navigation/navigation_config.py
"""
Configuration settings for listing-page crawls.
"""

import math
from dataclasses import dataclass


@dataclass
class NavigationConfig:
    """
    Paging limits for one crawl.

    ``max_pages`` is a hard cap: a listing that keeps producing new ids is
    still cut off there.
    """

    max_pages: int = 80
    page_size: int = 200
    page_delay: float = 0.15

    # ***> competition listing also stops on a trickle of new ids <***
    min_gain_floor: int = 3
    min_gain_ratio: float = 0.05

    def min_gain(self) -> int:
        """Smallest per-page gain that keeps a competition listing crawl going."""
        return max(self.min_gain_floor, math.floor(self.page_size * self.min_gain_ratio))

    @classmethod
    def for_matches(cls, config) -> "NavigationConfig":
        """Build from a ScraperConfig for match discovery."""
        return cls(
            max_pages=config.max_pages,
            page_size=config.page_size,
            page_delay=config.page_delay,
        )

    @classmethod
    def for_competitions(cls, config) -> "NavigationConfig":
        return cls(
            max_pages=config.competition_max_pages,
            page_size=config.competition_page_size,
            page_delay=config.page_delay,
        )
