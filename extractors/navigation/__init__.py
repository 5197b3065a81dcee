from .competition_discovery import discover_competitions
from .match_discovery import discover_match_ids, extract_match_ids
from .navigation_config import NavigationConfig

__all__ = [
    "NavigationConfig",
    "discover_competitions",
    "discover_match_ids",
    "extract_match_ids",
]
