from .region_locator import (
    EVENTS,
    LINEUP,
    REGION_KINDS,
    STANDINGS,
    RegionHandle,
    RegionLocator,
    locate,
    locate_all,
)

__all__ = [
    "EVENTS",
    "LINEUP",
    "STANDINGS",
    "REGION_KINDS",
    "RegionHandle",
    "RegionLocator",
    "locate",
    "locate_all",
]
