# extractors/locators/region_locator.py
"""
Structural locator for logical page regions.

Each region kind has an ordered list of independent strategy functions:
label match, class/attribute fingerprint, positional fallback. The first
strategy that returns an element wins. Not finding a region is a normal
outcome (None), never an exception.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup, Tag

from logger import HTMLConstants

from ..base_extractor import BaseDataExtractor
from ..parsers.column_mapper import map_columns, table_headers
from ..text_utils import count_minute_markers

logger = logging.getLogger(__name__)

LINEUP = "lineup"
EVENTS = "events"
STANDINGS = "standings"
REGION_KINDS = (LINEUP, EVENTS, STANDINGS)

Strategy = Callable[[BeautifulSoup], Optional[Tag]]

_dom = BaseDataExtractor()


@dataclass(frozen=True)
class RegionHandle:
    """
    A located region and the strategy that found it.
    """

    kind: str
    element: Tag
    strategy: str


# =================================================================
#                          LINEUP GRID                            |
# =================================================================


def _is_lineup_grid(element: Tag) -> bool:
    return (
        element.name == "div"
        and _dom.has_classes(element, HTMLConstants.GRID_CLASS, HTMLConstants.TWO_COLUMN_CLASS)
        and _dom.has_icon(element, HTMLConstants.HOME_ICON_ALT)
        and _dom.has_icon(element, HTMLConstants.AWAY_ICON_ALT)
    )


def lineup_by_label(document: BeautifulSoup) -> Optional[Tag]:
    """
    The "Byrjunarlið" label sits in a header cell of the grid; the grid is
    the nearest enclosing two-column div that also holds both side icons.
    """
    for span in document.find_all("span"):
        if _dom.element_text(span) != HTMLConstants.STARTING_LABEL:
            continue
        for ancestor in span.parents:
            if isinstance(ancestor, Tag) and _is_lineup_grid(ancestor):
                return ancestor
    return None


def lineup_by_fingerprint(document: BeautifulSoup) -> Optional[Tag]:
    for grid in document.find_all("div"):
        if _is_lineup_grid(grid) and _dom.find_span_with_text(
            grid, HTMLConstants.STARTING_LABEL
        ):
            return grid
    return None


def _holds_player_lists(candidate: Tag) -> bool:
    minimum = HTMLConstants.MIN_POSITIONAL_LINEUP_LINKS
    lists = [
        child
        for child in _dom.child_tags(candidate)
        if child.name == "div"
        and not child.find(class_=HTMLConstants.EVENT_NODE_CLASS)
        and len(_dom.player_links(child)) >= minimum
    ]
    return len(lists) >= 2


def lineup_by_position(document: BeautifulSoup) -> Optional[Tag]:
    """
    Innermost div with at least two direct child lists of player links.

    A wrapper holding the lineup block next to other link-heavy blocks
    qualifies too, so a candidate loses to any qualifying descendant.
    """
    for candidate in document.find_all("div"):
        if not _holds_player_lists(candidate):
            continue
        if any(_holds_player_lists(inner) for inner in candidate.find_all("div")):
            continue
        return candidate
    return None


# =================================================================
#                          EVENTS GRID                            |
# =================================================================


def _is_events_grid(element: Tag) -> bool:
    return element.name == "div" and _dom.has_classes(
        element, HTMLConstants.GRID_CLASS, HTMLConstants.EVENTS_GRID_CLASS
    )


def events_by_label(document: BeautifulSoup) -> Optional[Tag]:
    """
    The "Atburðir" label's container is followed by the three-column grid.
    """
    label = HTMLConstants.EVENTS_LABEL
    for span in document.find_all("span"):
        if _dom.element_text(span).lower() != label:
            continue
        container = span.find_parent("div")
        if container is None:
            continue
        for sibling in container.find_next_siblings("div"):
            if _is_events_grid(sibling):
                return sibling
    return None


def events_by_fingerprint(document: BeautifulSoup) -> Optional[Tag]:
    for element in document.find_all("div"):
        if _is_events_grid(element):
            return element
    return None


def events_by_position(document: BeautifulSoup) -> Optional[Tag]:
    """
    First grid whose first two columns each show enough minute markers.
    """
    minimum = HTMLConstants.MIN_MINUTE_MARKERS_PER_COLUMN
    for grid in document.find_all("div"):
        if not _dom.has_classes(grid, HTMLConstants.GRID_CLASS):
            continue
        columns = _dom.child_tags(grid)
        if len(columns) < 2:
            continue
        if all(
            count_minute_markers(_dom.element_text(column)) >= minimum
            for column in columns[:2]
        ):
            return grid
    return None


# =================================================================
#                        STANDINGS TABLES                         |
# =================================================================


def standings_by_headers(document: BeautifulSoup) -> Optional[Tag]:
    tables = standings_tables(document)
    return tables[0] if tables else None


def standings_tables(document: BeautifulSoup) -> List[Tag]:
    """Every table whose header row maps onto standings columns."""
    return [
        table
        for table in document.find_all("table")
        if map_columns(table_headers(table)) is not None
    ]


STRATEGIES: Dict[str, Sequence[Tuple[str, Strategy]]] = {
    LINEUP: (
        ("label", lineup_by_label),
        ("fingerprint", lineup_by_fingerprint),
        ("positional", lineup_by_position),
    ),
    EVENTS: (
        ("label", events_by_label),
        ("fingerprint", events_by_fingerprint),
        ("positional", events_by_position),
    ),
    STANDINGS: (("headers", standings_by_headers),),
}


class RegionLocator:
    """
    Runs the strategy chain for a region kind.
    """

    def __init__(self, strategies: Optional[Dict[str, Sequence[Tuple[str, Strategy]]]] = None):
        self.strategies = strategies or STRATEGIES

    def locate(self, document: BeautifulSoup, kind: str) -> Optional[RegionHandle]:
        """
        Find a region in a parsed document.

        Args:
            document: Parsed page
            kind: One of LINEUP, EVENTS, STANDINGS

        Returns:
            RegionHandle for the first strategy that matched, or None

        Raises:
            ValueError: If the region kind is unknown
        """
        if kind not in self.strategies:
            raise ValueError(f"Unknown region kind: {kind}")

        for name, strategy in self.strategies[kind]:
            element = strategy(document)
            if element is not None:
                logger.debug("%s region found by %s strategy", kind, name)
                return RegionHandle(kind=kind, element=element, strategy=name)

        logger.debug("%s region not found", kind)
        return None


_default_locator = RegionLocator()


def locate(document: BeautifulSoup, kind: str) -> Optional[RegionHandle]:
    return _default_locator.locate(document, kind)


def locate_all(document: BeautifulSoup, kind: str) -> List[RegionHandle]:
    """
    All standings tables on a page; other kinds yield at most one region.
    """
    if kind == STANDINGS:
        return [
            RegionHandle(kind=STANDINGS, element=table, strategy="headers")
            for table in standings_tables(document)
        ]
    handle = locate(document, kind)
    return [handle] if handle else []
