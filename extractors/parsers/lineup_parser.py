# extractors/parsers/lineup_parser.py
"""
Lineup extraction from a located lineup grid.
"""

import logging
from typing import List, Optional, Tuple

from bs4 import Tag

from logger import LineupEntry, Side, Squad

from ..base_extractor import BaseDataExtractor
from ..text_utils import clean_text, strip_trailing_minutes

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = "—"


class LineupParser(BaseDataExtractor):
    """
    Turns a lineup grid into ordered LineupEntry records.

    The grid repeats a fixed quadruple of children per squad: home header,
    away header, home list, away list. Document order inside each list is
    the slot order; a single running index covers home XI, away XI, home
    bench and away bench.
    """

    def parse(
        self,
        region: Optional[Tag],
        ksi_match_id: str,
        home_team_id: Optional[str] = None,
        away_team_id: Optional[str] = None,
    ) -> List[LineupEntry]:
        """
        Extract all lineup entries from the region.

        Args:
            region: Located lineup grid (None yields no entries)
            ksi_match_id: Match the entries belong to
            home_team_id: Team attributed to home rows
            away_team_id: Team attributed to away rows

        Returns:
            Entries with lineup_idx 0..n-1, empty when nothing was found
        """
        if region is None:
            return []

        starting = self.find_lists(region, self.html.STARTING_LABEL)
        bench = self.find_lists(region, self.html.BENCH_LABEL)

        if starting is None and bench is None:
            starting, bench = self._positional_lists(region)

        entries: List[LineupEntry] = []
        for squad, lists in ((Squad.STARTING, starting), (Squad.BENCH, bench)):
            if lists is None:
                continue
            home_list, away_list = lists
            for side, team_id, list_element in (
                (Side.HOME, home_team_id, home_list),
                (Side.AWAY, away_team_id, away_list),
            ):
                entries.extend(
                    self.parse_list(
                        list_element,
                        ksi_match_id,
                        team_id,
                        squad,
                        side,
                        start_idx=len(entries),
                    )
                )

        logger.debug("match %s: %d lineup rows", ksi_match_id, len(entries))
        return entries

    def find_lists(self, grid: Tag, label: str) -> Optional[Tuple[Tag, Tag]]:
        """
        Find the (home list, away list) pair following two ``label`` headers.
        """
        children = self.child_tags(grid)
        for i in range(len(children) - 3):
            if not (
                self._is_header(children[i], label)
                and self._is_header(children[i + 1], label)
            ):
                continue
            home_list, away_list = children[i + 2], children[i + 3]
            if self._looks_like_list(home_list) and self._looks_like_list(away_list):
                return home_list, away_list
        return None

    def _is_header(self, element: Tag, label: str) -> bool:
        has_side_icon = self.has_icon(element, self.html.HOME_ICON_ALT) or self.has_icon(
            element, self.html.AWAY_ICON_ALT
        )
        first_span = element.find("span")
        return has_side_icon and self.element_text(first_span) == label

    def _looks_like_list(self, element: Tag) -> bool:
        return element.name == "div" and bool(self.player_links(element))

    def _positional_lists(
        self, region: Tag
    ) -> Tuple[Optional[Tuple[Tag, Tag]], Optional[Tuple[Tag, Tag]]]:
        """
        Headerless grid: player lists in order are home XI, away XI,
        home bench, away bench.
        """
        lists = [child for child in self.child_tags(region) if self._looks_like_list(child)]
        starting = (lists[0], lists[1]) if len(lists) >= 2 else None
        bench = (lists[2], lists[3]) if len(lists) >= 4 else None
        return starting, bench

    def row_elements(self, list_element: Tag) -> List[Tag]:
        """
        Rows are the list's direct <a>/<div> children marked with the row
        class; lists without the marker fall back to their player anchors.
        """
        rows = [
            child
            for child in self.child_tags(list_element)
            if child.name in ("a", "div")
            and self.has_classes(child, self.html.LINEUP_ROW_CLASS)
        ]
        return rows or self.player_links(list_element)

    def parse_list(
        self,
        list_element: Tag,
        ksi_match_id: str,
        team_id: Optional[str],
        squad: str,
        side: str,
        start_idx: int,
    ) -> List[LineupEntry]:
        entries = []
        for row in self.row_elements(list_element):
            entries.append(
                self.parse_row(
                    row,
                    ksi_match_id,
                    team_id,
                    squad,
                    side,
                    lineup_idx=start_idx + len(entries),
                )
            )
        return entries

    def parse_row(
        self,
        row: Tag,
        ksi_match_id: str,
        team_id: Optional[str],
        squad: str,
        side: str,
        lineup_idx: int,
    ) -> LineupEntry:
        """
        Build one entry. Rows without a player link still produce a
        name-only entry so squad sizes stay correct.
        """
        if row.name == "a":
            anchor = row
        else:
            links = self.player_links(row)
            anchor = links[0] if links else None
        href = anchor.get("href") if anchor is not None else None

        name, is_gk = self.parse_name(row)

        return LineupEntry(
            ksi_match_id=ksi_match_id,
            lineup_idx=lineup_idx,
            side=side,
            squad=squad,
            ksi_team_id=team_id,
            ksi_player_id=self.link_id(anchor),
            player_name=name,
            shirt_number=self.parse_shirt_number(row),
            is_gk=True if is_gk else None,
            raw={"href": href, "text": self.element_text(row)},
        )

    def parse_shirt_number(self, row: Tag) -> Optional[int]:
        for span in row.find_all("span"):
            if self.has_any_class(span, self.html.SHIRT_NUMBER_CLASSES):
                text = self.element_text(span)
                return int(text) if text.isdigit() else None
        return None

    def parse_name(self, row: Tag) -> Tuple[str, bool]:
        """
        Prefer the span carrying the goalkeeper marker, then the longest
        span, then the row text; drop trailing minutes and the marker.
        """
        marker = self.html.GOALKEEPER_MARKER
        span_texts = [t for t in (self.element_text(s) for s in row.find_all("span")) if t]

        raw_name = next((t for t in span_texts if marker in t), None)
        if raw_name is None and span_texts:
            raw_name = max(span_texts, key=len)
        if raw_name is None:
            raw_name = self.element_text(row)

        raw_name = strip_trailing_minutes(raw_name)
        is_gk = marker.lower() in raw_name.lower()
        name = clean_text(_remove_marker(raw_name, marker))
        return name or raw_name or NAME_PLACEHOLDER, is_gk


def _remove_marker(text: str, marker: str) -> str:
    lowered = text.lower()
    marker = marker.lower()
    while marker in lowered:
        start = lowered.index(marker)
        text = text[:start] + text[start + len(marker) :]
        lowered = text.lower()
    return text
