# extractors/parsers/event_parser.py
"""
Match timeline extraction from a located events grid.
"""

import logging
import re
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from bs4 import Tag

from logger import EventType, MatchEvent, ScrapingConstants, Side

from ..base_extractor import BaseDataExtractor
from ..text_utils import (
    clean_text,
    is_punctuation_only,
    parse_minute,
    strip_minute_glyphs,
    strip_minute_tokens,
)
from .parser_config import IconVariant, ParserConfig

logger = logging.getLogger(__name__)

_MINUTE_BUBBLE = re.compile(ScrapingConstants.MINUTE_BUBBLE_PATTERN)


class EventParser(BaseDataExtractor):
    """
    Turns an events grid into MatchEvent records ordered by time.

    Two node layouts are handled. Current pages mark each event with a
    ``data-event-id`` div inside a full-width row whose class tells the
    column; older pages only have two plain columns (home, away) holding
    minute-stamped rows.
    """

    def __init__(
        self,
        reversed_row_side: str = Side.AWAY,
        icon_variants: Iterable[str] = ("current", "legacy"),
    ):
        """
        Args:
            reversed_row_side: Side rendered by rows carrying the reversed
                flex class
            icon_variants: Names of the colour conventions to recognise

        Raises:
            ValueError: If reversed_row_side is not home or away
            ConfigurationError: If a variant name is unknown
        """
        super().__init__()
        if reversed_row_side not in Side.ALL:
            raise ValueError(f"reversed_row_side must be one of {Side.ALL}")
        self.reversed_row_side = reversed_row_side
        self.variants = ParserConfig.get_icon_variants(icon_variants)

    def parse(
        self,
        region: Optional[Tag],
        ksi_match_id: str,
        home_team_id: Optional[str] = None,
        away_team_id: Optional[str] = None,
        player_to_team: Optional[Dict[str, str]] = None,
    ) -> List[MatchEvent]:
        """
        Extract, de-duplicate and order the events of one match.

        Args:
            region: Located events grid (None yields no events)
            ksi_match_id: Match the events belong to
            home_team_id: Team of the home column
            away_team_id: Team of the away column
            player_to_team: Known player id -> team id (from lineups)

        Returns:
            Events sorted by (minute, stoppage, team, type, players) with
            event_idx 0..n-1
        """
        if region is None:
            return []

        teams = {Side.HOME: home_team_id, Side.AWAY: away_team_id}
        player_to_team = player_to_team or {}

        candidates = list(self._marked_events(region))
        if not candidates:
            candidates = list(self._column_events(region))

        events: List[MatchEvent] = []
        seen = set()
        for node, row, side in candidates:
            event = self.parse_event(
                node, row, ksi_match_id, teams.get(side), player_to_team
            )
            if event is None:
                continue
            key = event.dedupe_key()
            if key in seen:
                continue
            seen.add(key)
            events.append(event)

        return order_events(events)

    # =================================================================
    #                        NODE ENUMERATION                         |
    # =================================================================

    def _marked_events(self, region: Tag) -> Iterable[Tuple[Tag, Tag, str]]:
        for node in region.find_all("div", attrs={self.html.EVENT_ID_ATTR: True}):
            if not self.has_classes(node, self.html.EVENT_NODE_CLASS):
                continue
            row = self._enclosing_row(node)
            if row is None:
                continue
            yield node, row, self.row_side(row)

    def _enclosing_row(self, node: Tag) -> Optional[Tag]:
        for ancestor in node.parents:
            if (
                isinstance(ancestor, Tag)
                and ancestor.name == "div"
                and self.has_classes(ancestor, self.html.EVENT_ROW_CLASS)
            ):
                return ancestor
        return None

    def row_side(self, row: Tag) -> str:
        """Reversed rows render the configured side, other rows the opposite."""
        if self.has_classes(row, self.html.REVERSED_ROW_CLASS):
            return self.reversed_row_side
        return Side.HOME if self.reversed_row_side == Side.AWAY else Side.AWAY

    def _column_events(self, region: Tag) -> Iterable[Tuple[Tag, Tag, str]]:
        """
        Older two-column layout: first column home, second away. A row is
        the innermost block with a minute marker and a player link or icon.
        """
        columns = self.child_tags(region)[:2]
        for side, column in zip((Side.HOME, Side.AWAY), columns):
            for row in self._minute_rows(column):
                yield row, row, side

    def _minute_rows(self, column: Tag) -> List[Tag]:
        rows = []
        for element in column.find_all(["div", "li", "tr"]):
            text = self.element_text(element)
            if not text or len(text) > self.html.MAX_EVENT_ROW_TEXT:
                continue
            if parse_minute(text)[0] is None:
                continue
            if not (self.player_links(element) or element.find(["svg", "img"])):
                continue
            rows.append(element)
        # ***> keep innermost rows only <***
        return [
            row
            for row in rows
            if not any(
                other is not row and any(parent is row for parent in other.parents)
                for other in rows
            )
        ]

    # =================================================================
    #                          SINGLE EVENT                           |
    # =================================================================

    def parse_event(
        self,
        node: Tag,
        row: Tag,
        ksi_match_id: str,
        column_team_id: Optional[str],
        player_to_team: Dict[str, str],
    ) -> Optional[MatchEvent]:
        """
        Build one event, or None when no minute can be read.
        """
        minute, stoppage = self.parse_minute(row)
        if minute is None:
            return None

        links = self.player_links(node)
        ids = [self.link_id(a) for a in links]
        names = [self.element_text(a) for a in links]
        row_text = self.element_text(row)
        notes = build_notes(row_text, names, self._stoppage_labels(row))

        event_type = self.classify(node, len(links), self.icon_hints(node), notes)

        player_id = player_name = None
        sub_on_id = sub_off_id = sub_on_name = sub_off_name = None
        if event_type == EventType.SUBSTITUTION:
            sub_on_id, sub_on_name, sub_off_id, sub_off_name = self.substitution_players(
                node, ids, names
            )
        elif links:
            player_id, player_name = ids[0], names[0] or None

        team_id = column_team_id
        for candidate in (player_id, sub_on_id, sub_off_id):
            if candidate and candidate in player_to_team:
                team_id = player_to_team[candidate]
                break

        return MatchEvent(
            ksi_match_id=ksi_match_id,
            event_idx=0,
            minute=minute,
            stoppage=stoppage,
            event_type=event_type,
            ksi_team_id=team_id,
            ksi_player_id=player_id,
            player_name=player_name,
            sub_on_ksi_player_id=sub_on_id,
            sub_off_ksi_player_id=sub_off_id,
            sub_on_name=sub_on_name,
            sub_off_name=sub_off_name,
            notes=notes,
            raw={
                "text": row_text,
                "event_html": clean_text(str(node)),
                "row_html": clean_text(str(row)),
            },
        )

    def parse_minute(self, row: Tag) -> Tuple[Optional[int], Optional[int]]:
        """
        Read the minute bubble, falling back to the first minute marker in
        the row text. The small stoppage label wins over a "+N" suffix.
        """
        minute, stoppage = None, None
        for element in row.find_all(["span", "div", "p"]):
            match = _MINUTE_BUBBLE.match(self.element_text(element))
            if match and any(g in self.element_text(element) for g in ScrapingConstants.MINUTE_GLYPHS):
                minute = int(match.group(1))
                stoppage = int(match.group(2)) if match.group(2) else None
                break
        if minute is None:
            minute, stoppage = parse_minute(self.element_text(row))
        if minute is None:
            return None, None

        for span in row.find_all("span"):
            if self.has_classes(span, self.html.STOPPAGE_CLASS):
                text = self.element_text(span)
                if text.isdigit() and len(text) <= 2:
                    stoppage = int(text)
                break
        return minute, stoppage

    def _stoppage_labels(self, row: Tag) -> List[str]:
        return [
            self.element_text(span)
            for span in row.find_all("span")
            if self.has_classes(span, self.html.STOPPAGE_CLASS) and self.element_text(span)
        ]

    def icon_hints(self, node: Tag) -> List[str]:
        hints = []
        for element in node.find_all(True):
            for attribute in ("title", "alt"):
                value = clean_text(element.get(attribute))
                if value:
                    hints.append(value)
        return hints

    def classify(
        self,
        node: Tag,
        player_count: int,
        hints: Sequence[str],
        notes: Optional[str] = None,
    ) -> str:
        """
        Decide the event type.

        Order: yellow-card fill, substitution stroke pair, keyword hints,
        several named players (legacy), red stroke (legacy), a single
        player with an icon (goal), otherwise unknown.
        """
        icon_html = " ".join(str(svg) for svg in node.find_all("svg")).upper()
        hint_type = keyword_type(list(hints) + ([notes] if notes else []))

        if any(self._has_yellow(node, v) for v in self.variants):
            return (
                EventType.SECOND_YELLOW
                if hint_type == EventType.SECOND_YELLOW
                else EventType.YELLOW
            )

        for variant in self.variants:
            pair = variant.substitution_colours
            if pair and all(f"#{colour}" in icon_html for colour in pair):
                return EventType.SUBSTITUTION

        if hint_type:
            return hint_type

        if player_count >= 2 and any(v.multi_player_substitution for v in self.variants):
            return EventType.SUBSTITUTION

        for variant in self.variants:
            if any(f"#{colour}" in icon_html for colour in variant.red_colours):
                return EventType.RED

        if player_count == 1 and node.find("svg") is not None:
            return EventType.GOAL

        return EventType.UNKNOWN

    def _has_yellow(self, node: Tag, variant: IconVariant) -> bool:
        for div in node.find_all("div"):
            classes = self.class_string(div).upper()
            style = (div.get("style") or "").upper()
            for colour in variant.yellow_colours:
                if f"BG-[#{colour}]" in classes or colour in style:
                    return True
        return False

    def substitution_players(
        self, node: Tag, ids: List[Optional[str]], names: List[str]
    ) -> Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
        """
        (on id, on name, off id, off name): coloured link classes first.
        With one side coloured, the other is the first remaining link;
        with neither, document order (first link on, second off).
        """
        on_link = off_link = None
        for anchor in self.player_links(node):
            if on_link is None and self.has_classes(anchor, self.html.SUB_ON_LINK_CLASS):
                on_link = anchor
            elif off_link is None and self.has_classes(anchor, self.html.SUB_OFF_LINK_CLASS):
                off_link = anchor

        on_id = self.link_id(on_link)
        on_name = self.element_text(on_link) or None
        off_id = self.link_id(off_link)
        off_name = self.element_text(off_link) or None

        if not on_id and not off_id:
            if len(ids) > 0:
                on_id, on_name = ids[0], names[0] or None
            if len(ids) > 1:
                off_id, off_name = ids[1], names[1] or None
        elif not off_id:
            off_id, off_name = self._first_other(ids, names, on_id)
        elif not on_id:
            on_id, on_name = self._first_other(ids, names, off_id)
        return on_id, on_name, off_id, off_name

    @staticmethod
    def _first_other(
        ids: List[Optional[str]], names: List[str], taken: str
    ) -> Tuple[Optional[str], Optional[str]]:
        for player_id, name in zip(ids, names):
            if player_id and player_id != taken:
                return player_id, name or None
        return None, None


def keyword_type(hints: Sequence[str]) -> Optional[str]:
    text = " ".join(clean_text(h) for h in hints).lower()
    if not text:
        return None
    for event_type, keywords in ParserConfig.KEYWORD_HINTS:
        if any(keyword in text for keyword in keywords):
            return event_type
    return None


def build_notes(
    row_text: str,
    player_names: Sequence[str],
    extra_tokens: Sequence[str] = (),
) -> Optional[str]:
    """
    Row text minus minute tokens, player names and minute glyphs; None when
    nothing meaningful remains.
    """
    notes = strip_minute_tokens(row_text)
    for token in extra_tokens:
        notes = clean_text(re.sub(rf"(?<!\d)\+?\s*{re.escape(token)}(?!\d)", " ", notes, count=1))
    for name in player_names:
        if name:
            notes = clean_text(notes.replace(name, " ", 1))
    notes = strip_minute_glyphs(notes)
    if not notes or is_punctuation_only(notes):
        return None
    return notes


def order_events(events: Sequence[MatchEvent]) -> List[MatchEvent]:
    """Sort by the event sort key and assign event_idx 0..n-1."""
    ordered = sorted(events, key=lambda e: e.sort_key())
    return [replace(event, event_idx=i) for i, event in enumerate(ordered)]
