# extractors/parsers/standings_parser.py
"""
League table extraction from competition pages.
"""

import logging
import re
from typing import Iterable, List, Optional

from bs4 import Tag

from logger import ScrapingConstants, StandingRow, StandingsTable

from ..base_extractor import BaseDataExtractor
from ..text_utils import clean_text, extract_id, to_int
from .column_mapper import ColumnMap, map_columns, table_headers

logger = logging.getLogger(__name__)

_GOALS_PAIR = re.compile(ScrapingConstants.GOALS_PAIR_PATTERN)
_RANK_PREFIX = re.compile(ScrapingConstants.RANK_PREFIX_PATTERN)


class StandingsParser(BaseDataExtractor):
    """
    Turns standings tables into ranked StandingRow records.
    """

    def parse_tables(self, tables: Iterable[Tag]) -> List[StandingsTable]:
        """
        Extract standings from candidate tables, in page order.

        Tables whose headers do not map are skipped; so are mapped tables
        without any team rows. ``table_index`` counts only the tables kept.
        """
        parsed = []
        for table in tables:
            headers = table_headers(table)
            column_map = map_columns(headers)
            if column_map is None:
                if headers:
                    logger.debug("skipping table headers=%s", headers)
                continue

            rows = self.parse_table(table, headers, column_map)
            if not rows:
                continue

            parsed.append(
                StandingsTable(
                    table_index=len(parsed),
                    phase_name=self.guess_phase_name(table) or "",
                    variant=column_map.variant,
                    headers=tuple(headers),
                    rows=tuple(rows),
                )
            )
        return parsed

    def parse_table(
        self,
        table: Tag,
        headers: List[str],
        column_map: Optional[ColumnMap] = None,
    ) -> List[StandingRow]:
        column_map = column_map or map_columns(headers)
        if column_map is None:
            return []

        rows = []
        for tr in table.select("tbody tr") or table.find_all("tr")[1:]:
            row = self.parse_row(tr, headers, column_map)
            if row is not None:
                rows.append(row)
        return rows

    def parse_row(
        self, tr: Tag, headers: List[str], column_map: ColumnMap
    ) -> Optional[StandingRow]:
        tds = tr.find_all("td")
        if not tds:
            return None
        cells = [clean_text(td.get_text(" ")) for td in tds]

        def cell(index: Optional[int]) -> Optional[str]:
            if index is None or index >= len(cells):
                return None
            return cells[index]

        team_cell = cell(column_map.team_idx) or ""
        rank_from_text, name_from_text = split_rank(team_cell)

        # ***> current layout: <a><span>rank</span><span>name</span></a> <***
        rank_from_span = name_from_span = None
        if column_map.team_idx < len(tds):
            spans = tds[column_map.team_idx].select("a span")
            if spans:
                rank_from_span = to_int(self.element_text(spans[0]))
                name_from_span = self.element_text(spans[-1]) or None

        if column_map.position_idx is not None and cell(column_map.position_idx):
            position = to_int(cell(column_map.position_idx))
        elif rank_from_span is not None:
            position = rank_from_span
        else:
            position = rank_from_text

        team_name = name_from_span or name_from_text or team_cell
        if not team_name:
            return None

        team_link = tr.find("a", href=lambda href: href and "id=" in href)
        goals_for, goals_against = parse_goals_pair(cell(column_map.goals_idx))

        return StandingRow(
            team_name=team_name,
            position=position,
            ksi_team_id=extract_id(team_link.get("href")) if team_link else None,
            played=to_int(cell(column_map.played_idx)),
            wins=to_int(cell(column_map.wins_idx)),
            draws=to_int(cell(column_map.draws_idx)),
            losses=to_int(cell(column_map.losses_idx)),
            goals_for=goals_for,
            goals_against=goals_against,
            goal_diff=to_int(cell(column_map.goal_diff_idx)),
            points=to_int(cell(column_map.points_idx)),
            raw={"headers": headers, "cells": cells, "map": column_map.as_dict()},
        )

    def guess_phase_name(self, table: Tag) -> Optional[str]:
        """
        Table caption, else the nearest heading among the previous siblings.
        """
        caption = table.find("caption")
        if caption is not None and self.element_text(caption):
            return self.element_text(caption)

        for sibling in table.find_previous_siblings(limit=self.html.PHASE_HEADING_LOOKBACK):
            if sibling.name in self.html.PHASE_HEADING_TAGS and self.element_text(sibling):
                return self.element_text(sibling)
        return None


def split_rank(text: str):
    """'3 Víkingur R.' -> (3, 'Víkingur R.')"""
    text = clean_text(text)
    match = _RANK_PREFIX.match(text)
    if not match:
        return None, text
    return int(match.group(1)), match.group(2).strip()


def parse_goals_pair(text: Optional[str]):
    """'47-27' -> (47, 27); anything else -> (None, None)"""
    if not text:
        return None, None
    match = _GOALS_PAIR.search(text)
    if not match:
        return None, None
    return int(match.group(1)), int(match.group(2))
