# extractors/parsers/column_mapper.py
"""
Standings column inference.

Maps a header row onto canonical standings fields. Two layouts are known:
the current ksi.is table (single letters, combined goals column, the
letter "S" used for both played and points) and the classic table with
longer, more varied headers.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from bs4 import Tag

from ..text_utils import clean_text, norm_header

VARIANT_NEW = "new"
VARIANT_CLASSIC = "classic"

CORE_FIELDS = ("played_idx", "wins_idx", "draws_idx", "losses_idx", "points_idx")
MIN_CORE_FIELDS = 2


@dataclass(frozen=True)
class ColumnMap:
    """
    Column positions of canonical standings fields, None where absent.
    """

    variant: str
    team_idx: int
    position_idx: Optional[int] = None
    played_idx: Optional[int] = None
    wins_idx: Optional[int] = None
    draws_idx: Optional[int] = None
    losses_idx: Optional[int] = None
    goals_idx: Optional[int] = None
    goal_diff_idx: Optional[int] = None
    points_idx: Optional[int] = None

    def as_dict(self) -> dict:
        return dict(self.__dict__)


def _find(headers: Sequence[str], predicate: Callable[[str], bool]) -> Optional[int]:
    for index, header in enumerate(headers):
        if predicate(header):
            return index
    return None


def _is_team(h: str) -> bool:
    return "lid" in h or "felag" in h or "team" in h


def _is_goal_diff(h: str) -> bool:
    return "+/-" in h or "diff" in h or "gd" in h


def map_columns(header_row: Sequence[str]) -> Optional[ColumnMap]:
    """
    Infer the standings column map for a header row.

    Args:
        header_row: Raw header cell texts in column order

    Returns:
        ColumnMap, or None when the row has no team column (not a standings
        table) or too few recognisable numeric columns to trust
    """
    headers = [norm_header(h) for h in header_row]

    team_idx = _find(headers, _is_team)
    if team_idx is None:
        return None

    return _map_new_layout(headers, team_idx) or _map_classic_layout(headers, team_idx)


def _map_new_layout(headers: List[str], team_idx: int) -> Optional[ColumnMap]:
    wins_idx = _find(headers, lambda h: h == "u")
    draws_idx = _find(headers, lambda h: h == "j")
    losses_idx = _find(headers, lambda h: h == "t")
    goals_idx = _find(headers, lambda h: h == "m")
    s_columns = [i for i, h in enumerate(headers) if h == "s"]

    if None in (wins_idx, draws_idx, losses_idx, goals_idx) or len(s_columns) < 2:
        return None

    # ***> first "S" after the team column is played, the last one is points <***
    after_team = [i for i in s_columns if i > team_idx]
    played_idx = after_team[0] if after_team else s_columns[0]

    return ColumnMap(
        variant=VARIANT_NEW,
        team_idx=team_idx,
        played_idx=played_idx,
        wins_idx=wins_idx,
        draws_idx=draws_idx,
        losses_idx=losses_idx,
        goals_idx=goals_idx,
        goal_diff_idx=_find(headers, _is_goal_diff),
        points_idx=s_columns[-1],
    )


def _map_classic_layout(headers: List[str], team_idx: int) -> Optional[ColumnMap]:
    column_map = ColumnMap(
        variant=VARIANT_CLASSIC,
        team_idx=team_idx,
        position_idx=_find(
            headers, lambda h: h == "#" or "saeti" in h or "pos" in h or "nr" in h
        ),
        played_idx=_find(
            headers, lambda h: h == "l" or "leikir" in h or "played" in h
        ),
        wins_idx=_find(
            headers, lambda h: h in ("s", "w") or "sigr" in h or "wins" in h
        ),
        draws_idx=_find(
            headers, lambda h: h in ("j", "d") or "jafn" in h or "draw" in h
        ),
        losses_idx=_find(headers, lambda h: h == "t" or "tap" in h or "loss" in h),
        goals_idx=_find(
            headers,
            lambda h: h == "mk" or "mork" in h or "goals" in h or "gf-ga" in h,
        ),
        goal_diff_idx=_find(
            headers, lambda h: h == "md" or "markat" in h or "diff" in h or "gd" in h
        ),
        points_idx=_find(
            headers,
            lambda h: h == "st" or "stig" in h or "pts" in h or "points" in h,
        ),
    )

    resolved = sum(1 for name in CORE_FIELDS if getattr(column_map, name) is not None)
    if resolved < MIN_CORE_FIELDS:
        return None
    return column_map


def table_headers(table: Tag) -> List[str]:
    """
    Header texts from ``thead tr th``, else the first row's th/td cells.
    """
    headers = [clean_text(th.get_text(" ")) for th in table.select("thead tr th")]
    if headers:
        return headers
    first_row = table.find("tr")
    if first_row is None:
        return []
    return [clean_text(cell.get_text(" ")) for cell in first_row.find_all(["th", "td"])]
