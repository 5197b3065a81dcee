# pipelines/backfill.py
"""
Substitution minutes copied from match events onto lineup rows.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from logger import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MinutePatch:
    """Minutes to write onto one lineup row; None means leave as is."""

    ksi_match_id: str
    side: str
    squad: str
    lineup_idx: int
    minute_in: Optional[int] = None
    minute_out: Optional[int] = None

    @property
    def key(self) -> Dict[str, Any]:
        return {
            "ksi_match_id": self.ksi_match_id,
            "side": self.side,
            "squad": self.squad,
            "lineup_idx": self.lineup_idx,
        }


def _field(record, name: str):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def backfill_substitution_minutes(lineups: Iterable[Any], events: Iterable[Any]) -> List[MinutePatch]:
    """
    Work out minute_in / minute_out for lineup rows from substitutions.

    The player coming on gets ``minute_in``, the player going off gets
    ``minute_out``. A value already stored on the lineup row is never
    overwritten; the first substitution (by event order) wins when a
    player shows up in more than one.

    Args:
        lineups: Lineup rows or LineupEntry records
        events: Event rows or MatchEvent records

    Returns:
        One patch per lineup row that gains at least one minute
    """
    minute_in: Dict[Tuple[str, str], int] = {}
    minute_out: Dict[Tuple[str, str], int] = {}

    ordered = sorted(
        (e for e in events if _field(e, "event_type") == EventType.SUBSTITUTION),
        key=lambda e: (_field(e, "ksi_match_id"), _field(e, "event_idx") or 0),
    )
    for event in ordered:
        match_id = _field(event, "ksi_match_id")
        minute = _field(event, "minute")
        if minute is None:
            continue
        on_id = _field(event, "sub_on_ksi_player_id")
        off_id = _field(event, "sub_off_ksi_player_id")
        if on_id:
            minute_in.setdefault((match_id, on_id), minute)
        if off_id:
            minute_out.setdefault((match_id, off_id), minute)

    patches = []
    for row in lineups:
        player_id = _field(row, "ksi_player_id")
        if not player_id:
            continue
        key = (_field(row, "ksi_match_id"), player_id)

        new_in = minute_in.get(key) if _field(row, "minute_in") is None else None
        new_out = minute_out.get(key) if _field(row, "minute_out") is None else None
        if new_in is None and new_out is None:
            continue

        patches.append(
            MinutePatch(
                ksi_match_id=_field(row, "ksi_match_id"),
                side=_field(row, "side"),
                squad=_field(row, "squad"),
                lineup_idx=_field(row, "lineup_idx"),
                minute_in=new_in,
                minute_out=new_out,
            )
        )

    logger.debug("minute backfill: %d lineup rows to patch", len(patches))
    return patches
