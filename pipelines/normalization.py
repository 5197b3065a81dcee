# pipelines/normalization.py
"""
Normalisation helpers between extraction and storage.

Records leave the extractors already keyed; these helpers re-establish
the key invariants on any list assembled elsewhere (merged pages, test
fixtures, repaired rows) and shape records for dry-run previews.
"""

from dataclasses import asdict, is_dataclass, replace
from typing import Any, Callable, Dict, Hashable, Iterable, List, Sequence, TypeVar

import pandas as pd

from database.store import chunked
from extractors.parsers.event_parser import order_events
from logger import LineupEntry, MatchEvent

T = TypeVar("T")

PREVIEW_DROP_COLUMNS = ("raw",)


def assign_lineup_slots(entries: Sequence[LineupEntry]) -> List[LineupEntry]:
    """
    Renumber lineup entries 0..n-1 in the order given.

    The order is document order (home XI, away XI, home bench, away
    bench); nothing is sorted, so no gap or duplicate index can appear.
    """
    return [replace(entry, lineup_idx=idx) for idx, entry in enumerate(entries)]


def sort_and_index_events(events: Sequence[MatchEvent]) -> List[MatchEvent]:
    """Sort by (minute, stoppage, team, type, players) and number 0..n-1."""
    return order_events(events)


def dedupe_by_key(items: Iterable[T], key: Callable[[T], Hashable]) -> List[T]:
    """Keep the first item for every key, preserving order."""
    seen = set()
    kept = []
    for item in items:
        marker = key(item)
        if marker in seen:
            continue
        seen.add(marker)
        kept.append(item)
    return kept


def to_rows(records: Iterable[Any]) -> List[Dict[str, Any]]:
    rows = []
    for record in records:
        if hasattr(record, "to_row"):
            rows.append(record.to_row())
        elif is_dataclass(record):
            rows.append(asdict(record))
        else:
            rows.append(dict(record))
    return rows


def records_frame(records: Iterable[Any], max_rows: int = 0) -> pd.DataFrame:
    """
    Records as a DataFrame for dry-run previews; raw captures dropped.
    """
    frame = pd.DataFrame(to_rows(records))
    if frame.empty:
        return frame
    frame = frame.drop(columns=[c for c in PREVIEW_DROP_COLUMNS if c in frame.columns])
    return frame.head(max_rows) if max_rows else frame


__all__ = [
    "assign_lineup_slots",
    "sort_and_index_events",
    "dedupe_by_key",
    "chunked",
    "to_rows",
    "records_frame",
]
