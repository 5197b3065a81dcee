# database/repositories/base_repository.py
"""
Base repository pattern implementation.
Maps value records onto one table of a TableStore.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from database.store import TableStore, chunked

IN_CHUNK = 500


class BaseRepository:
    """
    Common upsert/select plumbing over a TableStore.

    Subclasses set ``table`` and ``conflict_columns`` (the natural key).
    """

    table: str = ""
    conflict_columns: Sequence[str] = ()

    def __init__(self, store: TableStore):
        """
        Args:
            store: Row store the repository writes through

        Raises:
            ValueError: If the subclass does not name its table
        """
        if not self.table or not self.conflict_columns:
            raise ValueError(f"{type(self).__name__} must define table and conflict_columns")
        self.store = store

    def upsert_rows(self, rows: List[Dict[str, Any]], **options) -> int:
        return self.store.upsert(self.table, rows, self.conflict_columns, **options)

    def select(self, filters: Optional[Dict[str, Any]] = None, **options) -> List[Dict[str, Any]]:
        return self.store.select(self.table, filters, **options)

    def select_all(self, filters: Optional[Dict[str, Any]] = None, **options) -> List[Dict[str, Any]]:
        """Every matching row, fetched page by page when the store supports it."""
        select_all = getattr(self.store, "select_all", None)
        if select_all is not None:
            return select_all(self.table, filters, **options)
        return self.store.select(self.table, filters, **options)

    def select_in(
        self,
        column: str,
        values: Sequence[Any],
        filters: Optional[Dict[str, Any]] = None,
        **options,
    ) -> List[Dict[str, Any]]:
        """
        Rows whose ``column`` is one of ``values``, queried in chunks to
        stay under driver parameter limits.
        """
        rows: List[Dict[str, Any]] = []
        for batch in chunked(list(dict.fromkeys(values)), IN_CHUNK):
            chunk_filters = dict(filters or {})
            chunk_filters[column] = ("in", list(batch))
            rows.extend(self.select_all(chunk_filters, **options))
        return rows


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value) -> Optional[datetime]:
    """'2025-06-27T19:15:00Z' -> aware datetime; None and datetimes pass through."""
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
