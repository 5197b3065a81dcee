# database/store/table_store.py
"""
Generic row store: upsert by conflict key, filtered/paged select, delete.

Ingestion code depends only on the ``TableStore`` shape; the SQLAlchemy
implementation below runs it on SQLite or PostgreSQL.
"""

import logging
from contextlib import contextmanager
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
)

from sqlalchemy import Table, delete, func, insert, select, update
from sqlalchemy.dialects import postgresql, sqlite

from database.base import Base
from database.core.database_manager import DatabaseManager
from exceptions import DatabaseOperationError, DatabaseQueryError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
Filters = Mapping[str, Any]

FILTER_OPERATORS = ("eq", "neq", "gte", "lte", "gt", "lt", "in", "is", "not_null")
DEFAULT_BATCH_SIZE = 500
DEFAULT_PAGE_SIZE = 1000


def chunked(items: Sequence[Any], size: int) -> Iterator[Sequence[Any]]:
    """Consecutive slices of at most ``size`` items."""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class TableStore(Protocol):
    def upsert(
        self,
        table: str,
        rows: Sequence[Row],
        conflict_columns: Sequence[str],
        update_columns: Optional[Sequence[str]] = None,
        only_missing: Sequence[str] = (),
    ) -> int: ...

    def select(
        self,
        table: str,
        filters: Optional[Filters] = None,
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[Sequence[str]] = None,
        range_: Optional[Tuple[int, int]] = None,
    ) -> List[Row]: ...

    def delete(self, table: str, filters: Filters) -> int: ...

    def update(self, table: str, values: Row, filters: Filters) -> int: ...

class SqlAlchemyTableStore:
    """
    TableStore on SQLAlchemy Core.

    Writes go out in ``batch_size`` chunks, one transaction per chunk. A
    failing chunk raises DatabaseOperationError carrying the table and the
    chunk position; chunks before it stay committed.
    """

    def __init__(
        self,
        db_manager: DatabaseManager,
        batch_size: int = DEFAULT_BATCH_SIZE,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if not isinstance(db_manager, DatabaseManager):
            raise ValueError("db_manager must be a DatabaseManager instance")
        self.db_manager = db_manager
        self.batch_size = batch_size
        self.page_size = page_size

    # =================================================================
    #                             WRITES                              |
    # =================================================================

    def upsert(
        self,
        table: str,
        rows: Sequence[Row],
        conflict_columns: Sequence[str],
        update_columns: Optional[Sequence[str]] = None,
        only_missing: Sequence[str] = (),
    ) -> int:
        """
        Insert rows, overwriting existing ones that share the conflict key.

        Args:
            table: Table name
            rows: Row dicts; every row must carry the same keys
            conflict_columns: Natural key columns
            update_columns: Columns overwritten on conflict (default: every
                non-key column present in the rows)
            only_missing: Columns written on conflict only when the stored
                value is NULL (first writer wins)

        Returns:
            Number of rows sent

        Raises:
            DatabaseOperationError: If a chunk is rejected
        """
        if not rows:
            return 0

        target = self._table(table)
        columns = self._row_columns(table, rows)
        if update_columns is None:
            update_columns = [c for c in columns if c not in conflict_columns]

        written = 0
        for batch_index, batch in enumerate(chunked(list(rows), self.batch_size)):
            stmt = self._dialect_insert(target).values(list(batch))
            assignments = {}
            for column in update_columns:
                if column in only_missing:
                    assignments[column] = func.coalesce(
                        target.c[column], stmt.excluded[column]
                    )
                else:
                    assignments[column] = stmt.excluded[column]

            if assignments:
                stmt = stmt.on_conflict_do_update(
                    index_elements=list(conflict_columns), set_=assignments
                )
            else:
                stmt = stmt.on_conflict_do_nothing(index_elements=list(conflict_columns))

            self._execute_write(stmt, table, batch_index)
            written += len(batch)

        logger.debug("upsert %s: %d rows", table, written)
        return written

    def insert(self, table: str, rows: Sequence[Row]) -> int:
        """Plain bulk insert, chunked like ``upsert``."""
        if not rows:
            return 0
        target = self._table(table)
        self._row_columns(table, rows)

        written = 0
        for batch_index, batch in enumerate(chunked(list(rows), self.batch_size)):
            self._execute_write(insert(target).values(list(batch)), table, batch_index)
            written += len(batch)
        return written

    def update(self, table: str, values: Row, filters: Filters) -> int:
        """
        Patch columns of existing rows. An empty filter is refused.
        """
        if not filters:
            raise ValueError(f"Refusing to update {table} without filters")
        if not values:
            return 0
        target = self._table(table)
        for column in values:
            self._column(target, column)
        stmt = update(target).where(*self._conditions(target, filters)).values(**values)
        with self._session(table) as session:
            result = session.execute(stmt)
            return result.rowcount or 0

    def delete(self, table: str, filters: Filters) -> int:
        """
        Delete rows matching the filters. An empty filter is refused.
        """
        if not filters:
            raise ValueError(f"Refusing to delete from {table} without filters")
        target = self._table(table)
        stmt = delete(target).where(*self._conditions(target, filters))
        with self._session(table) as session:
            result = session.execute(stmt)
            return result.rowcount or 0

    # =================================================================
    #                              READS                              |
    # =================================================================

    def select(
        self,
        table: str,
        filters: Optional[Filters] = None,
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[Sequence[str]] = None,
        range_: Optional[Tuple[int, int]] = None,
    ) -> List[Row]:
        """
        Select rows.

        Args:
            table: Table name
            filters: column -> value, or column -> (operator, value)
            columns: Columns to return (default all)
            order_by: Column names; a leading '-' sorts descending
            range_: Inclusive (first, last) row positions

        Returns:
            List of row dicts
        """
        target = self._table(table)
        if columns:
            stmt = select(*[self._column(target, name) for name in columns])
        else:
            stmt = select(target)

        if filters:
            stmt = stmt.where(*self._conditions(target, filters))

        for name in order_by or ():
            if name.startswith("-"):
                stmt = stmt.order_by(self._column(target, name[1:]).desc())
            else:
                stmt = stmt.order_by(self._column(target, name))

        if range_ is not None:
            first, last = range_
            if first < 0 or last < first:
                raise ValueError(f"Invalid range: {range_}")
            stmt = stmt.offset(first).limit(last - first + 1)

        with self._session(table) as session:
            return [dict(row._mapping) for row in session.execute(stmt)]

    def select_all(
        self,
        table: str,
        filters: Optional[Filters] = None,
        columns: Optional[Sequence[str]] = None,
        order_by: Optional[Sequence[str]] = None,
    ) -> List[Row]:
        """
        Page through a table ``page_size`` rows at a time until a short page.

        Ordering defaults to the primary key so pages do not overlap.
        """
        order_by = order_by or [column.name for column in self._table(table).primary_key]
        rows: List[Row] = []
        start = 0
        while True:
            page = self.select(
                table,
                filters=filters,
                columns=columns,
                order_by=order_by,
                range_=(start, start + self.page_size - 1),
            )
            rows.extend(page)
            if len(page) < self.page_size:
                return rows
            start += self.page_size

    def count(self, table: str, filters: Optional[Filters] = None) -> int:
        target = self._table(table)
        stmt = select(func.count()).select_from(target)
        if filters:
            stmt = stmt.where(*self._conditions(target, filters))
        with self._session(table) as session:
            return session.execute(stmt).scalar_one()

    # =================================================================
    #                             HELPERS                             |
    # =================================================================

    def _table(self, name: str) -> Table:
        try:
            return Base.metadata.tables[name]
        except KeyError:
            raise DatabaseQueryError(f"Unknown table: {name}") from None

    @staticmethod
    def _column(target: Table, name: str):
        try:
            return target.c[name]
        except KeyError:
            raise DatabaseQueryError(f"Unknown column {target.name}.{name}") from None

    def _row_columns(self, table: str, rows: Sequence[Row]) -> List[str]:
        target = self._table(table)
        columns = list(rows[0].keys())
        for column in columns:
            self._column(target, column)
        expected = set(columns)
        for row in rows:
            if set(row.keys()) != expected:
                raise ValueError(f"Rows for {table} do not share the same columns")
        return columns

    def _conditions(self, target: Table, filters: Filters) -> List[Any]:
        conditions = []
        for name, value in filters.items():
            column = self._column(target, name)
            if isinstance(value, tuple) and len(value) == 2 and value[0] in FILTER_OPERATORS:
                operator, operand = value
            else:
                operator, operand = "eq", value
            conditions.append(_condition(column, operator, operand))
        return conditions

    def _dialect_insert(self, target: Table):
        if self.db_manager.db_type == "postgresql":
            return postgresql.insert(target)
        return sqlite.insert(target)

    def _execute_write(self, stmt, table: str, batch_index: int) -> None:
        with self._session(table, batch_index) as session:
            session.execute(stmt)

    @contextmanager
    def _session(self, table: str, batch_index: Optional[int] = None):
        """
        Session that tags storage failures with table and batch position.
        """
        try:
            with self.db_manager.get_session() as session:
                yield session
        except DatabaseOperationError as error:
            if error.table is not None:
                raise
            raise DatabaseOperationError(
                error.message, table=table, batch_index=batch_index
            ) from error


def _condition(column, operator: str, operand: Any):
    if operator == "eq":
        return column == operand
    if operator == "neq":
        return column != operand
    if operator == "gte":
        return column >= operand
    if operator == "lte":
        return column <= operand
    if operator == "gt":
        return column > operand
    if operator == "lt":
        return column < operand
    if operator == "in":
        return column.in_(list(operand))
    if operator == "is":
        return column.is_(operand)
    if operator == "not_null":
        return column.is_not(None)
    raise DatabaseQueryError(f"Unsupported filter operator: {operator}")

