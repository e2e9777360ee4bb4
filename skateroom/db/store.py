from __future__ import annotations

from typing import Any, Mapping, Protocol

from sqlalchemy import Table, and_, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from skateroom.database import Base
import skateroom.models  # noqa: F401  # ensure all tables are registered on Base.metadata


Row = dict[str, Any]
Filters = Mapping[str, Any]


class StoreError(RuntimeError):
    """A failed call against one collection of the persistent store."""

    def __init__(self, collection: str, operation: str, message: str) -> None:
        super().__init__(f"{operation} on '{collection}' failed: {message}")
        self.collection = collection
        self.operation = operation
        self.message = message


class TableStore(Protocol):
    """Generic per-collection table interface.

    Every call is independent: there is no transaction spanning two calls, let
    alone two collections.
    """

    def select(
        self,
        collection: str,
        filters: Filters | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]: ...

    def maybe_single(self, collection: str, filters: Filters) -> Row | None: ...

    def insert(self, collection: str, rows: list[Row]) -> list[Row]: ...

    def update(self, collection: str, patch: Row, filters: Filters) -> list[Row]: ...

    def delete(self, collection: str, filters: Filters) -> int: ...


class SqlTableStore:
    """`TableStore` over SQLAlchemy Core, addressing ORM tables by name."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def _table(self, collection: str, operation: str) -> Table:
        table = Base.metadata.tables.get(collection)
        if table is None:
            raise StoreError(collection, operation, "unknown collection")
        return table

    @staticmethod
    def _where(table: Table, collection: str, operation: str, filters: Filters | None):
        clauses = []
        for column, value in (filters or {}).items():
            if column not in table.c:
                raise StoreError(collection, operation, f"unknown column '{column}'")
            clauses.append(table.c[column] == value)
        return and_(*clauses) if clauses else None

    def select(
        self,
        collection: str,
        filters: Filters | None = None,
        *,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        table = self._table(collection, "select")
        stmt = select(table)
        where = self._where(table, collection, "select", filters)
        if where is not None:
            stmt = stmt.where(where)
        if order_by is not None:
            if order_by not in table.c:
                raise StoreError(collection, "select", f"unknown column '{order_by}'")
            column = table.c[order_by]
            stmt = stmt.order_by(column.desc() if descending else column.asc())
        try:
            result = self._db.execute(stmt)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise StoreError(collection, "select", type(exc).__name__) from exc

    def maybe_single(self, collection: str, filters: Filters) -> Row | None:
        """Return the one matching row, or None when nothing matches.

        Zero rows is a normal outcome; more than one is a store error.
        """

        rows = self.select(collection, filters)
        if len(rows) > 1:
            raise StoreError(collection, "select", f"expected at most one row, got {len(rows)}")
        return rows[0] if rows else None

    def insert(self, collection: str, rows: list[Row]) -> list[Row]:
        table = self._table(collection, "insert")
        inserted: list[Row] = []
        try:
            for row in rows:
                result = self._db.execute(insert(table).values(**row).returning(*table.c))
                inserted.append(dict(result.mappings().one()))
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(collection, "insert", type(exc).__name__) from exc
        return inserted

    def update(self, collection: str, patch: Row, filters: Filters) -> list[Row]:
        table = self._table(collection, "update")
        where = self._where(table, collection, "update", filters)
        if where is None:
            raise StoreError(collection, "update", "refusing to update without a filter")
        try:
            result = self._db.execute(update(table).where(where).values(**patch).returning(*table.c))
            updated = [dict(row) for row in result.mappings().all()]
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(collection, "update", type(exc).__name__) from exc
        return updated

    def delete(self, collection: str, filters: Filters) -> int:
        table = self._table(collection, "delete")
        where = self._where(table, collection, "delete", filters)
        if where is None:
            raise StoreError(collection, "delete", "refusing to delete without a filter")
        try:
            result = self._db.execute(delete(table).where(where))
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            raise StoreError(collection, "delete", type(exc).__name__) from exc
        return int(result.rowcount or 0)
