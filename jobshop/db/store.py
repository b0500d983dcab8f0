# jobshop/db/store.py
"""
Thin CRUD wrapper around a single table.

Every table in the shop is read and written through the same four verbs
(select / insert / update / delete). A TableStore is bound to a connection,
so several stores used inside one `engine.begin()` block share a transaction.
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import and_, select
from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.sql import ColumnElement
from sqlalchemy.schema import Table

from jobshop.errors import StoreDataError


class TableStore:
    def __init__(self, conn: Connection, table: Table):
        self.conn = conn
        self.table = table

    def _where(self, filters: Optional[Dict[str, Any]]) -> List[ColumnElement]:
        conditions = []
        for name, value in (filters or {}).items():
            column = self.table.c[name]
            if isinstance(value, (list, tuple, set, frozenset)):
                conditions.append(column.in_(list(value)))
            elif value is None:
                conditions.append(column.is_(None))
            else:
                conditions.append(column == value)
        return conditions

    def select(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Sequence[Any]] = None,
    ) -> List[RowMapping]:
        """
        filters: {column_name: value}; a list/set value becomes IN (...).
        order_by: column names or SQLAlchemy order clauses.
        """
        stmt = select(self.table)

        conditions = self._where(filters)
        if conditions:
            stmt = stmt.where(and_(*conditions))

        if order_by:
            stmt = stmt.order_by(
                *[self.table.c[o] if isinstance(o, str) else o for o in order_by]
            )
        else:
            stmt = stmt.order_by(self.table.c.id)

        return self.conn.execute(stmt).mappings().all()

    def get(self, row_id: int) -> Optional[RowMapping]:
        stmt = select(self.table).where(self.table.c.id == row_id)
        return self.conn.execute(stmt).mappings().first()

    def insert(self, row: Dict[str, Any]) -> RowMapping:
        result = self.conn.execute(self.table.insert().values(**row))
        new_id = result.inserted_primary_key[0]
        return self.get(new_id)

    def insert_many(self, rows: Iterable[Dict[str, Any]]) -> None:
        rows = list(rows)
        if rows:
            self.conn.execute(self.table.insert(), rows)

    def update(self, row_id: int, values: Dict[str, Any]) -> bool:
        if not values:
            return self.get(row_id) is not None
        stmt = (
            self.table.update()
            .where(self.table.c.id == row_id)
            .values(**values)
        )
        return self.conn.execute(stmt).rowcount > 0

    def delete(self, row_id: int) -> bool:
        stmt = self.table.delete().where(self.table.c.id == row_id)
        return self.conn.execute(stmt).rowcount > 0

    def delete_where(self, filters: Dict[str, Any]) -> int:
        if not filters:
            raise ValueError("delete_where needs at least one filter")
        stmt = self.table.delete().where(and_(*self._where(filters)))
        return self.conn.execute(stmt).rowcount


def enum_from_store(enum_cls, value, column: str):
    """
    Rows come back with plain strings; anything outside the enum is a data
    problem in the store, not a client error.
    """
    try:
        return enum_cls(value)
    except ValueError:
        raise StoreDataError(f"unexpected value {value!r} in column {column}")
