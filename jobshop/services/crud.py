# jobshop/services/crud.py
"""
Row helpers shared by the catalog, order and expense services.
"""

from typing import Any, Dict

from sqlalchemy.engine import Connection, RowMapping
from sqlalchemy.schema import Table

from jobshop.db.store import TableStore
from jobshop.errors import NotFoundError


def require_row(conn: Connection, table: Table, entity: str, row_id: int) -> RowMapping:
    row = TableStore(conn, table).get(row_id)
    if row is None:
        raise NotFoundError(entity, row_id)
    return row


def create_row(conn: Connection, table: Table, values: Dict[str, Any]) -> RowMapping:
    return TableStore(conn, table).insert(values)


def update_row(
    conn: Connection, table: Table, entity: str, row_id: int, values: Dict[str, Any]
) -> RowMapping:
    store = TableStore(conn, table)
    if not store.update(row_id, values):
        raise NotFoundError(entity, row_id)
    return store.get(row_id)


def delete_row(conn: Connection, table: Table, entity: str, row_id: int) -> None:
    if not TableStore(conn, table).delete(row_id):
        raise NotFoundError(entity, row_id)
