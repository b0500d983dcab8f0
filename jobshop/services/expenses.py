# jobshop/services/expenses.py
"""
Expenses and supplier balances.

A supplier_payment expense lowers the supplier's outstanding balance by the
expense amount. The balance is adjusted once, when the expense is written;
it is never rebuilt from expense history. Both writes go through the same
connection, so callers that open it with `engine.begin()` get them in one
transaction.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.engine import Connection

from jobshop.core.dates import today
from jobshop.db.schema import expenses, suppliers
from jobshop.db.store import TableStore, enum_from_store
from jobshop.errors import InvalidInputError, NotFoundError
from jobshop.models.expenses import ExpenseIn, ExpenseOut, ExpenseType, SupplierOut
from jobshop.services.crud import require_row, update_row
from jobshop.services.pricing import ZERO, to_cents

logger = logging.getLogger(__name__)


def row_to_supplier(row) -> SupplierOut:
    return SupplierOut(
        id=row["id"],
        name=row["name"],
        contact_info=row["contact_info"],
        outstanding_payment=row["outstanding_payment"],
    )


def list_suppliers(conn: Connection) -> List[SupplierOut]:
    rows = TableStore(conn, suppliers).select(order_by=["name", "id"])
    return [row_to_supplier(row) for row in rows]


def _expense_query():
    return (
        select(expenses, suppliers.c.name.label("supplier_name"))
        .select_from(expenses.outerjoin(suppliers, expenses.c.supplier_id == suppliers.c.id))
    )


def _row_to_expense(row) -> ExpenseOut:
    return ExpenseOut(
        id=row["id"],
        type=enum_from_store(ExpenseType, row["type"], "expenses.type"),
        description=row["description"],
        amount=row["amount"],
        date=row["date"],
        supplier_id=row["supplier_id"],
        supplier_name=row["supplier_name"],
    )


def list_expenses(conn: Connection) -> List[ExpenseOut]:
    stmt = _expense_query().order_by(expenses.c.date.desc(), expenses.c.id.desc())
    return [_row_to_expense(row) for row in conn.execute(stmt).mappings().all()]


def get_expense(conn: Connection, expense_id: int) -> ExpenseOut:
    row = conn.execute(
        _expense_query().where(expenses.c.id == expense_id)
    ).mappings().first()
    if row is None:
        raise NotFoundError("expense", expense_id)
    return _row_to_expense(row)


def record_expense(conn: Connection, data: ExpenseIn) -> int:
    amount = to_cents(data.amount)
    if amount <= ZERO:
        raise InvalidInputError("expense amount must be greater than zero")

    if data.supplier_id is not None:
        require_row(conn, suppliers, "supplier", data.supplier_id)
    elif data.type == ExpenseType.SUPPLIER_PAYMENT:
        raise InvalidInputError("a supplier payment needs a supplier")

    row = TableStore(conn, expenses).insert(
        {
            "type": data.type.value,
            "description": data.description,
            "amount": amount,
            "date": data.date or today(),
            "supplier_id": data.supplier_id,
        }
    )
    logger.info("Recorded %s expense %s of %s", data.type.value, row["id"], amount)

    if data.type == ExpenseType.SUPPLIER_PAYMENT:
        # relative to the stored balance, not an earlier read
        supplier = update_row(
            conn, suppliers, "supplier", data.supplier_id,
            {"outstanding_payment": suppliers.c.outstanding_payment - amount},
        )
        logger.info(
            "Supplier %s outstanding balance now %s",
            data.supplier_id, supplier["outstanding_payment"],
        )

    return row["id"]
