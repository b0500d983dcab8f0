# jobshop/services/ledger.py
"""
Payments recorded against an order.

Payments are append-only: there is no edit or void. Paying more than the
outstanding balance is allowed and leaves a negative outstanding amount.
"""

import logging
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.engine import Connection, RowMapping

from jobshop.core.dates import today
from jobshop.db.schema import orders, payments
from jobshop.db.store import TableStore, enum_from_store
from jobshop.errors import InvalidInputError
from jobshop.models.orders import PaymentMethod, PaymentOut, PaymentStatus
from jobshop.services.crud import require_row
from jobshop.services.pricing import ZERO, as_decimal, to_cents

logger = logging.getLogger(__name__)


def row_to_payment(row) -> PaymentOut:
    return PaymentOut(
        id=row["id"],
        order_id=row["order_id"],
        method=enum_from_store(PaymentMethod, row["method"], "payments.method"),
        amount=row["amount"],
        date=row["date"],
    )


def _amount(payment) -> Decimal:
    value = payment["amount"] if isinstance(payment, Mapping) else payment.amount
    return as_decimal(value)


def total_paid(order_payments: Iterable) -> Decimal:
    return sum((_amount(p) for p in order_payments), ZERO)


def outstanding(final_price, order_payments: Iterable) -> Decimal:
    # Negative when over-paid
    return as_decimal(final_price) - total_paid(order_payments)


def payment_status(final_price, order_payments: Iterable) -> PaymentStatus:
    order_payments = list(order_payments)
    paid = total_paid(order_payments)

    if as_decimal(final_price) - paid <= ZERO:
        return PaymentStatus.FULLY_PAID
    if paid > ZERO:
        return PaymentStatus.PARTIALLY_PAID
    return PaymentStatus.NOT_PAID


def add_payment(
    conn: Connection,
    order_id: int,
    method: PaymentMethod,
    amount,
    paid_on: Optional[date] = None,
) -> RowMapping:
    # rounded first so the amount checked is the amount stored
    amount = to_cents(amount)
    if amount <= ZERO:
        raise InvalidInputError("payment amount must be greater than zero")

    try:
        method = PaymentMethod(method)
    except ValueError:
        raise InvalidInputError(f"unknown payment method {method!r}")

    order = require_row(conn, orders, "order", order_id)

    already_paid = total_paid(TableStore(conn, payments).select({"order_id": order_id}))
    balance = as_decimal(order["final_price"]) - already_paid
    if amount > balance:
        logger.warning(
            "Payment of %s on order %s exceeds outstanding balance %s",
            amount, order_id, balance,
        )

    row = TableStore(conn, payments).insert(
        {
            "order_id": order_id,
            "method": method.value,
            "amount": amount,
            "date": paid_on or today(),
        }
    )
    logger.info("Recorded %s payment of %s on order %s", method.value, amount, order_id)
    return row


def list_payments(conn: Connection, order_id: int) -> List[RowMapping]:
    require_row(conn, orders, "order", order_id)
    return TableStore(conn, payments).select(
        {"order_id": order_id}, order_by=["date", "id"]
    )
