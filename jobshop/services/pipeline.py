# jobshop/services/pipeline.py
"""
Order status pipeline.

lead -> contacted -> confirmed -> progressing -> completed, plus cancelled.
The order of stages is only used for display: any stage can be moved to any
other stage, including backwards and out of cancelled.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from sqlalchemy.engine import Connection

from jobshop.db.schema import orders
from jobshop.db.store import TableStore
from jobshop.errors import InvalidInputError, NotFoundError
from jobshop.models.orders import PIPELINE, OrderOut, OrderStatus

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise InvalidInputError(f"unknown order status {value!r}")


def can_transition(current, target) -> bool:
    parse_status(current)
    parse_status(target)
    return True


def move_order(conn: Connection, order_id: int, status) -> OrderStatus:
    """Single-field status update (board drag or explicit edit)."""
    status = parse_status(status)

    if not TableStore(conn, orders).update(order_id, {"status": status.value}):
        raise NotFoundError("order", order_id)

    logger.info("Order %s moved to %s", order_id, status.value)
    return status


def matches_search(order: OrderOut, query: Optional[str]) -> bool:
    """
    Case-insensitive substring on client name, or digit substring on phone
    ("98765" matches "+91 98765 43210").
    """
    if not query or not query.strip():
        return True

    query = query.strip()
    if query.lower() in order.client_name.lower():
        return True

    digits = _NON_DIGITS.sub("", query)
    if digits and order.phone:
        return digits in _NON_DIGITS.sub("", order.phone)
    return False


def _newest_first(items: Iterable[OrderOut]) -> List[OrderOut]:
    return sorted(items, key=lambda o: (o.created_at, o.id), reverse=True)


def orders_in_status(
    all_orders: Iterable[OrderOut], status, query: Optional[str] = None
) -> List[OrderOut]:
    status = parse_status(status)
    return _newest_first(
        o for o in all_orders if o.status == status and matches_search(o, query)
    )


def group_by_status(
    all_orders: Iterable[OrderOut], query: Optional[str] = None
) -> Dict[OrderStatus, List[OrderOut]]:
    """Every stage is present, in pipeline order, even when empty."""
    filtered = [o for o in all_orders if matches_search(o, query)]
    return {status: orders_in_status(filtered, status) for status in PIPELINE}
