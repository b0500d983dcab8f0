# jobshop/services/orders.py

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.engine import Connection

from jobshop.db.schema import (
    machines, materials, order_staff, orders, payments, services, staff,
)
from jobshop.db.store import TableStore, enum_from_store
from jobshop.errors import InvalidInputError, NotFoundError
from jobshop.models.orders import (
    AssignedStaff,
    OrderCreate,
    OrderOut,
    OrderStatus,
)
from jobshop.services import ledger
from jobshop.services.assignments import set_assigned_staff
from jobshop.services.crud import require_row
from jobshop.services.pricing import reprice, select_service

logger = logging.getLogger(__name__)

# Columns a client may never clear
_REQUIRED = ("client_name", "status")


def _order_rows(conn: Connection, order_ids: Optional[Sequence[int]] = None):
    stmt = (
        select(
            orders,
            materials.c.name.label("material_name"),
            services.c.name.label("service_name"),
            machines.c.name.label("machine_name"),
        )
        .select_from(
            orders.outerjoin(materials, orders.c.material_id == materials.c.id)
            .outerjoin(services, orders.c.service_id == services.c.id)
            .outerjoin(machines, orders.c.machine_id == machines.c.id)
        )
        .order_by(orders.c.created_at.desc(), orders.c.id.desc())
    )
    if order_ids is not None:
        stmt = stmt.where(orders.c.id.in_(list(order_ids)))

    return conn.execute(stmt).mappings().all()


def _row_to_order(row, order_payments, assigned) -> OrderOut:
    payment_items = [ledger.row_to_payment(p) for p in order_payments]

    return OrderOut(
        id=row["id"],
        client_name=row["client_name"],
        phone=row["phone"],
        location=row["location"],
        material_id=row["material_id"],
        material_name=row["material_name"],
        thickness=row["thickness"],
        material_quantity=row["material_quantity"],
        service_id=row["service_id"],
        service_name=row["service_name"],
        machine_id=row["machine_id"],
        machine_name=row["machine_name"],
        base_price=row["base_price"],
        additional_charges=row["additional_charges"],
        # as stored; not recomputed on read
        final_price=row["final_price"],
        status=enum_from_store(OrderStatus, row["status"], "orders.status"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        assigned_staff=[AssignedStaff(id=s["staff_id"], name=s["name"]) for s in assigned],
        payments=payment_items,
        total_paid=ledger.total_paid(payment_items),
        outstanding=ledger.outstanding(row["final_price"], payment_items),
        payment_status=ledger.payment_status(row["final_price"], payment_items),
    )


def load_orders(
    conn: Connection, order_ids: Optional[Sequence[int]] = None
) -> List[OrderOut]:
    """
    Orders newest first, with catalog names, payments and staff attached.

    Three queries regardless of how many orders there are: the orders joined
    to their catalog rows, then every payment and every staff link for the
    fetched ids.
    """
    rows = _order_rows(conn, order_ids)
    ids = [row["id"] for row in rows]
    if not ids:
        return []

    payments_by_order = defaultdict(list)
    payment_stmt = (
        select(payments)
        .where(payments.c.order_id.in_(ids))
        .order_by(payments.c.date, payments.c.id)
    )
    for p in conn.execute(payment_stmt).mappings():
        payments_by_order[p["order_id"]].append(p)

    staff_by_order = defaultdict(list)
    staff_stmt = (
        select(order_staff.c.order_id, order_staff.c.staff_id, staff.c.name)
        .select_from(order_staff.join(staff, order_staff.c.staff_id == staff.c.id))
        .where(order_staff.c.order_id.in_(ids))
        .order_by(staff.c.name, staff.c.id)
    )
    for s in conn.execute(staff_stmt).mappings():
        staff_by_order[s["order_id"]].append(s)

    return [
        _row_to_order(row, payments_by_order[row["id"]], staff_by_order[row["id"]])
        for row in rows
    ]


def get_order(conn: Connection, order_id: int) -> OrderOut:
    found = load_orders(conn, [order_id])
    if not found:
        raise NotFoundError("order", order_id)
    return found[0]


def _check_references(conn: Connection, values: Dict[str, Any]) -> None:
    if values.get("material_id") is not None:
        require_row(conn, materials, "material", values["material_id"])
    if values.get("machine_id") is not None:
        require_row(conn, machines, "machine", values["machine_id"])


def create_order(conn: Connection, data: OrderCreate) -> int:
    values = data.model_dump(exclude={"staff_ids"})
    values["status"] = data.status.value

    if data.service_id is not None:
        service = require_row(conn, services, "service", data.service_id)
        explicit_base = values["base_price"]
        values = select_service(values, service)
        if explicit_base is not None:
            values["base_price"] = explicit_base

    _check_references(conn, values)
    values = reprice(values)

    row = TableStore(conn, orders).insert(values)

    if data.staff_ids:
        set_assigned_staff(conn, row["id"], data.staff_ids)

    logger.info(
        "Created order %s for %r (%s, final price %s)",
        row["id"], row["client_name"], row["status"], row["final_price"],
    )
    return row["id"]


def update_order(conn: Connection, order_id: int, patch: Dict[str, Any]) -> None:
    """
    Apply a partial edit. final_price is recomputed from the merged base price
    and additional charges on every edit. Switching to a different service
    re-seeds base_price from that service unless the same edit sets one.
    """
    current = require_row(conn, orders, "order", order_id)

    patch = dict(patch)
    staff_ids = patch.pop("staff_ids", None)

    for name in _REQUIRED:
        if name in patch and patch[name] is None:
            raise InvalidInputError(f"{name} cannot be cleared")
    if isinstance(patch.get("status"), OrderStatus):
        patch["status"] = patch["status"].value

    service_id = patch.get("service_id")
    if service_id is not None and service_id != current["service_id"]:
        service = require_row(conn, services, "service", service_id)
        seeded = select_service({}, service)
        if "base_price" not in patch:
            patch["base_price"] = seeded["base_price"]

    _check_references(conn, patch)

    priced = reprice({**current, **patch})
    for name in ("base_price", "additional_charges"):
        if name in patch:
            patch[name] = priced[name]
    patch["final_price"] = priced["final_price"]

    TableStore(conn, orders).update(order_id, patch)

    if staff_ids is not None:
        set_assigned_staff(conn, order_id, staff_ids)

    logger.info("Updated order %s (%s)", order_id, ", ".join(sorted(patch)))


def delete_order(conn: Connection, order_id: int) -> None:
    # Payments and staff links are left in place.
    if not TableStore(conn, orders).delete(order_id):
        raise NotFoundError("order", order_id)
    logger.info("Deleted order %s", order_id)
