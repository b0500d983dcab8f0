# jobshop/services/catalog.py

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from jobshop.db.schema import machines, materials, services, staff
from jobshop.db.store import TableStore, enum_from_store
from jobshop.models.catalog import (
    MachineOut,
    MachineStatus,
    MaterialOut,
    ServiceOut,
    StaffOut,
)
from jobshop.services.crud import require_row, update_row

logger = logging.getLogger(__name__)


# ---- Materials ----

def row_to_material(row) -> MaterialOut:
    return MaterialOut(
        id=row["id"],
        name=row["name"],
        thickness=row["thickness"],
        purchase_price=row["purchase_price"],
        selling_price=row["selling_price"],
        current_stock=row["current_stock"],
        min_quantity=row["min_quantity"],
        low_stock=row["current_stock"] < row["min_quantity"],
    )


def list_materials(
    conn: Connection, low_stock: bool = False, search: Optional[str] = None
) -> List[MaterialOut]:
    stmt = select(materials).order_by(materials.c.name, materials.c.id)

    if low_stock:
        stmt = stmt.where(materials.c.current_stock < materials.c.min_quantity)
    if search:
        stmt = stmt.where(materials.c.name.icontains(search.strip(), autoescape=True))

    return [row_to_material(row) for row in conn.execute(stmt).mappings().all()]


# ---- Services ----

def row_to_service(row) -> ServiceOut:
    return ServiceOut(
        id=row["id"],
        name=row["name"],
        price=row["price"],
        description=row["description"],
    )


def list_services(conn: Connection) -> List[ServiceOut]:
    rows = TableStore(conn, services).select(order_by=["name", "id"])
    return [row_to_service(row) for row in rows]


# ---- Machines ----

def row_to_machine(row) -> MachineOut:
    return MachineOut(
        id=row["id"],
        name=row["name"],
        model=row["model"],
        status=enum_from_store(MachineStatus, row["status"], "machines.status"),
    )


def list_machines(
    conn: Connection, status: Optional[MachineStatus] = None
) -> List[MachineOut]:
    filters = {"status": status.value} if status is not None else None
    rows = TableStore(conn, machines).select(filters, order_by=["name", "id"])
    return [row_to_machine(row) for row in rows]


# ---- Staff ----

def row_to_staff(row) -> StaffOut:
    return StaffOut(
        id=row["id"],
        name=row["name"],
        role=row["role"],
        contact_info=row["contact_info"],
        is_available=bool(row["is_available"]),
    )


def list_staff(conn: Connection, available: Optional[bool] = None) -> List[StaffOut]:
    filters = {"is_available": available} if available is not None else None
    rows = TableStore(conn, staff).select(filters, order_by=["name", "id"])
    return [row_to_staff(row) for row in rows]


def toggle_staff_availability(conn: Connection, staff_id: int) -> StaffOut:
    member = require_row(conn, staff, "staff", staff_id)
    row = update_row(
        conn, staff, "staff", staff_id, {"is_available": not member["is_available"]}
    )
    logger.info("Staff %s availability set to %s", staff_id, row["is_available"])
    return row_to_staff(row)
