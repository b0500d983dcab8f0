# jobshop/services/assignments.py

import logging
from typing import Iterable, List, Optional

from sqlalchemy.engine import Connection

from jobshop.db.schema import machines, order_staff, orders, staff
from jobshop.db.store import TableStore
from jobshop.errors import NotFoundError
from jobshop.services.crud import require_row

logger = logging.getLogger(__name__)


def set_assigned_staff(
    conn: Connection, order_id: int, staff_ids: Iterable[int]
) -> List[int]:
    """
    Replace the order's staff list with exactly `staff_ids`.

    Existing links are deleted and one link per id is inserted; nothing is
    diffed. An empty set leaves the order with no staff.
    """
    require_row(conn, orders, "order", order_id)

    wanted = sorted(set(staff_ids))
    if wanted:
        found = {row["id"] for row in TableStore(conn, staff).select({"id": wanted})}
        missing = [i for i in wanted if i not in found]
        if missing:
            raise NotFoundError("staff", ", ".join(str(i) for i in missing))

    links = TableStore(conn, order_staff)
    links.delete_where({"order_id": order_id})
    links.insert_many({"order_id": order_id, "staff_id": i} for i in wanted)

    logger.info("Order %s staff set to %s", order_id, wanted)
    return wanted


def assigned_staff_ids(conn: Connection, order_id: int) -> List[int]:
    rows = TableStore(conn, order_staff).select({"order_id": order_id})
    return sorted(row["staff_id"] for row in rows)


def set_assigned_machine(
    conn: Connection, order_id: int, machine_id: Optional[int]
) -> None:
    """Overwrite the order's machine; None clears it."""
    if machine_id is not None:
        require_row(conn, machines, "machine", machine_id)

    if not TableStore(conn, orders).update(order_id, {"machine_id": machine_id}):
        raise NotFoundError("order", order_id)

    logger.info("Order %s machine set to %s", order_id, machine_id)
