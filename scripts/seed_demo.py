# scripts/seed_demo.py

from datetime import timedelta
from decimal import Decimal
import logging

from jobshop.core import dates
from jobshop.db.engine import get_engine
from jobshop.db.schema import machines, materials, services, staff, suppliers
from jobshop.db.store import TableStore
from jobshop.models.expenses import ExpenseIn, ExpenseType
from jobshop.models.orders import OrderCreate, OrderStatus, PaymentMethod
from jobshop.services import ledger
from jobshop.services.expenses import record_expense
from jobshop.services.orders import create_order

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


# ---- Sample shop ----

MATERIALS = [
    {"name": "Steel Sheet", "thickness": Decimal("2.0"), "purchase_price": Decimal("1500"),
     "selling_price": Decimal("2000"), "current_stock": Decimal("50"), "min_quantity": Decimal("10")},
    {"name": "Aluminum Plate", "thickness": Decimal("1.5"), "purchase_price": Decimal("2000"),
     "selling_price": Decimal("2800"), "current_stock": Decimal("30"), "min_quantity": Decimal("15")},
    {"name": "Copper Sheet", "thickness": Decimal("1.0"), "purchase_price": Decimal("3500"),
     "selling_price": Decimal("4200"), "current_stock": Decimal("5"), "min_quantity": Decimal("8")},
]

SERVICES = [
    {"name": "CNC Cutting", "price": Decimal("2500"), "description": "Plasma / router cutting per sheet"},
    {"name": "Laser Engraving", "price": Decimal("1800"), "description": "Engraving on metal and acrylic"},
    {"name": "Bending", "price": Decimal("1200"), "description": "Press brake bending"},
]

MACHINES = [
    {"name": "CNC Plasma", "model": "XYZ-1000", "status": "available"},
    {"name": "Laser Cutter", "model": "LC-2500", "status": "maintenance"},
    {"name": "Water Jet", "model": "HydroMax 3000", "status": "unavailable"},
]

STAFF = [
    {"name": "Rahul Sharma", "role": "Machine Operator", "contact_info": "+91 9876543210", "is_available": True},
    {"name": "Priya Singh", "role": "Designer", "contact_info": "+91 8765432109", "is_available": False},
    {"name": "Ankit Patel", "role": "Manager", "contact_info": "+91 7654321098", "is_available": True},
]

SUPPLIERS = [
    {"name": "Steel Dynamics", "contact_info": "+91 9876543210", "outstanding_payment": Decimal("25000")},
    {"name": "Metal Works Ltd", "contact_info": "+91 8765432109", "outstanding_payment": Decimal("35000")},
]


def _insert_all(conn, table, rows):
    store = TableStore(conn, table)
    return [store.insert(row)["id"] for row in rows]


def load_demo_data(engine=None):
    engine = engine or get_engine()
    stats = {}

    with engine.begin() as conn:
        material_ids = _insert_all(conn, materials, MATERIALS)
        service_ids = _insert_all(conn, services, SERVICES)
        machine_ids = _insert_all(conn, machines, MACHINES)
        staff_ids = _insert_all(conn, staff, STAFF)
        supplier_ids = _insert_all(conn, suppliers, SUPPLIERS)

        raj = create_order(conn, OrderCreate(
            client_name="Raj Industries", phone="+91 9876543210", location="Mumbai",
            material_id=material_ids[0], thickness=Decimal("2.0"), material_quantity=Decimal("10"),
            service_id=service_ids[0], base_price=Decimal("25000"),
            machine_id=machine_ids[0], status=OrderStatus.PROGRESSING, staff_ids=[staff_ids[0]],
        ))
        create_order(conn, OrderCreate(
            client_name="Sharma Enterprises", phone="+91 8765432109", location="Delhi",
            material_id=material_ids[1], thickness=Decimal("1.5"), material_quantity=Decimal("5"),
            service_id=service_ids[1], base_price=Decimal("18000"), status=OrderStatus.LEAD,
        ))
        mehta = create_order(conn, OrderCreate(
            client_name="Mehta Construction", phone="+91 7654321098", location="Bangalore",
            material_id=material_ids[2], thickness=Decimal("1.0"), material_quantity=Decimal("8"),
            service_id=service_ids[0], base_price=Decimal("30000"), additional_charges=Decimal("2000"),
            status=OrderStatus.COMPLETED, staff_ids=[staff_ids[2]],
        ))

        today = dates.today()
        ledger.add_payment(conn, raj, PaymentMethod.CASH, Decimal("15000"), today - timedelta(days=9))
        ledger.add_payment(conn, mehta, PaymentMethod.UPI, Decimal("32000"), today - timedelta(days=11))

        record_expense(conn, ExpenseIn(
            type=ExpenseType.BILL, description="Electricity Bill", amount=Decimal("5000"),
            date=today - timedelta(days=18),
        ))
        record_expense(conn, ExpenseIn(
            type=ExpenseType.MATERIAL_PURCHASE, description="Steel Sheets", amount=Decimal("15000"),
            date=today - timedelta(days=14), supplier_id=supplier_ids[0],
        ))
        record_expense(conn, ExpenseIn(
            type=ExpenseType.SUPPLIER_PAYMENT, description="Payment to Metal Works",
            amount=Decimal("25000"), date=today - timedelta(days=9), supplier_id=supplier_ids[1],
        ))

    stats["n_materials"] = len(material_ids)
    stats["n_services"] = len(service_ids)
    stats["n_machines"] = len(machine_ids)
    stats["n_staff"] = len(staff_ids)
    stats["n_suppliers"] = len(supplier_ids)
    stats["n_orders"] = 3
    stats["n_payments"] = 2
    stats["n_expenses"] = 3
    return stats


def main():
    stats = load_demo_data()

    logger.info(f"Materials:   {stats['n_materials']}")
    logger.info(f"Services:    {stats['n_services']}")
    logger.info(f"Machines:    {stats['n_machines']}")
    logger.info(f"Staff:       {stats['n_staff']}")
    logger.info(f"Suppliers:   {stats['n_suppliers']}")
    logger.info(f"Orders:      {stats['n_orders']}")
    logger.info(f"Payments:    {stats['n_payments']}")
    logger.info(f"Expenses:    {stats['n_expenses']}")


if __name__ == "__main__":
    main()
