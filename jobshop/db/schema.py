# jobshop/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Boolean,
    Numeric, Date, DateTime, ForeignKey, CheckConstraint, Text, func
)

metadata = MetaData()

# ---- Catalog ----

materials = Table(
    "materials",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("thickness", Numeric(10, 2)),
    Column("purchase_price", Numeric(18, 2), nullable=False, default=0),
    Column("selling_price", Numeric(18, 2), nullable=False, default=0),
    Column("current_stock", Numeric(18, 2), nullable=False, default=0),
    Column("min_quantity", Numeric(18, 2), nullable=False, default=0),
)

services = Table(
    "services",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("price", Numeric(18, 2), nullable=False, default=0),
    Column("description", Text),
    CheckConstraint("price >= 0", name="ck_services_price_nonneg"),
)

machines = Table(
    "machines",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("model", String),
    Column("status", String, nullable=False, default="available"),
)

staff = Table(
    "staff",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("role", String),
    Column("contact_info", String),
    Column("is_available", Boolean, nullable=False, default=True),
)

# ---- Orders ----

orders = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("client_name", String, nullable=False),
    Column("phone", String),
    Column("location", String),
    Column("material_id", Integer, ForeignKey("materials.id")),
    Column("thickness", Numeric(10, 2)),
    Column("material_quantity", Numeric(18, 2)),
    Column("service_id", Integer, ForeignKey("services.id")),
    Column("machine_id", Integer, ForeignKey("machines.id")),
    Column("base_price", Numeric(18, 2)),
    # may be negative (discount)
    Column("additional_charges", Numeric(18, 2)),
    Column("final_price", Numeric(18, 2), nullable=False, default=0),
    Column("status", String, nullable=False, default="lead"),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    Column(
        "updated_at", DateTime, nullable=False,
        server_default=func.now(), onupdate=func.now(),
    ),
    CheckConstraint("base_price IS NULL OR base_price >= 0", name="ck_orders_base_price_nonneg"),
)

payments = Table(
    "payments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id"), nullable=False, index=True),
    Column("method", String, nullable=False),
    Column("amount", Numeric(18, 2), nullable=False),
    Column("date", Date, nullable=False),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
)

order_staff = Table(
    "order_staff",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("order_id", Integer, ForeignKey("orders.id"), nullable=False, index=True),
    Column("staff_id", Integer, ForeignKey("staff.id"), nullable=False),
)

# ---- Expenses ----

suppliers = Table(
    "suppliers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("contact_info", String),
    Column("outstanding_payment", Numeric(18, 2), nullable=False, default=0),
)

expenses = Table(
    "expenses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("type", String, nullable=False),
    Column("description", Text),
    Column("amount", Numeric(18, 2), nullable=False),
    Column("date", Date, nullable=False),
    Column("supplier_id", Integer, ForeignKey("suppliers.id")),
    CheckConstraint("amount > 0", name="ck_expenses_amount_pos"),
)
