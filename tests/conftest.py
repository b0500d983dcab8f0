from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

from jobshop.db.engine import get_engine
from jobshop.db.schema import machines, materials, metadata, services, staff, suppliers
from jobshop.db.store import TableStore
from jobshop.main import app


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def conn(engine: Engine) -> Generator[Connection, None, None]:
    with engine.begin() as conn:
        yield conn


@pytest.fixture(scope="function")
def client(engine: Engine) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def seed_catalog(conn: Connection) -> dict:
    """A couple of rows in every catalog table; returns their ids by name."""
    ids = {}
    for table, rows in (
        (materials, [
            {"name": "Steel Sheet", "thickness": Decimal("2.0"), "purchase_price": Decimal("1500"),
             "selling_price": Decimal("2000"), "current_stock": Decimal("50"), "min_quantity": Decimal("10")},
            {"name": "Copper Sheet", "thickness": Decimal("1.0"), "purchase_price": Decimal("3500"),
             "selling_price": Decimal("4200"), "current_stock": Decimal("5"), "min_quantity": Decimal("8")},
        ]),
        (services, [
            {"name": "CNC Cutting", "price": Decimal("2500"), "description": "per sheet"},
            {"name": "Laser Engraving", "price": Decimal("1800"), "description": None},
        ]),
        (machines, [
            {"name": "CNC Plasma", "model": "XYZ-1000", "status": "available"},
            {"name": "Laser Cutter", "model": "LC-2500", "status": "maintenance"},
        ]),
        (staff, [
            {"name": "Rahul Sharma", "role": "Machine Operator", "contact_info": "+91 9876543210", "is_available": True},
            {"name": "Priya Singh", "role": "Designer", "contact_info": "+91 8765432109", "is_available": False},
            {"name": "Ankit Patel", "role": "Manager", "contact_info": "+91 7654321098", "is_available": True},
        ]),
        (suppliers, [
            {"name": "Steel Dynamics", "contact_info": "+91 9876543210", "outstanding_payment": Decimal("25000")},
        ]),
    ):
        store = TableStore(conn, table)
        for row in rows:
            ids[row["name"]] = store.insert(row)["id"]
    return ids


@pytest.fixture(scope="function")
def shop(conn: Connection) -> dict:
    return seed_catalog(conn)


@pytest.fixture(scope="function")
def shop_api(engine: Engine) -> dict:
    """Catalog rows committed, for tests that go through the HTTP client."""
    with engine.begin() as conn:
        return seed_catalog(conn)
