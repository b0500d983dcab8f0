# jobshop/api/expenses.py

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.engine import Engine

from jobshop.api.catalog import patch_values
from jobshop.db.engine import get_engine
from jobshop.db.schema import expenses, suppliers
from jobshop.models.expenses import (
    ExpenseIn,
    ExpenseOut,
    SupplierIn,
    SupplierOut,
    SupplierUpdate,
)
from jobshop.services import expenses as expense_service
from jobshop.services.crud import create_row, delete_row, require_row, update_row

expenses_router = APIRouter(prefix="/expenses", tags=["expenses"])
suppliers_router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@expenses_router.get("/", response_model=List[ExpenseOut])
def list_expenses(engine: Engine = Depends(get_engine)) -> List[ExpenseOut]:
    """
    All expenses, most recent date first.
    """
    with engine.connect() as conn:
        return expense_service.list_expenses(conn)


@expenses_router.get("/{expense_id}", response_model=ExpenseOut)
def get_expense(expense_id: int, engine: Engine = Depends(get_engine)) -> ExpenseOut:
    with engine.connect() as conn:
        return expense_service.get_expense(conn, expense_id)


@expenses_router.post("/", response_model=ExpenseOut, status_code=201)
def create_expense(payload: ExpenseIn, engine: Engine = Depends(get_engine)) -> ExpenseOut:
    """
    Record an expense. A supplier_payment also lowers the supplier's
    outstanding balance; both writes commit or neither does.
    """
    with engine.begin() as conn:
        expense_id = expense_service.record_expense(conn, payload)
        return expense_service.get_expense(conn, expense_id)


@expenses_router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: int, engine: Engine = Depends(get_engine)) -> Response:
    """
    Removes the expense only; a supplier balance it adjusted stays as it is.
    """
    with engine.begin() as conn:
        delete_row(conn, expenses, "expense", expense_id)
    return Response(status_code=204)


@suppliers_router.get("/", response_model=List[SupplierOut])
def list_suppliers(engine: Engine = Depends(get_engine)) -> List[SupplierOut]:
    with engine.connect() as conn:
        return expense_service.list_suppliers(conn)


@suppliers_router.get("/{supplier_id}", response_model=SupplierOut)
def get_supplier(supplier_id: int, engine: Engine = Depends(get_engine)) -> SupplierOut:
    with engine.connect() as conn:
        row = require_row(conn, suppliers, "supplier", supplier_id)
    return expense_service.row_to_supplier(row)


@suppliers_router.post("/", response_model=SupplierOut, status_code=201)
def create_supplier(payload: SupplierIn, engine: Engine = Depends(get_engine)) -> SupplierOut:
    with engine.begin() as conn:
        row = create_row(conn, suppliers, payload.model_dump())
    return expense_service.row_to_supplier(row)


@suppliers_router.patch("/{supplier_id}", response_model=SupplierOut)
def update_supplier(
    supplier_id: int, payload: SupplierUpdate, engine: Engine = Depends(get_engine)
) -> SupplierOut:
    with engine.begin() as conn:
        row = update_row(conn, suppliers, "supplier", supplier_id, patch_values(payload))
    return expense_service.row_to_supplier(row)


@suppliers_router.delete("/{supplier_id}", status_code=204)
def delete_supplier(supplier_id: int, engine: Engine = Depends(get_engine)) -> Response:
    with engine.begin() as conn:
        delete_row(conn, suppliers, "supplier", supplier_id)
    return Response(status_code=204)
