# jobshop/models/expenses.py

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ExpenseType(str, Enum):
    BILL = "bill"
    MATERIAL_PURCHASE = "material_purchase"
    SUPPLIER_PAYMENT = "supplier_payment"
    OTHER = "other"


class ExpenseIn(BaseModel):
    type: ExpenseType = ExpenseType.BILL
    description: Optional[str] = None
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: Optional[dt.date] = None
    supplier_id: Optional[int] = None


class ExpenseOut(BaseModel):
    id: int
    type: ExpenseType
    description: Optional[str] = None
    amount: Decimal
    date: dt.date
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None


class SupplierIn(BaseModel):
    name: str = Field(..., min_length=1)
    contact_info: Optional[str] = None
    outstanding_payment: Decimal = Field(default=Decimal("0"), decimal_places=2)


class SupplierUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    contact_info: Optional[str] = None
    outstanding_payment: Optional[Decimal] = Field(default=None, decimal_places=2)


class SupplierOut(BaseModel):
    id: int
    name: str
    contact_info: Optional[str] = None
    outstanding_payment: Decimal

    class Config:
        from_attributes = True
