# jobshop/models/orders.py

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class OrderStatus(str, Enum):
    LEAD = "lead"
    CONTACTED = "contacted"
    CONFIRMED = "confirmed"
    PROGRESSING = "progressing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Board column order
PIPELINE = (
    OrderStatus.LEAD,
    OrderStatus.CONTACTED,
    OrderStatus.CONFIRMED,
    OrderStatus.PROGRESSING,
    OrderStatus.COMPLETED,
    OrderStatus.CANCELLED,
)

STATUS_LABELS: Dict[OrderStatus, str] = {
    OrderStatus.LEAD: "Lead",
    OrderStatus.CONTACTED: "Contacted",
    OrderStatus.CONFIRMED: "Order Confirmed",
    OrderStatus.PROGRESSING: "In Production",
    OrderStatus.COMPLETED: "Completed",
    OrderStatus.CANCELLED: "Cancelled",
}


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    CREDIT = "credit"


class PaymentStatus(str, Enum):
    NOT_PAID = "not_paid"
    PARTIALLY_PAID = "partially_paid"
    FULLY_PAID = "fully_paid"


class PaymentIn(BaseModel):
    method: PaymentMethod
    amount: Decimal = Field(..., gt=0, decimal_places=2)
    date: Optional[dt.date] = None


class PaymentOut(BaseModel):
    id: int
    order_id: int
    method: PaymentMethod
    amount: Decimal
    date: dt.date

    class Config:
        from_attributes = True


class AssignedStaff(BaseModel):
    id: int
    name: str


class OrderCreate(BaseModel):
    client_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    location: Optional[str] = None
    material_id: Optional[int] = None
    thickness: Optional[Decimal] = None
    material_quantity: Optional[Decimal] = Field(default=None, gt=0)
    service_id: Optional[int] = None
    machine_id: Optional[int] = None
    base_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    additional_charges: Optional[Decimal] = Field(default=None, decimal_places=2)
    status: OrderStatus = OrderStatus.LEAD
    staff_ids: List[int] = []


class OrderUpdate(BaseModel):
    """Partial edit; only fields present in the request body are applied."""

    client_name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
    location: Optional[str] = None
    material_id: Optional[int] = None
    thickness: Optional[Decimal] = None
    material_quantity: Optional[Decimal] = Field(default=None, gt=0)
    service_id: Optional[int] = None
    machine_id: Optional[int] = None
    base_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    additional_charges: Optional[Decimal] = Field(default=None, decimal_places=2)
    status: Optional[OrderStatus] = None
    # replaces the whole assignment list when present
    staff_ids: Optional[List[int]] = None


class StatusMove(BaseModel):
    status: OrderStatus


class StaffAssignment(BaseModel):
    staff_ids: List[int]


class MachineAssignment(BaseModel):
    machine_id: Optional[int] = None


class OrderOut(BaseModel):
    id: int
    client_name: str
    phone: Optional[str] = None
    location: Optional[str] = None
    material_id: Optional[int] = None
    material_name: Optional[str] = None
    thickness: Optional[Decimal] = None
    material_quantity: Optional[Decimal] = None
    service_id: Optional[int] = None
    service_name: Optional[str] = None
    machine_id: Optional[int] = None
    machine_name: Optional[str] = None
    base_price: Optional[Decimal] = None
    additional_charges: Optional[Decimal] = None
    final_price: Decimal
    status: OrderStatus
    created_at: dt.datetime
    updated_at: dt.datetime
    assigned_staff: List[AssignedStaff] = []
    payments: List[PaymentOut] = []
    total_paid: Decimal = Decimal("0")
    outstanding: Decimal = Decimal("0")
    payment_status: PaymentStatus = PaymentStatus.NOT_PAID


class BoardColumn(BaseModel):
    status: OrderStatus
    label: str
    count: int
    orders: List[OrderOut]


class BoardOut(BaseModel):
    columns: List[BoardColumn]
    total: int
