# jobshop/models/catalog.py

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class MachineStatus(str, Enum):
    AVAILABLE = "available"
    MAINTENANCE = "maintenance"
    UNAVAILABLE = "unavailable"


# ---- Materials ----

class MaterialIn(BaseModel):
    name: str = Field(..., min_length=1)
    thickness: Optional[Decimal] = None
    purchase_price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    selling_price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    current_stock: Decimal = Field(default=Decimal("0"), ge=0)
    min_quantity: Decimal = Field(default=Decimal("0"), ge=0)


class MaterialUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    thickness: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    selling_price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    current_stock: Optional[Decimal] = Field(default=None, ge=0)
    min_quantity: Optional[Decimal] = Field(default=None, ge=0)


class MaterialOut(BaseModel):
    id: int
    name: str
    thickness: Optional[Decimal] = None
    purchase_price: Decimal
    selling_price: Decimal
    current_stock: Decimal
    min_quantity: Decimal
    low_stock: bool = False

    class Config:
        from_attributes = True


# ---- Services ----

class ServiceIn(BaseModel):
    name: str = Field(..., min_length=1)
    price: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    description: Optional[str] = None


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    description: Optional[str] = None


class ServiceOut(BaseModel):
    id: int
    name: str
    price: Decimal
    description: Optional[str] = None

    class Config:
        from_attributes = True


# ---- Machines ----

class MachineIn(BaseModel):
    name: str = Field(..., min_length=1)
    model: Optional[str] = None
    status: MachineStatus = MachineStatus.AVAILABLE


class MachineUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    model: Optional[str] = None
    status: Optional[MachineStatus] = None


class MachineOut(BaseModel):
    id: int
    name: str
    model: Optional[str] = None
    status: MachineStatus

    class Config:
        from_attributes = True


# ---- Staff ----

class StaffIn(BaseModel):
    name: str = Field(..., min_length=1)
    role: Optional[str] = None
    contact_info: Optional[str] = None
    is_available: bool = True


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    role: Optional[str] = None
    contact_info: Optional[str] = None
    is_available: Optional[bool] = None


class StaffOut(BaseModel):
    id: int
    name: str
    role: Optional[str] = None
    contact_info: Optional[str] = None
    is_available: bool

    class Config:
        from_attributes = True
