# jobshop/models/reports.py

from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel


class RevenueSummary(BaseModel):
    total_revenue: Decimal
    received_revenue: Decimal
    pending_revenue: Decimal


class SummaryOut(BaseModel):
    start: Optional[date] = None
    end: Optional[date] = None
    currency: str
    total_orders: int
    total_customers: int
    pending_work: int
    cancelled_orders: int
    status_counts: Dict[str, int]
    revenue: RevenueSummary


class MonthlyRevenueItem(BaseModel):
    month: str
    revenue: Decimal
    order_count: int


class MaterialUsageItem(BaseModel):
    material_id: int
    material_name: Optional[str] = None
    order_count: int
    quantity: Decimal


class StaffUtilizationItem(BaseModel):
    staff_id: int
    name: str
    order_count: int


class MonthlyRevenueOut(BaseModel):
    currency: str
    items: List[MonthlyRevenueItem]


class MaterialUsageOut(BaseModel):
    items: List[MaterialUsageItem]


class StaffUtilizationOut(BaseModel):
    items: List[StaffUtilizationItem]
