# jobshop/services/reporting.py
"""
Read-only rollups over an already-fetched list of orders.
"""

from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from jobshop.core.config import CURRENCY
from jobshop.core.dates import local_date
from jobshop.models.orders import PIPELINE, OrderOut, OrderStatus
from jobshop.models.reports import (
    MaterialUsageItem,
    MonthlyRevenueItem,
    RevenueSummary,
    StaffUtilizationItem,
    SummaryOut,
)
from jobshop.services.pricing import ZERO, as_decimal

_CLOSED = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


def within_range(
    all_orders: Iterable[OrderOut], start: Optional[date] = None, end: Optional[date] = None
) -> List[OrderOut]:
    """
    Orders created between start and end (both inclusive, either open),
    by creation date in the shop's timezone.
    """
    selected = []
    for order in all_orders:
        created = local_date(order.created_at)
        if start is not None and created < start:
            continue
        if end is not None and created > end:
            continue
        selected.append(order)
    return selected


def status_counts(all_orders: Iterable[OrderOut]) -> Dict[OrderStatus, int]:
    counts = {status: 0 for status in PIPELINE}
    for order in all_orders:
        counts[order.status] += 1
    return counts


def revenue_summary(all_orders: Iterable[OrderOut]) -> RevenueSummary:
    total = ZERO
    received = ZERO
    for order in all_orders:
        total += as_decimal(order.final_price)
        received += as_decimal(order.total_paid)

    return RevenueSummary(
        total_revenue=total,
        received_revenue=received,
        pending_revenue=total - received,
    )


def summarize(
    all_orders: Iterable[OrderOut], start: Optional[date] = None, end: Optional[date] = None
) -> SummaryOut:
    selected = within_range(all_orders, start, end)
    counts = status_counts(selected)

    return SummaryOut(
        start=start,
        end=end,
        currency=CURRENCY,
        total_orders=len(selected),
        total_customers=len({o.client_name.strip().lower() for o in selected}),
        pending_work=sum(1 for o in selected if o.status not in _CLOSED),
        cancelled_orders=counts[OrderStatus.CANCELLED],
        status_counts={status.value: n for status, n in counts.items()},
        revenue=revenue_summary(selected),
    )


def monthly_revenue(all_orders: Iterable[OrderOut]) -> List[MonthlyRevenueItem]:
    """Final price summed per creation month (YYYY-MM), oldest month first."""
    buckets: Dict[str, List[Decimal]] = {}
    for order in all_orders:
        month = local_date(order.created_at).strftime("%Y-%m")
        buckets.setdefault(month, []).append(as_decimal(order.final_price))

    return [
        MonthlyRevenueItem(month=month, revenue=sum(values, ZERO), order_count=len(values))
        for month, values in sorted(buckets.items())
    ]


def material_usage(all_orders: Iterable[OrderOut]) -> List[MaterialUsageItem]:
    usage: "OrderedDict[int, MaterialUsageItem]" = OrderedDict()
    for order in all_orders:
        if order.material_id is None:
            continue
        item = usage.get(order.material_id)
        if item is None:
            item = MaterialUsageItem(
                material_id=order.material_id,
                material_name=order.material_name,
                order_count=0,
                quantity=ZERO,
            )
            usage[order.material_id] = item
        item.order_count += 1
        item.quantity += as_decimal(order.material_quantity)

    return sorted(usage.values(), key=lambda i: (-i.order_count, i.material_id))


def staff_utilization(all_orders: Iterable[OrderOut]) -> List[StaffUtilizationItem]:
    """How many of the given orders each staff member is assigned to."""
    counts: Dict[int, StaffUtilizationItem] = {}
    for order in all_orders:
        for member in order.assigned_staff:
            item = counts.get(member.id)
            if item is None:
                item = StaffUtilizationItem(staff_id=member.id, name=member.name, order_count=0)
                counts[member.id] = item
            item.order_count += 1

    return sorted(counts.values(), key=lambda i: (-i.order_count, i.name))
