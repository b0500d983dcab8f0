# jobshop/api/reports.py

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.engine import Engine

from jobshop.core.config import CURRENCY
from jobshop.db.engine import get_engine
from jobshop.errors import InvalidInputError
from jobshop.models.reports import (
    MaterialUsageOut,
    MonthlyRevenueOut,
    StaffUtilizationOut,
    SummaryOut,
)
from jobshop.services import reporting
from jobshop.services.board import OrderBoard

router = APIRouter(prefix="/reports", tags=["reports"])


def _orders_between(engine: Engine, start: Optional[date], end: Optional[date]):
    if start is not None and end is not None and start > end:
        raise InvalidInputError("start must be on or before end")

    board = OrderBoard(engine)
    return reporting.within_range(board.refresh(), start, end)


@router.get("/summary", response_model=SummaryOut)
def summary(
    start: Optional[date] = Query(default=None, description="ISO date, inclusive"),
    end: Optional[date] = Query(default=None, description="ISO date, inclusive"),
    engine: Engine = Depends(get_engine),
) -> SummaryOut:
    """
    Order counts per stage and revenue totals for orders created in [start, end].
    """
    return reporting.summarize(_orders_between(engine, start, end), start, end)


@router.get("/monthly-revenue", response_model=MonthlyRevenueOut)
def monthly_revenue(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    engine: Engine = Depends(get_engine),
) -> MonthlyRevenueOut:
    items = reporting.monthly_revenue(_orders_between(engine, start, end))
    return MonthlyRevenueOut(currency=CURRENCY, items=items)


@router.get("/material-usage", response_model=MaterialUsageOut)
def material_usage(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    engine: Engine = Depends(get_engine),
) -> MaterialUsageOut:
    return MaterialUsageOut(items=reporting.material_usage(_orders_between(engine, start, end)))


@router.get("/staff-utilization", response_model=StaffUtilizationOut)
def staff_utilization(
    start: Optional[date] = Query(default=None),
    end: Optional[date] = Query(default=None),
    engine: Engine = Depends(get_engine),
) -> StaffUtilizationOut:
    return StaffUtilizationOut(
        items=reporting.staff_utilization(_orders_between(engine, start, end))
    )
