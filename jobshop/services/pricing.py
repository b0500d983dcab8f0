# jobshop/services/pricing.py
"""
Order pricing.

final_price = base_price + additional_charges, with a missing value counted
as zero. Additional charges may be negative (a discount) and are not checked.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
CENT = Decimal("0.01")


def as_decimal(value: Optional[Number]) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 stays 0.1 instead of its binary expansion
    return Decimal(str(value))


def to_cents(value: Optional[Number]) -> Decimal:
    """Round to the two decimal places money columns hold."""
    return as_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_final_price(
    base_price: Optional[Number], additional_charges: Optional[Number]
) -> Decimal:
    return to_cents(base_price) + to_cents(additional_charges)


def reprice(values: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of an order draft with final_price recomputed."""
    priced = dict(values)
    for key in ("base_price", "additional_charges"):
        if priced.get(key) is not None:
            priced[key] = to_cents(priced[key])
    priced["final_price"] = compute_final_price(
        priced.get("base_price"), priced.get("additional_charges")
    )
    return priced


def select_service(values: Dict[str, Any], service: Dict[str, Any]) -> Dict[str, Any]:
    """
    Choosing a service copies its current list price into base_price,
    replacing whatever was entered before. Later edits to the service
    don't touch orders that already copied its price.
    """
    seeded = dict(values)
    seeded["service_id"] = service["id"]
    seeded["base_price"] = to_cents(service["price"])
    return reprice(seeded)
