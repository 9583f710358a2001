from __future__ import annotations

from typing import Any


def make_order(
    *,
    date: str | None = None,
    number: str | None = None,
    cost: Any = None,
    latitude: float | None = None,
    longitude: float | None = None,
    buyer_date: str | None = None,
    supplier_date: str | None = None,
) -> dict[str, Any]:
    """Build an order record shaped like the dashboard payloads."""
    order: dict[str, Any] = {"orderInformation": {}, "paymentInformation": {}}
    if date is not None:
        order["orderInformation"]["orderDate"] = date
    if number is not None:
        order["orderInformation"]["orderNumber"] = number
    if cost is not None:
        order["paymentInformation"]["totalOrderCost"] = cost
    coordinates = {}
    if latitude is not None:
        coordinates["latitude"] = latitude
    if longitude is not None:
        coordinates["longitude"] = longitude
    if coordinates:
        order["buyerInformation"] = {"coordinates": coordinates}
    if buyer_date is not None or supplier_date is not None:
        order["approval"] = {
            "buyerApprovalDate": buyer_date,
            "supplierApprovalDate": supplier_date,
        }
    return order


def dated_orders(*dates: str) -> list[dict[str, Any]]:
    return [make_order(date=d) for d in dates]


def costed_orders(*pairs: tuple[str, float]) -> list[dict[str, Any]]:
    return [make_order(number=n, cost=c) for n, c in pairs]


class ManualClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now
