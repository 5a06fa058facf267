"""Assign repair orders to warranty periods and count repair days."""

from datetime import date
from typing import Iterable, List, Sequence

from .dates import days_inclusive, earlier, later
from .repair_order import RepairOrder
from .warranty_period import PeriodResult, RepairDaysItem, WarrantyPeriod


def sort_orders(repair_orders: Iterable[RepairOrder]) -> List[RepairOrder]:
    """Order by open date, then id."""
    return sorted(repair_orders, key=lambda o: (o.open_date, o.id))


def aggregate(
    periods: Sequence[WarrantyPeriod], repair_orders: Iterable[RepairOrder]
) -> List[PeriodResult]:
    """
    Clip every repair order to every period and sum the inclusive days.

    Results come back in the order of periods. An order that spans a period
    boundary is counted in each period it touches, clipped independently.
    Orders with close before open never overlap anything and are skipped.
    """
    orders = sort_orders(repair_orders)
    results = []
    for period in periods:
        result = PeriodResult(period=period)
        for order in orders:
            effective_open = later(order.open_date, period.start)
            effective_close = earlier(order.close_date, period.end)
            if effective_close < effective_open:
                continue
            result.add(
                RepairDaysItem(
                    order=order,
                    repair_days=days_inclusive(effective_open, effective_close),
                )
            )
        results.append(result)
    return results


def malformed_orders(repair_orders: Iterable[RepairOrder]) -> List[RepairOrder]:
    """Orders whose close date precedes their open date."""
    return [o for o in sort_orders(repair_orders) if o.is_malformed]


def orders_overlapping(
    repair_orders: Iterable[RepairOrder], start: date, end: date
) -> List[RepairOrder]:
    """Orders whose raw range could intersect [start, end]."""
    return [o for o in repair_orders if o.open_date <= end and o.close_date >= start]
