"""Warranty-year report for one vehicle: periods, repair orders, repair days."""

from dataclasses import dataclass, field
from datetime import date
from typing import List

from .aggregation import aggregate, malformed_orders, orders_overlapping
from .dates import DateLike, normalize
from .errors import VehicleNotFoundError
from .observability import get_logger
from .periods import build_periods
from .vehicle import Vehicle
from .warranty_period import PeriodResult

logger = get_logger(__name__)


@dataclass
class WarrantyReport:
    """Per-period repair days for a vehicle, newest period first."""

    vin: str
    retail_date: date
    periods: List[PeriodResult] = field(default_factory=list)
    skipped_order_ids: List[int] = field(default_factory=list)

    @property
    def total_days(self) -> int:
        return sum(p.total_days for p in self.periods)


def build_warranty_report(vehicle: Vehicle, now: DateLike) -> WarrantyReport:
    """
    Partition the vehicle's warranty into years and count repair days.

    Raises VehicleNotFoundError when the vehicle has no retail date on file.
    Malformed repair orders (close before open) do not affect the totals;
    their ids are reported in skipped_order_ids and logged.
    """
    retail_date = vehicle.retail_date
    if retail_date is None:
        raise VehicleNotFoundError(f"No repair orders on file for VIN {vehicle.vin}")

    today = normalize(now)
    periods = build_periods(retail_date, today)
    report = WarrantyReport(vin=vehicle.vin, retail_date=retail_date)

    for order in malformed_orders(vehicle.repair_orders):
        logger.warning(
            "repair order closes before it opens",
            vin=vehicle.vin,
            order_id=order.id,
            open_date=order.open_date.isoformat(),
            close_date=order.close_date.isoformat(),
        )
        report.skipped_order_ids.append(order.id)

    if not periods:
        logger.info(
            "retail date is after reference date",
            vin=vehicle.vin,
            retail_date=retail_date.isoformat(),
            now=today.isoformat(),
        )
        return report

    # Same range the data source would query: oldest start .. newest end
    candidates = orders_overlapping(
        vehicle.repair_orders, periods[-1].start, periods[0].end
    )
    report.periods = aggregate(periods, candidates)
    return report
