"""
Warranty repair-days tracking.

This package partitions a vehicle's warranty into one-year periods and
counts the repair days each repair order contributes to each period:
- RepairOrder: a repair claim with open/close dates
- WarrantyPeriod: one inclusive warranty year
- PeriodResult / RepairDaysItem: repair days per period
- Vehicle: VIN plus repair orders (the data-source aggregate)
- WarrantyReport: periods and totals for one vehicle
"""

from .errors import (
    WarrantyError,
    VehicleNotFoundError,
    InvalidDateError,
    InvalidVehicleFileError,
    ConfigError,
)
from .dates import normalize, add_years, days_inclusive
from .repair_order import RepairOrder
from .warranty_period import WarrantyPeriod, RepairDaysItem, PeriodResult
from .periods import current_window, build_periods
from .aggregation import aggregate, malformed_orders, orders_overlapping, sort_orders
from .vehicle import Vehicle
from .report import WarrantyReport, build_warranty_report
from .loader import (
    load_vehicle,
    find_vehicle,
    get_vehicle_files,
    save_repair_order,
    delete_repair_order,
    create_vehicle,
)

__all__ = [
    "WarrantyError",
    "VehicleNotFoundError",
    "InvalidDateError",
    "InvalidVehicleFileError",
    "ConfigError",
    "normalize",
    "add_years",
    "days_inclusive",
    "RepairOrder",
    "WarrantyPeriod",
    "RepairDaysItem",
    "PeriodResult",
    "current_window",
    "build_periods",
    "aggregate",
    "malformed_orders",
    "orders_overlapping",
    "sort_orders",
    "Vehicle",
    "WarrantyReport",
    "build_warranty_report",
    "load_vehicle",
    "find_vehicle",
    "get_vehicle_files",
    "save_repair_order",
    "delete_repair_order",
    "create_vehicle",
]
