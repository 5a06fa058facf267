"""Value types produced by the period generator and the aggregator."""

from dataclasses import dataclass, field
from datetime import date
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .repair_order import RepairOrder


@dataclass(frozen=True)
class WarrantyPeriod:
    """One warranty year, start and end both inclusive."""

    start: date
    end: date

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end

    @property
    def length_days(self) -> int:
        return (self.end - self.start).days + 1


@dataclass(frozen=True)
class RepairDaysItem:
    """Repair days one order contributes to one period."""

    order: "RepairOrder"
    repair_days: int


@dataclass
class PeriodResult:
    """A warranty period with the repair orders that overlap it."""

    period: WarrantyPeriod
    items: List[RepairDaysItem] = field(default_factory=list)
    total_days: int = 0

    def add(self, item: RepairDaysItem) -> None:
        self.items.append(item)
        self.total_days += item.repair_days
