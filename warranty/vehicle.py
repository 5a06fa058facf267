"""Vehicle class - the aggregate holding a VIN and its repair orders."""

from datetime import date
from typing import List, Optional

from .repair_order import RepairOrder


class Vehicle:
    """A vehicle identified by VIN with every repair order on file."""

    def __init__(self, vin: str, repair_orders: Optional[List[RepairOrder]] = None):
        self.vin = vin.strip()
        self.repair_orders = repair_orders or []

    @property
    def retail_date(self) -> Optional[date]:
        """
        Earliest retail date carried by the repair orders.

        The retail date belongs to the vehicle but arrives on every order of
        the source feed, so a vehicle without orders has none.
        """
        if not self.repair_orders:
            return None
        return min(o.retail_date for o in self.repair_orders)

    def get_order(self, order_id: int) -> Optional[RepairOrder]:
        for order in self.repair_orders:
            if order.id == order_id:
                return order
        return None

    def next_order_id(self) -> int:
        """One past the highest order id on file."""
        if not self.repair_orders:
            return 1
        return max(o.id for o in self.repair_orders) + 1

    def get_orders_sorted(
        self, sort_by: str = "id", reverse: bool = True
    ) -> List[RepairOrder]:
        """
        Get repair orders sorted by specified field.

        Args:
            sort_by: "id", "open", or "close"
            reverse: If True, highest id / newest date first (default)
        """
        if sort_by == "id":
            return sorted(self.repair_orders, key=lambda o: o.id, reverse=reverse)
        elif sort_by == "open":
            return sorted(
                self.repair_orders, key=lambda o: (o.open_date, o.id), reverse=reverse
            )
        elif sort_by == "close":
            return sorted(
                self.repair_orders, key=lambda o: (o.close_date, o.id), reverse=reverse
            )
        return self.repair_orders
