"""RepairOrder class for warranty claims."""
from typing import Optional

from .dates import DateLike, normalize


class RepairOrder:
    """One repair claim: a service event open from open_date to close_date."""

    def __init__(
            self,
            id: int,
            open_date: DateLike,
            close_date: DateLike,
            retail_date: DateLike,
            notes: Optional[str] = None,
    ):
        self.id = id
        self.open_date = normalize(open_date)
        self.close_date = normalize(close_date)
        self.retail_date = normalize(retail_date)
        self.notes = notes

    @property
    def is_malformed(self) -> bool:
        """Close date before open date (bad upstream data)."""
        return self.close_date < self.open_date

    @property
    def duration_days(self) -> int:
        """Raw inclusive duration, 0 for malformed orders."""
        if self.is_malformed:
            return 0
        return (self.close_date - self.open_date).days + 1

    def __repr__(self) -> str:
        return (
            f"RepairOrder(id={self.id!r}, open_date={self.open_date.isoformat()}, "
            f"close_date={self.close_date.isoformat()})"
        )
