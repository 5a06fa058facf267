"""
Warranty-year windows anchored to a vehicle's retail date.

Every window is derived from a retail-date anniversary:

    start(k) = retail + k years
    end(k)   = retail + (k + 1) years - 1 day

so consecutive windows are always contiguous. Feb 29 anniversaries in
non-leap years fall on Feb 28 (see dates.add_years).
"""

from datetime import date
from typing import List, Tuple

from .dates import DateLike, ONE_DAY, add_years, normalize
from .warranty_period import WarrantyPeriod


def _years_into_warranty(retail: date, now: date) -> int:
    """Index of the warranty year containing now (negative if now < retail)."""
    years = now.year - retail.year
    if add_years(retail, years) > now:
        years -= 1
    return years


def _window(retail: date, years: int) -> Tuple[date, date]:
    """
    Window for warranty year `years`, counted from the retail date.

    For a Feb 29 retail date this intentionally breaks end == start + 1 year - 1 day
    (e.g. 2023-02-28 .. 2024-02-28) so that windows stay contiguous.
    """
    start = add_years(retail, years)
    end = add_years(retail, years + 1) - ONE_DAY
    return start, end


def current_window(retail_date: DateLike, now: DateLike) -> Tuple[date, date]:
    """
    Warranty year that contains now.

    Guarantees start <= now <= end whenever retail_date <= now.
    """
    retail = normalize(retail_date)
    return _window(retail, _years_into_warranty(retail, normalize(now)))


def build_periods(retail_date: DateLike, now: DateLike) -> List[WarrantyPeriod]:
    """
    All warranty years from the current one back to the first, newest first.

    Empty when retail_date is after now.
    """
    retail = normalize(retail_date)
    periods = []
    years = _years_into_warranty(retail, normalize(now))
    while years >= 0:
        start, end = _window(retail, years)
        periods.append(WarrantyPeriod(start=start, end=end))
        years -= 1
    return periods
