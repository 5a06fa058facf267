#!/usr/bin/env python3
"""Tests for RepairOrder class."""
import pytest
from datetime import date

from warranty import InvalidDateError, RepairOrder


class TestRepairOrder:
    """Tests for RepairOrder class."""

    def test_required_attributes(self):
        """Dates are normalized to calendar dates."""
        order = RepairOrder(1, "2024-01-10", "2024-01-20", "2023-03-15")
        assert order.id == 1
        assert order.open_date == date(2024, 1, 10)
        assert order.close_date == date(2024, 1, 20)
        assert order.retail_date == date(2023, 3, 15)

    def test_notes_default_to_none(self):
        order = RepairOrder(1, "2024-01-10", "2024-01-20", "2023-03-15")
        assert order.notes is None

    def test_accepts_date_objects(self):
        order = RepairOrder(2, date(2024, 1, 10), date(2024, 1, 20), date(2023, 3, 15))
        assert order.open_date == date(2024, 1, 10)

    def test_duration_days_inclusive(self):
        order = RepairOrder(1, "2024-01-10", "2024-01-20", "2023-03-15")
        assert order.duration_days == 11

    def test_malformed(self):
        """Close before open is malformed and lasts zero days."""
        order = RepairOrder(1, "2024-01-20", "2024-01-10", "2023-03-15")
        assert order.is_malformed is True
        assert order.duration_days == 0

    def test_same_day_not_malformed(self):
        order = RepairOrder(1, "2024-01-10", "2024-01-10", "2023-03-15")
        assert order.is_malformed is False
        assert order.duration_days == 1

    def test_invalid_date_raises(self):
        with pytest.raises(InvalidDateError):
            RepairOrder(1, "2024-01-32", "2024-02-01", "2023-03-15")
