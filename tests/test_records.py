"""
Unit tests for booking records, month names and date reconstruction.
"""

import logging
from dataclasses import FrozenInstanceError
from datetime import date

import pandas as pd
import pytest

from core.errors import InvalidMonthName
from core.records import (
    MONTHS,
    BookingRecord,
    arrival_dates,
    bookings_frame,
    build_arrival_date,
    frame_records,
    resolve_month,
    visitor_counts,
)

from conftest import booking


class TestResolveMonth:
    def test_all_names(self):
        names = [
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ]
        assert [resolve_month(n) for n in names] == list(range(12))
        assert set(MONTHS.values()) == set(range(12))

    @pytest.mark.parametrize("name", ["", "Juli", "july", None, "13"])
    def test_unknown_falls_back_to_january(self, name):
        assert resolve_month(name) == 0

    def test_surrounding_whitespace_ignored(self):
        assert resolve_month("  March ") == 2

    def test_fallback_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="core.records"):
            resolve_month("Smarch")
        assert "Smarch" in caplog.text

    def test_strict_raises(self):
        with pytest.raises(InvalidMonthName):
            resolve_month("Smarch", strict=True)
        with pytest.raises(ValueError):
            resolve_month("", strict=True)


class TestBuildArrivalDate:
    def test_basic(self):
        assert build_arrival_date(2023, 6, 1) == date(2023, 7, 1)
        assert build_arrival_date(2024, 1, 29) == date(2024, 2, 29)

    def test_day_past_month_end_rolls_over(self):
        assert build_arrival_date(2023, 1, 31) == date(2023, 3, 3)
        assert build_arrival_date(2023, 11, 32) == date(2024, 1, 1)

    def test_day_zero_is_previous_month_end(self):
        assert build_arrival_date(2023, 2, 0) == date(2023, 2, 28)


class TestBookingRecord:
    def test_derived_values(self):
        r = booking(2023, "July", 2, 3, 0, 1, "USA")
        assert r.arrival_date == date(2023, 7, 2)
        assert r.visitor_count == 4

    def test_frozen(self):
        r = booking(2023, "July", 2, 3, 0, 1, "USA")
        with pytest.raises(FrozenInstanceError):
            r.adults = 5

    def test_frame_conversion(self, scenario_records):
        df = bookings_frame(scenario_records)
        assert len(df) == 3
        assert df["adults"].dtype == "int64"
        assert frame_records(df) == scenario_records

    def test_empty_frame(self):
        df = bookings_frame([])
        assert df.empty
        assert "country" in df.columns


class TestArrivalDates:
    def test_matches_scalar_reconstruction(self):
        records = [
            booking(2023, "July", 1, 1, 0, 0, "USA"),
            booking(2023, "February", 31, 1, 0, 0, "USA"),
            booking(2022, "December", 31, 1, 0, 0, "PRT"),
            booking(2023, "Unknown", 5, 1, 0, 0, "PRT"),
        ]
        dates = arrival_dates(bookings_frame(records))
        assert [d.date() for d in dates] == [r.arrival_date for r in records]
        assert dates.iloc[3].date() == date(2023, 1, 5)

    def test_keeps_index_of_filtered_frames(self, scenario_frame):
        subset = scenario_frame.iloc[[0, 2]]
        dates = arrival_dates(subset)
        assert list(dates.index) == [0, 2]

    def test_visitor_counts(self, scenario_frame):
        assert visitor_counts(scenario_frame).tolist() == [3, 1, 4]

    def test_empty(self):
        assert arrival_dates(bookings_frame([])).empty
