from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

import pandas as pd

from core.errors import InvalidDateRange
from core.records import BookingRecord, arrival_dates, bookings_frame


QUICK_RANGES = (7, 30)


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None

    def to_dict(self) -> dict:
        return {
            "start_date": self.start.isoformat() if self.start else None,
            "end_date": self.end.isoformat() if self.end else None,
        }


def _as_date(value: object, field_name: str) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError as exc:
        raise InvalidDateRange(f"{field_name} is not an ISO date: {value!r}") from exc


def normalize_range(raw: Optional[dict]) -> DateRange:
    raw = raw or {}
    return DateRange(
        start=_as_date(raw.get("start_date"), "start_date"),
        end=_as_date(raw.get("end_date"), "end_date"),
    )


def quick_range(days: int, today: Optional[date] = None) -> DateRange:
    """``(today - days, today)`` for the "Last N Days" shortcuts."""
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise InvalidDateRange(f"Quick range needs a non-negative day count, got {days!r}")
    end = today or date.today()
    return DateRange(start=end - timedelta(days=days), end=end)


def filter_by_range(records: Iterable[BookingRecord] | pd.DataFrame, date_range: Optional[DateRange]) -> pd.DataFrame:
    """Bookings whose arrival date lies in the inclusive range, in input order.

    A range missing either bound does not filter; the result is always a copy.
    """
    df = bookings_frame(records)
    if date_range is None or not date_range.is_bounded or df.empty:
        return df.copy()
    arrivals = arrival_dates(df)
    mask = (arrivals >= pd.Timestamp(date_range.start)) & (arrivals <= pd.Timestamp(date_range.end))
    return df.loc[mask].copy()
