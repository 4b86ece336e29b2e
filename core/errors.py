from __future__ import annotations

from typing import Iterable, Optional


class BookingDataError(ValueError):
    """Base class for booking data problems surfaced by the dashboard core."""


class MalformedRecord(BookingDataError):
    def __init__(self, row: int, column: str, value: object, reason: str = "not a non-negative integer"):
        self.row = row
        self.column = column
        self.value = value
        super().__init__(f"Row {row}: column {column!r} value {value!r} is {reason}")


class MissingColumns(BookingDataError):
    def __init__(self, missing: Iterable[str], available: Optional[Iterable[str]] = None):
        self.missing = sorted(missing)
        self.available = list(available) if available is not None else []
        super().__init__(f"Missing required columns: {self.missing}. Available={self.available}")


class InvalidMonthName(BookingDataError):
    def __init__(self, name: object):
        self.name = name
        super().__init__(f"Unknown arrival month name: {name!r}")


class InvalidDateRange(BookingDataError):
    pass
