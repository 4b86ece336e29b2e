from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional

import pandas as pd

from core.errors import InvalidMonthName


logger = logging.getLogger(__name__)

MONTHS = {
    "January": 0,
    "February": 1,
    "March": 2,
    "April": 3,
    "May": 4,
    "June": 5,
    "July": 6,
    "August": 7,
    "September": 8,
    "October": 9,
    "November": 10,
    "December": 11,
}

COUNT_COLUMNS = ["adults", "children", "babies"]
DATE_PART_COLUMNS = ["arrival_date_year", "arrival_date_month", "arrival_date_day_of_month"]
BOOKING_COLUMNS = DATE_PART_COLUMNS + COUNT_COLUMNS + ["country"]
INT_COLUMNS = ["arrival_date_year", "arrival_date_day_of_month"] + COUNT_COLUMNS


def resolve_month(name: Optional[str], *, strict: bool = False) -> int:
    """Map a full English month name to its zero-based index.

    Unknown or empty names resolve to 0 (January) unless ``strict`` is set.
    """
    key = name.strip() if isinstance(name, str) else None
    if key in MONTHS:
        return MONTHS[key]
    if strict:
        raise InvalidMonthName(name)
    logger.warning("Unknown month name %r, falling back to January", name)
    return 0


def build_arrival_date(year: int, month_index: int, day: int) -> date:
    """Compose a calendar date; out-of-range days roll into the neighbouring month."""
    year += month_index // 12
    month_index %= 12
    return date(year, month_index + 1, 1) + timedelta(days=int(day) - 1)


@dataclass(frozen=True)
class BookingRecord:
    arrival_date_year: int
    arrival_date_month: str
    arrival_date_day_of_month: int
    adults: int
    children: int
    babies: int
    country: str

    @property
    def arrival_date(self) -> date:
        return build_arrival_date(
            self.arrival_date_year,
            resolve_month(self.arrival_date_month),
            self.arrival_date_day_of_month,
        )

    @property
    def visitor_count(self) -> int:
        return self.adults + self.children + self.babies


def empty_bookings() -> pd.DataFrame:
    df = pd.DataFrame({c: pd.Series(dtype="int64") for c in BOOKING_COLUMNS})
    df["arrival_date_month"] = df["arrival_date_month"].astype(object)
    df["country"] = df["country"].astype(object)
    return df


def bookings_frame(records: Iterable[BookingRecord] | pd.DataFrame) -> pd.DataFrame:
    """Return the canonical bookings DataFrame for records or an existing frame."""
    if isinstance(records, pd.DataFrame):
        return records
    rows = [asdict(r) for r in records]
    if not rows:
        return empty_bookings()
    df = pd.DataFrame(rows, columns=BOOKING_COLUMNS)
    for col in INT_COLUMNS:
        df[col] = df[col].astype("int64")
    return df


def frame_records(df: pd.DataFrame) -> List[BookingRecord]:
    return [
        BookingRecord(
            arrival_date_year=int(row.arrival_date_year),
            arrival_date_month=str(row.arrival_date_month),
            arrival_date_day_of_month=int(row.arrival_date_day_of_month),
            adults=int(row.adults),
            children=int(row.children),
            babies=int(row.babies),
            country=str(row.country),
        )
        for row in df[BOOKING_COLUMNS].itertuples(index=False)
    ]


def month_indices(df: pd.DataFrame) -> pd.Series:
    """Vectorised ``resolve_month``. Unknown names are reported once at load time; here only at debug level."""
    names = df["arrival_date_month"].astype(str).str.strip()
    idx = names.map(MONTHS)
    unknown = names[idx.isna()]
    if not unknown.empty:
        for name, count in unknown.value_counts().items():
            logger.debug("Unknown month name %r on %d row(s), falling back to January", name, count)
    return idx.fillna(0).astype("int64")


def unknown_month_names(df: pd.DataFrame) -> pd.Series:
    """Counts of month names that do not resolve, keyed by the raw name."""
    if df.empty:
        return pd.Series(dtype="int64")
    names = df["arrival_date_month"].astype(str).str.strip()
    unknown = names[names.map(MONTHS).isna()]
    return unknown.value_counts()


def arrival_dates(df: pd.DataFrame) -> pd.Series:
    """Reconstructed arrival dates (day granularity) aligned with ``df``'s index."""
    if df.empty:
        return pd.Series(dtype="datetime64[ns]", index=df.index)
    month_idx = month_indices(df)
    firsts = pd.to_datetime(
        pd.DataFrame({"year": df["arrival_date_year"].astype("int64"), "month": month_idx + 1, "day": 1}),
    )
    days = pd.to_timedelta(df["arrival_date_day_of_month"].astype("int64") - 1, unit="D")
    return firsts + days


def visitor_counts(df: pd.DataFrame) -> pd.Series:
    return (df["adults"] + df["children"] + df["babies"]).astype("int64")
