from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import pandas as pd

from core.records import BookingRecord, arrival_dates, bookings_frame, visitor_counts


@dataclass(frozen=True)
class TimeSeriesPoint:
    date: str
    visitors: int


def aggregate_by_day(records: Iterable[BookingRecord] | pd.DataFrame) -> List[TimeSeriesPoint]:
    """Visitors per arrival day, ascending by ISO date. Days without bookings are omitted."""
    df = bookings_frame(records)
    if df.empty:
        return []
    keys = arrival_dates(df).dt.strftime("%Y-%m-%d")
    daily = visitor_counts(df).groupby(keys).sum().sort_index()
    return [TimeSeriesPoint(date=str(d), visitors=int(v)) for d, v in daily.items()]
