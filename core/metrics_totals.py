from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from core.records import BookingRecord, bookings_frame, visitor_counts


@dataclass(frozen=True)
class VisitorTotals:
    adults: int = 0
    children: int = 0
    # includes babies, which are not reported separately
    total_visitors: int = 0


def aggregate_totals(records: Iterable[BookingRecord] | pd.DataFrame) -> VisitorTotals:
    df = bookings_frame(records)
    if df.empty:
        return VisitorTotals()
    return VisitorTotals(
        adults=int(df["adults"].sum()),
        children=int(df["children"].sum()),
        total_visitors=int(visitor_counts(df).sum()),
    )
