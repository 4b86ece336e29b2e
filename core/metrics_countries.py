from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

import pandas as pd

from core.records import BookingRecord, bookings_frame, visitor_counts


TOP_COUNTRIES = 10


@dataclass(frozen=True)
class CountryVisitors:
    country: str
    visitors: int


def country_visitor_totals(records: Iterable[BookingRecord] | pd.DataFrame) -> pd.Series:
    """Visitors per country in first-seen order, before ranking or truncation."""
    df = bookings_frame(records)
    if df.empty:
        return pd.Series(dtype="int64")
    return visitor_counts(df).groupby(df["country"], sort=False, dropna=False).sum()


def aggregate_by_country(records: Iterable[BookingRecord] | pd.DataFrame, *, top_n: int = TOP_COUNTRIES) -> List[CountryVisitors]:
    totals = country_visitor_totals(records)
    # stable sort: ties keep first-seen order
    ranked = totals.sort_values(ascending=False, kind="stable").head(top_n)
    return [CountryVisitors(country=str(c), visitors=int(v)) for c, v in ranked.items()]
