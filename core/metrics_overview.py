from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from core.filters import DateRange, filter_by_range
from core.metrics_countries import CountryVisitors, aggregate_by_country
from core.metrics_timeseries import TimeSeriesPoint, aggregate_by_day
from core.metrics_totals import VisitorTotals, aggregate_totals
from core.records import BookingRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    date_range: DateRange = field(default_factory=DateRange)
    record_count: int = 0
    countries: List[CountryVisitors] = field(default_factory=list)
    time_series: List[TimeSeriesPoint] = field(default_factory=list)
    totals: VisitorTotals = field(default_factory=VisitorTotals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filters": self.date_range.to_dict(),
            "record_count": self.record_count,
            "countries": [asdict(c) for c in self.countries],
            "time_series": [asdict(p) for p in self.time_series],
            "totals": asdict(self.totals),
        }


def compute_overview(
    records: Iterable[BookingRecord] | pd.DataFrame,
    date_range: Optional[DateRange] = None,
) -> DashboardSnapshot:
    """Filter once, then build the three outputs from the same filtered set."""
    date_range = date_range or DateRange()
    filtered = filter_by_range(records, date_range)
    snapshot = DashboardSnapshot(
        date_range=date_range,
        record_count=int(len(filtered)),
        countries=aggregate_by_country(filtered),
        time_series=aggregate_by_day(filtered),
        totals=aggregate_totals(filtered),
    )
    logger.debug(
        "Recomputed overview for %s: %d rows, %d countries, %d days",
        date_range,
        snapshot.record_count,
        len(snapshot.countries),
        len(snapshot.time_series),
    )
    return snapshot
