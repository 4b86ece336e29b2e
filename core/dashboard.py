from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterable, List, Optional

import pandas as pd

from core.filters import DateRange, quick_range
from core.metrics_overview import DashboardSnapshot, compute_overview
from core.records import BookingRecord, bookings_frame, empty_bookings


logger = logging.getLogger(__name__)

Listener = Callable[[DashboardSnapshot], None]


class BookingDashboard:
    """Holds the record set and date range; recomputes all outputs on every change.

    ``snapshot`` is replaced with a single assignment, so readers see either the
    previous outputs or the new ones, never a mix.
    """

    def __init__(
        self,
        records: Optional[Iterable[BookingRecord] | pd.DataFrame] = None,
        date_range: Optional[DateRange] = None,
    ):
        self._records = empty_bookings() if records is None else bookings_frame(records).copy()
        self._date_range = date_range or DateRange()
        self._listeners: List[Listener] = []
        self._snapshot = compute_overview(self._records, self._date_range)

    @property
    def records(self) -> pd.DataFrame:
        return self._records

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def snapshot(self) -> DashboardSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def set_records(self, records: Iterable[BookingRecord] | pd.DataFrame) -> DashboardSnapshot:
        self._records = bookings_frame(records).copy()
        return self._recompute()

    def set_range(self, date_range: Optional[DateRange]) -> DashboardSnapshot:
        self._date_range = date_range or DateRange()
        return self._recompute()

    def clear_range(self) -> DashboardSnapshot:
        return self.set_range(DateRange())

    def apply_quick_range(self, days: int, today: Optional[date] = None) -> DashboardSnapshot:
        return self.set_range(quick_range(days, today=today))

    def _recompute(self) -> DashboardSnapshot:
        snapshot = compute_overview(self._records, self._date_range)
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot
