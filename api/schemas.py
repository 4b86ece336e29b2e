from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class DateRangeModel(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class CountryVisitorsModel(BaseModel):
    country: str
    visitors: int


class TimeSeriesPointModel(BaseModel):
    date: str
    visitors: int


class VisitorTotalsModel(BaseModel):
    adults: int = 0
    children: int = 0
    total_visitors: int = 0


class OverviewResponse(BaseModel):
    filters: DateRangeModel = Field(default_factory=DateRangeModel)
    record_count: int = 0
    countries: List[CountryVisitorsModel] = Field(default_factory=list)
    time_series: List[TimeSeriesPointModel] = Field(default_factory=list)
    totals: VisitorTotalsModel = Field(default_factory=VisitorTotalsModel)
    charts: Dict[str, Any] = Field(default_factory=dict)


class MetaRangeResponse(BaseModel):
    min_date: Optional[date] = None
    max_date: Optional[date] = None
    quick_ranges: List[int] = Field(default_factory=list)
