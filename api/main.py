from __future__ import annotations

import logging
import math
from typing import Any, Dict

import numpy as np
import pandas as pd
from fastapi import FastAPI, Path as PathParam
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import DateRangeModel, MetaRangeResponse, OverviewResponse
from core.charts import overview_charts
from core.data import load_dashboard_data
from core.errors import BookingDataError
from core.filters import QUICK_RANGES, DateRange, filter_by_range, normalize_range, quick_range
from core.metrics_debug import compute_data_quality
from core.metrics_overview import DashboardSnapshot, compute_overview
from core.records import arrival_dates


app = FastAPI(title="Hotel Bookings Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _range_from_model(model: DateRangeModel) -> DateRange:
    return normalize_range(model.model_dump())


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _overview_payload(snapshot: DashboardSnapshot) -> Dict[str, Any]:
    payload = snapshot.to_dict()
    payload["charts"] = overview_charts(snapshot)
    return payload


@app.get("/meta/range", response_model=MetaRangeResponse)
def meta_range():
    try:
        data_ctx = load_dashboard_data()
        bookings: pd.DataFrame = data_ctx["bookings"]
        payload = {"min_date": None, "max_date": None, "quick_ranges": list(QUICK_RANGES)}
        if not bookings.empty:
            dates = arrival_dates(bookings)
            payload["min_date"] = dates.min().date().isoformat()
            payload["max_date"] = dates.max().date().isoformat()
        return _json(payload)
    except Exception as exc:
        logger.exception("meta_range failed")
        return _error(exc, 500)


@app.post("/overview", response_model=OverviewResponse)
def overview(filters: DateRangeModel):
    try:
        date_range = _range_from_model(filters)
    except BookingDataError as exc:
        return _error(exc, 422)
    try:
        data_ctx = load_dashboard_data()
        return _json(_overview_payload(compute_overview(data_ctx["bookings"], date_range)))
    except Exception as exc:
        logger.exception("overview failed")
        return _error(exc, 500)


@app.post("/overview/quick/{days}", response_model=OverviewResponse)
def overview_quick(days: int = PathParam(..., ge=0)):
    try:
        data_ctx = load_dashboard_data()
        return _json(_overview_payload(compute_overview(data_ctx["bookings"], quick_range(days))))
    except Exception as exc:
        logger.exception("overview_quick failed")
        return _error(exc, 500)


@app.get("/debug")
def debug():
    try:
        return _json(compute_data_quality(load_dashboard_data()))
    except Exception as exc:
        logger.exception("debug failed")
        return _error(exc, 500)


@app.post("/export/bookings")
def export_bookings(filters: DateRangeModel):
    try:
        date_range = _range_from_model(filters)
    except BookingDataError as exc:
        return _error(exc, 422)
    try:
        data_ctx = load_dashboard_data()
        export_df = filter_by_range(data_ctx["bookings"], date_range)
        csv_bytes = export_df.to_csv(index=False).encode("utf-8")
    except Exception as exc:
        logger.exception("export_bookings failed")
        return _error(exc, 500)
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=bookings.csv"},
    )
