from __future__ import annotations

from typing import Any, Dict

import pandas as pd

from core.records import arrival_dates, empty_bookings, unknown_month_names


def compute_data_quality(ctx: Dict[str, Any]) -> Dict[str, Any]:
    bookings: pd.DataFrame = ctx.get("bookings", empty_bookings())
    unknown = unknown_month_names(bookings)
    payload = {
        "files": list(ctx.get("files", []) or []),
        "row_counts": {
            "booking_rows": int(len(bookings)),
            "dropped_malformed_rows": int(ctx.get("dropped_rows", 0) or 0),
            "month_fallback_rows": int(unknown.sum()) if not unknown.empty else 0,
        },
        "unknown_month_names": {str(k): int(v) for k, v in unknown.items()},
        "distinct_countries": int(bookings["country"].nunique()) if not bookings.empty else 0,
        "arrival_span": {"min": None, "max": None},
    }
    if not bookings.empty:
        dates = arrival_dates(bookings)
        payload["arrival_span"] = {
            "min": dates.min().date().isoformat(),
            "max": dates.max().date().isoformat(),
        }
    return payload
