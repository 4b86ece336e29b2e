from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import altair as alt
import pandas as pd

from core.metrics_countries import CountryVisitors
from core.metrics_overview import DashboardSnapshot
from core.metrics_timeseries import TimeSeriesPoint

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def visitors_over_time_chart(points: List[TimeSeriesPoint]) -> alt.Chart:
    df = pd.DataFrame([asdict(p) for p in points], columns=["date", "visitors"])
    zoom = alt.selection_interval(bind="scales", encodings=["x"])
    return (
        alt.Chart(df, title="Visitors Over Time")
        .mark_area(
            line=True,
            interpolate="monotone",
            opacity=0.5,
        )
        .encode(
            x=alt.X("date:T", title=None, axis=alt.Axis(format="%d %b", labelAngle=0)),
            y=alt.Y("visitors:Q", title="Total Visitors", axis=alt.Axis(format="~s")),
            tooltip=[
                alt.Tooltip("date:T", title="Date", format="%d %b %Y"),
                alt.Tooltip("visitors:Q", title="Visitors", format=","),
            ],
        )
        .add_params(zoom)
        .properties(height=350)
    )


def top_countries_chart(countries: List[CountryVisitors]) -> alt.Chart:
    df = pd.DataFrame([asdict(c) for c in countries], columns=["country", "visitors"])
    return (
        alt.Chart(df, title="Top 10 Countries")
        .mark_bar(cornerRadiusEnd=4)
        .encode(
            x=alt.X("visitors:Q", title="Visitors", axis=alt.Axis(format="~s")),
            # keep ranking order rather than alphabetical
            y=alt.Y("country:N", title=None, sort=df["country"].tolist()),
            tooltip=["country", alt.Tooltip("visitors:Q", title="Visitors", format=",")],
        )
        .properties(height=350)
    )


def overview_charts(snapshot: DashboardSnapshot) -> Dict[str, Any]:
    return {
        "visitors_over_time": to_vega_spec(visitors_over_time_chart(snapshot.time_series)),
        "top_countries": to_vega_spec(top_countries_chart(snapshot.countries)),
    }
