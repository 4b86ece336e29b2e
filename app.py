import altair as alt
import pandas as pd
import streamlit as st
from contextlib import contextmanager
from typing import Optional

from core.charts import top_countries_chart, visitors_over_time_chart
from core.dashboard import BookingDashboard
from core.data import BOOKINGS_FILE, DATA_DIR, load_dashboard_data
from core.errors import BookingDataError
from core.filters import QUICK_RANGES, DateRange
from core.records import arrival_dates

alt.data_transformers.disable_max_rows()
# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #374151;border-radius: 12px;padding: 16px;background: #1f2937;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 700;font-size: 1.1rem;color: #ffffff;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #1f2937;border: 1px solid #374151;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #9ca3af;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_range_chip(date_range: DateRange) -> str:
    if not date_range.is_bounded:
        return "<span class='chip'>Arrivals: All dates</span>"
    return f"<span class='chip'>Arrivals: {date_range.start:%d %b %Y} – {date_range.end:%d %b %Y}</span>"


def get_dashboard(bookings: pd.DataFrame) -> BookingDashboard:
    dashboard: Optional[BookingDashboard] = st.session_state.get("dashboard")
    if dashboard is None:
        dashboard = BookingDashboard(bookings)
        st.session_state["dashboard"] = dashboard
    elif st.session_state.get("bookings_source") is not bookings:
        dashboard.set_records(bookings)
    st.session_state["bookings_source"] = bookings
    return dashboard


# ---------- UI setup ----------
st.set_page_config(page_title="Hotel Bookings Dashboard", layout="wide")
inject_base_styles()
st.title("Hotel Bookings Dashboard")

try:
    data_ctx = load_dashboard_data()
except BookingDataError as exc:
    st.error(f"Could not load {BOOKINGS_FILE}: {exc}")
    st.stop()

bookings: pd.DataFrame = data_ctx["bookings"]
if not data_ctx.get("files"):
    st.error(f"No data file found. Place {BOOKINGS_FILE} in {DATA_DIR}.")
    st.stop()
if data_ctx.get("dropped_rows"):
    st.warning(f"{data_ctx['dropped_rows']} malformed row(s) were skipped while loading.")

dashboard = get_dashboard(bookings)

# ----- Sidebar: date range + quick filters -----
with st.sidebar:
    st.markdown("### Arrival dates")
    if not bookings.empty:
        span = arrival_dates(bookings)
        st.caption(f"Data covers {span.min():%d %b %Y} – {span.max():%d %b %Y}")
    current = dashboard.date_range
    start_date = st.date_input("Start date", value=current.start)
    end_date = st.date_input("End date", value=current.end)

    st.markdown("---")
    st.markdown("### Quick filters")
    for days in QUICK_RANGES:
        if st.button(f"Last {days} Days", use_container_width=True):
            dashboard.apply_quick_range(days)
            st.rerun()
    if st.button("All dates", use_container_width=True):
        dashboard.clear_range()
        st.rerun()

picked = DateRange(start=start_date, end=end_date)
if picked != dashboard.date_range:
    dashboard.set_range(picked)

snapshot = dashboard.snapshot
st.markdown(f"<div class='chip-row'>{format_range_chip(snapshot.date_range)}</div>", unsafe_allow_html=True)

cols = st.columns(3)
cols[0].metric("Total Visitors", f"{snapshot.totals.total_visitors:,}", help="Adults + children + babies.")
cols[1].metric("Adults", f"{snapshot.totals.adults:,}")
cols[2].metric("Children", f"{snapshot.totals.children:,}")

left, right = st.columns(2)
with left:
    with card("Visitors Over Time"):
        if snapshot.time_series:
            st.altair_chart(visitors_over_time_chart(snapshot.time_series), use_container_width=True)
        else:
            st.info("No arrivals in the selected range.")
with right:
    with card("Top 10 Countries"):
        if snapshot.countries:
            st.altair_chart(top_countries_chart(snapshot.countries), use_container_width=True)
        else:
            st.info("No arrivals in the selected range.")
