from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from core.errors import MalformedRecord, MissingColumns
from core.records import BOOKING_COLUMNS, COUNT_COLUMNS, INT_COLUMNS, empty_bookings, unknown_month_names


logger = logging.getLogger(__name__)

DATA_DIR = Path(os.environ.get("HOTEL_DASHBOARD_DATA_DIR") or Path(__file__).resolve().parents[1] / "data")
BOOKINGS_FILE = "hotel_bookings_1000.csv"

# Timestamps outside this window cannot be represented by pandas.
MIN_YEAR = pd.Timestamp.min.year + 1
MAX_YEAR = pd.Timestamp.max.year - 1


def strict_ingestion() -> bool:
    return os.environ.get("HOTEL_DASHBOARD_STRICT", "1").strip().lower() not in {"0", "false", "no", "off"}


def get_source_files() -> List[Path]:
    path = DATA_DIR / BOOKINGS_FILE
    return [path] if path.exists() else []


def file_signature(files: List[Path]) -> Tuple[Tuple[str, float], ...]:
    return tuple((str(f), f.stat().st_mtime) for f in files)


def coerce_str_safe(df: pd.DataFrame, cols: Iterable[str]) -> pd.DataFrame:
    for col in cols:
        if col in df.columns:
            df[col] = df[col].astype(str).str.strip()
    return df


def invalid_int_mask(series: pd.Series, *, lower: Optional[int] = None, upper: Optional[int] = None) -> pd.Series:
    """True where a text column does not hold an integer within ``[lower, upper]``."""
    num = pd.to_numeric(series.astype(str).str.strip(), errors="coerce")
    bad = num.isna() | (num % 1 != 0)
    if lower is not None:
        bad |= num < lower
    if upper is not None:
        bad |= num > upper
    return bad.fillna(True)


def validate_bookings(df: pd.DataFrame, *, strict: bool = True) -> Tuple[pd.DataFrame, int]:
    """Convert raw text columns to typed booking columns.

    Returns the typed frame and the number of rows dropped as malformed
    (always 0 when ``strict``; the first malformed row raises instead).
    """
    bounds = {
        "arrival_date_year": (MIN_YEAR, MAX_YEAR),
        "arrival_date_day_of_month": (1, 31),
        **{c: (0, None) for c in COUNT_COLUMNS},
    }
    bad_rows = pd.Series(False, index=df.index)
    for col in INT_COLUMNS:
        lower, upper = bounds[col]
        bad = invalid_int_mask(df[col], lower=lower, upper=upper)
        if strict and bad.any():
            pos = int(bad.to_numpy().nonzero()[0][0])
            raise MalformedRecord(pos + 1, col, df[col].iloc[pos])
        bad_rows |= bad

    dropped = int(bad_rows.sum())
    if dropped:
        logger.warning("Dropped %d malformed booking row(s)", dropped)
    df = df.loc[~bad_rows].copy()
    for col in INT_COLUMNS:
        df[col] = pd.to_numeric(df[col].astype(str).str.strip()).astype("int64")
    return df.reset_index(drop=True), dropped


def load_bookings_csv(path: Path | str, *, strict: bool = True) -> Tuple[pd.DataFrame, int]:
    """Read a bookings CSV (all fields as text) into the canonical typed frame."""
    raw = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    raw = raw.rename(columns={c: str(c).strip() for c in raw.columns})
    missing = set(BOOKING_COLUMNS) - set(raw.columns)
    if missing:
        raise MissingColumns(missing, list(raw.columns))
    if raw.empty:
        return empty_bookings(), 0

    df = coerce_str_safe(raw[BOOKING_COLUMNS].copy(), ["arrival_date_month", "country"])
    df, dropped = validate_bookings(df, strict=strict)

    unknown = unknown_month_names(df)
    for name, count in unknown.items():
        logger.warning("Unknown month name %r on %d row(s), falling back to January", name, count)
    logger.info("Loaded %d booking rows from %s", len(df), path)
    return df, dropped


@lru_cache(maxsize=4)
def _load_dashboard_data_cached(files_sig: Tuple[Tuple[str, float], ...], strict: bool) -> Dict[str, object]:
    frames: List[pd.DataFrame] = []
    dropped_rows = 0
    for name, _ in files_sig:
        df, dropped = load_bookings_csv(name, strict=strict)
        frames.append(df)
        dropped_rows += dropped
    bookings = pd.concat(frames, ignore_index=True) if frames else empty_bookings()
    return {
        "files": [Path(name).name for name, _ in files_sig],
        "bookings": bookings,
        "dropped_rows": dropped_rows,
    }


def load_dashboard_data(path: Optional[Path | str] = None, *, strict: Optional[bool] = None) -> Dict[str, object]:
    files = [Path(path)] if path is not None else get_source_files()
    files = [f for f in files if f.exists()]
    if not files:
        return {"files": [], "bookings": empty_bookings(), "dropped_rows": 0}
    strict = strict_ingestion() if strict is None else strict
    return _load_dashboard_data_cached(file_signature(files), strict)
