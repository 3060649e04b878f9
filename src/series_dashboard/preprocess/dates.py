"""Calendar bucketing and label formatting for ISO ``YYYY-MM-DD`` dates.

Scalar helpers never raise on bad input. Formatters return
``INVALID_DATE`` and anchor helpers hand the input back unchanged, so a
single malformed date degrades one label instead of the whole series.
"""

from __future__ import annotations

import re
from typing import Any

import pandas as pd

INVALID_DATE = "Invalid Date"
ISO_DATE_FORMAT = "%Y-%m-%d"
# pandas parses "2023-1-5" under ISO_DATE_FORMAT; only zero-padded dates count.
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")
DEFAULT_WEEK_STARTS_ON = 0
DEFAULT_FORTNIGHT_DAYS = 14
DAILY_LABEL_FORMAT = "%d %b %Y"


def parse_date(value: Any) -> pd.Timestamp | None:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return None
    parsed = pd.to_datetime(value, format=ISO_DATE_FORMAT, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed


def parse_dates(values: pd.Series) -> pd.Series:
    """Vectorised counterpart of ``parse_date``; unparseable entries become NaT."""
    text = values.astype("string")
    iso = text.str.fullmatch(DATE_PATTERN.pattern).fillna(False).astype(bool)
    return pd.to_datetime(text.where(iso), format=ISO_DATE_FORMAT, errors="coerce")


def format_dates(dates: pd.Series, fmt: str) -> pd.Series:
    """Render a column of ISO dates with ``fmt``; unparseable entries become ``INVALID_DATE``."""
    parsed = parse_dates(dates)
    return parsed.dt.strftime(fmt).where(parsed.notna(), INVALID_DATE)


def week_start_of(
    timestamp: pd.Timestamp,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> pd.Timestamp:
    offset = (timestamp.weekday() - week_starts_on) % 7
    return timestamp - pd.Timedelta(days=offset)


def week_anchors(dates: pd.Series, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> pd.Series:
    """Week anchors for a column of ISO dates; unparseable entries pass through unchanged."""
    parsed = parse_dates(dates)
    offsets = pd.to_timedelta((parsed.dt.weekday - week_starts_on) % 7, unit="D")
    anchors = (parsed - offsets).dt.strftime(ISO_DATE_FORMAT)
    return anchors.where(parsed.notna(), dates)


def month_anchors(dates: pd.Series) -> pd.Series:
    parsed = parse_dates(dates)
    anchors = (parsed - pd.to_timedelta(parsed.dt.day - 1, unit="D")).dt.strftime(ISO_DATE_FORMAT)
    return anchors.where(parsed.notna(), dates)


def week_anchor(date: str, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> str:
    """Return the ISO date of the week start (Monday by default) on or before ``date``."""
    parsed = parse_date(date)
    if parsed is None:
        return date
    return week_start_of(parsed, week_starts_on).strftime(ISO_DATE_FORMAT)


def month_anchor(date: str) -> str:
    parsed = parse_date(date)
    if parsed is None:
        return date
    return parsed.replace(day=1).strftime(ISO_DATE_FORMAT)


def format_daily(date: str) -> str:
    parsed = parse_date(date)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime(DAILY_LABEL_FORMAT)


def format_weekly(anchor: str, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> str:
    parsed = parse_date(anchor)
    if parsed is None:
        return INVALID_DATE
    return f"Week of {week_start_of(parsed, week_starts_on).strftime('%d %b %Y')}"


def format_fortnightly(anchor_start: str, fortnight_days: int = DEFAULT_FORTNIGHT_DAYS) -> str:
    parsed = parse_date(anchor_start)
    if parsed is None:
        return INVALID_DATE
    end = parsed + pd.Timedelta(days=fortnight_days - 1)
    return f"{parsed.strftime('%d %b')} - {end.strftime('%d %b %Y')}"


def format_monthly(anchor: str) -> str:
    parsed = parse_date(anchor)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%b %Y")


def format_tooltip(date: str) -> str:
    parsed = parse_date(date)
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%a, %d %b %Y")
