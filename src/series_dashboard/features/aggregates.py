from __future__ import annotations

from dataclasses import dataclass
from functools import partial, reduce
from typing import Callable, Sequence

import pandas as pd

from series_dashboard.io.schema import RawRecord, records_to_frame
from series_dashboard.metrics import Granularity, MetricField
from series_dashboard.preprocess.dates import (
    DAILY_LABEL_FORMAT,
    DEFAULT_FORTNIGHT_DAYS,
    DEFAULT_WEEK_STARTS_ON,
    format_dates,
    format_fortnightly,
    format_monthly,
    format_weekly,
    month_anchors,
    parse_dates,
    week_anchors,
)
from series_dashboard.preprocess.sanitize import extract_metric, sort_by_date


@dataclass(frozen=True)
class ProcessedPoint:
    display_label: str
    value: float
    anchor_date: str


@dataclass(frozen=True)
class Bucket:
    anchor: str
    records: tuple[RawRecord, ...]


@dataclass(frozen=True)
class FortnightWindow:
    window_start: str
    start: pd.Timestamp | None
    members: tuple[RawRecord, ...]


def calculate_average(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return sum(values) / len(values)


def _group_by_anchor(records: Sequence[RawRecord], anchors: pd.Series) -> list[Bucket]:
    # groupby(sort=False) yields buckets in first-seen order, not date order.
    positions = anchors.groupby(anchors, sort=False).indices
    return [
        Bucket(anchor=str(anchor), records=tuple(records[int(i)] for i in indices))
        for anchor, indices in positions.items()
    ]


def weekly_buckets(
    records: Sequence[RawRecord],
    *,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> list[Bucket]:
    if not records:
        return []
    frame = records_to_frame(records)
    return _group_by_anchor(records, week_anchors(frame["date"], week_starts_on))


def monthly_buckets(records: Sequence[RawRecord]) -> list[Bucket]:
    if not records:
        return []
    frame = records_to_frame(records)
    return _group_by_anchor(records, month_anchors(frame["date"]))


def _window_contains(
    window: FortnightWindow,
    current: pd.Timestamp | None,
    span: pd.Timedelta,
) -> bool:
    if window.start is None or current is None:
        return False
    return current <= window.start + span


def _close_window(window: FortnightWindow) -> Bucket:
    return Bucket(anchor=window.window_start, records=window.members)


def _fold_fortnight(
    state: tuple[list[Bucket], FortnightWindow],
    item: tuple[RawRecord, pd.Timestamp | None],
    *,
    span: pd.Timedelta,
) -> tuple[list[Bucket], FortnightWindow]:
    closed, window = state
    record, current = item
    if _window_contains(window, current, span):
        members = (*window.members, record)
        return closed, FortnightWindow(window.window_start, window.start, members)
    closed.append(_close_window(window))
    return closed, FortnightWindow(record.date, current, (record,))


def fortnight_buckets(
    records: Sequence[RawRecord],
    *,
    fortnight_days: int = DEFAULT_FORTNIGHT_DAYS,
) -> list[Bucket]:
    """Window records by arrival: each window opens on the first record it has not yet covered."""
    ordered = sort_by_date(records)
    if not ordered:
        return []
    parsed = parse_dates(pd.Series([record.date for record in ordered], dtype="string"))
    stamps = [None if pd.isna(value) else value for value in parsed]
    first = ordered[0]
    closed, window = reduce(
        partial(_fold_fortnight, span=pd.Timedelta(days=fortnight_days - 1)),
        zip(ordered[1:], stamps[1:]),
        ([], FortnightWindow(first.date, stamps[0], (first,))),
    )
    closed.append(_close_window(window))
    return closed


def _reduce_buckets(
    buckets: Sequence[Bucket],
    metric_key: MetricField,
    label: Callable[[str], str],
) -> list[ProcessedPoint]:
    points = [
        ProcessedPoint(
            display_label=label(bucket.anchor),
            value=calculate_average(extract_metric(bucket.records, metric_key)),
            anchor_date=bucket.anchor,
        )
        for bucket in buckets
    ]
    return sort_points(points)


def sort_points(points: Sequence[ProcessedPoint]) -> list[ProcessedPoint]:
    """Order points by anchor date; anchors that do not parse go last in their given order."""
    if not points:
        return []
    order = pd.DataFrame(
        {
            "position": range(len(points)),
            "anchor": parse_dates(pd.Series([point.anchor_date for point in points])),
        }
    ).sort_values("anchor", kind="mergesort", na_position="last")
    return [points[int(position)] for position in order["position"]]


def daily(records: Sequence[RawRecord], metric_key: MetricField) -> list[ProcessedPoint]:
    if not records:
        return []
    dates = pd.Series([record.date for record in records], dtype="string")
    labels = format_dates(dates, DAILY_LABEL_FORMAT)
    return [
        ProcessedPoint(
            display_label=label,
            value=getattr(record, metric_key),
            anchor_date=record.date,
        )
        for record, label in zip(records, labels)
    ]


def weekly(
    records: Sequence[RawRecord],
    metric_key: MetricField,
    *,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
) -> list[ProcessedPoint]:
    return _reduce_buckets(
        weekly_buckets(records, week_starts_on=week_starts_on),
        metric_key,
        partial(format_weekly, week_starts_on=week_starts_on),
    )


def fortnightly(
    records: Sequence[RawRecord],
    metric_key: MetricField,
    *,
    fortnight_days: int = DEFAULT_FORTNIGHT_DAYS,
) -> list[ProcessedPoint]:
    return _reduce_buckets(
        fortnight_buckets(records, fortnight_days=fortnight_days),
        metric_key,
        partial(format_fortnightly, fortnight_days=fortnight_days),
    )


def monthly(records: Sequence[RawRecord], metric_key: MetricField) -> list[ProcessedPoint]:
    return _reduce_buckets(monthly_buckets(records), metric_key, format_monthly)


def aggregate(
    records: Sequence[RawRecord],
    granularity: Granularity,
    metric_key: MetricField,
    *,
    week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
    fortnight_days: int = DEFAULT_FORTNIGHT_DAYS,
) -> list[ProcessedPoint]:
    if granularity is Granularity.weekly:
        return weekly(records, metric_key, week_starts_on=week_starts_on)
    if granularity is Granularity.fortnightly:
        return fortnightly(records, metric_key, fortnight_days=fortnight_days)
    if granularity is Granularity.monthly:
        return monthly(records, metric_key)
    return daily(records, metric_key)
