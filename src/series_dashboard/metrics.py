from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Literal

MetricField = Literal[
    "median_house_price_syd",
    "jobseeker_recipients",
    "rba_cash_rate",
    "aud_usd_exchange",
]

METRIC_FIELDS: tuple[MetricField, ...] = (
    "median_house_price_syd",
    "jobseeker_recipients",
    "rba_cash_rate",
    "aud_usd_exchange",
)


class Granularity(str, Enum):
    daily = "daily"
    weekly = "weekly"
    fortnightly = "fortnightly"
    monthly = "monthly"


class ChartType(str, Enum):
    line = "line"
    bar = "bar"
    scatter = "scatter"


GRANULARITY_LABELS: dict[Granularity, str] = {
    Granularity.daily: "Daily",
    Granularity.weekly: "Weekly",
    Granularity.fortnightly: "Fortnightly",
    Granularity.monthly: "Monthly",
}

CHART_TYPE_LABELS: dict[ChartType, str] = {
    ChartType.line: "Line Chart",
    ChartType.bar: "Bar Chart",
    ChartType.scatter: "Scatter Plot",
}


@dataclass(frozen=True)
class AxisHints:
    padding_percent: float | None = None
    fixed_min: float | None = None
    fixed_max: float | None = None
    tick_count: int | None = None


@dataclass(frozen=True)
class MetricDescriptor:
    key: MetricField
    label: str
    color: str
    format_value: Callable[[float], str]
    description: str
    axis_hints: AxisHints = field(default_factory=AxisHints)


def _format_house_price(value: float) -> str:
    return f"${value / 1000:.0f}K"


def _format_count(value: float) -> str:
    return f"{value:,.0f}"


def _format_percent(value: float) -> str:
    return f"{value:.2f}%"


def _format_exchange_rate(value: float) -> str:
    # Stored as USD per AUD scaled by 10,000.
    return f"${value / 10000:.4f}"


ALL_METRICS: dict[str, MetricDescriptor] = {
    "house_price": MetricDescriptor(
        key="median_house_price_syd",
        label="Median House Price (Sydney)",
        color="#3B82F6",
        format_value=_format_house_price,
        description="Sydney median property prices over time",
        axis_hints=AxisHints(padding_percent=10),
    ),
    "jobseekers": MetricDescriptor(
        key="jobseeker_recipients",
        label="Jobseeker Recipients",
        color="#EF4444",
        format_value=_format_count,
        description="Number of people receiving jobseeker benefits",
        axis_hints=AxisHints(padding_percent=15),
    ),
    "cash_rate": MetricDescriptor(
        key="rba_cash_rate",
        label="RBA Cash Rate",
        color="#10B981",
        format_value=_format_percent,
        description="Reserve Bank of Australia official cash rate",
        axis_hints=AxisHints(padding_percent=5, tick_count=8),
    ),
    "exchange_rate": MetricDescriptor(
        key="aud_usd_exchange",
        label="AUD/USD Exchange Rate",
        color="#F59E0B",
        format_value=_format_exchange_rate,
        description="Australian Dollar to US Dollar exchange rate",
        axis_hints=AxisHints(padding_percent=8),
    ),
}

DEFAULT_METRIC = "house_price"


def get_metric(name: str) -> MetricDescriptor:
    """Look up a registered metric descriptor by its short name."""
    descriptor = ALL_METRICS.get(name)
    if descriptor is None:
        choices = ", ".join(ALL_METRICS)
        raise ValueError(f"Unknown metric: {name!r}. Must be one of: {choices}")
    return descriptor
