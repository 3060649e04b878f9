from __future__ import annotations

from dataclasses import asdict
from typing import Any, Sequence

from series_dashboard.features.aggregates import ProcessedPoint
from series_dashboard.metrics import ChartType, Granularity, MetricDescriptor
from series_dashboard.preprocess.dates import format_tooltip
from series_dashboard.viz.axis import domain, format_tick, tick_count, tick_values


def build_chart_payload(
    points: Sequence[ProcessedPoint],
    descriptor: MetricDescriptor,
    *,
    chart_type: ChartType = ChartType.line,
    granularity: Granularity = Granularity.daily,
) -> dict[str, Any]:
    """Assemble everything the chart renderer needs for one series."""
    axis_min, axis_max = domain(points, descriptor)
    ticks = descriptor.axis_hints.tick_count or tick_count(axis_min, axis_max)
    positions = tick_values(axis_min, axis_max, ticks)

    return {
        "chart_type": chart_type.value,
        "granularity": granularity.value,
        "metric": {
            "key": descriptor.key,
            "label": descriptor.label,
            "color": descriptor.color,
            "description": descriptor.description,
        },
        "axis": {
            "min": axis_min,
            "max": axis_max,
            "tick_count": ticks,
            "ticks": positions,
            "tick_labels": [format_tick(value, descriptor) for value in positions],
        },
        "points": [
            {
                **asdict(point),
                "formatted_value": descriptor.format_value(point.value),
                "tooltip_date": format_tooltip(point.anchor_date),
            }
            for point in points
        ],
    }
