from __future__ import annotations

from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt

from series_dashboard.features.aggregates import ProcessedPoint
from series_dashboard.metrics import ChartType, MetricDescriptor
from series_dashboard.viz.axis import domain, format_tick, tick_count, tick_values
from series_dashboard.viz.common import figure_size, save_figure

# Label every Nth category so dense daily series stay legible.
MAX_X_LABELS = 12


def plot_series(
    points: Sequence[ProcessedPoint],
    descriptor: MetricDescriptor,
    output_path: Path,
    *,
    chart_type: ChartType = ChartType.line,
    width: int = 1000,
    height: int = 500,
    min_height: int = 300,
) -> Path:
    fig, ax = plt.subplots(figsize=figure_size(width, height, min_height))

    if not points:
        ax.text(0.5, 0.5, "No data available", ha="center", va="center", transform=ax.transAxes)
        ax.set_axis_off()
        ax.set_title(descriptor.label)
        return save_figure(output_path)

    positions = list(range(len(points)))
    values = [point.value for point in points]
    if chart_type is ChartType.bar:
        ax.bar(positions, values, color=descriptor.color)
    elif chart_type is ChartType.scatter:
        ax.scatter(positions, values, color=descriptor.color, s=18)
    else:
        ax.plot(positions, values, color=descriptor.color, linewidth=1.5)

    axis_min, axis_max = domain(points, descriptor)
    ticks = tick_values(
        axis_min,
        axis_max,
        descriptor.axis_hints.tick_count or tick_count(axis_min, axis_max),
    )
    ax.set_ylim(axis_min, axis_max)
    ax.set_yticks(ticks)
    ax.set_yticklabels([format_tick(value, descriptor) for value in ticks])

    stride = max(1, -(-len(points) // MAX_X_LABELS))
    ax.set_xticks(positions[::stride])
    ax.set_xticklabels(
        [point.display_label for point in points[::stride]],
        rotation=30,
        ha="right",
    )
    ax.grid(axis="y", alpha=0.3)
    ax.set_title(descriptor.label)
    ax.set_ylabel(descriptor.description)
    return save_figure(output_path)
