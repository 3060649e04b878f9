from __future__ import annotations

import math
from typing import Callable, Literal, Sequence

import numpy as np

from series_dashboard.features.aggregates import ProcessedPoint
from series_dashboard.metrics import MetricDescriptor

RoundDirection = Literal["floor", "ceil"]

EMPTY_DOMAIN = (0.0, 100.0)
DEFAULT_PADDING_PERCENT = 10.0

# (upper bound on |value|, rounding step); values at or above the last bound snap to 1000s.
_NICE_STEPS: tuple[tuple[float, float], ...] = (
    (1.0, 0.01),
    (10.0, 0.1),
    (100.0, 1.0),
    (1000.0, 10.0),
)

# (upper bound on range, tick count); ranges past the last bound get 8 ticks.
_TICK_STEPS: tuple[tuple[float, int], ...] = (
    (1.0, 6),
    (10.0, 8),
    (100.0, 7),
    (1000.0, 6),
    (5000.0, 5),
    (10000.0, 6),
)


def round_to_nice_number(value: float, direction: RoundDirection) -> float:
    """Round |value| to a magnitude-dependent step, then restore the sign."""
    magnitude = abs(value)
    sign = -1 if value < 0 else 1
    round_fn: Callable[[float], int] = math.floor if direction == "floor" else math.ceil

    for bound, step in _NICE_STEPS:
        if magnitude < bound:
            if step < 1:
                scale = round(1 / step)
                return sign * (round_fn(magnitude * scale) / scale)
            return sign * (round_fn(magnitude / step) * step)
    return sign * (round_fn(magnitude / 1000) * 1000.0)


def domain(series: Sequence[ProcessedPoint], descriptor: MetricDescriptor) -> tuple[float, float]:
    if not series:
        return EMPTY_DOMAIN

    hints = descriptor.axis_hints
    if hints.fixed_min is not None and hints.fixed_max is not None:
        return (hints.fixed_min, hints.fixed_max)

    values = [point.value for point in series]
    data_min = min(values)
    data_max = max(values)
    padding_percent = (
        DEFAULT_PADDING_PERCENT if hints.padding_percent is None else hints.padding_percent
    )
    padding = (data_max - data_min) * padding_percent / 100

    return (
        round_to_nice_number(data_min - padding, "floor"),
        round_to_nice_number(data_max + padding, "ceil"),
    )


def tick_count(minimum: float, maximum: float) -> int:
    value_range = maximum - minimum
    for bound, count in _TICK_STEPS:
        if value_range < bound:
            return count
    return 8


def tick_values(minimum: float, maximum: float, count: int) -> list[float]:
    if count < 2 or maximum <= minimum:
        return [float(minimum)]
    return [float(value) for value in np.linspace(minimum, maximum, count)]


def format_tick(value: float, descriptor: MetricDescriptor) -> str:
    return descriptor.format_value(value)
