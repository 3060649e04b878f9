from __future__ import annotations

from dataclasses import replace

import pytest

from series_dashboard.features.aggregates import ProcessedPoint
from series_dashboard.metrics import ALL_METRICS, AxisHints
from series_dashboard.viz.axis import (
    domain,
    format_tick,
    round_to_nice_number,
    tick_count,
    tick_values,
)


def _series(*values: float) -> list[ProcessedPoint]:
    return [
        ProcessedPoint(display_label=f"point {index}", value=value, anchor_date="2023-01-01")
        for index, value in enumerate(values)
    ]


def test_domain_pads_and_rounds_large_values_to_thousands() -> None:
    low, high = domain(_series(118000, 120000, 122000), ALL_METRICS["house_price"])

    assert low < 118000
    assert high > 122000
    assert (low, high) == (117000, 123000)


def test_domain_keeps_small_decimal_ranges_tight() -> None:
    low, high = domain(_series(4.8, 5.0, 5.2), ALL_METRICS["cash_rate"])

    assert 4 < low < 4.8
    assert 5.2 < high < 6
    assert (low, high) == pytest.approx((4.7, 5.3))


def test_domain_returns_fixed_bounds_verbatim() -> None:
    descriptor = replace(
        ALL_METRICS["house_price"],
        axis_hints=AxisHints(fixed_min=50, fixed_max=150),
    )
    assert domain(_series(100, 99999), descriptor) == (50, 150)


def test_domain_ignores_a_single_fixed_bound() -> None:
    descriptor = replace(ALL_METRICS["house_price"], axis_hints=AxisHints(fixed_min=0))
    assert domain(_series(10, 20), descriptor) == (9, 21)


def test_domain_of_empty_series_is_zero_to_hundred() -> None:
    assert domain([], ALL_METRICS["house_price"]) == (0, 100)
    fixed = replace(ALL_METRICS["house_price"], axis_hints=AxisHints(fixed_min=5, fixed_max=6))
    assert domain([], fixed) == (0, 100)


def test_domain_defaults_padding_and_respects_zero_padding() -> None:
    no_hints = replace(ALL_METRICS["house_price"], axis_hints=AxisHints())
    no_padding = replace(ALL_METRICS["house_price"], axis_hints=AxisHints(padding_percent=0))

    assert domain(_series(10, 20), no_hints) == (9, 21)
    assert domain(_series(10, 20), no_padding) == (10, 20)


def test_domain_handles_flat_and_negative_series() -> None:
    assert domain(_series(100), ALL_METRICS["house_price"]) == (100, 100)
    assert domain(_series(-5, 5), ALL_METRICS["house_price"]) == (-6, 6)


@pytest.mark.parametrize(
    ("value", "direction", "expected"),
    [
        (0.123, "floor", 0.12),
        (0.121, "ceil", 0.13),
        (4.78, "floor", 4.7),
        (55.5, "ceil", 56),
        (123.4, "floor", 120),
        (123.4, "ceil", 130),
        (117600, "floor", 117000),
        (122400, "ceil", 123000),
        (-117600, "floor", -117000),
        (-0.5, "ceil", -0.5),
    ],
)
def test_round_to_nice_number_uses_magnitude_steps(value, direction, expected) -> None:
    assert round_to_nice_number(value, direction) == pytest.approx(expected)


@pytest.mark.parametrize(
    ("low", "high", "expected"),
    [
        (4.8, 5.2, 6),
        (0, 5, 8),
        (0, 50, 7),
        (100, 200, 6),
        (0, 2000, 5),
        (0, 7000, 6),
        (100000, 150000, 8),
    ],
)
def test_tick_count_follows_range_steps(low, high, expected) -> None:
    assert tick_count(low, high) == expected


def test_tick_values_are_evenly_spaced() -> None:
    assert tick_values(0, 100, 6) == [0, 20, 40, 60, 80, 100]
    assert tick_values(5, 5, 6) == [5]


def test_format_tick_delegates_to_metric_formatter() -> None:
    assert format_tick(120000, ALL_METRICS["house_price"]) == "$120K"
    assert format_tick(5.05, ALL_METRICS["cash_rate"]) == "5.05%"
    assert format_tick(4796, ALL_METRICS["exchange_rate"]) == "$0.4796"
    assert format_tick(10000, ALL_METRICS["jobseekers"]) == "10,000"
