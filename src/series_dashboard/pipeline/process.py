from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Literal

from series_dashboard.config import AggregationConfig
from series_dashboard.features.aggregates import ProcessedPoint, aggregate
from series_dashboard.metrics import Granularity, MetricField
from series_dashboard.preprocess.sanitize import clean, deduplicate, sort_by_date, validate

LOGGER = logging.getLogger(__name__)

EmptyReason = Literal["empty_input", "validation_failed", "unexpected_error"]


@dataclass(frozen=True)
class PipelineResult:
    points: list[ProcessedPoint]
    reason: EmptyReason | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.reason is None


def resolve_granularity(granularity: Granularity | str | None) -> Granularity:
    if isinstance(granularity, Granularity):
        return granularity
    if isinstance(granularity, str):
        normalized = granularity.strip().lower()
        for candidate in Granularity:
            if candidate.value == normalized:
                return candidate
    LOGGER.warning("Unknown time grouping %r; falling back to daily", granularity)
    return Granularity.daily


def run_pipeline(
    raw_records: Any,
    granularity: Granularity | str | None,
    metric_key: MetricField,
    config: AggregationConfig | None = None,
) -> PipelineResult:
    """Sanitize and aggregate raw records; failures come back as an empty result, never raised."""
    if raw_records is None or (hasattr(raw_records, "__len__") and len(raw_records) == 0):
        return PipelineResult(points=[], reason="empty_input")

    aggregation = config or AggregationConfig()
    try:
        validation = validate(raw_records)
        if not validation.valid:
            LOGGER.error("Data validation failed: %s", "; ".join(validation.errors))
            return PipelineResult(
                points=[],
                reason="validation_failed",
                errors=list(validation.errors),
            )

        records = sort_by_date(deduplicate(clean(raw_records)))
        points = aggregate(
            records,
            resolve_granularity(granularity),
            metric_key,
            week_starts_on=aggregation.week_starts_on,
            fortnight_days=aggregation.fortnight_days,
        )
    except Exception as exc:
        LOGGER.exception("Error processing chart data")
        return PipelineResult(points=[], reason="unexpected_error", errors=[str(exc)])

    LOGGER.debug(
        "Processed %d raw records into %d %s points",
        len(raw_records),
        len(points),
        getattr(granularity, "value", granularity),
    )
    return PipelineResult(points=points)


def process(
    raw_records: Any,
    granularity: Granularity | str | None,
    metric_key: MetricField,
    config: AggregationConfig | None = None,
) -> list[ProcessedPoint]:
    return run_pipeline(raw_records, granularity, metric_key, config).points
