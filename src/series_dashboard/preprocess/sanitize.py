from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Iterable

import pandas as pd

from series_dashboard.io.schema import RawRecord
from series_dashboard.metrics import METRIC_FIELDS, MetricField
from series_dashboard.preprocess.dates import DATE_PATTERN, parse_dates

VALIDATION_SAMPLE_SIZE = 5


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _field(record: Mapping[str, Any] | RawRecord, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def validate(records: Any) -> ValidationResult:
    """Probe the leading records for shape; this is a sanity check, not a full scan."""
    if not isinstance(records, Sequence) or isinstance(records, (str, bytes)):
        return ValidationResult(valid=False, errors=["Data must be an array"])
    if len(records) == 0:
        return ValidationResult(valid=False, errors=["Data array is empty"])

    errors: list[str] = []
    for index, item in enumerate(records[:VALIDATION_SAMPLE_SIZE]):
        if not isinstance(item, (Mapping, RawRecord)):
            errors.append(f"Item at index {index} is not an object")
            continue

        date_value = _field(item, "date")
        if not date_value or not isinstance(date_value, str):
            errors.append(f"Item at index {index} missing or invalid 'date' field")

        for name in METRIC_FIELDS:
            if not _is_number(_field(item, name)):
                errors.append(f"Item at index {index} missing or invalid '{name}' field")

        if isinstance(date_value, str) and not DATE_PATTERN.fullmatch(date_value):
            errors.append(
                f"Item at index {index} has invalid date format (expected YYYY-MM-DD)"
            )

    return ValidationResult(valid=not errors, errors=errors)


def clean(records: Iterable[Mapping[str, Any] | RawRecord]) -> list[RawRecord]:
    """Return fresh records with missing numbers set to 0 and a missing date set to ''."""
    cleaned: list[RawRecord] = []
    for record in records:
        metrics = {}
        for name in METRIC_FIELDS:
            value = _field(record, name)
            metrics[name] = 0.0 if value is None else float(value)
        cleaned.append(RawRecord(date=_field(record, "date") or "", **metrics))
    return cleaned


def sort_by_date(records: Iterable[RawRecord]) -> list[RawRecord]:
    """Stable ascending sort; records whose date does not parse keep their order at the end."""
    ordered = list(records)
    if not ordered:
        return []
    parsed = parse_dates(pd.Series([record.date for record in ordered], dtype="string"))
    positions = parsed.sort_values(kind="mergesort", na_position="last").index
    return [ordered[int(position)] for position in positions]


def deduplicate(records: Iterable[RawRecord]) -> list[RawRecord]:
    seen: set[str] = set()
    unique: list[RawRecord] = []
    for record in records:
        if record.date in seen:
            continue
        seen.add(record.date)
        unique.append(record)
    return unique


def extract_metric(records: Iterable[RawRecord], metric_key: MetricField) -> list[float]:
    return [getattr(record, metric_key) for record in records]
