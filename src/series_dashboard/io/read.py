from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

SUPPORTED_SUFFIXES = (".json", ".csv")


def _frame_to_records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    # NaN cells become None so the sanitizer's missing-value defaults apply.
    cleaned = frame.astype(object).where(frame.notna(), None)
    return cleaned.to_dict(orient="records")


def load_raw_records(path: Path, fmt: str | None = None) -> list[Any]:
    """Load a raw daily dataset without validating it; the pipeline owns validation."""
    suffix = f".{fmt}" if fmt else path.suffix.lower()
    if suffix == ".json":
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            return payload["data"]
        if isinstance(payload, list):
            return payload
        raise ValueError(f"Expected a JSON array of records in {path}")
    if suffix == ".csv":
        # Keep dates as text; the sanitizer checks the YYYY-MM-DD shape itself.
        frame = pd.read_csv(path, encoding="utf-8-sig", dtype={"date": "string"})
        return _frame_to_records(frame)
    raise ValueError(f"Unsupported data file type: {suffix}")
