from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

import pandas as pd

from series_dashboard.features.aggregates import ProcessedPoint


def points_to_frame(points: Sequence[ProcessedPoint]) -> pd.DataFrame:
    return pd.DataFrame(
        [asdict(point) for point in points],
        columns=["display_label", "value", "anchor_date"],
    )


def write_points(points: Sequence[ProcessedPoint], path: Path, fmt: str = "csv") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = points_to_frame(points)
    if fmt == "csv":
        frame.to_csv(path, index=False)
        return path
    if fmt == "json":
        frame.to_json(path, orient="records", indent=2)
        return path
    raise ValueError(f"Unsupported table format: {fmt}")


def dump_payload(payload: dict[str, Any]) -> str:
    # Keep build order: sections read top-down and points stay in series order.
    return json.dumps(payload, indent=2)


def write_payload(payload: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_payload(payload) + "\n", encoding="utf-8")
    return path
