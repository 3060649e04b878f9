from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from series_dashboard.metrics import ALL_METRICS, DEFAULT_METRIC, ChartType, Granularity


class ChartConfig(BaseModel):
    active_metric: str = DEFAULT_METRIC
    chart_type: ChartType = ChartType.line
    granularity: Granularity = Granularity.daily
    width: int = Field(default=1000, ge=1)
    height: int = Field(default=500, ge=1)
    min_height: int = Field(default=300, ge=1)

    @field_validator("active_metric")
    @classmethod
    def known_metric(cls, value: str) -> str:
        if value not in ALL_METRICS:
            choices = ", ".join(ALL_METRICS)
            raise ValueError(f"Invalid active_metric {value!r}. Must be one of: {choices}")
        return value


class AggregationConfig(BaseModel):
    # Monday = 0, matching datetime.date.weekday().
    week_starts_on: int = Field(default=0, ge=0, le=6)
    fortnight_days: int = Field(default=14, ge=1)


class InputConfig(BaseModel):
    data_path: str | None = None
    format: Literal["json", "csv"] | None = None


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "json"] = "csv"
    figures_format: str = "png"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    chart: ChartConfig = Field(default_factory=ChartConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _resolve_optional_path(path_value: str | None, base_dir: Path) -> str | None:
    if not path_value:
        return None
    candidate = Path(path_value)
    if candidate.is_absolute():
        return str(candidate)
    return str((base_dir / candidate).resolve())


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    base_dir = path.resolve().parent

    config.input.data_path = os.getenv("SERIES_DASHBOARD_DATA_PATH") or _resolve_optional_path(
        config.input.data_path,
        base_dir,
    )
    return config
