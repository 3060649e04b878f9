from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer

from series_dashboard.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from series_dashboard.io.read import load_raw_records
from series_dashboard.io.write import dump_payload, write_payload, write_points
from series_dashboard.logging import configure_logging
from series_dashboard.metrics import (
    ALL_METRICS,
    ChartType,
    Granularity,
    MetricDescriptor,
    get_metric,
)
from series_dashboard.pipeline.process import process
from series_dashboard.viz.chart import plot_series
from series_dashboard.viz.payload import build_chart_payload

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            return load_config(DEFAULT_CONFIG_PATH)
        return AppConfig()
    return load_config(config_path)


def _resolve_metric(metric: str | None, cfg: AppConfig) -> MetricDescriptor:
    try:
        return get_metric(metric or cfg.chart.active_metric)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _read_records(data: Path | None, cfg: AppConfig) -> list[Any]:
    data_path = data or (Path(cfg.input.data_path) if cfg.input.data_path else None)
    if data_path is None:
        raise typer.BadParameter(
            "Missing --data. Provide a dataset path or set input.data_path in the config."
        )
    if not data_path.exists():
        raise typer.BadParameter(f"Data file not found: {data_path}")
    try:
        return load_raw_records(data_path, fmt=cfg.input.format)
    except (ValueError, json.JSONDecodeError) as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("process")
def process_command(
    data: Path | None = typer.Option(None, resolve_path=True, help="JSON or CSV daily dataset."),
    granularity: Granularity | None = typer.Option(None, help="Time bucketing to apply."),
    metric: str | None = typer.Option(None, help="Metric name, e.g. house_price."),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
    out: Path | None = typer.Option(None, resolve_path=True, help="Write the payload here."),
    table: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Also write the processed points as a table.",
    ),
) -> None:
    """Aggregate a dataset and emit the chart payload as JSON."""
    configure_logging()
    cfg = _load_app_config(config)
    descriptor = _resolve_metric(metric, cfg)
    records = _read_records(data, cfg)
    resolved_granularity = granularity or cfg.chart.granularity

    points = process(records, resolved_granularity, descriptor.key, cfg.aggregation)
    payload = build_chart_payload(
        points,
        descriptor,
        chart_type=cfg.chart.chart_type,
        granularity=resolved_granularity,
    )
    if table is not None:
        write_points(points, table, fmt=cfg.outputs.tables_format)
    if out is None:
        typer.echo(dump_payload(payload))
        return
    write_payload(payload, out)
    typer.echo(f"Processed {len(points)} points. Payload: {out}")


@app.command()
def plot(
    out: Path = typer.Option(..., resolve_path=True, help="Figure output path."),
    data: Path | None = typer.Option(None, resolve_path=True, help="JSON or CSV daily dataset."),
    chart_type: ChartType | None = typer.Option(None, help="line, bar or scatter."),
    granularity: Granularity | None = typer.Option(None, help="Time bucketing to apply."),
    metric: str | None = typer.Option(None, help="Metric name, e.g. house_price."),
    config: Path | None = typer.Option(None, exists=True, readable=True, resolve_path=True),
) -> None:
    """Render the selected metric as a static chart."""
    configure_logging()
    cfg = _load_app_config(config)
    descriptor = _resolve_metric(metric, cfg)
    records = _read_records(data, cfg)

    points = process(
        records,
        granularity or cfg.chart.granularity,
        descriptor.key,
        cfg.aggregation,
    )
    figure_path = plot_series(
        points,
        descriptor,
        out,
        chart_type=chart_type or cfg.chart.chart_type,
        width=cfg.chart.width,
        height=cfg.chart.height,
        min_height=cfg.chart.min_height,
    )
    typer.echo(f"Chart written to: {figure_path}")


@app.command()
def metrics() -> None:
    """List the metrics available for charting."""
    for name, descriptor in ALL_METRICS.items():
        typer.echo(f"{name}\t{descriptor.key}\t{descriptor.label}")


if __name__ == "__main__":
    app()
