from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from series_dashboard.cli import app


def _write_dataset(tmp_path: Path) -> Path:
    rows = [
        {
            "date": f"2023-{month:02d}-{day:02d}",
            "median_house_price_syd": 100000 + month * 1000,
            "jobseeker_recipients": 10000 + day,
            "rba_cash_rate": 4.0 + month / 10,
            "aud_usd_exchange": 6500 + day,
        }
        for month in (1, 2, 3)
        for day in (1, 10, 20)
    ]
    path = tmp_path / "series.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


def test_cli_help() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "process" in result.stdout
    assert "plot" in result.stdout
    assert "metrics" in result.stdout


def test_process_command_prints_payload(tmp_path: Path) -> None:
    data_path = _write_dataset(tmp_path)

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["process", "--data", str(data_path), "--granularity", "monthly", "--metric", "cash_rate"],
    )

    assert result.exit_code == 0, result.stdout
    payload = json.loads(result.stdout)
    assert payload["granularity"] == "monthly"
    assert [point["display_label"] for point in payload["points"]] == [
        "Jan 2023",
        "Feb 2023",
        "Mar 2023",
    ]
    assert payload["metric"]["key"] == "rba_cash_rate"


def test_process_command_writes_payload_and_table(tmp_path: Path) -> None:
    data_path = _write_dataset(tmp_path)
    out_path = tmp_path / "out" / "payload.json"
    table_path = tmp_path / "out" / "points.csv"

    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "process",
            "--data",
            str(data_path),
            "--granularity",
            "weekly",
            "--out",
            str(out_path),
            "--table",
            str(table_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "Processed 9 points" in result.stdout
    assert json.loads(out_path.read_text(encoding="utf-8"))["granularity"] == "weekly"
    assert table_path.read_text(encoding="utf-8").startswith("display_label,value,anchor_date")


def test_process_command_uses_config_data_path(tmp_path: Path) -> None:
    _write_dataset(tmp_path)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "chart:\n  granularity: fortnightly\ninput:\n  data_path: series.json\n",
        encoding="utf-8",
    )

    runner = CliRunner()
    result = runner.invoke(app, ["process", "--config", str(config_path)])

    assert result.exit_code == 0, result.stdout
    assert json.loads(result.stdout)["granularity"] == "fortnightly"


def test_process_command_rejects_unknown_metric_and_missing_data(tmp_path: Path) -> None:
    data_path = _write_dataset(tmp_path)
    runner = CliRunner()

    unknown_metric = runner.invoke(
        app, ["process", "--data", str(data_path), "--metric", "gold_price"]
    )
    missing_data = runner.invoke(app, ["process", "--data", str(tmp_path / "absent.json")])

    assert unknown_metric.exit_code != 0
    assert missing_data.exit_code != 0


def test_plot_command_writes_figure(tmp_path: Path) -> None:
    data_path = _write_dataset(tmp_path)
    out_path = tmp_path / "figures" / "chart.png"

    runner = CliRunner()
    result = runner.invoke(
        app,
        ["plot", "--data", str(data_path), "--chart-type", "scatter", "--out", str(out_path)],
    )

    assert result.exit_code == 0, result.stdout
    assert out_path.exists()


def test_metrics_command_lists_registry() -> None:
    runner = CliRunner()
    result = runner.invoke(app, ["metrics"])

    assert result.exit_code == 0
    assert "exchange_rate\taud_usd_exchange" in result.stdout
