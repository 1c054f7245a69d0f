"""CLI smoke tests using Typer's test runner."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from port_forecaster.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """Drop handlers bound to the runner's captured stdout after each test."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def quiet_config(tmp_path: Path) -> str:
    path = tmp_path / "default.toml"
    path.write_text("[logging]\nlevel = \"WARNING\"\n", encoding="utf-8")
    return str(path)


def test_validate_config(quiet_config):
    result = runner.invoke(app, ["validate-config", "--config", quiet_config])
    assert result.exit_code == 0
    assert "[OK] Config valid." in result.output


def test_list_metrics():
    result = runner.invoke(app, ["list-metrics"])
    assert result.exit_code == 0
    assert "port_time_savings" in result.output
    assert "total_calls" in result.output


def test_forecast_demo_single_metric(quiet_config):
    result = runner.invoke(
        app,
        ["forecast", "--metric", "port_time_savings", "--months", "2", "--config", quiet_config],
    )
    assert result.exit_code == 0, result.output
    assert "source=demo data" in result.output
    assert "Port Time Savings" in result.output
    assert "+2" in result.output
    assert "[OK] Forecast complete." in result.output


def test_forecast_all_metrics_from_csv(tmp_path, quiet_config):
    csv_path = tmp_path / "series.csv"
    csv_path.write_text(
        "period,arrival_accuracy,total_calls\n"
        "2025-01,70,30\n2025-02,72,31\n2025-03,75,33\n2025-04,71,32\n2025-05,78,35\n",
        encoding="utf-8",
    )
    result = runner.invoke(app, ["forecast", "--csv", str(csv_path), "--config", quiet_config])
    assert result.exit_code == 0, result.output
    assert "Arrival Accuracy" in result.output
    assert "Total Calls" in result.output
    assert "Bunker Savings" not in result.output


def test_forecast_unknown_metric_exits_1(quiet_config):
    result = runner.invoke(app, ["forecast", "--metric", "berth_occupancy", "--config", quiet_config])
    assert result.exit_code == 1
    assert "Unknown metric" in result.output


def test_forecast_short_series_exits_1(tmp_path, quiet_config):
    csv_path = tmp_path / "short.csv"
    csv_path.write_text("period,total_calls\n2025-01,30\n2025-02,31\n2025-03,33\n", encoding="utf-8")
    result = runner.invoke(app, ["forecast", "--csv", str(csv_path), "--config", quiet_config])
    assert result.exit_code == 1
    assert "FAILED" in result.output
    assert "No metric could be trained" in result.output


def test_forecast_missing_csv_exits_1(tmp_path, quiet_config):
    result = runner.invoke(
        app, ["forecast", "--csv", str(tmp_path / "absent.csv"), "--config", quiet_config]
    )
    assert result.exit_code == 1
    assert "Could not load series" in result.output


def test_forecast_metric_missing_from_csv_exits_1(tmp_path, quiet_config):
    csv_path = tmp_path / "series.csv"
    csv_path.write_text(
        "period,arrival_accuracy\n2025-01,70\n2025-02,72\n2025-03,75\n2025-04,71\n",
        encoding="utf-8",
    )
    result = runner.invoke(
        app,
        ["forecast", "--metric", "total_calls", "--csv", str(csv_path), "--config", quiet_config],
    )
    assert result.exit_code == 1
    assert "has no value for metric 'total_calls'" in result.output
    assert "Unknown metric" not in result.output


def test_forecast_header_names_last_observed_period(quiet_config):
    result = runner.invoke(
        app, ["forecast", "--metric", "total_calls", "--months", "1", "--config", quiet_config]
    )
    assert result.exit_code == 0, result.output
    assert "-- after 2025-09" in result.output
