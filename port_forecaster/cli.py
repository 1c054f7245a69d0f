"""
Port Metrics Forecaster — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Train / forecast.
  5. Report result to stdout.

Install and run::

    pip install -e .
    port-forecaster --help
    port-forecaster validate-config
    port-forecaster list-metrics
    port-forecaster forecast --metric port_time_savings --months 3
    port-forecaster forecast --csv data/monthly_metrics.csv
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="port-forecaster",
    help="Port network metric forecaster — gradient-boosted trees on monthly history.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from port_forecaster.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from port_forecaster.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_series_or_exit(csv_path: Optional[str]):
    """Load the CSV series, or the demo series when no path is given."""
    from port_forecaster.ingestion.sample_data import demo_series
    from port_forecaster.ingestion.series_csv import parse_series_csv

    if not csv_path:
        return demo_series(), "demo data"
    try:
        return parse_series_csv(Path(csv_path)), csv_path
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] Could not load series:\n{exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Estimators:       {config.model.n_estimators}")
    typer.echo(f"  Learning rate:    {config.model.learning_rate}")
    typer.echo(f"  Max depth:        {config.model.max_depth}")
    typer.echo(f"  Window size:      {config.model.window_size}")
    typer.echo(f"  Months ahead:     {config.forecast.months_ahead}")
    typer.echo(f"  Series CSV:       {config.data.series_csv or '(demo data)'}")
    typer.echo(f"  Log level:        {config.logging.level}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("list-metrics")
def list_metrics() -> None:
    """List the metric identifiers the engine can train."""
    from port_forecaster.taxonomy.metric_taxonomy import METRIC_SPECS

    for metric, spec in METRIC_SPECS.items():
        target = f"target {spec.monthly_target:g}" if spec.monthly_target is not None else "no target"
        typer.echo(f"  {metric.value:<20} {spec.display_name} ({spec.unit}, {target})")


@app.command("forecast")
def forecast(
    metric: Optional[str] = typer.Option(
        None,
        "--metric",
        "-m",
        help="Metric to forecast. Forecasts every metric in the series if omitted.",
    ),
    months: Optional[int] = typer.Option(
        None,
        "--months",
        "-n",
        min=1,
        help="Months ahead. Uses config.forecast.months_ahead if omitted.",
    ),
    csv_path: Optional[str] = typer.Option(
        None,
        "--csv",
        help="Monthly series CSV. Uses config.data.series_csv, then demo data.",
    ),
    std: Optional[float] = typer.Option(
        None,
        "--std",
        min=0.0,
        help="Historical std for the interval. Defaults to each metric's own history.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Train on the monthly series and print forecasts with confidence bounds."""
    from port_forecaster.features.lag_window import MissingMetricValueError
    from port_forecaster.ml.engine import ForecastingEngine
    from port_forecaster.reporting.formatters import (
        format_forecast_table,
        format_training_summary,
    )
    from port_forecaster.taxonomy.metric_taxonomy import (
        Metric,
        UnknownMetricError,
        resolve_metric,
    )

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    series, source = _load_series_or_exit(csv_path or config.data.series_csv)
    if not series:
        typer.echo(f"[ERROR] Series from {source} has no rows.", err=True)
        raise typer.Exit(code=1)

    try:
        if metric:
            targets = [resolve_metric(metric)]
        else:
            targets = [m for m in Metric if m.value in series[0].values]
    except UnknownMetricError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    horizon = months or config.forecast.months_ahead
    engine = ForecastingEngine(config.model, config.forecast)

    typer.echo(f"forecast | source={source} | periods={len(series)} | months={horizon}")
    typer.echo("")

    try:
        results = engine.train_all(series, targets)
    except MissingMetricValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_training_summary(results))
    typer.echo("")

    for m in targets:
        if not results[m.value].trained:
            continue
        points = engine.forecast_with_intervals(m, horizon, std)
        last_period = engine.get_model(m).last_period
        typer.echo(format_forecast_table(m.value, points, last_period=last_period))
        typer.echo("")

    if not any(r.trained for r in results.values()):
        typer.echo("[ERROR] No metric could be trained.", err=True)
        raise typer.Exit(code=1)

    typer.echo("[OK] Forecast complete.")


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
