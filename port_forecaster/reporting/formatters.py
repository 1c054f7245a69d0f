"""
ASCII terminal formatters for CLI forecast output.

All formatters accept already-computed results and return plain multi-line
strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Target marker
-------------
Metrics with a monthly target (see ``METRIC_SPECS``) get a trailing column
showing whether each prediction meets it::

  +1   17.42   (10.37 - 24.47)   below 18.00
"""

from __future__ import annotations

from collections.abc import Sequence

from port_forecaster.models.forecast import ForecastPoint, TrainResult
from port_forecaster.taxonomy.metric_taxonomy import METRIC_SPECS, resolve_metric


def _fmt(value: float | None, decimals: int = 2) -> str:
    return "-" if value is None else f"{value:.{decimals}f}"


def format_forecast_table(
    metric: str,
    points: Sequence[ForecastPoint],
    last_period: str | None = None,
) -> str:
    """Format one metric's forecast with confidence bounds.

    Args:
        metric:      Metric identifier.
        points:      Forecast points, nearest month first.
        last_period: Label of the last observed period (header only).

    Returns:
        Multi-line table; a single "(no forecast)" line when ``points`` is empty.
    """
    spec = METRIC_SPECS[resolve_metric(metric)]
    header = f"  {spec.display_name} ({spec.unit})"
    if last_period:
        header += f"  -- after {last_period}"

    if not points:
        return f"{header}\n    (no forecast)"

    lines = [header, f"    {'step':<5} {'forecast':>9}   {'interval':<19}"]
    for p in points:
        interval = f"({_fmt(p.lower)} - {_fmt(p.upper)})"
        row = f"    +{p.step:<4} {_fmt(p.prediction):>9}   {interval:<19}"
        if spec.monthly_target is not None:
            status = "meets" if p.prediction >= spec.monthly_target else "below"
            row += f" {status} {_fmt(spec.monthly_target)}"
        lines.append(row.rstrip())
    return "\n".join(lines)


def format_training_summary(results: dict[str, TrainResult]) -> str:
    """Format a per-metric training outcome table."""
    lines = [f"  {'metric':<20} {'status':<8} {'samples':>7} {'mae':>9} {'rmse':>9}"]
    for metric, res in results.items():
        if res.trained:
            lines.append(
                f"  {metric:<20} {'ok':<8} {res.sample_count:>7} "
                f"{_fmt(res.train_mae, 4):>9} {_fmt(res.train_rmse, 4):>9}"
            )
        else:
            lines.append(f"  {metric:<20} {'FAILED':<8} {res.error_reason}")
    return "\n".join(lines)
