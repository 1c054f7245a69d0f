"""
CSV import parser for monthly metric series.

Format — comma delimited, with a header row.
Required columns:
  period

Metric columns (at least one):
  port_time_savings, arrival_accuracy, bunker_savings,
  carbon_abatement, total_calls

Rows must be in chronological order (oldest first); periods must be unique.
Unrecognised columns are ignored with a warning.  Empty metric cells are
rejected: the engine needs a value for every period of a trained metric.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from pydantic import ValidationError

from port_forecaster.models.series import TimeSeriesPoint, validate_series
from port_forecaster.taxonomy.metric_taxonomy import Metric

logger = logging.getLogger(__name__)

REQUIRED_CSV_COLUMNS = frozenset({"period"})
METRIC_COLUMNS = frozenset(m.value for m in Metric)


def parse_series_csv(path: Path) -> list[TimeSeriesPoint]:
    """Parse a CSV file of monthly metrics into validated points.

    All rows are validated before any are returned. If **any** row fails,
    a single :class:`ValueError` is raised listing the first 10 failures.

    Args:
        path: Path to the CSV file (must exist).

    Returns:
        Chronological list of :class:`TimeSeriesPoint`.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: Missing columns, bad values, or duplicate periods.
    """
    if not path.exists():
        raise FileNotFoundError(f"Series CSV file not found: {path}")

    with open(path, encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            raise ValueError(f"CSV file is empty or has no header row: {path}")

        actual_cols = {c.strip() for c in reader.fieldnames}
        missing = REQUIRED_CSV_COLUMNS - actual_cols
        if missing:
            raise ValueError(
                f"CSV missing required columns: {sorted(missing)}\n"
                f"Found columns: {sorted(actual_cols)}"
            )

        metric_cols = sorted(actual_cols & METRIC_COLUMNS)
        if not metric_cols:
            raise ValueError(
                f"CSV has no metric columns. Expected any of: {sorted(METRIC_COLUMNS)}"
            )

        ignored = actual_cols - METRIC_COLUMNS - REQUIRED_CSV_COLUMNS
        if ignored:
            logger.warning("Ignoring unrecognised CSV columns: %s", sorted(ignored))

        rows = [{(k or "").strip(): v for k, v in row.items()} for row in reader]

    if not rows:
        logger.warning("Series CSV is empty (header only): %s", path)
        return []

    points: list[TimeSeriesPoint] = []
    errors: list[tuple[int, str]] = []

    for i, row in enumerate(rows):
        line_no = i + 2  # 1-based, skip header row
        try:
            points.append(_row_to_point(row, metric_cols))
        except (ValueError, ValidationError) as exc:
            errors.append((line_no, str(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Row {ln}: {msg}" for ln, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ValueError(
            f"{len(errors)} row(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    validate_series(points)

    logger.info("Parsed %d periods (%d metrics) from %s", len(points), len(metric_cols), path.name)
    return points


# ── Private helpers ────────────────────────────────────────────────────────────

def _row_to_point(row: dict[str, str], metric_cols: list[str]) -> TimeSeriesPoint:
    period = (row.get("period") or "").strip()
    if not period:
        raise ValueError("Required field 'period' is empty.")

    values: dict[str, float] = {}
    for col in metric_cols:
        raw = (row.get(col) or "").strip()
        if not raw:
            raise ValueError(f"Field '{col}' is empty.")
        try:
            values[col] = float(raw)
        except ValueError:
            raise ValueError(f"Field '{col}' is not a number: {raw!r}.") from None

    return TimeSeriesPoint(period=period, values=values)
