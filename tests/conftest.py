"""
Shared pytest fixtures for the port metrics forecaster test suite.

Provides:
  - ``demo``: the built-in five-month demo series (chronological).
  - ``make_series``: factory building a single- or multi-metric series.
  - ``engine``: a fresh ``ForecastingEngine`` with default hyperparameters.
"""

from __future__ import annotations

from typing import Callable

import pytest

from port_forecaster.ingestion.sample_data import demo_series
from port_forecaster.ml.engine import ForecastingEngine
from port_forecaster.models.series import TimeSeriesPoint


def build_series(
    values: list[float],
    metric: str = "port_time_savings",
    extra: dict[str, list[float]] | None = None,
) -> list[TimeSeriesPoint]:
    """Build a monthly series starting 2025-01 with one value per period."""
    points = []
    for i, v in enumerate(values):
        row = {metric: v}
        for name, col in (extra or {}).items():
            row[name] = col[i]
        points.append(TimeSeriesPoint(period=f"2025-{i + 1:02d}", values=row))
    return points


@pytest.fixture
def demo() -> list[TimeSeriesPoint]:
    return demo_series()


@pytest.fixture
def make_series() -> Callable[..., list[TimeSeriesPoint]]:
    return build_series


@pytest.fixture
def engine() -> ForecastingEngine:
    return ForecastingEngine()
