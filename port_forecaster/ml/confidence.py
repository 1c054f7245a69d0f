"""
Confidence bounds for multi-step forecasts.

Each forecast step gets a symmetric band of ``z * historical_std`` around the
prediction, with the lower edge clamped at zero::

    lower = max(0, prediction - z * historical_std)
    upper = prediction + z * historical_std

The band is applied to every step independently; it does not widen with the
horizon.  ``historical_std`` is supplied by the caller.  ``historical_std()``
is a helper for callers that want the population standard deviation of the
metric's own history.

Uncertainty note
----------------
These bands are HEURISTIC.  They do not come from the ensemble's residuals,
quantile trees, or any compounding of uncertainty across steps.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from port_forecaster.models.forecast import ForecastPoint

DEFAULT_Z = 1.96  # two-sided 95% under a normal approximation


def confidence_interval(
    predictions: Sequence[float],
    historical_std: float,
    z: float = DEFAULT_Z,
) -> list[ForecastPoint]:
    """Wrap predictions in ``ForecastPoint`` objects with confidence bounds.

    Args:
        predictions:    Non-negative predictions, nearest month first.
        historical_std: Standard deviation of the metric's history (>= 0).
        z:              Band half-width in standard deviations.

    Returns:
        One ``ForecastPoint`` per prediction, ``step`` numbered from 1.

    Raises:
        ValueError: If ``historical_std`` or ``z`` is negative.
    """
    if historical_std < 0:
        raise ValueError(f"historical_std must be >= 0, got {historical_std}.")
    if z < 0:
        raise ValueError(f"z must be >= 0, got {z}.")

    half_width = z * historical_std
    points: list[ForecastPoint] = []
    for step, pred in enumerate(predictions, start=1):
        points.append(
            ForecastPoint(
                step=step,
                prediction=pred,
                lower=max(0.0, pred - half_width),
                upper=pred + half_width,
            )
        )
    return points


def historical_std(values: Sequence[float]) -> float:
    """Population standard deviation; ``0.0`` for fewer than two values."""
    if len(values) < 2:
        return 0.0
    mu = sum(values) / len(values)
    return math.sqrt(sum((v - mu) ** 2 for v in values) / len(values))
