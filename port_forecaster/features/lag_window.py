"""
Lag-window features for one metric of a monthly series.

Purpose
-------
Turns an ordered series into supervised ``(feature_vector, target)`` pairs for
training, and turns the tail of a (possibly synthetic) series into a single
feature vector for forecasting.  Both paths share ``_window_features()`` so
training and inference vectors are built identically.

Feature vector layout (window size ``W``, length ``W + 3``)
-----------------------------------------------------------
====================  =====================================================
position              value
====================  =====================================================
``0 .. W-1``          lag values, most recent first
``W``                 mean of the ``W`` lag values
``W + 1``             trend: most recent lag minus the one before it
                      (``0.0`` when fewer than two values are available)
``W + 2``             integer time index of the period being predicted
====================  =====================================================

With the default ``W = 2`` the vector for index ``i`` is::

    [s[i-1], s[i-2], (s[i-1] + s[i-2]) / 2, s[i-1] - s[i-2], i]

Leakage notes
-------------
- Training rows for index ``i`` read only ``s[i-W] .. s[i-1]``; the target
  ``s[i]`` is never part of its own feature vector.
- The first training row is at index ``W``, so a series needs ``W + 2`` points
  to yield the two rows a split needs.
"""

from __future__ import annotations

from collections.abc import Sequence

from port_forecaster.models.series import TimeSeriesPoint
from port_forecaster.taxonomy.metric_taxonomy import Metric

WINDOW_SIZE = 2
MIN_TRAINING_ROWS = 2


class InsufficientDataError(ValueError):
    """Raised when a series is too short to build the required feature rows."""


class MissingMetricValueError(ValueError):
    """Raised when a point of the series carries no value for a known metric."""

    def __init__(self, metric: str, period: str) -> None:
        self.metric = metric
        self.period = period
        super().__init__(f"Period {period!r} has no value for metric {metric!r}.")


def min_series_length(window_size: int = WINDOW_SIZE) -> int:
    """Shortest series that yields ``MIN_TRAINING_ROWS`` training rows."""
    return window_size + MIN_TRAINING_ROWS


def metric_values(series: Sequence[TimeSeriesPoint], metric: Metric | str) -> list[float]:
    """Extract one metric column from a series, oldest first.

    Raises:
        MissingMetricValueError: If any point has no value for ``metric``.
    """
    key = str(metric)
    values: list[float] = []
    for point in series:
        if key not in point.values:
            raise MissingMetricValueError(key, point.period)
        values.append(float(point.values[key]))
    return values


def build_training_set(
    series: Sequence[TimeSeriesPoint],
    metric: Metric | str,
    window_size: int = WINDOW_SIZE,
) -> tuple[list[list[float]], list[float]]:
    """Slide the lag window across the series and collect training pairs.

    Args:
        series:      Chronological points (oldest first).
        metric:      Metric whose column is both feature source and target.
        window_size: Number of lag values per vector.

    Returns:
        ``(features, targets)`` with one row per index ``W .. len(series)-1``.

    Raises:
        InsufficientDataError: Fewer than ``MIN_TRAINING_ROWS`` rows result.
        MissingMetricValueError: A point lacks the metric column.
    """
    values = metric_values(series, metric)
    return build_training_rows(values, window_size)


def build_training_rows(
    values: Sequence[float],
    window_size: int = WINDOW_SIZE,
) -> tuple[list[list[float]], list[float]]:
    """Same as ``build_training_set()`` for a bare list of values."""
    features: list[list[float]] = []
    targets: list[float] = []
    for i in range(window_size, len(values)):
        window = values[i - window_size:i]
        features.append(_window_features(window, time_index=i))
        targets.append(values[i])

    if len(features) < MIN_TRAINING_ROWS:
        raise InsufficientDataError(
            f"Need at least {min_series_length(window_size)} points "
            f"(window={window_size}) to train; got {len(values)}."
        )
    return features, targets


def build_forecast_feature(
    tail: Sequence[float],
    base_length: int,
    step_offset: int,
    window_size: int = WINDOW_SIZE,
) -> list[float]:
    """Build the feature vector for one forecast step.

    Args:
        tail:        Most recent values of the working series, oldest first.
                     Only the last ``window_size`` are used.
        base_length: Length of the observed series the model was trained on.
        step_offset: Steps already forecast (0 for the first future month).
        window_size: Number of lag values per vector.

    Returns:
        A feature vector whose time index is ``base_length + step_offset``.

    Raises:
        InsufficientDataError: ``tail`` holds fewer than ``window_size`` values.
    """
    if len(tail) < window_size:
        raise InsufficientDataError(
            f"Forecast window needs {window_size} values; got {len(tail)}."
        )
    window = list(tail[-window_size:])
    return _window_features(window, time_index=base_length + step_offset)


# ── Internal helpers ───────────────────────────────────────────────────────────


def _window_features(window: Sequence[float], time_index: int) -> list[float]:
    """Build ``[lags (newest first)..., mean, trend, time_index]``."""
    lags = list(reversed(window))
    mean = sum(window) / len(window)
    trend = window[-1] - window[-2] if len(window) >= 2 else 0.0
    return [*lags, mean, trend, float(time_index)]
