"""
Point-error metrics for comparing predictions with observed values.

MAE   — "on average we're off by X units"; all errors weigh the same.
RMSE  — squares errors before averaging, so occasional large misses show up
        as RMSE > MAE.
MSE   — RMSE before the square root; used to check that boosting rounds never
        worsen the training fit.

All functions return ``None`` for empty input rather than raising.
"""

from __future__ import annotations

import math
from collections.abc import Sequence


def _check_lengths(actual: Sequence[float], predicted: Sequence[float]) -> None:
    if len(actual) != len(predicted):
        raise ValueError(
            f"actual and predicted differ in length: {len(actual)} vs {len(predicted)}."
        )


def mean_squared_error(
    actual: Sequence[float], predicted: Sequence[float]
) -> float | None:
    _check_lengths(actual, predicted)
    if not actual:
        return None
    return sum((a - p) * (a - p) for a, p in zip(actual, predicted)) / len(actual)


def mean_absolute_error(
    actual: Sequence[float], predicted: Sequence[float]
) -> float | None:
    _check_lengths(actual, predicted)
    if not actual:
        return None
    return sum(abs(a - p) for a, p in zip(actual, predicted)) / len(actual)


def root_mean_squared_error(
    actual: Sequence[float], predicted: Sequence[float]
) -> float | None:
    mse = mean_squared_error(actual, predicted)
    return None if mse is None else math.sqrt(mse)
