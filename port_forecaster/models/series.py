"""
Monthly time-series input model.

``TimeSeriesPoint`` is one period (month) of network performance: a period
label plus one numeric value per tracked metric.  A series is an ordered
sequence of points, oldest first, with no duplicate periods.

Points are frozen — the forecasting engine only reads the caller's series and
keeps its own snapshot of the values it trained on.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, field_validator


class TimeSeriesPoint(BaseModel):
    """One chronological period of metric values.

    Attributes:
        period: Period label, e.g. ``"2025-05"`` or ``"May"``.
        values: Metric identifier -> observed value for this period.
    """

    model_config = ConfigDict(frozen=True)

    period: str
    values: dict[str, float]

    @field_validator("period")
    @classmethod
    def validate_period_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("period must not be empty.")
        return v.strip()

    @field_validator("values")
    @classmethod
    def validate_values_finite(cls, v: dict[str, float]) -> dict[str, float]:
        for key, val in v.items():
            if not math.isfinite(val):
                raise ValueError(f"value for '{key}' must be finite, got {val}.")
        return v


def validate_series(series: Sequence[TimeSeriesPoint]) -> None:
    """Check that a series has no duplicate periods.

    Raises:
        ValueError: On the first repeated period label.
    """
    seen: set[str] = set()
    for point in series:
        if point.period in seen:
            raise ValueError(f"Duplicate period in series: '{point.period}'.")
        seen.add(point.period)
