"""
Min-max scaling for one metric's target values.

``MinMaxScaler.fit()`` records the min and max of the raw training targets.
For a constant series ``max == min``; the range is then set to ``1.0`` so
normalization yields ``0.0`` everywhere instead of dividing by zero.  That is
the only lossy case: for any non-constant fit, ``denormalize(normalize(v))``
returns ``v`` up to floating-point rounding.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class MinMaxScaler:
    """Immutable per-metric min-max scaler.

    Attributes:
        min_value:   Minimum raw value seen at fit time.
        max_value:   Maximum raw value seen at fit time.
        range_value: ``max_value - min_value``, or ``1.0`` when they are equal.
    """

    min_value: float
    max_value: float
    range_value: float

    @classmethod
    def fit(cls, values: Sequence[float]) -> "MinMaxScaler":
        """Build a scaler from raw values.

        Raises:
            ValueError: If ``values`` is empty.
        """
        if not values:
            raise ValueError("MinMaxScaler.fit() needs at least one value.")
        lo = min(values)
        hi = max(values)
        span = hi - lo
        return cls(min_value=lo, max_value=hi, range_value=span if span != 0 else 1.0)

    def normalize(self, values: Sequence[float]) -> list[float]:
        return [(v - self.min_value) / self.range_value for v in values]

    def denormalize(self, values: Sequence[float]) -> list[float]:
        return [v * self.range_value + self.min_value for v in values]

    def denormalize_one(self, value: float) -> float:
        return value * self.range_value + self.min_value
