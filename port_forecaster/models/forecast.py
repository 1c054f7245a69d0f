"""
Forecast and training output models.

``ForecastPoint`` is one future period's prediction with its confidence
bounds.  ``TrainResult`` reports the outcome of one ``train_model()`` call:
either a success with the number of windowed samples, or a failure with the
reason the metric could not be trained.

Both models are frozen — they are handed to presentation code as-is.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ForecastPoint(BaseModel):
    """Point forecast with confidence interval for one future month.

    Attributes:
        step: 1-based months ahead of the last observed period.
        prediction: Central estimate, never negative.
        lower: Lower confidence bound, clamped at zero.
        upper: Upper confidence bound.
    """

    model_config = ConfigDict(frozen=True)

    step: int
    prediction: float
    lower: float
    upper: float

    @field_validator("step")
    @classmethod
    def validate_step_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"step must be >= 1, got {v}.")
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "ForecastPoint":
        if self.prediction < 0:
            raise ValueError("prediction must be non-negative.")
        if self.lower < 0:
            raise ValueError("lower must be non-negative.")
        if not self.lower <= self.prediction <= self.upper:
            raise ValueError(
                f"Bounds must satisfy lower <= prediction <= upper; got "
                f"{self.lower} / {self.prediction} / {self.upper}."
            )
        return self


class TrainResult(BaseModel):
    """Outcome of training one metric.

    Attributes:
        metric: Metric identifier.
        trained: True if a model is now recorded for the metric.
        sample_count: Windowed training samples used (success only).
        error_reason: Why training failed (failure only).
        train_mae: In-sample mean absolute error in the metric's units.
        train_rmse: In-sample root mean squared error in the metric's units.
    """

    model_config = ConfigDict(frozen=True)

    metric: str
    trained: bool
    sample_count: Optional[int] = None
    error_reason: Optional[str] = None
    train_mae: Optional[float] = None
    train_rmse: Optional[float] = None

    @model_validator(mode="after")
    def validate_outcome(self) -> "TrainResult":
        if self.trained and self.sample_count is None:
            raise ValueError("sample_count is required when trained=True.")
        if not self.trained and not self.error_reason:
            raise ValueError("error_reason is required when trained=False.")
        return self
