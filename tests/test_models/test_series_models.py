"""Tests for TimeSeriesPoint, ForecastPoint, and TrainResult models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from port_forecaster.models.forecast import ForecastPoint, TrainResult
from port_forecaster.models.series import TimeSeriesPoint, validate_series


class TestTimeSeriesPoint:
    def test_valid_construction(self):
        p = TimeSeriesPoint(period=" 2025-05 ", values={"port_time_savings": 20})
        assert p.period == "2025-05"
        assert p.values["port_time_savings"] == 20.0

    def test_empty_period_raises(self):
        with pytest.raises(ValidationError, match="period"):
            TimeSeriesPoint(period="  ", values={})

    def test_non_finite_value_raises(self):
        with pytest.raises(ValidationError, match="finite"):
            TimeSeriesPoint(period="2025-05", values={"total_calls": float("nan")})

    def test_frozen(self):
        p = TimeSeriesPoint(period="2025-05", values={})
        with pytest.raises(ValidationError):
            p.period = "2025-06"

    def test_duplicate_periods_rejected(self):
        series = [
            TimeSeriesPoint(period="2025-05", values={}),
            TimeSeriesPoint(period="2025-05", values={}),
        ]
        with pytest.raises(ValueError, match="Duplicate period"):
            validate_series(series)

    def test_demo_series_has_unique_periods(self, demo):
        validate_series(demo)


class TestForecastPoint:
    def test_valid_construction(self):
        p = ForecastPoint(step=1, prediction=17.0, lower=10.0, upper=24.0)
        assert p.upper - p.lower == 14.0

    def test_lower_above_prediction_raises(self):
        with pytest.raises(ValidationError, match="lower <= prediction <= upper"):
            ForecastPoint(step=1, prediction=5.0, lower=6.0, upper=9.0)

    def test_negative_prediction_raises(self):
        with pytest.raises(ValidationError, match="non-negative"):
            ForecastPoint(step=1, prediction=-1.0, lower=0.0, upper=1.0)

    def test_step_must_be_positive(self):
        with pytest.raises(ValidationError, match="step"):
            ForecastPoint(step=0, prediction=1.0, lower=0.0, upper=2.0)


class TestTrainResult:
    def test_success_requires_sample_count(self):
        with pytest.raises(ValidationError, match="sample_count"):
            TrainResult(metric="total_calls", trained=True)

    def test_failure_requires_reason(self):
        with pytest.raises(ValidationError, match="error_reason"):
            TrainResult(metric="total_calls", trained=False)

    def test_failure_result(self):
        r = TrainResult(metric="total_calls", trained=False, error_reason="too short")
        assert r.sample_count is None
