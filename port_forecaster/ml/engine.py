"""
Per-metric forecasting engine.

Lifecycle
---------
Each metric is either *untrained* or *trained*.  ``train_model()`` moves a
metric to trained (or replaces its model); there is no partial state.  A
trained metric is recorded as one ``TrainedMetric`` holding the ensemble, its
scaler, and a snapshot of the values it was trained on, written with a single
dict assignment.

Each metric extrapolates from its own snapshot, so training metric B never
changes the forecasts of an earlier-trained metric A.

Training flow
-------------
1. Resolve the metric (``UnknownMetricError`` for unmapped identifiers).
2. Build ``(features, targets)`` with ``build_training_rows()``.
   ``InsufficientDataError`` becomes a failed ``TrainResult``; any model
   already recorded for the metric is kept.
3. Fit ``MinMaxScaler`` on the raw targets and normalize them.
4. Fit ``GradientBoostingEnsemble`` on ``(features, normalized targets)``.
5. Record ``TrainedMetric``.

Forecast flow
-------------
``forecast()`` is a fold over ``forecast_step()``::

    state_0 = WindowState(tail=last W observed values, base_length=N, step=0)
    state_k, y_k = forecast_step(state_{k-1}, model)

Each step builds one feature vector from the window, predicts the normalized
value, denormalizes it, clamps it at zero (no metric here can be negative),
and slides the window forward with the prediction appended.  Only the
target metric's column feeds the features, so the window tracks that column
alone; other metrics are not forecast jointly.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from port_forecaster.config import ForecastConfig, ModelConfig
from port_forecaster.features.lag_window import (
    InsufficientDataError,
    build_forecast_feature,
    build_training_rows,
    metric_values,
)
from port_forecaster.ml.boosting import GradientBoostingEnsemble
from port_forecaster.ml.confidence import confidence_interval, historical_std
from port_forecaster.ml.fit_metrics import mean_absolute_error, root_mean_squared_error
from port_forecaster.ml.scaler import MinMaxScaler
from port_forecaster.models.forecast import ForecastPoint, TrainResult
from port_forecaster.models.series import TimeSeriesPoint
from port_forecaster.taxonomy.metric_taxonomy import Metric, resolve_metric

logger = logging.getLogger(__name__)


class ModelNotTrainedError(RuntimeError):
    """Raised when forecasting a metric that has no trained model."""

    def __init__(self, metric: str) -> None:
        self.metric = metric
        super().__init__(
            f"No trained model for metric '{metric}'. Call train_model() first."
        )


@dataclass(frozen=True)
class TrainedMetric:
    """Everything needed to forecast one metric.

    Attributes:
        ensemble:    Fitted ensemble on normalized targets.
        scaler:      Scaler fitted on the raw targets.
        values:      Snapshot of the observed metric values, oldest first.
        periods:     Period labels matching ``values``.
        window_size: Lag window the ensemble was trained with.
    """

    ensemble: GradientBoostingEnsemble
    scaler: MinMaxScaler
    values: tuple[float, ...]
    periods: tuple[str, ...]
    window_size: int

    @property
    def last_period(self) -> str:
        """Label of the newest observed period; forecasts start after it."""
        return self.periods[-1]


@dataclass(frozen=True)
class WindowState:
    """Immutable forecasting window threaded through ``forecast_step()``.

    Attributes:
        tail:        Last ``window_size`` values, oldest first.
        base_length: Number of observed periods in the training snapshot.
        step:        Steps already forecast.
    """

    tail: tuple[float, ...]
    base_length: int
    step: int = 0


def initial_window(model: TrainedMetric) -> WindowState:
    return WindowState(
        tail=model.values[-model.window_size:],
        base_length=len(model.values),
        step=0,
    )


def forecast_step(state: WindowState, model: TrainedMetric) -> tuple[WindowState, float]:
    """Forecast one month ahead and return the advanced window.

    Returns:
        ``(next_state, prediction)`` where ``prediction >= 0`` is in the
        metric's original units.
    """
    fv = build_forecast_feature(
        state.tail,
        base_length=state.base_length,
        step_offset=state.step,
        window_size=model.window_size,
    )
    normalized = model.ensemble.predict_one(fv)
    prediction = max(0.0, model.scaler.denormalize_one(normalized))
    next_state = WindowState(
        tail=(*state.tail[1:], prediction),
        base_length=state.base_length,
        step=state.step + 1,
    )
    return next_state, prediction


class ForecastingEngine:
    """Trains one boosted-tree model per metric and forecasts it forward.

    Args:
        model_config:    Ensemble hyperparameters and window size.
        forecast_config: Default z-score for confidence bounds.
    """

    def __init__(
        self,
        model_config: Optional[ModelConfig] = None,
        forecast_config: Optional[ForecastConfig] = None,
    ) -> None:
        self.model_config = model_config or ModelConfig()
        self.forecast_config = forecast_config or ForecastConfig()
        self._models: dict[Metric, TrainedMetric] = {}

    # ── State inspection ──────────────────────────────────────────────────────

    def is_trained(self, metric: Metric | str) -> bool:
        return resolve_metric(metric) in self._models

    def trained_metrics(self) -> list[Metric]:
        return sorted(self._models)

    def get_model(self, metric: Metric | str) -> TrainedMetric:
        """Return the recorded model for ``metric``.

        Raises:
            UnknownMetricError:   ``metric`` is not a known identifier.
            ModelNotTrainedError: ``metric`` has not been trained.
        """
        key = resolve_metric(metric)
        model = self._models.get(key)
        if model is None:
            raise ModelNotTrainedError(key.value)
        return model

    # ── Training ──────────────────────────────────────────────────────────────

    def train_model(
        self,
        series: Sequence[TimeSeriesPoint],
        metric: Metric | str,
    ) -> TrainResult:
        """Train (or retrain) the model for one metric.

        Args:
            series: Chronological points carrying a value for ``metric``.
            metric: Metric identifier.

        Returns:
            ``TrainResult`` with ``trained=True`` and the sample count, or
            ``trained=False`` and the reason when the series is too short.

        Raises:
            UnknownMetricError:      ``metric`` has no column mapping.
            MissingMetricValueError: A point lacks the metric's value.
        """
        key = resolve_metric(metric)
        cfg = self.model_config

        values = metric_values(series, key)
        try:
            features, targets = build_training_rows(values, cfg.window_size)
        except InsufficientDataError as exc:
            logger.warning("Training skipped  metric=%s: %s", key.value, exc)
            return TrainResult(metric=key.value, trained=False, error_reason=str(exc))

        scaler = MinMaxScaler.fit(targets)
        ensemble = GradientBoostingEnsemble(
            n_estimators=cfg.n_estimators,
            learning_rate=cfg.learning_rate,
            max_depth=cfg.max_depth,
        ).fit(features, scaler.normalize(targets))

        fitted = scaler.denormalize(ensemble.predict(features))
        mae = mean_absolute_error(targets, fitted)
        rmse = root_mean_squared_error(targets, fitted)

        self._models[key] = TrainedMetric(
            ensemble=ensemble,
            scaler=scaler,
            values=tuple(values),
            periods=tuple(p.period for p in series),
            window_size=cfg.window_size,
        )

        logger.info(
            "Trained metric=%s  samples=%d  trees=%d  mae=%.4f  rmse=%.4f",
            key.value, len(targets), len(ensemble.trees), mae, rmse,
        )
        return TrainResult(
            metric=key.value,
            trained=True,
            sample_count=len(targets),
            train_mae=mae,
            train_rmse=rmse,
        )

    def train_all(
        self,
        series: Sequence[TimeSeriesPoint],
        metrics: Optional[Iterable[Metric | str]] = None,
    ) -> dict[str, TrainResult]:
        """Train every listed metric (default: every catalog metric)."""
        targets = [resolve_metric(m) for m in metrics] if metrics is not None else list(Metric)
        return {m.value: self.train_model(series, m) for m in targets}

    # ── Forecasting ───────────────────────────────────────────────────────────

    def forecast(self, metric: Metric | str, months_ahead: int) -> list[float]:
        """Forecast ``months_ahead`` future values, nearest month first.

        Raises:
            UnknownMetricError:   ``metric`` is not a known identifier.
            ModelNotTrainedError: ``metric`` has not been trained.
            ValueError:           ``months_ahead`` is negative.
        """
        model = self.get_model(metric)
        if months_ahead < 0:
            raise ValueError(f"months_ahead must be >= 0, got {months_ahead}.")

        state = initial_window(model)
        predictions: list[float] = []
        for _ in range(months_ahead):
            state, prediction = forecast_step(state, model)
            predictions.append(prediction)

        logger.debug(
            "Forecast metric=%s  months=%d  values=%s",
            resolve_metric(metric).value, months_ahead, predictions,
        )
        return predictions

    def forecast_with_intervals(
        self,
        metric: Metric | str,
        months_ahead: int,
        historical_std_value: Optional[float] = None,
    ) -> list[ForecastPoint]:
        """Forecast and attach confidence bounds.

        When ``historical_std_value`` is ``None`` the population standard
        deviation of the metric's training snapshot is used.
        """
        predictions = self.forecast(metric, months_ahead)
        if historical_std_value is None:
            historical_std_value = historical_std(self.get_model(metric).values)
        return confidence_interval(
            predictions, historical_std_value, z=self.forecast_config.z_score
        )
