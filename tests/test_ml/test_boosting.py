"""
Tests for port_forecaster/ml/boosting.py.

What we test
------------
GradientBoostingEnsemble.fit():
  - initial_prediction is the mean target; n_estimators trees are kept.
  - Training MSE never increases from one stage to the next.
  - Two fits on the same data produce identical trees.
  - Raises ValueError on empty / mismatched input.

GradientBoostingEnsemble.predict():
  - Equals the last staged prediction.
  - Raises RuntimeError before fit().
"""

from __future__ import annotations

import pytest

from port_forecaster.ml.boosting import GradientBoostingEnsemble
from port_forecaster.ml.fit_metrics import mean_squared_error


def _dataset() -> tuple[list[list[float]], list[float]]:
    X = [[float(i), float((i * 5) % 7)] for i in range(16)]
    y = [0.3 * i + (2.0 if i % 4 == 0 else 0.0) for i in range(16)]
    return X, y


class TestFit:
    def test_initial_prediction_is_target_mean(self):
        X, y = _dataset()
        gb = GradientBoostingEnsemble(n_estimators=3).fit(X, y)
        assert gb.initial_prediction == pytest.approx(sum(y) / len(y))

    def test_keeps_n_estimators_trees(self):
        X, y = _dataset()
        gb = GradientBoostingEnsemble(n_estimators=7).fit(X, y)
        assert len(gb.trees) == 7
        assert gb.is_fitted

    def test_training_mse_non_increasing(self):
        X, y = _dataset()
        gb = GradientBoostingEnsemble(n_estimators=50, learning_rate=0.1).fit(X, y)

        baseline = mean_squared_error(y, [gb.initial_prediction] * len(y))
        errors = [mean_squared_error(y, preds) for preds in gb.staged_predict(X)]

        assert errors[0] <= baseline + 1e-12
        for prev, cur in zip(errors, errors[1:]):
            assert cur <= prev + 1e-12
        assert errors[-1] < baseline

    def test_fit_is_deterministic(self):
        X, y = _dataset()
        a = GradientBoostingEnsemble(n_estimators=10).fit(X, y)
        b = GradientBoostingEnsemble(n_estimators=10).fit(X, y)
        assert [t.root for t in a.trees] == [t.root for t in b.trees]
        assert a.predict(X) == b.predict(X)

    def test_full_learning_rate_single_tree_fits_separable_data(self):
        X = [[1.0], [2.0], [3.0], [4.0]]
        y = [1.0, 1.0, 5.0, 5.0]
        gb = GradientBoostingEnsemble(n_estimators=1, learning_rate=1.0).fit(X, y)
        assert gb.predict(X) == pytest.approx(y)

    def test_empty_input_raises(self):
        with pytest.raises(ValueError, match="at least one sample"):
            GradientBoostingEnsemble().fit([], [])

    def test_mismatched_lengths_raise(self):
        with pytest.raises(ValueError, match="differ in length"):
            GradientBoostingEnsemble().fit([[1.0]], [1.0, 2.0])

    @pytest.mark.parametrize("kwargs", [{"n_estimators": 0}, {"learning_rate": 0.0}, {"learning_rate": 1.5}])
    def test_invalid_hyperparameters_rejected(self, kwargs):
        with pytest.raises(ValueError):
            GradientBoostingEnsemble(**kwargs)


class TestPredict:
    def test_predict_matches_last_stage(self):
        X, y = _dataset()
        gb = GradientBoostingEnsemble(n_estimators=20).fit(X, y)
        stages = list(gb.staged_predict(X))
        assert len(stages) == 20
        assert gb.predict(X) == pytest.approx(stages[-1])

    def test_predict_returns_one_value_per_row(self):
        X, y = _dataset()
        gb = GradientBoostingEnsemble(n_estimators=5).fit(X, y)
        assert len(gb.predict(X[:3])) == 3

    def test_predict_before_fit_raises(self):
        with pytest.raises(RuntimeError, match="not been fitted"):
            GradientBoostingEnsemble().predict([[1.0, 2.0]])
