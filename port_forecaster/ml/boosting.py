"""
Gradient-boosted regression-tree ensemble (squared-error loss).

Training
--------
::

    F_0(x)   = mean(y)
    r_m      = y - F_{m-1}(x)            residuals on the training set
    h_m      = RegressionTree().fit(x, r_m)
    F_m(x)   = F_{m-1}(x) + learning_rate * h_m(x)

Rounds run strictly in order — every tree is fit to the error left by all
trees before it.  There is no subsampling and no randomness, so two fits on
the same data produce identical trees.

Because each leaf predicts the mean residual of its partition, every round
with ``0 < learning_rate <= 1`` can only lower (never raise) the training
mean squared error.  ``staged_predict()`` exposes the per-round predictions
so callers can observe that.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from port_forecaster.ml.regression_tree import DEFAULT_MAX_DEPTH, RegressionTree

logger = logging.getLogger(__name__)


class GradientBoostingEnsemble:
    """Fixed-size additive ensemble of regression trees.

    Attributes:
        n_estimators: Number of boosting rounds (trees).
        learning_rate: Shrinkage applied to every tree's output.
        max_depth: Depth limit passed to each tree.
        initial_prediction: Mean training target; set by ``fit()``.
    """

    def __init__(
        self,
        n_estimators: int = 50,
        learning_rate: float = 0.1,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        if n_estimators < 1:
            raise ValueError(f"n_estimators must be >= 1, got {n_estimators}.")
        if not 0.0 < learning_rate <= 1.0:
            raise ValueError(f"learning_rate must be in (0, 1], got {learning_rate}.")
        self.n_estimators = n_estimators
        self.learning_rate = learning_rate
        self.max_depth = max_depth
        self.initial_prediction: float = 0.0
        self._trees: tuple[RegressionTree, ...] = ()

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def is_fitted(self) -> bool:
        return bool(self._trees)

    @property
    def trees(self) -> tuple[RegressionTree, ...]:
        """Fitted trees in training order."""
        return self._trees

    # ── Training ──────────────────────────────────────────────────────────────

    def fit(
        self,
        features: Sequence[Sequence[float]],
        targets: Sequence[float],
    ) -> "GradientBoostingEnsemble":
        """Fit ``n_estimators`` trees on successive residuals.

        Raises:
            ValueError: No samples, or features/targets differ in length.
        """
        if not targets:
            raise ValueError("GradientBoostingEnsemble.fit() needs at least one sample.")
        if len(features) != len(targets):
            raise ValueError(
                f"features and targets differ in length: "
                f"{len(features)} vs {len(targets)}."
            )

        initial = sum(targets) / len(targets)
        predictions = [initial] * len(targets)
        trees: list[RegressionTree] = []

        for _ in range(self.n_estimators):
            residuals = [y - p for y, p in zip(targets, predictions)]
            tree = RegressionTree(max_depth=self.max_depth).fit(features, residuals)
            trees.append(tree)
            for j, fv in enumerate(features):
                predictions[j] += self.learning_rate * tree.predict_one(fv)

        # Publish only once every round has completed.
        self.initial_prediction = initial
        self._trees = tuple(trees)

        logger.debug(
            "Fitted %d trees on %d samples (init=%.6f, lr=%.3f)",
            len(trees), len(targets), initial, self.learning_rate,
        )
        return self

    # ── Inference ─────────────────────────────────────────────────────────────

    def predict_one(self, feature_vector: Sequence[float]) -> float:
        self._require_fitted()
        total = self.initial_prediction
        for tree in self._trees:
            total += self.learning_rate * tree.predict_one(feature_vector)
        return total

    def predict(self, features: Sequence[Sequence[float]]) -> list[float]:
        """Predict one value per feature vector."""
        return [self.predict_one(fv) for fv in features]

    def staged_predict(
        self, features: Sequence[Sequence[float]]
    ) -> Iterator[list[float]]:
        """Yield the prediction vector after each boosting round, in order."""
        self._require_fitted()
        current = [self.initial_prediction] * len(features)
        for tree in self._trees:
            current = [
                c + self.learning_rate * tree.predict_one(fv)
                for c, fv in zip(current, features)
            ]
            yield list(current)

    def _require_fitted(self) -> None:
        if not self._trees:
            raise RuntimeError("GradientBoostingEnsemble has not been fitted.")
