"""
Binary regression tree with greedy variance-reduction splits.

How a tree is grown
-------------------
``build_tree()`` recurses top-down:

1.  Stop with a ``Leaf`` (mean of the targets) when ``depth >= max_depth`` or
    fewer than two samples remain.
2.  Otherwise scan every feature index.  Candidate thresholds are the
    midpoints between consecutive *distinct* sorted values of that feature.
3.  Score each candidate by the size-weighted within-partition variance::

        score = var(left) * |left| + var(right) * |right|

    Candidates with an empty side are rejected.  The lowest score wins; ties
    keep the first candidate seen (ascending feature index, then ascending
    threshold), so trees are fully deterministic.
4.  With no valid candidate, return a ``Leaf``.  Otherwise partition the
    samples (``x[f] <= threshold`` goes left) and recurse at ``depth + 1``.

Nodes are frozen dataclasses; each ``Split`` owns its two children outright,
so a tree is a plain finite value with no cycles.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

DEFAULT_MAX_DEPTH = 3


@dataclass(frozen=True)
class Leaf:
    """Terminal node predicting the mean of the targets routed to it."""

    value: float


@dataclass(frozen=True)
class Split:
    """Internal node: ``x[feature_index] <= threshold`` goes left."""

    feature_index: int
    threshold: float
    left: "Node"
    right: "Node"


Node = Union[Leaf, Split]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _weighted_variance(values: Sequence[float]) -> float:
    """Return ``var(values) * len(values)`` (sum of squared deviations)."""
    if not values:
        return 0.0
    mu = _mean(values)
    return sum((v - mu) * (v - mu) for v in values)


def _candidate_thresholds(column: Sequence[float]) -> list[float]:
    distinct = sorted(set(column))
    return [(a + b) / 2.0 for a, b in zip(distinct, distinct[1:])]


def find_best_split(
    features: Sequence[Sequence[float]],
    targets: Sequence[float],
) -> tuple[int, float] | None:
    """Return ``(feature_index, threshold)`` of the best split, or ``None``.

    ``None`` means every candidate leaves one side empty (e.g. all feature
    vectors are identical).
    """
    n_features = len(features[0])
    best: tuple[int, float] | None = None
    best_score = float("inf")

    for f in range(n_features):
        column = [row[f] for row in features]
        for threshold in _candidate_thresholds(column):
            left = [t for x, t in zip(column, targets) if x <= threshold]
            right = [t for x, t in zip(column, targets) if x > threshold]
            if not left or not right:
                continue
            score = _weighted_variance(left) + _weighted_variance(right)
            if score < best_score:
                best_score = score
                best = (f, threshold)
    return best


def build_tree(
    features: Sequence[Sequence[float]],
    targets: Sequence[float],
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Node:
    """Grow a regression tree over ``(features, targets)``.

    Args:
        features:  Feature vectors, all of equal length.
        targets:   One target per feature vector.
        depth:     Depth of the node being built (0 for the root).
        max_depth: Nodes at this depth are always leaves.

    Returns:
        The root ``Node`` of the grown (sub)tree.

    Raises:
        ValueError: If there are no samples or the lengths differ.
    """
    if not targets:
        raise ValueError("build_tree() needs at least one sample.")
    if len(features) != len(targets):
        raise ValueError(
            f"features and targets differ in length: "
            f"{len(features)} vs {len(targets)}."
        )

    if depth >= max_depth or len(targets) < 2:
        return Leaf(_mean(targets))

    split = find_best_split(features, targets)
    if split is None:
        return Leaf(_mean(targets))

    feature_index, threshold = split
    left_x: list[Sequence[float]] = []
    left_y: list[float] = []
    right_x: list[Sequence[float]] = []
    right_y: list[float] = []
    for x, y in zip(features, targets):
        if x[feature_index] <= threshold:
            left_x.append(x)
            left_y.append(y)
        else:
            right_x.append(x)
            right_y.append(y)

    return Split(
        feature_index=feature_index,
        threshold=threshold,
        left=build_tree(left_x, left_y, depth + 1, max_depth),
        right=build_tree(right_x, right_y, depth + 1, max_depth),
    )


def predict_node(node: Node, feature_vector: Sequence[float]) -> float:
    """Route one feature vector to its leaf and return the leaf value."""
    while isinstance(node, Split):
        if feature_vector[node.feature_index] <= node.threshold:
            node = node.left
        else:
            node = node.right
    return node.value


def tree_depth(node: Node) -> int:
    """Number of split levels below ``node`` (a lone leaf has depth 0)."""
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(node.left), tree_depth(node.right))


def count_leaves(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1
    return count_leaves(node.left) + count_leaves(node.right)


class RegressionTree:
    """Single regression tree estimator.

    Attributes:
        max_depth: Maximum number of split levels.
        root: Root node after ``fit()``; ``None`` before.
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}.")
        self.max_depth = max_depth
        self.root: Node | None = None

    @property
    def is_fitted(self) -> bool:
        return self.root is not None

    @property
    def depth(self) -> int:
        return tree_depth(self._require_root())

    @property
    def n_leaves(self) -> int:
        return count_leaves(self._require_root())

    def fit(
        self,
        features: Sequence[Sequence[float]],
        targets: Sequence[float],
    ) -> "RegressionTree":
        self.root = build_tree(features, targets, depth=0, max_depth=self.max_depth)
        return self

    def predict_one(self, feature_vector: Sequence[float]) -> float:
        return predict_node(self._require_root(), feature_vector)

    def predict(self, features: Sequence[Sequence[float]]) -> list[float]:
        root = self._require_root()
        return [predict_node(root, fv) for fv in features]

    def _require_root(self) -> Node:
        if self.root is None:
            raise RuntimeError("RegressionTree has not been fitted.")
        return self.root
