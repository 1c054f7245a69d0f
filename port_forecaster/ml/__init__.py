"""
ML forecasting layer — from-scratch gradient-boosted regression trees.

Modules
-------
regression_tree : Leaf / Split nodes, greedy variance-reduction tree growth.
boosting        : GradientBoostingEnsemble (residual fitting with shrinkage).
scaler          : MinMaxScaler for per-metric target normalization.
fit_metrics     : MAE / RMSE / MSE helpers.
confidence      : Heuristic confidence bounds and historical std.
engine          : ForecastingEngine — per-metric training and iterative
                  multi-step forecasting.
"""
