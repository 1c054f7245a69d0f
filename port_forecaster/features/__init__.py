"""Feature engineering package for the port metrics forecaster.

Modules
-------
lag_window — lag / moving-average / trend / time-index vectors per metric
"""
