"""
Built-in five-month demo series.

The dashboard feed delivers its monthly table newest first (September down
to May).  ``DEMO_ROWS_NEWEST_FIRST`` keeps that delivery order;
``demo_series()`` reverses it into the chronological order the engine needs::

    port_time_savings:  May 20, Jun 9, Jul 18, Aug 18, Sep 16
"""

from __future__ import annotations

from port_forecaster.models.series import TimeSeriesPoint
from port_forecaster.taxonomy.metric_taxonomy import Metric

DEMO_ROWS_NEWEST_FIRST: list[dict[str, float | str]] = [
    {"period": "2025-09", "port_time_savings": 16, "arrival_accuracy": 61,
     "bunker_savings": 0.65, "carbon_abatement": 5.5, "total_calls": 33},
    {"period": "2025-08", "port_time_savings": 18, "arrival_accuracy": 79,
     "bunker_savings": 0.87, "carbon_abatement": 7.1, "total_calls": 35},
    {"period": "2025-07", "port_time_savings": 18, "arrival_accuracy": 68,
     "bunker_savings": 0.73, "carbon_abatement": 8.5, "total_calls": 34},
    {"period": "2025-06", "port_time_savings": 9, "arrival_accuracy": 72,
     "bunker_savings": 0.87, "carbon_abatement": 6.1, "total_calls": 32},
    {"period": "2025-05", "port_time_savings": 20, "arrival_accuracy": 75,
     "bunker_savings": 0.95, "carbon_abatement": 8.6, "total_calls": 36},
]


def demo_series() -> list[TimeSeriesPoint]:
    """Return the demo rows as chronological ``TimeSeriesPoint`` objects."""
    points: list[TimeSeriesPoint] = []
    for row in reversed(DEMO_ROWS_NEWEST_FIRST):
        points.append(
            TimeSeriesPoint(
                period=str(row["period"]),
                values={m.value: float(row[m.value]) for m in Metric},
            )
        )
    return points
