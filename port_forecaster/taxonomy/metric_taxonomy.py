"""
Metric taxonomy for the port network performance series.

Every monthly record carries one value per ``Metric``.  The enum value is the
column identifier used in CSV files and in ``TimeSeriesPoint.values``.

``METRIC_SPECS`` holds the display metadata for each metric, including the
network-wide monthly target used by the reporting layer.

Usage example::

    from port_forecaster.taxonomy.metric_taxonomy import Metric, resolve_metric

    metric = resolve_metric("arrival_accuracy")
    spec   = METRIC_SPECS[metric]

This module has NO imports from any other ``port_forecaster`` package.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class UnknownMetricError(ValueError):
    """Raised when a metric identifier has no column mapping."""

    def __init__(self, metric: str) -> None:
        self.metric = metric
        super().__init__(
            f"Unknown metric '{metric}'. "
            f"Valid metrics: {sorted(m.value for m in Metric)}"
        )


class Metric(StrEnum):
    """Tracked monthly performance metric."""

    PORT_TIME_SAVINGS = "port_time_savings"
    """Reduction in vessel port stay vs baseline, in percent."""

    ARRIVAL_ACCURACY = "arrival_accuracy"
    """Share of vessels arriving inside their declared window, in percent."""

    BUNKER_SAVINGS = "bunker_savings"
    """Fuel cost avoided through just-in-time arrival, in millions of USD."""

    CARBON_ABATEMENT = "carbon_abatement"
    """Emissions avoided, in thousands of tonnes CO2."""

    TOTAL_CALLS = "total_calls"
    """Vessel calls handled across the network."""


@dataclass(frozen=True)
class MetricSpec:
    """Display metadata for one metric.

    Attributes:
        display_name: Human-readable label.
        unit:         Unit suffix used by the formatters.
        monthly_target: Network target per month, or ``None`` if untargeted.
    """

    display_name: str
    unit: str
    monthly_target: float | None = None


METRIC_SPECS: dict[Metric, MetricSpec] = {
    Metric.PORT_TIME_SAVINGS: MetricSpec("Port Time Savings", "%", 18.0),
    Metric.ARRIVAL_ACCURACY:  MetricSpec("Arrival Accuracy", "%", 80.0),
    Metric.BUNKER_SAVINGS:    MetricSpec("Bunker Savings", "$M", 0.8),
    Metric.CARBON_ABATEMENT:  MetricSpec("Carbon Abatement", "K t", 8.0),
    Metric.TOTAL_CALLS:       MetricSpec("Total Calls", "calls"),
}


def resolve_metric(name: str | Metric) -> Metric:
    """Map a metric identifier to its ``Metric`` member.

    Matching is case-insensitive and ignores surrounding whitespace.

    Raises:
        UnknownMetricError: If ``name`` is not a known metric identifier.
    """
    if isinstance(name, Metric):
        return name
    try:
        return Metric(str(name).strip().lower())
    except ValueError:
        raise UnknownMetricError(str(name)) from None
