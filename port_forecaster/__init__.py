"""Port network metric forecaster — gradient-boosted regression trees."""

__version__ = "0.1.0"
