"""
port_forecaster.reporting — ASCII formatting of training and forecast results.

Modules:
  formatters — terminal table formatters for Typer CLI commands.
"""
