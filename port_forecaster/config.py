"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``PORT_FORECASTER_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine and CLI commands receive config sections (``ModelConfig``,
``ForecastConfig``) — never raw dicts or scattered env var lookups.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class ModelConfig(BaseModel):
    """Gradient-boosting hyperparameters and feature window."""

    model_config = ConfigDict(frozen=True)

    n_estimators: int = 50
    learning_rate: float = 0.1
    max_depth: int = 3
    window_size: int = 2

    @field_validator("n_estimators")
    @classmethod
    def validate_n_estimators(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"n_estimators must be >= 1, got {v}.")
        return v

    @field_validator("learning_rate")
    @classmethod
    def validate_learning_rate(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"learning_rate must be in (0.0, 1.0], got {v}.")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_depth must be >= 1, got {v}.")
        return v

    @field_validator("window_size")
    @classmethod
    def validate_window_size(cls, v: int) -> int:
        if v < 2:
            raise ValueError(f"window_size must be >= 2, got {v}.")
        return v


class ForecastConfig(BaseModel):
    """Forecast generation settings."""

    model_config = ConfigDict(frozen=True)

    months_ahead: int = 3
    z_score: float = 1.96

    @field_validator("months_ahead")
    @classmethod
    def validate_months_ahead(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"months_ahead must be >= 1, got {v}.")
        return v

    @field_validator("z_score")
    @classmethod
    def validate_z_score(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"z_score must be > 0, got {v}.")
        return v


class DataConfig(BaseModel):
    """Input series location. An empty ``series_csv`` selects the demo data."""

    model_config = ConfigDict(frozen=True)

    series_csv: str = ""


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration — the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    """

    model_config = ConfigDict(frozen=True)

    model: ModelConfig = ModelConfig()
    forecast: ForecastConfig = ForecastConfig()
    data: DataConfig = DataConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = _find_project_root()

    load_dotenv(dotenv_path=root / ".env", override=False)

    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    raw = _apply_env_overrides(raw)

    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply PORT_FORECASTER_* env vars to the raw config dict.

    Supported overrides:
      PORT_FORECASTER_SERIES_CSV → raw["data"]["series_csv"]
      PORT_FORECASTER_LOG_LEVEL  → raw["logging"]["level"]
      PORT_FORECASTER_DEBUG      → raw["debug"]
    """
    if series_csv := os.environ.get("PORT_FORECASTER_SERIES_CSV"):
        raw.setdefault("data", {})["series_csv"] = series_csv

    if log_level := os.environ.get("PORT_FORECASTER_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("PORT_FORECASTER_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        model=ModelConfig(**raw.get("model", {})),
        forecast=ForecastConfig(**raw.get("forecast", {})),
        data=DataConfig(**raw.get("data", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
