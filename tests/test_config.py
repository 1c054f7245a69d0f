"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from port_forecaster.config import AppConfig, ForecastConfig, ModelConfig, load_config


def _write_toml(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "default.toml"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for var in ("PORT_FORECASTER_SERIES_CSV", "PORT_FORECASTER_LOG_LEVEL", "PORT_FORECASTER_DEBUG"):
        monkeypatch.delenv(var, raising=False)


class TestDefaults:
    def test_model_defaults(self):
        cfg = ModelConfig()
        assert (cfg.n_estimators, cfg.learning_rate, cfg.max_depth, cfg.window_size) == (50, 0.1, 3, 2)

    def test_repo_default_toml_loads(self):
        cfg = load_config()
        assert isinstance(cfg, AppConfig)
        assert cfg.forecast.months_ahead == 3
        assert cfg.forecast.z_score == 1.96


class TestLoadConfig:
    def test_toml_values_applied(self, tmp_path):
        path = _write_toml(tmp_path, "[model]\nn_estimators = 10\n\n[forecast]\nmonths_ahead = 6\n")
        cfg = load_config(path)
        assert cfg.model.n_estimators == 10
        assert cfg.forecast.months_ahead == 6
        assert cfg.model.learning_rate == 0.1

    def test_local_toml_overrides(self, tmp_path):
        path = _write_toml(tmp_path, "[model]\nn_estimators = 10\nmax_depth = 2\n")
        (tmp_path / "local.toml").write_text("[model]\nn_estimators = 20\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.model.n_estimators == 20
        assert cfg.model.max_depth == 2

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = _write_toml(tmp_path, "[logging]\nlevel = \"INFO\"\n")
        monkeypatch.setenv("PORT_FORECASTER_LOG_LEVEL", "debug")
        monkeypatch.setenv("PORT_FORECASTER_SERIES_CSV", "data/metrics.csv")
        monkeypatch.setenv("PORT_FORECASTER_DEBUG", "yes")
        cfg = load_config(path)
        assert cfg.logging.level == "DEBUG"
        assert cfg.data.series_csv == "data/metrics.csv"
        assert cfg.debug is True

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    @pytest.mark.parametrize(
        "body",
        [
            "[model]\nlearning_rate = 0.0\n",
            "[model]\nwindow_size = 1\n",
            "[model]\nmax_depth = 0\n",
            "[forecast]\nmonths_ahead = 0\n",
            "[logging]\nlevel = \"LOUD\"\n",
        ],
    )
    def test_invalid_values_raise(self, tmp_path, body):
        with pytest.raises(ValidationError):
            load_config(_write_toml(tmp_path, body))

    def test_config_is_frozen(self):
        cfg = ForecastConfig()
        with pytest.raises(ValidationError):
            cfg.months_ahead = 9
