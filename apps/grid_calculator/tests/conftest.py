"""Shared fixtures for grid_calculator tests."""

import pytest
import yaml


@pytest.fixture(autouse=True)
def _isolate_config_path_env_var(monkeypatch):
    """Prevent GRID_CALCULATOR_CONFIG_PATH from leaking into tests."""
    monkeypatch.delenv("GRID_CALCULATOR_CONFIG_PATH", raising=False)


@pytest.fixture
def config_data():
    """Valid config document with two named strategies."""
    return {
        "base": {"initial_price": 100.0, "grid_type": "fixed"},
        "grid": {"levels": [1.0, 2.0, 3.0]},
        "position": {"mode": "current-multiple", "base_size": 100.0, "multiplier": 2.0},
        "strategies": [
            {
                "name": "flat",
                "initial_price": 50.0,
                "grid_type": "average",
                "levels": [1.0, 1.0],
                "position_mode": "fixed",
                "base_size": 10.0,
            },
            {
                "name": "geometric",
                "initial_price": 200.0,
                "grid_type": "fixed",
                "levels": [1.0, 2.0, 3.0],
                "position_mode": "increment-multiple",
                "base_size": 100.0,
                "multiplier": 1.5,
            },
        ],
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a config document to a temporary YAML file and return its path."""
    def _write(data, name="grid_calculator.yaml"):
        config_file = tmp_path / name
        config_file.write_text(yaml.dump(data))
        return str(config_file)
    return _write
