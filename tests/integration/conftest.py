"""Shared fixtures for integration tests."""

import pytest
import yaml


@pytest.fixture(autouse=True)
def _isolate_config_path_env_var(monkeypatch):
    monkeypatch.delenv("GRID_CALCULATOR_CONFIG_PATH", raising=False)


@pytest.fixture
def config_file(tmp_path):
    """Config with one strategy per sizing basis."""
    data = {
        "base": {"initial_price": 100.0, "grid_type": "fixed"},
        "grid": {"levels": [1.0, 2.0]},
        "position": {"mode": "fixed", "base_size": 100.0},
        "strategies": [
            {
                "name": "average_fixed",
                "initial_price": 100.0,
                "grid_type": "average",
                "levels": [1.0, 1.0],
                "position_mode": "fixed",
                "base_size": 100.0,
            },
            {
                "name": "current_multiple",
                "initial_price": 100.0,
                "grid_type": "fixed",
                "levels": [1.0, 2.0, 3.0],
                "position_mode": "current-multiple",
                "base_size": 100.0,
                "multiplier": 2.0,
            },
            {
                "name": "increment_multiple",
                "initial_price": 100.0,
                "grid_type": "fixed",
                "levels": [1.0, 2.0, 3.0],
                "position_mode": "increment-multiple",
                "base_size": 100.0,
                "multiplier": 1.5,
            },
        ],
    }
    path = tmp_path / "grid_calculator.yaml"
    path.write_text(yaml.dump(data))
    return str(path)
