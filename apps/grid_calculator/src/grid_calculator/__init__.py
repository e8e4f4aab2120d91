"""
Grid calculator command-line application.

Loads and validates grid parameters, drives dcagrid.GridEngine over the
configured levels and renders the results.
"""

from grid_calculator.config import (
    GridCalculatorConfig,
    StrategyConfig,
    load_config,
    parse_levels,
    save_config,
)
from grid_calculator.reporter import print_session, print_strategies

__all__ = [
    "GridCalculatorConfig",
    "StrategyConfig",
    "load_config",
    "parse_levels",
    "save_config",
    "print_session",
    "print_strategies",
]
