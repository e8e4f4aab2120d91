"""Console output for grid calculations.

Uses rich library for terminal tables.
"""

import logging
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dcagrid import GridEngine, GridStepResult

from grid_calculator.config import GridCalculatorConfig

logger = logging.getLogger(__name__)

console = Console()


def _format_levels(levels: Iterable[float]) -> str:
    return "[" + ", ".join(f"{level:g}" for level in levels) + "]"


def _print_header(engine: GridEngine, out: Console) -> None:
    """Print the session parameters above the results table."""
    out.print()
    out.rule("[bold]Grid Trading Calculator[/bold]")
    out.print(f"Initial Price: ${engine.initial_price:.2f}")
    out.print(f"Grid Type: {engine.grid_price_basis}")
    out.print(f"Position Mode: {engine.sizing_basis}")
    out.print(f"Base Size: {engine.base_size:.2f}")
    if engine.sizing_basis.uses_multiplier:
        out.print(f"Multiplier: {engine.multiplier:.2f}x")
    out.print()


def _print_summary(result: GridStepResult, out: Console) -> None:
    out.print(
        f"  Final position: [bold]{result.total_position:.2f}[/bold]  |  "
        f"Total cost: [bold]{result.total_cost:.2f}[/bold]  |  "
        f"Average price: [bold]{result.average_price:.2f}[/bold]"
    )
    out.print()


def print_session(engine: GridEngine, levels: Iterable[float],
                  out: Optional[Console] = None) -> list[GridStepResult]:
    """Step the engine once per level and print a row for each result.

    Args:
        engine: Engine to step; its history grows by one entry per level
        levels: Percentage levels in evaluation order
        out: Console to print to (default: module console)

    Returns:
        Results in level order
    """
    out = out or console
    _print_header(engine, out)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Grid", justify="left")
    table.add_column("Level %", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Avg Price", justify="right")

    results = []
    for index, level in enumerate(levels, start=1):
        result = engine.step(level)
        results.append(result)
        table.add_row(
            str(index),
            f"{level:.2f}%",
            f"{result.grid_price:.2f}",
            f"{result.position_size:.2f}",
            f"{result.total_position:.2f}",
            f"{result.average_price:.2f}",
        )

    out.print(table)
    if results:
        _print_summary(results[-1], out)

    logger.debug(f"Printed {len(results)} grid levels")
    return results


def _format_value(value, spec: str = "") -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format(value, spec)
    return escape(str(value))


def _print_strategy(strategy: dict, out: Console) -> None:
    """Print a strategy as written in the file; it may not be valid."""
    levels = strategy.get("levels")
    if isinstance(levels, list):
        levels = "[" + ", ".join(_format_value(level, "g") for level in levels) + "]"
    else:
        levels = _format_value(levels)

    out.print(f"  Strategy: [bold]'{_format_value(strategy.get('name'))}'[/bold]")
    out.print(f"    Grid Type: {_format_value(strategy.get('grid_type'))}")
    out.print(f"    Position Mode: {_format_value(strategy.get('position_mode'))}")
    out.print(f"    Levels: {levels}")
    if strategy.get("multiplier") is not None:
        out.print(f"    Multiplier: {_format_value(strategy['multiplier'], '.2f')}x")
    out.print()


def print_strategies(config: GridCalculatorConfig, out: Optional[Console] = None) -> None:
    """Print the main configuration followed by every named strategy."""
    out = out or console
    out.print()
    out.rule("[bold]Available Strategies[/bold]")
    out.print()

    out.print("[bold]Main Configuration:[/bold]")
    out.print(f"  Grid Type: {config.base.grid_type}")
    out.print(f"  Position Mode: {config.position.mode}")
    out.print(f"  Levels: {_format_levels(config.grid.levels)}")
    out.print()

    if not config.strategies:
        out.print("No named strategies defined.")
        out.print()
        return

    out.print("[bold]Named Strategies:[/bold]")
    out.print()
    for strategy in config.strategies:
        _print_strategy(strategy, out)
