"""CLI entry point for grid_calculator.

Usage:
    python -m grid_calculator.main calculate --price 100 --grid-type fixed --levels 1,2,3,5 --mode fixed
    python -m grid_calculator.main calculate -p 100 -g average -l 1,2,4 -m increment-multiple -s 50 -x 1.5
    python -m grid_calculator.main from-config --config conf/grid_calculator.yaml
    python -m grid_calculator.main from-config --config conf/grid_calculator.yaml --strategy aggressive
    python -m grid_calculator.main list-strategies --config conf/grid_calculator.yaml
"""

import argparse
import logging
import sys
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console

from dcagrid import GridEngine, GridParams, GridPriceBasis, SizingBasis

from grid_calculator.config import GridCalculatorConfig, load_config, parse_levels
from grid_calculator.reporter import print_session, print_strategies

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    format_str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Calculate averaging-down grid levels, position sizes and average prices",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    calculate = subparsers.add_parser("calculate", help="Calculate grid levels from ad-hoc parameters")
    calculate.add_argument("--price", "-p", type=float, required=True, help="Initial price")
    calculate.add_argument(
        "--grid-type", "-g",
        choices=[b.value for b in GridPriceBasis],
        required=True,
        help="fixed: relative to initial price, average: relative to running average price",
    )
    calculate.add_argument(
        "--levels", "-l",
        type=str,
        required=True,
        help='Grid percentages, comma-separated (e.g., "1,2,3,5")',
    )
    calculate.add_argument(
        "--mode", "-m",
        choices=[b.value for b in SizingBasis],
        required=True,
        help="Position sizing mode",
    )
    calculate.add_argument("--size", "-s", type=float, default=100.0, help="Initial position size (default: 100.0)")
    calculate.add_argument(
        "--multiplier", "-x",
        type=float,
        default=1.0,
        help="Multiplier for the multiple sizing modes (default: 1.0)",
    )

    from_config = subparsers.add_parser("from-config", help="Run calculation from a YAML config file")
    from_config.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config file (default: conf/grid_calculator.yaml)",
    )
    from_config.add_argument(
        "--strategy", "-s",
        type=str,
        default=None,
        help="Named strategy to run (default: main configuration)",
    )

    list_strategies = subparsers.add_parser("list-strategies", help="List all strategies in a config file")
    list_strategies.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to config file (default: conf/grid_calculator.yaml)",
    )

    return parser.parse_args(argv)


def run_calculation(params: GridParams, out: Optional[Console] = None) -> GridEngine:
    """Build an engine for params and print one row per level."""
    engine = GridEngine.from_params(params)
    print_session(engine, params.levels, out)
    return engine


def _load(config_path: Optional[str]) -> Optional[GridCalculatorConfig]:
    """Load config, logging the failure and returning None on error."""
    try:
        config = load_config(config_path)
    except FileNotFoundError as e:
        logger.error(f"Config file not found: {e}")
        return None
    except yaml.YAMLError as e:
        logger.error(f"Error loading config file: {e}")
        return None
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        return None
    except ValueError as e:
        logger.error(f"Error loading config file: {e}")
        return None

    logger.debug(f"Loaded config with {len(config.strategies)} named strategies")
    return config


def cmd_calculate(args: argparse.Namespace) -> int:
    """Run the ad-hoc calculate command."""
    try:
        levels = parse_levels(args.levels)
    except ValueError as e:
        logger.error(str(e))
        return 1

    params = GridParams(
        initial_price=args.price,
        grid_price_basis=GridPriceBasis(args.grid_type),
        sizing_basis=SizingBasis(args.mode),
        base_size=args.size,
        multiplier=args.multiplier,
        levels=tuple(levels),
    )
    run_calculation(params)
    return 0


def cmd_from_config(args: argparse.Namespace) -> int:
    """Run the main configuration or a named strategy from a config file."""
    config = _load(args.config)
    if config is None:
        return 1

    if args.strategy is None:
        run_calculation(config.to_params())
        return 0

    if not config.strategies:
        logger.error("No strategies defined in config file")
        return 1

    try:
        strategy = config.get_strategy(args.strategy)
    except ValidationError as e:
        logger.error(f"Strategy validation failed: {e}")
        return 1
    if strategy is None:
        logger.error(f"Strategy '{args.strategy}' not found in config")
        return 1

    logger.info(f"Running strategy '{strategy.name}'")
    run_calculation(strategy.to_params())
    return 0


def cmd_list_strategies(args: argparse.Namespace) -> int:
    """Print every parameter set in a config file."""
    config = _load(args.config)
    if config is None:
        return 1

    print_strategies(config)
    return 0


_COMMANDS = {
    "calculate": cmd_calculate,
    "from-config": cmd_from_config,
    "list-strategies": cmd_list_strategies,
}


def main(argv=None) -> int:
    """Main entry point.

    Returns:
        Exit code: 0 on success, 1 on config, validation or level-list errors
    """
    args = parse_args(argv)
    setup_logging(debug=args.debug)

    try:
        return _COMMANDS[args.command](args)
    except Exception as e:
        logger.exception(f"Calculation failed: {e}")
        return 1


def cli() -> None:
    """Command-line interface entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)


if __name__ == "__main__":
    cli()
