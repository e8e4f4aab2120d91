"""Configuration models for grid_calculator.

Loads grid calculation parameters from YAML file with Pydantic validation.
Policy strings are parsed into the dcagrid enums here, so the engine only
ever receives validated, strongly-typed parameters.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, StrictFloat, ValidationInfo, field_validator, model_validator

from dcagrid import GridParams, GridPriceBasis, SizingBasis

logger = logging.getLogger(__name__)

_GRID_TYPE_CHOICES = "'fixed' or 'average'"
_POSITION_MODE_CHOICES = "'fixed', 'current-multiple', or 'increment-multiple'"


def _where(strategy: Optional[str]) -> str:
    return f" in strategy '{strategy}'" if strategy else ""


def _parse_grid_type(value, strategy: Optional[str] = None) -> GridPriceBasis:
    try:
        return GridPriceBasis(value)
    except ValueError:
        raise ValueError(
            f"Invalid grid_type{_where(strategy)}: {value}. Must be {_GRID_TYPE_CHOICES}"
        ) from None


def _parse_position_mode(value, strategy: Optional[str] = None) -> SizingBasis:
    try:
        return SizingBasis(value)
    except ValueError:
        raise ValueError(
            f"Invalid position mode{_where(strategy)}: {value}. Must be {_POSITION_MODE_CHOICES}"
        ) from None


def _check_levels(levels: list[float], strategy: Optional[str] = None) -> list[float]:
    if not levels:
        if strategy:
            raise ValueError(f"Grid levels cannot be empty for strategy '{strategy}'")
        raise ValueError("Grid levels cannot be empty")
    for level in levels:
        if not (0 < level < 100):
            raise ValueError(
                f"Invalid grid level{_where(strategy)}: {level}. Must be between 0 and 100"
            )
    return levels


class BaseSection(BaseModel):
    """Reference price and grid price basis."""

    initial_price: float = Field(..., gt=0, strict=True, allow_inf_nan=False,
                                 description="Reference price the grid is built from")
    grid_type: GridPriceBasis = Field(..., description="'fixed' (initial price) or 'average' (running average)")

    @field_validator("grid_type", mode="before")
    @classmethod
    def parse_grid_type(cls, v):
        """Convert grid_type string to GridPriceBasis."""
        return _parse_grid_type(v)


class GridSection(BaseModel):
    """Ordered percentage drop levels."""

    levels: list[StrictFloat] = Field(..., description="Percentage drops, each strictly between 0 and 100")

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, v):
        return _check_levels(v)


class PositionSection(BaseModel):
    """Position sizing policy."""

    mode: SizingBasis = Field(..., description="'fixed', 'current-multiple' or 'increment-multiple'")
    base_size: float = Field(..., strict=True, allow_inf_nan=False, description="Size of the first step")
    multiplier: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False,
                                        description="Scale factor for multiple modes")

    @field_validator("mode", mode="before")
    @classmethod
    def parse_mode(cls, v):
        """Convert mode string to SizingBasis."""
        return _parse_position_mode(v)

    @model_validator(mode="after")
    def require_multiplier(self):
        """Multiple modes cannot run without a multiplier."""
        if self.mode.uses_multiplier and self.multiplier is None:
            raise ValueError("Multiplier is required for multiple position modes")
        return self


class StrategyConfig(BaseModel):
    """Named alternative parameter set."""

    name: str = Field(..., min_length=1, description="Unique strategy name")
    initial_price: float = Field(..., gt=0, strict=True, allow_inf_nan=False,
                                 description="Reference price the grid is built from")
    grid_type: GridPriceBasis = Field(..., description="'fixed' or 'average'")
    levels: list[StrictFloat] = Field(..., description="Percentage drops, each strictly between 0 and 100")
    position_mode: SizingBasis = Field(..., description="'fixed', 'current-multiple' or 'increment-multiple'")
    base_size: float = Field(..., strict=True, allow_inf_nan=False, description="Size of the first step")
    multiplier: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False,
                                        description="Scale factor for multiple modes")

    @field_validator("grid_type", mode="before")
    @classmethod
    def parse_grid_type(cls, v, info: ValidationInfo):
        return _parse_grid_type(v, info.data.get("name"))

    @field_validator("position_mode", mode="before")
    @classmethod
    def parse_position_mode(cls, v, info: ValidationInfo):
        return _parse_position_mode(v, info.data.get("name"))

    @field_validator("levels")
    @classmethod
    def validate_levels(cls, v, info: ValidationInfo):
        return _check_levels(v, info.data.get("name"))

    @model_validator(mode="after")
    def require_multiplier(self):
        if self.position_mode.uses_multiplier and self.multiplier is None:
            raise ValueError(
                f"Multiplier is required for strategy '{self.name}' "
                f"with position mode '{self.position_mode}'"
            )
        return self

    def to_params(self) -> GridParams:
        """Build engine parameters (multiplier defaults to 1.0)."""
        return GridParams(
            initial_price=self.initial_price,
            grid_price_basis=self.grid_type,
            sizing_basis=self.position_mode,
            base_size=self.base_size,
            multiplier=self.multiplier if self.multiplier is not None else 1.0,
            levels=tuple(self.levels),
        )

    def to_config(self) -> "GridCalculatorConfig":
        """Promote this strategy to a standalone root config."""
        return GridCalculatorConfig(
            base=BaseSection(initial_price=self.initial_price, grid_type=self.grid_type),
            grid=GridSection(levels=list(self.levels)),
            position=PositionSection(
                mode=self.position_mode,
                base_size=self.base_size,
                multiplier=self.multiplier,
            ),
        )


class GridCalculatorConfig(BaseModel):
    """Root configuration for grid_calculator.

    Named strategies are kept as written and only validated when selected
    through get_strategy(), so one broken strategy does not block the main
    sections or the others.
    """

    base: BaseSection
    grid: GridSection
    position: PositionSection
    strategies: list[dict[str, Any]] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_strategy_names(self):
        """Strategy names must be unique so selection by name is unambiguous."""
        seen: set = set()
        for name in self.strategy_names:
            if name in seen:
                raise ValueError(f"Duplicate strategy name '{name}'")
            seen.add(name)
        return self

    @property
    def strategy_names(self) -> list:
        return [s["name"] for s in self.strategies if s.get("name") is not None]

    def get_strategy(self, name: str) -> Optional[StrategyConfig]:
        """Get strategy config by name, validating it.

        Returns:
            StrategyConfig, or None if no strategy has this name

        Raises:
            ValidationError: If the named strategy is invalid
        """
        raw = next((s for s in self.strategies if s.get("name") == name), None)
        if raw is None:
            return None
        return StrategyConfig.model_validate(raw)

    def to_params(self) -> GridParams:
        """Build engine parameters from the main sections."""
        multiplier = self.position.multiplier
        return GridParams(
            initial_price=self.base.initial_price,
            grid_price_basis=self.base.grid_type,
            sizing_basis=self.position.mode,
            base_size=self.position.base_size,
            multiplier=multiplier if multiplier is not None else 1.0,
            levels=tuple(self.grid.levels),
        )


def parse_levels(text: str) -> list[float]:
    """Parse a comma-separated level list such as "1,2,3.5".

    Entries that are not numbers are skipped.

    Raises:
        ValueError: If no entry parses
    """
    levels = []
    for part in text.split(","):
        part = part.strip()
        try:
            levels.append(float(part))
        except ValueError:
            if part:
                logger.debug(f"Skipping unparseable grid level '{part}'")
    if not levels:
        raise ValueError("No valid grid levels provided")
    return levels


def load_config(config_path: Optional[str] = None) -> GridCalculatorConfig:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, checks:
            1. GRID_CALCULATOR_CONFIG_PATH environment variable
            2. conf/grid_calculator.yaml
            3. grid_calculator.yaml

    Returns:
        Validated GridCalculatorConfig

    Raises:
        FileNotFoundError: If no config file found
        ValueError: If the file is empty or config validation fails
    """
    if config_path is None:
        config_path = os.environ.get("GRID_CALCULATOR_CONFIG_PATH")

    if config_path is None:
        search_paths = [
            Path("conf/grid_calculator.yaml"),
            Path("grid_calculator.yaml"),
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path is None:
        raise FileNotFoundError(
            "No config file found. Set GRID_CALCULATOR_CONFIG_PATH or create conf/grid_calculator.yaml"
        )

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return GridCalculatorConfig(**data)


def save_config(config: GridCalculatorConfig, config_path: str) -> None:
    """Write configuration to a YAML file that load_config() accepts."""
    data = config.model_dump(mode="json", exclude_none=True)
    if not data["strategies"]:
        del data["strategies"]

    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(data, f, sort_keys=False)
