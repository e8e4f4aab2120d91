"""
Parameter models for the grid computation engine.

This module defines the dataclass handed from the config layer to
GridEngine. Values are expected to be validated before they get here.
"""

from dataclasses import dataclass, field

from dcagrid.enums import GridPriceBasis, SizingBasis


@dataclass(frozen=True)
class GridParams:
    """
    Strongly-typed parameter set for one calculation session.

    Attributes:
        initial_price: Reference price the session starts from
        grid_price_basis: What each level's percentage is relative to
        sizing_basis: How each step's position size is derived
        base_size: Size of the first step (and every step for FIXED sizing)
        multiplier: Scale factor for the multiple sizing bases (default: 1.0)
        levels: Ordered percentage drops, evaluated in sequence
    """
    initial_price: float
    grid_price_basis: GridPriceBasis
    sizing_basis: SizingBasis
    base_size: float
    multiplier: float = 1.0
    levels: tuple[float, ...] = field(default_factory=tuple)
