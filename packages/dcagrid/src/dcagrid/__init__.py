"""
dcagrid - Averaging-down grid computation with zero I/O dependencies.

This package contains the stateful grid engine that turns an initial price,
a list of percentage drop levels and a sizing policy into per-level trigger
prices, sizes, cumulative positions and running average costs.
"""

from dcagrid.config import GridParams
from dcagrid.engine import GridEngine, GridStepResult
from dcagrid.enums import GridPriceBasis, SizingBasis

__version__ = "0.1.0"

__all__ = [
    "GridParams",
    "GridEngine",
    "GridStepResult",
    "GridPriceBasis",
    "SizingBasis",
]
