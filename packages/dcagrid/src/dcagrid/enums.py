"""Closed policy enums for grid price and position sizing."""

from enum import StrEnum


class GridPriceBasis(StrEnum):
    """Reference price a grid level's percentage is measured against."""
    FIXED = 'fixed'
    AVERAGE = 'average'


class SizingBasis(StrEnum):
    """Policy for deriving each step's position size."""
    FIXED = 'fixed'
    CURRENT_MULTIPLE = 'current-multiple'
    INCREMENT_MULTIPLE = 'increment-multiple'

    @property
    def uses_multiplier(self) -> bool:
        """True for the bases that scale by the configured multiplier."""
        return self in (SizingBasis.CURRENT_MULTIPLE, SizingBasis.INCREMENT_MULTIPLE)
