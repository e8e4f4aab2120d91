"""
Grid computation engine for averaging-down entry plans.

Holds the running session state (position, cost, average price, last
increment) and folds one grid level at a time into it. Results depend on
every prior step, so levels must be stepped in the order they should be
evaluated.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from dcagrid.config import GridParams
from dcagrid.enums import GridPriceBasis, SizingBasis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridStepResult:
    """
    Snapshot of engine state after one step has been folded in.

    grid_price and position_size describe the step itself; the remaining
    fields are running totals as of this step.
    """
    grid_price: float
    position_size: float
    total_position: float
    average_price: float
    total_cost: float


class GridEngine:
    """
    Stateful grid calculator with NO I/O and NO validation.

    The policy fields are fixed at construction. step() is the only
    transition and is defined for every numeric input; non-finite or
    non-positive parameters simply propagate through the arithmetic.
    Instances are not thread-safe.
    """

    def __init__(self, initial_price: float, grid_price_basis: GridPriceBasis,
                 sizing_basis: SizingBasis, base_size: float, multiplier: float):
        """
        Initialize grid engine.

        Args:
            initial_price: Reference price for the session
            grid_price_basis: FIXED (relative to initial price) or AVERAGE
                              (relative to the running average price)
            sizing_basis: FIXED, CURRENT_MULTIPLE or INCREMENT_MULTIPLE
            base_size: Size used for the first step (every step for FIXED)
            multiplier: Scale factor for the multiple sizing bases
        """
        self._initial_price = initial_price
        self._grid_price_basis = grid_price_basis
        self._sizing_basis = sizing_basis
        self._base_size = base_size
        self._multiplier = multiplier

        self.current_position = 0.0
        self.total_cost = 0.0
        self.average_price = initial_price
        self.last_increment = 0.0
        self._history: list[GridStepResult] = []

    @classmethod
    def from_params(cls, params: GridParams) -> 'GridEngine':
        """Build an engine from a validated parameter set."""
        return cls(
            initial_price=params.initial_price,
            grid_price_basis=params.grid_price_basis,
            sizing_basis=params.sizing_basis,
            base_size=params.base_size,
            multiplier=params.multiplier,
        )

    @property
    def initial_price(self) -> float:
        return self._initial_price

    @property
    def grid_price_basis(self) -> GridPriceBasis:
        return self._grid_price_basis

    @property
    def sizing_basis(self) -> SizingBasis:
        return self._sizing_basis

    @property
    def base_size(self) -> float:
        return self._base_size

    @property
    def multiplier(self) -> float:
        return self._multiplier

    @property
    def history(self) -> tuple[GridStepResult, ...]:
        """All results since construction or the last reset, in step order."""
        return tuple(self._history)

    @property
    def step_count(self) -> int:
        """
        Number of steps since construction or the last reset.

        Sizing does not consult this: the first-step fallback is still
        triggered by current_position / last_increment being exactly zero.
        """
        return len(self._history)

    def step(self, level_percent: float) -> GridStepResult:
        """
        Evaluate one grid level and fold it into session state.

        Price and size are both computed from pre-step state; the
        average price is only recomputed while the position is positive.

        Args:
            level_percent: Percentage drop for this level (e.g. 2.5 for 2.5%)

        Returns:
            Post-step snapshot, also appended to history
        """
        grid_price = self._grid_price(level_percent)
        position_size = self._position_size()

        self.last_increment = position_size
        self.current_position += position_size
        self.total_cost += position_size * grid_price
        if self.current_position > 0:
            self.average_price = self.total_cost / self.current_position

        result = GridStepResult(
            grid_price=grid_price,
            position_size=position_size,
            total_position=self.current_position,
            average_price=self.average_price,
            total_cost=self.total_cost,
        )
        self._history.append(result)

        logger.debug('Step %d at %s%%: price=%s size=%s total=%s avg=%s',
                     len(self._history), level_percent, grid_price, position_size,
                     self.current_position, self.average_price)
        return result

    def run(self, levels: Iterable[float]) -> list[GridStepResult]:
        """Step through levels in order and return one result per level."""
        return [self.step(level) for level in levels]

    def reset(self) -> None:
        """Restore session state to its post-construction values."""
        self.current_position = 0.0
        self.total_cost = 0.0
        self.average_price = self._initial_price
        self.last_increment = 0.0
        self._history.clear()

    def _grid_price(self, level_percent: float) -> float:
        factor = 1 - level_percent / 100
        if self._grid_price_basis == GridPriceBasis.AVERAGE:
            return self.average_price * factor
        return self._initial_price * factor

    def _position_size(self) -> float:
        # Zero doubles as the "never stepped" marker for both multiple bases
        if self._sizing_basis == SizingBasis.CURRENT_MULTIPLE:
            if self.current_position == 0:
                return self._base_size
            return self.current_position * self._multiplier
        if self._sizing_basis == SizingBasis.INCREMENT_MULTIPLE:
            if self.last_increment == 0:
                return self._base_size
            return self.last_increment * self._multiplier
        return self._base_size
