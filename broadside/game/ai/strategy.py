"""AI strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from broadside.game.core.models import Coord, ShotOutcome


class AIStrategy(ABC):
    """Opponent strategy contract used by the match session."""

    @property
    @abstractmethod
    def fleet(self) -> tuple[int, ...]:
        """Ship lengths both sides play with."""

    @abstractmethod
    def place_ships(self) -> np.ndarray:
        """Return the strategy's own placed grid."""

    @abstractmethod
    def select_shot(self, opponent_grid: np.ndarray | None = None) -> Coord:
        """Return next coordinate to fire."""

    @abstractmethod
    def record_result(self, coord: Coord, outcome: ShotOutcome) -> None:
        """Update strategy state with an explicitly reported shot outcome."""

    @abstractmethod
    def reset(self) -> None:
        """Forget all per-game state."""
