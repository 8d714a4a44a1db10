"""Placement editor state for the human placement phase."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

import numpy as np

from broadside.game.core.board import is_placement_legal, new_grid, place
from broadside.game.core.fleet import auto_place_fleet
from broadside.game.core.models import BOARD_SIZE, DEFAULT_FLEET

logger = logging.getLogger(__name__)


class PlacementDraft:
    """Tracks the ship being placed, its orientation and the ships already on the grid."""

    def __init__(self, fleet: Sequence[int] = DEFAULT_FLEET, size: int = BOARD_SIZE) -> None:
        self._lengths = {ship_id: length for ship_id, length in enumerate(fleet, start=1)}
        self._size = size
        self.grid = new_grid(size)
        self.horizontal = True
        self.placed_ids: set[int] = set()
        self.current_ship_id = 1

    @property
    def ship_ids(self) -> list[int]:
        return list(self._lengths)

    def length_of(self, ship_id: int) -> int:
        return self._lengths[ship_id]

    def select_ship(self, ship_id: int) -> bool:
        if ship_id not in self._lengths or ship_id in self.placed_ids:
            return False
        self.current_ship_id = ship_id
        return True

    def rotate(self) -> None:
        self.horizontal = not self.horizontal

    def place_current(self, x: int, y: int) -> bool:
        """Place the selected ship anchored at (*x*, *y*) when legal."""
        ship_id = self.current_ship_id
        if ship_id == 0 or ship_id in self.placed_ids:
            return False
        length = self._lengths[ship_id]
        if not is_placement_legal(self.grid, x, y, length, self.horizontal):
            return False
        self.grid = place(self.grid, x, y, length, ship_id, self.horizontal)
        self.placed_ids.add(ship_id)
        self._select_next()
        return True

    def auto_place(self, rng: random.Random | None = None) -> np.ndarray:
        self.grid = auto_place_fleet(tuple(self._lengths.values()), rng=rng, size=self._size)
        self.placed_ids = set(self._lengths)
        self.current_ship_id = 0
        return self.grid

    def reset(self) -> None:
        self.grid = new_grid(self._size)
        self.placed_ids = set()
        self.current_ship_id = 1

    def is_ready(self) -> bool:
        return len(self.placed_ids) == len(self._lengths)

    def _select_next(self) -> None:
        for ship_id in self._lengths:
            if ship_id not in self.placed_ids:
                self.current_ship_id = ship_id
                return
        self.current_ship_id = 0
        logger.debug("placement_complete ships=%d", len(self.placed_ids))
