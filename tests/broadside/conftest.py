from __future__ import annotations

import random

import numpy as np
import pytest

from broadside.game.core.board import new_grid, place

# (ship_id, length, x, y, horizontal)
FIXED_LAYOUT: tuple[tuple[int, int, int, int, bool], ...] = (
    (1, 4, 0, 0, True),
    (2, 3, 0, 2, True),
    (3, 3, 0, 4, True),
    (4, 2, 0, 6, True),
    (5, 2, 0, 8, True),
    (6, 1, 9, 9, True),
    (7, 1, 9, 0, True),
)


def make_fixed_grid() -> np.ndarray:
    grid = new_grid()
    for ship_id, length, x, y, horizontal in FIXED_LAYOUT:
        grid = place(grid, x, y, length, ship_id, horizontal)
    return grid


@pytest.fixture
def fixed_grid() -> np.ndarray:
    return make_fixed_grid()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)
