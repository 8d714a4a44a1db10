"""Board state representation and shot transitions.

Grids are ``int16`` numpy arrays indexed ``grid[y, x]``. Every function here
treats its input grid as immutable and returns a fresh array when the state
changes.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from broadside.game.core.models import (
    BOARD_SIZE,
    EMPTY,
    HIT,
    MISS,
    ShipPlacement,
    ShotOutcome,
    buffer_cells,
    cells_for_placement,
    footprint_cells,
)

GRID_DTYPE = np.int16


@dataclass(frozen=True, slots=True)
class ShotReport:
    """Grid after a shot together with the shot outcome."""

    grid: np.ndarray
    outcome: ShotOutcome


def new_grid(size: int = BOARD_SIZE) -> np.ndarray:
    """Return an empty board."""
    return np.zeros((size, size), dtype=GRID_DTYPE)


def in_bounds(grid: np.ndarray, x: int, y: int) -> bool:
    """Return whether the coordinate is in board bounds."""
    rows, cols = grid.shape
    return 0 <= x < cols and 0 <= y < rows


def is_placement_legal(grid: np.ndarray, x: int, y: int, length: int, horizontal: bool) -> bool:
    """Return whether a ship fits at (*x*, *y*) with an empty one-cell buffer."""
    if length <= 0 or not in_bounds(grid, x, y):
        return False
    size = grid.shape[0]
    if horizontal and x + length > size:
        return False
    if not horizontal and y + length > size:
        return False
    for cell in buffer_cells(x, y, length, horizontal, size):
        if grid[cell.y, cell.x] != EMPTY:
            return False
    return True


def place(grid: np.ndarray, x: int, y: int, length: int, ship_id: int, horizontal: bool) -> np.ndarray:
    """Return a copy of *grid* with the ship written in.

    Legality (buffer and overlap) is not checked; a footprint leaving the board
    raises ``ValueError``.
    """
    cells = footprint_cells(x, y, length, horizontal)
    if any(not in_bounds(grid, cell.x, cell.y) for cell in cells):
        raise ValueError(f"Ship at ({x}, {y}) with length {length} does not fit on the board.")
    placed = grid.copy()
    for cell in cells:
        placed[cell.y, cell.x] = ship_id
    return placed


def apply_shot(grid: np.ndarray, x: int, y: int) -> ShotReport:
    """Apply a shot; repeat shots return the same grid object."""
    if not in_bounds(grid, x, y):
        raise ValueError(f"Shot ({x}, {y}) is outside the board.")
    if was_shot(grid, x, y):
        return ShotReport(grid=grid, outcome=ShotOutcome.ALREADY_SHOT)

    shot = grid.copy()
    if int(grid[y, x]) == EMPTY:
        shot[y, x] = MISS
        return ShotReport(grid=shot, outcome=ShotOutcome.MISS)
    shot[y, x] = HIT
    return ShotReport(grid=shot, outcome=ShotOutcome.HIT)


def was_shot(grid: np.ndarray, x: int, y: int) -> bool:
    """Return whether this cell was previously targeted."""
    return int(grid[y, x]) in (MISS, HIT)


def all_ships_sunk(grid: np.ndarray) -> bool:
    """Return whether no unshot ship cell remains."""
    return not bool(np.any(grid > 0))


def remaining_ship_ids(grid: np.ndarray) -> set[int]:
    """Return identifiers of ships with at least one unshot cell."""
    return {int(value) for value in np.unique(grid[grid > 0])}


def is_ship_sunk(grid: np.ndarray, placement: ShipPlacement) -> bool:
    """Return whether every cell of the placed ship has been hit."""
    return all(grid[cell.y, cell.x] == HIT for cell in cells_for_placement(placement))


def render_grid(grid: np.ndarray, reveal: bool = True) -> str:
    """Text rendering used by logs and the headless runner."""
    symbols = {EMPTY: ".", MISS: "o", HIT: "X"}
    lines = []
    for row in grid:
        cells = []
        for value in row:
            value = int(value)
            if value > 0:
                cells.append(str(value) if reveal else ".")
            else:
                cells.append(symbols[value])
        lines.append(" ".join(cells))
    return "\n".join(lines)
