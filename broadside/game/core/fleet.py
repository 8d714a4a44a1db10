"""Fleet placement construction and validation."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

import numpy as np

from broadside.game.core.board import is_placement_legal, new_grid, place
from broadside.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    FleetPlacementError,
    Orientation,
    ShipPlacement,
    cells_for_placement,
)

logger = logging.getLogger(__name__)

DEFAULT_PLACEMENT_ATTEMPTS = 10_000


def auto_place_fleet(
    fleet_lengths: Sequence[int] = DEFAULT_FLEET,
    rng: random.Random | None = None,
    size: int = BOARD_SIZE,
    max_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
) -> np.ndarray:
    """Randomly place ships in input order with identifiers ``1..n``.

    Each ship gets at most *max_attempts* random samples. A fleet that cannot
    be fitted raises :class:`FleetPlacementError`.
    """
    lengths = _checked_lengths(fleet_lengths, size)
    rng = rng or random.Random()
    grid = new_grid(size)

    for ship_id, length in enumerate(lengths, start=1):
        for attempt in range(1, max_attempts + 1):
            horizontal = rng.random() < 0.5
            x = rng.randrange(size - length + 1 if horizontal else size)
            y = rng.randrange(size if horizontal else size - length + 1)
            if is_placement_legal(grid, x, y, length, horizontal):
                grid = place(grid, x, y, length, ship_id, horizontal)
                logger.debug(
                    "ship_placed id=%d length=%d x=%d y=%d horizontal=%s attempts=%d",
                    ship_id,
                    length,
                    x,
                    y,
                    horizontal,
                    attempt,
                )
                break
        else:
            logger.error(
                "fleet_placement_failed ship_id=%d length=%d attempts=%d fleet=%s size=%d",
                ship_id,
                length,
                max_attempts,
                list(lengths),
                size,
            )
            raise FleetPlacementError(
                f"Could not place ship {ship_id} (length {length}) after {max_attempts} attempts; "
                f"fleet {list(lengths)} does not fit a {size}x{size} board."
            )
    return grid


def fleet_placements(grid: np.ndarray) -> list[ShipPlacement]:
    """Recover ship placements from a grid before any shot was taken."""
    placements: list[ShipPlacement] = []
    for ship_id in sorted({int(v) for v in np.unique(grid[grid > 0])}):
        ys, xs = np.nonzero(grid == ship_id)
        anchor = Coord(int(xs.min()), int(ys.min()))
        horizontal = len(set(ys.tolist())) == 1
        placements.append(
            ShipPlacement(
                ship_id=ship_id,
                length=len(xs),
                anchor=anchor,
                orientation=Orientation.from_flag(horizontal),
            )
        )
    return placements


def validate_grid(grid: np.ndarray, fleet_lengths: Sequence[int] = DEFAULT_FLEET) -> tuple[bool, str]:
    """Validate that a placed grid matches the fleet and the buffer rule."""
    if np.any(grid < 0):
        return False, "Grid already contains shots."

    placements = fleet_placements(grid)
    if sorted(p.length for p in placements) != sorted(fleet_lengths):
        return False, f"Fleet lengths {sorted(fleet_lengths)} do not match placed ships."

    rebuilt = new_grid(grid.shape[0])
    for placement in placements:
        cells = cells_for_placement(placement)
        if any(grid[c.y, c.x] != placement.ship_id for c in cells):
            return False, f"Ship {placement.ship_id} is not a straight line."
        if not is_placement_legal(
            rebuilt, placement.anchor.x, placement.anchor.y, placement.length, placement.horizontal
        ):
            return False, f"Ship {placement.ship_id} touches another ship."
        rebuilt = place(
            rebuilt,
            placement.anchor.x,
            placement.anchor.y,
            placement.length,
            placement.ship_id,
            placement.horizontal,
        )
    return True, ""


def _checked_lengths(fleet_lengths: Sequence[int], size: int) -> tuple[int, ...]:
    lengths = tuple(int(length) for length in fleet_lengths)
    if not lengths:
        raise ValueError("Fleet must contain at least one ship.")
    if any(length <= 0 for length in lengths):
        raise ValueError(f"Ship lengths must be positive: {list(lengths)}.")
    if any(length > size for length in lengths):
        raise FleetPlacementError(f"Fleet {list(lengths)} has a ship longer than the board size {size}.")
    return lengths
