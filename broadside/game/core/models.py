"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10

# Cell codes. Positive values are ship identifiers on unshot cells.
EMPTY = 0
MISS = -1
HIT = -2

DEFAULT_FLEET: tuple[int, ...] = (4, 3, 3, 2, 2, 1, 1)

SHIP_NAMES: dict[int, str] = {
    1: "Battleship",
    2: "Cruiser",
    3: "Submarine",
    4: "Destroyer",
    5: "Frigate",
    6: "Raft 1",
    7: "Raft 2",
}


class BroadsideError(Exception):
    """Base class for game-logic errors."""


class FleetPlacementError(BroadsideError, RuntimeError):
    """Raised when a fleet cannot be fitted on the board."""


class BoardExhaustedError(BroadsideError, RuntimeError):
    """Raised when a shot is requested but every cell was already targeted."""


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @classmethod
    def from_flag(cls, horizontal: bool) -> Orientation:
        return cls.HORIZONTAL if horizontal else cls.VERTICAL


class ShotOutcome(StrEnum):
    """Result of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    ALREADY_SHOT = "ALREADY_SHOT"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate; ``x`` is the column, ``y`` the row."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship, anchored at its minimum-coordinate cell."""

    ship_id: int
    length: int
    anchor: Coord
    orientation: Orientation

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def name(self) -> str:
        return SHIP_NAMES.get(self.ship_id, f"Ship {self.ship_id}")


def footprint_cells(x: int, y: int, length: int, horizontal: bool) -> list[Coord]:
    """Compute the cells occupied by a ship."""
    if horizontal:
        return [Coord(x + i, y) for i in range(length)]
    return [Coord(x, y + i) for i in range(length)]


def buffer_cells(x: int, y: int, length: int, horizontal: bool, size: int = BOARD_SIZE) -> list[Coord]:
    """Compute the in-bounds footprint plus its one-cell ring, diagonals included."""
    result: list[Coord] = []
    for along in range(-1, length + 1):
        for across in (-1, 0, 1):
            cx = x + along if horizontal else x + across
            cy = y + across if horizontal else y + along
            if 0 <= cx < size and 0 <= cy < size:
                result.append(Coord(cx, cy))
    return result


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    return footprint_cells(
        placement.anchor.x, placement.anchor.y, placement.length, placement.horizontal
    )
