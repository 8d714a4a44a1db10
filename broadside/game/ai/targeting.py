"""Hunt/target AI with parity search and a stack of follow-up candidates."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np

from broadside.game.ai.strategy import AIStrategy
from broadside.game.core.fleet import DEFAULT_PLACEMENT_ATTEMPTS, auto_place_fleet
from broadside.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    BoardExhaustedError,
    Coord,
    ShotOutcome,
)

logger = logging.getLogger(__name__)

DEFAULT_HUNT_ATTEMPTS = 100


class TargetMode(StrEnum):
    """Current search phase."""

    HUNT = "HUNT"
    TARGET = "TARGET"


@dataclass(slots=True)
class ShotRecord:
    """Targeting state owned by a single agent for one game."""

    shots: set[Coord] = field(default_factory=set)
    candidates: list[Coord] = field(default_factory=list)
    last_hit: Coord | None = None


class TargetingAgent(AIStrategy):
    """AI opponent that never fires at the same cell twice."""

    def __init__(
        self,
        rng: random.Random | None = None,
        fleet: Sequence[int] = DEFAULT_FLEET,
        size: int = BOARD_SIZE,
        hunt_attempts: int = DEFAULT_HUNT_ATTEMPTS,
        placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS,
    ) -> None:
        self._rng = rng or random.Random()
        self._fleet = tuple(fleet)
        self._size = size
        self._hunt_attempts = hunt_attempts
        self._placement_attempts = placement_attempts
        self._record = ShotRecord()

    @property
    def fleet(self) -> tuple[int, ...]:
        return self._fleet

    @property
    def shots(self) -> frozenset[Coord]:
        return frozenset(self._record.shots)

    @property
    def candidates(self) -> tuple[Coord, ...]:
        return tuple(self._record.candidates)

    @property
    def last_hit(self) -> Coord | None:
        return self._record.last_hit

    @property
    def mode(self) -> TargetMode:
        return TargetMode.TARGET if self._record.candidates else TargetMode.HUNT

    def reset(self) -> None:
        self._record = ShotRecord()

    def place_ships(self) -> np.ndarray:
        return auto_place_fleet(
            self._fleet, rng=self._rng, size=self._size, max_attempts=self._placement_attempts
        )

    def select_shot(self, opponent_grid: np.ndarray | None = None) -> Coord:
        """Choose the next shot and record it as taken.

        When *opponent_grid* is given the agent reads the true cell value to
        decide whether the shot hit. Callers that do not expose the board pass
        ``None`` and report the outcome through :meth:`record_result`.
        """
        coord = self._next_candidate()
        source = "target"
        if coord is None:
            coord = self._hunt_parity()
            source = "hunt"
        if coord is None:
            coord = self._first_unshot()
            source = "scan"
        if coord is None:
            raise BoardExhaustedError("Every cell has already been targeted.")

        self._record.shots.add(coord)
        if opponent_grid is not None and int(opponent_grid[coord.y, coord.x]) > 0:
            self._register_hit(coord)
        logger.debug("ai_shot x=%d y=%d source=%s", coord.x, coord.y, source)
        return coord

    def record_result(self, coord: Coord, outcome: ShotOutcome) -> None:
        self._record.shots.add(coord)
        if outcome is ShotOutcome.HIT:
            self._register_hit(coord)

    def _next_candidate(self) -> Coord | None:
        while self._record.candidates:
            coord = self._record.candidates.pop()
            if coord not in self._record.shots:
                return coord
        return None

    def _hunt_parity(self) -> Coord | None:
        for _ in range(self._hunt_attempts):
            coord = Coord(self._rng.randrange(self._size), self._rng.randrange(self._size))
            if (coord.x + coord.y) % 2 == 0 and coord not in self._record.shots:
                return coord
        # Rejection sampling exhausted: pick among the unshot even cells directly.
        remaining = [
            Coord(x, y)
            for y in range(self._size)
            for x in range(self._size)
            if (x + y) % 2 == 0 and Coord(x, y) not in self._record.shots
        ]
        if remaining:
            return self._rng.choice(remaining)
        return None

    def _first_unshot(self) -> Coord | None:
        for y in range(self._size):
            for x in range(self._size):
                coord = Coord(x, y)
                if coord not in self._record.shots:
                    return coord
        return None

    def _register_hit(self, coord: Coord) -> None:
        self._record.last_hit = coord
        neighbours = (
            Coord(coord.x, coord.y + 1),
            Coord(coord.x + 1, coord.y),
            Coord(coord.x, coord.y - 1),
            Coord(coord.x - 1, coord.y),
        )
        for cell in neighbours:
            if not (0 <= cell.x < self._size and 0 <= cell.y < self._size):
                continue
            if cell in self._record.shots:
                continue
            self._record.candidates.append(cell)
