"""Turn resolution for a human-vs-AI match."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np

from broadside.game.ai.strategy import AIStrategy
from broadside.game.core.board import all_ships_sunk, apply_shot
from broadside.game.core.fleet import validate_grid
from broadside.game.core.models import Coord, ShotOutcome

logger = logging.getLogger(__name__)


class Turn(StrEnum):
    """Current turn owner."""

    PLAYER = "PLAYER"
    AI = "AI"


class MatchPhase(StrEnum):
    """Match lifecycle phase."""

    PLACING = "PLACING"
    PLAYING = "PLAYING"
    GAME_OVER = "GAME_OVER"


@dataclass(slots=True)
class MatchSession:
    """Runtime match state."""

    player_grid: np.ndarray
    ai_grid: np.ndarray
    agent: AIStrategy
    phase: MatchPhase = MatchPhase.PLACING
    turn: Turn = Turn.PLAYER
    winner: Turn | None = None
    last_message: str = "Place your ships!"
    history: list[str] = field(default_factory=list)


def start_match(player_grid: np.ndarray, agent: AIStrategy) -> MatchSession:
    """Create a session in the playing phase with the AI's own fleet placed.

    The player grid must hold the agent's fleet under the buffer rule, otherwise
    ``ValueError`` is raised.
    """
    _check_player_grid(player_grid, agent)
    session = MatchSession(player_grid=player_grid, ai_grid=agent.place_ships(), agent=agent)
    session.phase = MatchPhase.PLAYING
    session.last_message = "Battle started. Your turn."
    logger.info("match_started")
    return session


def restart(session: MatchSession, player_grid: np.ndarray) -> None:
    """Reset the session for a new game with fresh agent state."""
    _check_player_grid(player_grid, session.agent)
    session.agent.reset()
    session.player_grid = player_grid
    session.ai_grid = session.agent.place_ships()
    session.phase = MatchPhase.PLAYING
    session.turn = Turn.PLAYER
    session.winner = None
    session.history.clear()
    session.last_message = "Battle started. Your turn."
    logger.info("match_restarted")


def player_fire(session: MatchSession, x: int, y: int) -> ShotOutcome | None:
    """Resolve a player shot at the AI grid; ``None`` when the player may not fire."""
    if session.phase is not MatchPhase.PLAYING or session.turn is not Turn.PLAYER:
        return None

    report = apply_shot(session.ai_grid, x, y)
    if report.outcome is ShotOutcome.ALREADY_SHOT:
        return report.outcome

    session.ai_grid = report.grid
    _record(session, f"You fired at ({x}, {y}): {report.outcome.value.lower()}.")
    session.turn = Turn.AI
    if all_ships_sunk(session.ai_grid):
        _finish(session, Turn.PLAYER, "You win.")
    return report.outcome


def ai_fire(session: MatchSession) -> tuple[Coord, ShotOutcome] | None:
    """Let the agent choose and resolve a shot at the player grid."""
    if session.phase is not MatchPhase.PLAYING or session.turn is not Turn.AI:
        return None

    coord = session.agent.select_shot(session.player_grid)
    report = apply_shot(session.player_grid, coord.x, coord.y)
    if report.outcome is ShotOutcome.ALREADY_SHOT:
        logger.warning("ai_repeat_shot x=%d y=%d", coord.x, coord.y)
    session.player_grid = report.grid
    _record(session, f"AI fired at ({coord.x}, {coord.y}): {report.outcome.value.lower()}.")
    session.turn = Turn.PLAYER
    if all_ships_sunk(session.player_grid):
        _finish(session, Turn.AI, "AI wins.")
    return coord, report.outcome


def _check_player_grid(player_grid: np.ndarray, agent: AIStrategy) -> None:
    valid, reason = validate_grid(player_grid, agent.fleet)
    if not valid:
        logger.warning("player_grid_rejected reason=%s", reason)
        raise ValueError(reason)


def _record(session: MatchSession, message: str) -> None:
    session.last_message = message
    session.history.append(message)
    logger.debug("match_event message=%s", message)


def _finish(session: MatchSession, winner: Turn, message: str) -> None:
    session.winner = winner
    session.phase = MatchPhase.GAME_OVER
    _record(session, message)
    logger.info("match_over winner=%s total_shots=%d", winner.value, len(session.history) - 1)
