import logging
import random

import numpy as np
import pytest

from broadside.game.ai.targeting import TargetingAgent
from broadside.game.core.board import all_ships_sunk, new_grid, place
from broadside.game.core.models import HIT, MISS, ShotOutcome
from broadside.game.core.rules import MatchPhase, Turn, ai_fire, player_fire, restart, start_match


def test_start_match_places_ai_fleet(fixed_grid) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(3)))
    assert session.phase is MatchPhase.PLAYING
    assert session.turn is Turn.PLAYER
    assert session.winner is None
    assert int(np.count_nonzero(session.ai_grid > 0)) == 16


def test_turns_alternate_and_out_of_turn_is_ignored(fixed_grid) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(4)))
    assert ai_fire(session) is None

    x, y = _empty_cell(session.ai_grid)
    assert player_fire(session, x, y) is ShotOutcome.MISS
    assert session.ai_grid[y, x] == MISS
    assert session.turn is Turn.AI
    assert player_fire(session, 0, 0) is None

    fired = ai_fire(session)
    assert fired is not None
    coord, outcome = fired
    assert session.player_grid[coord.y, coord.x] in (MISS, HIT)
    assert outcome in (ShotOutcome.MISS, ShotOutcome.HIT)
    assert session.turn is Turn.PLAYER
    assert len(session.history) == 2


def test_repeat_player_shot_keeps_turn(fixed_grid) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(5)))
    x, y = _empty_cell(session.ai_grid)
    player_fire(session, x, y)
    ai_fire(session)
    assert player_fire(session, x, y) is ShotOutcome.ALREADY_SHOT
    assert session.turn is Turn.PLAYER


def test_player_wins_when_ai_fleet_destroyed(fixed_grid) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(6)))
    targets = [(int(x), int(y)) for y, x in np.argwhere(session.ai_grid > 0)]
    for x, y in targets:
        assert player_fire(session, x, y) is ShotOutcome.HIT
        if session.phase is MatchPhase.GAME_OVER:
            break
        ai_fire(session)
    assert session.winner is Turn.PLAYER
    assert session.last_message == "You win."
    assert player_fire(session, 0, 0) is None


def test_ai_wins_when_left_to_fire(fixed_grid) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(8)))
    shots = 0
    while session.phase is MatchPhase.PLAYING:
        session.turn = Turn.AI
        assert ai_fire(session) is not None
        shots += 1
    assert shots <= 100
    assert session.winner is Turn.AI
    assert session.last_message == "AI wins."
    assert all_ships_sunk(session.player_grid)


def test_restart_resets_state(fixed_grid) -> None:
    agent = TargetingAgent(random.Random(9))
    session = start_match(fixed_grid, agent)
    x, y = _empty_cell(session.ai_grid)
    player_fire(session, x, y)
    ai_fire(session)
    restart(session, fixed_grid)
    assert session.turn is Turn.PLAYER
    assert session.history == []
    assert not agent.shots
    assert not np.any(session.ai_grid < 0)


def test_start_match_rejects_empty_player_grid() -> None:
    agent = TargetingAgent(random.Random(10))
    with pytest.raises(ValueError, match="do not match"):
        start_match(new_grid(), agent)
    assert not agent.shots


def test_start_match_rejects_touching_ships() -> None:
    grid = place(new_grid(), 0, 0, 2, 1, True)
    grid = place(grid, 1, 1, 2, 2, True)
    with pytest.raises(ValueError, match="touches"):
        start_match(grid, TargetingAgent(random.Random(11), fleet=(2, 2)))


def test_restart_rejects_incomplete_fleet_and_keeps_session(fixed_grid) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(12)))
    x, y = _empty_cell(session.ai_grid)
    player_fire(session, x, y)
    partial = place(new_grid(), 0, 0, 4, 1, True)
    with pytest.raises(ValueError):
        restart(session, partial)
    assert session.turn is Turn.AI
    assert len(session.history) == 1


def _empty_cell(grid: np.ndarray) -> tuple[int, int]:
    y, x = np.argwhere(grid == 0)[0]
    return int(x), int(y)


def test_match_over_logs_total_shots_of_both_sides(fixed_grid, caplog) -> None:
    session = start_match(fixed_grid, TargetingAgent(random.Random(13)))
    caplog.set_level(logging.INFO, logger="broadside.game.core.rules")
    while session.phase is MatchPhase.PLAYING:
        session.turn = Turn.AI
        ai_fire(session)
    records = [r for r in caplog.records if r.getMessage().startswith("match_over")]
    assert len(records) == 1
    assert f"total_shots={len(session.history) - 1}" in records[0].getMessage()
