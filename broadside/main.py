"""Application entry point: headless AI-vs-AI matches."""

from __future__ import annotations

import argparse
import logging
import random

from broadside.game.ai.targeting import TargetingAgent
from broadside.game.core.board import render_grid
from broadside.game.core.models import FleetPlacementError
from broadside.game.core.rules import MatchPhase, MatchSession, Turn, ai_fire, player_fire, start_match
from broadside.game.infra.config import GameSettings, load_default_env_files, load_game_settings
from broadside.game.infra.logging import setup_logging

logger = logging.getLogger(__name__)


def play_headless_match(settings: GameSettings, rng: random.Random) -> MatchSession:
    """Play one match where a second agent stands in for the human."""
    stand_in = TargetingAgent(
        random.Random(rng.random()),
        fleet=settings.fleet,
        hunt_attempts=settings.hunt_attempts,
        placement_attempts=settings.placement_attempts,
    )
    opponent = TargetingAgent(
        random.Random(rng.random()),
        fleet=settings.fleet,
        hunt_attempts=settings.hunt_attempts,
        placement_attempts=settings.placement_attempts,
    )
    session = start_match(stand_in.place_ships(), opponent)
    while session.phase is MatchPhase.PLAYING:
        if session.turn is Turn.PLAYER:
            shot = stand_in.select_shot(session.ai_grid)
            player_fire(session, shot.x, shot.y)
        else:
            ai_fire(session)
    return session


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="broadside", description="Run headless Broadside matches.")
    parser.add_argument("--games", type=int, default=1, help="Number of matches to play.")
    parser.add_argument("--seed", type=int, default=None, help="Override BROADSIDE_SEED.")
    parser.add_argument("--show-boards", action="store_true", help="Print final boards.")
    parser.add_argument("--no-log-file", action="store_true", help="Log to console only.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the Broadside headless runner."""
    args = _build_parser().parse_args(argv)
    load_default_env_files(override_existing=False)
    setup_logging(to_file=not args.no_log_file)
    settings = load_game_settings()
    seed = args.seed if args.seed is not None else settings.seed
    rng = random.Random(seed)
    logger.info("headless_run games=%d seed=%s fleet=%s", args.games, seed, list(settings.fleet))

    wins = {Turn.PLAYER: 0, Turn.AI: 0}
    for index in range(args.games):
        try:
            session = play_headless_match(settings, rng)
        except FleetPlacementError:
            logger.exception("headless_run_aborted game=%d", index + 1)
            return 2
        assert session.winner is not None
        wins[session.winner] += 1
        logger.info(
            "game_finished game=%d winner=%s turns=%d", index + 1, session.winner.value, len(session.history)
        )
        if args.show_boards:
            print(f"Game {index + 1}: {session.last_message}")
            print("Player board:\n" + render_grid(session.player_grid))
            print("AI board:\n" + render_grid(session.ai_grid))

    print(f"player={wins[Turn.PLAYER]} ai={wins[Turn.AI]}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
