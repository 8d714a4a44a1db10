import random

import pytest

from broadside.game.core.rules import MatchPhase
from broadside.game.infra.config import GameSettings
from broadside.main import main, play_headless_match


def test_play_headless_match_reaches_game_over() -> None:
    session = play_headless_match(GameSettings(), random.Random(21))
    assert session.phase is MatchPhase.GAME_OVER
    assert session.winner is not None


def test_main_runs_requested_games(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BROADSIDE_FLEET", raising=False)
    assert main(["--games", "2", "--seed", "3", "--no-log-file", "--show-boards"]) == 0
    out = capsys.readouterr().out
    assert "Game 2:" in out
    assert out.strip().splitlines()[-1].startswith("player=")


def test_main_reports_unplaceable_fleet(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BROADSIDE_FLEET", "10,10,10,10,10,10")
    monkeypatch.setenv("BROADSIDE_PLACEMENT_ATTEMPTS", "50")
    assert main(["--seed", "1", "--no-log-file"]) == 2


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch) -> None:
    for name in ("BROADSIDE_SEED", "BROADSIDE_HUNT_ATTEMPTS", "BROADSIDE_PLACEMENT_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)
