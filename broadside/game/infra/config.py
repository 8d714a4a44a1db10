"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from broadside.game.ai.targeting import DEFAULT_HUNT_ATTEMPTS
from broadside.game.core.fleet import DEFAULT_PLACEMENT_ATTEMPTS
from broadside.game.core.models import DEFAULT_FLEET


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Typed game settings resolved from the environment."""

    fleet: tuple[int, ...] = DEFAULT_FLEET
    seed: int | None = None
    placement_attempts: int = DEFAULT_PLACEMENT_ATTEMPTS
    hunt_attempts: int = DEFAULT_HUNT_ATTEMPTS


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Precedence is left-to-right because later loads may overwrite previous values.
    Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env.app (legacy fallback)
    4) .env.app.local (legacy fallback)
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env.app",
            ".env.app.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def load_game_settings() -> GameSettings:
    """Read ``BROADSIDE_*`` variables into :class:`GameSettings`."""
    return GameSettings(
        fleet=_env_fleet("BROADSIDE_FLEET", DEFAULT_FLEET),
        seed=_env_int("BROADSIDE_SEED", None),
        placement_attempts=_env_positive_int("BROADSIDE_PLACEMENT_ATTEMPTS", DEFAULT_PLACEMENT_ATTEMPTS),
        hunt_attempts=_env_positive_int("BROADSIDE_HUNT_ATTEMPTS", DEFAULT_HUNT_ATTEMPTS),
    )


def _env_fleet(name: str, default: tuple[int, ...]) -> tuple[int, ...]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        lengths = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a comma-separated list of integers, got {raw!r}.") from exc
    if not lengths or any(length <= 0 for length in lengths):
        raise ValueError(f"{name} must list positive ship lengths, got {raw!r}.")
    return lengths


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}.") from exc


def _env_positive_int(name: str, default: int) -> int:
    value = _env_int(name, default)
    if value is None or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}.")
    return value


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path
