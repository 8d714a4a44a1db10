"""Runtime data paths."""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def resolve_app_data_root() -> Path:
    """``BROADSIDE_APP_DATA_DIR`` (relative to the project root) or ``<root>/appdata``."""
    return _resolve_dir("BROADSIDE_APP_DATA_DIR", PROJECT_ROOT, "appdata")


def resolve_logs_dir() -> Path:
    """``BROADSIDE_LOG_DIR`` (relative to app data) or ``<app data>/logs``."""
    return _resolve_dir("BROADSIDE_LOG_DIR", resolve_app_data_root(), "logs")


def _resolve_dir(var_name: str, base: Path, default: str) -> Path:
    configured = Path(os.getenv(var_name, "").strip() or default)
    return configured if configured.is_absolute() else base / configured
