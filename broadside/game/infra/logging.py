"""Application logging setup for the headless runner."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from broadside.game.infra.app_data import resolve_logs_dir

__all__ = ["JsonFormatter", "LoggingConfig", "build_logging_config", "configure_logging", "setup_logging"]

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where and how log records are written."""

    level_name: str = "INFO"
    console_json: bool = False
    file_path: str | None = None


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` fields land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(config: LoggingConfig) -> None:
    """Replace root handlers with a console handler and an optional JSON-lines file."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter() if config.console_json else logging.Formatter(_TEXT_FORMAT))
    root.addHandler(console)

    if config.file_path:
        path = Path(config.file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8", delay=True)
        file_handler.setFormatter(JsonFormatter())
        root.addHandler(file_handler)


def build_logging_config(*, to_file: bool = True) -> LoggingConfig:
    """Build logging config from ``BROADSIDE_LOG_LEVEL``/``LOG_LEVEL`` and ``LOG_FORMAT``."""
    level_name = os.getenv("BROADSIDE_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")).upper()
    file_path = None
    if to_file:
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
        file_path = str(resolve_logs_dir() / f"broadside_run_{stamp}.jsonl")
    return LoggingConfig(
        level_name=level_name,
        console_json=os.getenv("LOG_FORMAT", "text").strip().lower() == "json",
        file_path=file_path,
    )


def setup_logging(*, to_file: bool = True) -> None:
    """Configure application logging from the environment."""
    config = build_logging_config(to_file=to_file)
    configure_logging(config)
    if config.file_path:
        logging.getLogger(__name__).info("logging_file=%s", config.file_path)
