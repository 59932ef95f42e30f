"""Logging setup driven by the ``logging`` config section."""

from __future__ import annotations

import logging
from pathlib import Path

from railtrack.config import LoggingConfig

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILENAME = "railtrack.log"


def configure_logging(config: LoggingConfig) -> None:
    """Attach stream (and optional file) handlers to the root logger."""
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.level}")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)


__all__ = ["configure_logging"]
