"""Logging configuration for exoforge."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "exoforge"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class LoggerConfig:
    """Configuration for library logging."""

    level: int = logging.WARNING

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        if not settings_path.exists():
            return cls()
        try:
            data = json.loads(settings_path.read_text())
        except json.JSONDecodeError:
            return cls()
        level_name = str(data.get("logLevel", "WARNING")).upper()
        return cls(level=getattr(logging, level_name, logging.WARNING))


def init_logger(
    settings_path: Optional[Path] = None, config: Optional[LoggerConfig] = None
) -> logging.Logger:
    """
    Attach a stdout handler to the package logger. The level comes from
    ``config`` if given, otherwise from the ``logLevel`` key of a JSON
    settings file.
    """
    if config is None:
        config = LoggerConfig.from_settings(settings_path or Path("settings.json"))
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(config.level)
    if not any(getattr(h, "_exoforge", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._exoforge = True
        logger.addHandler(handler)
    return logger
