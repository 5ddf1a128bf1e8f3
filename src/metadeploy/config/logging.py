"""Shared logging helpers for metadeploy."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .errors import ConfigurationError

DEFAULT_LOG_LEVEL = logging.INFO


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: int = DEFAULT_LOG_LEVEL


def get_logging_config() -> LoggingConfig:
    """Read the log level name from ``METADEPLOY_LOG_LEVEL``."""

    name = os.getenv("METADEPLOY_LOG_LEVEL")
    if name is None or not name.strip():
        return LoggingConfig()
    level = logging.getLevelNamesMapping().get(name.strip().upper())
    if level is None:
        raise ConfigurationError(f"Unknown log level: {name}")
    return LoggingConfig(level=level)


def configure_logging(*, level: int = DEFAULT_LOG_LEVEL, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for CLI output. Pass ``force=True`` to
    reconfigure during tests or specialised entry points.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
