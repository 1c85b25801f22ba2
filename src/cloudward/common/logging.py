"""Logging setup for the cloudward CLI."""

from __future__ import annotations

import logging
import os

# httpx logs every request at INFO; polling loops would drown the CLI output.
_NOISY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(value: str | None, *, default: int = logging.INFO) -> int:
    """Map a level name such as ``"debug"`` or a numeric string to a logging level."""

    if value is None or not value.strip():
        return default
    candidate = value.strip()
    if candidate.isdigit():
        return int(candidate)
    level = logging.getLevelName(candidate.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once.

    When ``level`` is omitted it is read from ``CLOUDWARD_LOG_LEVEL`` and falls back
    to INFO. Pass ``force=True`` to reconfigure during tests.
    """

    effective = level if level is not None else resolve_log_level(os.getenv("CLOUDWARD_LOG_LEVEL"))
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if effective > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
