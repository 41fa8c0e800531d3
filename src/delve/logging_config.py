"""Logging setup for the ``delve`` command line."""

import logging
import os

ENV_LOG_LEVEL = "DELVE_LOG_LEVEL"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Loggers that write a line per scan, resolution or turn.
TURN_LOGGERS = ("delve.fov", "delve.interaction", "delve.turn")


def resolve_level(debug: bool = False) -> int:
    """``--debug`` wins, then DELVE_LOG_LEVEL, then WARNING."""
    if debug:
        return logging.DEBUG
    name = os.getenv(ENV_LOG_LEVEL)
    if not name:
        return logging.WARNING
    level = getattr(logging, name.upper(), None)
    if not isinstance(level, int):
        logging.getLogger(__name__).warning("Ignoring unknown %s=%r", ENV_LOG_LEVEL, name)
        return logging.WARNING
    return level


def configure_logging(debug: bool = False) -> int:
    """Configure the root logger and return the level in use.

    Per-turn debug output from the FOV, interaction and turn loggers is held
    at INFO unless ``debug`` is set, so DELVE_LOG_LEVEL=DEBUG shows loading and
    config detail without a line for every tile scan.
    """
    level = resolve_level(debug)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    turn_level = logging.DEBUG if debug else max(level, logging.INFO)
    for name in TURN_LOGGERS:
        logging.getLogger(name).setLevel(turn_level)
    return level
