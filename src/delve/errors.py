from __future__ import annotations

from typing import Optional


class DelveError(Exception):
    """Base error for the Delve dungeon engine."""


class OutOfBounds(DelveError):
    """Raised when a position lies outside the map grid."""

    def __init__(self, position: object, width: int, height: int) -> None:
        super().__init__(f"Position {position} out of bounds for {width}x{height} map")
        self.position = position
        self.width = width
        self.height = height


class InvalidTransition(DelveError):
    """Raised when a tile state change does not match the tile's kind."""


class Blocked(DelveError):
    """Raised when a movement or interaction precondition is not met."""

    def __init__(self, reason: str, position: Optional[object] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.position = position


class ActorDefeated(Blocked):
    """Raised when a defeated actor attempts another turn."""


class MapParseError(DelveError):
    """Raised when a map or level file cannot be parsed."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
        where = ""
        if line is not None:
            where = f" (line {line}" + (f", column {column})" if column is not None else ")")
        super().__init__(message + where)
        self.line = line
        self.column = column


class TurnInProgress(DelveError):
    """Raised when a turn is started while another one is still resolving."""


class ConfigError(DelveError):
    """Raised for invalid engine configuration values."""
