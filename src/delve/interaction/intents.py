from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..map.geometry import DIRECTIONS, Position


class IntentKind(str, Enum):
    MOVE = "move"
    OPEN = "open"
    CLOSE = "close"
    EXAMINE = "examine"


@dataclass(frozen=True)
class Intent:
    """What the actor wants to do this turn, aimed at a specific tile."""

    kind: IntentKind
    target: Position

    @classmethod
    def move(cls, target: Position) -> "Intent":
        return cls(IntentKind.MOVE, target)

    @classmethod
    def open(cls, target: Position) -> "Intent":
        return cls(IntentKind.OPEN, target)

    @classmethod
    def close(cls, target: Position) -> "Intent":
        return cls(IntentKind.CLOSE, target)

    @classmethod
    def examine(cls, target: Position) -> "Intent":
        return cls(IntentKind.EXAMINE, target)

    @classmethod
    def toward(cls, kind: IntentKind, origin: Position, direction: str) -> "Intent":
        """Build an intent aimed at the neighbour of ``origin`` in a named direction."""
        try:
            dx, dy = DIRECTIONS[direction.lower()]
        except KeyError:
            raise ValueError(f"Unknown direction {direction!r}; expected one of {sorted(DIRECTIONS)}") from None
        return cls(kind, origin.offset(dx, dy))
