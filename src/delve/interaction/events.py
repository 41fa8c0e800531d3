from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..map.geometry import Position


class EventKind(str, Enum):
    """Outcomes produced by resolving an intent against a tile."""

    MOVED = "moved"
    DOOR_OPENED = "door_opened"
    DOOR_CLOSED = "door_closed"
    FELL_INTO_PIT = "fell_into_pit"
    CURSED_EFFECT_TRIGGERED = "cursed_effect_triggered"
    PLATE_TRIGGERED = "plate_triggered"
    EXAMINED = "examined"
    NO_EFFECT = "no_effect"


@dataclass(frozen=True)
class Event:
    """A single interaction outcome.

    Attributes:
        kind: What happened.
        position: The tile the event concerns (a linked door for plate effects).
        damage: Hit points the actor loses because of this event.
        detail: Optional human-readable detail (e.g., an examine description).
    """

    kind: EventKind
    position: Position
    damage: int = 0
    detail: Optional[str] = None
