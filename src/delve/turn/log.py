from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, List, Optional

from ..errors import ActorDefeated, DelveError
from ..interaction.events import Event, EventKind
from ..interaction.intents import Intent, IntentKind
from .controller import TurnController, TurnReport
from .state import GameState

logger = logging.getLogger(__name__)


class MessageType(str, Enum):
    INFO = "info"
    DAMAGE = "damage"


@dataclass(frozen=True)
class GameMessage:
    turn: int
    text: str
    message_type: MessageType = MessageType.INFO


class GameLog:
    """Short FIFO of player-facing messages built from turn reports.

    Keeps at most ``capacity`` messages; the oldest is dropped first.
    """

    def __init__(self, capacity: int = 5) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._messages: Deque[GameMessage] = deque(maxlen=capacity)
        logger.debug("GameLog initialized with capacity=%d", capacity)

    @property
    def capacity(self) -> int:
        return self._messages.maxlen or 0

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._messages)

    def attach(self, controller: TurnController) -> None:
        controller.add_listener(self._on_turn)

    def _on_turn(self, report: TurnReport, state: GameState) -> None:
        self.record_report(report)

    def add(self, turn: int, text: str, message_type: MessageType = MessageType.INFO) -> GameMessage:
        message = GameMessage(turn, text, message_type)
        self._messages.append(message)
        return message

    def record_report(self, report: TurnReport) -> None:
        for event in report.events:
            text = _describe(event)
            if text is None:
                continue
            kind = MessageType.DAMAGE if event.damage > 0 else MessageType.INFO
            self.add(report.turn, text, kind)
        if report.hp <= 0:
            self.add(report.turn, "You died!", MessageType.DAMAGE)

    def record_rejection(self, error: DelveError, intent: Intent, turn: int) -> None:
        """Log an intent the controller refused; the turn did not happen."""
        if isinstance(error, ActorDefeated):
            text = "You are dead."
        elif intent.kind is IntentKind.MOVE:
            text = "You can't walk there."
        else:
            text = "Nothing happens."
        logger.debug("Rejected %s at %s: %s", intent.kind.value, intent.target, error)
        self.add(turn, text)

    def messages(self) -> List[GameMessage]:
        return list(self._messages)

    def lines(self) -> List[str]:
        return [m.text for m in self._messages]


def _describe(event: Event) -> Optional[str]:
    kind = event.kind
    if kind is EventKind.MOVED:
        return None
    if kind is EventKind.DOOR_OPENED:
        return "The door swings open."
    if kind is EventKind.DOOR_CLOSED:
        return "You close the door."
    if kind is EventKind.FELL_INTO_PIT:
        return f"You fall into a pit and take {event.damage} damage!"
    if kind is EventKind.CURSED_EFFECT_TRIGGERED:
        return f"A curse seeps from the floor: you take {event.damage} damage."
    if kind is EventKind.PLATE_TRIGGERED:
        return "Click. A pressure plate sinks under your feet."
    if kind is EventKind.EXAMINED:
        return event.detail or "You examine it closely."
    return "Nothing happens."
