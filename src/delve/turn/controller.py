from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, FrozenSet, List, Tuple

from ..errors import ActorDefeated, OutOfBounds, TurnInProgress
from ..fov import shadowcast
from ..fov.explored import diff_explored, update_explored
from ..interaction.events import Event, EventKind
from ..interaction.intents import Intent
from ..interaction.resolver import InteractionRules, resolve
from ..map.geometry import Position
from ..map.tiles import CursedFloor
from .state import ActorStats, GameState

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    IDLE = auto()
    VALIDATING_MOVE = auto()
    RESOLVING = auto()
    UPDATING_VISIBILITY = auto()


@dataclass(frozen=True)
class TurnReport:
    """Outcome of one completed turn.

    Attributes:
        turn: The turn number this report closes (1 for the first turn).
        intent: The intent that was resolved.
        events: Interaction events in the order they happened.
        newly_visible: Positions that became visible this turn.
        newly_remembered: Positions that dropped from visible to remembered.
        actor_position: Where the actor stands at the end of the turn.
        hp: Actor hit points at the end of the turn.
    """

    turn: int
    intent: Intent
    events: Tuple[Event, ...]
    newly_visible: FrozenSet[Position]
    newly_remembered: FrozenSet[Position]
    actor_position: Position
    hp: int

    def kinds(self) -> List[EventKind]:
        return [e.kind for e in self.events]


TurnListener = Callable[[TurnReport, GameState], None]


class TurnController:
    """Runs turns one at a time: validate, resolve, update visibility, report.

    A turn either completes as a whole or raises and leaves the caller's
    state untouched: the map is copied before any tile mutation and the new
    GameState is only assembled once every step has succeeded.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._phase = TurnPhase.IDLE
        self._listeners: List[TurnListener] = []

    @property
    def phase(self) -> TurnPhase:
        return self._phase

    def add_listener(self, listener: TurnListener) -> None:
        """Subscribe to completed turns (game log, renderers, telemetry)."""
        self._listeners.append(listener)

    def remove_listener(self, listener: TurnListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, report: TurnReport, state: GameState) -> None:
        for listener in list(self._listeners):
            try:
                listener(report, state)
            except Exception as ex:  # noqa: BLE001 - listeners shouldn't crash engine
                logger.exception("Turn listener errored on turn %d: %s", report.turn, ex)

    def advance_turn(self, state: GameState, intent: Intent) -> Tuple[GameState, TurnReport]:
        """Resolve one intent and return the next state with its report.

        Raises OutOfBounds, Blocked or ActorDefeated for rejected intents and
        InvalidTransition for broken tile rules; ``state`` is unchanged in
        every case.
        """
        if not self._lock.acquire(blocking=False):
            raise TurnInProgress("Another turn is still being resolved")
        try:
            new_state, report = self._run(state, intent)
        finally:
            self._phase = TurnPhase.IDLE
            self._lock.release()
        self._emit(report, new_state)
        return new_state, report

    def _run(self, state: GameState, intent: Intent) -> Tuple[GameState, TurnReport]:
        self._phase = TurnPhase.VALIDATING_MOVE
        if state.actor.is_defeated:
            raise ActorDefeated("The actor has been defeated", state.actor_position)
        if not state.map.in_bounds(intent.target):
            raise OutOfBounds(intent.target, state.map.width, state.map.height)

        self._phase = TurnPhase.RESOLVING
        rules = InteractionRules(pit_damage=state.config.pit_damage, curse_damage=state.config.curse_damage)
        resolution = resolve(state.map, state.actor_position, intent.target, intent, rules)
        grid = state.map.copy()
        for position, kind in resolution.mutations:
            grid.set_tile_state(position, kind)

        position = resolution.destination or state.actor_position
        actor = state.actor.take_damage(resolution.damage)
        actor = ActorStats(actor.hp, actor.max_hp, actor.sight_radius, isinstance(grid.kind_at(position), CursedFloor))

        self._phase = TurnPhase.UPDATING_VISIBILITY
        new_state = GameState(
            map=grid,
            visibility=state.visibility,
            actor_position=position,
            actor=actor,
            config=state.config,
            turn_count=state.turn_count + 1,
        )
        visible = shadowcast.compute(grid, position, new_state.effective_sight_radius)
        new_state.visibility = update_explored(state.visibility, visible)
        delta = diff_explored(state.visibility, new_state.visibility)

        report = TurnReport(
            turn=new_state.turn_count,
            intent=intent,
            events=resolution.events,
            newly_visible=delta.newly_visible,
            newly_remembered=delta.newly_remembered,
            actor_position=position,
            hp=actor.hp,
        )
        logger.debug(
            "Turn %d: %s -> %s, actor at %s, hp=%d, +%d visible, +%d remembered",
            report.turn,
            intent.kind.value,
            [k.value for k in report.kinds()],
            position,
            actor.hp,
            len(delta.newly_visible),
            len(delta.newly_remembered),
        )
        if actor.is_defeated:
            logger.info("Actor defeated on turn %d at %s", report.turn, position)
        return new_state, report
