"""Interaction state machine per tile kind.

``resolve`` never mutates the map. It returns a Resolution describing the
tile state changes to apply, the events to report, and where the actor ends
up. The turn controller applies the mutations once the whole turn is known
to succeed.

Rules are looked up by tile variant in ``TILE_RULES``; every variant in
``TILE_KINDS`` has exactly one entry.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Type

from ..errors import Blocked, InvalidTransition, OutOfBounds
from ..map.geometry import Position
from ..map.model import MapModel
from ..map.tiles import CursedFloor, Door, Floor, Obelisk, Pit, PressurePlate, TileKind, Wall, kind_name
from .events import Event, EventKind
from .intents import Intent, IntentKind

logger = logging.getLogger(__name__)

OBELISK_DESCRIPTION = "A black obelisk, cold to the touch. Faint runes crawl across its surface."


@dataclass(frozen=True)
class InteractionRules:
    pit_damage: int = 10
    curse_damage: int = 1


@dataclass(frozen=True)
class Resolution:
    target: Position
    mutations: Tuple[Tuple[Position, TileKind], ...] = ()
    events: Tuple[Event, ...] = ()
    destination: Optional[Position] = None

    @property
    def new_tile_state(self) -> Optional[TileKind]:
        """The new state of the target tile, or None when it is unchanged."""
        for position, kind in self.mutations:
            if position == self.target:
                return kind
        return None

    @property
    def damage(self) -> int:
        return sum(e.damage for e in self.events)


@dataclass(frozen=True)
class _Context:
    grid: MapModel
    actor: Position
    target: Position
    intent: Intent
    kind: TileKind
    rules: InteractionRules

    def no_effect(self, position: Optional[Position] = None) -> Event:
        return Event(EventKind.NO_EFFECT, position or self.target)

    def enter(self, *entry_events: Event, mutations: Tuple[Tuple[Position, TileKind], ...] = ()) -> Resolution:
        events = (Event(EventKind.MOVED, self.target),) + entry_events
        return Resolution(self.target, mutations, events, destination=self.target)

    def report(self, *events: Event, mutations: Tuple[Tuple[Position, TileKind], ...] = ()) -> Resolution:
        return Resolution(self.target, mutations, events)

    def blocked(self, reason: str) -> Blocked:
        return Blocked(reason, self.target)


def resolve(
    grid: MapModel,
    actor: Position,
    target: Position,
    intent: Intent,
    rules: Optional[InteractionRules] = None,
) -> Resolution:
    """Resolve ``intent`` from the actor at ``actor`` against the tile at ``target``.

    Raises OutOfBounds for targets off the map, Blocked when a precondition
    fails, and InvalidTransition if a tile kind has no rules.
    """
    if not grid.in_bounds(target):
        raise OutOfBounds(target, grid.width, grid.height)
    kind = grid.kind_at(target)
    if not actor.is_adjacent(target) and not _is_door_no_op(kind, intent):
        raise Blocked(f"{target} is not adjacent to the actor at {actor}", target)

    handler = TILE_RULES.get(type(kind))
    if handler is None:
        raise InvalidTransition(f"No interaction rules for {kind_name(kind)}")

    resolution = handler(_Context(grid, actor, target, intent, kind, rules or InteractionRules()))
    logger.debug(
        "Resolved %s on %s at %s -> %s",
        intent.kind.value,
        kind_name(kind),
        target,
        [e.kind.value for e in resolution.events],
    )
    return resolution


def _is_door_no_op(kind: TileKind, intent: Intent) -> bool:
    """Opening an open door or closing a closed one needs no reach."""
    if not isinstance(kind, Door):
        return False
    if intent.kind is IntentKind.OPEN:
        return kind.open
    return intent.kind is IntentKind.CLOSE and not kind.open


def _plain(ctx: _Context, name: str) -> Resolution:
    """Shared rules for intents that a tile has no special behaviour for."""
    if ctx.intent.kind is IntentKind.EXAMINE:
        return ctx.report(ctx.no_effect())
    raise ctx.blocked(f"There is no door to {ctx.intent.kind.value} on the {name}")


def _floor(ctx: _Context) -> Resolution:
    if ctx.intent.kind is IntentKind.MOVE:
        return ctx.enter()
    return _plain(ctx, "floor")


def _wall(ctx: _Context) -> Resolution:
    if ctx.intent.kind is IntentKind.MOVE:
        raise ctx.blocked("A wall blocks the way")
    return _plain(ctx, "wall")


def _door(ctx: _Context) -> Resolution:
    door = ctx.kind
    assert isinstance(door, Door)
    intent = ctx.intent.kind
    if intent is IntentKind.MOVE:
        if not door.open:
            raise ctx.blocked("The door is closed")
        return ctx.enter()
    if intent is IntentKind.OPEN:
        if door.open:
            return ctx.report(ctx.no_effect())
        return ctx.report(
            Event(EventKind.DOOR_OPENED, ctx.target),
            mutations=((ctx.target, Door(open=True)),),
        )
    if intent is IntentKind.CLOSE:
        if not door.open:
            return ctx.report(ctx.no_effect())
        return ctx.report(
            Event(EventKind.DOOR_CLOSED, ctx.target),
            mutations=((ctx.target, Door(open=False)),),
        )
    return ctx.report(ctx.no_effect())


def _pit(ctx: _Context) -> Resolution:
    pit = ctx.kind
    assert isinstance(pit, Pit)
    if ctx.intent.kind is not IntentKind.MOVE:
        return _plain(ctx, "pit")
    if pit.triggered:
        return ctx.enter(ctx.no_effect())
    return ctx.enter(
        Event(EventKind.FELL_INTO_PIT, ctx.target, damage=ctx.rules.pit_damage),
        mutations=((ctx.target, Pit(triggered=True)),),
    )


def _cursed_floor(ctx: _Context) -> Resolution:
    if ctx.intent.kind is not IntentKind.MOVE:
        return _plain(ctx, "cursed floor")
    return ctx.enter(Event(EventKind.CURSED_EFFECT_TRIGGERED, ctx.target, damage=ctx.rules.curse_damage))


def _pressure_plate(ctx: _Context) -> Resolution:
    plate = ctx.kind
    assert isinstance(plate, PressurePlate)
    if ctx.intent.kind is not IntentKind.MOVE:
        return _plain(ctx, "pressure plate")
    if plate.triggered:
        return ctx.enter(ctx.no_effect())

    mutations: List[Tuple[Position, TileKind]] = [(ctx.target, PressurePlate(triggered=True))]
    events: List[Event] = [Event(EventKind.PLATE_TRIGGERED, ctx.target)]
    for door_pos in ctx.grid.linked_doors(ctx.target):
        door = ctx.grid.kind_at(door_pos)
        if not isinstance(door, Door):
            raise InvalidTransition(f"Plate at {ctx.target} is linked to {kind_name(door)} at {door_pos}")
        if door.open:
            events.append(ctx.no_effect(door_pos))
        else:
            mutations.append((door_pos, Door(open=True)))
            events.append(Event(EventKind.DOOR_OPENED, door_pos))
    return ctx.enter(*events, mutations=tuple(mutations))


def _obelisk(ctx: _Context) -> Resolution:
    intent = ctx.intent.kind
    if intent is IntentKind.MOVE:
        raise ctx.blocked("The obelisk blocks the way")
    if intent is IntentKind.EXAMINE:
        return ctx.report(Event(EventKind.EXAMINED, ctx.target, detail=OBELISK_DESCRIPTION))
    return _plain(ctx, "obelisk")


TILE_RULES: Dict[Type, Callable[[_Context], Resolution]] = {
    Floor: _floor,
    Wall: _wall,
    Door: _door,
    Pit: _pit,
    CursedFloor: _cursed_floor,
    PressurePlate: _pressure_plate,
    Obelisk: _obelisk,
}


def reset_tile(grid: MapModel, position: Position) -> None:
    """Re-arm a spent pit or pressure plate. Applied outside of turn resolution."""
    kind = grid.kind_at(position)
    if isinstance(kind, Pit):
        grid.set_tile_state(position, Pit(triggered=False))
    elif isinstance(kind, PressurePlate):
        grid.set_tile_state(position, PressurePlate(triggered=False))
    else:
        raise InvalidTransition(f"{kind_name(kind)} at {position} has no state to reset")
    logger.info("Reset %s at %s", kind_name(kind), position)
