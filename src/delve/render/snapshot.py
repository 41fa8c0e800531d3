from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

from ..fov.explored import VisibilityState, positions_in
from ..map.geometry import Position
from ..map.model import MapView
from ..turn.state import GameState


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of a GameState between turns, for renderers."""

    visible: FrozenSet[Position]
    remembered: FrozenSet[Position]
    tiles: MapView
    actor_position: Position
    turn_count: int
    hp: int
    max_hp: int


def snapshot(state: GameState) -> RenderSnapshot:
    # The map behind a GameState is never mutated once a turn has produced
    # it, so the view stays consistent after later turns.
    return RenderSnapshot(
        visible=positions_in(state.visibility, VisibilityState.VISIBLE),
        remembered=positions_in(state.visibility, VisibilityState.REMEMBERED),
        tiles=state.map.view(),
        actor_position=state.actor_position,
        turn_count=state.turn_count,
        hp=state.actor.hp,
        max_hp=state.actor.max_hp,
    )
