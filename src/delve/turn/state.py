from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import EngineConfig
from ..errors import Blocked, OutOfBounds
from ..fov import shadowcast
from ..fov.explored import VisibilityMap, initial_visibility, update_explored
from ..map.geometry import Position
from ..map.model import MapModel
from ..map.tiles import CursedFloor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActorStats:
    hp: int
    max_hp: int
    sight_radius: int
    cursed: bool = False

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    def take_damage(self, amount: int) -> "ActorStats":
        return ActorStats(max(0, self.hp - amount), self.max_hp, self.sight_radius, self.cursed)


@dataclass
class GameState:
    """Everything one level instance needs between turns.

    A GameState has a single owner: the caller driving the TurnController.
    ``advance_turn`` never mutates the state it receives; it returns a new one.
    """

    map: MapModel
    visibility: VisibilityMap
    actor_position: Position
    actor: ActorStats
    config: EngineConfig = field(default_factory=EngineConfig)
    turn_count: int = 0

    @property
    def effective_sight_radius(self) -> int:
        if self.actor.cursed:
            return min(self.actor.sight_radius, self.config.cursed_sight_radius)
        return self.actor.sight_radius


def new_game(grid: MapModel, start: Position, config: Optional[EngineConfig] = None) -> GameState:
    """Create the GameState for a freshly loaded level and compute the first field of view."""
    config = config or EngineConfig()
    if not grid.in_bounds(start):
        raise OutOfBounds(start, grid.width, grid.height)
    if not grid.is_walkable(start):
        raise Blocked(f"Actor cannot start on a non-walkable tile at {start}", start)

    cursed = isinstance(grid.kind_at(start), CursedFloor)
    actor = ActorStats(hp=config.max_hp, max_hp=config.max_hp, sight_radius=config.sight_radius, cursed=cursed)
    state = GameState(
        map=grid,
        visibility=initial_visibility(grid),
        actor_position=start,
        actor=actor,
        config=config,
    )
    visible = shadowcast.compute(grid, start, state.effective_sight_radius)
    state.visibility = update_explored(state.visibility, visible)
    logger.info("New game at %s on %dx%d map (%d tiles visible)", start, grid.width, grid.height, len(visible))
    return state
