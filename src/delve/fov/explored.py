from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import AbstractSet, Dict, FrozenSet, Mapping

from ..map.geometry import Position
from ..map.model import MapModel

logger = logging.getLogger(__name__)


class VisibilityState(str, Enum):
    UNKNOWN = "unknown"         # never seen
    REMEMBERED = "remembered"   # seen before but not currently visible
    VISIBLE = "visible"         # currently visible


VisibilityMap = Dict[Position, VisibilityState]


@dataclass(frozen=True)
class ExploredDelta:
    newly_visible: FrozenSet[Position]
    newly_remembered: FrozenSet[Position]


def initial_visibility(grid: MapModel) -> VisibilityMap:
    """Every position of a freshly loaded level starts UNKNOWN."""
    return {p: VisibilityState.UNKNOWN for p in grid.positions()}


def update_explored(visibility: Mapping[Position, VisibilityState], visible: AbstractSet[Position]) -> VisibilityMap:
    """
    Return the visibility map after one field-of-view update.

    Positions in ``visible`` become VISIBLE; positions that were VISIBLE and
    are not in ``visible`` drop to REMEMBERED. Nothing ever returns to UNKNOWN.
    The input mapping is left untouched.
    """
    updated: VisibilityMap = dict(visibility)
    for position, state in visibility.items():
        if state is VisibilityState.VISIBLE and position not in visible:
            updated[position] = VisibilityState.REMEMBERED
    for position in visible:
        updated[position] = VisibilityState.VISIBLE
    return updated


def diff_explored(before: Mapping[Position, VisibilityState], after: Mapping[Position, VisibilityState]) -> ExploredDelta:
    """Positions that became VISIBLE or REMEMBERED between two visibility maps."""
    newly_visible = set()
    newly_remembered = set()
    for position, state in after.items():
        previous = before.get(position, VisibilityState.UNKNOWN)
        if state is previous:
            continue
        if state is VisibilityState.VISIBLE:
            newly_visible.add(position)
        elif state is VisibilityState.REMEMBERED:
            newly_remembered.add(position)
    return ExploredDelta(frozenset(newly_visible), frozenset(newly_remembered))


def positions_in(visibility: Mapping[Position, VisibilityState], state: VisibilityState) -> FrozenSet[Position]:
    return frozenset(p for p, s in visibility.items() if s is state)
