"""Tile kinds as a closed set of tagged variants.

Each variant is a frozen dataclass carrying only the state it needs. Kind
identity (the variant class) never changes for a position once a map is
loaded; only the flags inside a variant do.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Type, Union

from .geometry import Position


@dataclass(frozen=True)
class Floor:
    pass


@dataclass(frozen=True)
class Wall:
    pass


@dataclass(frozen=True)
class Door:
    open: bool = False


@dataclass(frozen=True)
class Pit:
    # Set once the actor has fallen in; only reset out-of-band.
    triggered: bool = False


@dataclass(frozen=True)
class CursedFloor:
    pass


@dataclass(frozen=True)
class PressurePlate:
    triggered: bool = False


@dataclass(frozen=True)
class Obelisk:
    pass


TileKind = Union[Floor, Wall, Door, Pit, CursedFloor, PressurePlate, Obelisk]

TILE_KINDS: Tuple[Type, ...] = (Floor, Wall, Door, Pit, CursedFloor, PressurePlate, Obelisk)


@dataclass(frozen=True)
class Tile:
    kind: TileKind
    position: Position

    @property
    def name(self) -> str:
        return kind_name(self.kind)


def kind_name(kind: TileKind) -> str:
    return type(kind).__name__


def is_opaque(kind: TileKind) -> bool:
    if isinstance(kind, (Wall, Obelisk)):
        return True
    if isinstance(kind, Door):
        return not kind.open
    return False


def is_walkable(kind: TileKind) -> bool:
    if isinstance(kind, (Wall, Obelisk)):
        return False
    if isinstance(kind, Door):
        return kind.open
    return True


def glyph(kind: TileKind) -> str:
    """Map-file symbol for a tile kind in its current state."""
    if isinstance(kind, Door):
        return "/" if kind.open else "+"
    if isinstance(kind, PressurePlate):
        # A triggered plate has no load symbol; render it like an untriggered one.
        return "="
    return _GLYPHS[type(kind)]


_GLYPHS: Dict[Type, str] = {
    Floor: ".",
    Wall: "#",
    Pit: "^",
    CursedFloor: "!",
    Obelisk: "O",
}
