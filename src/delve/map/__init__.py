from .geometry import DIRECTIONS, Position
from .loader import LoadedLevel, load_level, load_map_text, parse_map
from .model import MapModel, MapView
from .tiles import (
    TILE_KINDS,
    CursedFloor,
    Door,
    Floor,
    Obelisk,
    Pit,
    PressurePlate,
    Tile,
    TileKind,
    Wall,
)

__all__ = [
    "DIRECTIONS",
    "Position",
    "LoadedLevel",
    "load_level",
    "load_map_text",
    "parse_map",
    "MapModel",
    "MapView",
    "TILE_KINDS",
    "CursedFloor",
    "Door",
    "Floor",
    "Obelisk",
    "Pit",
    "PressurePlate",
    "Tile",
    "TileKind",
    "Wall",
]
