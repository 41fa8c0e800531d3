from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..errors import InvalidTransition, OutOfBounds
from . import tiles
from .geometry import Position
from .tiles import Tile, TileKind

logger = logging.getLogger(__name__)


class MapModel:
    """
    Row-major tile grid plus per-tile interaction state.

    Tiles are stored in a flat list indexed by ``y * width + x`` so that every
    position lookup is O(1). The kind of each tile is fixed once the map is
    built; ``set_tile_state`` only swaps in a new value of the same variant.

    ``plate_links`` maps a pressure plate position to the door positions it
    opens when triggered.
    """

    def __init__(
        self,
        width: int,
        height: int,
        kinds: Sequence[TileKind],
        plate_links: Optional[Mapping[Position, Sequence[Position]]] = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("MapModel width/height must be > 0")
        if len(kinds) != width * height:
            raise ValueError(f"Expected {width * height} tiles, got {len(kinds)}")
        self._width = width
        self._height = height
        self._kinds: List[TileKind] = list(kinds)
        self._links: Dict[Position, Tuple[Position, ...]] = {
            plate: tuple(doors) for plate, doors in (plate_links or {}).items()
        }
        logger.debug("MapModel created: %dx%d, %d plate links", width, height, len(self._links))

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def plate_links(self) -> Mapping[Position, Tuple[Position, ...]]:
        return dict(self._links)

    def linked_doors(self, plate: Position) -> Tuple[Position, ...]:
        return self._links.get(plate, ())

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self._width and 0 <= position.y < self._height

    def _index(self, position: Position) -> int:
        if not self.in_bounds(position):
            raise OutOfBounds(position, self._width, self._height)
        return position.y * self._width + position.x

    # ---- Query -----------------------------------------------------------
    def tile_at(self, position: Position) -> Tile:
        return Tile(kind=self._kinds[self._index(position)], position=position)

    def kind_at(self, position: Position) -> TileKind:
        return self._kinds[self._index(position)]

    def is_opaque(self, position: Position) -> bool:
        return tiles.is_opaque(self.kind_at(position))

    def is_walkable(self, position: Position) -> bool:
        return tiles.is_walkable(self.kind_at(position))

    def neighbor(self, position: Position, dx: int, dy: int) -> Optional[Position]:
        """The position offset by (dx, dy), or None when it falls off the map."""
        target = position.offset(dx, dy)
        return target if self.in_bounds(target) else None

    def neighbors(self, position: Position) -> Iterator[Position]:
        for n in position.neighbors8():
            if self.in_bounds(n):
                yield n

    def positions(self) -> Iterator[Position]:
        """All positions in load (row-major) order."""
        for y in range(self._height):
            for x in range(self._width):
                yield Position(x, y)

    def tiles(self) -> Iterator[Tile]:
        for position in self.positions():
            yield Tile(kind=self._kinds[position.y * self._width + position.x], position=position)

    # ---- Mutation --------------------------------------------------------
    def set_tile_state(self, position: Position, new_kind: TileKind) -> None:
        """Replace the internal state of the tile at ``position``.

        The variant of ``new_kind`` must match the current tile; a door stays a
        door, a plate stays a plate.
        """
        idx = self._index(position)
        current = self._kinds[idx]
        if type(current) is not type(new_kind):
            raise InvalidTransition(
                f"Cannot change {tiles.kind_name(current)} at {position} into {tiles.kind_name(new_kind)}"
            )
        self._kinds[idx] = new_kind
        logger.debug("Tile %s state set to %r", position, new_kind)

    # ---- Export / Compare -----------------------------------------------
    def copy(self) -> "MapModel":
        return MapModel(self._width, self._height, self._kinds, self._links)

    def view(self) -> "MapView":
        return MapView(self)

    def to_str_lines(self) -> List[str]:
        lines: List[str] = []
        for y in range(self._height):
            row = self._kinds[y * self._width:(y + 1) * self._width]
            lines.append("".join(tiles.glyph(k) for k in row))
        return lines

    def snapshot(self) -> Tuple[TileKind, ...]:
        """Hashable snapshot of all tile states for equality tests."""
        return tuple(self._kinds)

    def __repr__(self) -> str:
        return f"MapModel({self._width}x{self._height})"


class MapView:
    """Read-only access to a MapModel for render consumers."""

    def __init__(self, model: MapModel) -> None:
        self._model = model

    @property
    def width(self) -> int:
        return self._model.width

    @property
    def height(self) -> int:
        return self._model.height

    def in_bounds(self, position: Position) -> bool:
        return self._model.in_bounds(position)

    def tile_at(self, position: Position) -> Tile:
        return self._model.tile_at(position)

    def is_opaque(self, position: Position) -> bool:
        return self._model.is_opaque(position)

    def is_walkable(self, position: Position) -> bool:
        return self._model.is_walkable(position)

    def tiles(self) -> Iterator[Tile]:
        return self._model.tiles()

    def to_str_lines(self) -> List[str]:
        return self._model.to_str_lines()
