from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Tuple


@dataclass(frozen=True, order=True)
class Position:
    """Grid coordinate. ``x`` is the column, ``y`` the row; (0, 0) is top-left."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def chebyshev(self, other: "Position") -> int:
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def is_adjacent(self, other: "Position") -> bool:
        """True for the eight surrounding cells (never for the position itself)."""
        return self.chebyshev(other) == 1

    def neighbors8(self) -> Iterator["Position"]:
        # Ordered for deterministic traversal
        for dx, dy in DIRECTIONS.values():
            yield self.offset(dx, dy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


# Directions as (dx, dy)
NORTH: Tuple[int, int] = (0, -1)
NORTH_EAST: Tuple[int, int] = (1, -1)
EAST: Tuple[int, int] = (1, 0)
SOUTH_EAST: Tuple[int, int] = (1, 1)
SOUTH: Tuple[int, int] = (0, 1)
SOUTH_WEST: Tuple[int, int] = (-1, 1)
WEST: Tuple[int, int] = (-1, 0)
NORTH_WEST: Tuple[int, int] = (-1, -1)

DIRECTIONS: Dict[str, Tuple[int, int]] = {
    "n": NORTH,
    "ne": NORTH_EAST,
    "e": EAST,
    "se": SOUTH_EAST,
    "s": SOUTH,
    "sw": SOUTH_WEST,
    "w": WEST,
    "nw": NORTH_WEST,
}
