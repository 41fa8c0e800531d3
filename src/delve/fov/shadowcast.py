"""Field of view by symmetric recursive shadowcasting.

The area around the origin is split into four quadrants (north, east, south,
west), each covering two octants. A quadrant is scanned row by row, moving
away from the origin; every row is a range of columns bounded by a start and
end slope. Opaque tiles narrow or split the range for the following rows.

Floor tiles are revealed only when their centre lies inside the lit range,
which keeps visibility symmetric between two floor tiles. Opaque tiles are
revealed when any part of them is lit, so walls show as boundaries.

Slopes are kept as exact fractions; the result is the same for the same
``(map, origin, radius)`` regardless of traversal order.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import FrozenSet, List, Set, Tuple

from ..errors import OutOfBounds
from ..map.geometry import Position
from ..map.model import MapModel

logger = logging.getLogger(__name__)

# (depth dx, depth dy, column dx, column dy) per quadrant
QUADRANTS: Tuple[Tuple[int, int, int, int], ...] = (
    (0, -1, 1, 0),  # north
    (1, 0, 0, 1),  # east
    (0, 1, 1, 0),  # south
    (-1, 0, 0, 1),  # west
)


@dataclass
class _Row:
    depth: int
    start_slope: Fraction
    end_slope: Fraction

    def columns(self) -> range:
        min_col = _round_ties_up(self.depth * self.start_slope)
        max_col = _round_ties_down(self.depth * self.end_slope)
        return range(min_col, max_col + 1)

    def next(self) -> "_Row":
        return _Row(self.depth + 1, self.start_slope, self.end_slope)

    def is_symmetric(self, col: int) -> bool:
        return self.depth * self.start_slope <= col <= self.depth * self.end_slope


def _slope(depth: int, col: int) -> Fraction:
    # Slope through the left edge of the tile
    return Fraction(2 * col - 1, 2 * depth)


def _round_ties_up(n: Fraction) -> int:
    return math.floor(n + Fraction(1, 2))


def _round_ties_down(n: Fraction) -> int:
    return math.ceil(n - Fraction(1, 2))


def within_radius(origin: Position, target: Position, radius: int) -> bool:
    """Euclidean radius check; positions exactly on the boundary are inside."""
    dx = target.x - origin.x
    dy = target.y - origin.y
    return dx * dx + dy * dy <= radius * radius


def compute(grid: MapModel, origin: Position, radius: int) -> FrozenSet[Position]:
    """
    Compute the set of positions visible from ``origin`` within ``radius``.

    The origin is always visible. Out-of-bounds cells behave as opaque and
    are never part of the result.
    """
    if not grid.in_bounds(origin):
        raise OutOfBounds(origin, grid.width, grid.height)
    if radius < 0:
        raise ValueError("radius must be >= 0")

    visible: Set[Position] = {origin}
    for quadrant in QUADRANTS:
        _scan_quadrant(grid, origin, radius, quadrant, visible)

    logger.debug("FOV from %s radius %d -> %d visible tiles", origin, radius, len(visible))
    return frozenset(visible)


def _scan_quadrant(
    grid: MapModel,
    origin: Position,
    radius: int,
    quadrant: Tuple[int, int, int, int],
    visible: Set[Position],
) -> None:
    ddx, ddy, cdx, cdy = quadrant

    def transform(depth: int, col: int) -> Position:
        return Position(origin.x + depth * ddx + col * cdx, origin.y + depth * ddy + col * cdy)

    def blocks(position: Position) -> bool:
        return not grid.in_bounds(position) or grid.is_opaque(position)

    rows: List[_Row] = [_Row(1, Fraction(-1), Fraction(1))]
    while rows:
        row = rows.pop()
        if row.depth > radius:
            continue
        prev_blocked = None
        for col in row.columns():
            position = transform(row.depth, col)
            blocked = blocks(position)
            if (blocked or row.is_symmetric(col)) and grid.in_bounds(position):
                if within_radius(origin, position, radius):
                    visible.add(position)
            if prev_blocked is True and not blocked:
                row.start_slope = _slope(row.depth, col)
            if prev_blocked is False and blocked:
                next_row = row.next()
                next_row.end_slope = _slope(row.depth, col)
                rows.append(next_row)
            prev_blocked = blocked
        if prev_blocked is False:
            rows.append(row.next())


def bresenham_line(start: Position, end: Position) -> List[Position]:
    """
    Bresenham's line algorithm. Returns the list of points from start to end inclusive.
    """
    points: List[Position] = []

    x0, y0 = start.x, start.y
    x1, y1 = end.x, end.y
    dx = abs(x1 - x0)
    dy = -abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    x, y = x0, y0
    while True:
        points.append(Position(x, y))
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy

    return points


def has_line_of_sight(grid: MapModel, start: Position, end: Position) -> bool:
    """
    Checks line of sight between start and end on the grid.

    The end tile may be opaque; every tile strictly between the two must be
    transparent.
    """
    if not grid.in_bounds(start) or not grid.in_bounds(end):
        return False
    line = bresenham_line(start, end)
    for position in line[1:-1]:
        if grid.is_opaque(position):
            logger.debug("LoS blocked at %s between %s->%s", position, start, end)
            return False
    return True
