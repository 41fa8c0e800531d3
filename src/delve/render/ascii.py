from __future__ import annotations

from typing import List

from ..map.geometry import Position
from ..map.tiles import Floor, glyph
from .snapshot import RenderSnapshot

ACTOR_GLYPH = "@"
UNKNOWN_GLYPH = " "
REMEMBERED_FLOOR_GLYPH = ","


def render_ascii(snap: RenderSnapshot) -> List[str]:
    """Draw the snapshot as text rows.

    Visible tiles use their map symbol, remembered tiles too except floor
    which is dimmed to ',', and unknown tiles are blank.
    """
    lines: List[str] = []
    for y in range(snap.tiles.height):
        row = []
        for x in range(snap.tiles.width):
            p = Position(x, y)
            if p == snap.actor_position:
                row.append(ACTOR_GLYPH)
            elif p in snap.visible:
                row.append(glyph(snap.tiles.tile_at(p).kind))
            elif p in snap.remembered:
                kind = snap.tiles.tile_at(p).kind
                row.append(REMEMBERED_FLOOR_GLYPH if isinstance(kind, Floor) else glyph(kind))
            else:
                row.append(UNKNOWN_GLYPH)
        lines.append("".join(row))
    return lines


def status_line(snap: RenderSnapshot) -> str:
    return f"Turn {snap.turn_count}  HP {snap.hp}/{snap.max_hp}  @ {snap.actor_position}"
