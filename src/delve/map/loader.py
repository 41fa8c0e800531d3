from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import yaml

from ..errors import MapParseError
from .geometry import Position
from .model import MapModel
from .tiles import CursedFloor, Door, Floor, Obelisk, Pit, PressurePlate, TileKind, Wall

logger = logging.getLogger(__name__)

ACTOR_SYMBOL = "@"

# Bit-exact load symbols. '@' is a floor tile that also marks the actor start.
SYMBOLS: Dict[str, Callable[[], TileKind]] = {
    "#": Wall,
    ".": Floor,
    "+": lambda: Door(open=False),
    "/": lambda: Door(open=True),
    "^": Pit,
    "!": CursedFloor,
    "=": PressurePlate,
    "O": Obelisk,
    ACTOR_SYMBOL: Floor,
}


@dataclass(frozen=True)
class LoadedLevel:
    map: MapModel
    start: Position


def parse_map(rows: Sequence[str], plate_links: Optional[Dict[Position, List[Position]]] = None) -> LoadedLevel:
    """
    Build a MapModel from map rows.

    Fails with MapParseError on ragged rows, unknown symbols, or anything but
    exactly one '@'. Line and column numbers in errors are 1-based.
    """
    if not rows:
        raise MapParseError("Map has no rows")
    width = len(rows[0])
    if width == 0:
        raise MapParseError("Map rows must not be empty", line=1)

    kinds: List[TileKind] = []
    start: Optional[Position] = None
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MapParseError(f"Row has length {len(row)}, expected {width}", line=y + 1)
        for x, ch in enumerate(row):
            factory = SYMBOLS.get(ch)
            if factory is None:
                raise MapParseError(f"Unrecognized map symbol {ch!r}", line=y + 1, column=x + 1)
            if ch == ACTOR_SYMBOL:
                if start is not None:
                    raise MapParseError(
                        f"Second actor start found; first at {start}", line=y + 1, column=x + 1
                    )
                start = Position(x, y)
            kinds.append(factory())
    if start is None:
        raise MapParseError("Map has no actor start '@'")

    model = MapModel(width, len(rows), kinds, plate_links)
    _validate_links(model)
    logger.info("Loaded %dx%d map, actor start at %s", width, len(rows), start)
    return LoadedLevel(map=model, start=start)


def load_map_text(text: str) -> LoadedLevel:
    """Parse the plain text map format (one row per line)."""
    return parse_map(text.splitlines())


def load_level(path: Union[str, Path]) -> LoadedLevel:
    """Load a level from disk.

    ``.yaml``/``.yml`` files hold a ``map`` (block string or list of rows) and
    optional ``links`` between pressure plates and doors; any other suffix is
    read as a plain text map.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Level file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise MapParseError(f"Level file {path} is not valid UTF-8: {exc.reason}") from exc
    logger.debug("Loading level from %s", path)
    if path.suffix.lower() in (".yaml", ".yml"):
        return load_level_yaml(text)
    return load_map_text(text)


def load_level_yaml(text: str) -> LoadedLevel:
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise MapParseError(f"Invalid level YAML: {exc}") from exc
    if not isinstance(raw, dict) or "map" not in raw:
        raise MapParseError("Level YAML must be a mapping with a 'map' key")

    grid = raw["map"]
    if isinstance(grid, str):
        rows = grid.splitlines()
    elif isinstance(grid, list) and all(isinstance(r, str) for r in grid):
        rows = list(grid)
    else:
        raise MapParseError("'map' must be a block string or a list of row strings")

    entries = raw.get("links") or []
    if not isinstance(entries, list):
        raise MapParseError(f"'links' must be a list, got {entries!r}")
    links: Dict[Position, List[Position]] = {}
    for entry in entries:
        if not isinstance(entry, dict) or "plate" not in entry:
            raise MapParseError(f"Invalid link entry: {entry!r}")
        doors = entry.get("doors") or []
        if not isinstance(doors, list):
            raise MapParseError(f"'doors' of plate {entry['plate']!r} must be a list, got {doors!r}")
        plate = _position(entry["plate"])
        links.setdefault(plate, []).extend(_position(d) for d in doors)
    return parse_map(rows, links)


def _position(value: Any) -> Position:
    if isinstance(value, (list, tuple)) and len(value) == 2 and all(isinstance(v, int) for v in value):
        return Position(value[0], value[1])
    raise MapParseError(f"Expected [x, y] position, got {value!r}")


def _validate_links(model: MapModel) -> None:
    for plate, doors in model.plate_links.items():
        if not model.in_bounds(plate) or not isinstance(model.kind_at(plate), PressurePlate):
            raise MapParseError(f"Link source {plate} is not a pressure plate")
        for door in doors:
            if not model.in_bounds(door) or not isinstance(model.kind_at(door), Door):
                raise MapParseError(f"Link target {door} of plate {plate} is not a door")
