"""Turn-based grid dungeon engine: map model, field of view, tile interactions and turns."""

from .config import EngineConfig, load_config
from .errors import (
    ActorDefeated,
    Blocked,
    ConfigError,
    DelveError,
    InvalidTransition,
    MapParseError,
    OutOfBounds,
    TurnInProgress,
)
from .fov import VisibilityState, compute, update_explored
from .interaction import Event, EventKind, Intent, IntentKind, resolve
from .map import MapModel, Position, load_level, load_map_text, parse_map
from .render import RenderSnapshot, snapshot
from .turn import GameLog, GameState, TurnController, TurnReport, new_game

__all__ = [
    "EngineConfig",
    "load_config",
    "ActorDefeated",
    "Blocked",
    "ConfigError",
    "DelveError",
    "InvalidTransition",
    "MapParseError",
    "OutOfBounds",
    "TurnInProgress",
    "VisibilityState",
    "compute",
    "update_explored",
    "Event",
    "EventKind",
    "Intent",
    "IntentKind",
    "resolve",
    "MapModel",
    "Position",
    "load_level",
    "load_map_text",
    "parse_map",
    "RenderSnapshot",
    "snapshot",
    "GameLog",
    "GameState",
    "TurnController",
    "TurnReport",
    "new_game",
]

__version__ = "0.1.0"
