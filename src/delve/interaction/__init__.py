from .events import Event, EventKind
from .intents import Intent, IntentKind
from .resolver import TILE_RULES, InteractionRules, Resolution, reset_tile, resolve

__all__ = [
    "Event",
    "EventKind",
    "Intent",
    "IntentKind",
    "TILE_RULES",
    "InteractionRules",
    "Resolution",
    "reset_tile",
    "resolve",
]
