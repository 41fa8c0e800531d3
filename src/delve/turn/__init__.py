from .controller import TurnController, TurnPhase, TurnReport
from .log import GameLog, GameMessage, MessageType
from .state import ActorStats, GameState, new_game

__all__ = [
    "TurnController",
    "TurnPhase",
    "TurnReport",
    "GameLog",
    "GameMessage",
    "MessageType",
    "ActorStats",
    "GameState",
    "new_game",
]
