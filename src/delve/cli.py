from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Sequence

from .config import load_config
from .errors import Blocked, DelveError, OutOfBounds
from .interaction.intents import Intent, IntentKind
from .logging_config import configure_logging
from .map.geometry import DIRECTIONS
from .map.loader import load_level
from .render.ascii import render_ascii, status_line
from .render.snapshot import snapshot
from .turn.controller import TurnController
from .turn.log import GameLog
from .turn.state import GameState, new_game

logger = logging.getLogger(__name__)


def parse_command(command: str, state: GameState) -> Intent:
    """Turn ``move:e`` style commands into an intent aimed from the actor's position."""
    verb, sep, direction = command.partition(":")
    if not sep or not direction:
        raise ValueError(f"Command {command!r} must look like <verb>:<direction>")
    try:
        kind = IntentKind(verb.lower())
    except ValueError:
        raise ValueError(f"Unknown verb {verb!r}; expected one of {[k.value for k in IntentKind]}") from None
    return Intent.toward(kind, state.actor_position, direction)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="delve", description="Run turns against a dungeon level.")
    parser.add_argument("level", help="Path to a .txt map or a .yaml level file")
    parser.add_argument(
        "commands",
        nargs="*",
        help=f"Commands such as move:e open:nw examine:n (directions: {' '.join(DIRECTIONS)})",
    )
    parser.add_argument("--config", default=None, help="Engine config YAML (defaults to the user config dir)")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of the ASCII view")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def run(state: GameState, commands: Sequence[str], controller: TurnController, game_log: GameLog) -> GameState:
    for command in commands:
        intent = parse_command(command, state)
        try:
            state, _ = controller.advance_turn(state, intent)
        except (Blocked, OutOfBounds) as exc:
            game_log.record_rejection(exc, intent, state.turn_count)
    return state


def summary(state: GameState, game_log: GameLog) -> dict:
    snap = snapshot(state)
    return {
        "turn": snap.turn_count,
        "actor": list(snap.actor_position.as_tuple()),
        "hp": snap.hp,
        "visible": sorted(list(p.as_tuple()) for p in snap.visible),
        "remembered": sorted(list(p.as_tuple()) for p in snap.remembered),
        "map": snap.tiles.to_str_lines(),
        "log": game_log.lines(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        config = load_config(args.config)
        level = load_level(args.level)
    except (DelveError, FileNotFoundError) as exc:
        print(f"delve: {exc}", file=sys.stderr)
        return 2

    state = new_game(level.map, level.start, config)
    controller = TurnController()
    game_log = GameLog(config.log_capacity)
    game_log.attach(controller)

    try:
        state = run(state, args.commands, controller, game_log)
    except ValueError as exc:
        print(f"delve: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(summary(state, game_log), indent=2, sort_keys=True))
    else:
        snap = snapshot(state)
        print("\n".join(render_ascii(snap)))
        print(status_line(snap))
        for line in game_log.lines():
            print(line)
    return 0
