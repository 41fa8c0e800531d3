import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from delve.config import EngineConfig  # noqa: E402
from delve.map.loader import parse_map  # noqa: E402
from delve.turn.controller import TurnController  # noqa: E402
from delve.turn.state import new_game  # noqa: E402


@pytest.fixture
def controller():
    return TurnController()


@pytest.fixture
def start_game():
    """Build a GameState from inline map rows."""

    def _start(rows, config=None, links=None):
        level = parse_map(rows, links)
        return new_game(level.map, level.start, config or EngineConfig())

    return _start
