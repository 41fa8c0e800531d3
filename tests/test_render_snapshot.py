from delve.config import EngineConfig
from delve.interaction.intents import Intent
from delve.map.geometry import Position
from delve.map.tiles import Door
from delve.render.ascii import render_ascii, status_line
from delve.render.snapshot import snapshot


def test_snapshot_sets(start_game):
    state = start_game(["#####", "#@.+#", "#####"])
    snap = snapshot(state)
    assert snap.actor_position == Position(1, 1)
    assert Position(3, 1) in snap.visible
    assert snap.remembered == frozenset()
    assert Position(4, 1) not in snap.visible


def test_render_unexplored_is_blank(start_game):
    state = start_game(["#####", "#@.+#", "#####"])
    assert render_ascii(snapshot(state)) == ["#### ", "#@.+ ", "#### "]


def test_render_remembered_floor_is_dimmed(start_game, controller):
    state = start_game(["#######", "#@....#", "#######"], EngineConfig(sight_radius=1))
    state, _ = controller.advance_turn(state, Intent.move(Position(2, 1)))
    state, _ = controller.advance_turn(state, Intent.move(Position(3, 1)))
    assert render_ascii(snapshot(state)) == [" ###   ", "#,.@.  ", " ###   "]


def test_old_snapshot_is_stable(start_game, controller):
    state = start_game(["#####", "#@+.#", "#####"])
    before = snapshot(state)
    controller.advance_turn(state, Intent.open(Position(2, 1)))
    assert before.tiles.tile_at(Position(2, 1)).kind == Door(open=False)
    assert before.turn_count == 0


def test_status_line(start_game):
    state = start_game(["###", "#@#", "###"])
    assert status_line(snapshot(state)) == "Turn 0  HP 20/20  @ (1,1)"
