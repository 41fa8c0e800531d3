import pytest

from delve.config import EngineConfig
from delve.errors import ActorDefeated, Blocked, OutOfBounds, TurnInProgress
from delve.fov.explored import VisibilityState
from delve.interaction.events import EventKind
from delve.interaction.intents import Intent
from delve.map.geometry import Position
from delve.map.tiles import Door, Pit
from delve.turn.controller import TurnPhase


class TestEndToEnd:
    ROWS = ["###", "+.^", "@.#"]

    def test_walk_open_door_and_enter(self, start_game, controller):
        state = start_game(self.ROWS)
        door = Position(0, 1)
        assert state.actor_position == Position(0, 2)
        assert state.turn_count == 0

        # Straight up into the closed door
        with pytest.raises(Blocked):
            controller.advance_turn(state, Intent.move(door))

        state, report = controller.advance_turn(state, Intent.move(Position(1, 2)))
        assert report.kinds() == [EventKind.MOVED]
        assert state.actor_position == Position(1, 2)
        assert state.turn_count == 1

        with pytest.raises(Blocked):
            controller.advance_turn(state, Intent.move(door))

        state, report = controller.advance_turn(state, Intent.open(door))
        assert report.kinds() == [EventKind.DOOR_OPENED]
        assert state.actor_position == Position(1, 2)
        assert state.map.kind_at(door) == Door(open=True)

        state, report = controller.advance_turn(state, Intent.move(door))
        assert report.kinds() == [EventKind.MOVED]
        assert state.actor_position == door
        assert state.turn_count == 3


def test_rejected_turn_leaves_state_untouched(start_game, controller):
    state = start_game(["#####", "#@+.#", "#####"])
    snap = state.map.snapshot()
    vis = dict(state.visibility)

    for intent in (
        Intent.move(Position(2, 1)),   # closed door
        Intent.move(Position(0, 1)),   # wall
        Intent.move(Position(3, 1)),   # not adjacent
        Intent.move(Position(-1, 1)),  # off the map
    ):
        with pytest.raises((Blocked, OutOfBounds)):
            controller.advance_turn(state, intent)
        assert state.map.snapshot() == snap
        assert state.visibility == vis
        assert state.turn_count == 0
        assert state.actor_position == Position(1, 1)
        assert controller.phase is TurnPhase.IDLE


def test_turn_does_not_mutate_previous_state(start_game, controller):
    state = start_game(["#####", "#@+.#", "#####"])
    door = Position(2, 1)
    new_state, _ = controller.advance_turn(state, Intent.open(door))
    assert new_state.map.kind_at(door) == Door(open=True)
    assert state.map.kind_at(door) == Door(open=False)
    assert state.turn_count == 0
    assert new_state.turn_count == 1


def test_opening_door_reveals_room_beyond(start_game, controller):
    state = start_game(["#####", "#@+.#", "#####"])
    assert state.visibility[Position(3, 1)] is VisibilityState.UNKNOWN
    state, report = controller.advance_turn(state, Intent.open(Position(2, 1)))
    assert Position(3, 1) in report.newly_visible
    assert state.visibility[Position(3, 1)] is VisibilityState.VISIBLE


def test_pit_falls_once_per_arming(start_game, controller):
    state = start_game(["#####", "#@^.#", "#####"], EngineConfig(pit_damage=6))
    pit = Position(2, 1)

    state, report = controller.advance_turn(state, Intent.move(pit))
    assert report.kinds() == [EventKind.MOVED, EventKind.FELL_INTO_PIT]
    assert state.actor.hp == 14
    assert state.map.kind_at(pit) == Pit(triggered=True)

    state, _ = controller.advance_turn(state, Intent.move(Position(3, 1)))
    state, report = controller.advance_turn(state, Intent.move(pit))
    assert report.kinds() == [EventKind.MOVED, EventKind.NO_EFFECT]
    assert state.actor.hp == 14


def test_cursed_floor_hurts_every_time_and_narrows_sight(start_game, controller):
    config = EngineConfig(sight_radius=6, cursed_sight_radius=2, curse_damage=3)
    state = start_game(["#########", "#@!.....#", "#########"], config)
    cursed = Position(2, 1)

    state, report = controller.advance_turn(state, Intent.move(cursed))
    assert report.kinds() == [EventKind.MOVED, EventKind.CURSED_EFFECT_TRIGGERED]
    assert state.actor.cursed is True
    assert state.effective_sight_radius == 2
    assert state.visibility[Position(5, 1)] is VisibilityState.REMEMBERED

    state, _ = controller.advance_turn(state, Intent.move(Position(3, 1)))
    assert state.actor.cursed is False
    assert state.effective_sight_radius == 6

    state, report = controller.advance_turn(state, Intent.move(cursed))
    assert EventKind.CURSED_EFFECT_TRIGGERED in report.kinds()
    assert state.actor.hp == 14


def test_defeated_actor_cannot_act(start_game, controller):
    state = start_game(["#####", "#@^.#", "#####"], EngineConfig(max_hp=5, pit_damage=9))
    state, report = controller.advance_turn(state, Intent.move(Position(2, 1)))
    assert report.hp == 0
    assert state.actor.is_defeated

    with pytest.raises(ActorDefeated):
        controller.advance_turn(state, Intent.move(Position(3, 1)))
    assert state.turn_count == 1


def test_report_tracks_visible_and_remembered(start_game, controller):
    state = start_game(["###########", "#@........#", "###########"], EngineConfig(sight_radius=2))
    assert state.visibility[Position(3, 1)] is VisibilityState.VISIBLE
    assert state.visibility[Position(4, 1)] is VisibilityState.UNKNOWN

    state, report = controller.advance_turn(state, Intent.move(Position(2, 1)))
    assert Position(4, 1) in report.newly_visible
    assert Position(0, 1) not in report.newly_remembered

    state, report = controller.advance_turn(state, Intent.move(Position(3, 1)))
    assert Position(5, 1) in report.newly_visible
    assert Position(0, 1) in report.newly_remembered
    assert state.visibility[Position(0, 1)] is VisibilityState.REMEMBERED
    assert state.visibility[Position(9, 1)] is VisibilityState.UNKNOWN


def test_pressure_plate_opens_linked_door(start_game, controller):
    state = start_game(["#######", "#@=.+.#", "#######"], links={Position(2, 1): [Position(4, 1)]})
    state, report = controller.advance_turn(state, Intent.move(Position(2, 1)))
    assert report.kinds() == [EventKind.MOVED, EventKind.PLATE_TRIGGERED, EventKind.DOOR_OPENED]
    assert state.map.kind_at(Position(4, 1)) == Door(open=True)
    assert state.visibility[Position(5, 1)] is VisibilityState.VISIBLE


def test_listeners_receive_reports(start_game, controller):
    state = start_game(["####", "#@.#", "####"])
    seen = []

    def broken(report, new_state):
        raise RuntimeError("listener failure")

    controller.add_listener(broken)
    controller.add_listener(lambda report, new_state: seen.append((report.turn, new_state.actor_position)))

    state, _ = controller.advance_turn(state, Intent.move(Position(2, 1)))
    assert seen == [(1, Position(2, 1))]
    assert state.turn_count == 1

    controller.remove_listener(broken)
    controller.advance_turn(state, Intent.move(Position(1, 1)))
    assert len(seen) == 2


def test_concurrent_turn_is_rejected(start_game, controller):
    state = start_game(["####", "#@.#", "####"])
    controller._lock.acquire()
    try:
        with pytest.raises(TurnInProgress):
            controller.advance_turn(state, Intent.move(Position(2, 1)))
    finally:
        controller._lock.release()
    state, _ = controller.advance_turn(state, Intent.move(Position(2, 1)))
    assert state.turn_count == 1


def test_new_game_sees_surroundings(start_game):
    state = start_game(["#####", "#@..#", "#####"])
    assert state.visibility[Position(1, 1)] is VisibilityState.VISIBLE
    assert state.actor.hp == state.config.max_hp
    assert state.turn_count == 0
