import pytest

from delve.errors import OutOfBounds
from delve.fov.shadowcast import bresenham_line, compute, has_line_of_sight, within_radius
from delve.map.geometry import Position
from delve.map.loader import parse_map
from delve.map.tiles import Door


def _open_room(size=7):
    rows = ["." * size for _ in range(size)]
    mid = size // 2
    rows[mid] = "." * mid + "@" + "." * (size - mid - 1)
    return parse_map(rows)


def test_open_room_visibility_is_euclidean_disc():
    level = _open_room(7)
    origin = level.start
    visible = compute(level.map, origin, 3)

    for p in level.map.positions():
        dx, dy = p.x - origin.x, p.y - origin.y
        # Ties at the exact boundary are included
        assert (p in visible) == (dx * dx + dy * dy <= 9), p


def test_radius_zero_sees_only_origin():
    level = _open_room(5)
    assert compute(level.map, level.start, 0) == {level.start}


def test_wall_blocks_sight_and_wall_is_visible():
    rows = [
        "..#....",
        "..#....",
        ".@#....",
        "..#....",
        "..#....",
    ]
    level = parse_map(rows)
    visible = compute(level.map, level.start, 10)

    # The wall tile in direct line should be visible
    assert Position(2, 2) in visible
    # Tiles behind the wall on the same row stay hidden
    assert Position(4, 2) not in visible
    assert Position(6, 2) not in visible
    assert all(p.x <= 2 for p in visible)


def test_pillar_casts_shadow():
    rows = [
        ".......",
        ".......",
        "...#...",
        "...@...",
        ".......",
        ".......",
        ".......",
    ]
    level = parse_map(rows)
    visible = compute(level.map, level.start, 3)

    assert Position(3, 2) in visible
    assert Position(3, 1) not in visible
    assert Position(3, 0) not in visible
    assert Position(2, 1) in visible
    assert Position(4, 1) in visible
    # The other directions are unaffected
    assert Position(3, 6) in visible
    assert Position(0, 3) in visible


def test_closed_door_blocks_open_door_does_not():
    closed = parse_map(["#####", "#@+.#", "#####"])
    visible = compute(closed.map, closed.start, 5)
    assert Position(2, 1) in visible
    assert Position(3, 1) not in visible

    closed.map.set_tile_state(Position(2, 1), Door(open=True))
    visible = compute(closed.map, closed.start, 5)
    assert Position(2, 1) in visible
    assert Position(3, 1) in visible


def test_result_never_leaves_the_map():
    level = parse_map(["...", ".@.", "..."])
    visible = compute(level.map, level.start, 20)
    assert visible == set(level.map.positions())


def test_compute_is_deterministic():
    rows = [
        "#########",
        "#...#...#",
        "#.#...#.#",
        "#...@...#",
        "#.#.+.#.#",
        "#...#...#",
        "#########",
    ]
    level = parse_map(rows)
    first = compute(level.map, level.start, 6)
    assert compute(level.map, level.start, 6) == first
    assert compute(level.map.copy(), level.start, 6) == first


def test_floor_visibility_is_symmetric():
    rows = [
        "#########",
        "#.......#",
        "#..#....#",
        "#.....#.#",
        "#.#.....#",
        "#....#..#",
        "#########",
    ]
    grid = parse_map([rows[0], "#@......#"] + rows[2:]).map
    floors = [p for p in grid.positions() if not grid.is_opaque(p)]
    fov = {p: compute(grid, p, 20) for p in floors}
    for a in floors:
        for b in floors:
            assert (b in fov[a]) == (a in fov[b]), (a, b)


def test_every_visible_tile_is_within_radius():
    level = _open_room(11)
    visible = compute(level.map, level.start, 4)
    assert all(within_radius(level.start, p, 4) for p in visible)


def test_invalid_parameters():
    level = _open_room(3)
    with pytest.raises(OutOfBounds):
        compute(level.map, Position(-1, 0), 3)
    with pytest.raises(ValueError):
        compute(level.map, level.start, -1)


def test_bresenham_endpoints_inclusive():
    line = bresenham_line(Position(0, 0), Position(3, 1))
    assert line[0] == Position(0, 0)
    assert line[-1] == Position(3, 1)
    assert len(line) == 4


def test_line_of_sight_allows_opaque_target():
    level = parse_map(["........", "........", "@...#..."])
    assert has_line_of_sight(level.map, level.start, Position(4, 2)) is True
    assert has_line_of_sight(level.map, level.start, Position(5, 2)) is False
    assert has_line_of_sight(level.map, level.start, Position(9, 9)) is False
