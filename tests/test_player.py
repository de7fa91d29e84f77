import math

import pytest

from cubraycaster.element import Element, ElementType
from cubraycaster.player import (
    FOV,
    SPEED,
    Key,
    KeyState,
    Player,
    camera_for,
    direction_for,
    move,
    rotate,
)
from cubraycaster.raycast import GameMap, Vector

ROWS = ["11111", "10001", "10N01", "10001", "11111"]
FIRST_LINE = 7


def make_elements(rows=ROWS):
    elements = [Element(ElementType.NORTH, content="a.xpm", line=1)]
    for offset, row in enumerate(rows):
        kind = ElementType.MAP
        if "N" in row:
            kind |= ElementType.PLAYER_N
        elements.append(Element(kind, content=row, line=FIRST_LINE + offset))
    return elements


def make_map():
    return GameMap.from_elements(make_elements())


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ElementType.MAP | ElementType.PLAYER_N, Vector(0, -1)),
        (ElementType.MAP | ElementType.PLAYER_S, Vector(0, 1)),
        (ElementType.MAP | ElementType.PLAYER_E, Vector(1, 0)),
        (ElementType.MAP | ElementType.PLAYER_W, Vector(-1, 0)),
        (ElementType.MAP, Vector(0, 0)),
    ],
)
def test_direction_for(kind, expected):
    assert direction_for(kind) == expected


def test_camera_is_perpendicular_and_scaled():
    direction = Vector(0.6, -0.8)
    camera = camera_for(direction)
    assert camera.dot(direction) == pytest.approx(0)
    assert camera.length == pytest.approx(math.tan(FOV * math.pi / 360))


def test_rotate_quarter_turn():
    turned = rotate(Vector(1, 0), math.pi / 2, 1.0)
    assert turned.x == pytest.approx(0, abs=1e-12)
    assert turned.y == pytest.approx(1)


def test_rotate_round_trip_and_length():
    start = Vector(0.6, -0.8)
    there = rotate(start, 1.3, 0.25)
    back = rotate(there, -1.3, 0.25)
    assert there.length == pytest.approx(start.length)
    assert back.x == pytest.approx(start.x)
    assert back.y == pytest.approx(start.y)


def test_rotate_without_time_is_identity():
    start = Vector(0.6, -0.8)
    assert rotate(start, 2.0, 0.0) == start


def test_move_in_open_space_covers_speed_distance():
    game_map = make_map()
    start = Vector(2.5, 2.5)
    elapsed = 0.1
    moved = move(start, Vector(0, -1), game_map, elapsed)
    assert (moved - start).length == pytest.approx(SPEED * elapsed)
    assert moved.y < start.y


def test_move_into_wall_stays_put():
    game_map = make_map()
    start = Vector(1.5, 1.5)
    assert move(start, Vector(-1, 0), game_map, 10.0) == start


def test_key_state_press_and_release():
    keys = KeyState()
    keys.press(Key.UP)
    keys.press("not a key")
    assert Key.UP in keys
    assert keys.held == {Key.UP}
    keys.release(Key.UP)
    assert Key.UP not in keys


def test_player_from_elements():
    player = Player.from_elements(make_elements())
    assert player.position == Vector(ROWS[2].index("N") + 0.5, 2 + 0.5)
    assert player.direction == Vector(0, -1)
    assert player.camera == camera_for(Vector(0, -1))


def test_player_from_elements_without_player():
    elements = make_elements(["111", "101", "111"])
    with pytest.raises(ValueError):
        Player.from_elements(elements)


def test_update_escape_stops_without_moving():
    player = Player.from_elements(make_elements())
    start = player.position
    keys = KeyState({Key.ESC, Key.UP})
    assert player.update(keys, make_map(), 0.1) is False
    assert player.position == start


def test_update_forward_moves_north():
    player = Player.from_elements(make_elements())
    start = player.position
    assert player.update(KeyState({Key.UP}), make_map(), 0.1) is True
    assert player.position.y < start.y
    assert player.position.x == pytest.approx(start.x)


def test_update_strafe_right_moves_east_when_facing_north():
    player = Player.from_elements(make_elements())
    start = player.position
    player.update(KeyState({Key.RIGHT}), make_map(), 0.1)
    assert player.position.x > start.x
    assert player.position.y == pytest.approx(start.y)


def test_update_rotation_refreshes_camera():
    player = Player.from_elements(make_elements())
    start = player.direction
    player.update(KeyState({Key.RIGHT_ARROW}), make_map(), 0.2)
    assert player.direction.length == pytest.approx(1)
    assert player.direction.x > start.x
    assert player.camera.dot(player.direction) == pytest.approx(0)


def test_update_both_arrows_cancel():
    player = Player.from_elements(make_elements())
    start = player.direction
    player.update(KeyState({Key.LEFT_ARROW, Key.RIGHT_ARROW}), make_map(), 0.2)
    assert player.direction.x == pytest.approx(start.x, abs=1e-12)
    assert player.direction.y == pytest.approx(start.y)