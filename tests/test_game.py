import pytest

from cubraycaster import errors
from cubraycaster.element import ElementType
from cubraycaster.errors import CubError
from cubraycaster.game import LOAD_IMAGE_ERR, Game, load_game, main
from cubraycaster.parser import parse_lines
from cubraycaster.player import Key
from cubraycaster.raycast import Vector
from cubraycaster.xpm import Image

XPM = """/* XPM */
static char *tex[] = {
"2 2 2 1",
"a c #FF0000",
"b c #00FF00",
"ab",
"ba"
};
"""

MAP_ROWS = [
    "111111",
    "100001",
    "10N001",
    "100001",
    "111111",
]


def _scene_lines(tmp_path, texture_name="wall.xpm"):
    texture = tmp_path / texture_name
    return [
        f"NO {texture}\n",
        f"SO {texture}\n",
        f"WE {texture}\n",
        f"EA {texture}\n",
        "F 1,2,3\n",
        "C 4,5,6\n",
        "\n",
    ] + [row + "\n" for row in MAP_ROWS]


@pytest.fixture
def scene(tmp_path):
    (tmp_path / "wall.xpm").write_text(XPM)
    path = tmp_path / "scene.cub"
    path.write_text("".join(_scene_lines(tmp_path)))
    return path


def test_load_game_places_player(scene):
    game = load_game(scene)
    assert game.player.position == Vector(2.5, 2.5)
    assert game.player.direction == Vector(0, -1)


def test_load_game_reads_colors_and_textures(scene, tmp_path):
    game = load_game(scene)
    elements = parse_lines(_scene_lines(tmp_path))
    floor = next(e for e in elements if e.kind & ElementType.FLOOR)
    ceil = next(e for e in elements if e.kind & ElementType.CEIL)
    assert game.floor == floor.color
    assert game.ceiling == ceil.color
    assert set(game.textures) == {
        ElementType.NORTH,
        ElementType.SOUTH,
        ElementType.EAST,
        ElementType.WEST,
    }
    assert game.textures[ElementType.NORTH].get_pixel(0, 0) == 0xFF0000


def test_step_escape_ends_game(scene):
    game = load_game(scene)
    game.keys.press(Key.ESC)
    assert game.step(0.016) is False


def test_step_up_moves_north(scene):
    game = load_game(scene)
    start = game.player.position
    game.keys.press(Key.UP)
    assert game.step(0.1) is True
    assert game.player.position.y < start.y
    assert game.player.position.x == start.x


def test_render_paints_ceiling_and_floor(scene):
    game = load_game(scene)
    game.frame = Image(16, 12)
    frame = game.render()
    for x in range(frame.width):
        assert frame.get_pixel(x, 0) == game.ceiling
        assert frame.get_pixel(x, frame.height - 1) == game.floor


def test_missing_texture_raises(tmp_path):
    lines = _scene_lines(tmp_path, "absent.xpm")
    with pytest.raises(CubError) as caught:
        Game(parse_lines(lines))
    assert caught.value.message == LOAD_IMAGE_ERR
    assert caught.value.line.endswith("absent.xpm")


def test_load_game_rejects_extension(tmp_path):
    with pytest.raises(CubError) as caught:
        load_game(tmp_path / "scene.txt")
    assert caught.value.message == errors.INVALID_EXTENSION


def test_main_usage(capsys):
    assert main([]) == 1
    assert errors.USAGE in capsys.readouterr().err


def test_main_bad_extension(capsys, tmp_path):
    assert main([str(tmp_path / "map.txt")]) == 1
    assert errors.INVALID_EXTENSION in capsys.readouterr().err


def test_main_missing_file(capsys, tmp_path):
    assert main([str(tmp_path / "nowhere.cub")]) == 1
    assert errors.INVALID_FILE in capsys.readouterr().err