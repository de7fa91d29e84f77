import pytest

from cubraycaster import errors
from cubraycaster.element import ElementType
from cubraycaster.errors import CubError
from cubraycaster.parser import (
    is_color,
    is_empty,
    is_map_chars,
    is_map_start,
    is_texture,
    parse_file,
    parse_line,
    parse_lines,
)
from cubraycaster.strings import str_to_rgb

HEADER = [
    "NO ./textures/north.xpm\n",
    "SO ./textures/south.xpm\n",
    "WE ./textures/west.xpm\n",
    "EA ./textures/east.xpm\n",
    "\n",
    "F 255,0,0\n",
    "C 0,0,255\n",
    "\n",
]
MAP = [
    "111111\n",
    "100001\n",
    "10N001\n",
    "111111",
]


def scene(header=None, rows=None):
    return (HEADER if header is None else header) + (MAP if rows is None else rows)


def raised(lines):
    with pytest.raises(CubError) as info:
        parse_lines(lines)
    return info.value


def test_classifiers():
    assert is_texture("NO ./a.xpm\n")
    assert is_texture("EA x")
    assert not is_texture("NO./a.xpm")
    assert is_color("F 1,2,3")
    assert is_color("C 1,2,3")
    assert not is_color("X 1,2,3")
    assert is_empty("\n")
    assert not is_empty(" \n")
    assert is_map_chars("1 0 N1\n")
    assert not is_map_chars("1X1\n")
    assert is_map_start("1")
    assert is_map_start(" 1")
    assert not is_map_start("0")
    assert not is_map_start("")


def test_parse_lines_keeps_file_order():
    elements = parse_lines(scene())
    kinds = [element.kind & ~ElementType.PLAYER for element in elements]
    assert kinds[:6] == [
        ElementType.NORTH,
        ElementType.SOUTH,
        ElementType.WEST,
        ElementType.EAST,
        ElementType.FLOOR,
        ElementType.CEIL,
    ]
    assert all(kind == ElementType.MAP for kind in kinds[6:])
    assert [e.content for e in elements[6:]] == [row.strip("\n") for row in MAP]


def test_parse_lines_contents():
    elements = parse_lines(scene())
    assert elements[0].content == "./textures/north.xpm"
    assert elements[0].line == 1
    assert elements[4].color == str_to_rgb("255,0,0")
    assert elements[5].color == str_to_rgb("0,0,255")
    player_row = elements[8]
    assert player_row.kind & ElementType.PLAYER_N
    assert player_row.line == 11


def test_parse_line_appends_and_returns_kind():
    elements = []
    kind = parse_line(elements, "SO  ./s.xpm  \n", 3, ElementType.EMPTY)
    assert kind == ElementType.SOUTH
    assert elements[0].content == "./s.xpm"
    assert elements[0].line == 3


def test_parse_line_blank_before_map():
    elements = []
    assert parse_line(elements, "\n", 1, ElementType.NORTH) == ElementType.EMPTY
    assert elements == []


def test_blank_line_inside_map():
    error = raised(scene(rows=["111\n", "\n", "111\n"]))
    assert error.message == errors.INVALID_ELEMENT
    assert error.line_number == 10


def test_invalid_line():
    error = raised(["X what\n"] + scene())
    assert error.message == errors.INVALID_ELEMENT
    assert error.line == "X what\n"
    assert error.line_number == 1


def test_duplicate_texture():
    error = raised(["NO ./a.xpm\n"] + scene())
    assert error.message == errors.DUP_TEXTURE
    assert error.line_number == 2


def test_texture_not_xpm():
    error = raised(["NO ./a.png\n"])
    assert error.message == errors.INVALID_TEXTURE


def test_empty_texture():
    error = raised(["NO    \n"])
    assert error.message == errors.EMPTY_TEXTURE


def test_invalid_color():
    error = raised(["F 256,0,0\n"])
    assert error.message == errors.INVALID_COLOR
    assert error.line_number == 1


def test_duplicate_color():
    error = raised(["C 1,1,1\n"] + scene())
    assert error.message == errors.DUP_COLOR


def test_map_before_header():
    error = raised(["111\n"] + scene())
    assert error.message == errors.MAP_ORDER


def test_two_players_on_one_row():
    error = raised(scene(rows=["1111\n", "1NS1\n", "1111"]))
    assert error.message == errors.MAP_PLAYER


def test_two_players_on_two_rows():
    error = raised(scene(rows=["111\n", "1N1\n", "1S1\n", "111"]))
    assert error.message == errors.DUP_PLAYER


def test_missing_element():
    error = raised(HEADER[1:] + MAP)
    assert error.message == errors.MISSING
    assert error.line is None


def test_missing_player():
    error = raised(scene(rows=["111\n", "101\n", "111"]))
    assert error.message == errors.MISSING_PLAYER


def test_open_map():
    error = raised(scene(rows=["111\n", "1N0\n", "111"]))
    assert error.message == errors.INVALID_MAP


def test_parse_file(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_text("".join(scene()), encoding="utf-8")
    elements = parse_file(path)
    assert elements == parse_lines(scene())


def test_parse_file_missing(tmp_path):
    with pytest.raises(CubError) as info:
        parse_file(tmp_path / "absent.cub")
    assert info.value.message == errors.INVALID_FILE