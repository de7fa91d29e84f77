"""Checks applied to scene elements while and after a .cub file is read."""

from . import errors
from .element import ElementType, map_elements
from .errors import CubError
from .strings import ends_with

_PLAYER_CHARS = "NSEW"
_FLOOR_CHARS = frozenset("0NSEW")


def validate_texture(element, seen):
    """Raise CubError if a texture repeats, is empty or is not an .xpm file."""
    if seen & element.kind:
        raise CubError(errors.DUP_TEXTURE)
    if not element.content:
        raise CubError(errors.EMPTY_TEXTURE)
    if not ends_with(element.content, ".xpm"):
        raise CubError(errors.INVALID_TEXTURE)


def validate_color(element, seen):
    """Raise CubError if a colour repeats or could not be parsed."""
    if seen & element.kind:
        raise CubError(errors.DUP_COLOR)
    if element.color is None:
        raise CubError(errors.INVALID_COLOR)


def validate_map_line(element, seen):
    """Raise CubError if a map row comes too early or holds too many players."""
    if (seen & ElementType.ALL) | ElementType.MAP != ElementType.ALL:
        raise CubError(errors.MAP_ORDER)
    if not is_valid_player_count(element.content):
        raise CubError(errors.MAP_PLAYER)
    if seen & ElementType.PLAYER and element.kind & ElementType.PLAYER:
        raise CubError(errors.DUP_PLAYER)


def validate_elements(elements, seen):
    """Raise CubError if anything is missing or the map is not closed."""
    if seen & ElementType.ALL != ElementType.ALL:
        raise CubError(errors.MISSING)
    if not seen & ElementType.PLAYER:
        raise CubError(errors.MISSING_PLAYER)
    if not is_valid_map(elements):
        raise CubError(errors.INVALID_MAP)


def _is_enclosed(rows, x, y):
    row = rows[y]
    return (
        x > 0
        and row[x - 1] != " "
        and x + 1 < len(row)
        and row[x + 1] != " "
        and y > 0
        and x < len(rows[y - 1])
        and rows[y - 1][x] != " "
        and y + 1 < len(rows)
        and x < len(rows[y + 1])
        and rows[y + 1][x] != " "
    )


def is_valid_map(elements):
    """Return True when every floor tile has a non-blank tile on all four sides."""
    rows = [element.content for element in map_elements(elements)]
    return all(
        _is_enclosed(rows, x, y)
        for y, row in enumerate(rows)
        for x, char in enumerate(row)
        if char in _FLOOR_CHARS
    )


def is_valid_player_count(line):
    """Return True when the line holds at most one player character."""
    return sum(1 for char in line if char in _PLAYER_CHARS) <= 1


def is_valid_file_extension(path):
    """Return True when the path names a .cub file."""
    return ends_with(path, ".cub")