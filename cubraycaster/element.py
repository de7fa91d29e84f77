"""Scene elements read from a .cub file and lookups over them."""

import enum
from dataclasses import dataclass


class ElementType(enum.IntFlag):
    """Kinds of scene element; map lines also carry the player they hold."""

    EMPTY = 0
    NORTH = 1
    SOUTH = 2
    WEST = 4
    EAST = 8
    FLOOR = 16
    CEIL = 32
    MAP = 64
    PLAYER_N = 128
    PLAYER_S = 256
    PLAYER_E = 512
    PLAYER_W = 1024
    TEXTURES = NORTH | SOUTH | WEST | EAST
    COLORS = FLOOR | CEIL
    ALL = NORTH | SOUTH | WEST | EAST | FLOOR | CEIL | MAP
    PLAYER = PLAYER_N | PLAYER_S | PLAYER_E | PLAYER_W


_TEXTURE_PREFIXES = {
    "NO ": ElementType.NORTH,
    "SO ": ElementType.SOUTH,
    "WE ": ElementType.WEST,
    "EA ": ElementType.EAST,
}

_PLAYER_CHARS = {
    "N": ElementType.PLAYER_N,
    "S": ElementType.PLAYER_S,
    "E": ElementType.PLAYER_E,
    "W": ElementType.PLAYER_W,
}


@dataclass
class Element:
    """One parsed line: a texture path, a colour or a map row."""

    kind: ElementType
    content: str = ""
    color: "int | None" = None
    line: int = 0

    @property
    def length(self):
        return len(self.content)


def texture_type(line):
    """Return the texture kind named by the line's prefix."""
    kind = _TEXTURE_PREFIXES.get(line[:3])
    if kind is None:
        raise ValueError(f"not a texture line: {line!r}")
    return kind


def color_type(line):
    """Return FLOOR for an ``F`` line and CEIL otherwise."""
    return ElementType.FLOOR if line.startswith("F ") else ElementType.CEIL


def player_type(line):
    """Return the player kind of the first player character in the line, or EMPTY."""
    return next((_PLAYER_CHARS[c] for c in line if c in _PLAYER_CHARS), ElementType.EMPTY)


def get_element(elements, kind):
    """Return the first element sharing a bit with ``kind``, or None."""
    return next((e for e in elements if e.kind & kind), None)


def element_count(elements, kind):
    """Count the elements sharing a bit with ``kind``."""
    return sum(1 for e in elements if e.kind & kind)


def map_elements(elements):
    """Return the run of map rows, starting at the first one."""
    elements = list(elements)
    start = next((i for i, e in enumerate(elements) if e.kind & ElementType.MAP), None)
    if start is None:
        return []
    count = element_count(elements[start:], ElementType.MAP)
    return elements[start:start + count]