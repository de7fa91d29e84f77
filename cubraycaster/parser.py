"""Reading a .cub scene description into validated elements."""

from . import errors
from .element import Element, ElementType, color_type, player_type, texture_type
from .errors import CubError
from .strings import str_to_rgb
from .validation import (
    validate_color,
    validate_elements,
    validate_map_line,
    validate_texture,
)

_TEXTURE_PREFIXES = ("NO ", "SO ", "WE ", "EA ")
_COLOR_PREFIXES = ("F ", "C ")
_MAP_CHARS = frozenset("01NSEW ")
_MAP_START = ("1", " ")


def is_texture(line):
    """Return True for a ``NO``, ``SO``, ``WE`` or ``EA`` texture line."""
    return line.startswith(_TEXTURE_PREFIXES)


def is_color(line):
    """Return True for an ``F`` or ``C`` colour line."""
    return line.startswith(_COLOR_PREFIXES)


def is_empty(line):
    """Return True for a line holding nothing but its newline."""
    return line == "\n"


def is_map_chars(line):
    """Return True when every character before the newline is a map character."""
    row = line.split("\n", 1)[0]
    return all(char in _MAP_CHARS for char in row)


def is_map_start(line):
    """Return True when the line starts the way a map row does."""
    return line[:1] in _MAP_START


def _texture_element(line, number):
    return Element(texture_type(line), content=line[3:].strip(" \n"), line=number)


def _color_element(line, number):
    return Element(color_type(line), color=str_to_rgb(line[2:].strip(" \n")), line=number)


def _map_element(line, number):
    kind = ElementType.MAP | player_type(line)
    return Element(kind, content=line.strip("\n"), line=number)


def _handler_for(line):
    if is_texture(line):
        return _texture_element, validate_texture
    if is_color(line):
        return _color_element, validate_color
    if is_empty(line):
        return None
    if is_map_start(line) and is_map_chars(line):
        return _map_element, validate_map_line
    raise CubError(errors.INVALID_ELEMENT)


def parse_line(elements, line, number, seen):
    """Parse one line, append its element to ``elements`` and return its kind.

    ``seen`` holds the kinds met so far. Blank lines give EMPTY, unless the
    map has begun, in which case they are an error. Every problem is raised
    as a CubError that carries the offending line and its number.
    """
    try:
        handler = _handler_for(line)
    except CubError as error:
        raise CubError(error.message, line, number) from None
    if handler is None:
        if seen & ElementType.MAP:
            raise CubError(errors.INVALID_ELEMENT, line, number)
        return ElementType.EMPTY
    build, validate = handler
    element = build(line, number)
    try:
        validate(element, seen)
    except CubError as error:
        raise CubError(error.message, line, number) from None
    elements.append(element)
    return element.kind


def parse_lines(lines):
    """Parse the lines of a scene, numbered from 1, and return its elements in order."""
    elements = []
    seen = ElementType.EMPTY
    for number, line in enumerate(lines, start=1):
        seen |= parse_line(elements, line, number, seen)
    validate_elements(elements, seen)
    return elements


def parse_file(path):
    """Read and validate a .cub file, returning its elements in file order."""
    try:
        handle = open(path, encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as error:
        raise CubError(errors.INVALID_FILE) from error
    with handle:
        return parse_lines(handle)