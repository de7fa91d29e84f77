"""Reading XPM images into plain pixel grids."""

import re
from dataclasses import dataclass, field

from .colors import text_to_rgb

TRANSPARENT = 0xFF000000
_NONE = -1
_DIRECT_CPP = 2
_WORD_SPLIT = re.compile(r"[ \t]+")
_INT_PREFIX = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")
_QUOTED = re.compile(r'"([^"]*)"')


class XpmError(Exception):
    """Raised when XPM data cannot be read."""


@dataclass
class Image:
    """A width by height grid of 32-bit 0xAARRGGBB pixels, stored row by row."""

    width: int
    height: int
    pixels: list = field(default_factory=list)

    def __post_init__(self):
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(f"expected {size} pixels, got {len(self.pixels)}")

    def _inside(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x, y):
        """Return the pixel at (x, y), or 0 outside the image."""
        if not self._inside(x, y):
            return 0
        return self.pixels[y * self.width + x]

    def put_pixel(self, x, y, color):
        """Set the pixel at (x, y); points outside the image are ignored."""
        if self._inside(x, y):
            self.pixels[y * self.width + x] = color & 0xFFFFFFFF


def split_words(text):
    """Split text into words separated by spaces and tabs."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _find_unquoted(text, pattern):
    quoted = False
    for pos, char in enumerate(text[: len(text) - len(pattern) + 1]):
        if char == '"':
            quoted = not quoted
        if not quoted and text.startswith(pattern, pos):
            return pos
    return -1


def _blank(text, start, count):
    end = min(len(text), start + count)
    return text[:start] + " " * (end - start) + text[end:]


def strip_comments(text):
    """Replace C comments outside double quotes with spaces, keeping the length."""
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, end - begin + 2 if end != -1 else 3)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, end - begin + 1 if end != -1 else 2)
    return text


def _atoi(word):
    match = _INT_PREFIX.match(word)
    return int(match.group(1)) if match else 0


def _next_line(rows):
    try:
        return next(rows)
    except StopIteration:
        raise XpmError("XPM data ends early") from None


def _read_palette(rows, count, cpp):
    palette = {}
    for _ in range(count):
        line = _next_line(rows)
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"colour line has no 'c' key: {line!r}") from None
        if index >= len(words):
            raise XpmError(f"colour line has no colour: {line!r}")
        suffix = words[index + 1] if index + 1 < len(words) else None
        color = text_to_rgb(words[index], suffix)
        key = line[:cpp]
        if cpp <= _DIRECT_CPP:
            palette[key] = color
        else:
            palette.setdefault(key, color)
    return palette


def parse_xpm_data(lines):
    """Build an Image from the strings of an XPM image: header, colours, rows.

    Pixels whose colour is ``None`` become TRANSPARENT; unknown pixel keys
    become 0.
    """
    rows = iter(lines)
    words = split_words(_next_line(rows))
    if len(words) < 4:
        raise XpmError("XPM header needs width, height, colours and chars per pixel")
    width, height, count, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, count, cpp) <= 0:
        raise XpmError("XPM header values must be positive")
    palette = _read_palette(rows, count, cpp)
    image = Image(width, height)
    for y in range(height):
        row = _next_line(rows)
        for x in range(width):
            color = palette.get(row[x * cpp:(x + 1) * cpp], 0)
            image.put_pixel(x, y, TRANSPARENT if color == _NONE else color)
    return image


def parse_xpm_text(text):
    """Build an Image from the text of an XPM file."""
    strings = (match.group(1) for match in _QUOTED.finditer(strip_comments(text)))
    return parse_xpm_data(strings)


def load_xpm_file(path):
    """Read an XPM file from disk."""
    try:
        with open(path, "rb") as handle:
            text = handle.read().decode("latin-1")
    except OSError as error:
        raise XpmError(f"cannot read {path}") from error
    return parse_xpm_text(text)