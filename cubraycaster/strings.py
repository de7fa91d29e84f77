"""Small string helpers used by the scene parser."""

_DIGITS = frozenset("0123456789")
_UBYTE_MAX = 255


def ends_with(text, suffix):
    """Return True when ``text`` ends with ``suffix``."""
    if text is None or suffix is None:
        return False
    return text.endswith(suffix)


def find_chars_index(text, chars):
    """Return the index of the first character of ``text`` found in ``chars``, or -1."""
    return next((index for index, char in enumerate(text) if char in chars), -1)


def str_to_ubyte(text):
    """Parse a decimal number in the range 0..255.

    Returns None when the text is empty, holds anything but ASCII digits,
    or the value goes past 255.
    """
    if not text or not set(text) <= _DIGITS:
        return None
    total = 0
    for char in text:
        total = total * 10 + int(char)
        if total > _UBYTE_MAX:
            return None
    return total


def str_to_rgb(text):
    """Parse ``"R,G,B"`` into a packed 0xRRGGBB integer, or None when malformed.

    Exactly two commas are required; empty fields between commas are dropped
    and make the colour invalid. Spaces around each component are ignored.
    """
    if text.count(",") != 2:
        return None
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        return None
    channels = [str_to_ubyte(part.strip(" ")) for part in parts]
    if any(channel is None for channel in channels):
        return None
    red, green, blue = channels
    return red << 16 | green << 8 | blue