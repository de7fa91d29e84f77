"""The error raised for every fatal problem, and its messages."""

USAGE = "Usage: cubraycaster <map.cub>"
INVALID_EXTENSION = "Map file must have the .cub extension"
INVALID_FILE = "Map file cannot be opened"
INVALID_ELEMENT = "Invalid element"
DUP_TEXTURE = "Texture is defined more than once"
EMPTY_TEXTURE = "Texture path is empty"
INVALID_TEXTURE = "Texture must be an .xpm file"
DUP_COLOR = "Color is defined more than once"
INVALID_COLOR = "Color must be three numbers from 0 to 255 separated by commas"
MAP_ORDER = "Map must come after every texture and color"
MAP_PLAYER = "A map line holds more than one player"
DUP_PLAYER = "Map holds more than one player"
MISSING = "A texture, color or the map is missing"
MISSING_PLAYER = "Map has no player"
INVALID_MAP = "Map is not closed by walls"


class CubError(Exception):
    """A fatal error in the scene description or the game setup."""

    def __init__(self, message, line=None, line_number=0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.line_number = line_number

    def format(self, color=True):
        """Render the report printed on standard error, with ANSI colours if asked."""

        def paint(code):
            return f"\x1b[{code}m" if color else ""

        text = f"{paint('1;31')}Error{paint('34')}\n{self.message}"
        if self.line is None:
            return text + "\n"
        source = self.line.strip("\n")
        return (
            f"{text} at {paint('30')}line:{self.line_number} "
            f"{paint('0')}| {paint('1;37')}`{source}`{paint('0')}\n"
        )