"""Game setup, the main loop and the command-line entry point."""

import sys
import time
from array import array

from . import errors
from .element import ElementType, get_element
from .errors import CubError
from .parser import parse_file
from .player import Key, KeyState, Player
from .raycast import HEIGHT, WIDTH, GameMap, render_frame
from .validation import is_valid_file_extension
from .xpm import Image, XpmError, load_xpm_file

TITLE = "cub3D"
LOAD_IMAGE_ERR = "Failed to load image"
WINDOW_ERR = "Failed to create window"

_TEXTURE_KINDS = (
    ElementType.NORTH,
    ElementType.SOUTH,
    ElementType.EAST,
    ElementType.WEST,
)


def _load_texture(element):
    try:
        return load_xpm_file(element.content)
    except XpmError:
        raise CubError(LOAD_IMAGE_ERR, element.content, element.line) from None


class Game:
    """A running scene: map, player, textures, colours and the frame drawn to."""

    def __init__(self, elements):
        elements = list(elements)
        self.textures = {
            kind: _load_texture(get_element(elements, kind)) for kind in _TEXTURE_KINDS
        }
        self.ceiling = get_element(elements, ElementType.CEIL).color
        self.floor = get_element(elements, ElementType.FLOOR).color
        self.game_map = GameMap.from_elements(elements)
        self.player = Player.from_elements(elements)
        self.keys = KeyState()
        self.frame = Image(WIDTH, HEIGHT)

    def step(self, elapsed):
        """Apply the held keys for ``elapsed`` seconds; return False when the game should end."""
        return self.player.update(self.keys, self.game_map, elapsed)

    def render(self):
        """Draw the current view into the frame and return it."""
        return render_frame(
            self.frame,
            self.game_map,
            self.player.position,
            self.player.direction,
            self.player.camera,
            self.textures,
            self.ceiling,
            self.floor,
        )

    def _frame_bytes(self):
        return array("I", (pixel & 0xFFFFFFFF for pixel in self.frame.pixels)).tobytes()

    def run(self):
        """Open a window and play until ESC is pressed or the window is closed."""
        import pygame

        pixel_format = "BGRA" if sys.byteorder == "little" else "ARGB"
        key_map = {
            pygame.K_w: Key.UP,
            pygame.K_s: Key.DOWN,
            pygame.K_a: Key.LEFT,
            pygame.K_d: Key.RIGHT,
            pygame.K_LEFT: Key.LEFT_ARROW,
            pygame.K_RIGHT: Key.RIGHT_ARROW,
            pygame.K_ESCAPE: Key.ESC,
        }
        size = (self.frame.width, self.frame.height)
        pygame.init()
        try:
            try:
                screen = pygame.display.set_mode(size)
            except pygame.error:
                raise CubError(WINDOW_ERR) from None
            pygame.display.set_caption(TITLE)
            last = time.monotonic()
            while True:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        return
                    if event.type == pygame.KEYDOWN:
                        self.keys.press(key_map.get(event.key))
                    elif event.type == pygame.KEYUP:
                        self.keys.release(key_map.get(event.key))
                now = time.monotonic()
                if not self.step(now - last):
                    return
                last = now
                self.render()
                surface = pygame.image.frombuffer(self._frame_bytes(), size, pixel_format)
                screen.blit(surface, (0, 0))
                pygame.display.flip()
        finally:
            pygame.quit()


def load_game(path):
    """Read a .cub file and build the game it describes."""
    if not is_valid_file_extension(str(path)):
        raise CubError(errors.INVALID_EXTENSION)
    return Game(parse_file(path))


def main(argv=None):
    """Run the game on the .cub file named on the command line; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        if len(args) != 1:
            raise CubError(errors.USAGE)
        load_game(args[0]).run()
    except CubError as error:
        sys.stderr.write(error.format(color=sys.stderr.isatty()))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())