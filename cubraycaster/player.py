"""The player: start position, key state and movement."""

import enum
import math
from dataclasses import dataclass, field

from .element import ElementType, get_element
from .raycast import Vector
from .strings import find_chars_index

SPEED = 3.0
ROTATION_ANGLE = 2.0
FOV = 66.0
_PLAYER_CHARS = "NSWE"


class Key(enum.Enum):
    """Keys the game reacts to."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    LEFT_ARROW = enum.auto()
    RIGHT_ARROW = enum.auto()
    ESC = enum.auto()


@dataclass
class KeyState:
    """The set of keys currently held down."""

    held: set = field(default_factory=set)

    def press(self, key):
        """Mark a key as held; anything that is not a Key is ignored."""
        if isinstance(key, Key):
            self.held.add(key)

    def release(self, key):
        """Mark a key as released."""
        self.held.discard(key)

    def __contains__(self, key):
        return key in self.held


def direction_for(kind):
    """Return the facing direction for a player kind; zero when there is none."""
    if kind & ElementType.PLAYER_N:
        return Vector(0, -1)
    if kind & ElementType.PLAYER_S:
        return Vector(0, 1)
    if kind & ElementType.PLAYER_E:
        return Vector(1, 0)
    if kind & ElementType.PLAYER_W:
        return Vector(-1, 0)
    return Vector(0, 0)


def camera_for(direction):
    """Return the camera plane perpendicular to ``direction`` spanning the field of view."""
    scale = math.tan(FOV * math.pi / 360)
    return Vector(-direction.y * scale, direction.x * scale)


def rotate(direction, angle, elapsed):
    """Rotate ``direction`` by ``angle`` radians per second over ``elapsed`` seconds."""
    theta = angle * elapsed
    cos, sin = math.cos(theta), math.sin(theta)
    return Vector(
        direction.x * cos - direction.y * sin,
        direction.x * sin + direction.y * cos,
    )


def move(position, direction, game_map, elapsed):
    """Step along ``direction`` at SPEED; stay put if the target is not walkable."""
    target = position + direction * (SPEED * elapsed)
    if not game_map.is_walkable(target.x, target.y):
        return position
    return target


@dataclass
class Player:
    """Where the player stands, where it looks and its camera plane."""

    position: Vector
    direction: Vector
    camera: Vector

    @classmethod
    def from_elements(cls, elements):
        """Place the player at the centre of its start cell, facing its letter."""
        elements = list(elements)
        start = get_element(elements, ElementType.PLAYER)
        first_row = get_element(elements, ElementType.MAP)
        if start is None or first_row is None:
            raise ValueError("the map holds no player")
        position = Vector(
            find_chars_index(start.content, _PLAYER_CHARS) + 0.5,
            start.line - first_row.line + 0.5,
        )
        direction = direction_for(start.kind)
        return cls(position, direction, camera_for(direction))

    def update(self, keys, game_map, elapsed):
        """Apply held keys for ``elapsed`` seconds; return False when ESC asks to quit."""
        if Key.ESC in keys:
            return False
        facing = self.direction
        moves = (
            (Key.UP, facing),
            (Key.DOWN, -facing),
            (Key.LEFT, Vector(facing.y, -facing.x)),
            (Key.RIGHT, Vector(-facing.y, facing.x)),
        )
        for key, step in moves:
            if key in keys:
                self.position = move(self.position, step, game_map, elapsed)
        if Key.LEFT_ARROW in keys:
            self.direction = rotate(self.direction, -ROTATION_ANGLE, elapsed)
        if Key.RIGHT_ARROW in keys:
            self.direction = rotate(self.direction, ROTATION_ANGLE, elapsed)
        if Key.LEFT_ARROW in keys or Key.RIGHT_ARROW in keys:
            self.camera = camera_for(self.direction)
        return True