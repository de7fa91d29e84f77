"""Grid raycasting: casting rays through the map and drawing wall columns."""

import enum
import math
from dataclasses import dataclass

from .element import ElementType, map_elements

WIDTH = 1024
HEIGHT = 768
WALL = "1"
_FAR = 1e30
_MIN_DISTANCE = 1e-9


@dataclass(frozen=True)
class Vector:
    """A 2D vector in map units."""

    x: float
    y: float

    def __add__(self, other):
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vector(self.x - other.x, self.y - other.y)

    def __neg__(self):
        return Vector(-self.x, -self.y)

    def __mul__(self, scale):
        return Vector(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def dot(self, other):
        """Return the dot product with ``other``."""
        return self.x * other.x + self.y * other.y

    @property
    def length(self):
        return math.hypot(self.x, self.y)


class Side(enum.Enum):
    """Which kind of grid line a ray crossed last: vertical (X) or horizontal (Y)."""

    X = "x"
    Y = "y"


@dataclass(frozen=True)
class GameMap:
    """The map rows; a tile outside any row is the empty string."""

    rows: tuple

    @classmethod
    def from_elements(cls, elements):
        """Build the map from the map rows among the parsed elements."""
        return cls(tuple(element.content for element in map_elements(elements)))

    @property
    def height(self):
        return len(self.rows)

    @property
    def width(self):
        return max((len(row) for row in self.rows), default=0)

    def tile(self, x, y):
        """Return the character at (x, y), or "" outside the map."""
        if 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y]):
            return self.rows[y][x]
        return ""

    def is_walkable(self, x, y):
        """Return True when the cell holding (x, y) is inside the map and not a wall."""
        tile = self.tile(int(x), int(y))
        return tile != "" and tile != WALL


@dataclass(frozen=True)
class Ray:
    """The result of casting one ray."""

    direction: Vector
    side: Side
    cell: tuple
    perp_dist: float


@dataclass(frozen=True)
class Column:
    """Everything needed to draw one screen column."""

    x: int
    wall_height: int
    wall_start: int
    wall_end: int
    texture: object
    step_y: float
    pixel_x: float
    pixel_y: float


def ray_direction(x, width, camera, direction):
    """Return the direction of the ray for screen column ``x``."""
    offset = 2 * x / float(width) - 1
    return direction + camera * offset


def delta_distance(ray):
    """Return the ray length needed to cross one cell along each axis."""
    return Vector(
        _FAR if ray.x == 0 else abs(1 / ray.x),
        _FAR if ray.y == 0 else abs(1 / ray.y),
    )


def step_of(ray):
    """Return the grid step (+1 or -1) along each axis."""
    return (1 if ray.x > 0 else -1, 1 if ray.y > 0 else -1)


def side_distance(delta, position, step):
    """Return the ray length from ``position`` to the first grid line on each axis."""
    step_x, step_y = step
    cell_x, cell_y = int(position.x), int(position.y)
    if step_x < 0:
        dist_x = (position.x - cell_x) * delta.x
    else:
        dist_x = (cell_x + 1 - position.x) * delta.x
    if step_y < 0:
        dist_y = (position.y - cell_y) * delta.y
    else:
        dist_y = (cell_y + 1 - position.y) * delta.y
    return Vector(dist_x, dist_y)


def perpendicular_distance(side, side_dist, delta):
    """Return the camera-plane distance to the wall that was hit."""
    if side is Side.X:
        return side_dist.x - delta.x
    return side_dist.y - delta.y


def cast_ray(game_map, position, direction, camera, x, width=WIDTH):
    """Walk the grid from ``position`` until a wall is hit and describe the hit.

    Raises ValueError when the ray leaves the map without meeting a wall.
    """
    ray = ray_direction(x, width, camera, direction)
    delta = delta_distance(ray)
    step_x, step_y = step_of(ray)
    dist = side_distance(delta, position, (step_x, step_y))
    dist_x, dist_y = dist.x, dist.y
    cell_x, cell_y = int(position.x), int(position.y)
    limit_x, limit_y = game_map.width, game_map.height
    while True:
        if dist_x < dist_y:
            dist_x += delta.x
            cell_x += step_x
            side = Side.X
        else:
            dist_y += delta.y
            cell_y += step_y
            side = Side.Y
        if game_map.tile(cell_x, cell_y) == WALL:
            break
        if not (0 <= cell_x < limit_x and 0 <= cell_y < limit_y):
            raise ValueError("ray left the map without hitting a wall")
    perp = perpendicular_distance(side, Vector(dist_x, dist_y), delta)
    return Ray(ray, side, (cell_x, cell_y), perp)


def wall_x(ray, position):
    """Return where along the wall face (0..1) the ray struck."""
    if ray.side is Side.X:
        hit = position.y + ray.perp_dist * ray.direction.y
    else:
        hit = position.x + ray.perp_dist * ray.direction.x
    hit -= math.floor(hit)
    if (ray.side is Side.X and ray.direction.x > 0) or (
        ray.side is Side.Y and ray.direction.y < 0
    ):
        hit = 1 - hit
    return hit


def wall_texture(side, ray, textures):
    """Pick the texture for a wall face from a mapping keyed by ElementType."""
    if side is Side.X:
        return textures[ElementType.WEST if ray.x < 0 else ElementType.EAST]
    return textures[ElementType.NORTH if ray.y < 0 else ElementType.SOUTH]


def column_info(x, ray, position, textures, height=HEIGHT):
    """Work out the wall slice and texture coordinates for screen column ``x``."""
    perp = ray.perp_dist if ray.perp_dist > 0 else _MIN_DISTANCE
    wall_height = int(height / perp)
    half = height // 2
    unclipped_start = half - wall_height // 2
    wall_start = max(unclipped_start, 0)
    wall_end = min(half + wall_height // 2, height - 1)
    texture = wall_texture(ray.side, ray.direction, textures)
    step_y = texture.height / wall_height if wall_height else 0.0
    return Column(
        x=x,
        wall_height=wall_height,
        wall_start=wall_start,
        wall_end=wall_end,
        texture=texture,
        step_y=step_y,
        pixel_x=wall_x(ray, position) * texture.width,
        pixel_y=(wall_start - unclipped_start) * step_y,
    )


def draw_column(frame, column, ceiling, floor):
    """Paint one column of ``frame``: ceiling, textured wall, then floor."""
    tex_x = int(column.pixel_x)
    tex_y = column.pixel_y
    for y in range(frame.height):
        if y < column.wall_start:
            color = ceiling
        elif y > column.wall_end:
            color = floor
        else:
            color = column.texture.get_pixel(tex_x, int(tex_y))
            tex_y += column.step_y
        frame.put_pixel(column.x, y, color)


def render_frame(frame, game_map, position, direction, camera, textures, ceiling, floor):
    """Draw the whole view into ``frame`` and return it."""
    for x in range(frame.width):
        ray = cast_ray(game_map, position, direction, camera, x, frame.width)
        column = column_info(x, ray, position, textures, frame.height)
        draw_column(frame, column, ceiling, floor)
    return frame