# cubraycaster

A small first-person raycaster. It reads a `.cub` scene description, checks
it, loads four XPM wall textures and lets you walk through the maze in a
1024×768 pygame window titled `cub3D`.

## Installing

```
pip install .
```

## Running

```
cubraycaster path/to/scene.cub
```

The command takes exactly one argument, and the file name must end in `.cub`.
If the arguments are wrong, the scene is invalid, a texture cannot be read or
the window cannot be opened, it prints an error on standard error and exits
with status 1. For errors tied to a line of the scene, the report names the
line number and shows the line. The report is coloured only when standard
error is a terminal.

### Controls

| Key           | Action             |
|---------------|--------------------|
| W / S         | move forward/back  |
| A / D         | strafe left/right  |
| ← / →         | turn               |
| Esc           | quit               |

Closing the window also quits. Movement is 3 map cells per second and turning
2 radians per second, scaled by the time between frames; a step that would end
inside a wall or off the map is not taken. The field of view is 66°.

## The `.cub` format

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm

F 220,100,0
C 225,30,0

111111
100101
1010N1
111111
```

* `NO`, `SO`, `WE`, `EA` give the wall textures. Each path must end in `.xpm`,
  may not be empty, and no texture may appear twice.
* `F` and `C` give the floor and ceiling colours as `R,G,B`, each 0–255, with
  optional spaces around each number. Neither may appear twice.
* The map comes after all six of the above. A map row starts with `1` or a
  space and uses only `0` (floor), `1` (wall), space (void) and `N`, `S`, `E`,
  `W` for the player's start cell and facing. The whole map must hold exactly
  one player.
* Every floor or player cell must be enclosed: none of its four neighbours may
  be a space or lie outside the map.
* Blank lines may separate the elements before the map, but once the map has
  started, a blank line is an error.

## XPM textures

Textures are read by `cubraycaster.xpm`. Comments in the file are ignored, the
header gives width, height, colour count and characters per pixel, and each
colour is taken from its `c` key: either `#RRGGBB` or a named X11 colour
(`cubraycaster.colors.lookup_color`, case-insensitive). Unknown names give
black; `None` gives a transparent pixel.

## Using it as a library

```python
from cubraycaster.errors import CubError
from cubraycaster.parser import parse_file

try:
    elements = parse_file("scene.cub")
except CubError as err:
    print(err.format(color=False))
```

* `cubraycaster.parser` — `parse_file(path)` and `parse_lines(lines)` return
  the validated `Element` objects in file order; every problem raises
  `cubraycaster.errors.CubError`.
* `cubraycaster.element` — `Element`, the `ElementType` flags and lookups such
  as `get_element` and `map_elements`.
* `cubraycaster.validation` — the checks applied while reading, including
  `is_valid_map`.
* `cubraycaster.xpm` — `load_xpm_file`, `parse_xpm_text`, `parse_xpm_data`
  and the `Image` class, a grid of 0xAARRGGBB pixels with `get_pixel` and
  `put_pixel`.
* `cubraycaster.raycast` — `GameMap`, `Vector`, `cast_ray` (DDA through the
  grid; raises `ValueError` if a ray leaves the map without hitting a wall),
  `column_info`, `draw_column` and `render_frame`, which draws into any
  `Image`.
* `cubraycaster.player` — `Player` (position, direction, camera plane),
  `KeyState` and the `Key` enum.
* `cubraycaster.game` — `load_game(path)` builds a `Game`; `Game.step(elapsed)`
  applies held keys, `Game.render()` draws a frame without a window, and
  `Game.run()` opens the pygame window.

## What it does not do

Floors and ceilings are flat colours, walls are the only objects, and there is
no mouse look, minimap, sprites or sound.

## Tests

```
pip install .[test]
pytest
```