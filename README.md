# cubcaster

A first-person maze explorer that draws a textured 3D view of a grid map
using raycasting. Scenes are described in `.cub` files; wall textures are
XPM images. The view is shown in a pygame window.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
cubcaster path/to/scene.cub
```

The command takes exactly one argument, which must be a file name ending
in `.cub` (with something before the extension). If the file cannot be
opened, a texture cannot be read, or the contents are invalid, a message
starting with `Error` is printed to standard error and the command exits
with status 1. Otherwise a 1600×1200 window titled `cubcaster` opens.

### Controls

| Key         | Action              |
|-------------|---------------------|
| `W` / `S`   | move forward / back |
| `A` / `D`   | strafe left / right |
| `←` / `→`   | turn the camera     |
| `Esc`       | quit                |

Closing the window also quits. Movement is 0.1 cells per frame and turning
0.1 radians per frame; the player cannot step into a cell that is not open
floor, but slides along walls.

## The `.cub` format

The file starts with six parameters, in any order, separated by any number
of empty lines:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA` give the wall textures. Each path must end in
  `.xpm` and must name a readable file.
- `F` and `C` give the floor and ceiling colours as three comma-separated
  values, each one to three digits from 0 to 255.
- Each parameter may appear only once. Any other non-empty line before all
  six are set is an error.

The map follows the parameters, after any number of empty lines:

```
        1111111111111
        1000000000001
        1011000001111
1111111110110000010001
1000000000110000010001
1111111110000000N00001
        1111111111111111
```

- `1` is a wall, `0` is open floor, and a space is empty (outside the map).
  No other characters are allowed.
- `N`, `S`, `E` or `W` marks the player's start and the direction the
  player faces. There must be exactly one.
- Every open cell, including the start, must be bordered on all four sides
  by open floor or walls.
- The map must be at least three lines tall. It ends at the first empty
  line, and only empty lines may follow it.

## Textures

`cubcaster.xpm` reads XPM files: the quoted strings of the file are taken
in order after C-style comments are removed. Colours may be given as
`#RRGGBB` hex values or as X11 colour names (case-insensitive, looked up
with `cubcaster.colornames.lookup_color`); the `none` colour is stored as
`0xFF000000` and is drawn like any other pixel rather than as transparent.
Only the `c` colour key of each definition is used.

## Using it as a library

```python
from cubcaster.loader import load_scene
from cubcaster.game import Game

scene = load_scene("maps/map.cub")
game = Game.from_scene(scene, 1600, 1200)
game.run()
```

`Game.step()` advances one frame and returns it as a `(height, width)`
array of `0xRRGGBB` values without opening a window; `handle_keypress` and
`handle_keyrelease` take the key codes defined in `cubcaster.game`
(`KEY_W`, `KEY_LEFT`, `KEY_ESCAPE`, ...).

Parts can also be used on their own:

- `cubcaster.loader.parse_scene` parses the lines of a scene into a
  `Scene`; `load_scene` does the same for a file.
- `cubcaster.config.read_parameters` parses the header lines into a
  `SceneConfig`.
- `cubcaster.grid.extract_map_lines`, `build_map` and `check_enclosed`
  read, build and check a `GameMap`.
- `cubcaster.xpm.load_xpm` reads an XPM file into an `XpmImage`;
  `parse_xpm` decodes already split XPM strings.
- `cubcaster.player.Camera` holds the player's position and view and
  applies movement from a `Controls` set of held keys.
- `cubcaster.raycast.render_frame` renders a single frame from a `Camera`
  into a pixel array.

Errors are raised as `ConfigError`, `MapError` and `XpmError`, all
subclasses of `ValueError`.