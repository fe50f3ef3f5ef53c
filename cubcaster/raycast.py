"""Ray casting of the map into a frame of 0xRRGGBB pixels."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from cubcaster.grid import FLOOR, GameMap
from cubcaster.player import Camera
from cubcaster.xpm import XpmImage


class Side(Enum):
    """Which kind of grid line a ray crossed when it hit a wall."""

    X = 0
    Y = 1


@dataclass(frozen=True)
class RayHit:
    """Where a ray hit a wall and from which direction."""

    map_x: int
    map_y: int
    side: Side
    ray_dir_x: float
    ray_dir_y: float
    distance: float


@dataclass(frozen=True)
class WallSlice:
    """The vertical span of a wall on screen and its texture column."""

    line_height: int
    draw_start: int
    draw_end: int
    wall_x: float
    texture_x: int


def _is_wall(game_map: GameMap, x: int, y: int) -> bool:
    if 0 <= y < game_map.height and 0 <= x < game_map.width:
        return game_map.grid[y][x] > FLOOR
    return True


def _axis_setup(ray_dir: float, pos: float, cell: int) -> tuple[int, float, float]:
    if ray_dir == 0:
        return 1, math.inf, math.inf
    delta = abs(1 / ray_dir)
    if ray_dir < 0:
        return -1, (pos - cell) * delta, delta
    return 1, (cell + 1.0 - pos) * delta, delta


def cast_ray(camera: Camera, game_map: GameMap, column: int, width: int) -> RayHit:
    """Follow the ray for a screen column through the grid until a wall."""
    camera_x = 2 * column / width - 1
    ray_dir_x = camera.dir_x + camera.plane_x * camera_x
    ray_dir_y = camera.dir_y + camera.plane_y * camera_x
    map_x, map_y = int(camera.pos_x), int(camera.pos_y)
    step_x, side_dist_x, delta_x = _axis_setup(ray_dir_x, camera.pos_x, map_x)
    step_y, side_dist_y, delta_y = _axis_setup(ray_dir_y, camera.pos_y, map_y)

    while True:
        if side_dist_x < side_dist_y:
            side_dist_x += delta_x
            map_x += step_x
            side = Side.X
        else:
            side_dist_y += delta_y
            map_y += step_y
            side = Side.Y
        if _is_wall(game_map, map_x, map_y):
            break

    if side is Side.X:
        distance = (map_x - camera.pos_x + (1 - step_x) // 2) / ray_dir_x
    else:
        distance = (map_y - camera.pos_y + (1 - step_y) // 2) / ray_dir_y
    return RayHit(map_x, map_y, side, ray_dir_x, ray_dir_y, distance)


def texture_index(hit: RayHit) -> int:
    """Index of the texture to use: 0 west, 1 east, 2 north, 3 south."""
    if hit.side is Side.X:
        return 1 if hit.ray_dir_x < 0 else 0
    return 3 if hit.ray_dir_y < 0 else 2


def wall_slice(hit: RayHit, camera: Camera, height: int, texture_width: int) -> WallSlice:
    """Compute the on-screen span and texture column of a wall hit."""
    line_height = int(height / hit.distance) if hit.distance > 0 else height
    draw_start = max(-(line_height // 2) + height // 2, 0)
    draw_end = min(line_height // 2 + height // 2, height - 1)

    if hit.side is Side.X:
        wall_x = camera.pos_y + hit.distance * hit.ray_dir_y
    else:
        wall_x = camera.pos_x + hit.distance * hit.ray_dir_x
    wall_x -= math.floor(wall_x)

    texture_x = int(wall_x * texture_width)
    if (hit.side is Side.X and hit.ray_dir_x > 0) or (
        hit.side is Side.Y and hit.ray_dir_y < 0
    ):
        texture_x = texture_width - texture_x - 1
    return WallSlice(line_height, draw_start, draw_end, wall_x, texture_x)


def draw_column(
    frame: np.ndarray,
    column: int,
    wall: WallSlice,
    texture: XpmImage,
    floor_color: int,
    ceiling_color: int,
) -> None:
    """Draw ceiling, textured wall and floor into one column of ``frame``.

    Row 0 is left untouched; the wall fills rows after ``draw_start`` up
    to ``draw_end``.
    """
    height = frame.shape[0]
    rows = wall.draw_end - wall.draw_start
    if rows > 0:
        step = texture.height / wall.line_height
        start = (wall.draw_start - height // 2 + wall.line_height // 2) * step
        increments = np.full(rows, step, dtype=np.float64)
        increments[0] = start
        positions = np.add.accumulate(increments)
        texture_y = positions.astype(np.int64) % texture.height
        texture_col = texture.width - 1 - wall.texture_x
        frame[wall.draw_start + 1:wall.draw_end + 1, column] = texture.pixels[
            texture_y, texture_col
        ]
    frame[1:wall.draw_start + 1, column] = ceiling_color & 0xFFFFFFFF
    frame[wall.draw_end + 1:height, column] = floor_color & 0xFFFFFFFF


def render_frame(
    camera: Camera,
    game_map: GameMap,
    textures: Sequence[XpmImage],
    width: int,
    height: int,
    floor_color: int,
    ceiling_color: int,
) -> np.ndarray:
    """Render the whole view; returns a ``(height, width)`` uint32 array."""
    frame = np.zeros((height, width), dtype=np.uint32)
    for column in range(width):
        hit = cast_ray(camera, game_map, column, width)
        texture = textures[texture_index(hit)]
        wall = wall_slice(hit, camera, height, texture.width)
        draw_column(frame, column, wall, texture, floor_color, ceiling_color)
    return frame