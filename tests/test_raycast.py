import numpy as np
import pytest

from cubcaster.grid import GameMap, Heading, Player
from cubcaster.player import Camera
from cubcaster.raycast import (
    RayHit,
    Side,
    WallSlice,
    cast_ray,
    draw_column,
    render_frame,
    texture_index,
    wall_slice,
)
from cubcaster.xpm import XpmImage

ROWS = (
    "1111111",
    "1000001",
    "1000001",
    "1000001",
    "1111111",
)


def make_map(heading=Heading.EAST):
    return GameMap(width=7, height=5, grid=ROWS, player=Player(x=3, y=2, heading=heading))


def uniform_texture(color, size=8):
    return XpmImage(size, size, np.full((size, size), color, dtype=np.uint32))


@pytest.mark.parametrize(
    ("side", "dx", "dy", "expected"),
    [
        (Side.X, -1.0, 0.0, 1),
        (Side.X, 1.0, 0.0, 0),
        (Side.Y, 0.0, -1.0, 3),
        (Side.Y, 0.0, 1.0, 2),
    ],
)
def test_texture_index(side, dx, dy, expected):
    hit = RayHit(map_x=1, map_y=1, side=side, ray_dir_x=dx, ray_dir_y=dy, distance=1.0)
    assert texture_index(hit) == expected


def test_center_ray_facing_east_hits_east_wall():
    game_map = make_map()
    camera = Camera.from_player(game_map.player)
    hit = cast_ray(camera, game_map, 50, 100)
    assert hit.side is Side.X
    assert hit.map_x == 6
    assert hit.map_y == 2
    assert hit.distance > 0


def test_center_ray_facing_north_hits_top_wall():
    game_map = make_map(Heading.NORTH)
    camera = Camera.from_player(game_map.player)
    hit = cast_ray(camera, game_map, 50, 100)
    assert hit.side is Side.Y
    assert hit.map_y == 0
    assert texture_index(hit) == 3


@pytest.mark.parametrize("column", [0, 13, 50, 77, 99])
def test_wall_slice_stays_on_screen(column):
    game_map = make_map()
    camera = Camera.from_player(game_map.player)
    hit = cast_ray(camera, game_map, column, 100)
    wall = wall_slice(hit, camera, 60, 16)
    assert 0 <= wall.draw_start <= wall.draw_end <= 59
    assert 0.0 <= wall.wall_x < 1.0
    assert 0 <= wall.texture_x < 16


def test_close_wall_is_clamped_to_screen():
    hit = RayHit(map_x=1, map_y=0, side=Side.Y, ray_dir_x=0.0, ray_dir_y=-1.0, distance=0.1)
    camera = Camera(pos_x=1.5, pos_y=1.1, dir_y=-1.0, plane_x=0.66)
    wall = wall_slice(hit, camera, 40, 8)
    assert wall.draw_start == 0
    assert wall.draw_end == 39


def test_draw_column_fills_ceiling_wall_and_floor():
    frame = np.zeros((10, 3), dtype=np.uint32)
    wall = WallSlice(line_height=4, draw_start=3, draw_end=7, wall_x=0.5, texture_x=2)
    draw_column(frame, 1, wall, uniform_texture(0x123456), 0x00FF00, 0x0000FF)
    column = frame[:, 1].tolist()
    assert column[0] == 0
    assert column[1:4] == [0x0000FF] * 3
    assert column[4:8] == [0x123456] * 4
    assert column[8:10] == [0x00FF00] * 2
    assert frame[:, 0].tolist() == [0] * 10


def test_render_frame_layout():
    game_map = make_map()
    camera = Camera.from_player(game_map.player)
    colors = [0xAA0000, 0x00BB00, 0x0000CC, 0xDDDD00]
    textures = [uniform_texture(color) for color in colors]
    frame = render_frame(camera, game_map, textures, 40, 30, 0x101010, 0x202020)
    assert frame.shape == (30, 40)
    assert frame[0].tolist() == [0] * 40
    assert int(frame[1, 20]) == 0x202020
    assert int(frame[29, 20]) == 0x101010
    assert int(frame[15, 20]) == colors[0]
    wall_colors = set(np.unique(frame).tolist()) - {0, 0x101010, 0x202020}
    assert wall_colors <= set(colors)