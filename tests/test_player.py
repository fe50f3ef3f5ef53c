import math
from dataclasses import replace

import pytest

from cubcaster.grid import GameMap, Heading, Player
from cubcaster.player import Camera, Controls


def make_map(heading=Heading.NORTH, x=2, y=2):
    rows = (
        "11111",
        "10001",
        "10001",
        "10001",
        "11111",
    )
    return GameMap(width=5, height=5, grid=rows, player=Player(x=x, y=y, heading=heading))


def test_from_player_north_uses_source_vectors():
    camera = Camera.from_player(Player(x=3, y=4, heading=Heading.NORTH))
    assert camera.pos_x == 3.5
    assert camera.pos_y == 4.5
    assert camera.dir_x == 0.0
    assert camera.dir_y == -1.01
    assert camera.plane_x == 0.66
    assert camera.plane_y == 0.0


@pytest.mark.parametrize("heading", list(Heading))
def test_direction_and_plane_are_perpendicular(heading):
    camera = Camera.from_player(Player(x=1, y=1, heading=heading))
    assert camera.dir_x * camera.plane_x + camera.dir_y * camera.plane_y == 0.0
    assert math.hypot(camera.dir_x, camera.dir_y) == pytest.approx(1.01)
    assert math.hypot(camera.plane_x, camera.plane_y) == pytest.approx(0.66)


def test_forward_moves_along_direction():
    game_map = make_map()
    camera = Camera.from_player(game_map.player)
    camera.move(Controls(forward=True), game_map, 0.1)
    assert camera.pos_x == pytest.approx(2.5)
    assert camera.pos_y == pytest.approx(2.5 - 1.01 * 0.1)


def test_forward_then_backward_returns():
    game_map = make_map(Heading.EAST)
    camera = Camera.from_player(game_map.player)
    camera.move(Controls(forward=True), game_map, 0.3)
    camera.move(Controls(backward=True), game_map, 0.3)
    assert camera.pos_x == pytest.approx(2.5)
    assert camera.pos_y == pytest.approx(2.5)


def test_right_then_left_returns():
    game_map = make_map(Heading.SOUTH)
    camera = Camera.from_player(game_map.player)
    camera.move(Controls(right=True), game_map, 0.2)
    moved = camera.pos_x
    camera.move(Controls(left=True), game_map, 0.2)
    assert moved != pytest.approx(2.5)
    assert camera.pos_x == pytest.approx(2.5)


def test_wall_blocks_movement():
    game_map = make_map(Heading.NORTH, x=1, y=1)
    camera = Camera.from_player(game_map.player)
    camera.move(Controls(forward=True), game_map, 1.0)
    assert camera.pos_y == 1.5
    assert camera.pos_x == 1.5


def test_rotate_right_then_left_restores():
    game_map = make_map(Heading.WEST)
    camera = Camera.from_player(game_map.player)
    original = replace(camera)
    camera.rotate(Controls(cam_right=True), 0.4)
    assert camera.dir_y != pytest.approx(original.dir_y)
    camera.rotate(Controls(cam_left=True), 0.4)
    assert camera.dir_x == pytest.approx(original.dir_x)
    assert camera.dir_y == pytest.approx(original.dir_y)
    assert camera.plane_x == pytest.approx(original.plane_x)
    assert camera.plane_y == pytest.approx(original.plane_y)


def test_rotation_keeps_lengths():
    camera = Camera.from_player(Player(x=2, y=2, heading=Heading.EAST))
    for _ in range(7):
        camera.rotate(Controls(cam_right=True), 0.1)
    assert math.hypot(camera.dir_x, camera.dir_y) == pytest.approx(1.01)
    assert math.hypot(camera.plane_x, camera.plane_y) == pytest.approx(0.66)


def test_update_without_keys_changes_nothing():
    game_map = make_map()
    camera = Camera.from_player(game_map.player)
    before = replace(camera)
    camera.update(Controls(), game_map)
    assert camera == before


def test_update_is_move_then_rotate():
    game_map = make_map(Heading.EAST)
    controls = Controls(forward=True, cam_right=True)
    first = Camera.from_player(game_map.player)
    second = replace(first)
    first.update(controls, game_map, 0.1)
    second.move(controls, game_map, 0.1)
    second.rotate(controls, 0.1)
    assert first == second