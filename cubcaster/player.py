"""Player camera: start position, movement with collisions and rotation."""

from __future__ import annotations

import math
from dataclasses import dataclass

from cubcaster.grid import GameMap, Heading, Player

DEFAULT_SPEED = 0.1

_DIRECTION = 1.01
_PLANE = 0.66

# Heading -> (dir_x, dir_y, plane_x, plane_y)
_START_VECTORS = {
    Heading.NORTH: (0.0, -_DIRECTION, _PLANE, 0.0),
    Heading.SOUTH: (0.0, _DIRECTION, -_PLANE, 0.0),
    Heading.EAST: (_DIRECTION, 0.0, 0.0, _PLANE),
    Heading.WEST: (-_DIRECTION, 0.0, 0.0, -_PLANE),
}


@dataclass
class Controls:
    """Which movement and camera keys are currently held down."""

    forward: bool = False
    backward: bool = False
    right: bool = False
    left: bool = False
    cam_left: bool = False
    cam_right: bool = False


@dataclass
class Camera:
    """Position, view direction and camera plane of the player."""

    pos_x: float
    pos_y: float
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    @classmethod
    def from_player(cls, player: Player) -> Camera:
        """Place the camera at the centre of the player's starting cell."""
        dir_x, dir_y, plane_x, plane_y = _START_VECTORS[player.heading]
        return cls(
            pos_x=player.x + 0.5,
            pos_y=player.y + 0.5,
            dir_x=dir_x,
            dir_y=dir_y,
            plane_x=plane_x,
            plane_y=plane_y,
        )

    def _step(self, game_map: GameMap, dx: float, dy: float) -> None:
        # Each axis is tried on its own so the player slides along walls.
        if game_map.is_floor(int(self.pos_x + dx), int(self.pos_y)):
            self.pos_x += dx
        if game_map.is_floor(int(self.pos_x), int(self.pos_y + dy)):
            self.pos_y += dy

    def move(self, controls: Controls, game_map: GameMap, speed: float = DEFAULT_SPEED) -> None:
        """Move along the view direction and the camera plane as keys ask."""
        if controls.forward:
            self._step(game_map, self.dir_x * speed, self.dir_y * speed)
        if controls.backward:
            self._step(game_map, -self.dir_x * speed, -self.dir_y * speed)
        if controls.right:
            self._step(game_map, self.plane_x * speed, self.plane_y * speed)
        if controls.left:
            self._step(game_map, -self.plane_x * speed, -self.plane_y * speed)

    def _turn(self, angle: float) -> None:
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def rotate(self, controls: Controls, angle: float = DEFAULT_SPEED) -> None:
        """Turn right and/or left by ``angle`` radians as keys ask."""
        if controls.cam_right:
            self._turn(angle)
        if controls.cam_left:
            self._turn(-angle)

    def update(self, controls: Controls, game_map: GameMap, speed: float = DEFAULT_SPEED) -> None:
        """Apply one frame of movement then rotation."""
        self.move(controls, game_map, speed)
        self.rotate(controls, speed)