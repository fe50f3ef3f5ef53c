"""The game: window, key handling and the frame loop."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

import numpy as np

from cubcaster.loader import Scene, check_program_args, load_scene
from cubcaster.player import DEFAULT_SPEED, Camera, Controls
from cubcaster.raycast import render_frame
from cubcaster.xpm import XpmImage, load_xpm

DEFAULT_WIDTH = 1600
DEFAULT_HEIGHT = 1200
WINDOW_TITLE = "cubcaster"

KEY_ESCAPE = 65307
KEY_W = 119
KEY_S = 115
KEY_D = 100
KEY_A = 97
KEY_LEFT = 65361
KEY_RIGHT = 65363

_KEY_CONTROLS = {
    KEY_W: "forward",
    KEY_S: "backward",
    KEY_D: "right",
    KEY_A: "left",
    KEY_LEFT: "cam_left",
    KEY_RIGHT: "cam_right",
}


def load_textures(scene: Scene) -> tuple[XpmImage, XpmImage, XpmImage, XpmImage]:
    """Load the wall textures in ray-casting order: west, east, north, south."""
    config = scene.config
    paths = (config.west, config.east, config.north, config.south)
    if any(path is None for path in paths):
        raise ValueError("Missing texture path")
    west, east, north, south = (load_xpm(path) for path in paths)
    return west, east, north, south


@dataclass
class Game:
    """State of a running game: scene, camera, held keys and textures."""

    scene: Scene
    camera: Camera
    textures: tuple[XpmImage, ...]
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    controls: Controls = field(default_factory=Controls)
    speed: float = DEFAULT_SPEED
    running: bool = True

    @classmethod
    def from_scene(
        cls, scene: Scene, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT
    ) -> Game:
        """Create a game for a scene, loading its textures."""
        return cls(
            scene=scene,
            camera=Camera.from_player(scene.game_map.player),
            textures=load_textures(scene),
            width=width,
            height=height,
        )

    def handle_keypress(self, key: int) -> None:
        """Start the action bound to a key; Escape ends the game."""
        if key == KEY_ESCAPE:
            self.running = False
            return
        name = _KEY_CONTROLS.get(key)
        if name is not None:
            setattr(self.controls, name, True)

    def handle_keyrelease(self, key: int) -> None:
        """Stop the action bound to a key."""
        name = _KEY_CONTROLS.get(key)
        if name is not None:
            setattr(self.controls, name, False)

    def step(self) -> np.ndarray:
        """Advance one frame and return the rendered ``(height, width)`` frame."""
        self.camera.update(self.controls, self.scene.game_map, self.speed)
        config = self.scene.config
        return render_frame(
            self.camera,
            self.scene.game_map,
            self.textures,
            self.width,
            self.height,
            config.floor if config.floor is not None else 0,
            config.ceiling if config.ceiling is not None else 0,
        )

    def run(self) -> None:
        """Open a window and run the frame loop until the game ends."""
        import pygame

        key_map = {
            pygame.K_ESCAPE: KEY_ESCAPE,
            pygame.K_w: KEY_W,
            pygame.K_s: KEY_S,
            pygame.K_d: KEY_D,
            pygame.K_a: KEY_A,
            pygame.K_LEFT: KEY_LEFT,
            pygame.K_RIGHT: KEY_RIGHT,
        }
        pygame.init()
        try:
            screen = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption(WINDOW_TITLE)
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN and event.key in key_map:
                        self.handle_keypress(key_map[event.key])
                    elif event.type == pygame.KEYUP and event.key in key_map:
                        self.handle_keyrelease(key_map[event.key])
                if not self.running:
                    break
                pygame.surfarray.blit_array(screen, _to_rgb(self.step()))
                pygame.display.flip()
        finally:
            pygame.quit()


def _to_rgb(frame: np.ndarray) -> np.ndarray:
    channels = ((frame >> 16) & 0xFF, (frame >> 8) & 0xFF, frame & 0xFF)
    return np.stack(channels, axis=-1).astype(np.uint8).swapaxes(0, 1)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and play it."""
    args = list(sys.argv if argv is None else argv)
    try:
        path = check_program_args(args)
        scene = load_scene(path)
        game = Game.from_scene(scene)
        game.run()
    except (ValueError, OSError, RuntimeError) as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())