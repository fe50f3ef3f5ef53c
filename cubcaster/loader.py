"""Loading a scene: command-line checks, parameters, map and validation."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cubcaster.config import ConfigError, SceneConfig, read_parameters
from cubcaster.grid import GameMap, build_map, check_enclosed, extract_map_lines

SCENE_EXTENSION = ".cub"
_PROGRAM = "cubcaster"


@dataclass(frozen=True)
class Scene:
    """A fully parsed and validated scene."""

    config: SceneConfig
    game_map: GameMap


def check_program_args(argv: Sequence[str]) -> str:
    """Check that exactly one argument was given and return it."""
    if len(argv) != 2:
        program = os.path.basename(argv[0]) if argv else _PROGRAM
        raise ValueError(f"{program} only accepts one argument")
    return argv[1]


def check_extension(program: str, path: str, extension: str) -> str:
    """Check that ``path`` has a name before ``extension``; return the path."""
    if len(path) <= len(extension) or not path.endswith(extension):
        raise ConfigError(f"{program}: {path} does not have the {extension} extension")
    return path


def parse_scene(lines: Iterable[str]) -> Scene:
    """Parse parameters then the map from the lines of a scene file."""
    it = iter(lines)
    config = read_parameters(it)
    game_map = check_enclosed(build_map(extract_map_lines(it)))
    return Scene(config=config, game_map=game_map)


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and parse a ``.cub`` scene file."""
    name = os.fspath(path)
    check_extension(_PROGRAM, name, SCENE_EXTENSION)
    try:
        handle = open(name, encoding="latin-1", newline="")
    except OSError as exc:
        raise ConfigError(f"{name} is not a valid file") from exc
    with handle:
        return parse_scene(handle)