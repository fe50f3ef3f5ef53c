import pytest

from cubcaster.config import ConfigError, parse_color
from cubcaster.grid import Heading, MapError
from cubcaster.loader import (
    Scene,
    check_extension,
    check_program_args,
    load_scene,
    parse_scene,
)

MAP = ["11111\n", "10W01\n", "10001\n", "11111\n"]


@pytest.fixture
def textures(tmp_path):
    paths = {}
    for name in ("north", "south", "west", "east"):
        path = tmp_path / f"{name}.xpm"
        path.write_text('"1 1 1 1",\n"a c #000000",\n"a"\n')
        paths[name] = str(path)
    return paths


def _scene_lines(textures, map_lines=MAP):
    return [
        f"NO {textures['north']}\n",
        f"SO {textures['south']}\n",
        "\n",
        f"WE {textures['west']}\n",
        f"EA {textures['east']}\n",
        "F 220,100,0\n",
        "C 225,30,0\n",
        "\n",
        *map_lines,
    ]


def test_check_program_args_returns_path():
    assert check_program_args(["prog", "maps/a.cub"]) == "maps/a.cub"


@pytest.mark.parametrize("argv", [["./bin/cub3D"], ["./bin/cub3D", "a.cub", "b.cub"]])
def test_check_program_args_wrong_count(argv):
    with pytest.raises(ValueError, match="^cub3D only accepts one argument"):
        check_program_args(argv)


def test_check_extension_accepts():
    assert check_extension("prog", "maps/map.cub", ".cub") == "maps/map.cub"


@pytest.mark.parametrize("path", [".cub", "map.txt", "map.cub.bak"])
def test_check_extension_rejects(path):
    with pytest.raises(ConfigError, match=".cub extension"):
        check_extension("prog", path, ".cub")


def test_parse_scene(textures):
    scene = parse_scene(_scene_lines(textures))
    assert isinstance(scene, Scene)
    assert scene.config.north == textures["north"]
    assert scene.config.east == textures["east"]
    assert scene.config.floor == parse_color("F 220,100,0\n")
    assert scene.config.ceiling == parse_color("C 225,30,0\n")
    player = scene.game_map.player
    assert (player.x, player.y, player.heading) == (2, 1, Heading.WEST)
    assert scene.game_map.grid[1] == MAP[1].rstrip("\n").replace("W", "0")


def test_parse_scene_missing_parameter(textures):
    lines = _scene_lines(textures)
    del lines[5]
    with pytest.raises(ConfigError, match="Missing or invalid parameters"):
        parse_scene(lines)


def test_parse_scene_open_map(textures):
    open_map = ["11111\n", "10W0 \n", "11111\n"]
    with pytest.raises(MapError, match="surrounded by walls"):
        parse_scene(_scene_lines(textures, open_map))


def test_parse_scene_without_map(textures):
    with pytest.raises(MapError, match="Map is missing"):
        parse_scene(_scene_lines(textures, []))


def test_load_scene_round_trip(tmp_path, textures):
    path = tmp_path / "scene.cub"
    lines = _scene_lines(textures)
    path.write_text("".join(lines))
    assert load_scene(path) == parse_scene(lines)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="is not a valid file"):
        load_scene(tmp_path / "absent.cub")


def test_load_scene_wrong_extension(tmp_path, textures):
    path = tmp_path / "scene.txt"
    path.write_text("".join(_scene_lines(textures)))
    with pytest.raises(ConfigError, match="extension"):
        load_scene(path)