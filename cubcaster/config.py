"""Parsing of the texture and colour parameters of a scene file."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, fields, replace

_SPACES = " \t\n\v\f\r"
_DIGITS = "0123456789"
_TEXTURE_EXTENSION = ".xpm"

_TEXTURE_FIELDS = {"NO ": "north", "SO ": "south", "WE ": "west", "EA ": "east"}
_COLOR_FIELDS = {"F ": "floor", "C ": "ceiling"}


class ConfigError(ValueError):
    """Raised when a scene parameter is missing or invalid."""


@dataclass(frozen=True)
class SceneConfig:
    """Texture paths and floor/ceiling colours (0xRRGGBB) of a scene."""

    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    floor: int | None = None
    ceiling: int | None = None

    def is_complete(self) -> bool:
        """True once every texture and colour has been set."""
        return all(getattr(self, field.name) is not None for field in fields(self))


def check_color_component(text: str) -> int:
    """Validate one RGB component (1-3 digits, 0-255) and return its value."""
    digits = text.strip(_SPACES)
    if not digits or len(digits) > 3 or any(char not in _DIGITS for char in digits):
        raise ConfigError(f"Invalid color value : {text}")
    value = int(digits)
    if value > 255:
        raise ConfigError(f"Invalid color value : {text}")
    return value


def _parameter_value(line: str, prefix_length: int) -> str:
    value = line[prefix_length:].lstrip(_SPACES)
    return value[:-1] if value.endswith("\n") else value


def parse_color(line: str) -> int:
    """Parse an ``F r,g,b`` or ``C r,g,b`` line into 0xRRGGBB."""
    values = _parameter_value(line, 2)
    if values.count(",") > 2:
        raise ConfigError(f"Invalid color format : {line}")
    parts = [part for part in values.split(",") if part]
    if len(parts) != 3:
        raise ConfigError(f"Invalid color format : {values}")
    red, green, blue = (check_color_component(part) for part in parts)
    return (red << 16) | (green << 8) | blue


def parse_texture_path(line: str) -> str:
    """Return the path given on a ``NO``/``SO``/``WE``/``EA`` line."""
    return _parameter_value(line, 3)


def check_texture_path(path: str) -> None:
    """Check that a texture path names a readable ``.xpm`` file."""
    if len(path) <= len(_TEXTURE_EXTENSION) or not path.endswith(_TEXTURE_EXTENSION):
        raise ConfigError(f"{path} does not have the {_TEXTURE_EXTENSION} extension")
    try:
        with open(path, "rb"):
            pass
    except OSError as exc:
        raise ConfigError(f"{path} is not valid texture path") from exc


def apply_line(config: SceneConfig, line: str | None) -> SceneConfig:
    """Return the configuration updated with one parameter line."""
    if line is None:
        raise ConfigError("Missing or invalid parameters")
    texture_field = _TEXTURE_FIELDS.get(line[:3])
    if texture_field is not None:
        if getattr(config, texture_field) is not None:
            raise ConfigError(f"{line[:3]}texture set multiple times")
        path = parse_texture_path(line)
        check_texture_path(path)
        return replace(config, **{texture_field: path})
    color_field = _COLOR_FIELDS.get(line[:2])
    if color_field is not None:
        if getattr(config, color_field) is not None:
            raise ConfigError(f"{line[:2].strip()} color set multiple times")
        return replace(config, **{color_field: parse_color(line)})
    if line.startswith("\n"):
        return config
    raise ConfigError("Missing or invalid parameters")


def read_parameters(lines: Iterable[str]) -> SceneConfig:
    """Read parameter lines until all are set.

    Lines are taken from the iterable only as needed, so an iterator
    passed in is left positioned after the last parameter line.
    """
    it = iter(lines)
    config = SceneConfig()
    while not config.is_complete():
        config = apply_line(config, next(it, None))
    return config