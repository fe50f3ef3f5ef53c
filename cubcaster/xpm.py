"""Reading of XPM pixmaps used as wall textures."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

import numpy as np

from cubcaster.colornames import lookup_color

TRANSPARENT = 0xFF000000
_NAME_BUFFER = 63

_WORD_SPLIT = re.compile(r"[ \t]+")
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_STRTOL_HEX = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)"
)


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


@dataclass(frozen=True, eq=False)
class XpmImage:
    """A decoded pixmap: ``pixels[y, x]`` holds 0xAARRGGBB values."""

    width: int
    height: int
    pixels: np.ndarray

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        return int(self.pixels[y, x])


def split_words(text: str) -> list[str]:
    """Split on spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _find_unquoted(text: str, token: str) -> int:
    in_quote = False
    for pos, char in enumerate(text):
        if char == '"':
            in_quote = not in_quote
        elif not in_quote and text.startswith(token, pos):
            return pos
    return -1


def _blank(text: str, start: int, stop: int) -> str:
    return text[:start] + " " * (stop - start) + text[stop:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quotes with spaces, keeping length."""
    while (begin := _find_unquoted(text, "/*")) != -1:
        end = text.find("*/", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 2)
    while (begin := _find_unquoted(text, "//")) != -1:
        end = text.find("\n", begin + 2)
        text = _blank(text, begin, len(text) if end == -1 else end + 1)
    return text


def quoted_lines(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in order."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def _strtol_hex(text: str) -> int:
    match = _STRTOL_HEX.match(text)
    if not match:
        return 0
    value = int(match.group(2), 16)
    return -value if match.group(1) == "-" else value


def parse_text_rgb(name: str, end: str | None) -> int:
    """Turn an XPM colour spec into 0xRRGGBB, -1 for none, 0 if unknown.

    ``end`` is the word after ``name``; it is joined to it so that
    two-word colour names such as ``light blue`` are found.
    """
    if name.startswith("#"):
        return _strtol_hex(name[1:])
    if end is not None:
        name = f"{name} {end}"[:_NAME_BUFFER]
    color = lookup_color(name)
    return 0 if color is None else color


def _read_header(header: str | None) -> tuple[int, int, int, int]:
    if header is None:
        raise XpmError("missing XPM header")
    words = split_words(header)
    if len(words) < 4:
        raise XpmError(f"invalid XPM header: {header!r}")
    width, height, ncolors, cpp = (_atoi(word) for word in words[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError(f"invalid XPM header: {header!r}")
    return width, height, ncolors, cpp


def _read_colors(lines: Iterator[str], ncolors: int, cpp: int) -> dict[str, int]:
    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = next(lines, None)
        if line is None:
            raise XpmError("missing XPM colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"no colour key in {line!r}") from None
        if index >= len(words):
            raise XpmError(f"no colour value in {line!r}")
        end = words[index + 1] if index + 1 < len(words) else None
        color = parse_text_rgb(words[index], end)
        key = line[:cpp]
        # Short keys use a direct table (last definition wins); longer
        # keys are searched in reading order (first definition wins).
        if cpp <= 2:
            colors[key] = color
        else:
            colors.setdefault(key, color)
    return colors


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode XPM data given as its quoted strings, header first."""
    it = iter(lines)
    width, height, ncolors, cpp = _read_header(next(it, None))
    colors = _read_colors(it, ncolors, cpp)
    pixels = np.zeros((height, width), dtype=np.uint32)
    for y in range(height):
        line = next(it, None)
        if line is None:
            raise XpmError(f"missing pixel row {y}")
        if len(line) < width * cpp:
            raise XpmError(f"pixel row {y} is too short")
        row = (colors.get(line[x * cpp:(x + 1) * cpp], 0) for x in range(width))
        pixels[y] = [
            TRANSPARENT if color == -1 else color & 0xFFFFFFFF for color in row
        ]
    return XpmImage(width=width, height=height, pixels=pixels)


def load_xpm(path: str | PathLike[str]) -> XpmImage:
    """Read and decode an XPM file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    text = strip_comments(data.decode("latin-1"))
    return parse_xpm(quoted_lines(text))