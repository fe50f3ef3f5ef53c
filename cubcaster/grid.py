"""Reading, building and checking the map grid of a scene file."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

FLOOR = "0"
WALL = "1"
EMPTY = " "

_PLAYER_CHARS = frozenset("NSEW")
_MAP_CHARS = frozenset(" 10NSEW\n")
_MIN_HEIGHT = 3
_NEIGHBOURS = ((0, -1), (0, 1), (-1, 0), (1, 0))


class MapError(ValueError):
    """Raised when the map part of a scene file is invalid."""


class Heading(Enum):
    """The direction the player faces at the start."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"


@dataclass(frozen=True)
class Player:
    """Starting cell and heading of the player."""

    x: int
    y: int
    heading: Heading


@dataclass(frozen=True)
class GameMap:
    """A rectangular grid of ``'0'`` floor, ``'1'`` wall and ``' '`` void cells."""

    width: int
    height: int
    grid: tuple[str, ...]
    player: Player

    def is_floor(self, x: int, y: int) -> bool:
        """True if the cell at column ``x``, row ``y`` exists and is floor."""
        if 0 <= y < self.height and 0 <= x < self.width:
            return self.grid[y][x] == FLOOR
        return False


def check_line_chars(line: str) -> int:
    """Check that a map line holds only map characters.

    Returns the number of player characters on the line.
    """
    players = 0
    for char in line:
        if char not in _MAP_CHARS:
            raise MapError(f"Invalid character in map : {char}")
        if char in _PLAYER_CHARS:
            players += 1
            if players > 1:
                raise MapError("Multiple players")
    return players


def extract_map_lines(lines: Iterable[str]) -> list[str]:
    """Take the map block from the lines that follow the parameters.

    Leading empty lines are skipped; the block ends at the first empty
    line, after which only empty lines may follow.
    """
    it = iter(lines)
    line: str | None = None
    for candidate in it:
        if not candidate.startswith("\n"):
            line = candidate
            break
    if not line:
        raise MapError("Map is missing")

    map_lines: list[str] = []
    players = 0
    while line and not line.startswith("\n"):
        players += check_line_chars(line)
        if players > 1:
            raise MapError("Multiple players")
        map_lines.append(line)
        line = next(it, None)

    if len(map_lines) < _MIN_HEIGHT:
        raise MapError("Map is too small")
    if not players:
        raise MapError("Player is missing")

    for rest in it:
        if rest and not rest.startswith("\n"):
            raise MapError("Map is not well formatted")
    return map_lines


def _content(line: str) -> str:
    return line[:-1] if line.endswith("\n") else line


def find_longest_line(lines: Iterable[str]) -> int:
    """Length of the longest line, not counting newline or trailing spaces."""
    return max((len(_content(line).rstrip(" ")) for line in lines), default=0)


def build_map(lines: Sequence[str]) -> GameMap:
    """Build a rectangular grid from map lines, padding short rows with voids.

    The player's cell becomes floor and its position is recorded.
    """
    width = find_longest_line(lines)
    player: Player | None = None
    rows: list[str] = []
    for y, line in enumerate(lines):
        content = _content(line).replace("\n", EMPTY)
        cells: list[str] = []
        for x, char in enumerate(content[:width].ljust(width, EMPTY)):
            if char in _PLAYER_CHARS:
                player = Player(x=x, y=y, heading=Heading(char))
                char = FLOOR
            cells.append(char)
        rows.append("".join(cells))
    if player is None:
        raise MapError("Player is missing")
    return GameMap(width=width, height=len(rows), grid=tuple(rows), player=player)


def check_enclosed(game_map: GameMap) -> GameMap:
    """Check that every floor cell is closed in by floor or walls.

    Returns the map unchanged so that calls can be chained.
    """
    grid = game_map.grid
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell != FLOOR:
                continue
            for dx, dy in _NEIGHBOURS:
                nx, ny = x + dx, y + dy
                inside = 0 <= ny < game_map.height and 0 <= nx < game_map.width
                if not inside or grid[ny][nx] not in (FLOOR, WALL):
                    raise MapError("Map is not surrounded by walls")
    return game_map