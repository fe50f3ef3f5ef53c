import pytest

from cubcaster.grid import (
    GameMap,
    Heading,
    MapError,
    Player,
    build_map,
    check_enclosed,
    check_line_chars,
    extract_map_lines,
    find_longest_line,
)

CLOSED = ["11111\n", "10N01\n", "10001\n", "11111\n"]


def test_check_line_chars_counts_players():
    assert check_line_chars("10N01\n") == 1
    assert check_line_chars("1 1 1\n") == 0


def test_check_line_chars_rejects_invalid_character():
    with pytest.raises(MapError, match="Invalid character in map : X"):
        check_line_chars("1X1\n")


def test_check_line_chars_rejects_two_players_on_a_line():
    with pytest.raises(MapError, match="Multiple players"):
        check_line_chars("1NS1\n")


def test_extract_skips_leading_and_trailing_empty_lines():
    lines = ["\n", "\n", *CLOSED, "\n", "\n"]
    assert extract_map_lines(lines) == CLOSED


def test_extract_stops_at_end_of_input():
    assert extract_map_lines(iter(CLOSED)) == CLOSED


def test_extract_missing_map():
    with pytest.raises(MapError, match="Map is missing"):
        extract_map_lines(["\n", "\n"])


def test_extract_map_too_small():
    with pytest.raises(MapError, match="too small"):
        extract_map_lines(["1N1\n", "111\n"])


def test_extract_player_missing():
    with pytest.raises(MapError, match="Player is missing"):
        extract_map_lines(["111\n", "101\n", "111\n"])


def test_extract_players_on_different_lines():
    with pytest.raises(MapError, match="Multiple players"):
        extract_map_lines(["111\n", "1N1\n", "1S1\n", "111\n"])


def test_extract_content_after_map_block():
    with pytest.raises(MapError, match="not well formatted"):
        extract_map_lines([*CLOSED, "\n", "111\n"])


def test_find_longest_line_ignores_newline_and_trailing_spaces():
    lines = ["1\n", "1  1   \n", "11"]
    assert find_longest_line(lines) == len("1  1")


def test_build_map_records_player_and_pads_rows():
    lines = ["1111\n", "1N1\n", "1111\n"]
    game_map = build_map(lines)
    assert game_map.width == 4
    assert game_map.height == 3
    assert game_map.player == Player(x=1, y=1, heading=Heading.NORTH)
    assert game_map.grid[1] == "101 "
    assert all(len(row) == game_map.width for row in game_map.grid)


@pytest.mark.parametrize("char", ["N", "S", "E", "W"])
def test_build_map_heading(char):
    game_map = build_map(["111\n", f"1{char}1\n", "111\n"])
    assert game_map.player.heading is Heading(char)
    assert game_map.is_floor(1, 1)


def test_is_floor():
    game_map = build_map(CLOSED)
    assert game_map.is_floor(1, 1)
    assert not game_map.is_floor(0, 0)
    assert not game_map.is_floor(-1, 1)
    assert not game_map.is_floor(game_map.width, 1)


def test_check_enclosed_accepts_closed_map():
    game_map = build_map(CLOSED)
    grid_before = game_map.grid
    assert check_enclosed(game_map) is game_map
    assert game_map.grid == grid_before


def test_check_enclosed_rejects_floor_on_border():
    game_map = build_map(["11111\n", "10N00\n", "11111\n"])
    with pytest.raises(MapError, match="surrounded by walls"):
        check_enclosed(game_map)


def test_check_enclosed_rejects_void_next_to_floor():
    game_map = build_map(["11111\n", "10N 1\n", "11111\n"])
    with pytest.raises(MapError, match="surrounded by walls"):
        check_enclosed(game_map)


def test_check_enclosed_rejects_short_row_leak():
    game_map = build_map(["11111\n", "1N001\n", "100\n", "11111\n"])
    with pytest.raises(MapError):
        check_enclosed(game_map)


def test_game_map_direct_construction():
    game_map = GameMap(
        width=3,
        height=3,
        grid=("111", "101", "111"),
        player=Player(1, 1, Heading.EAST),
    )
    assert check_enclosed(game_map).player.heading is Heading.EAST