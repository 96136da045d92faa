import pytest

from navalbattle.commands import (
    parse_command,
    parse_ships,
    FireCommand,
    QuitCommand,
    CommandParseError,
)


def test_fire_basic():
    cmd = parse_command("1,2")
    assert isinstance(cmd, FireCommand)
    assert (cmd.row, cmd.col) == (1, 2)


def test_fire_whitespace_around_comma():
    cmd = parse_command("  3 ,  4 ")
    assert cmd == FireCommand(row=3, col=4)


def test_fire_negative_is_parsed_for_resolver():
    # out of range, but still a coordinate: the resolver answers INVALID
    assert parse_command("-1,0") == FireCommand(row=-1, col=0)


@pytest.mark.parametrize("line", ["quit", "QUIT", "Quit", "  quit  "])
def test_quit_any_case(line):
    assert isinstance(parse_command(line), QuitCommand)


@pytest.mark.parametrize("line", ["a,b", "1", "1,", ",2", "1;2", "1,2,3", "1.5,2", "1_0,2", "fire 1,2"])
def test_malformed_coordinates(line):
    with pytest.raises(CommandParseError):
        parse_command(line)


def test_fire_with_huge_number_is_parse_error():
    # longer than int()'s digit limit; must not escape as a bare ValueError
    with pytest.raises(CommandParseError):
        parse_command("1" * 5000 + ",0")
    with pytest.raises(CommandParseError):
        parse_command("0," + "9" * 5000)


def test_empty_line():
    with pytest.raises(CommandParseError):
        parse_command("    ")


def test_ships_basic():
    assert parse_ships("SHIPS:3,2,1") == [3, 2, 1]


def test_ships_whitespace_tolerated():
    assert parse_ships("SHIPS: 4 , 1") == [4, 1]


def test_ships_single():
    assert parse_ships("SHIPS:5") == [5]


@pytest.mark.parametrize(
    "line",
    [
        None,
        "",
        "hello",
        "ships:3,2",
        "SHIPS:",
        "SHIPS:3,,2",
        "SHIPS:a,2",
        "SHIPS:0,2",
        "SHIPS:-1",
        "SHIPS:2.5",
        "SHIPS:" + "1" * 5000,
        "SHIPS:2," + "3" * 5000,
    ],
)
def test_ships_fall_back_to_default(line):
    assert parse_ships(line) == [3, 2, 1]


def test_ships_custom_default():
    assert parse_ships("nonsense", default=(2, 2)) == [2, 2]
    assert parse_ships("nonsense", default=()) == []
