import pytest

from checkers_online.notation import move_to_str, parse_move_str, parse_position, pos_to_str
from checkers_online.types import Move


def test_pos_to_str():
    assert pos_to_str((5, 2)) == "5,2"


def test_move_to_str_basic_and_chain():
    assert move_to_str(Move(start=(5, 2), end=(4, 3))) == "5,2-4,3"
    chain = Move(start=(5, 2), end=(1, 2), capture_chain=((3, 4), (1, 2)))
    assert move_to_str(chain) == "5,2x3,4x1,2"


@pytest.mark.parametrize("text,expected", [
    ("5,2", (5, 2)),
    ("52", (5, 2)),
    (" 5, 2 ", (5, 2)),
    ("8,0", None),
    ("5", None),
    ("a,b", None),
])
def test_parse_position(text, expected):
    assert parse_position(text) == expected


def test_parse_move_str():
    assert parse_move_str("5,2-4,3") == [(5, 2), (4, 3)]
    assert parse_move_str("52-43") == [(5, 2), (4, 3)]
    assert parse_move_str("5,2x3,4x1,2") == [(5, 2), (3, 4), (1, 2)]


@pytest.mark.parametrize("text", ["", "5,2", "5,2-9,9", "hello"])
def test_parse_move_str_rejects_garbage(text):
    assert parse_move_str(text) is None


def test_notation_round_trip_for_chain():
    chain = Move(start=(6, 1), end=(2, 5), capture_chain=((4, 3), (2, 5)))
    assert parse_move_str(move_to_str(chain)) == [(6, 1), (4, 3), (2, 5)]
