import pytest

from seabattle.coord_utils import Move, MoveParseError, format_move, parse_move


def test_parse_corner_moves():
    assert parse_move("A1") == Move(row=0, col=0)
    assert parse_move("I9") == Move(row=8, col=8)


def test_letter_is_column_digit_is_row():
    move = parse_move("C5")
    assert (move.row, move.col) == (4, 2)


def test_whitespace_and_case():
    assert parse_move("  b7 \n") == Move(row=6, col=1)


@pytest.mark.parametrize("text", ["J1", "A0", "A10", "", "   ", "1A", "AA", "A", "Z9", "B-1"])
def test_invalid_moves(text):
    with pytest.raises(MoveParseError):
        parse_move(text)


def test_move_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_move("K1")


def test_format_move():
    assert format_move(Move(row=4, col=2)) == "C5"
    assert format_move(Move(row=0, col=8)) == "I1"


@pytest.mark.parametrize("row, col", [(-1, 0), (0, 9), (9, 9)])
def test_move_outside_field_rejected(row, col):
    with pytest.raises(ValueError):
        Move(row=row, col=col)
