import re
from dataclasses import dataclass

from .config import FIELD_SIZE

# Regex for valid moves A1..I9: letter is the column, digit is the row
MOVE_RE = re.compile(r"^[A-I][1-9]$")


class MoveParseError(ValueError):
    """Raised when text cannot be parsed as a move."""


@dataclass(frozen=True)
class Move:
    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < FIELD_SIZE and 0 <= self.col < FIELD_SIZE):
            raise ValueError(f"move ({self.row}, {self.col}) is outside the field")


def parse_move(text: str) -> Move:
    """
    Convert a move like 'C5' (column C, row 5) to a zero-based Move(row=4, col=2).
    Surrounding whitespace and lower case are accepted.
    """
    if text is None:
        raise MoveParseError("No move to parse")
    raw = text.strip().upper()
    if not MOVE_RE.match(raw):
        raise MoveParseError(f"Invalid move: {text!r}")
    return Move(row=ord(raw[1]) - ord("1"), col=ord(raw[0]) - ord("A"))


def format_move(move: Move) -> str:
    """
    Convert a Move to its two-character form, e.g. Move(row=4, col=2) -> 'C5'.
    """
    return f"{chr(ord('A') + move.col)}{chr(ord('1') + move.row)}"
