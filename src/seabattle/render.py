"""Console rendering of the own board and the shadow board side by side."""

from __future__ import annotations

import string
from typing import TextIO

from .battleship import Board, CellState

LEFT_PAD = "  "
DELIMITER = "    "

GLYPHS = {
    CellState.EMPTY: ".",
    CellState.SHIP: "o",
    CellState.MISS: "*",
    CellState.HIT: "x",
    CellState.KILLED: "X",
}


def format_header(size: int) -> str:
    """Column labels, aligned with the cells of format_row()."""
    return "  " + " ".join(string.ascii_uppercase[:size])


def format_row(board: Board, row: int, *, reveal: bool = True) -> str:
    """Row digit followed by one glyph per cell; ships are hidden unless *reveal*."""
    glyphs = []
    for col in range(board.size):
        state = board.cell(row, col)
        if state == CellState.SHIP and not reveal:
            state = CellState.EMPTY
        glyphs.append(GLYPHS[state])
    return f"{row + 1} " + " ".join(glyphs)


def render_pair(left: Board, right: Board, out: TextIO) -> None:
    """Print *left* (own fleet, revealed) and *right* (opponent view) side by side."""
    header = LEFT_PAD + format_header(left.size) + DELIMITER + format_header(right.size)
    print(header, file=out)
    for row in range(left.size):
        print(LEFT_PAD + format_row(left, row) + DELIMITER + format_row(right, row, reveal=False), file=out)
    print(header, file=out)
