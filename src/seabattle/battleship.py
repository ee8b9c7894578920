"""
battleship.py

Core data structures for the seabattle game:
 - CellState / ShotResult enumerations
 - Ship: one straight run of cells with a remaining-health counter
 - Board: a 9x9 grid holding either a real fleet (own board) or only the
   outcomes observed while firing at the opponent (shadow board)

Both roles share one Board type. The own board is generated randomly and
resolves incoming shots via shoot(); the shadow board starts empty and is
only ever updated through mark_miss() / mark_hit() / mark_kill().
"""

from __future__ import annotations

import enum
import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union

import numpy as np

from . import config as _cfg

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

_NEIGHBOURS = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)]
_ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]


class CellState(enum.IntEnum):
    """State of a single cell. Values only ever increase during a game."""

    EMPTY = 0  # water, or "unknown" on a shadow board
    SHIP = 1
    MISS = 2
    HIT = 3  # ship segment hit, ship still afloat
    KILLED = 4  # segment of a sunk ship


class ShotResult(enum.Enum):
    """Outcome of resolving one shot against a board."""

    MISS = "miss"
    HIT = "hit"
    KILL = "kill"


@dataclass
class Ship:
    cells: List[Coord]
    health: int = field(init=False)

    def __post_init__(self) -> None:
        self.health = len(self.cells)

    @property
    def size(self) -> int:
        return len(self.cells)

    def is_sunk(self) -> bool:
        return self.health == 0


class Board:
    """
    A single player's field.

    We store:
      - self.grid: numpy int8 array of CellState values, indexed [row, col]
      - self.ships: the fleet (empty for a shadow board)
      - self._ship_at: (row, col) -> Ship lookup for live and hit segments
    """

    def __init__(self, size: int = _cfg.FIELD_SIZE):
        """Initialise an empty *size*x*size* board with no ships placed."""
        self.size = size
        self.grid = np.full((size, size), CellState.EMPTY, dtype=np.int8)
        self.ships: List[Ship] = []
        self._ship_at: dict[Coord, Ship] = {}

    # ------------------------------------------------------------------ #
    # Generation
    # ------------------------------------------------------------------ #
    @classmethod
    def generate_random(
        cls,
        rng: Union[random.Random, int, None] = None,
        fleet: Tuple[int, ...] = _cfg.FLEET,
    ) -> "Board":
        """Return a board holding *fleet* at random, non-touching positions.

        *rng* is either a ``random.Random`` instance (consumed, not copied) or
        an integer seed. The same seed always yields the same layout.
        """
        if not isinstance(rng, random.Random):
            rng = random.Random(rng)

        restarts = 0
        while True:
            board = cls()
            if board._place_fleet(rng, fleet):
                logger.debug("generate_random() placed %d ships after %d restarts", len(fleet), restarts)
                return board
            restarts += 1

    def _place_fleet(self, rng: random.Random, fleet: Tuple[int, ...]) -> bool:
        for ship_size in sorted(fleet, reverse=True):
            for _ in range(_cfg.PLACEMENT_ATTEMPTS):
                horizontal = rng.random() < 0.5
                row = rng.randrange(self.size)
                col = rng.randrange(self.size)
                if self.place_ship(row, col, ship_size, horizontal):
                    break
            else:
                return False
        return True

    def can_place_ship(self, row: int, col: int, ship_size: int, horizontal: bool) -> bool:
        """Return True if a ship fits at (*row*, *col*) without touching another ship."""
        cells = self._ship_cells(row, col, ship_size, horizontal)
        if not all(self.in_bounds(r, c) for r, c in cells):
            return False
        r_end, c_end = cells[-1]
        window = self.grid[max(row - 1, 0) : r_end + 2, max(col - 1, 0) : c_end + 2]
        return not np.any(window != CellState.EMPTY)

    def place_ship(self, row: int, col: int, ship_size: int, horizontal: bool) -> bool:
        """Place a ship if the no-touch rule allows it; return whether it was placed."""
        if not self.can_place_ship(row, col, ship_size, horizontal):
            return False
        ship = Ship(self._ship_cells(row, col, ship_size, horizontal))
        for r, c in ship.cells:
            self.grid[r, c] = CellState.SHIP
            self._ship_at[(r, c)] = ship
        self.ships.append(ship)
        return True

    @staticmethod
    def _ship_cells(row: int, col: int, ship_size: int, horizontal: bool) -> List[Coord]:
        if horizontal:
            return [(row, col + i) for i in range(ship_size)]
        return [(row + i, col) for i in range(ship_size)]

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, row: int, col: int) -> CellState:
        self._check_bounds(row, col)
        return CellState(int(self.grid[row, col]))

    def as_array(self) -> np.ndarray:
        """Return a copy of the grid (CellState values as int8)."""
        return self.grid.copy()

    def ship_at(self, row: int, col: int) -> Optional[Ship]:
        return self._ship_at.get((row, col))

    def is_loser(self) -> bool:
        """Return True once the whole fleet on this board has been sunk.

        A shadow board has no ship layout, so it counts destroyed cells
        against the size of the standard fleet instead.
        """
        if self.ships:
            return all(ship.is_sunk() for ship in self.ships)
        return int(np.count_nonzero(self.grid == CellState.KILLED)) == _cfg.FLEET_CELLS

    # ------------------------------------------------------------------ #
    # Shooting
    # ------------------------------------------------------------------ #
    def shoot(self, row: int, col: int) -> ShotResult:
        """Resolve a shot at (*row*, *col*) against the real fleet.

        Cells that were already shot report MISS and are left untouched, so a
        repeated shot never costs a ship health twice.
        """
        state = self.cell(row, col)
        if state == CellState.EMPTY:
            self.grid[row, col] = CellState.MISS
            return ShotResult.MISS
        if state != CellState.SHIP:
            return ShotResult.MISS

        ship = self._ship_at[(row, col)]
        ship.health -= 1
        self.grid[row, col] = CellState.HIT
        if not ship.is_sunk():
            return ShotResult.HIT
        for r, c in ship.cells:
            self.grid[r, c] = CellState.KILLED
        logger.debug("shoot() sank %d-cell ship at %s", ship.size, ship.cells)
        return ShotResult.KILL

    def mark_miss(self, row: int, col: int) -> None:
        self._advance(row, col, CellState.MISS)

    def mark_hit(self, row: int, col: int) -> None:
        self._advance(row, col, CellState.HIT)

    def mark_kill(self, row: int, col: int) -> None:
        """Record a sunk ship whose last segment was at (*row*, *col*).

        The kill spreads over the orthogonally connected HIT cells (the rest
        of that ship, as ships never touch) and every unknown cell around the
        wreck is marked as water.
        """
        self._advance(row, col, CellState.KILLED)
        wreck = list(self._connected_wreck(row, col))
        for r, c in wreck:
            self._advance(r, c, CellState.KILLED)
        for r, c in wreck:
            for dr, dc in _NEIGHBOURS:
                nr, nc = r + dr, c + dc
                if self.in_bounds(nr, nc) and self.grid[nr, nc] == CellState.EMPTY:
                    self.grid[nr, nc] = CellState.MISS

    def mark(self, row: int, col: int, result: ShotResult) -> None:
        """Dispatch to the mark_* method matching *result*."""
        if result is ShotResult.MISS:
            self.mark_miss(row, col)
        elif result is ShotResult.HIT:
            self.mark_hit(row, col)
        else:
            self.mark_kill(row, col)

    def _connected_wreck(self, row: int, col: int) -> Iterator[Coord]:
        seen = {(row, col)}
        stack = [(row, col)]
        while stack:
            r, c = stack.pop()
            yield r, c
            for dr, dc in _ORTHOGONAL:
                nxt = (r + dr, c + dc)
                if nxt in seen or not self.in_bounds(*nxt):
                    continue
                if self.grid[nxt] in (CellState.HIT, CellState.KILLED):
                    seen.add(nxt)
                    stack.append(nxt)

    def _advance(self, row: int, col: int, state: CellState) -> None:
        """Move a cell forward to *state*; never downgrade it."""
        self._check_bounds(row, col)
        current = self.cell(row, col)
        if current == CellState.MISS or state <= current:
            return
        if state == CellState.MISS and current != CellState.EMPTY:
            # a ship segment is never water, whatever the peer reports
            return
        self.grid[row, col] = state

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise ValueError(f"cell ({row}, {col}) is outside the {self.size}x{self.size} field")
