from __future__ import annotations

import random
from collections import deque
from typing import Deque, List, Optional, Set, Tuple

from .battleship import ShotResult
from .config import FIELD_SIZE

Coord = Tuple[int, int]


class BotLogic:
    """
    Automatic targeting
    -------------------
    1. Parity hunt: fire the even checkerboard squares first (every ship of
       two or more cells covers one), then the odd squares.
    2. Probe: after a HIT, fire the orthogonal neighbours of the wounded
       ship; once two hits are aligned only the two ends of the line are
       probed.
    3. On KILL the wreck and the ring of water around it are written off,
       since ships never touch.
    """

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    def __init__(self, size: int = FIELD_SIZE, *, seed: Optional[int] = None) -> None:
        self.size = size
        rnd = random.Random(seed)

        all_sq = [(r, c) for r in range(size) for c in range(size)]
        evens = [(r, c) for r, c in all_sq if (r + c) % 2 == 0]
        odds = [(r, c) for r, c in all_sq if (r + c) % 2 == 1]
        rnd.shuffle(evens)
        rnd.shuffle(odds)
        self.hunt_pool: Deque[Coord] = deque(evens + odds)

        self.shots_taken: Set[Coord] = set()
        # Squares never fired at but known to be water (around sunk ships)
        self.known_water: Set[Coord] = set()
        # Hits on the ship currently being finished off
        self.cluster: List[Coord] = []

    # ------------------------------------------------------------------ #
    # Helper utilities
    # ------------------------------------------------------------------ #
    def _legal(self, rc: Coord) -> bool:
        """Inside board, never fired at and not known water."""
        r, c = rc
        return (
            0 <= r < self.size
            and 0 <= c < self.size
            and rc not in self.shots_taken
            and rc not in self.known_water
        )

    def _probe_candidates(self) -> List[Coord]:
        if len(self.cluster) == 1:
            r, c = self.cluster[0]
            options = [(r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)]
        else:
            rows = sorted({r for r, _ in self.cluster})
            cols = sorted({c for _, c in self.cluster})
            if len(rows) == 1:
                options = [(rows[0], cols[0] - 1), (rows[0], cols[-1] + 1)]
            else:
                options = [(rows[0] - 1, cols[0]), (rows[-1] + 1, cols[0])]
        return [rc for rc in options if self._legal(rc)]

    # ------------------------------------------------------------------ #
    # Shot selection
    # ------------------------------------------------------------------ #
    def choose_shot(self) -> Coord:
        """Next square to fire at; never repeats a square."""
        if self.cluster:
            candidates = self._probe_candidates()
            if candidates:
                return candidates[0]

        while self.hunt_pool:
            rc = self.hunt_pool[0]
            if self._legal(rc):
                return rc
            self.hunt_pool.popleft()

        raise RuntimeError("no squares left to fire at")

    # ------------------------------------------------------------------ #
    # Result handling
    # ------------------------------------------------------------------ #
    def register_result(self, result: ShotResult, rc: Coord) -> None:
        """Record the outcome of firing at *rc*."""
        self.shots_taken.add(rc)

        if result is ShotResult.HIT:
            self.cluster.append(rc)
        elif result is ShotResult.KILL:
            wreck = self.cluster + [rc]
            for r, c in wreck:
                for dr in (-1, 0, 1):
                    for dc in (-1, 0, 1):
                        nbr = (r + dr, c + dc)
                        if nbr not in self.shots_taken:
                            self.known_water.add(nbr)
            self.cluster = []
