"""Move sources: where the local player's next move comes from.

A move source hands out *candidate* move strings; the agent parses them and
asks again on malformed input, so sources never need to validate.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional, TextIO

from . import config as _cfg
from .battleship import ShotResult
from .bot_logic import BotLogic
from .coord_utils import Move, format_move

logger = logging.getLogger(__name__)


class MoveSource:
    """Base class; subclasses implement next_move()."""

    def next_move(self) -> str:
        raise NotImplementedError

    def register_result(self, move: Move, result: ShotResult) -> None:
        """Called after every move this source produced has been resolved."""


class ConsoleMoveSource(MoveSource):
    """Prompt on *stdout* and read one whitespace-delimited token from *stdin*."""

    def __init__(self, prompt: str = _cfg.PROMPT, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.prompt = prompt
        self.stdin = stdin
        self.stdout = stdout
        self._pending: list[str] = []

    def next_move(self) -> str:
        stdin = self.stdin or sys.stdin
        stdout = self.stdout or sys.stdout
        print(self.prompt, end="", flush=True, file=stdout)
        while not self._pending:
            line = stdin.readline()
            if not line:
                raise EOFError("console input closed")
            self._pending = line.split()
        return self._pending.pop(0)


class ScriptedMoveSource(MoveSource):
    """Replay a fixed list of move strings (tests, demos)."""

    def __init__(self, moves: Iterable[str]):
        self._moves = iter(moves)

    def next_move(self) -> str:
        try:
            return next(self._moves)
        except StopIteration:
            raise EOFError("scripted moves exhausted") from None


class BotMoveSource(MoveSource):
    """Let BotLogic pick every move."""

    def __init__(self, seed: Optional[int] = None):
        self.logic = BotLogic(seed=seed)

    def next_move(self) -> str:
        row, col = self.logic.choose_shot()
        move = format_move(Move(row=row, col=col))
        logger.debug("bot chose %s", move)
        return move

    def register_result(self, move: Move, result: ShotResult) -> None:
        self.logic.register_result(result, (move.row, move.col))
