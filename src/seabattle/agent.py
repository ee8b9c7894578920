"""Per-peer turn coordinator.

Each peer owns two boards: its own (real fleet, resolves incoming shots) and
a shadow of the opponent's, rebuilt only from the results of its own shots.
Turns alternate strictly and every half-turn is exactly one exchange on the
wire:

MY_TURN        send move (2 bytes)    -> receive result (1 byte) -> mark shadow
OPPONENT_TURN  receive move (2 bytes) -> shoot own board         -> send result

There is no game-over message. After every half-turn both peers check the
two boards; since each applies the same result to the matching board, both
reach GAME_OVER after the same exchange.
"""

from __future__ import annotations

import enum
import logging
from typing import Optional, TextIO

from .battleship import Board, ShotResult
from .coord_utils import Move, MoveParseError, format_move, parse_move
from .moves import MoveSource
from .protocol import Channel, recv_move, recv_result, send_move, send_result
from .render import render_pair

logger = logging.getLogger(__name__)


class TurnState(enum.Enum):
    MY_TURN = "my_turn"
    OPPONENT_TURN = "opponent_turn"
    GAME_OVER = "game_over"


class Outcome(enum.Enum):
    WIN = "win"
    LOSE = "lose"


def initial_state(my_initiative: bool) -> TurnState:
    return TurnState.MY_TURN if my_initiative else TurnState.OPPONENT_TURN


def next_state(state: TurnState, *, game_over: bool) -> TurnState:
    """State after a completed half-turn. GAME_OVER is absorbing."""
    if state is TurnState.GAME_OVER or game_over:
        return TurnState.GAME_OVER
    if state is TurnState.MY_TURN:
        return TurnState.OPPONENT_TURN
    return TurnState.MY_TURN


class SeabattleAgent:
    """Drive one peer's side of a game over a Channel."""

    def __init__(self, board: Board, move_source: MoveSource, *, out: Optional[TextIO] = None):
        self.my_board = board
        self.other_board = Board(size=board.size)
        self.move_source = move_source
        self.out = out
        self.state: Optional[TurnState] = None
        self.half_turns = 0

    # -------------------- game loop --------------------
    def start_game(self, ch: Channel, my_initiative: bool) -> Outcome:
        """Play until either fleet is destroyed and return the local outcome.

        Connection errors (OSError, FrameError) propagate to the caller.
        """
        self.state = initial_state(my_initiative)
        if self.is_game_ended():
            self.state = TurnState.GAME_OVER
        logger.info("Game started, %s", "you move first" if my_initiative else "opponent moves first")

        while self.state is not TurnState.GAME_OVER:
            self._render()
            if self.state is TurnState.MY_TURN:
                self.make_turn(ch)
            else:
                self.wait_for_turn(ch)
            self.half_turns += 1
            self.state = next_state(self.state, game_over=self.is_game_ended())

        self._render()
        outcome = self.outcome()
        assert outcome is not None  # for type-checkers
        logger.info("Game over after %d half-turns: you %s", self.half_turns, outcome.value)
        return outcome

    def make_turn(self, ch: Channel) -> ShotResult:
        move = self._read_move()
        send_move(ch, move)
        result = recv_result(ch)
        self.other_board.mark(move.row, move.col, result)
        self.move_source.register_result(move, result)
        logger.info("You fired at %s: %s", format_move(move), result.name)
        return result

    def wait_for_turn(self, ch: Channel) -> ShotResult:
        if self.out is not None:
            print("Waiting for turn...", file=self.out, flush=True)
        move = recv_move(ch)
        result = self.my_board.shoot(move.row, move.col)
        self.my_board.mark(move.row, move.col, result)
        send_result(ch, result)
        logger.info("Opponent fired at %s: %s", format_move(move), result.name)
        return result

    # -------------------- helpers --------------------
    def _read_move(self) -> Move:
        """Ask the move source until it produces a parsable move."""
        while True:
            raw = self.move_source.next_move()
            try:
                return parse_move(raw)
            except MoveParseError as exc:
                logger.debug("Rejected move input: %s", exc)

    def _render(self) -> None:
        if self.out is not None:
            render_pair(self.my_board, self.other_board, self.out)
            self.out.flush()

    def is_game_ended(self) -> bool:
        return self.my_board.is_loser() or self.other_board.is_loser()

    def outcome(self) -> Optional[Outcome]:
        """WIN if the opponent's fleet is sunk, LOSE if ours is, None while playing."""
        if self.other_board.is_loser():
            return Outcome.WIN
        if self.my_board.is_loser():
            return Outcome.LOSE
        return None
