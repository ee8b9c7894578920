import socket
import threading
from types import TracebackType
from typing import Optional, Type

import pytest
from typing_extensions import Literal

from seabattle.agent import Outcome, SeabattleAgent
from seabattle.battleship import Board
from seabattle.moves import MoveSource
from seabattle.protocol import Channel

import logging

# Keep per-shot INFO logs from the agents out of test output
logging.basicConfig(level=logging.WARNING)


@pytest.fixture
def sweep_moves() -> list[str]:
    """Every cell once, row by row: "A1", "B1", ... "I9"."""
    return [f"{chr(ord('A') + col)}{row + 1}" for row in range(9) for col in range(9)]


class PeerThread:
    """Run one agent's start_game() in a background thread."""

    def __init__(self, agent: SeabattleAgent, ch: Channel, my_initiative: bool) -> None:
        self.agent = agent
        self.ch = ch
        self.my_initiative = my_initiative
        self.outcome: Optional[Outcome] = None
        self.error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, daemon=True)

    def _run(self) -> None:
        try:
            self.outcome = self.agent.start_game(self.ch, self.my_initiative)
        except BaseException as exc:  # surfaced to the test through .error
            self.error = exc

    def __enter__(self) -> "PeerThread":
        self._thread.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> Literal[False]:
        self._thread.join(timeout=5)
        return False


@pytest.fixture
def channel_pair():
    """Two Channels joined by a local socketpair (server end, client end)."""
    s_srv, s_cli = socket.socketpair()
    srv, cli = Channel.from_socket(s_srv), Channel.from_socket(s_cli)
    yield srv, cli
    for ch in (srv, cli):
        ch.close()
    s_srv.close()
    s_cli.close()


@pytest.fixture
def play_match(channel_pair):
    """Play a full game between two agents; return (server_peer, client_peer)."""

    def _play(
        server_board: Board,
        server_moves: MoveSource,
        client_board: Board,
        client_moves: MoveSource,
    ) -> tuple[PeerThread, PeerThread]:
        ch_srv, ch_cli = channel_pair
        server = PeerThread(SeabattleAgent(server_board, server_moves), ch_srv, my_initiative=False)
        client = PeerThread(SeabattleAgent(client_board, client_moves), ch_cli, my_initiative=True)
        with server, client:
            pass
        assert server.error is None, server.error
        assert client.error is None, client.error
        return server, client

    return _play
