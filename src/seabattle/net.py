"""Connection setup for both roles.

The server listens and accepts exactly one peer, the client connects to it.
Either way the resulting socket is wrapped in a Channel and handed to a
SeabattleAgent; by convention the client moves first.
"""

from __future__ import annotations

import contextlib
import ipaddress
import logging
import socket
import sys
from typing import Optional, TextIO

from . import config as _cfg
from .agent import SeabattleAgent
from .battleship import Board
from .moves import ConsoleMoveSource, MoveSource
from .protocol import Channel

logger = logging.getLogger(__name__)


def _play(sock: socket.socket, agent: SeabattleAgent, my_initiative: bool) -> int:
    ch = Channel.from_socket(sock)
    try:
        outcome = agent.start_game(ch, my_initiative)
    finally:
        with contextlib.suppress(OSError):
            ch.close()
    if agent.out is not None:
        print(f"You {outcome.value}!", file=agent.out, flush=True)
    return 0


def start_server(
    board: Board,
    port: int,
    *,
    host: str = _cfg.BIND_HOST,
    move_source: Optional[MoveSource] = None,
    out: Optional[TextIO] = sys.stdout,
) -> int:
    """Accept one peer on *host*:*port* and play with the opponent moving first."""
    agent = SeabattleAgent(board, move_source or ConsoleMoveSource(), out=out)

    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as srv:
        srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            srv.bind((host, port))
            srv.listen(1)
        except OSError as exc:
            logger.error("Can't listen on %s:%d: %s", host, port, exc)
            return 1
        logger.info("Waiting for connection on %s:%d...", host, port)
        try:
            conn, addr = srv.accept()
        except OSError as exc:
            logger.error("Can't accept connection: %s", exc)
            return 1

    with conn:
        logger.info("Peer connected from %s:%d", *addr[:2])
        return _play(conn, agent, my_initiative=False)


def start_client(
    board: Board,
    ip: str,
    port: int,
    *,
    move_source: Optional[MoveSource] = None,
    out: Optional[TextIO] = sys.stdout,
) -> int:
    """Connect to the server at *ip*:*port* and play, moving first."""
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        logger.error("Wrong IP format: %r", ip)
        return 1

    agent = SeabattleAgent(board, move_source or ConsoleMoveSource(), out=out)
    family = socket.AF_INET6 if address.version == 6 else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.connect((str(address), port))
    except OSError as exc:
        sock.close()
        logger.error("Can't connect to server at %s:%d: %s", ip, port, exc)
        return 1

    with sock:
        logger.info("Connected to server at %s:%d", ip, port)
        return _play(sock, agent, my_initiative=True)
