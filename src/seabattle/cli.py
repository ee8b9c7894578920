"""Command-line entry point: ``seabattle <seed> [<ip>] <port>``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import config as _cfg
from .battleship import Board
from .moves import BotMoveSource, ConsoleMoveSource
from .net import start_client, start_server
from .protocol import FrameError

logger = logging.getLogger(__name__)


def _port(text: str) -> int:
    try:
        port = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {text!r}") from None
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seabattle",
        description="Two-player sea battle over TCP. With <port> only, listen as server; "
        "with <ip> <port>, connect as client.",
    )
    parser.add_argument("seed", type=int, help="Seed for the random fleet layout.")
    parser.add_argument("endpoint", nargs="+", metavar="[ip] port", help="Listen port, or peer IP and port.")
    parser.add_argument("--bot", action="store_true", help="Let the built-in bot choose moves.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Do not print the boards.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if len(args.endpoint) > 2:
        parser.error("expected <port> or <ip> <port>")
    try:
        port = _port(args.endpoint[-1])
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    # Logging setup respects --debug and the global DEBUG flag
    logging.basicConfig(
        level=logging.DEBUG if args.debug or _cfg.DEBUG else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    board = Board.generate_random(args.seed)
    move_source = BotMoveSource(seed=args.seed) if args.bot else ConsoleMoveSource()
    out = None if args.quiet else sys.stdout

    try:
        if len(args.endpoint) == 1:
            return start_server(board, port, move_source=move_source, out=out)
        return start_client(board, args.endpoint[0], port, move_source=move_source, out=out)
    except (OSError, FrameError) as exc:
        logger.error("Connection lost: %s", exc)
        return 1
    except (EOFError, KeyboardInterrupt):
        logger.info("Input closed, leaving the game")
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
