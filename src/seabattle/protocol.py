"""Wire protocol between the two peers.

There is no framing, handshake or version field; every message has a fixed
size and the strict turn alternation tells each side what to expect next.

Move   : 2 bytes  ASCII letter 'A'-'I' (column) + digit '1'-'9' (row)
Result : 1 byte   shot outcome code (see RESULT_CODES)
"""

from __future__ import annotations

import logging
import socket
from typing import BinaryIO, Final

from .battleship import ShotResult
from .coord_utils import Move, MoveParseError, format_move, parse_move

logger = logging.getLogger(__name__)

MOVE_SIZE: Final[int] = 2
RESULT_SIZE: Final[int] = 1

# Result byte values; both peers of a game must agree on this table.
RESULT_CODES: Final[dict[ShotResult, int]] = {
    ShotResult.MISS: 0,
    ShotResult.HIT: 1,
    ShotResult.KILL: 2,
}
_RESULTS_BY_CODE: Final[dict[int, ShotResult]] = {code: result for result, code in RESULT_CODES.items()}


class FrameError(Exception):
    """Base for malformed or truncated protocol messages."""


class IncompleteError(FrameError):
    """Raised when the stream closes before a full message could be read."""


# ---------------------------------------------------------------------------
# Codec
# ---------------------------------------------------------------------------


def encode_move(move: Move) -> bytes:
    return format_move(move).encode("ascii")


def decode_move(data: bytes) -> Move:
    """Decode exactly MOVE_SIZE bytes into a Move; anything else is a FrameError."""
    if len(data) != MOVE_SIZE:
        raise FrameError(f"move must be {MOVE_SIZE} bytes, got {len(data)}")
    try:
        text = data.decode("ascii")
    except UnicodeDecodeError as exc:
        raise FrameError(f"non-ASCII move bytes {data!r}") from exc
    if text != text.upper():
        raise FrameError(f"move {text!r} is not in wire form")
    try:
        return parse_move(text)
    except MoveParseError as exc:
        raise FrameError(f"move {data!r} out of range") from exc


def encode_result(result: ShotResult) -> bytes:
    return bytes([RESULT_CODES[result]])


def decode_result(data: bytes) -> ShotResult:
    if len(data) != RESULT_SIZE:
        raise FrameError(f"result must be {RESULT_SIZE} byte, got {len(data)}")
    try:
        return _RESULTS_BY_CODE[data[0]]
    except KeyError:
        raise FrameError(f"unknown result code {data[0]}") from None


# ---------------------------------------------------------------------------
# Exact-size blocking I/O
# ---------------------------------------------------------------------------


def read_exact(r: BinaryIO, size: int) -> bytes:
    """Block until exactly *size* bytes were read from *r*.

    Short reads are retried; EOF before *size* bytes raises IncompleteError.
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = r.read(size - len(buf))
        if not chunk:
            raise IncompleteError(f"stream closed after {len(buf)} of {size} bytes")
        buf += chunk
    return bytes(buf)


def write_exact(w: BinaryIO, data: bytes) -> None:
    """Write all of *data* to *w* and flush.

    Short writes are retried, as are writes that report None (nothing
    accepted yet); errors from *w* propagate.
    """
    view = memoryview(data)
    while view:
        written = w.write(view)
        if written is None:
            continue
        view = view[written:]
    w.flush()


class Channel:
    """Duplex byte stream to the peer: a binary reader plus a binary writer.

    The channel never opens the underlying connection; close() is there for
    whoever created it.
    """

    def __init__(self, reader: BinaryIO, writer: BinaryIO) -> None:
        self.reader = reader
        self.writer = writer

    @classmethod
    def from_socket(cls, sock: socket.socket) -> "Channel":
        return cls(sock.makefile("rb"), sock.makefile("wb"))

    def close(self) -> None:
        for f in (self.writer, self.reader):
            f.close()


# ---------------------------------------------------------------------------
# Message helpers
# ---------------------------------------------------------------------------


def send_move(ch: Channel, move: Move) -> None:
    data = encode_move(move)
    logger.debug("send_move() – %r", data)
    write_exact(ch.writer, data)


def recv_move(ch: Channel) -> Move:
    data = read_exact(ch.reader, MOVE_SIZE)
    logger.debug("recv_move() – %r", data)
    return decode_move(data)


def send_result(ch: Channel, result: ShotResult) -> None:
    logger.debug("send_result() – %s", result.name)
    write_exact(ch.writer, encode_result(result))


def recv_result(ch: Channel) -> ShotResult:
    result = decode_result(read_exact(ch.reader, RESULT_SIZE))
    logger.debug("recv_result() – %s", result.name)
    return result


__all__ = [
    "MOVE_SIZE",
    "RESULT_SIZE",
    "RESULT_CODES",
    "FrameError",
    "IncompleteError",
    "Channel",
    "encode_move",
    "decode_move",
    "encode_result",
    "decode_result",
    "read_exact",
    "write_exact",
    "send_move",
    "recv_move",
    "send_result",
    "recv_result",
]
