import socket
import threading
import time

import pytest

from seabattle.battleship import Board
from seabattle.cli import main
from seabattle.moves import BotMoveSource
from seabattle.net import start_client, start_server


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.mark.parametrize(
    "argv",
    [
        [],
        ["1"],
        ["1", "127.0.0.1", "5000", "extra"],
        ["seed", "5000"],
        ["1", "port"],
        ["1", "70000"],
    ],
)
def test_invalid_invocation_exits_with_usage_error(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    assert exc.value.code == 2


def test_wrong_ip_format_fails_before_connecting():
    assert main(["1", "not.an.ip", "5000", "--quiet"]) == 1


@pytest.mark.timeout(10)
def test_connection_refused_returns_1():
    assert main(["1", "127.0.0.1", str(_free_port()), "--quiet", "--bot"]) == 1


@pytest.mark.timeout(20)
def test_server_and_client_play_a_full_game():
    port = _free_port()
    results: dict[str, int] = {}

    def _serve() -> None:
        results["server"] = start_server(
            Board.generate_random(11),
            port,
            host="127.0.0.1",
            move_source=BotMoveSource(seed=11),
            out=None,
        )

    srv = threading.Thread(target=_serve, daemon=True)
    srv.start()

    # the server may need a moment before it listens
    for _ in range(50):
        rc = start_client(Board.generate_random(12), "127.0.0.1", port, move_source=BotMoveSource(seed=12), out=None)
        if rc == 0:
            break
        time.sleep(0.1)
    srv.join(timeout=10)

    assert rc == 0
    assert results["server"] == 0
