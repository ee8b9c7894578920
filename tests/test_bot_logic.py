import pytest

from seabattle.battleship import Board, ShotResult
from seabattle.bot_logic import BotLogic


def _play_out(board: Board, bot: BotLogic) -> list[tuple[int, int]]:
    shots = []
    while not board.is_loser():
        rc = bot.choose_shot()
        shots.append(rc)
        bot.register_result(board.shoot(*rc), rc)
        assert len(shots) <= 81
    return shots


@pytest.mark.parametrize("seed", range(10))
def test_bot_sinks_fleet_without_repeating(seed):
    board = Board.generate_random(seed)
    shots = _play_out(board, BotLogic(seed=seed))
    assert len(shots) == len(set(shots))


def test_hunt_starts_on_even_parity():
    bot = BotLogic(seed=3)
    first = bot.choose_shot()
    assert sum(first) % 2 == 0


def test_probe_neighbours_after_hit():
    bot = BotLogic(seed=1)
    bot.register_result(ShotResult.HIT, (4, 4))
    nxt = bot.choose_shot()
    assert nxt in {(3, 4), (5, 4), (4, 3), (4, 5)}


def test_aligned_hits_probe_line_ends_only():
    bot = BotLogic(seed=1)
    bot.register_result(ShotResult.HIT, (4, 4))
    bot.register_result(ShotResult.HIT, (4, 5))
    assert bot.choose_shot() in {(4, 3), (4, 6)}
    bot.register_result(ShotResult.MISS, (4, 3))
    assert bot.choose_shot() == (4, 6)


def test_kill_writes_off_surrounding_water():
    bot = BotLogic(seed=1)
    bot.register_result(ShotResult.HIT, (0, 0))
    bot.register_result(ShotResult.KILL, (0, 1))
    assert bot.cluster == []
    assert {(1, 0), (1, 1), (1, 2), (0, 2)} <= bot.known_water
    for _ in range(20):
        rc = bot.choose_shot()
        assert rc not in bot.known_water
        bot.register_result(ShotResult.MISS, rc)

