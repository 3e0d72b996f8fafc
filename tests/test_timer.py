import pytest

from sudoku_game.timer import GameTimer, format_time


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "00:00"), (9, "00:09"), (61, "01:01"), (599, "09:59"), (3600, "60:00"), (6005, "100:05")],
)
def test_format_time(seconds, expected):
    assert format_time(seconds) == expected


def test_timer_counts_whole_seconds(clock):
    timer = GameTimer(clock)
    assert timer.elapsed == 0
    assert not timer.running

    timer.start()
    clock.advance(12.7)
    assert timer.running
    assert timer.elapsed == 12


def test_pause_and_resume(clock):
    timer = GameTimer(clock)
    timer.start()
    clock.advance(10)
    timer.pause()
    clock.advance(50)
    assert timer.elapsed == 10

    timer.resume()
    clock.advance(5)
    assert timer.elapsed == 15


def test_toggle(clock):
    timer = GameTimer(clock)
    timer.start()
    timer.toggle()
    assert not timer.running
    timer.toggle()
    assert timer.running


def test_start_twice_does_not_restart(clock):
    timer = GameTimer(clock)
    timer.start()
    clock.advance(4)
    timer.start()
    clock.advance(4)
    assert timer.elapsed == 8


def test_stop_freezes_time(clock):
    timer = GameTimer(clock)
    timer.start()
    clock.advance(30)
    timer.stop()
    clock.advance(30)
    assert timer.elapsed == 30
    assert not timer.running


def test_reset_zeroes_and_runs(clock):
    timer = GameTimer(clock)
    timer.start()
    clock.advance(30)
    timer.pause()

    timer.reset()
    assert timer.running
    assert timer.elapsed == 0
    clock.advance(3)
    assert timer.elapsed == 3
