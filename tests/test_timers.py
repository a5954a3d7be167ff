import pytest

from engine.timers import PHASE_EXERCISE, PHASE_REST, TimerOrchestrator, exercise_duration
from tests.utils import FakeClock


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def timer(fake_clock):
    return TimerOrchestrator(fake_clock, fake_clock.time)


def test_per_side_duration():
    assert exercise_duration(30) == 30
    assert exercise_duration(20, per_side=True) == 50


def test_exercise_timer_fires_once(timer, fake_clock):
    fired = []
    assert timer.start_exercise(20, lambda: fired.append("done"), per_side=True) == 50
    assert timer.phase == PHASE_EXERCISE
    fake_clock.advance(49)
    assert fired == []
    assert timer.remaining() == pytest.approx(1)
    fake_clock.advance(1)
    assert fired == ["done"]
    assert not timer.active
    fake_clock.advance(100)
    assert fired == ["done"]


def test_starting_rest_cancels_exercise(timer, fake_clock):
    fired = []
    timer.start_exercise(30, lambda: fired.append("exercise"))
    timer.start_rest(10, lambda: fired.append("rest"), upcoming_name="Dip")
    assert timer.phase == PHASE_REST
    assert timer.upcoming_name == "Dip"
    fake_clock.advance(60)
    assert fired == ["rest"]


def test_add_time_extends_countdown(timer, fake_clock):
    fired = []
    timer.start_rest(10, lambda: fired.append(True))
    fake_clock.advance(4)
    assert timer.add_time() == pytest.approx(11)
    fake_clock.advance(6)
    assert fired == []
    fake_clock.advance(5)
    assert fired == [True]


def test_add_negative_time_never_goes_past_now(timer, fake_clock):
    fired = []
    timer.start_rest(30, lambda: fired.append(True))
    assert timer.add_time(-100) == 0
    fake_clock.advance(0)
    assert fired == [True]


def test_pause_and_resume(timer, fake_clock):
    fired = []
    timer.start_rest(10, lambda: fired.append(True))
    fake_clock.advance(3)
    timer.pause()
    assert timer.paused
    fake_clock.advance(100)
    assert fired == []
    assert timer.remaining() == pytest.approx(7)
    timer.resume()
    fake_clock.advance(6)
    assert fired == []
    fake_clock.advance(1)
    assert fired == [True]


def test_skip_and_cancel(timer, fake_clock):
    fired = []
    timer.start_rest(10, lambda: fired.append("skip"))
    timer.skip()
    assert fired == ["skip"]
    timer.start_rest(10, lambda: fired.append("cancelled"))
    timer.cancel()
    fake_clock.advance(20)
    assert fired == ["skip"]
    assert timer.remaining() == 0
    timer.skip()
    assert fired == ["skip"]
