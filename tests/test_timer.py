import pytest

from dungeonkit.timer import TimeManager


def _clock(values):
    iterator = iter(values)
    return lambda: next(iterator)


def test_delta_starts_at_zero():
    assert TimeManager().time_delta == 0.0


def test_update_measures_ticks_over_frequency():
    manager = TimeManager(clock=_clock([0, 0, 0, 250]), frequency=1000)
    manager.initialize()
    assert manager.update() == 0.25
    assert manager.time_delta == 0.25


def test_successive_deltas_sum_to_total_span():
    ticks = [100, 100, 100, 400, 1700, 2100]
    manager = TimeManager(clock=_clock(ticks), frequency=1000)
    manager.initialize()
    deltas = [manager.update() for _ in range(3)]
    assert sum(deltas) == pytest.approx(2.0)


def test_no_elapsed_ticks_gives_zero_delta():
    manager = TimeManager(clock=_clock([5, 5, 5, 5]), frequency=10)
    manager.initialize()
    assert manager.update() == 0.0


def test_real_clock_deltas_are_non_negative():
    manager = TimeManager()
    manager.initialize()
    assert manager.update() >= 0.0


def test_update_before_initialize_raises():
    with pytest.raises(RuntimeError):
        TimeManager(clock=_clock([1])).update()


def test_non_positive_frequency_raises():
    with pytest.raises(ValueError):
        TimeManager(frequency=0)