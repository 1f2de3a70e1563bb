from quikbar.clock import ClockSource


def test_clock_counts_from_calibration():
    ticks = iter([100.0, 100.5, 102.0])
    clock = ClockSource(timer=lambda: next(ticks))
    clock.calibrate()
    assert clock.now() == 0.5
    assert clock.now() == 2.0


def test_clock_calibrates_lazily_and_once():
    ticks = iter([5.0, 6.0, 7.0])
    clock = ClockSource(timer=lambda: next(ticks))
    assert clock.now() == 1.0
    clock.calibrate()
    assert clock.origin == 5.0


def test_default_clock_is_monotonic():
    clock = ClockSource()
    clock.calibrate()
    assert clock.resolution > 0
    a = clock.now()
    b = clock.now()
    assert 0.0 <= a <= b
