import pytest

from irqsim.core.clock import Clock


class SubscriberWithCycles:
    def __init__(self):
        self.calls = 0
        self.cycles = []

    def tick(self, cycles: int = 1) -> None:
        self.calls += 1
        self.cycles.append(cycles)


class SubscriberNoArgs:
    def __init__(self):
        self.calls = 0

    def tick(self) -> None:
        self.calls += 1


class SubscriberStepOnly:
    def __init__(self):
        self.steps = 0

    def step(self) -> None:
        self.steps += 1


class SubscriberRaisingTypeError:
    def tick(self, cycles: int = 1) -> None:
        raise TypeError("boom")


def test_clock_subscribe_unsubscribe_and_tick():
    clock = Clock(frequency=10)
    sub = SubscriberWithCycles()

    clock.subscribe(sub)
    clock.subscribe(sub)  # should not duplicate
    clock.tick(5)

    assert clock.cycle_count == 5
    assert sub.calls == 1
    assert sub.cycles == [5]

    clock.unsubscribe(sub)
    clock.tick(2)
    assert sub.calls == 1  # no new calls after unsubscribe


def test_clock_tick_fallback_for_no_args_subscriber():
    clock = Clock()
    sub = SubscriberNoArgs()
    clock.subscribe(sub)

    clock.tick(3)
    assert clock.cycle_count == 3
    assert sub.calls == 3


def test_clock_step_fallback():
    clock = Clock()
    sub = SubscriberStepOnly()
    clock.subscribe(sub)

    clock.tick(4)
    assert sub.steps == 4


def test_clock_does_not_mask_subscriber_type_errors():
    clock = Clock()
    clock.subscribe(SubscriberRaisingTypeError())

    with pytest.raises(TypeError, match="boom"):
        clock.tick()


def test_clock_zero_cycles_is_noop():
    clock = Clock()
    sub = SubscriberWithCycles()
    clock.subscribe(sub)

    clock.tick(0)
    assert clock.cycle_count == 0
    assert sub.calls == 0


def test_clock_reset():
    clock = Clock()
    clock.tick(4)
    clock.reset()
    assert clock.cycle_count == 0


def test_clock_period():
    assert Clock(frequency=4).period == 0.25
    assert Clock().frequency == 1


def test_clock_invalid_frequency():
    with pytest.raises(ValueError):
        Clock(frequency=0)


def test_clock_negative_cycles():
    clock = Clock()
    with pytest.raises(ValueError):
        clock.tick(-1)


def test_clock_run_ticks_one_cycle_at_a_time():
    clock = Clock()
    sub = SubscriberWithCycles()
    clock.subscribe(sub)
    order = []

    total = clock.run(
        3,
        before_tick=lambda i: order.append(("before", i)),
        after_tick=lambda i: order.append(("after", i, clock.cycle_count)),
    )

    assert total == 3
    assert sub.cycles == [1, 1, 1]
    assert order == [
        ("before", 0),
        ("after", 0, 1),
        ("before", 1),
        ("after", 1, 2),
        ("before", 2),
        ("after", 2, 3),
    ]


def test_clock_run_realtime_sleeps_one_period_per_tick():
    clock = Clock(frequency=2)
    sleeps = []

    clock.run(4, realtime=True, sleep=sleeps.append)

    assert sleeps == [0.5, 0.5, 0.5, 0.5]


def test_clock_run_without_realtime_never_sleeps():
    sleeps = []

    assert Clock().run(5, sleep=sleeps.append) == 5
    assert sleeps == []


def test_clock_run_negative_ticks():
    with pytest.raises(ValueError):
        Clock().run(-1)
