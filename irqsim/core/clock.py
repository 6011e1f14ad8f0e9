"""Logical clock that supplies tick cadence to the dispatch engine."""

from __future__ import annotations

import inspect
import time
from typing import Callable, List, Optional

from irqsim.interfaces.clock import ClockSubscriber, IClock


def _accepts_cycles(fn: Callable[..., None]) -> bool:
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return False
    try:
        sig.bind(1)
    except TypeError:
        return False
    return True


class Clock(IClock):
    """Pub/sub clock that notifies subscribers on tick().

    The clock counts logical ticks. frequency is the nominal number of ticks
    per second; run() can pace ticks to it in real time, while tick() never
    sleeps.
    """

    def __init__(self, frequency: int = 1):
        if frequency <= 0:
            raise ValueError("Clock frequency must be positive")
        self._frequency = frequency
        self._cycle_count = 0
        self._subscribers: List[ClockSubscriber] = []

    @property
    def frequency(self) -> int:
        return self._frequency

    @property
    def period(self) -> float:
        """Seconds between ticks at the nominal frequency."""
        return 1.0 / self._frequency

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    def subscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber not in self._subscribers:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def _notify_subscriber(self, subscriber: object, cycles: int) -> None:
        tick_fn = getattr(subscriber, "tick", None)
        if callable(tick_fn):
            if _accepts_cycles(tick_fn):
                tick_fn(cycles)
            else:
                for _ in range(cycles):
                    tick_fn()
            return

        step_fn = getattr(subscriber, "step", None)
        if callable(step_fn):
            for _ in range(cycles):
                step_fn()

    def tick(self, cycles: int = 1) -> None:
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        if cycles == 0:
            return

        self._cycle_count += cycles

        # Notify subscribers once per tick batch
        for subscriber in list(self._subscribers):
            self._notify_subscriber(subscriber, cycles)

    def reset(self) -> None:
        self._cycle_count = 0

    def run(
        self,
        ticks: int,
        realtime: bool = False,
        before_tick: Optional[Callable[[int], None]] = None,
        after_tick: Optional[Callable[[int], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Tick one cycle at a time, ticks times.

        before_tick and after_tick receive the zero-based tick index. With
        realtime=True the clock sleeps one period after each tick.

        Returns:
            The cycle count after the last tick
        """
        if ticks < 0:
            raise ValueError("ticks must be >= 0")

        for index in range(ticks):
            if before_tick is not None:
                before_tick(index)
            self.tick(1)
            if after_tick is not None:
                after_tick(index)
            if realtime:
                sleep(self.period)
        return self._cycle_count
