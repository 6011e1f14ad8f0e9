"""Clock interface for logical tick propagation to the dispatch engine."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, Protocol


class ClockSubscriber(Protocol):
    """Anything that can advance on clock ticks."""

    def tick(self, cycles: int = 1) -> None:
        """Advance the subscriber by the given number of ticks."""
        ...


class IClock(ABC):
    """Clock interface used by hosts to supply the engine's cadence."""

    @property
    @abstractmethod
    def frequency(self) -> int:
        """Nominal ticks per second for hosts pacing against real time."""
        ...

    @property
    @abstractmethod
    def cycle_count(self) -> int:
        """Total number of ticks elapsed."""
        ...

    @abstractmethod
    def subscribe(self, subscriber: ClockSubscriber) -> None:
        """Subscribe a component to clock ticks."""
        ...

    @abstractmethod
    def unsubscribe(self, subscriber: ClockSubscriber) -> None:
        """Unsubscribe a component from clock ticks."""
        ...

    @abstractmethod
    def tick(self, cycles: int = 1) -> None:
        """Advance the clock and notify subscribers."""
        ...

    @abstractmethod
    def run(
        self,
        ticks: int,
        realtime: bool = False,
        before_tick: Optional[Callable[[int], None]] = None,
        after_tick: Optional[Callable[[int], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Tick once per iteration, optionally paced to the frequency."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset tick count to zero."""
        ...
