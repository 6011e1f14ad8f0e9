"""Simulation controller (Presenter-ish, framework-agnostic)."""

from __future__ import annotations

import time
from enum import Enum, auto
from typing import Callable, Iterable, Optional, Protocol

from irqsim.core.clock import Clock
from irqsim.core.scheduler import EngineSnapshot
from irqsim.interfaces.clock import IClock
from irqsim.interfaces.interrupt_queue import PendingInterrupt
from irqsim_host.backend import SimulatorBackend


class SimulationState(Enum):
    RUNNING = auto()
    PAUSED = auto()


class SnapshotListener(Protocol):
    """Anything that renders engine snapshots."""

    def update(self, snapshot: EngineSnapshot) -> None:
        ...


class SimulationController:
    """Coordinator for ticking the engine and updating listeners.

    The controller owns the clock; the backend is subscribed to it, so every
    clock tick becomes one engine step.
    """

    def __init__(
        self,
        backend: SimulatorBackend,
        listeners: Iterable[SnapshotListener] = (),
        clock: Optional[IClock] = None,
    ):
        self._backend = backend
        self._listeners = list(listeners)
        self._clock = clock if clock is not None else Clock()
        self._clock.subscribe(backend)
        self._state = SimulationState.PAUSED

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def clock(self) -> IClock:
        return self._clock

    def add_listener(self, listener: SnapshotListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def set_running(self, running: bool) -> None:
        if running:
            self._backend.start()
            self._state = SimulationState.RUNNING
        else:
            self._backend.stop()
            self._state = SimulationState.PAUSED

    def toggle(self) -> SimulationState:
        self.set_running(self._state is not SimulationState.RUNNING)
        return self._state

    def raise_interrupt(self, kind_id: str) -> PendingInterrupt:
        pending = self._backend.raise_interrupt(kind_id)
        self.update_listeners()
        return pending

    def reset(self) -> None:
        self._backend.reset()
        self._clock.reset()
        self._state = SimulationState.PAUSED
        self.update_listeners()

    def step(self, ticks: int = 1) -> EngineSnapshot:
        self._clock.tick(ticks)
        snapshot = self._backend.snapshot()
        self._notify(snapshot)
        return snapshot

    def run(
        self,
        ticks: int,
        realtime: bool = False,
        on_tick: Optional[Callable[[int], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> EngineSnapshot:
        """Step the engine ticks times, one tick at a time.

        on_tick is called with the zero-based tick index before each step,
        which lets scripted hosts raise interrupts at fixed points. Listeners
        are notified after every tick. Pacing is left to the clock.
        """
        self._clock.run(
            ticks,
            realtime=realtime,
            before_tick=on_tick,
            after_tick=lambda _index: self.update_listeners(),
            sleep=sleep,
        )
        return self._backend.snapshot()

    def update_listeners(self) -> None:
        self._notify(self._backend.snapshot())

    def snapshot(self) -> EngineSnapshot:
        return self._backend.snapshot()

    def _notify(self, snapshot: EngineSnapshot) -> None:
        for listener in self._listeners:
            listener.update(snapshot)
