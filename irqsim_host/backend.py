"""Host backend interfaces and adapters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ContextManager
from contextlib import nullcontext
from typing import Protocol

from irqsim.core.scheduler import DispatchScheduler, EngineSnapshot
from irqsim.interfaces.interrupt_queue import PendingInterrupt


class SimulatorBackend(Protocol):
    """Minimal engine surface required by hosts."""

    @property
    def is_running(self) -> bool:
        ...

    def start(self) -> EngineSnapshot:
        ...

    def stop(self) -> EngineSnapshot:
        ...

    def tick(self, cycles: int = 1) -> EngineSnapshot:
        ...

    def raise_interrupt(self, kind_id: str) -> PendingInterrupt:
        ...

    def reset(self) -> EngineSnapshot:
        ...

    def snapshot(self) -> EngineSnapshot:
        ...


@dataclass
class EngineBackend(SimulatorBackend):
    """Adapter that serializes access to a DispatchScheduler.

    Pass a threading.Lock or RLock when commands and ticks arrive from
    different threads; the default nullcontext adds no locking.
    """

    engine: DispatchScheduler
    lock: ContextManager | None = None

    def __post_init__(self) -> None:
        if self.lock is None:
            self.lock = nullcontext()

    @property
    def is_running(self) -> bool:
        assert self.lock is not None
        with self.lock:
            return self.engine.is_running

    def start(self) -> EngineSnapshot:
        assert self.lock is not None
        with self.lock:
            return self.engine.start()

    def stop(self) -> EngineSnapshot:
        assert self.lock is not None
        with self.lock:
            return self.engine.stop()

    def tick(self, cycles: int = 1) -> EngineSnapshot:
        assert self.lock is not None
        with self.lock:
            return self.engine.tick(cycles)

    def raise_interrupt(self, kind_id: str) -> PendingInterrupt:
        assert self.lock is not None
        with self.lock:
            return self.engine.raise_interrupt(kind_id)

    def reset(self) -> EngineSnapshot:
        assert self.lock is not None
        with self.lock:
            return self.engine.reset()

    def snapshot(self) -> EngineSnapshot:
        assert self.lock is not None
        with self.lock:
            return self.engine.get_snapshot()
