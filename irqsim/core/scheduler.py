"""Tick-driven interrupt dispatch engine.

Each call to tick() performs one scheduling step:

1. Stopped: nothing happens.
2. A handler is active: the step counts down its completion timer and
   completes it when the timer reaches zero.
3. Interrupts are pending: the most urgent one is dispatched. The context is
   saved, the program counter jumps to the handler address and the
   completion timer is armed.
4. Otherwise one main-program instruction is executed.

Dispatch is non-preemptive. Interrupts raised while a handler is active are
queued and wait for the next dispatch opportunity. The entry being serviced
stays in the queue until its handler completes.

The engine owns no timer. Hosts supply the cadence by calling tick(), either
directly or through a Clock the engine is subscribed to.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from irqsim.core.catalog import InterruptCatalog
from irqsim.core.cpu import CpuContext
from irqsim.core.event_log import EventCategory, EventLog, EventLogEntry
from irqsim.core.interrupt_queue import InterruptQueue
from irqsim.core.statistics import StatisticsTracker
from irqsim.interfaces.cpu import CpuSnapshot
from irqsim.interfaces.interrupt_queue import PendingInterrupt
from irqsim.utils.config_loader import CpuConfig, SimulatorConfig
from irqsim.utils.consts import ConstUtils

logger = logging.getLogger(__name__)


class HandlingState(Enum):
    IDLE = auto()
    NORMAL = auto()
    DISPATCHING = auto()
    IN_HANDLER = auto()


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the whole engine after a command or tick."""

    running: bool
    handling_state: HandlingState
    tick_count: int
    cpu: CpuSnapshot
    saved_context: Optional[CpuSnapshot]
    active_interrupt: Optional[PendingInterrupt]
    handler_ticks_remaining: int
    pending: tuple[PendingInterrupt, ...]
    event_log: tuple[EventLogEntry, ...]
    total_raised: int
    total_handled: int
    pending_count: int


class DispatchScheduler:
    """Single-core interrupt dispatch simulation.

    THREAD SAFETY: Not thread-safe and not reentrant. Multi-threaded hosts
    must serialize calls, e.g. through irqsim_host.backend.EngineBackend.
    """

    def __init__(
        self,
        catalog: Optional[InterruptCatalog] = None,
        cpu: Optional[CpuContext] = None,
        *,
        handler_ticks: int = ConstUtils.HANDLER_TICKS,
        sample_every: int = ConstUtils.SAMPLE_EVERY,
        seed: Optional[int] = None,
        cpu_config: Optional[CpuConfig] = None,
    ):
        """Create a stopped engine at its startup state.

        Args:
            catalog: Interrupt kinds that may be raised (default: bundled catalog)
            cpu: Context to drive; built from cpu_config and seed when omitted.
                Passing it together with seed or cpu_config is a ValueError.
            handler_ticks: Ticks a handler stays active after its dispatch tick
            sample_every: Log every Nth executed main-program instruction
            seed: Register jitter seed for the default context
            cpu_config: Startup values for the default context
        """
        if handler_ticks < 1:
            raise ValueError("handler_ticks must be >= 1")
        if sample_every < 1:
            raise ValueError("sample_every must be >= 1")
        if cpu is not None and (seed is not None or cpu_config is not None):
            raise ValueError("seed and cpu_config apply only to the default context")

        self._catalog = catalog if catalog is not None else InterruptCatalog.default()
        self._cpu = cpu if cpu is not None else CpuContext(cpu_config, seed=seed)
        self._handler_ticks = handler_ticks
        self._sample_every = sample_every

        self._queue = InterruptQueue()
        self._log = EventLog()
        self._stats = StatisticsTracker(self._queue)

        self._running = False
        self._state = HandlingState.IDLE
        self._tick_count = 0
        self._next_sequence = 0
        self._active: Optional[PendingInterrupt] = None
        self._handler_ticks_remaining = 0

    @classmethod
    def from_config(
        cls, config: SimulatorConfig, seed: Optional[int] = None
    ) -> "DispatchScheduler":
        """Build an engine from a loaded config; seed overrides the configured one."""
        sched = config.scheduler
        return cls(
            InterruptCatalog(config.interrupts),
            handler_ticks=sched.handler_ticks,
            sample_every=sched.sample_every,
            seed=seed if seed is not None else sched.seed,
            cpu_config=config.cpu,
        )

    # Read-only accessors --------------------------------------------------

    @property
    def catalog(self) -> InterruptCatalog:
        return self._catalog

    @property
    def cpu(self) -> CpuContext:
        return self._cpu

    @property
    def queue(self) -> InterruptQueue:
        return self._queue

    @property
    def event_log(self) -> EventLog:
        return self._log

    @property
    def statistics(self) -> StatisticsTracker:
        return self._stats

    @property
    def state(self) -> HandlingState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def handler_ticks(self) -> int:
        return self._handler_ticks

    @property
    def sample_every(self) -> int:
        return self._sample_every

    # Commands -------------------------------------------------------------

    def start(self) -> EngineSnapshot:
        """Let subsequent ticks take effect."""
        self._running = True
        if self._state is HandlingState.IDLE:
            self._state = HandlingState.NORMAL
        logger.debug("Engine started at tick %d", self._tick_count)
        return self.get_snapshot()

    def stop(self) -> EngineSnapshot:
        """Make subsequent ticks no-ops; an active handler stays active."""
        self._running = False
        if self._state is HandlingState.NORMAL:
            self._state = HandlingState.IDLE
        logger.debug("Engine stopped at tick %d", self._tick_count)
        return self.get_snapshot()

    def tick(self, cycles: int = 1) -> EngineSnapshot:
        """Advance the simulation by cycles logical steps and return the snapshot."""
        if cycles < 0:
            raise ValueError("cycles must be >= 0")
        for _ in range(cycles):
            self._step()
        return self.get_snapshot()

    def raise_interrupt(self, kind_id: str) -> PendingInterrupt:
        """Queue a new occurrence of the interrupt registered as kind_id.

        Allowed in any state; the request waits for the next dispatch
        opportunity.

        Raises:
            UnknownInterruptKind: if kind_id is not in the catalog. Nothing
                is mutated in that case.
        """
        kind = self._catalog.lookup(kind_id)
        pending = PendingInterrupt(
            sequence=self._next_sequence,
            kind=kind,
            raised_at=self._tick_count,
        )
        self._next_sequence += 1
        self._queue.enqueue(pending)
        self._stats.record_raised()
        self._record(EventCategory.INTERRUPT, f"{kind.display_name} generated")
        logger.debug(
            "Raised %s (seq=%d, priority=%d), %d pending",
            kind.id,
            pending.sequence,
            kind.priority,
            len(self._queue),
        )
        return pending

    def finish_handling(self) -> bool:
        """Complete the active dispatch.

        Normally invoked by the completion timer. Returns False and changes
        nothing when no dispatch is active, so a repeated completion is
        harmless.
        """
        pending = self._active
        if pending is None:
            return False

        self._cpu.restore()
        kind = pending.kind
        self._record(EventCategory.HANDLER, f"{kind.display_name} handled")
        self._stats.record_handled()
        self._record(EventCategory.CONTEXT, "Context restored from stack")
        self._queue.remove(pending.sequence)
        self._cpu.set_process_label(self._cpu.main_process_label)

        self._active = None
        self._handler_ticks_remaining = 0
        self._state = HandlingState.NORMAL if self._running else HandlingState.IDLE
        logger.debug(
            "Finished %s (seq=%d) at tick %d", kind.id, pending.sequence, self._tick_count
        )
        return True

    def reset(self) -> EngineSnapshot:
        """Discard all pending state and return to the startup snapshot."""
        self._running = False
        self._queue.clear()
        self._log.clear()
        self._stats.reset()
        self._cpu.reset()
        self._tick_count = 0
        self._next_sequence = 0
        self._active = None
        self._handler_ticks_remaining = 0
        self._state = HandlingState.IDLE
        logger.debug("Engine reset")
        return self.get_snapshot()

    def get_snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            running=self._running,
            handling_state=self._state,
            tick_count=self._tick_count,
            cpu=self._cpu.snapshot(),
            saved_context=self._cpu.saved_context,
            active_interrupt=self._active,
            handler_ticks_remaining=self._handler_ticks_remaining,
            pending=self._queue.snapshot(),
            event_log=self._log.snapshot(),
            total_raised=self._stats.total_raised,
            total_handled=self._stats.total_handled,
            pending_count=self._stats.pending_count,
        )

    # Private helpers -------------------------------------------------------

    def _record(self, category: EventCategory, message: str) -> None:
        self._log.record(self._tick_count, category, message)

    def _step(self) -> None:
        if not self._running:
            return

        self._tick_count += 1

        if self._state is HandlingState.IN_HANDLER:
            self._handler_ticks_remaining -= 1
            if self._handler_ticks_remaining <= 0:
                self.finish_handling()
            return

        head = self._queue.peek_highest_priority()
        if head is not None:
            self._begin_dispatch(head)
            return

        self._execute_instruction()

    def _begin_dispatch(self, pending: PendingInterrupt) -> None:
        kind = pending.kind
        self._cpu.save_current()
        self._state = HandlingState.DISPATCHING
        self._record(EventCategory.CONTEXT, "Context saved to stack")

        self._cpu.set_process_label(f"{kind.display_name} Handler")
        address = self._cpu.enter_handler_address(kind)
        self._active = pending
        self._handler_ticks_remaining = self._handler_ticks
        self._state = HandlingState.IN_HANDLER
        self._record(EventCategory.HANDLER, f"Handling {kind.display_name}")
        logger.debug(
            "Dispatching %s (seq=%d) to 0x%04X at tick %d",
            kind.id,
            pending.sequence,
            address,
            self._tick_count,
        )

    def _execute_instruction(self) -> None:
        executed = self._cpu.advance_instruction()
        if executed % self._sample_every == 0:
            self._record(EventCategory.EXECUTION, f"Executing instruction {executed}")
