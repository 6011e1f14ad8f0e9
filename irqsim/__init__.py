"""Interrupt Dispatch Simulator.

This package models how a single-core CPU services asynchronous interrupt
requests: pending requests are queued by priority, the execution context is
saved before a handler runs and restored afterwards, and normal instruction
execution resumes.

Architecture:
- The engine advances in discrete logical ticks supplied by the host
- Dispatch is non-preemptive with a single saved-context slot
- Register jitter comes from a seedable generator, so runs are reproducible

Getting started:
    from irqsim import DispatchScheduler

    engine = DispatchScheduler(seed=42)
    engine.start()
    engine.raise_interrupt("timer")
    snapshot = engine.tick()
"""

from irqsim.core.catalog import InterruptCatalog
from irqsim.core.clock import Clock
from irqsim.core.cpu import CpuContext
from irqsim.core.event_log import EventCategory, EventLogEntry
from irqsim.core.exceptions import (
    ConfigurationError,
    DoubleSaveError,
    NoSavedContextError,
    SimulatorError,
    UnknownInterruptKind,
)
from irqsim.core.scheduler import DispatchScheduler, EngineSnapshot, HandlingState
from irqsim.interfaces.interrupt_queue import InterruptKind, PendingInterrupt
from irqsim.utils.config_loader import get_config, load_config

__all__ = [
    # Engine
    "DispatchScheduler",
    "EngineSnapshot",
    "HandlingState",
    "Clock",
    # Model
    "InterruptCatalog",
    "InterruptKind",
    "PendingInterrupt",
    "CpuContext",
    "EventCategory",
    "EventLogEntry",
    # Config
    "get_config",
    "load_config",
    # Errors
    "SimulatorError",
    "ConfigurationError",
    "UnknownInterruptKind",
    "DoubleSaveError",
    "NoSavedContextError",
]
