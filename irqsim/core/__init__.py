"""Core modules for the interrupt simulator.

Core infrastructure for the dispatch engine:
- catalog: static registry of interrupt kinds
- interrupt_queue: priority-ordered pending interrupts
- cpu: execution context and single saved-context slot
- event_log / statistics: append-only event record and counters
- scheduler: tick-driven dispatch state machine
- clock: logical tick source for hosts
"""

from irqsim.core.catalog import InterruptCatalog
from irqsim.core.clock import Clock
from irqsim.core.cpu import CpuContext
from irqsim.core.event_log import EventCategory, EventLog, EventLogEntry
from irqsim.core.exceptions import (
    ConfigurationError,
    ContextStateError,
    DoubleSaveError,
    NoSavedContextError,
    SimulatorError,
    UnknownInterruptKind,
)
from irqsim.core.interrupt_queue import InterruptQueue
from irqsim.core.scheduler import DispatchScheduler, EngineSnapshot, HandlingState
from irqsim.core.statistics import StatisticsTracker

__all__ = [
    # Catalog / queue
    "InterruptCatalog",
    "InterruptQueue",
    # Context
    "CpuContext",
    # Records
    "EventCategory",
    "EventLog",
    "EventLogEntry",
    "StatisticsTracker",
    # Engine
    "DispatchScheduler",
    "EngineSnapshot",
    "HandlingState",
    "Clock",
    # Errors
    "SimulatorError",
    "ConfigurationError",
    "UnknownInterruptKind",
    "ContextStateError",
    "DoubleSaveError",
    "NoSavedContextError",
]
