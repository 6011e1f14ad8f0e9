"""Interface abstractions for the interrupt simulator.

Defines behavioral contracts that implementations must satisfy:
- IClock: logical tick source supplied by the host
- ICpuContext: live execution context plus single saved-context slot
- IInterruptQueue: priority-ordered pending interrupt container
"""

from irqsim.interfaces.clock import ClockSubscriber, IClock
from irqsim.interfaces.cpu import CpuSnapshot, ICpuContext, RegisterValue
from irqsim.interfaces.interrupt_queue import (
    IInterruptQueue,
    InterruptKind,
    PendingInterrupt,
)

__all__ = [
    "IClock",
    "ClockSubscriber",
    "ICpuContext",
    "CpuSnapshot",
    "RegisterValue",
    "IInterruptQueue",
    "InterruptKind",
    "PendingInterrupt",
]
