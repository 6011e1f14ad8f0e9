"""Host-side adapters for driving the interrupt simulator.

- backend: lock-guarded engine adapter
- controller: framework-agnostic presenter that owns the tick clock
- app: command-line scenario runner
"""

from irqsim_host.backend import EngineBackend, SimulatorBackend
from irqsim_host.controller import SimulationController, SimulationState, SnapshotListener

__all__ = [
    "EngineBackend",
    "SimulatorBackend",
    "SimulationController",
    "SimulationState",
    "SnapshotListener",
]
