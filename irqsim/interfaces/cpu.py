"""CPU context interface and snapshot types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from irqsim.interfaces.interrupt_queue import InterruptKind


@dataclass(frozen=True)
class RegisterValue:
    """Single general register value for UI/debug panels."""

    name: str
    value: int
    group: str = "general"


@dataclass(frozen=True)
class CpuSnapshot:
    """Immutable copy of the CPU execution context.

    Registers are kept as an ordered tuple so snapshots compare by value.
    """

    program_counter: int
    stack_pointer: int
    registers: tuple[RegisterValue, ...]
    process_label: str
    instruction_counter: int

    def register(self, name: str) -> int:
        """Return the value of a general register by name."""
        for reg in self.registers:
            if reg.name == name:
                return reg.value
        raise KeyError(name)

    def as_dict(self) -> dict[str, int]:
        """Return PC, SP and general registers as a flat name -> value dict."""
        values = {"PC": self.program_counter, "SP": self.stack_pointer}
        values.update({reg.name: reg.value for reg in self.registers})
        return values


class ICpuContext(ABC):
    """Live CPU execution context with a single saved-context slot."""

    @abstractmethod
    def snapshot(self) -> CpuSnapshot:
        """Return a copy of the live context without mutating it."""
        ...

    @abstractmethod
    def save_current(self) -> CpuSnapshot:
        """Copy the live context into the saved-context slot."""
        ...

    @abstractmethod
    def restore(self) -> CpuSnapshot:
        """Copy the saved context back into the live context and empty the slot."""
        ...

    @abstractmethod
    def advance_instruction(self) -> int:
        """Execute one main-program instruction; return the new instruction count."""
        ...

    @abstractmethod
    def enter_handler_address(self, kind: "InterruptKind") -> int:
        """Jump to the handler address for kind; return the new program counter."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset the context to its startup values."""
        ...

    @property
    @abstractmethod
    def saved_context(self) -> Optional[CpuSnapshot]:
        """The occupied saved-context slot, or None."""
        ...

    @property
    def has_saved_context(self) -> bool:
        return self.saved_context is not None
