"""Simulated CPU execution context.

The context models only what the dispatch engine needs: a program counter,
a stack pointer, a small set of named general registers, the label of the
code currently running and a count of executed main-program instructions.

A single saved-context slot backs the save/restore protocol. There is no
context stack, so dispatch cannot nest.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Optional

from irqsim.core.exceptions import DoubleSaveError, NoSavedContextError
from irqsim.interfaces.cpu import CpuSnapshot, ICpuContext, RegisterValue
from irqsim.utils.config_loader import CpuConfig
from irqsim.utils.consts import handler_address

if TYPE_CHECKING:
    from irqsim.interfaces.interrupt_queue import InterruptKind

logger = logging.getLogger(__name__)


class CpuContext(ICpuContext):
    """Live CPU context plus a single-slot saved context store.

    Responsibilities:
    - Hold the foreground execution state (main program or active handler)
    - Save and restore that state through one slot
    - Execute main-program instructions with seeded register jitter
    - Jump to the simulated vector-table address of a handler
    """

    def __init__(
        self,
        config: Optional[CpuConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the context at its startup values.

        Args:
            config: Startup values, jitter bounds and handler addressing
            seed: Seed for the register jitter generator; reapplied on reset
            rng: Generator to use instead of a fresh random.Random(seed)
        """
        self.config = config or CpuConfig()
        self._seed = seed
        self._rng = rng if rng is not None else random.Random(seed)
        self._saved: Optional[CpuSnapshot] = None

        self.program_counter = 0
        self.stack_pointer = 0
        self.registers: dict[str, int] = {}
        self.process_label = ""
        self.instruction_counter = 0
        self._load_startup_values()

    def _load_startup_values(self) -> None:
        cfg = self.config
        self.program_counter = cfg.program_counter
        self.stack_pointer = cfg.stack_pointer
        self.registers = dict(cfg.registers)
        self.process_label = cfg.main_process_label
        self.instruction_counter = 0

    @property
    def main_process_label(self) -> str:
        return self.config.main_process_label

    @property
    def saved_context(self) -> Optional[CpuSnapshot]:
        return self._saved

    def snapshot(self) -> CpuSnapshot:
        return CpuSnapshot(
            program_counter=self.program_counter,
            stack_pointer=self.stack_pointer,
            registers=tuple(
                RegisterValue(name, value) for name, value in self.registers.items()
            ),
            process_label=self.process_label,
            instruction_counter=self.instruction_counter,
        )

    def save_current(self) -> CpuSnapshot:
        """Copy the live context into the saved-context slot.

        Raises:
            DoubleSaveError: if the slot is already occupied
        """
        if self._saved is not None:
            logger.error(
                "Context save with occupied slot (saved PC=%d, live PC=%d)",
                self._saved.program_counter,
                self.program_counter,
            )
            raise DoubleSaveError(
                details={"saved_label": self._saved.process_label}
            )
        self._saved = self.snapshot()
        return self._saved

    def restore(self) -> CpuSnapshot:
        """Copy the saved context back into the live context and empty the slot.

        Raises:
            NoSavedContextError: if the slot is empty
        """
        if self._saved is None:
            logger.error("Context restore with empty slot (live PC=%d)", self.program_counter)
            raise NoSavedContextError(details={"live_label": self.process_label})

        saved = self._saved
        self.program_counter = saved.program_counter
        self.stack_pointer = saved.stack_pointer
        self.registers = {reg.name: reg.value for reg in saved.registers}
        self.process_label = saved.process_label
        self.instruction_counter = saved.instruction_counter
        self._saved = None
        return saved

    def advance_instruction(self) -> int:
        cfg = self.config
        self.instruction_counter += 1
        self.program_counter += cfg.instruction_step
        for name, bound in cfg.register_jitter.items():
            self.registers[name] = self.registers.get(name, 0) + self._rng.randrange(bound)
        return self.instruction_counter

    def enter_handler_address(self, kind: "InterruptKind") -> int:
        self.program_counter = handler_address(
            kind.priority,
            offset=kind.handler_address_offset,
            base=self.config.handler_base,
            stride=self.config.handler_stride,
        )
        return self.program_counter

    def set_process_label(self, label: str) -> None:
        self.process_label = label

    def reset(self) -> None:
        """Reset to startup values, empty the slot and reseed the generator."""
        self._saved = None
        self._load_startup_values()
        if self._seed is not None:
            self._rng.seed(self._seed)
