"""Interrupt queue interface and interrupt value types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class InterruptKind:
    """Catalog entry describing one kind of interrupt.

    Lower priority values are serviced first; 0 is the most urgent.
    """

    id: str
    display_name: str
    priority: int
    handler_address_offset: int = 0
    handler_name: str = ""


@dataclass(frozen=True)
class PendingInterrupt:
    """A queued occurrence of an InterruptKind."""

    sequence: int
    kind: InterruptKind
    raised_at: int = 0

    @property
    def priority(self) -> int:
        return self.kind.priority

    @property
    def sort_key(self) -> tuple[int, int]:
        """Ascending priority, arrival order among equal priorities."""
        return (self.kind.priority, self.sequence)


class IInterruptQueue(ABC):
    """Priority-ordered container of pending interrupts."""

    @abstractmethod
    def enqueue(self, pending: PendingInterrupt) -> None:
        """Insert a pending interrupt, keeping priority order."""
        ...

    @abstractmethod
    def peek_highest_priority(self) -> Optional[PendingInterrupt]:
        """Return the queue head without removing it, or None if empty."""
        ...

    @abstractmethod
    def remove(self, sequence: int) -> bool:
        """Remove the entry with the given sequence; no-op if absent."""
        ...

    @abstractmethod
    def is_empty(self) -> bool:
        """Return True if no interrupts are pending."""
        ...

    @abstractmethod
    def __len__(self) -> int:
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[PendingInterrupt]:
        ...

    @abstractmethod
    def clear(self) -> None:
        """Drop all pending interrupts."""
        ...
