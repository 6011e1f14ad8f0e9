"""Priority-ordered pending interrupt queue."""

from __future__ import annotations

import bisect
from typing import Iterator, Optional

from irqsim.interfaces.interrupt_queue import IInterruptQueue, PendingInterrupt


class InterruptQueue(IInterruptQueue):
    """Pending interrupts sorted by ascending priority, FIFO among equals.

    A parallel list of sort keys is kept so inserts are a binary search plus
    a list insert.
    """

    def __init__(self):
        self._entries: list[PendingInterrupt] = []
        self._keys: list[tuple[int, int]] = []

    def enqueue(self, pending: PendingInterrupt) -> None:
        key = pending.sort_key
        # Sequences grow monotonically, so bisect_right keeps arrival order
        idx = bisect.bisect_right(self._keys, key)
        self._keys.insert(idx, key)
        self._entries.insert(idx, pending)

    def peek_highest_priority(self) -> Optional[PendingInterrupt]:
        if not self._entries:
            return None
        return self._entries[0]

    def remove(self, sequence: int) -> bool:
        for idx, entry in enumerate(self._entries):
            if entry.sequence == sequence:
                del self._entries[idx]
                del self._keys[idx]
                return True
        return False

    def is_empty(self) -> bool:
        return not self._entries

    def snapshot(self) -> tuple[PendingInterrupt, ...]:
        """Return the queue contents in service order."""
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._keys.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PendingInterrupt]:
        return iter(list(self._entries))

    def __contains__(self, sequence: object) -> bool:
        return any(entry.sequence == sequence for entry in self._entries)
