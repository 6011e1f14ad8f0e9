"""Interrupt counters derived from engine events."""

from __future__ import annotations

from typing import Sized


class StatisticsTracker:
    """Monotonic raised/handled counters.

    pending_count is read from the queue on every access rather than stored,
    so it cannot drift from the queue contents.
    """

    def __init__(self, queue: Sized):
        self._queue = queue
        self._total_raised = 0
        self._total_handled = 0

    @property
    def total_raised(self) -> int:
        return self._total_raised

    @property
    def total_handled(self) -> int:
        return self._total_handled

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    def record_raised(self) -> int:
        self._total_raised += 1
        return self._total_raised

    def record_handled(self) -> int:
        self._total_handled += 1
        return self._total_handled

    def reset(self) -> None:
        self._total_raised = 0
        self._total_handled = 0
