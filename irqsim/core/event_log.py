"""Append-only record of simulation events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


class EventCategory(Enum):
    INTERRUPT = "interrupt"
    CONTEXT = "context"
    HANDLER = "handler"
    EXECUTION = "execution"


@dataclass(frozen=True)
class EventLogEntry:
    """One logged event; timestamp is the logical tick it was generated in."""

    timestamp: int
    category: EventCategory
    message: str


class EventLog:
    """Ordered, append-only event record.

    Entries are only ever discarded all at once by clear(), which the
    scheduler calls on reset.
    """

    def __init__(self):
        self._entries: list[EventLogEntry] = []

    def append(self, entry: EventLogEntry) -> None:
        self._entries.append(entry)

    def record(self, timestamp: int, category: EventCategory, message: str) -> EventLogEntry:
        entry = EventLogEntry(timestamp=timestamp, category=category, message=message)
        self.append(entry)
        return entry

    def snapshot(self) -> tuple[EventLogEntry, ...]:
        return tuple(self._entries)

    def count(self, category: EventCategory) -> int:
        return sum(1 for entry in self._entries if entry.category is category)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[EventLogEntry]:
        return iter(tuple(self._entries))
