import pytest

from irqsim.core.event_log import EventCategory, EventLog, EventLogEntry
from irqsim.core.interrupt_queue import InterruptQueue
from irqsim.core.statistics import StatisticsTracker
from irqsim.interfaces.interrupt_queue import InterruptKind, PendingInterrupt


def test_event_log_appends_in_order():
    log = EventLog()
    log.record(0, EventCategory.INTERRUPT, "Timer Interrupt generated")
    log.append(EventLogEntry(1, EventCategory.CONTEXT, "Context saved to stack"))

    snap = log.snapshot()
    assert [e.message for e in snap] == [
        "Timer Interrupt generated",
        "Context saved to stack",
    ]
    assert len(log) == 2


def test_event_log_snapshot_is_read_only_copy():
    log = EventLog()
    log.record(0, EventCategory.EXECUTION, "Executing instruction 5")
    snap = log.snapshot()
    log.record(1, EventCategory.EXECUTION, "Executing instruction 10")

    assert len(snap) == 1
    with pytest.raises(AttributeError):
        snap[0].message = "changed"


def test_event_log_count_by_category():
    log = EventLog()
    log.record(0, EventCategory.EXECUTION, "a")
    log.record(1, EventCategory.HANDLER, "b")
    log.record(2, EventCategory.EXECUTION, "c")

    assert log.count(EventCategory.EXECUTION) == 2
    assert log.count(EventCategory.CONTEXT) == 0


def test_event_log_clear():
    log = EventLog()
    log.record(0, EventCategory.HANDLER, "x")
    log.clear()

    assert len(log) == 0
    assert list(log) == []


def test_statistics_counters():
    stats = StatisticsTracker(InterruptQueue())

    assert stats.record_raised() == 1
    assert stats.record_raised() == 2
    assert stats.record_handled() == 1
    assert (stats.total_raised, stats.total_handled) == (2, 1)

    stats.reset()
    assert (stats.total_raised, stats.total_handled) == (0, 0)


def test_statistics_pending_count_reads_queue():
    queue = InterruptQueue()
    stats = StatisticsTracker(queue)
    kind = InterruptKind("timer", "Timer", 1)

    assert stats.pending_count == 0
    queue.enqueue(PendingInterrupt(0, kind))
    queue.enqueue(PendingInterrupt(1, kind))
    assert stats.pending_count == 2
    queue.remove(0)
    assert stats.pending_count == 1
