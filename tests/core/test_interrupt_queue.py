import pytest

from irqsim.core.interrupt_queue import InterruptQueue
from irqsim.interfaces.interrupt_queue import InterruptKind, PendingInterrupt

EXCEPTION = InterruptKind("exception", "Exception", 0)
TIMER = InterruptKind("timer", "Timer Interrupt", 1)
KEYBOARD = InterruptKind("keyboard", "Keyboard Interrupt", 2)
DISK = InterruptKind("disk", "Disk I/O Interrupt", 3)


def _fill(queue, kinds):
    entries = []
    for seq, kind in enumerate(kinds):
        entry = PendingInterrupt(sequence=seq, kind=kind)
        queue.enqueue(entry)
        entries.append(entry)
    return entries


def test_empty_queue():
    queue = InterruptQueue()

    assert queue.is_empty()
    assert len(queue) == 0
    assert queue.peek_highest_priority() is None
    assert queue.snapshot() == ()


def test_enqueue_sorts_by_priority():
    queue = InterruptQueue()
    _fill(queue, [DISK, TIMER, KEYBOARD])

    assert [p.kind.id for p in queue] == ["timer", "keyboard", "disk"]


def test_equal_priorities_keep_arrival_order():
    queue = InterruptQueue()
    _fill(queue, [KEYBOARD, TIMER, KEYBOARD, TIMER, EXCEPTION])

    assert [(p.kind.id, p.sequence) for p in queue] == [
        ("exception", 4),
        ("timer", 1),
        ("timer", 3),
        ("keyboard", 0),
        ("keyboard", 2),
    ]


def test_peek_does_not_remove():
    queue = InterruptQueue()
    _fill(queue, [TIMER, EXCEPTION])

    head = queue.peek_highest_priority()
    assert head.kind is EXCEPTION
    assert queue.peek_highest_priority() is head
    assert len(queue) == 2


def test_remove_specific_entry():
    queue = InterruptQueue()
    entries = _fill(queue, [TIMER, TIMER, DISK])

    assert queue.remove(entries[1].sequence) is True
    assert [p.sequence for p in queue] == [0, 2]
    assert entries[1].sequence not in queue


def test_remove_missing_is_noop():
    queue = InterruptQueue()
    entries = _fill(queue, [TIMER])

    assert queue.remove(entries[0].sequence) is True
    assert queue.remove(entries[0].sequence) is False
    assert queue.remove(99) is False
    assert queue.is_empty()


def test_remove_keeps_order_for_later_inserts():
    queue = InterruptQueue()
    entries = _fill(queue, [DISK, TIMER])
    queue.remove(entries[1].sequence)
    queue.enqueue(PendingInterrupt(sequence=5, kind=KEYBOARD))

    assert [p.kind.id for p in queue] == ["keyboard", "disk"]


def test_clear():
    queue = InterruptQueue()
    _fill(queue, [DISK, TIMER])
    queue.clear()

    assert queue.is_empty()


def test_snapshot_is_a_copy():
    queue = InterruptQueue()
    _fill(queue, [TIMER])
    snap = queue.snapshot()
    queue.clear()

    assert len(snap) == 1
    assert isinstance(snap, tuple)


@pytest.mark.parametrize(
    "order",
    [
        [DISK, KEYBOARD, TIMER, EXCEPTION],
        [EXCEPTION, DISK, EXCEPTION, TIMER, DISK],
        [KEYBOARD] * 4 + [TIMER],
    ],
)
def test_queue_is_always_sorted(order):
    queue = InterruptQueue()
    _fill(queue, order)

    keys = [p.sort_key for p in queue]
    assert keys == sorted(keys)
