from irqsim.interfaces.cpu import CpuSnapshot, ICpuContext, RegisterValue
from irqsim.interfaces.interrupt_queue import InterruptKind, PendingInterrupt


class DummyContext(ICpuContext):
    def __init__(self):
        self.pc = 0
        self._saved = None

    def snapshot(self) -> CpuSnapshot:
        return CpuSnapshot(
            program_counter=self.pc,
            stack_pointer=0,
            registers=(RegisterValue("AX", self.pc),),
            process_label="main",
            instruction_counter=self.pc,
        )

    def save_current(self) -> CpuSnapshot:
        self._saved = self.snapshot()
        return self._saved

    def restore(self) -> CpuSnapshot:
        saved, self._saved = self._saved, None
        self.pc = saved.program_counter
        return saved

    def advance_instruction(self) -> int:
        self.pc += 1
        return self.pc

    def enter_handler_address(self, kind) -> int:
        self.pc = 100 + kind.priority
        return self.pc

    def reset(self) -> None:
        self.pc = 0
        self._saved = None

    @property
    def saved_context(self):
        return self._saved


def test_default_has_saved_context_follows_slot():
    ctx = DummyContext()
    assert ctx.has_saved_context is False

    ctx.save_current()
    assert ctx.has_saved_context is True

    ctx.restore()
    assert ctx.has_saved_context is False


def test_register_value_default_group():
    assert RegisterValue("AX", 3).group == "general"


def test_cpu_snapshot_equality_is_by_value():
    a = DummyContext()
    b = DummyContext()
    a.advance_instruction()
    b.advance_instruction()

    assert a.snapshot() == b.snapshot()


def test_pending_interrupt_sort_key():
    kind = InterruptKind("timer", "Timer", 1)
    pending = PendingInterrupt(sequence=4, kind=kind, raised_at=2)

    assert pending.priority == 1
    assert pending.sort_key == (1, 4)


def test_interrupt_kind_defaults():
    kind = InterruptKind("disk", "Disk", 3)

    assert kind.handler_address_offset == 0
    assert kind.handler_name == ""
