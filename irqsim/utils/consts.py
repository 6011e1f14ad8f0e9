"""Constants and default values for the interrupt simulator."""


class ConstUtils:
    """Startup register values and dispatch timing defaults."""

    # Startup context
    RESET_PROGRAM_COUNTER = 1000
    """Program counter of the main program at startup."""

    RESET_STACK_POINTER = 2000
    """Stack pointer at startup."""

    INSTRUCTION_STEP = 4
    """Bytes the program counter advances per main-program instruction."""

    # Simulated vector table
    HANDLER_BASE_ADDRESS = 5000
    """Address of the priority-0 handler."""

    HANDLER_STRIDE = 100
    """Distance between handlers of consecutive priorities."""

    # Scheduling
    HANDLER_TICKS = 2
    """Ticks a handler stays active after the tick that dispatched it."""

    SAMPLE_EVERY = 5
    """Log every Nth executed main-program instruction."""


MAIN_PROCESS_LABEL = "Main Program"

DEFAULT_REGISTERS = {"AX": 0, "BX": 0}

# Exclusive upper bound of the per-instruction increment for each register
DEFAULT_REGISTER_JITTER = {"AX": 10, "BX": 5}


def handler_address(
    priority: int,
    offset: int = 0,
    base: int = ConstUtils.HANDLER_BASE_ADDRESS,
    stride: int = ConstUtils.HANDLER_STRIDE,
) -> int:
    """Return the simulated vector-table address for a handler.

    The address depends only on the interrupt priority and the kind's own
    offset, so the same kind always lands at the same address.
    """
    return base + priority * stride + offset
