"""Walk through a priority dispatch scenario tick by tick.

A Disk I/O request arrives first, then a Timer and an Exception while the
disk handler is still running. The Exception is serviced next even though it
arrived last, and no handler is ever interrupted.
"""

import argparse
import sys
from pathlib import Path

# Ensure local repo package is used even if another "irqsim" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from irqsim import DispatchScheduler

SCRIPT = {
    0: ["disk"],
    2: ["timer", "exception"],
}


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the priority dispatch demo.")
    parser.add_argument("--ticks", type=int, default=14, help="Ticks to simulate")
    parser.add_argument("--seed", type=int, default=0, help="Register jitter seed")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    engine = DispatchScheduler(seed=args.seed)
    engine.start()

    for index in range(args.ticks):
        for kind_id in SCRIPT.get(index, []):
            engine.raise_interrupt(kind_id)
        snap = engine.tick()
        queue = [p.kind.id for p in snap.pending]
        print(
            f"tick {snap.tick_count:>3}  {snap.handling_state.name:<10} "
            f"PC={snap.cpu.program_counter:<5} {snap.cpu.process_label:<28} queue={queue}"
        )

    print()
    for entry in engine.get_snapshot().event_log:
        print(f"[{entry.timestamp:>3}] {entry.message}")


if __name__ == "__main__":
    main()
