"""Command-line entry point that runs a scripted interrupt scenario."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from collections import defaultdict
from dataclasses import replace
from typing import TextIO

from irqsim.core.clock import Clock
from irqsim.core.exceptions import SimulatorError
from irqsim.core.scheduler import DispatchScheduler, EngineSnapshot
from irqsim.utils.config_loader import get_config, load_config
from irqsim_host.backend import EngineBackend
from irqsim_host.controller import SimulationController


class ConsoleReporter:
    """Listener that prints event log entries as they appear."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._printed = 0

    def update(self, snapshot: EngineSnapshot) -> None:
        entries = snapshot.event_log
        if len(entries) < self._printed:
            # Log was cleared by a reset
            self._printed = 0
        for entry in entries[self._printed:]:
            self._stream.write(
                f"[t={entry.timestamp:>4}] {entry.category.value:<9} {entry.message}\n"
            )
        self._printed = len(entries)


def _parse_raise(value: str) -> tuple[int, str]:
    tick_text, sep, kind_id = value.partition(":")
    if not sep or not kind_id:
        raise argparse.ArgumentTypeError(f"expected TICK:KIND, got '{value}'")
    try:
        tick = int(tick_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid tick in '{value}'") from exc
    if tick < 0:
        raise argparse.ArgumentTypeError(f"tick must be >= 0 in '{value}'")
    return tick, kind_id


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interrupt dispatch simulator")
    parser.add_argument("--config", default=None, help="Path to simulator config YAML")
    parser.add_argument("--ticks", type=int, default=20, help="Number of ticks to run")
    parser.add_argument(
        "--raise",
        dest="raises",
        action="append",
        type=_parse_raise,
        default=[],
        metavar="TICK:KIND",
        help="Raise interrupt KIND before tick TICK (repeatable)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Register jitter seed")
    parser.add_argument(
        "--handler-ticks", type=int, default=None, help="Override handler duration"
    )
    parser.add_argument(
        "--sample-every", type=int, default=None, help="Override instruction log sampling"
    )
    parser.add_argument(
        "--realtime", action="store_true", help="Pace ticks at the configured tick rate"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Python logging level",
    )
    return parser.parse_args(argv)


def _build_engine(args: argparse.Namespace) -> tuple[DispatchScheduler, int]:
    config = load_config(args.config) if args.config else get_config()
    sched = config.scheduler
    overrides: dict[str, int] = {}
    if args.handler_ticks is not None:
        overrides["handler_ticks"] = args.handler_ticks
    if args.sample_every is not None:
        overrides["sample_every"] = args.sample_every
    if overrides:
        config = replace(config, scheduler=replace(sched, **overrides))
    engine = DispatchScheduler.from_config(config, seed=args.seed)
    return engine, sched.tick_rate


def _print_summary(snapshot: EngineSnapshot, stream: TextIO) -> None:
    cpu = snapshot.cpu
    registers = " ".join(f"{name}={value}" for name, value in cpu.as_dict().items())
    stream.write("\n")
    stream.write(f"ticks:     {snapshot.tick_count}\n")
    stream.write(f"state:     {snapshot.handling_state.name}\n")
    stream.write(f"process:   {cpu.process_label}\n")
    stream.write(f"registers: {registers}\n")
    stream.write(f"executed:  {cpu.instruction_counter}\n")
    stream.write(
        f"raised={snapshot.total_raised} handled={snapshot.total_handled} "
        f"pending={snapshot.pending_count}\n"
    )
    if snapshot.pending:
        queued = ", ".join(p.kind.id for p in snapshot.pending)
        stream.write(f"queue:     [{queued}]\n")


def run_cli(argv: list[str] | None = None, stream: TextIO | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    out = stream if stream is not None else sys.stdout

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        engine, tick_rate = _build_engine(args)
    except (SimulatorError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    scheduled: dict[int, list[str]] = defaultdict(list)
    for tick, kind_id in args.raises:
        if kind_id not in engine.catalog:
            print(
                f"error: unknown interrupt kind '{kind_id}'. "
                f"Available: {engine.catalog.ids()}",
                file=sys.stderr,
            )
            return 2
        scheduled[tick].append(kind_id)

    backend = EngineBackend(engine, lock=threading.RLock())
    controller = SimulationController(
        backend, [ConsoleReporter(out)], clock=Clock(frequency=tick_rate)
    )

    def raise_scheduled(index: int) -> None:
        for kind_id in scheduled.get(index, []):
            controller.raise_interrupt(kind_id)

    controller.set_running(True)
    snapshot = controller.run(args.ticks, realtime=args.realtime, on_tick=raise_scheduled)
    controller.set_running(False)
    _print_summary(snapshot, out)
    return 0


def main() -> None:
    raise SystemExit(run_cli())


if __name__ == "__main__":
    main()
