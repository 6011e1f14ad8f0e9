"""Helpers for loading and validating interrupt simulator configuration."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from irqsim.core.exceptions import ConfigurationError
from irqsim.interfaces.interrupt_queue import InterruptKind
from irqsim.utils.consts import (
    DEFAULT_REGISTER_JITTER,
    DEFAULT_REGISTERS,
    MAIN_PROCESS_LABEL,
    ConstUtils,
)


@dataclass(frozen=True)
class CpuConfig:
    program_counter: int = ConstUtils.RESET_PROGRAM_COUNTER
    stack_pointer: int = ConstUtils.RESET_STACK_POINTER
    registers: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_REGISTERS))
    register_jitter: dict[str, int] = field(
        default_factory=lambda: dict(DEFAULT_REGISTER_JITTER)
    )
    instruction_step: int = ConstUtils.INSTRUCTION_STEP
    handler_base: int = ConstUtils.HANDLER_BASE_ADDRESS
    handler_stride: int = ConstUtils.HANDLER_STRIDE
    main_process_label: str = MAIN_PROCESS_LABEL

    def __post_init__(self) -> None:
        _validate_cpu_config(self)


@dataclass(frozen=True)
class SchedulerConfig:
    handler_ticks: int = ConstUtils.HANDLER_TICKS
    sample_every: int = ConstUtils.SAMPLE_EVERY
    seed: Optional[int] = None
    tick_rate: int = 1


@dataclass(frozen=True)
class SimulatorConfig:
    cpu: CpuConfig
    scheduler: SchedulerConfig
    interrupts: tuple[InterruptKind, ...]


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, SimulatorConfig] = {}
_CACHE_LOCK = threading.RLock()
_DEFAULT_KEY = "default"


def _get_config_path(path: Optional[str] = None) -> str:
    if path is None:
        # Bundled config lives next to the package: irqsim/config.yaml
        base = Path(__file__).parent.parent / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config root must be a mapping, got {type(raw).__name__}")

    return raw


def _build_cpu_cfg(cpu_raw: dict[str, Any]) -> CpuConfig:
    """Convert the cpu section to CpuConfig, filling in defaults."""
    defaults = CpuConfig()
    return CpuConfig(
        program_counter=int(cpu_raw.get("program_counter", defaults.program_counter)),
        stack_pointer=int(cpu_raw.get("stack_pointer", defaults.stack_pointer)),
        registers={
            str(k): int(v)
            for k, v in cpu_raw.get("registers", defaults.registers).items()
        },
        register_jitter={
            str(k): int(v)
            for k, v in cpu_raw.get("register_jitter", defaults.register_jitter).items()
        },
        instruction_step=int(cpu_raw.get("instruction_step", defaults.instruction_step)),
        handler_base=int(cpu_raw.get("handler_base", defaults.handler_base)),
        handler_stride=int(cpu_raw.get("handler_stride", defaults.handler_stride)),
        main_process_label=str(
            cpu_raw.get("main_process_label", defaults.main_process_label)
        ),
    )


def _build_scheduler_cfg(sched_raw: dict[str, Any]) -> SchedulerConfig:
    """Convert the scheduler section to SchedulerConfig, filling in defaults."""
    defaults = SchedulerConfig()
    seed = sched_raw.get("seed", defaults.seed)
    return SchedulerConfig(
        handler_ticks=int(sched_raw.get("handler_ticks", defaults.handler_ticks)),
        sample_every=int(sched_raw.get("sample_every", defaults.sample_every)),
        seed=None if seed is None else int(seed),
        tick_rate=int(sched_raw.get("tick_rate", defaults.tick_rate)),
    )


def _build_interrupt_kind(entry: dict[str, Any]) -> InterruptKind:
    return InterruptKind(
        id=str(entry["id"]),
        display_name=str(entry.get("display_name", entry["id"])),
        priority=int(entry["priority"]),
        handler_address_offset=int(entry.get("handler_address_offset", 0)),
        handler_name=str(entry.get("handler", "")),
    )


def _parse_simulator_cfg_from_dict(raw: dict[str, Any]) -> SimulatorConfig:
    try:
        cfg = SimulatorConfig(
            cpu=_build_cpu_cfg(raw.get("cpu") or {}),
            scheduler=_build_scheduler_cfg(raw.get("scheduler") or {}),
            interrupts=tuple(_build_interrupt_kind(e) for e in raw["interrupts"]),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    _validate_scheduler_config(cfg.scheduler)
    _validate_interrupts(cfg.interrupts)
    return cfg


def _validate_cpu_config(cpu: CpuConfig) -> None:
    """Basic sanity checks on the CPU section to fail fast on bad configs."""
    if cpu.instruction_step <= 0:
        raise ConfigurationError("cpu.instruction_step", "must be positive")
    if cpu.handler_stride < 0:
        raise ConfigurationError("cpu.handler_stride", "must be >= 0")
    if not cpu.registers:
        raise ConfigurationError("cpu.registers", "at least one general register is required")

    for name, bound in cpu.register_jitter.items():
        if name not in cpu.registers:
            raise ConfigurationError(
                "cpu.register_jitter",
                f"jitter given for unknown register '{name}'",
                details={"registers": list(cpu.registers)},
            )
        if bound < 1:
            raise ConfigurationError(
                "cpu.register_jitter", f"bound for '{name}' must be >= 1"
            )


def _validate_scheduler_config(sched: SchedulerConfig) -> None:
    if sched.handler_ticks < 1:
        raise ConfigurationError("scheduler.handler_ticks", "must be >= 1")
    if sched.sample_every < 1:
        raise ConfigurationError("scheduler.sample_every", "must be >= 1")
    if sched.tick_rate < 1:
        raise ConfigurationError("scheduler.tick_rate", "must be >= 1")


def _validate_interrupts(kinds: tuple[InterruptKind, ...]) -> None:
    if not kinds:
        raise ConfigurationError("interrupts", "at least one interrupt kind is required")

    seen: set[str] = set()
    for kind in kinds:
        if kind.id in seen:
            raise ConfigurationError("interrupts", f"duplicate interrupt id '{kind.id}'")
        if kind.priority < 0:
            raise ConfigurationError(
                "interrupts", f"priority of '{kind.id}' must be >= 0"
            )
        seen.add(kind.id)


def parse_config(raw: dict[str, Any]) -> SimulatorConfig:
    """Validate an already-parsed config mapping."""
    return _parse_simulator_cfg_from_dict(raw=raw)


def load_config(path: Optional[str] = None) -> SimulatorConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Optional path to YAML config. If None, load bundled irqsim/config.yaml.

    Returns:
        SimulatorConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(path=path))
    raw = _load_yaml_file(p)

    return _parse_simulator_cfg_from_dict(raw=raw)


def get_config() -> SimulatorConfig:
    """Return the bundled config, loading and caching it if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    with _CACHE_LOCK:
        if _DEFAULT_KEY not in _LOADER_CACHE:
            _LOADER_CACHE[_DEFAULT_KEY] = load_config()
        return _LOADER_CACHE[_DEFAULT_KEY]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
