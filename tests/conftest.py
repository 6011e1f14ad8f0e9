"""
Pytest configuration and shared fixtures for the interrupt simulator test suite.
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'irqsim' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from irqsim.core.catalog import InterruptCatalog  # noqa: E402
from irqsim.core.scheduler import DispatchScheduler  # noqa: E402
from irqsim.interfaces.interrupt_queue import InterruptKind  # noqa: E402
from irqsim.utils.config_loader import clear_config_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_config_cache():
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


CPU_CFG = {
    "program_counter": 1000,
    "stack_pointer": 2000,
    "registers": {"AX": 0, "BX": 0},
    "register_jitter": {"AX": 10, "BX": 5},
    "instruction_step": 4,
    "handler_base": 5000,
    "handler_stride": 100,
    "main_process_label": "Main Program",
}

SCHEDULER_CFG = {
    "handler_ticks": 2,
    "sample_every": 5,
    "seed": 7,
    "tick_rate": 1,
}

INTERRUPTS_CFG = [
    {"id": "timer", "display_name": "Timer Interrupt", "priority": 1, "handler": "Timer_Handler()"},
    {"id": "keyboard", "display_name": "Keyboard Interrupt", "priority": 2, "handler": "Keyboard_Handler()"},
    {"id": "disk", "display_name": "Disk I/O Interrupt", "priority": 3, "handler": "Disk_Handler()"},
    {"id": "exception", "display_name": "Exception", "priority": 0, "handler": "Exception_Handler()"},
]

DEFAULT_KINDS = [
    InterruptKind("exception", "Exception", 0, handler_name="Exception_Handler()"),
    InterruptKind("timer", "Timer Interrupt", 1, handler_name="Timer_Handler()"),
    InterruptKind("keyboard", "Keyboard Interrupt", 2, handler_name="Keyboard_Handler()"),
    InterruptKind("disk", "Disk I/O Interrupt", 3, handler_name="Disk_Handler()"),
]


@pytest.fixture
def valid_simulator_config_dict():
    """
    Fixture providing a complete valid simulator configuration dictionary.
    """
    return {
        "cpu": dict(CPU_CFG),
        "scheduler": dict(SCHEDULER_CFG),
        "interrupts": [dict(entry) for entry in INTERRUPTS_CFG],
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_simulator_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.

    Yields:
        Path: Path to the temporary YAML file with valid configuration
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_simulator_config_dict, f)

    yield temp_yaml_file


@pytest.fixture
def minimal_simulator_config_dict():
    """
    Fixture providing a minimal valid configuration: only the interrupts list.
    """
    return {
        "interrupts": [
            {"id": "timer", "priority": 1},
        ],
    }


@pytest.fixture
def catalog():
    return InterruptCatalog(DEFAULT_KINDS)


@pytest.fixture
def engine(catalog):
    """Stopped engine with the default catalog and a fixed jitter seed."""
    return DispatchScheduler(catalog, seed=1234)


@pytest.fixture
def running_engine(engine):
    engine.start()
    return engine


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
