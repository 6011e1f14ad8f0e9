#!/usr/bin/env python
"""Local quality checks and tests runner with auto-fix capabilities.

Usage:
    python run_quality_checks.py                    # Run all checks (no fixes)
    python run_quality_checks.py --fix              # Run all checks + auto fixes
    python run_quality_checks.py --fix --skip lint  # Fix but skip linting
    python run_quality_checks.py --verbose          # Detailed output

Tools come from the dev and test extras: pip install -e .[dev,test]
"""

import argparse
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional

PACKAGE_DIRS = ["irqsim", "irqsim_host"]
TESTS_DIR = "tests"
DIRS_TO_CHECK = [*PACKAGE_DIRS, TESTS_DIR]


@dataclass(frozen=True)
class Check:
    key: str
    name: str
    cmd: list[str]
    fix_cmd: Optional[list[str]] = None
    show_output: bool = False


CHECKS = [
    Check(
        "formatting",
        "Black Formatting",
        ["black", "--check", *DIRS_TO_CHECK],
        fix_cmd=["black", *DIRS_TO_CHECK],
    ),
    Check(
        "imports",
        "isort Import Ordering",
        ["isort", "--check-only", *DIRS_TO_CHECK],
        fix_cmd=["isort", *DIRS_TO_CHECK],
    ),
    Check("lint", "Pylint Code Quality", ["pylint", *PACKAGE_DIRS]),
    Check("type", "Mypy Type Checking", ["mypy", *PACKAGE_DIRS]),
    Check("deadcode", "Vulture Dead Code", ["vulture", *PACKAGE_DIRS]),
    Check(
        "complexity",
        "Radon Code Complexity",
        ["radon", "cc", *PACKAGE_DIRS, "-a"],
        show_output=True,
    ),
    Check(
        "tests",
        "Pytest + Coverage",
        [
            "pytest",
            *[f"--cov={d}" for d in PACKAGE_DIRS],
            "--cov-report=term-missing",
            "--cov-report=xml",
            TESTS_DIR,
        ],
        show_output=True,
    ),
]


class CheckRunner:
    """Runs quality checks and tests with optional auto-fixes."""

    def __init__(
        self,
        fix: bool = False,
        verbose: bool = False,
        skip_checks: Optional[list[str]] = None,
    ):
        self.fix = fix
        self.verbose = verbose
        self.skip_checks = skip_checks or []
        self.failed_checks: list[str] = []
        self.passed_checks: list[str] = []

    def run_check(self, check: Check) -> bool:
        """Run one check and record whether it passed."""
        if check.key in self.skip_checks:
            print(f"Skipping {check.name}")
            return True

        cmd = check.cmd
        name = check.name
        if self.fix and check.fix_cmd is not None:
            cmd = check.fix_cmd
            name = f"{name} (auto-fix enabled)"

        print(f"\n{'=' * 70}")
        print(f"Running: {name}")
        print(f"{'=' * 70}")

        try:
            if self.verbose or check.show_output:
                success = subprocess.run(cmd, check=False).returncode == 0
            else:
                result = subprocess.run(cmd, check=False, capture_output=True, text=True)
                success = result.returncode == 0
                if not success:
                    print(result.stdout)
                    print(result.stderr)
        except FileNotFoundError as e:
            print(f"Error: {e}")
            print("   Make sure all tools are installed: pip install -e .[dev,test]")
            success = False

        if success:
            print(f"PASS {name}")
            self.passed_checks.append(name)
        else:
            print(f"FAIL {name}")
            self.failed_checks.append(name)
        return success

    def print_summary(self) -> None:
        print(f"\n{'=' * 70}")
        print("SUMMARY")
        print(f"{'=' * 70}")

        if self.passed_checks:
            print(f"\nPassed ({len(self.passed_checks)}):")
            for check in self.passed_checks:
                print(f"   - {check}")

        if self.failed_checks:
            print(f"\nFailed ({len(self.failed_checks)}):")
            for check in self.failed_checks:
                print(f"   - {check}")
        else:
            print("\nAll checks passed!")

    def run_all(self) -> int:
        """Run all checks in order.

        Returns:
            0 if all checks passed, non-zero otherwise
        """
        fix_text = "with auto-fixes" if self.fix else "without fixes"
        print(f"\nStarting quality checks {fix_text}...\n")

        for check in CHECKS:
            self.run_check(check)

        self.print_summary()
        return 0 if not self.failed_checks else 1


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Run local quality checks and tests with optional auto-fixes",
    )
    parser.add_argument(
        "--fix",
        "--apply",
        action="store_true",
        dest="fix",
        help="Automatically fix issues (formatting, imports) where possible",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Show detailed output from all commands",
    )
    parser.add_argument(
        "--skip",
        nargs="+",
        default=[],
        choices=[check.key for check in CHECKS],
        help="Skip specific checks",
    )
    args = parser.parse_args()

    runner = CheckRunner(fix=args.fix, verbose=args.verbose, skip_checks=args.skip)
    return runner.run_all()


if __name__ == "__main__":
    sys.exit(main())
