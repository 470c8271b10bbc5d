#!/usr/bin/env python3
# Copyright 2026 byteview Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the byteview CI checks locally: lint, format, tests with coverage, and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=byteview", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run every CI step, then print a pass/fail summary."""
    results = [_run_step(name, cmd) for name, cmd in STEPS]

    rule = chalk.blue("=" * 60)
    print(f"\n{rule}\n{chalk.blue('  Summary')}\n{rule}")
    for name, passed, elapsed in results:
        colour = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(colour(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    rule = chalk.blue("=" * 60)
    print(f"\n{rule}\n{chalk.blue(name)}\n{rule}")
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


if __name__ == "__main__":
    sys.exit(main())
