#!/usr/bin/env python3
"""
Test runner script for pullvine.

Usage:
    python run_tests.py                    # Run all tests
    python run_tests.py --unit             # Run only unit tests
    python run_tests.py --integration      # Run only integration tests
    python run_tests.py --coverage         # Run with coverage report
    python run_tests.py --verbose          # Run with verbose output
"""

import sys
import subprocess


def run_command(cmd: list[str]) -> int:
    """Run a command and return its exit code."""
    print(f"Running: {' '.join(cmd)}")
    return subprocess.run(cmd, check=False).returncode


def main() -> int:
    cmd = [sys.executable, "-m", "pytest", "tests/"]

    if "--unit" in sys.argv:
        cmd.extend(["-m", "unit"])
    elif "--integration" in sys.argv:
        cmd.extend(["-m", "integration"])

    if "--verbose" in sys.argv:
        cmd.append("-v")

    if "--coverage" in sys.argv:
        cmd.extend(["--cov=pullvine", "--cov-report=html", "--cov-report=term"])

    cmd.extend([
        "--tb=short",
        "--strict-markers",
    ])

    exit_code = run_command(cmd)

    if exit_code == 0:
        print("\nAll tests passed!")
    else:
        print(f"\nTests failed with exit code {exit_code}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
