#!/usr/bin/env python3
"""
Test runner for Cellarbook.

Runs the suite under tests/ with coverage of the cellarbook package.
Extra arguments go straight to pytest, e.g. `python run_tests.py -k ledger`.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT / "src"))

if __name__ == "__main__":
    sys.exit(pytest.main([
        str(ROOT / "tests"),
        "-v",
        "--tb=short",
        "--cov=cellarbook",
        "--cov-report=term-missing",
        *sys.argv[1:],
    ]))
