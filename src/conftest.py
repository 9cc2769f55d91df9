"""
Pytest configuration for the src/ tree.

category_core and center are top-level packages under src/, imported
without installation. Both the tests under tests/core_categories and
tests/center import them by name, so src/ goes on sys.path before
collection.

Markers:
    slow  a full simple-object search (several Groebner bases per candidate)

Usage:
    cd src
    pytest tests/ -v -m "not slow"
"""

import sys
from pathlib import Path

SRC = Path(__file__).parent

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: runs a full center search")
