"""Pytest configuration and shared fixtures."""

import sys
from datetime import date
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

# A Wednesday; every calendar expectation in the suite is relative to it
REFERENCE_DATE = date(2025, 12, 17)


@pytest.fixture
def today() -> date:
    """Fixed reference date so calendar arithmetic is deterministic."""
    return REFERENCE_DATE
