"""
Pytest Configuration and Fixtures.

Builders live in tests/factories.py so test modules can import them
directly; this file only exposes the shared fixtures.
"""

from datetime import date

import pytest

from tests.factories import REFERENCE_DATE


@pytest.fixture
def now() -> date:
    return REFERENCE_DATE
