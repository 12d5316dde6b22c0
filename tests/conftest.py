# tests/conftest.py
from __future__ import annotations

from datetime import date

import pytest

from emi_calc.config import Settings
from emi_calc.engine import calculate_loan


@pytest.fixture
def start_month():
    return date(2024, 1, 1)


@pytest.fixture
def reference_loan(start_month):
    """50k at 7.5% over 5 years, labelled from January 2024."""
    return calculate_loan(50_000, 7.5, 5, start_month)


@pytest.fixture
def advisor_settings():
    return Settings(_env_file=None, GEMINI_API_KEY="test-key", GEMINI_MODEL="gemini-test", EMI_ADVISOR_TIMEOUT=5.0)
