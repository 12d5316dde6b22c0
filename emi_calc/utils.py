"""Utility functions for the EMI calculator.

This module provides helpers for parsing user input into Python data types and
for handling dates, including adding months and normalizing year-month strings
to ``datetime.date`` instances, plus the annual-percent to monthly-decimal
rate conversion shared by the summary and schedule calculations.
"""

from __future__ import annotations

from datetime import date
import calendar
from typing import Optional


def monthly_rate(annual_rate: float) -> float:
    """Convert an annual nominal rate in percent to a monthly decimal rate."""
    return annual_rate / 12 / 100


def period_count(tenure_years: int) -> int:
    """Return the number of monthly periods in ``tenure_years``."""
    return tenure_years * 12


def parse_year_month(ym: str) -> date:
    """Parse a YYYY-MM string into a ``date`` object (first day of month).

    Parameters
    ----------
    ym: str
        A string in the form ``"YYYY-MM"``. The day component, if present,
        will be ignored.

    Returns
    -------
    date
        A date object representing the first day of the specified month.

    Raises
    ------
    ValueError
        If the string is not a valid year-month.
    """
    try:
        parts = ym.split("-")
        if len(parts) < 2:
            raise ValueError
        year = int(parts[0])
        month = int(parts[1])
        return date(year, month, 1)
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid year-month string: {ym}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def current_month(today: Optional[date] = None) -> date:
    """Return the first day of the month containing ``today`` (default: now)."""
    today = today or date.today()
    return today.replace(day=1)


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain floats ("500000"), comma grouping ("500,000") and shorthand
    with ``k``/``m`` suffixes (e.g., "500k" meaning 500_000). Raises
    ``ValueError`` if conversion fails.
    """
    cleaned = str(value).strip().lower().replace(",", "")
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        return float(cleaned) * factor
    except ValueError:
        raise ValueError(f"Invalid amount: {value}") from None


def parse_rate(value: str) -> float:
    """Parse an annual rate in percent, accepting a trailing ``%``."""
    cleaned = str(value).strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    try:
        return float(cleaned)
    except ValueError:
        raise ValueError(f"Invalid interest rate: {value}") from None


def parse_tenure(value: str) -> int:
    """Parse a tenure in whole years."""
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid tenure: {value}") from None
