"""Errors raised by the EMI calculator engine."""

from __future__ import annotations


class InvalidLoanInput(ValueError):
    """Raised when loan terms cannot describe a valid amortizing loan.

    The engine raises this before doing any arithmetic, so callers never get
    plausible-looking figures for a principal, rate or tenure that is out of
    range.
    """

    def __init__(self, field: str, value: object, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
