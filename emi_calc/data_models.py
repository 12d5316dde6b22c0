"""Data models for the EMI calculator.

This module defines the two values produced by the engine: the loan summary
(fixed installment plus aggregate totals) and the entries of the amortization
schedule. Both are frozen dataclasses; a new set is built on every
calculation and nothing mutates them afterwards.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Dict


@dataclass(frozen=True)
class LoanSummary:
    """Aggregate figures for a fixed-rate, fixed-installment loan.

    Attributes
    ----------
    monthly_payment: float
        The fixed installment (EMI) paid every month.
    total_interest: float
        Everything paid on top of the principal over the whole tenure.
    total_payable: float
        ``monthly_payment * period_count``.
    principal_amount: float
        The borrowed amount, echoed from the input.
    period_count: int
        Tenure in months.
    annual_rate: float
        Annual nominal interest rate in percent, echoed from the input.
    """

    monthly_payment: float
    total_interest: float
    total_payable: float
    principal_amount: float
    period_count: int
    annual_rate: float

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 12 / 100

    @property
    def effective_annual_rate(self) -> float:
        """Effective annual rate implied by monthly compounding."""
        return (1 + self.monthly_rate) ** 12 - 1

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["effective_annual_rate"] = self.effective_annual_rate
        return data


@dataclass(frozen=True)
class ScheduleEntry:
    """One month of the amortization schedule.

    ``principal_payment + interest_payment`` always equals ``payment``;
    ``ending_balance`` never drops below zero.
    """

    period: int
    month: int
    year: int
    starting_balance: float
    payment: float
    principal_payment: float
    interest_payment: float
    ending_balance: float

    @property
    def date(self) -> date:
        return date(self.year, self.month, 1)

    def to_dict(self) -> Dict[str, object]:
        return {
            "period": self.period,
            "date": self.date.strftime("%Y-%m"),
            "month": self.month,
            "year": self.year,
            "starting_balance": self.starting_balance,
            "payment": self.payment,
            "principal": self.principal_payment,
            "interest": self.interest_payment,
            "balance": self.ending_balance,
        }
