"""Core calculation engine for the EMI calculator.

This module implements the financial logic of a fixed-rate, fixed-installment
loan: the equated monthly installment (EMI) with its aggregate totals, and the
month-by-month amortization schedule that splits each installment into
interest and principal until the balance is retired. Every function is a pure
function of its arguments; results are rebuilt in full on each call.
"""

from __future__ import annotations

from datetime import date
import logging
import math
from typing import Iterable, List, Optional, Tuple

from .data_models import LoanSummary, ScheduleEntry
from .errors import InvalidLoanInput
from .utils import add_months, current_month, monthly_rate, period_count

logger = logging.getLogger(__name__)


def _check_number(field: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidLoanInput(field, value, "must be a number")
    if not math.isfinite(value):
        raise InvalidLoanInput(field, value, "must be finite")
    return float(value)


def validate_terms(principal: float, annual_rate: float, tenure_years: int) -> None:
    """Reject loan terms that cannot be amortized.

    Raises
    ------
    InvalidLoanInput
        If ``principal <= 0``, ``annual_rate < 0`` or ``tenure_years`` is not
        a positive whole number of years.
    """
    if _check_number("principal", principal) <= 0:
        raise InvalidLoanInput("principal", principal, "must be positive")
    if _check_number("annual rate", annual_rate) < 0:
        raise InvalidLoanInput("annual rate", annual_rate, "must not be negative")
    if isinstance(tenure_years, bool) or not isinstance(tenure_years, int):
        raise InvalidLoanInput("tenure", tenure_years, "must be a whole number of years")
    if tenure_years <= 0:
        raise InvalidLoanInput("tenure", tenure_years, "must be positive")


def calculate_emi(principal: float, rate_per_month: float, term: int) -> float:
    """Return the equated monthly installment for a loan.

    The formula is:

        payment = P * i * (1 + i)^n / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero the
    formula degenerates to 0/0, so the limit ``P / n`` is returned instead.
    """
    if term <= 0:
        raise InvalidLoanInput("term", term, "must be positive")
    if rate_per_month == 0:
        return principal / term
    factor = (1 + rate_per_month) ** term
    return principal * rate_per_month * factor / (factor - 1)


def compute_summary(principal: float, annual_rate: float, tenure_years: int) -> LoanSummary:
    """Compute the fixed monthly payment and the loan totals.

    Parameters
    ----------
    principal: float
        Amount borrowed; must be positive.
    annual_rate: float
        Annual nominal interest rate in percent; zero is allowed.
    tenure_years: int
        Loan duration in whole years.

    Returns
    -------
    LoanSummary
        ``total_payable`` is exactly ``monthly_payment * period_count`` and
        ``total_interest`` is ``total_payable - principal``.
    """
    validate_terms(principal, annual_rate, tenure_years)
    rate = monthly_rate(annual_rate)
    periods = period_count(tenure_years)

    payment = calculate_emi(principal, rate, periods)
    total_payable = payment * periods
    # P / n * n can drift from P in the last bits; a zero-rate loan costs nothing
    total_interest = total_payable - principal if rate else 0.0

    logger.debug(
        "EMI for principal=%s rate=%s%% tenure=%sy: %.6f over %d periods",
        principal, annual_rate, tenure_years, payment, periods,
    )
    return LoanSummary(
        monthly_payment=payment,
        total_interest=total_interest,
        total_payable=total_payable,
        principal_amount=float(principal),
        period_count=periods,
        annual_rate=float(annual_rate),
    )


def compute_schedule(
    principal: float,
    annual_rate: float,
    tenure_years: int,
    monthly_payment: float,
    start_date: Optional[date] = None,
) -> List[ScheduleEntry]:
    """Build the month-by-month amortization schedule.

    ``monthly_payment`` is used exactly as given (normally the
    ``LoanSummary.monthly_payment`` of the same terms); it is never
    recomputed here. Entry ``i`` is labelled with the month ``i`` months after
    ``start_date``, which defaults to the current month.

    Returns
    -------
    List[ScheduleEntry]
        ``tenure_years * 12`` entries ordered by period. Balances are clamped
        at zero so rounding drift in the last periods never goes negative.
    """
    validate_terms(principal, annual_rate, tenure_years)
    if _check_number("monthly payment", monthly_payment) <= 0:
        raise InvalidLoanInput("monthly payment", monthly_payment, "must be positive")

    rate = monthly_rate(annual_rate)
    periods = period_count(tenure_years)
    reference = start_date or current_month()

    schedule: List[ScheduleEntry] = []
    balance = float(principal)
    for period in range(1, periods + 1):
        starting_balance = balance
        interest_payment = balance * rate
        principal_payment = monthly_payment - interest_payment
        balance = max(0.0, balance - principal_payment)
        label = add_months(reference, period)
        schedule.append(
            ScheduleEntry(
                period=period,
                month=label.month,
                year=label.year,
                starting_balance=starting_balance,
                payment=monthly_payment,
                principal_payment=principal_payment,
                interest_payment=interest_payment,
                ending_balance=balance,
            )
        )

    logger.debug("Generated %d schedule entries, final balance %.6f", len(schedule), balance)
    return schedule


def calculate_loan(
    principal: float,
    annual_rate: float,
    tenure_years: int,
    start_date: Optional[date] = None,
) -> Tuple[LoanSummary, List[ScheduleEntry]]:
    """Compute the summary, then the schedule driven by its monthly payment."""
    summary = compute_summary(principal, annual_rate, tenure_years)
    schedule = compute_schedule(
        principal, annual_rate, tenure_years, summary.monthly_payment, start_date
    )
    return summary, schedule


def total_interest_paid(schedule: Iterable[ScheduleEntry]) -> float:
    """Sum the interest portions of a schedule."""
    return math.fsum(entry.interest_payment for entry in schedule)
