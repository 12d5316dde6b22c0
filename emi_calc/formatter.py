"""Output helpers for the EMI calculator.

This module provides simple functions to render loan summaries and
amortization schedules in a tabular text format, plus the reshaping the
charts need: the principal/interest breakdown and a down-sampled balance
series. Amounts are printed with two decimals; currency symbols and locale
grouping are left to whatever displays them.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import click

from .data_models import LoanSummary, ScheduleEntry


def payment_breakdown(summary: LoanSummary) -> List[Dict[str, object]]:
    """Return the principal vs. total interest split of a loan."""
    return [
        {"name": "Principal Amount", "value": summary.principal_amount},
        {"name": "Total Interest", "value": summary.total_interest},
    ]


def chart_points(schedule: Sequence[ScheduleEntry], step: int = 12) -> List[ScheduleEntry]:
    """Down-sample a schedule for the balance-over-time chart.

    Keeps every ``step``-th entry starting with the first one, and always the
    final entry.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    last = len(schedule) - 1
    return [entry for i, entry in enumerate(schedule) if i % step == 0 or i == last]


def schedule_rows(schedule: Sequence[ScheduleEntry]) -> List[Dict[str, object]]:
    """Convert schedule entries into JSON-serialisable dictionaries."""
    return [entry.to_dict() for entry in schedule]


def print_summary(summary: LoanSummary) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    click.echo("Summary")
    click.echo("-" * 72)
    click.echo(f"Principal amount   : {summary.principal_amount:.2f}")
    click.echo(f"Annual rate        : {summary.annual_rate:.2f}%")
    click.echo(f"Tenure             : {summary.period_count} months")
    click.echo(f"Monthly EMI        : {summary.monthly_payment:.2f}")
    click.echo(f"Total interest     : {summary.total_interest:.2f}")
    click.echo(f"Total payable      : {summary.total_payable:.2f}")
    click.echo(f"Effective rate     : {summary.effective_annual_rate * 100:.2f}%")
    click.echo("-" * 72)


def print_schedule(schedule: Sequence[ScheduleEntry]) -> None:
    """Print the amortization schedule as a simple tab-separated table."""
    headers = ["Period", "Date", "StartBal", "Payment", "Principal", "Interest", "EndBal"]
    click.echo("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.period),
            entry.date.strftime("%Y-%m"),
            f"{entry.starting_balance:.2f}",
            f"{entry.payment:.2f}",
            f"{entry.principal_payment:.2f}",
            f"{entry.interest_payment:.2f}",
            f"{entry.ending_balance:.2f}",
        ]
        click.echo("\t".join(row))


def print_comparison(s1: LoanSummary, s2: LoanSummary) -> None:
    """Print a comparison of two loan summaries side by side.

    The difference column is scenario2 - scenario1, so a negative difference
    means the second scenario is cheaper or shorter.
    """
    click.echo("Comparison")
    click.echo("=" * 72)
    keys = [
        "monthly_payment",
        "total_interest",
        "total_payable",
        "period_count",
    ]
    click.echo(f"{'Metric':20s} {'Scenario1':>15s} {'Scenario2':>15s} {'Difference':>15s}")
    for key in keys:
        v1 = getattr(s1, key)
        v2 = getattr(s2, key)
        diff = v2 - v1
        click.echo(f"{key:20s} {v1:15.2f} {v2:15.2f} {diff:15.2f}")
    click.echo("=" * 72)
