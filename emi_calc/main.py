"""Command-line interface for the EMI calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute the loan summary, print or export the full
amortization schedule, compare two loans, or ask the optional advisor for
commentary. Results can be printed to the terminal or exported to JSON/CSV
files.
"""

from __future__ import annotations

import csv
from datetime import date
import json
import logging
from pathlib import Path
import shlex
from typing import Any, Dict, List, Optional, Tuple

import click

from .advisor import fetch_advice
from .config import get_settings
from .data_models import LoanSummary, ScheduleEntry
from .engine import calculate_loan, compute_summary
from .errors import InvalidLoanInput
from .formatter import chart_points, print_comparison, print_schedule, print_summary, schedule_rows
from .utils import parse_amount, parse_year_month

logger = logging.getLogger(__name__)

MAX_PRINTED_ROWS = 120


def build_terms_from_options(
    principal: str,
    rate: float,
    tenure: int,
    start_date: Optional[str] = None,
) -> Tuple[float, float, int, Optional[date]]:
    """Turn raw option values into engine arguments.

    Raises ``click.BadParameter`` for values that cannot be parsed; range
    checks are left to the engine.
    """
    try:
        principal_value = parse_amount(principal)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--principal")
    start_dt = None
    if start_date:
        try:
            start_dt = parse_year_month(start_date)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--start-date")
    return principal_value, rate, tenure, start_dt


def _run(principal: float, rate: float, tenure: int, start_dt: Optional[date]) -> Tuple[LoanSummary, List[ScheduleEntry]]:
    try:
        return calculate_loan(principal, rate, tenure, start_dt)
    except InvalidLoanInput as exc:
        raise click.ClickException(str(exc))


def export_to_json(path: Path, schedule: List[ScheduleEntry], summary: LoanSummary) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": summary.to_dict(), "schedule": schedule_rows(schedule)}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[ScheduleEntry]) -> None:
    """Export schedule to a CSV file."""
    header = [
        "Period",
        "Date",
        "Starting_Balance",
        "Payment",
        "Principal",
        "Interest",
        "Ending_Balance",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow(
                [
                    e.period,
                    e.date.strftime("%Y-%m"),
                    e.starting_balance,
                    e.payment,
                    e.principal_payment,
                    e.interest_payment,
                    e.ending_balance,
                ]
            )


def loan_options(func):
    """Attach the principal/rate/tenure options shared by every command."""
    func = click.option("--tenure", "-t", "tenure", required=True, type=int, help="Loan tenure in years")(func)
    func = click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)")(func)
    func = click.option("--principal", "-p", "principal", required=True, help="Loan amount (accepts 50k, 1.2m)")(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log calculation details to stderr")
def cli(verbose: bool) -> None:
    """A command-line EMI calculator with amortization schedules."""
    level = logging.DEBUG if verbose else get_settings().EMI_LOG_LEVEL
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(principal: str, rate: float, tenure: int, output: Optional[str]) -> None:
    """Compute and print only the summary metrics for a loan."""
    principal_value, rate, tenure, _ = build_terms_from_options(principal, rate, tenure)
    try:
        summary_data = compute_summary(principal_value, rate, tenure)
    except InvalidLoanInput as exc:
        raise click.ClickException(str(exc))
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension", param_hint="--output")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_data.to_dict()}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@loan_options
@click.option("--start-date", "-s", "start_date", help="Reference month (YYYY-MM); the first payment falls a month later")
@click.option("--yearly", is_flag=True, help="Show one row per year plus the final payment")
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    principal: str,
    rate: float,
    tenure: int,
    start_date: Optional[str],
    yearly: bool,
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    terms = build_terms_from_options(principal, rate, tenure, start_date)
    summary_data, schedule_entries = _run(*terms)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, schedule_entries, summary_data)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, schedule_entries)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        logger.info("Exported %d schedule rows to %s", len(schedule_entries), path)
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(summary_data)
    rows = chart_points(schedule_entries) if yearly else schedule_entries
    # Limit schedule length printed to avoid flooding the terminal
    if len(rows) > MAX_PRINTED_ROWS:
        click.echo(f"Schedule has {len(rows)} rows; showing first {MAX_PRINTED_ROWS} rows.")
        rows = rows[:MAX_PRINTED_ROWS]
    print_schedule(rows)


def parse_scenario_opts(opts: str) -> Dict[str, Any]:
    """Parse a quoted scenario string such as ``"-p 500k -r 8 -t 20"``."""
    tokens = shlex.split(opts)
    params: Dict[str, Any] = {"principal": None, "rate": None, "tenure": None}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if i + 1 >= len(tokens):
            raise click.BadParameter(f"Option {token} in scenario needs a value")
        value = tokens[i + 1]
        try:
            if token in ("-p", "--principal"):
                params["principal"] = value
            elif token in ("-r", "--rate"):
                params["rate"] = float(value)
            elif token in ("-t", "--tenure"):
                params["tenure"] = int(value)
            else:
                raise click.BadParameter(f"Unknown option in scenario: {token}")
        except ValueError:
            raise click.BadParameter(f"Invalid value for {token} in scenario: {value}")
        i += 2
    for name, value in params.items():
        if value is None:
            raise click.BadParameter(f"Scenario missing required option {name}")
    return params


@cli.command()
@click.option("--scenario1", "scenario1", required=True, help="First scenario options quoted string")
@click.option("--scenario2", "scenario2", required=True, help="Second scenario options quoted string")
def compare(scenario1: str, scenario2: str) -> None:
    """Compare two loan scenarios.

    Scenarios are provided as quoted option strings, for example:

        emi-calc compare --scenario1 "-p 500k -r 8 -t 20" --scenario2 "-p 500k -r 7 -t 15"
    """
    summaries = []
    for opts in (scenario1, scenario2):
        params = parse_scenario_opts(opts)
        principal_value, rate, tenure, _ = build_terms_from_options(**params)
        try:
            summaries.append(compute_summary(principal_value, rate, tenure))
        except InvalidLoanInput as exc:
            raise click.ClickException(str(exc))
    print_comparison(*summaries)


@cli.command()
@loan_options
def advise(principal: str, rate: float, tenure: int) -> None:
    """Ask the configured AI model for tips on a loan."""
    principal_value, rate, tenure, _ = build_terms_from_options(principal, rate, tenure)
    try:
        summary_data = compute_summary(principal_value, rate, tenure)
    except InvalidLoanInput as exc:
        raise click.ClickException(str(exc))
    print_summary(summary_data)
    advice = fetch_advice(principal_value, rate, tenure, summary_data.monthly_payment)
    click.echo(advice.text, err=not advice.ok)


if __name__ == "__main__":
    cli()
