"""Command line interface for PayoffPlanner."""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Optional

import click

from .config import get_config
from .logging_config import setup_logging
from .models.debt_record import DebtRecord, debts_from_records
from .services.debts import PayoffStrategy
from .services.demo import demo_debt_records
from .services.export_csv import export_schedule_csv
from .services.import_csv import load_debt_records
from .services.schedule import (
    MAX_MONTHS,
    InsufficientBudgetError,
    PayoffResult,
    calculate,
    compare_strategies,
    minimum_budget,
)


def _money(value: Decimal) -> str:
    return f"${value:,.2f}"


def _parse_budget(ctx, param, value: Optional[str]) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        budget = Decimal(value.replace(",", "").lstrip("$"))
    except InvalidOperation as exc:
        raise click.BadParameter(f"{value!r} is not a valid amount") from exc
    if budget < 0:
        raise click.BadParameter("budget cannot be negative")
    return budget


def _parse_month(ctx, param, value: Optional[str]) -> date:
    # The clock is only consulted here; the engine always receives an explicit month.
    if value is None:
        return date.today().replace(day=1)
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError as exc:
        raise click.BadParameter("expected YYYY-MM") from exc


def _load_records(csv_path: Optional[Path], demo: bool) -> list[DebtRecord]:
    if demo:
        return demo_debt_records()
    if csv_path is None:
        raise click.UsageError("Provide a CSV_PATH or pass --demo.")
    try:
        return load_debt_records(file_path=csv_path)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_summary(result: PayoffResult) -> None:
    click.echo(f"Strategy:         {result.strategy.value}")
    click.echo(f"Monthly budget:   {_money(result.total_monthly_payment)}")
    click.echo(f"Months to payoff: {result.months_to_payoff}")
    click.echo(f"Debt-free date:   {result.debt_free_date or 'N/A'}")
    click.echo(f"Total interest:   {_money(result.total_interest_paid)}")
    if result.horizon_exceeded:
        click.secho(
            f"Warning: balances remain after {MAX_MONTHS} months; "
            "this plan does not pay off within 30 years.",
            fg="yellow",
        )


source_argument = click.argument(
    "csv_path", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
demo_option = click.option("--demo", is_flag=True, default=False, help="Use the demo debt portfolio")
start_option = click.option(
    "--start", "start_month", callback=_parse_month, help="First month of the plan (YYYY-MM)"
)
budget_option = click.option(
    "--budget", required=True, callback=_parse_budget, help="Total monthly payment for all debts"
)


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Plan debt payoff with the avalanche or snowball strategy."""

    config = get_config()
    setup_logging(config)
    ctx.obj = config


@main.command("plan")
@source_argument
@demo_option
@budget_option
@start_option
@click.option(
    "--strategy",
    type=click.Choice([s.value for s in PayoffStrategy]),
    default=None,
    help="Payoff strategy (defaults to PAYOFFPLANNER_DEFAULT_STRATEGY)",
)
@click.option("--months", "show_months", default=12, show_default=True, help="Months to print")
@click.option("--export", "export_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result as JSON")
@click.pass_obj
def plan(
    config,
    csv_path: Optional[Path],
    demo: bool,
    budget: Decimal,
    start_month: date,
    strategy: Optional[str],
    show_months: int,
    export_path: Optional[Path],
    as_json: bool,
) -> None:
    """Simulate a payoff plan for the debts in CSV_PATH."""

    debts = debts_from_records(_load_records(csv_path, demo))
    chosen = PayoffStrategy(strategy) if strategy else config.DEFAULT_STRATEGY
    try:
        result = calculate(debts, chosen, budget, start_month=start_month).to_payoff_result()
    except InsufficientBudgetError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        click.echo(json.dumps(result.as_dict(), default=str, indent=2))
    else:
        _echo_summary(result)
        if result.months and show_months > 0:
            click.echo("")
            for month in result.months[:show_months]:
                click.echo(
                    f"{month.date}  paid {_money(month.total_payment):>12}  "
                    f"interest {_money(month.total_interest):>10}  "
                    f"remaining {_money(month.remaining_balance):>12}"
                )
            hidden = len(result.months) - show_months
            if hidden > 0:
                click.echo(f"... {hidden} more months")

    if export_path is not None:
        export_schedule_csv(result=result, output_path=export_path)
        click.echo(f"Schedule written: {export_path}")


@main.command("compare")
@source_argument
@demo_option
@budget_option
@start_option
def compare(csv_path: Optional[Path], demo: bool, budget: Decimal, start_month: date) -> None:
    """Compare avalanche and snowball for the same budget."""

    debts = debts_from_records(_load_records(csv_path, demo))
    try:
        comparison = compare_strategies(debts, budget, start_month=start_month)
    except InsufficientBudgetError as exc:
        raise click.ClickException(str(exc)) from exc

    for result in (comparison.avalanche, comparison.snowball):
        _echo_summary(result)
        click.echo("")
    click.echo(f"Avalanche saves {_money(comparison.interest_savings)} in interest")
    click.echo(f"and finishes {comparison.months_difference} month(s) sooner than snowball.")


@main.command("minimum")
@source_argument
@demo_option
def minimum(csv_path: Optional[Path], demo: bool) -> None:
    """Print the smallest monthly budget a plan accepts."""

    debts = debts_from_records(_load_records(csv_path, demo))
    click.echo(f"Minimum monthly budget: {_money(minimum_budget(debts))}")


if __name__ == "__main__":  # pragma: no cover
    main()
