"""Report subcommands. Each reads a household file and prints a report."""

from __future__ import annotations

import dataclasses
import json
import math
from datetime import date, datetime
from enum import Enum
from typing import Any

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from pathwise.core.config_schema import PathwiseConfig
from pathwise.core.exceptions import HouseholdFileError
from pathwise.financial.budget import PayoffBudget, compute_payoff_budget
from pathwise.financial.calculators.frequency import (
    FrequencyMode,
    analyze_per_debt_frequency,
    compare_payment_frequencies,
)
from pathwise.financial.calculators.mortgage import HouseInputs, calculate_affordability, calculate_debt_payoff_impact
from pathwise.financial.calculators.payoff import PayoffStrategy, analyze_lump_sum, compare_strategies, simulate_payoff
from pathwise.financial.calculators.roadmap import RoadmapAssumptions, calculate_roadmap, get_recommended_allocation
from pathwise.financial.calculators.tax import calculate_income_tax, compare_filing_statuses
from pathwise.financial.calculators.withdrawal import WithdrawalInputs, analyze_withdrawal
from pathwise.financial.formatters import (
    format_compact_currency,
    format_currency,
    format_month_label,
    format_percent,
)
from pathwise.financial.household import load_household
from pathwise.financial.models import HouseholdState

_household_arg = click.argument("household", type=click.Path(exists=True, dir_okay=False))
_json_opt = click.option("--json", "as_json", is_flag=True, help="Print machine-readable JSON.")
_budget_opt = click.option(
    "--budget",
    "monthly_budget",
    type=click.FloatRange(min=0),
    default=None,
    help="Monthly debt budget (defaults to the household's effective budget).",
)
_as_of_opt = click.option(
    "--as-of",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Date the pay delay is measured from (default: today).",
)


# === Helpers ===


def _load(path: str) -> HouseholdState:
    try:
        return load_household(path)
    except HouseholdFileError as e:
        raise click.ClickException(str(e)) from e


def _settings() -> PathwiseConfig:
    obj = click.get_current_context().obj
    return obj if isinstance(obj, PathwiseConfig) else PathwiseConfig()


def _house_inputs(settings: PathwiseConfig) -> HouseInputs:
    return HouseInputs(**settings.house.model_dump())


def _plan(state: HouseholdState, as_of: datetime | None) -> PayoffBudget:
    return compute_payoff_budget(state, as_of.date() if as_of else None)


def _jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, tuple) and hasattr(obj, "_asdict"):
        return {k: _jsonable(v) for k, v in obj._asdict().items()}
    if isinstance(obj, dict):
        return {str(_jsonable(k)): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (date, datetime)):
        return obj.isoformat()
    if isinstance(obj, float) and math.isinf(obj):
        return None
    return obj


def _echo_json(obj: Any) -> None:
    click.echo(json.dumps(_jsonable(obj), indent=2))


def _summary(title: str, rows: list[tuple[str, str]]) -> Panel:
    """Two-column label/value block."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column()
    grid.add_column(justify="right")
    for label, value in rows:
        grid.add_row(label, value)
    return Panel(grid, title=title, expand=False)


# === tax ===


@click.command()
@_household_arg
@_json_opt
def tax(household: str, as_json: bool) -> None:
    """Federal and state tax breakdown for the household's income."""
    state = _load(household)
    result = calculate_income_tax(state.income)
    if as_json:
        _echo_json(result)
        return

    console = Console()
    table = Table(title=f"Federal brackets ({state.income.filing_status.label})")
    table.add_column("Rate", justify="right")
    table.add_column("Bracket")
    table.add_column("Taxable", justify="right")
    table.add_column("Tax", justify="right")
    for b in result.brackets:
        upper = "and up" if math.isinf(b.bracket.max) else f"to ${b.bracket.max:,.0f}"
        table.add_row(
            f"{b.bracket.rate:.0%}",
            f"${b.bracket.min:,.0f} {upper}",
            format_currency(b.taxable),
            format_currency(b.tax),
        )
    console.print(table)

    rows = [
        ("Gross income", format_currency(result.gross_income)),
        ("Taxable income", format_currency(result.taxable_income)),
        ("Federal tax", format_currency(result.total_federal_tax)),
        ("Child tax credit", format_currency(-result.child_tax_credit)),
        ("State tax", format_currency(result.state_tax)),
        ("Total tax", format_currency(result.total_tax)),
        ("Effective rate", format_percent(result.effective_rate)),
        ("Marginal federal rate", f"{result.marginal_rate:.0%}"),
        ("Net income", format_currency(result.net_income)),
    ]
    if state.income.monthly_commission > 0:
        rows += [
            ("Federal tax on base salary", format_currency(result.base_tax)),
            ("Federal tax on commission", format_currency(result.commission_tax)),
            ("State tax on base salary", format_currency(result.base_state_tax)),
            ("State tax on commission", format_currency(result.commission_state_tax)),
        ]
    console.print(_summary("Annual tax", rows))


@click.command("compare-filing")
@_household_arg
@_json_opt
def compare_filing(household: str, as_json: bool) -> None:
    """Total tax under each filing status."""
    income = _load(household).income
    rows = compare_filing_statuses(
        income.base_salary,
        income.monthly_commission,
        income.dependents,
        income.state_tax_rate,
        income.annual_business_income,
    )
    if as_json:
        _echo_json(rows)
        return

    table = Table(title="Filing status comparison", caption="* lowest total tax")
    for name in ("Status", "Federal", "State", "Total", "Effective"):
        table.add_column(name, justify="left" if name == "Status" else "right")
    for r in rows:
        table.add_row(
            f"{r.label} *" if r.is_best else r.label,
            format_currency(r.federal_tax),
            format_currency(r.state_tax),
            format_currency(r.total_tax),
            format_percent(r.effective_rate),
        )
    Console().print(table)


# === budget ===


@click.command()
@_household_arg
@_as_of_opt
@_json_opt
def budget(household: str, as_of: datetime | None, as_json: bool) -> None:
    """Monthly payoff budget after taxes, expenses and non-card minimums."""
    plan = _plan(_load(household), as_of)
    if as_json:
        _echo_json(plan)
        return

    rows = [
        ("Monthly net income", format_currency(plan.monthly_net)),
        ("Expenses", format_currency(-plan.total_expenses)),
        ("Non-card debt minimums", format_currency(-plan.non_cc_debt_minimums)),
        ("Calculated budget", format_currency(plan.calculated_budget)),
        ("Effective budget", format_currency(plan.effective_budget)),
    ]
    if plan.pay_delay_months:
        rows.append((f"Budget until pay starts ({plan.pay_delay_months} mo)", format_currency(plan.delay_budget)))
    Console().print(_summary("Payoff budget", rows))


# === payoff ===


@click.command()
@_household_arg
@_budget_opt
@click.option(
    "--strategy",
    type=click.Choice(["avalanche", "snowball", "compare"]),
    default="compare",
    show_default=True,
)
@click.option("--schedule", "show_schedule", is_flag=True, help="Print the month-by-month schedule.")
@_as_of_opt
@_json_opt
def payoff(
    household: str,
    monthly_budget: float | None,
    strategy: str,
    show_schedule: bool,
    as_of: datetime | None,
    as_json: bool,
) -> None:
    """Simulate debt payoff (avalanche, snowball, or both)."""
    state = _load(household)
    plan = _plan(state, as_of)
    if monthly_budget is None:
        monthly_budget = plan.effective_budget

    if strategy == "compare":
        comparison = compare_strategies(state.debts, monthly_budget, plan.pay_delay)
        results = [comparison.avalanche, comparison.snowball]
    else:
        results = [simulate_payoff(state.debts, monthly_budget, PayoffStrategy(strategy), plan.pay_delay)]

    if as_json:
        _echo_json(results)
        return

    console = Console()
    table = Table(title=f"Debt payoff at {format_currency(monthly_budget)}/mo")
    table.add_column("Strategy")
    table.add_column("Months", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("Total paid", justify="right")
    for result in results:
        months = str(result.total_months) if result.converged else f"{result.total_months}+ (never)"
        table.add_row(
            result.strategy.value.title(),
            months,
            format_currency(result.total_interest_paid),
            format_currency(result.total_paid),
        )
    console.print(table)
    if len(results) == 2:
        saved = results[1].total_interest_paid - results[0].total_interest_paid
        console.print(f"Avalanche saves {format_currency(saved)} in interest vs snowball")

    if not show_schedule:
        return
    start = as_of.date() if as_of else None
    for result in results:
        schedule = Table(title=f"{result.strategy.value.title()} schedule")
        schedule.add_column("Month")
        for debt in state.debts:
            schedule.add_column(debt.name, justify="right")
        schedule.add_column("Remaining", justify="right")
        for entry in result.schedule:
            schedule.add_row(
                format_month_label(entry.month, start),
                *(format_currency(p.payment) for p in entry.payments),
                format_currency(entry.total_remaining),
            )
        console.print(schedule)


# === lump-sum ===


@click.command("lump-sum")
@_household_arg
@click.option(
    "--cash",
    type=click.FloatRange(min=0),
    default=None,
    help="Cash to apply (defaults to the household's cash balances).",
)
@_budget_opt
@_as_of_opt
@_json_opt
def lump_sum(
    household: str,
    cash: float | None,
    monthly_budget: float | None,
    as_of: datetime | None,
    as_json: bool,
) -> None:
    """Put cash savings toward credit cards, or keep paying normally?"""
    state = _load(household)
    plan = _plan(state, as_of)
    if monthly_budget is None:
        monthly_budget = plan.effective_budget
    if cash is None:
        cash = state.total_cash
    analysis = analyze_lump_sum(state.debts, cash, monthly_budget, plan.pay_delay)

    if as_json:
        _echo_json(analysis)
        return
    if analysis is None:
        click.echo("Nothing to compare: needs cash, credit card debt and a positive budget.")
        return

    console = Console()
    cards = Table(title=f"Applying {format_currency(analysis.lump_sum)} to credit cards")
    for name in ("Card", "Balance", "APR", "Utilization", "Applied"):
        cards.add_column(name, justify="left" if name == "Card" else "right")
    applied = {a.account_id: a.applied for a in analysis.allocations}
    card_debts = [d for d in state.debts if d.id in analysis.normal.final_balances]
    for card in sorted(card_debts, key=lambda d: -d.interest_rate):
        cards.add_row(
            card.name,
            format_currency(card.balance),
            format_percent(card.interest_rate, 2),
            f"{card.utilization:.0%}" if card.credit_limit > 0 else "-",
            format_currency(applied.get(card.id, 0.0)),
        )
    console.print(cards)

    table = Table(title=f"Avalanche payoff at {format_currency(monthly_budget)}/mo")
    for name in ("Scenario", "Months", "Interest", "Total paid"):
        table.add_column(name, justify="left" if name == "Scenario" else "right")
    for label, result in (("Pay normally", analysis.normal), ("Lump sum first", analysis.with_lump_sum)):
        table.add_row(
            label,
            str(result.total_months) if result.converged else f"{result.total_months}+ (never)",
            format_currency(result.total_interest_paid),
            format_currency(result.total_paid),
        )
    console.print(table)
    console.print(
        f"Lump sum saves {analysis.months_saved} months and {format_currency(analysis.interest_saved)} in interest"
    )


# === frequency ===


@click.command()
@_household_arg
@_budget_opt
@click.option(
    "--mode",
    type=click.Choice([m.value for m in FrequencyMode]),
    default=FrequencyMode.SAME_ANNUAL.value,
    show_default=True,
)
@click.option("--strategy", type=click.Choice(["avalanche", "snowball"]), default="avalanche", show_default=True)
@click.option("--per-debt", is_flag=True, help="Also show which debts benefit from paying more often.")
@_json_opt
def frequency(
    household: str,
    monthly_budget: float | None,
    mode: str,
    strategy: str,
    per_debt: bool,
    as_json: bool,
) -> None:
    """Compare monthly, biweekly and weekly payments."""
    state = _load(household)
    if monthly_budget is None:
        monthly_budget = compute_payoff_budget(state).effective_budget
    rows = compare_payment_frequencies(state.debts, monthly_budget, PayoffStrategy(strategy), FrequencyMode(mode))
    breakdown = analyze_per_debt_frequency(list(state.accounts)) if per_debt else []

    if as_json:
        _echo_json({"frequencies": rows, "per_debt": breakdown})
        return

    console = Console()
    table = Table(title=f"Payment frequency ({mode})")
    for name in ("Frequency", "Payment", "Per year", "Months", "Interest", "Saved"):
        table.add_column(name, justify="left" if name == "Frequency" else "right")
    for r in rows:
        table.add_row(
            r.frequency.value,
            format_currency(r.payment_amount),
            format_currency(r.annual_total),
            str(r.months_to_payoff) if r.converged else f"{r.months_to_payoff}+",
            format_currency(r.total_interest),
            format_currency(r.saved_vs_monthly),
        )
    console.print(table)

    if breakdown:
        debts = Table(title="Per-debt frequency")
        for name in ("Debt", "Compounding", "Weekly saves", "Recommendation"):
            debts.add_column(name, justify="right" if name == "Weekly saves" else "left")
        for d in breakdown:
            debts.add_row(d.account_name, d.compounding_type.label, format_currency(d.weekly_savings), d.recommendation)
        console.print(debts)


# === house ===


@click.command()
@_household_arg
@click.option("--down-payment", type=click.FloatRange(min=0), default=None, help="Gift/down payment amount.")
@click.option("--rate", type=click.FloatRange(min=0), default=None, help="Mortgage rate in percent.")
@click.option("--term", type=click.Choice(["15", "30"]), default=None, help="Loan term in years.")
@_json_opt
def house(household: str, down_payment: float | None, rate: float | None, term: str | None, as_json: bool) -> None:
    """Maximum affordable home price under 28/36 DTI limits."""
    state = _load(household)
    overrides: dict[str, Any] = {}
    if down_payment is not None:
        overrides["gift_down_payment"] = down_payment
    if rate is not None:
        overrides["mortgage_rate"] = rate
    if term is not None:
        overrides["loan_term_years"] = int(term)
    inputs = dataclasses.replace(_house_inputs(_settings()), **overrides)

    gross = state.income.gross_monthly_income
    debt_payments = sum(d.minimum_payment for d in state.debts)
    result = calculate_affordability(gross, debt_payments, inputs)
    impacts = calculate_debt_payoff_impact(gross, state.debts, inputs)

    if as_json:
        _echo_json({"affordability": result, "debt_payoff_impact": impacts})
        return

    console = Console()
    console.print(
        _summary(
            "House affordability",
            [
                ("Max home price", format_currency(result.max_home_price)),
                ("Limited by", result.limiting_factor.replace("_", "-")),
                ("Down payment", format_currency(result.down_payment)),
                ("Loan amount", format_currency(result.loan_amount)),
                ("Principal & interest", format_currency(result.monthly_pi)),
                ("Property tax", format_currency(result.monthly_tax)),
                ("Insurance", format_currency(result.monthly_insurance)),
                ("PMI", format_currency(result.monthly_pmi)),
                ("Total monthly housing", format_currency(result.total_monthly_housing)),
                ("Front-end DTI", format_percent(result.front_end_dti)),
                ("Back-end DTI", format_percent(result.back_end_dti)),
            ],
        )
    )
    if impacts:
        table = Table(title="Paying off one debt")
        for name in ("Debt", "Payment", "DTI drop", "Price increase"):
            table.add_column(name, justify="left" if name == "Debt" else "right")
        for i in impacts:
            table.add_row(
                i.debt_name,
                format_currency(i.monthly_payment),
                format_percent(i.dti_drop),
                format_currency(i.max_home_price_increase),
            )
        console.print(table)


# === roadmap ===


@click.command()
@_household_arg
@click.option("--emergency-target", type=click.FloatRange(min=0), default=None, help="Emergency fund target.")
@_budget_opt
@_as_of_opt
@_json_opt
def roadmap(
    household: str,
    emergency_target: float | None,
    monthly_budget: float | None,
    as_of: datetime | None,
    as_json: bool,
) -> None:
    """Five-phase wealth-building roadmap."""
    settings = _settings()
    state = _load(household)
    plan = _plan(state, as_of)
    if monthly_budget is None:
        monthly_budget = plan.effective_budget

    assumptions = RoadmapAssumptions(
        emergency_fund_months=settings.roadmap.emergency_fund_months,
        investment_return=settings.roadmap.investment_return,
        house=_house_inputs(settings),
    )
    result = calculate_roadmap(
        state.income,
        list(state.accounts),
        plan.total_expenses,
        monthly_budget,
        emergency_target=emergency_target,
        pay_delay=plan.pay_delay,
        assumptions=assumptions,
    )
    allocation = get_recommended_allocation(result.current_phase, monthly_budget)

    if as_json:
        _echo_json({"roadmap": result, "allocation": allocation})
        return

    console = Console()
    console.print(
        f"Starting from {format_compact_currency(state.total_cash)} cash, "
        f"{format_compact_currency(state.total_investments)} invested, "
        f"{format_compact_currency(state.total_debt)} debt"
    )
    table = Table(title="Financial roadmap")
    for name in ("Phase", "Status", "Months", "Monthly", "Details"):
        table.add_column(name, justify="right" if name in ("Months", "Monthly") else "left")
    for p in result.phases:
        table.add_row(
            f"{p.id}. {p.name}",
            p.status.value,
            str(p.estimated_months),
            format_currency(p.monthly_allocation),
            p.details,
        )
    console.print(table)

    console.print(
        _summary(
            f"Recommended split for phase {allocation.phase}",
            [(f"{a.label} ({a.percentage:.0f}%)", format_currency(a.amount)) for a in allocation.allocations],
        )
    )
    if result.projections:
        final = result.projections[-1]
        console.print(f"Projected net worth in {final.month // 12} years: {format_compact_currency(final.net_worth)}")


# === withdraw ===


@click.command()
@_household_arg
@click.option("--balance", "balance_401k", type=click.FloatRange(min=0), required=True, help="Current 401(k) balance.")
@click.option("--amount", type=click.FloatRange(min=0), required=True, help="Amount to withdraw.")
@click.option("--expected-return", type=click.FloatRange(min=0), default=None, help="Annual return in percent.")
@_budget_opt
@_json_opt
def withdraw(
    household: str,
    balance_401k: float,
    amount: float,
    expected_return: float | None,
    monthly_budget: float | None,
    as_json: bool,
) -> None:
    """Should you raid the 401(k) to pay off debt?"""
    settings = _settings()
    state = _load(household)
    if monthly_budget is None:
        monthly_budget = compute_payoff_budget(state).effective_budget
    inputs = WithdrawalInputs(
        balance_401k=balance_401k,
        expected_return=settings.withdrawal.expected_return if expected_return is None else expected_return,
        withdrawal_amount=amount,
        penalty_rate=settings.withdrawal.early_withdrawal_penalty,
    )
    result = analyze_withdrawal(state.debts, monthly_budget, state.income, inputs)

    if as_json:
        _echo_json(result)
        return

    console = Console()
    table = Table(title=f"401(k) withdrawal over {result.time_horizon_months} months")
    for name in ("Scenario", "Debt interest", "Penalty", "Extra tax", "Lost growth", "Total cost"):
        table.add_column(name, justify="left" if name == "Scenario" else "right")
    for s in (result.keep_scenario, result.withdraw_scenario):
        table.add_row(
            s.label,
            format_currency(s.total_debt_interest),
            format_currency(s.penalty),
            format_currency(s.extra_taxes),
            format_currency(s.lost_growth),
            format_currency(s.total_cost),
        )
    console.print(table)
    console.print(f"Better: {result.winner} (saves {format_currency(result.savings)})")
