"""Early 401(k) withdrawal vs. paying debt at the normal pace.

Keep: the retirement balance grows untouched while debts are paid off
(avalanche) with the monthly budget.

Withdraw: take money out now, lose the early-withdrawal penalty and the
extra income tax it triggers, put the rest on the highest-APR debts, then
pay the remainder off. The smaller retirement balance compounds from there.

Both scenarios are valued over the longer of the two payoff horizons so the
lost growth is measured over the same period.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from loguru import logger

from ..models import Account, IncomeState
from .payoff import PayoffStrategy, apply_lump_sum, simulate_payoff
from .tax import calculate_tax_breakdown
from .tax_tables import EARLY_WITHDRAWAL_PENALTY_RATE


@dataclass(frozen=True)
class WithdrawalInputs:
    balance_401k: float
    expected_return: float  # annual percent
    withdrawal_amount: float
    penalty_rate: float = EARLY_WITHDRAWAL_PENALTY_RATE  # percent


@dataclass
class WithdrawalScenario:
    label: str
    total_debt_interest: float
    penalty: float
    extra_taxes: float
    lost_growth: float
    total_cost: float
    months_to_payoff: int
    ending_401k: float


@dataclass
class WithdrawalAnalysisResult:
    keep_scenario: WithdrawalScenario
    withdraw_scenario: WithdrawalScenario
    winner: Literal["keep", "withdraw"]
    savings: float
    time_horizon_months: int


def _grow(balance: float, annual_return_percent: float, months: int) -> float:
    return balance * (1 + annual_return_percent / 100) ** (months / 12)


def withdrawal_tax_cost(income: IncomeState, withdrawal: float) -> float:
    """Extra income tax from adding ``withdrawal`` to this year's salary."""
    without = calculate_tax_breakdown(
        income.base_salary,
        income.monthly_commission,
        income.dependents,
        income.state_tax_rate,
        income.filing_status,
    )
    with_withdrawal = calculate_tax_breakdown(
        income.base_salary + withdrawal,
        income.monthly_commission,
        income.dependents,
        income.state_tax_rate,
        income.filing_status,
    )
    return with_withdrawal.total_tax - without.total_tax


def analyze_withdrawal(
    debts: list[Account],
    monthly_budget: float,
    income: IncomeState,
    inputs: WithdrawalInputs,
) -> WithdrawalAnalysisResult:
    """Compare keeping the 401(k) against withdrawing to pay debt.

    Args:
        debts: Debt accounts (untouched)
        monthly_budget: Monthly debt budget used in both scenarios
        income: Household income, for the marginal tax on the withdrawal
        inputs: Retirement balance, expected return, withdrawal amount

    Returns:
        Both scenarios and the cheaper one; ties go to keeping the money
    """
    # --- Scenario A: Keep 401k, pay debts normally ---
    keep_payoff = simulate_payoff(debts, monthly_budget, PayoffStrategy.AVALANCHE)
    keep_months = keep_payoff.total_months
    keep_interest = keep_payoff.total_interest_paid

    keep_scenario = WithdrawalScenario(
        label="Keep 401k",
        total_debt_interest=keep_interest,
        penalty=0.0,
        extra_taxes=0.0,
        lost_growth=0.0,
        total_cost=keep_interest,
        months_to_payoff=keep_months,
        ending_401k=_grow(inputs.balance_401k, inputs.expected_return, keep_months),
    )

    # --- Scenario B: Withdraw from 401k ---
    withdrawal = min(inputs.withdrawal_amount, inputs.balance_401k)
    penalty = withdrawal * inputs.penalty_rate / 100
    extra_taxes = withdrawal_tax_cost(income, withdrawal)
    net_proceeds = withdrawal - penalty - extra_taxes

    remaining_debts = apply_lump_sum(debts, net_proceeds)
    withdraw_payoff = simulate_payoff(remaining_debts, monthly_budget, PayoffStrategy.AVALANCHE)
    withdraw_months = withdraw_payoff.total_months
    withdraw_interest = withdraw_payoff.total_interest_paid

    horizon = max(keep_months, withdraw_months)
    withdraw_ending = _grow(inputs.balance_401k - withdrawal, inputs.expected_return, horizon)
    lost_growth = _grow(inputs.balance_401k, inputs.expected_return, horizon) - withdraw_ending

    withdraw_scenario = WithdrawalScenario(
        label="Withdraw from 401k",
        total_debt_interest=withdraw_interest,
        penalty=penalty,
        extra_taxes=extra_taxes,
        lost_growth=lost_growth,
        total_cost=withdraw_interest + penalty + extra_taxes + lost_growth,
        months_to_payoff=withdraw_months,
        ending_401k=withdraw_ending,
    )

    winner: Literal["keep", "withdraw"] = (
        "keep" if keep_scenario.total_cost <= withdraw_scenario.total_cost else "withdraw"
    )
    logger.debug(
        f"Withdrawal analysis: keep ${keep_scenario.total_cost:,.2f} vs "
        f"withdraw ${withdraw_scenario.total_cost:,.2f} over {horizon} months -> {winner}"
    )

    return WithdrawalAnalysisResult(
        keep_scenario=keep_scenario,
        withdraw_scenario=withdraw_scenario,
        winner=winner,
        savings=abs(keep_scenario.total_cost - withdraw_scenario.total_cost),
        time_horizon_months=horizon,
    )
