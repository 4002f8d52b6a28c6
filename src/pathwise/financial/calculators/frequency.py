"""Payment-frequency analysis: monthly vs biweekly vs weekly.

Two comparison modes for the whole debt set:
- SAME_ANNUAL: one annual budget split into 12/26/52 payments, isolating
  the effect of paying more often.
- BIWEEKLY_EXTRA: half (biweekly) or a quarter (weekly) of the monthly
  amount, which adds up to 13 monthly payments a year, so frequency and
  extra principal are measured together.

Minimum payments scale linearly with period length (days / 30.44).

A per-debt breakdown simulates each debt alone to show which debts are
worth paying more often. Monthly-compounding debts never benefit: their
interest is charged monthly whatever the payment cadence.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from ..models import Account, CompoundingType
from .interest import DAYS_PER_MONTH, calculate_monthly_interest, calculate_period_interest
from .payoff import (
    MAX_PAYOFF_MONTHS,
    PAID_OFF_THRESHOLD,
    PayoffStrategy,
    accrue_interest,
    all_paid_off,
    allocate_extra,
    pay_minimums,
)

# Per-debt analysis
MIN_REFERENCE_BUDGET = 50.0
MIN_MEANINGFUL_SAVINGS = 5.0
MEANINGFUL_SAVINGS_FRACTION = 0.01


class PaymentFrequency(Enum):
    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    WEEKLY = "weekly"

    @property
    def days(self) -> float:
        return {
            PaymentFrequency.MONTHLY: DAYS_PER_MONTH,
            PaymentFrequency.BIWEEKLY: 14,
            PaymentFrequency.WEEKLY: 7,
        }[self]

    @property
    def periods_per_year(self) -> int:
        return {
            PaymentFrequency.MONTHLY: 12,
            PaymentFrequency.BIWEEKLY: 26,
            PaymentFrequency.WEEKLY: 52,
        }[self]

    @property
    def max_periods(self) -> int:
        """Whole periods that fit in the 600-month payoff cap (monthly 600, biweekly 1304, weekly 2609)."""
        return math.floor(round(MAX_PAYOFF_MONTHS * DAYS_PER_MONTH / self.days, 9))

    @property
    def min_payment_scale(self) -> float:
        return self.days / DAYS_PER_MONTH


class FrequencyMode(Enum):
    SAME_ANNUAL = "same_annual"
    BIWEEKLY_EXTRA = "biweekly_extra"


@dataclass
class FrequencySimulation:
    total_periods: int
    total_interest: float
    converged: bool = True


@dataclass
class FrequencyResult:
    frequency: PaymentFrequency
    payment_amount: float  # per period
    annual_total: float
    months_to_payoff: int
    total_interest: float
    saved_vs_monthly: float = 0.0
    converged: bool = True


@dataclass
class DebtFrequencyBreakdown:
    account_id: str
    account_name: str
    compounding_type: CompoundingType
    balance: float
    interest_rate: float
    minimum_payment: float
    benefits_from_frequency: bool
    weekly_savings: float  # vs monthly, same annual budget
    biweekly_savings: float
    monthly_interest_cost: float  # one month of interest at today's balance
    recommendation: str


def simulate_payoff_with_frequency(
    debts: list[Account],
    period_budget: float,
    frequency: PaymentFrequency,
    strategy: PayoffStrategy = PayoffStrategy.AVALANCHE,
) -> FrequencySimulation:
    """Multi-debt payoff paying ``period_budget`` every period."""
    if not debts or period_budget <= 0:
        return FrequencySimulation(total_periods=0, total_interest=0.0)

    balances = [d.balance for d in debts]
    paid = [0.0] * len(debts)
    days = frequency.days
    scale = frequency.min_payment_scale
    total_interest = 0.0
    periods = 0

    while periods < frequency.max_periods and not all_paid_off(balances):
        periods += 1
        total_interest += accrue_interest(debts, balances, days)
        leftover = pay_minimums(debts, balances, period_budget, paid, min_scale=scale)
        allocate_extra(debts, balances, leftover, strategy, paid)

    converged = all_paid_off(balances)
    if not converged:
        logger.warning(f"{frequency.value} payoff did not converge within {frequency.max_periods} periods")
    return FrequencySimulation(total_periods=periods, total_interest=total_interest, converged=converged)


def _period_budget(monthly_budget: float, frequency: PaymentFrequency, mode: FrequencyMode) -> tuple[float, float]:
    """(per-period payment, annual total) for a frequency under a mode."""
    if mode is FrequencyMode.SAME_ANNUAL:
        annual = monthly_budget * 12
        return annual / frequency.periods_per_year, annual
    if mode is FrequencyMode.BIWEEKLY_EXTRA:
        per_period = {
            PaymentFrequency.MONTHLY: monthly_budget,
            PaymentFrequency.BIWEEKLY: monthly_budget / 2,
            PaymentFrequency.WEEKLY: monthly_budget / 4,
        }[frequency]
        return per_period, per_period * frequency.periods_per_year
    raise ValueError(f"Unknown frequency mode: {mode!r}")


def compare_payment_frequencies(
    debts: list[Account],
    monthly_budget: float,
    strategy: PayoffStrategy = PayoffStrategy.AVALANCHE,
    mode: FrequencyMode = FrequencyMode.SAME_ANNUAL,
) -> list[FrequencyResult]:
    """Compare monthly, biweekly and weekly payment of the same debts.

    Returns one row per frequency (monthly first) with interest saved
    relative to paying monthly.
    """
    results = []
    for frequency in PaymentFrequency:
        payment, annual_total = _period_budget(monthly_budget, frequency, mode)
        sim = simulate_payoff_with_frequency(debts, payment, frequency, strategy)
        months = sim.total_periods * frequency.days / DAYS_PER_MONTH
        results.append(
            FrequencyResult(
                frequency=frequency,
                payment_amount=payment,
                annual_total=annual_total,
                months_to_payoff=math.ceil(round(months, 9)),
                total_interest=sim.total_interest,
                converged=sim.converged,
            )
        )

    monthly_interest = results[0].total_interest
    for r in results:
        r.saved_vs_monthly = monthly_interest - r.total_interest
    return results


def simulate_single_debt_frequency(
    debt: Account,
    period_budget: float,
    frequency: PaymentFrequency,
) -> FrequencySimulation:
    """One debt alone, paying max(period budget, scaled minimum) each period."""
    if debt.balance <= 0 or period_budget <= 0:
        return FrequencySimulation(total_periods=0, total_interest=0.0)

    balance = debt.balance
    days = frequency.days
    scaled_min = debt.minimum_payment * frequency.min_payment_scale
    total_interest = 0.0
    periods = 0

    while periods < frequency.max_periods and balance > PAID_OFF_THRESHOLD:
        periods += 1
        interest = calculate_period_interest(balance, debt.interest_rate, debt.compounding_type, days)
        balance += interest
        total_interest += interest
        balance -= min(max(period_budget, scaled_min), balance)

    return FrequencySimulation(
        total_periods=periods, total_interest=total_interest, converged=balance <= PAID_OFF_THRESHOLD
    )


def _recommendation(compounding: CompoundingType, weekly_savings: float, threshold: float) -> str:
    if compounding is CompoundingType.DAILY_COMPOUND:
        if weekly_savings > 50:
            size = "significant" if weekly_savings > 100 else "meaningful"
            return f"Pay weekly or biweekly: saves {size} interest by reducing daily compounding balance"
        if weekly_savings > threshold:
            return "Pay biweekly if possible: small but real savings on daily compound interest"
        return "Low balance/rate: frequency has minimal impact"
    if compounding is CompoundingType.DAILY_SIMPLE:
        if weekly_savings > threshold:
            return "Pay biweekly if possible: reduces average daily balance for simple interest"
        return "Low balance/rate: frequency has minimal impact"
    return "Monthly payment is fine; interest is calculated monthly, so payment frequency doesn't affect interest"


def analyze_debt_frequency(debt: Account) -> DebtFrequencyBreakdown:
    """Per-debt frequency breakdown using the debt's own minimum as the budget."""
    annual_budget = max(debt.minimum_payment, MIN_REFERENCE_BUDGET) * 12

    sims = {
        frequency: simulate_single_debt_frequency(debt, annual_budget / frequency.periods_per_year, frequency)
        for frequency in PaymentFrequency
    }
    monthly_interest = sims[PaymentFrequency.MONTHLY].total_interest
    biweekly_savings = monthly_interest - sims[PaymentFrequency.BIWEEKLY].total_interest
    weekly_savings = monthly_interest - sims[PaymentFrequency.WEEKLY].total_interest

    threshold = max(MIN_MEANINGFUL_SAVINGS, monthly_interest * MEANINGFUL_SAVINGS_FRACTION)
    benefits = debt.compounding_type is not CompoundingType.MONTHLY and weekly_savings > threshold

    return DebtFrequencyBreakdown(
        account_id=debt.id,
        account_name=debt.name,
        compounding_type=debt.compounding_type,
        balance=debt.balance,
        interest_rate=debt.interest_rate,
        minimum_payment=debt.minimum_payment,
        benefits_from_frequency=benefits,
        weekly_savings=weekly_savings,
        biweekly_savings=biweekly_savings,
        monthly_interest_cost=calculate_monthly_interest(debt.balance, debt.interest_rate, debt.compounding_type),
        recommendation=_recommendation(debt.compounding_type, weekly_savings, threshold),
    )


def analyze_per_debt_frequency(accounts: list[Account]) -> list[DebtFrequencyBreakdown]:
    """Breakdown for every open debt; benefiting debts first, then by weekly savings."""
    rows = [analyze_debt_frequency(a) for a in accounts if a.is_debt and a.balance > 0]
    rows.sort(key=lambda r: (not r.benefits_from_frequency, -r.weekly_savings))
    return rows
