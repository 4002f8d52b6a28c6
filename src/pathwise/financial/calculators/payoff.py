"""Multi-debt payoff simulator: avalanche vs snowball.

Each simulated month:
1. Pick the budget (reduced delay budget during a pay-delay window).
2. Accrue interest on every open debt with its own compounding model.
3. Pay minimums in input order, never exceeding the remaining budget.
4. Send what is left to debts in strategy order (avalanche: highest APR
   first; snowball: lowest balance first).
5. Record payments, remaining balances and cumulative interest.

Simulations stop when everything is paid (<= $0.01 total) or at the
600-month cap. A run that hits the cap did not converge; the result says so
through ``PayoffResult.converged`` rather than being discarded.

Balances are copied into a local list per run. Caller-owned ``Account``
records are never modified; helpers that need new balances return new
records.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from loguru import logger

from ..models import Account
from .interest import DAYS_PER_MONTH, calculate_period_interest

MAX_PAYOFF_MONTHS = 600  # ~50 years
PAID_OFF_THRESHOLD = 0.01


class PayoffStrategy(Enum):
    """Order in which extra budget is applied to debts."""

    AVALANCHE = "avalanche"  # highest interest rate first
    SNOWBALL = "snowball"  # lowest balance first


@dataclass
class AccountPayment:
    account_id: str
    account_name: str
    payment: float
    remaining: float


@dataclass
class PayoffScheduleEntry:
    """One simulated month."""

    month: int
    payments: list[AccountPayment]
    total_remaining: float
    total_interest: float  # cumulative to date


@dataclass
class PayoffResult:
    """Complete output of one simulation run.

    ``final_balances`` maps account id to balance after the last simulated
    month, so callers can thread balances into a later phase.
    """

    strategy: PayoffStrategy
    schedule: list[PayoffScheduleEntry] = field(default_factory=list)
    total_months: int = 0
    total_interest_paid: float = 0.0
    total_paid: float = 0.0
    final_balances: dict[str, float] = field(default_factory=dict)
    converged: bool = True

    @property
    def final_remaining(self) -> float:
        return sum(self.final_balances.values())


@dataclass(frozen=True)
class PayDelay:
    """Window before regular pay starts."""

    months: int  # months with the reduced budget
    delay_budget: float  # budget during the delay (e.g. business + tax-free only)


@dataclass
class StrategyComparison:
    avalanche: PayoffResult
    snowball: PayoffResult

    @property
    def interest_savings(self) -> float:
        """Interest avalanche saves over snowball (negative if it costs more)."""
        return self.snowball.total_interest_paid - self.avalanche.total_interest_paid

    @property
    def months_difference(self) -> int:
        return self.snowball.total_months - self.avalanche.total_months


# === Per-period building blocks (shared with the frequency analyzer) ===


def accrue_interest(debts: list[Account], balances: list[float], days: float) -> float:
    """Add one period of interest to ``balances`` in place; return the total accrued."""
    accrued = 0.0
    for i, debt in enumerate(debts):
        bal = balances[i]
        if bal <= 0:
            continue
        interest = calculate_period_interest(bal, debt.interest_rate, debt.compounding_type, days)
        balances[i] = bal + interest
        accrued += interest
    return accrued


def pay_minimums(
    debts: list[Account],
    balances: list[float],
    budget: float,
    paid: list[float],
    min_scale: float = 1.0,
) -> float:
    """Pay each open debt's (scaled) minimum in input order.

    Each payment is capped by the balance and by what is left of the budget.
    Returns the unspent budget.
    """
    remaining = max(0.0, budget)
    for i, debt in enumerate(debts):
        bal = balances[i]
        if bal <= 0:
            continue
        payment = min(debt.minimum_payment * min_scale, bal, remaining)
        balances[i] = bal - payment
        paid[i] += payment
        remaining -= payment
    return remaining


def priority_order(debts: list[Account], balances: list[float], strategy: PayoffStrategy) -> list[int]:
    """Indices of open debts in the order extra money should go.

    Ties keep input order.
    """
    active = [i for i in range(len(debts)) if balances[i] > PAID_OFF_THRESHOLD]
    if strategy is PayoffStrategy.AVALANCHE:
        active.sort(key=lambda i: -debts[i].interest_rate)
    elif strategy is PayoffStrategy.SNOWBALL:
        active.sort(key=lambda i: balances[i])
    else:
        raise ValueError(f"Unknown payoff strategy: {strategy!r}")
    return active


def allocate_extra(
    debts: list[Account],
    balances: list[float],
    budget: float,
    strategy: PayoffStrategy,
    paid: list[float],
) -> float:
    """Apply leftover budget to debts in strategy order; return what is unspent."""
    remaining = budget
    for i in priority_order(debts, balances, strategy):
        if remaining <= 0:
            break
        extra = min(remaining, balances[i])
        balances[i] -= extra
        paid[i] += extra
        remaining -= extra
    return remaining


def all_paid_off(balances: list[float]) -> bool:
    return all(b <= PAID_OFF_THRESHOLD for b in balances)


# === Simulation ===


def simulate_payoff(
    debts: list[Account],
    monthly_budget: float,
    strategy: PayoffStrategy = PayoffStrategy.AVALANCHE,
    pay_delay: PayDelay | None = None,
    max_months: int = MAX_PAYOFF_MONTHS,
) -> PayoffResult:
    """Simulate paying off ``debts`` month by month.

    Args:
        debts: Debt accounts; their balances are read, never written
        monthly_budget: Total monthly amount for debts, minimums included
        strategy: Where extra money goes after minimums
        pay_delay: Optional reduced-budget window at the start
        max_months: Iteration cap; reaching it means non-convergence

    Returns:
        PayoffResult. A non-positive budget with no usable delay budget
        returns an empty result immediately.
    """
    delay_months = pay_delay.months if pay_delay else 0
    delay_budget = pay_delay.delay_budget if pay_delay else 0.0
    balances = [d.balance for d in debts]

    if not debts or (monthly_budget <= 0 and delay_budget <= 0):
        return PayoffResult(
            strategy=strategy,
            final_balances={d.id: d.balance for d in debts},
            converged=all_paid_off(balances),
        )

    schedule: list[PayoffScheduleEntry] = []
    total_interest = 0.0
    total_paid = 0.0

    for month in range(1, max_months + 1):
        if sum(balances) <= PAID_OFF_THRESHOLD:
            break

        budget = delay_budget if month <= delay_months else monthly_budget
        total_interest += accrue_interest(debts, balances, DAYS_PER_MONTH)

        paid = [0.0] * len(debts)
        leftover = pay_minimums(debts, balances, budget, paid)
        allocate_extra(debts, balances, leftover, strategy, paid)

        payments = [
            AccountPayment(account_id=d.id, account_name=d.name, payment=paid[i], remaining=max(0.0, balances[i]))
            for i, d in enumerate(debts)
        ]
        total_paid += sum(paid)
        schedule.append(
            PayoffScheduleEntry(
                month=month,
                payments=payments,
                total_remaining=max(0.0, sum(balances)),
                total_interest=total_interest,
            )
        )

        if all_paid_off(balances):
            break

    converged = all_paid_off(balances)
    if not converged:
        logger.warning(
            f"{strategy.value} payoff did not converge within {max_months} months; "
            f"${sum(balances):,.2f} still owed"
        )
    logger.debug(
        f"{strategy.value} payoff: {len(schedule)} months, interest ${total_interest:,.2f}, paid ${total_paid:,.2f}"
    )

    return PayoffResult(
        strategy=strategy,
        schedule=schedule,
        total_months=len(schedule),
        total_interest_paid=total_interest,
        total_paid=total_paid,
        final_balances={d.id: max(0.0, balances[i]) for i, d in enumerate(debts)},
        converged=converged,
    )


def compare_strategies(
    debts: list[Account],
    monthly_budget: float,
    pay_delay: PayDelay | None = None,
) -> StrategyComparison:
    """Run avalanche and snowball on identical inputs."""
    return StrategyComparison(
        avalanche=simulate_payoff(debts, monthly_budget, PayoffStrategy.AVALANCHE, pay_delay),
        snowball=simulate_payoff(debts, monthly_budget, PayoffStrategy.SNOWBALL, pay_delay),
    )


def _split_lump_sum(debts: list[Account], amount: float) -> list[tuple[Account, float]]:
    """(debt, amount applied) pairs, highest APR first."""
    remaining = max(0.0, amount)
    split = []
    for debt in sorted(debts, key=lambda d: -d.interest_rate):
        applied = min(remaining, debt.balance)
        remaining -= applied
        split.append((debt, applied))
    return split


def apply_lump_sum(debts: list[Account], amount: float) -> list[Account]:
    """Pay ``amount`` toward debts, highest APR first.

    Returns new records for debts that still owe more than $0.01, in APR
    order; fully paid debts are dropped. The inputs are untouched.
    """
    return [
        replace(debt, balance=debt.balance - applied)
        for debt, applied in _split_lump_sum(debts, amount)
        if debt.balance - applied > PAID_OFF_THRESHOLD
    ]


# === Cash lump sum toward credit cards ===


@dataclass
class LumpSumAllocation:
    account_id: str
    account_name: str
    applied: float


@dataclass
class LumpSumAnalysis:
    """Avalanche payoff of credit cards with and without a cash lump sum up front."""

    lump_sum: float
    normal: PayoffResult
    with_lump_sum: PayoffResult
    months_saved: int
    interest_saved: float
    allocations: list[LumpSumAllocation] = field(default_factory=list)


def analyze_lump_sum(
    debts: list[Account],
    cash: float,
    monthly_budget: float,
    pay_delay: PayDelay | None = None,
) -> LumpSumAnalysis | None:
    """Compare paying credit cards normally against first applying ``cash`` to them.

    Only open credit-card debts are considered. The lump sum is capped at
    their total balance and goes to the highest APR first. Returns None when
    there is no cash, no card debt, or no positive budget.
    """
    cards = [d for d in debts if d.is_credit_card and d.balance > 0]
    if cash <= 0 or not cards or monthly_budget <= 0:
        return None

    lump_sum = min(cash, sum(d.balance for d in cards))
    split = _split_lump_sum(cards, lump_sum)
    normal = simulate_payoff(cards, monthly_budget, PayoffStrategy.AVALANCHE, pay_delay)
    with_lump_sum = simulate_payoff(
        apply_lump_sum(cards, lump_sum), monthly_budget, PayoffStrategy.AVALANCHE, pay_delay
    )

    analysis = LumpSumAnalysis(
        lump_sum=lump_sum,
        normal=normal,
        with_lump_sum=with_lump_sum,
        months_saved=normal.total_months - with_lump_sum.total_months,
        interest_saved=normal.total_interest_paid - with_lump_sum.total_interest_paid,
        allocations=[
            LumpSumAllocation(account_id=d.id, account_name=d.name, applied=applied)
            for d, applied in split
            if applied > 0
        ],
    )
    logger.debug(
        f"Lump sum ${lump_sum:,.2f}: saves {analysis.months_saved} months, ${analysis.interest_saved:,.2f} interest"
    )
    return analysis
