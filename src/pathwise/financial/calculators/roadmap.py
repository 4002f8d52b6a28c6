"""Five-phase wealth-building roadmap.

Phases run back to back, each feeding its ending state into the next:

1. Kill credit card debt: full budget, avalanche.
2. Emergency fund: 70% of budget to savings until the target is reached;
   the other 30% stands for minimum debt payments (display only).
3. Invest & prepare for house: 24 months, 50% of budget invested.
4. Build house: 12 months, affordability result shown, simplified equity.
5. Financial freedom: 30-year projection, sampled yearly.

If regular pay has not started yet, a pay-delay window is simulated first:
interest accrues on every debt and only the delay budget pays minimums.
The balances it ends with are passed forward as new ``Account`` records.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum

from loguru import logger

from ..models import Account, AccountType, IncomeState
from .interest import DAYS_PER_MONTH
from .mortgage import HouseInputs, calculate_affordability
from .payoff import PAID_OFF_THRESHOLD, PayDelay, PayoffStrategy, accrue_interest, pay_minimums, simulate_payoff

EMERGENCY_FUND_SHARE = 0.70
INVESTMENT_SHARE = 0.50
FREEDOM_SHARE = 0.60
HOUSE_EQUITY_FRACTION = 0.10

INVESTMENT_PHASE_MONTHS = 24
BUILD_HOUSE_MONTHS = 12
PROJECTION_YEARS = 30
MILESTONE_YEARS = (5, 10, 20, 30)


class PhaseStatus(Enum):
    COMPLETED = "completed"
    ACTIVE = "active"
    UPCOMING = "upcoming"


@dataclass
class PhaseInfo:
    id: int
    name: str
    description: str
    status: PhaseStatus
    progress: float  # 0-100
    estimated_months: int
    monthly_allocation: float
    details: str


@dataclass
class ProjectionPoint:
    month: int
    debt: float
    emergency_fund: float
    investments: float
    net_worth: float
    phase: int  # 0 = pay-delay window


@dataclass
class RoadmapResult:
    phases: list[PhaseInfo] = field(default_factory=list)
    projections: list[ProjectionPoint] = field(default_factory=list)
    current_phase: int = 1
    debt_converged: bool = True  # False if credit card payoff hit the iteration cap


@dataclass(frozen=True)
class RoadmapAssumptions:
    emergency_fund_months: float = 6
    investment_return: float = 7.0  # annual percent, compounded monthly
    house: HouseInputs = HouseInputs()


@dataclass
class Allocation:
    label: str
    percentage: float
    amount: float


@dataclass
class BudgetAllocationRecommendation:
    phase: int
    allocations: list[Allocation]


def grow_balance(balance: float, monthly_contribution: float, months: int, annual_return: float) -> float:
    """Monthly compounding with an end-of-month contribution."""
    monthly_rate = annual_return / 100 / 12
    for _ in range(months):
        balance = balance * (1 + monthly_rate) + monthly_contribution
    return balance


def investment_projection_summary(
    starting_balance: float,
    monthly_contribution: float,
    annual_return: float = 7.0,
) -> str:
    """Milestone balances, e.g. ``5yr: $72k | 10yr: $173k | ...``."""
    parts = []
    for years in MILESTONE_YEARS:
        balance = grow_balance(starting_balance, monthly_contribution, years * 12, annual_return)
        parts.append(f"{years}yr: ${balance / 1000:.0f}k")
    return " | ".join(parts)


def _simulate_pay_delay(
    debts: list[Account],
    delay: PayDelay,
    start_month: int,
    emergency_fund: float,
    investments: float,
) -> tuple[list[Account], list[ProjectionPoint]]:
    """Run the pay-delay window; return debts at their ending balances and the monthly points."""
    balances = [d.balance for d in debts]
    paid = [0.0] * len(debts)
    points = []
    for m in range(1, delay.months + 1):
        accrue_interest(debts, balances, DAYS_PER_MONTH)
        pay_minimums(debts, balances, delay.delay_budget, paid)
        remaining = sum(balances)
        points.append(
            ProjectionPoint(
                month=start_month + m,
                debt=remaining,
                emergency_fund=emergency_fund,
                investments=investments,
                net_worth=emergency_fund + investments - remaining,
                phase=0,
            )
        )
    return [replace(d, balance=balances[i]) for i, d in enumerate(debts)], points


def _status(phase_id: int, current_phase: int) -> PhaseStatus:
    if phase_id < current_phase:
        return PhaseStatus.COMPLETED
    if phase_id == current_phase:
        return PhaseStatus.ACTIVE
    return PhaseStatus.UPCOMING


def calculate_roadmap(
    income: IncomeState,
    accounts: list[Account],
    total_expenses: float,
    monthly_budget: float,
    emergency_target: float | None = None,
    pay_delay: PayDelay | None = None,
    assumptions: RoadmapAssumptions | None = None,
) -> RoadmapResult:
    """Project the household through the five phases.

    Args:
        income: Household income (gross monthly income feeds phase 4)
        accounts: All accounts; debts are paid down, cash seeds the
            emergency fund, investments seed the portfolio
        total_expenses: Monthly expenses, for the emergency-fund target
        monthly_budget: Monthly amount available after expenses
        emergency_target: Overrides ``emergency_fund_months * expenses``
        pay_delay: Reduced-budget window before pay starts
        assumptions: Return rate, emergency-fund months, house inputs

    Returns:
        RoadmapResult with phase summaries and a month-indexed projection
    """
    assumptions = assumptions or RoadmapAssumptions()
    annual_return = assumptions.investment_return
    monthly_return = annual_return / 100 / 12

    debts = [a for a in accounts if a.is_debt]
    emergency_fund = sum(a.balance for a in accounts if a.type is AccountType.CASH)
    investments = sum(a.balance for a in accounts if a.type is AccountType.INVESTMENT)
    ef_target = emergency_target if emergency_target is not None else total_expenses * assumptions.emergency_fund_months

    cc_balance = sum(d.balance for d in debts if d.is_credit_card)

    # Exit conditions are judged on today's state
    if cc_balance > PAID_OFF_THRESHOLD:
        current_phase = 1
    elif emergency_fund < ef_target:
        current_phase = 2
    else:
        current_phase = 3

    projections: list[ProjectionPoint] = []
    phases: list[PhaseInfo] = []
    month = 0

    if pay_delay and pay_delay.months > 0:
        debts, delay_points = _simulate_pay_delay(debts, pay_delay, month, emergency_fund, investments)
        projections.extend(delay_points)
        month += pay_delay.months

    credit_cards = [d for d in debts if d.is_credit_card]
    other_debts = [d for d in debts if not d.is_credit_card]
    other_total = sum(d.balance for d in other_debts)
    current_debt = sum(d.balance for d in debts)

    # --- Phase 1: Kill Credit Card Debt ---
    debt_converged = True
    cc_months = 0
    cc_interest = 0.0
    if credit_cards:
        cc_payoff = simulate_payoff(credit_cards, monthly_budget, PayoffStrategy.AVALANCHE)
        cc_months = cc_payoff.total_months
        cc_interest = cc_payoff.total_interest_paid
        debt_converged = cc_payoff.converged
        for entry in cc_payoff.schedule:
            month += 1
            remaining = entry.total_remaining + other_total
            projections.append(
                ProjectionPoint(
                    month=month,
                    debt=remaining,
                    emergency_fund=emergency_fund,
                    investments=investments,
                    net_worth=emergency_fund + investments - remaining,
                    phase=1,
                )
            )
        current_debt = other_total + cc_payoff.final_remaining

    if cc_balance > PAID_OFF_THRESHOLD:
        cc_details = f"{len(credit_cards)} credit cards, {cc_months} months, interest: ${cc_interest:,.0f}"
        if not debt_converged:
            cc_details += " (budget too low to pay off)"
    else:
        cc_details = "No credit card debt"

    phases.append(
        PhaseInfo(
            id=1,
            name="Kill Credit Card Debt",
            description="All available budget toward credit card payoff (avalanche by APR)",
            status=_status(1, current_phase),
            progress=100.0 if current_phase > 1 else 0.0,
            estimated_months=cc_months,
            monthly_allocation=monthly_budget if cc_balance > PAID_OFF_THRESHOLD else 0.0,
            details=cc_details,
        )
    )

    # --- Phase 2: Emergency Fund ---
    ef_monthly = monthly_budget * EMERGENCY_FUND_SHARE
    ef_needed = max(0.0, ef_target - emergency_fund)
    if ef_needed > 0 and ef_monthly > 0:
        ef_months = math.ceil(ef_needed / ef_monthly)
    else:
        ef_months = 0
        if ef_needed > 0:
            logger.warning(f"No budget to build the emergency fund; ${ef_needed:,.0f} short of target")

    target_months = ef_target / total_expenses if total_expenses > 0 else 0
    phases.append(
        PhaseInfo(
            id=2,
            name="Emergency Fund",
            description=(
                f"Build {target_months:.0f} months expenses. "
                f"{EMERGENCY_FUND_SHARE:.0%} to savings, {1 - EMERGENCY_FUND_SHARE:.0%} to minimum debt payments."
            ),
            status=_status(2, current_phase),
            progress=min(100.0, emergency_fund / ef_target * 100) if ef_target > 0 else 100.0,
            estimated_months=ef_months,
            monthly_allocation=ef_monthly,
            details=f"Target: ${ef_target:,.0f} ({target_months:.0f} months expenses)",
        )
    )

    for m in range(1, ef_months + 1):
        month += 1
        fund = min(ef_target, emergency_fund + ef_monthly * m)
        projections.append(
            ProjectionPoint(
                month=month,
                debt=current_debt,
                emergency_fund=fund,
                investments=investments,
                net_worth=fund + investments - current_debt,
                phase=2,
            )
        )
    if ef_months:
        emergency_fund = max(emergency_fund, ef_target)

    # --- Phase 3: Invest & Prepare for House ---
    invest_monthly = monthly_budget * INVESTMENT_SHARE
    phases.append(
        PhaseInfo(
            id=3,
            name="Invest & Prepare for House",
            description="Start retirement contributions, save for closing costs. Track DTI improvement.",
            status=_status(3, current_phase),
            progress=0.0,
            estimated_months=INVESTMENT_PHASE_MONTHS,
            monthly_allocation=invest_monthly,
            details=f"Employer match + additional savings. Monthly: ${invest_monthly:,.0f}",
        )
    )

    for _ in range(INVESTMENT_PHASE_MONTHS):
        month += 1
        investments = investments * (1 + monthly_return) + invest_monthly
        projections.append(
            ProjectionPoint(
                month=month,
                debt=current_debt,
                emergency_fund=emergency_fund,
                investments=investments,
                net_worth=emergency_fund + investments - current_debt,
                phase=3,
            )
        )

    # --- Phase 4: Build House ---
    debt_payments = sum(d.minimum_payment for d in debts)
    house = calculate_affordability(income.gross_monthly_income, debt_payments, assumptions.house)
    phases.append(
        PhaseInfo(
            id=4,
            name="Build House",
            description=(
                f"${assumptions.house.gift_down_payment:,.0f} gift down payment. Build within max affordable price."
            ),
            status=_status(4, current_phase),
            progress=0.0,
            estimated_months=BUILD_HOUSE_MONTHS,
            monthly_allocation=house.total_monthly_housing,
            details=f"Max price: ${house.max_home_price:,.0f} | Monthly: ${house.total_monthly_housing:,.0f}",
        )
    )

    for m in range(1, BUILD_HOUSE_MONTHS + 1):
        month += 1
        investments = investments * (1 + monthly_return)
        equity = house.max_home_price * (m / BUILD_HOUSE_MONTHS) * HOUSE_EQUITY_FRACTION
        projections.append(
            ProjectionPoint(
                month=month,
                debt=current_debt,
                emergency_fund=emergency_fund,
                investments=investments,
                net_worth=emergency_fund + investments - current_debt + equity,
                phase=4,
            )
        )

    # --- Phase 5: Financial Freedom ---
    freedom_monthly = monthly_budget * FREEDOM_SHARE
    phases.append(
        PhaseInfo(
            id=5,
            name="Financial Freedom",
            description="Increase investment rate. Project long-term wealth.",
            status=_status(5, current_phase),
            progress=0.0,
            estimated_months=PROJECTION_YEARS * 12,
            monthly_allocation=freedom_monthly,
            details=investment_projection_summary(investments, freedom_monthly, annual_return),
        )
    )

    # Sampled yearly to bound output size
    for _ in range(PROJECTION_YEARS):
        investments = grow_balance(investments, freedom_monthly, 12, annual_return)
        month += 12
        projections.append(
            ProjectionPoint(
                month=month,
                debt=0.0,
                emergency_fund=emergency_fund,
                investments=investments,
                net_worth=emergency_fund + investments,
                phase=5,
            )
        )

    logger.debug(f"Roadmap: current phase {current_phase}, {len(projections)} projection points over {month} months")

    return RoadmapResult(
        phases=phases,
        projections=projections,
        current_phase=current_phase,
        debt_converged=debt_converged,
    )


def get_recommended_allocation(current_phase: int, monthly_budget: float) -> BudgetAllocationRecommendation:
    """How to split the monthly budget while in ``current_phase``."""
    if current_phase == 1:
        split = [("Credit Card Debt", 100)]
    elif current_phase == 2:
        split = [("Emergency Fund", 70), ("Min Debt Payments", 30)]
    else:
        split = [("Needs", 50), ("Savings & Debt", 20), ("Wants", 30)]

    return BudgetAllocationRecommendation(
        phase=current_phase,
        allocations=[Allocation(label, pct, monthly_budget * pct / 100) for label, pct in split],
    )
