"""Monthly payoff budget derived from a household's income and obligations.

Budget = monthly net income - expenses - minimums on non-credit-card debt.
Credit card minimums stay inside the budget because the payoff simulator
pays them itself before sending the rest to the priority card.

While regular pay has not started, only business and tax-free income is
available; that gives the smaller delay budget.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from .calculators.interest import DAYS_PER_MONTH
from .calculators.payoff import PayDelay
from .calculators.tax import calculate_tax_breakdown
from .models import DebtCategory, HouseholdState, IncomeState


@dataclass
class PayoffBudget:
    monthly_net: float
    total_expenses: float
    total_debt_minimums: float
    non_cc_debt_minimums: float
    total_monthly_obligations: float  # expenses + all debt minimums
    calculated_budget: float
    effective_budget: float  # manual override if enabled
    delay_budget: float
    pay_delay_months: int  # 0 if pay already started

    @property
    def pay_delay(self) -> PayDelay | None:
        if self.pay_delay_months <= 0:
            return None
        return PayDelay(months=self.pay_delay_months, delay_budget=self.delay_budget)


def pay_delay_months(pay_start_date: date | None, as_of: date) -> int:
    """Whole (average) months until the first paycheck, rounded up."""
    if pay_start_date is None or pay_start_date <= as_of:
        return 0
    return math.ceil((pay_start_date - as_of).days / DAYS_PER_MONTH)


def _monthly_net(income: IncomeState, salaried: bool) -> float:
    result = calculate_tax_breakdown(
        income.base_salary if salaried else 0.0,
        income.monthly_commission if salaried else 0.0,
        income.dependents,
        income.state_tax_rate,
        income.filing_status,
        income.annual_business_income,
    )
    return result.net_income / 12 + income.monthly_tax_free


def compute_payoff_budget(state: HouseholdState, as_of: date | None = None) -> PayoffBudget:
    """Derive the monthly debt budget for ``state``.

    Args:
        state: Household records
        as_of: Date the pay delay is measured from (defaults to today)
    """
    as_of = as_of or date.today()
    income = state.income

    monthly_net = _monthly_net(income, salaried=True)
    delay_monthly_net = _monthly_net(income, salaried=False)

    total_expenses = state.total_expenses
    debts = state.debts
    total_minimums = sum(d.minimum_payment for d in debts)
    non_cc_minimums = sum(d.minimum_payment for d in debts if d.debt_category is not DebtCategory.CREDIT_CARD)

    calculated = max(0.0, monthly_net - total_expenses - non_cc_minimums)
    settings = state.payoff_settings
    effective = settings.monthly_budget if settings.is_manual_override else calculated

    return PayoffBudget(
        monthly_net=monthly_net,
        total_expenses=total_expenses,
        total_debt_minimums=total_minimums,
        non_cc_debt_minimums=non_cc_minimums,
        total_monthly_obligations=total_expenses + total_minimums,
        calculated_budget=calculated,
        effective_budget=effective,
        delay_budget=max(0.0, delay_monthly_net - total_expenses - non_cc_minimums),
        pay_delay_months=pay_delay_months(income.pay_start_date, as_of),
    )
