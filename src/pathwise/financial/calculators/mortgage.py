"""Mortgage affordability under debt-to-income limits.

Lenders cap housing cost at 28% of gross monthly income (front-end DTI) and
housing plus other debt payments at 36% (back-end DTI). The solver
bisects over home price to find the most expensive house whose monthly
cost (P&I + property tax + insurance + PMI) fits under the tighter limit,
then floors it to the nearest $1,000.

A companion ranking shows how much each debt's payoff would raise the
maximum price.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

from loguru import logger

from ..models import Account

FRONT_END_DTI_LIMIT = 0.28
BACK_END_DTI_LIMIT = 0.36
PMI_ANNUAL_RATE = 0.0075  # of loan amount
PMI_LTV_THRESHOLD = 0.80

SEARCH_MAX_PRICE = 5_000_000
SEARCH_MAX_ITERATIONS = 100
SEARCH_PRECISION = 100
PRICE_ROUNDING = 1_000

LimitingFactor = Literal["front_end", "back_end"]


@dataclass(frozen=True)
class HouseInputs:
    """Purchase assumptions. Rates are whole-number percent."""

    gift_down_payment: float = 100_000
    loan_term_years: int = 30
    mortgage_rate: float = 6.5
    property_tax_rate: float = 1.2
    annual_insurance: float = 2_400


@dataclass
class HouseAffordabilityResult:
    max_home_price: float
    down_payment: float
    loan_amount: float
    monthly_pi: float  # principal & interest
    monthly_tax: float
    monthly_insurance: float
    monthly_pmi: float
    total_monthly_housing: float
    max_monthly_housing: float  # the DTI limit the price was solved against
    front_end_dti: float  # percent
    back_end_dti: float  # percent
    limiting_factor: LimitingFactor


@dataclass
class DebtPayoffImpact:
    debt_id: str
    debt_name: str
    monthly_payment: float
    current_back_end_dti: float
    new_back_end_dti: float
    dti_drop: float
    max_home_price_increase: float
    new_max_home_price: float


@dataclass
class HousingCost:
    """Monthly cost breakdown of a house at one price."""

    down_payment: float
    loan_amount: float
    principal_interest: float
    tax: float
    insurance: float
    pmi: float

    @property
    def total(self) -> float:
        return self.principal_interest + self.tax + self.insurance + self.pmi


def calculate_monthly_payment(principal: float, rate_percent: float, years: int) -> float:
    """Calculate monthly payment for a fixed-rate amortizing loan.

    Args:
        principal: Loan amount
        rate_percent: Annual interest rate in percent (e.g. 6.5)
        years: Loan term in years

    Returns:
        Monthly principal-and-interest payment. A zero rate amortizes
        straight-line.
    """
    if principal <= 0 or years <= 0:
        return 0.0

    num_payments = years * 12
    if rate_percent <= 0:
        return principal / num_payments

    monthly_rate = rate_percent / 100 / 12
    growth = (1 + monthly_rate) ** num_payments
    return principal * (monthly_rate * growth) / (growth - 1)


def calculate_monthly_pmi(loan_amount: float, home_price: float) -> float:
    """PMI at 0.75%/yr of the loan when loan-to-value exceeds 80%."""
    if home_price <= 0 or loan_amount <= 0:
        return 0.0
    if loan_amount / home_price <= PMI_LTV_THRESHOLD:
        return 0.0
    return loan_amount * PMI_ANNUAL_RATE / 12


def housing_cost(home_price: float, inputs: HouseInputs) -> HousingCost:
    """Monthly cost of owning a house at ``home_price``."""
    down_payment = min(inputs.gift_down_payment, home_price)
    loan = home_price - down_payment
    return HousingCost(
        down_payment=down_payment,
        loan_amount=loan,
        principal_interest=calculate_monthly_payment(loan, inputs.mortgage_rate, inputs.loan_term_years),
        tax=home_price * (inputs.property_tax_rate / 100) / 12,
        insurance=inputs.annual_insurance / 12,
        pmi=calculate_monthly_pmi(loan, home_price),
    )


def max_monthly_housing(gross_monthly_income: float, monthly_debt_payments: float) -> tuple[float, LimitingFactor]:
    """The housing budget allowed by DTI limits and which limit set it."""
    front_end = gross_monthly_income * FRONT_END_DTI_LIMIT
    back_end = gross_monthly_income * BACK_END_DTI_LIMIT - monthly_debt_payments
    limiting: LimitingFactor = "front_end" if front_end <= back_end else "back_end"
    return max(0.0, min(front_end, back_end)), limiting


def calculate_affordability(
    gross_monthly_income: float,
    monthly_debt_payments: float,
    inputs: HouseInputs | None = None,
) -> HouseAffordabilityResult:
    """Find the maximum affordable home price.

    Args:
        gross_monthly_income: Pre-tax monthly income
        monthly_debt_payments: Existing monthly debt obligations
        inputs: Purchase assumptions (defaults if None)

    Returns:
        HouseAffordabilityResult at the floored maximum price
    """
    inputs = inputs or HouseInputs()
    limit, limiting_factor = max_monthly_housing(gross_monthly_income, monthly_debt_payments)

    # low is always affordable (or 0); high never is (or the search ceiling)
    low, high = 0.0, float(SEARCH_MAX_PRICE)
    best = 0.0
    for _ in range(SEARCH_MAX_ITERATIONS):
        mid = (low + high) / 2
        if housing_cost(mid, inputs).total <= limit:
            best = mid
            low = mid
        else:
            high = mid
        if high - low < SEARCH_PRECISION:
            break

    max_price = math.floor(best / PRICE_ROUNDING) * PRICE_ROUNDING
    cost = housing_cost(max_price, inputs)
    total = cost.total

    if gross_monthly_income > 0:
        front_end_dti = total / gross_monthly_income * 100
        back_end_dti = (total + monthly_debt_payments) / gross_monthly_income * 100
    else:
        front_end_dti = back_end_dti = 0.0

    logger.debug(f"Affordability: max ${max_price:,.0f} against ${limit:,.2f}/mo ({limiting_factor})")

    return HouseAffordabilityResult(
        max_home_price=max_price,
        down_payment=cost.down_payment,
        loan_amount=cost.loan_amount,
        monthly_pi=cost.principal_interest,
        monthly_tax=cost.tax,
        monthly_insurance=cost.insurance,
        monthly_pmi=cost.pmi,
        total_monthly_housing=total,
        max_monthly_housing=limit,
        front_end_dti=front_end_dti,
        back_end_dti=back_end_dti,
        limiting_factor=limiting_factor,
    )


def calculate_debt_payoff_impact(
    gross_monthly_income: float,
    debts: list[Account],
    inputs: HouseInputs | None = None,
) -> list[DebtPayoffImpact]:
    """Rank debts by how much paying each one off raises the max home price."""
    total_payments = sum(d.minimum_payment for d in debts)
    baseline = calculate_affordability(gross_monthly_income, total_payments, inputs)

    impacts = []
    for debt in debts:
        if debt.minimum_payment <= 0:
            continue
        improved = calculate_affordability(gross_monthly_income, total_payments - debt.minimum_payment, inputs)
        impacts.append(
            DebtPayoffImpact(
                debt_id=debt.id,
                debt_name=debt.name,
                monthly_payment=debt.minimum_payment,
                current_back_end_dti=baseline.back_end_dti,
                new_back_end_dti=improved.back_end_dti,
                dti_drop=baseline.back_end_dti - improved.back_end_dti,
                max_home_price_increase=improved.max_home_price - baseline.max_home_price,
                new_max_home_price=improved.max_home_price,
            )
        )

    impacts.sort(key=lambda i: -i.max_home_price_increase)
    return impacts
