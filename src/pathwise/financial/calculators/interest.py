"""Per-period interest accrual for the three compounding models.

- DAILY_COMPOUND: balance * ((1 + APR/365)^days - 1)
- DAILY_SIMPLE:   balance * (APR/365) * days
- MONTHLY:        balance * (APR/12) * (days / 30.44)

The monthly model is prorated by period length, so one average month
(30.44 days) gives exactly balance * APR/12 and shorter periods get the
proportional share. Rates are whole-number percent.
"""

from ..models import CompoundingType

DAYS_PER_MONTH = 30.44
DAYS_PER_YEAR = 365


def calculate_period_interest(
    balance: float,
    apr_percent: float,
    compounding_type: CompoundingType,
    days: float,
) -> float:
    """Interest accrued on ``balance`` over ``days`` days.

    Non-positive balance, rate or days accrue nothing.
    """
    if balance <= 0 or apr_percent <= 0 or days <= 0:
        return 0.0
    apr = apr_percent / 100

    if compounding_type is CompoundingType.DAILY_COMPOUND:
        return balance * ((1 + apr / DAYS_PER_YEAR) ** days - 1)
    if compounding_type is CompoundingType.DAILY_SIMPLE:
        return balance * (apr / DAYS_PER_YEAR) * days
    if compounding_type is CompoundingType.MONTHLY:
        return balance * (apr / 12) * (days / DAYS_PER_MONTH)
    raise ValueError(f"Unknown compounding type: {compounding_type!r}")


def calculate_monthly_interest(balance: float, apr_percent: float, compounding_type: CompoundingType) -> float:
    """Interest for one average month (30.44 days)."""
    return calculate_period_interest(balance, apr_percent, compounding_type, DAYS_PER_MONTH)
