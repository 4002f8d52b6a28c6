"""Financial planning engine: records, calculators, and household inputs."""

from .models import (
    Account,
    AccountType,
    CompoundingType,
    DebtCategory,
    Expense,
    FilingStatus,
    HouseholdState,
    IncomeState,
    PayFrequency,
    PayoffSettings,
)

__all__ = [
    "Account",
    "AccountType",
    "CompoundingType",
    "DebtCategory",
    "Expense",
    "FilingStatus",
    "HouseholdState",
    "IncomeState",
    "PayFrequency",
    "PayoffSettings",
]
