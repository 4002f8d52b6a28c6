"""Household input files.

A household file (YAML or JSON) describes income, expenses, accounts and
payoff settings. It is validated with pydantic and converted into the
frozen records the calculators consume. Example::

    income:
      base_salary: 85000
      monthly_commission: 1200
      state_tax_rate: 4.5
      filing_status: married_filing_jointly
      pay_start_date: 2026-12-01
    expenses:
      - {name: Rent, amount: 1800, category: Housing}
    accounts:
      - name: Visa
        balance: 6200
        interest_rate: 24.99
        minimum_payment: 180
        debt_category: credit_card
    payoff:
      monthly_budget: 1500
      is_manual_override: true
"""

from __future__ import annotations

import json
import os
from datetime import date
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, ValidationError, model_validator

from pathwise.core.exceptions import HouseholdFileError

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


class IncomeModel(BaseModel):
    base_salary: NonNegativeFloat = 0.0
    monthly_commission: NonNegativeFloat = 0.0
    monthly_tax_free: NonNegativeFloat = 0.0
    monthly_business_income: NonNegativeFloat = 0.0
    pay_start_date: date | None = None
    pay_frequency: PayFrequency = PayFrequency.BIWEEKLY
    next_pay_date: date | None = None
    dependents: int = Field(default=0, ge=0)
    state_tax_rate: float = Field(default=0.0, ge=0, le=100)
    filing_status: FilingStatus = FilingStatus.SINGLE

    def to_record(self) -> IncomeState:
        return IncomeState(**self.model_dump())


class ExpenseModel(BaseModel):
    id: str = ""
    name: str
    amount: NonNegativeFloat
    category: str = "Other"
    due_day: int = Field(default=0, ge=0, le=31)


class AccountModel(BaseModel):
    """One account. ``compounding_type`` defaults from ``debt_category``."""

    id: str = ""
    name: str = Field(min_length=1)
    type: AccountType = AccountType.DEBT
    balance: NonNegativeFloat = 0.0
    interest_rate: NonNegativeFloat = 0.0
    minimum_payment: NonNegativeFloat = 0.0
    compounding_type: CompoundingType | None = None
    debt_category: DebtCategory = DebtCategory.OTHER
    due_day: int = Field(default=0, ge=0, le=31)
    credit_limit: NonNegativeFloat = 0.0


class PayoffSettingsModel(BaseModel):
    monthly_budget: NonNegativeFloat = 0.0
    is_manual_override: bool = False


class HouseholdFile(BaseModel):
    """Root schema of a household file."""

    model_config = ConfigDict(extra="forbid")

    income: IncomeModel = IncomeModel()
    expenses: list[ExpenseModel] = []
    accounts: list[AccountModel] = []
    payoff: PayoffSettingsModel = PayoffSettingsModel()

    @model_validator(mode="after")
    def _unique_ids(self) -> HouseholdFile:
        for section, items in (("accounts", self.accounts), ("expenses", self.expenses)):
            seen: set[str] = set()
            for item in items:
                if not item.id:
                    continue
                if item.id in seen:
                    raise ValueError(f"duplicate id {item.id!r} in {section}")
                seen.add(item.id)
        return self

    def to_state(self) -> HouseholdState:
        """Convert to engine records, filling in missing ids."""
        expense_ids = _fill_ids([e.id for e in self.expenses], "expense")
        account_ids = _fill_ids([a.id for a in self.accounts], "account")
        expenses = tuple(
            Expense(id=expense_ids[i], name=e.name, amount=e.amount, category=e.category, due_day=e.due_day)
            for i, e in enumerate(self.expenses)
        )
        accounts = tuple(
            Account(
                id=account_ids[i],
                name=a.name,
                type=a.type,
                balance=a.balance,
                interest_rate=a.interest_rate,
                minimum_payment=a.minimum_payment,
                compounding_type=a.compounding_type or a.debt_category.default_compounding,
                debt_category=a.debt_category,
                due_day=a.due_day,
                credit_limit=a.credit_limit,
            )
            for i, a in enumerate(self.accounts)
        )
        return HouseholdState(
            income=self.income.to_record(),
            expenses=expenses,
            accounts=accounts,
            payoff_settings=PayoffSettings(**self.payoff.model_dump()),
        )


def _fill_ids(given: list[str], prefix: str) -> list[str]:
    """Keep explicit ids; give the rest ``<prefix>-<position>``, skipping ids already taken."""
    taken = {g for g in given if g}
    ids = []
    for i, g in enumerate(given):
        if not g:
            n = i + 1
            while f"{prefix}-{n}" in taken:
                n += 1
            g = f"{prefix}-{n}"
            taken.add(g)
        ids.append(g)
    return ids


def parse_household(data: dict[str, Any]) -> HouseholdState:
    """Validate a household mapping and convert it to a ``HouseholdState``."""
    try:
        return HouseholdFile.model_validate(data).to_state()
    except ValidationError as e:
        raise HouseholdFileError(f"Invalid household data: {e}") from e


def load_household(path: str) -> HouseholdState:
    """Read and validate a YAML or JSON household file."""
    ext = os.path.splitext(path)[1].lower()
    try:
        with open(path) as f:
            if ext == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise HouseholdFileError(f"Could not read household file {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise HouseholdFileError(f"Could not parse household file {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise HouseholdFileError(f"Household file {path} must contain a mapping at the top level")
    return parse_household(data)
