"""Core financial data models.

Records the calculators consume: accounts, income, expenses, and the
household state that bundles them. Monetary fields are plain floats and all
interest rates are whole-number percent (5.5 means 5.5% APR); calculators
convert to a fraction at the point of use.

The input layer (see ``pathwise.financial.household``) is responsible for
validating these; the calculators trust them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

class FilingStatus(Enum):
    """Tax filing status."""

    SINGLE = "single"
    MARRIED_FILING_JOINTLY = "married_filing_jointly"
    MARRIED_FILING_SEPARATELY = "married_filing_separately"
    HEAD_OF_HOUSEHOLD = "head_of_household"

    @property
    def label(self) -> str:
        return {
            FilingStatus.SINGLE: "Single",
            FilingStatus.MARRIED_FILING_JOINTLY: "Married Filing Jointly",
            FilingStatus.MARRIED_FILING_SEPARATELY: "Married Filing Separately",
            FilingStatus.HEAD_OF_HOUSEHOLD: "Head of Household",
        }[self]


class AccountType(Enum):
    """Kind of account. Only DEBT accounts are amortized."""

    DEBT = "debt"
    CASH = "cash"
    INVESTMENT = "investment"

    @property
    def label(self) -> str:
        return {
            AccountType.DEBT: "Debt",
            AccountType.CASH: "Cash Account",
            AccountType.INVESTMENT: "Investment",
        }[self]


class CompoundingType(Enum):
    """Interest-accrual model of a debt."""

    DAILY_COMPOUND = "daily_compound"  # credit cards
    DAILY_SIMPLE = "daily_simple"  # student loans
    MONTHLY = "monthly"  # auto/personal loans, mortgages

    @property
    def label(self) -> str:
        return {
            CompoundingType.DAILY_COMPOUND: "Daily Compound",
            CompoundingType.DAILY_SIMPLE: "Daily Simple",
            CompoundingType.MONTHLY: "Monthly",
        }[self]


class DebtCategory(Enum):
    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    AUTO_LOAN = "auto_loan"
    PERSONAL_LOAN = "personal_loan"
    MEDICAL = "medical"
    MORTGAGE = "mortgage"
    OTHER = "other"

    @property
    def label(self) -> str:
        return {
            DebtCategory.CREDIT_CARD: "Credit Card",
            DebtCategory.STUDENT_LOAN: "Student Loan",
            DebtCategory.AUTO_LOAN: "Auto Loan",
            DebtCategory.PERSONAL_LOAN: "Personal Loan",
            DebtCategory.MEDICAL: "Medical",
            DebtCategory.MORTGAGE: "Mortgage",
            DebtCategory.OTHER: "Other",
        }[self]

    @property
    def default_compounding(self) -> CompoundingType:
        """Compounding model a new debt of this category starts with."""
        if self is DebtCategory.CREDIT_CARD:
            return CompoundingType.DAILY_COMPOUND
        if self is DebtCategory.STUDENT_LOAN:
            return CompoundingType.DAILY_SIMPLE
        return CompoundingType.MONTHLY


class PayFrequency(Enum):
    """How often the household is paid (display only; the engine works monthly)."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def label(self) -> str:
        return {
            PayFrequency.WEEKLY: "Weekly",
            PayFrequency.BIWEEKLY: "Every 2 Weeks",
            PayFrequency.SEMIMONTHLY: "1st & 15th",
            PayFrequency.MONTHLY: "Monthly",
        }[self]


@dataclass(frozen=True)
class Account:
    """A debt, cash, or investment account.

    Attributes:
        id: Unique identifier (string for portability).
        name: Human-readable name.
        type: Account kind.
        balance: Current balance (amount owed for debts).
        interest_rate: APR as whole-number percent.
        minimum_payment: Monthly minimum (debts only).
        compounding_type: Interest-accrual model (debts only).
        debt_category: Debt classification (debts only).
        due_day: Day of month payment is due (1-31), 0 = not set.
        credit_limit: Total credit limit (credit cards only).

    Frozen: simulations work on copies of ``balance`` and never write back.
    """

    id: str
    name: str
    type: AccountType = AccountType.DEBT
    balance: float = 0.0
    interest_rate: float = 0.0
    minimum_payment: float = 0.0
    compounding_type: CompoundingType = CompoundingType.MONTHLY
    debt_category: DebtCategory = DebtCategory.OTHER
    due_day: int = 0
    credit_limit: float = 0.0

    @property
    def is_debt(self) -> bool:
        return self.type is AccountType.DEBT

    @property
    def is_credit_card(self) -> bool:
        """Credit-card category, or any debt that compounds daily like one."""
        return self.is_debt and (
            self.debt_category is DebtCategory.CREDIT_CARD or self.compounding_type is CompoundingType.DAILY_COMPOUND
        )

    @property
    def utilization(self) -> float:
        """Balance as a fraction of the credit limit (0 if no limit)."""
        if self.credit_limit <= 0:
            return 0.0
        return self.balance / self.credit_limit


@dataclass(frozen=True)
class Expense:
    id: str
    name: str
    amount: float
    category: str = "Other"
    due_day: int = 0


@dataclass(frozen=True)
class IncomeState:
    """Household income inputs.

    Attributes:
        base_salary: Annual base salary.
        monthly_commission: Commission per month (taxed with salary).
        monthly_tax_free: Tax-free income per month (added after tax).
        monthly_business_income: Business income per month (taxed).
        pay_start_date: First paycheck date if pay has not started yet.
        pay_frequency: Paycheck cadence.
        next_pay_date: Date of the next paycheck, if known.
        dependents: Number of qualifying children.
        state_tax_rate: Flat state rate, whole-number percent of gross.
        filing_status: Federal filing status.
    """

    base_salary: float = 0.0
    monthly_commission: float = 0.0
    monthly_tax_free: float = 0.0
    monthly_business_income: float = 0.0
    pay_start_date: date | None = None
    pay_frequency: PayFrequency = PayFrequency.BIWEEKLY
    next_pay_date: date | None = None
    dependents: int = 0
    state_tax_rate: float = 0.0
    filing_status: FilingStatus = FilingStatus.SINGLE

    @property
    def annual_business_income(self) -> float:
        return self.monthly_business_income * 12

    @property
    def gross_monthly_income(self) -> float:
        """Salary and commission per month plus tax-free income.

        This is the figure lenders see for house affordability; business
        income is left out.
        """
        return (self.base_salary + self.monthly_commission * 12) / 12 + self.monthly_tax_free


@dataclass(frozen=True)
class PayoffSettings:
    monthly_budget: float = 0.0
    is_manual_override: bool = False


@dataclass(frozen=True)
class HouseholdState:
    """Everything the engine needs about a household, passed explicitly."""

    income: IncomeState = field(default_factory=IncomeState)
    expenses: tuple[Expense, ...] = ()
    accounts: tuple[Account, ...] = ()
    payoff_settings: PayoffSettings = field(default_factory=PayoffSettings)

    @property
    def debts(self) -> list[Account]:
        return [a for a in self.accounts if a.is_debt]

    @property
    def total_expenses(self) -> float:
        return sum(e.amount for e in self.expenses)

    @property
    def total_debt(self) -> float:
        return sum(a.balance for a in self.debts)

    @property
    def total_cash(self) -> float:
        return sum(a.balance for a in self.accounts if a.type is AccountType.CASH)

    @property
    def total_investments(self) -> float:
        return sum(a.balance for a in self.accounts if a.type is AccountType.INVESTMENT)
