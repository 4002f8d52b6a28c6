"""Federal/state income tax engine.

Marginal federal brackets over (gross - standard deduction), a flat state
rate on gross, and a nonrefundable child credit. Tax is also attributed
between base salary and commission so a user can see what their commission
actually costs them.

Pure math, no dependencies beyond the tax tables.
"""

from dataclasses import dataclass, field

from ..models import FilingStatus, IncomeState
from .tax_tables import CHILD_TAX_CREDIT_PER_DEPENDENT, FEDERAL_BRACKETS, STANDARD_DEDUCTIONS, TaxBracket


@dataclass
class BracketTax:
    """Slice of taxable income falling in one bracket."""

    bracket: TaxBracket
    taxable: float
    tax: float


@dataclass
class TaxBreakdownResult:
    """Full tax computation for one filing status."""

    brackets: list[BracketTax] = field(default_factory=list)
    total_federal_tax: float = 0.0
    state_tax: float = 0.0
    child_tax_credit: float = 0.0
    total_tax: float = 0.0
    effective_rate: float = 0.0  # percent of gross
    gross_income: float = 0.0
    taxable_income: float = 0.0
    net_income: float = 0.0
    # Split attribution
    base_tax: float = 0.0
    commission_tax: float = 0.0
    base_state_tax: float = 0.0
    commission_state_tax: float = 0.0

    @property
    def marginal_rate(self) -> float:
        """Rate of the highest bracket holding any taxable income (0 if none)."""
        taxed = [b.bracket.rate for b in self.brackets if b.taxable > 0]
        return taxed[-1] if taxed else 0.0


@dataclass
class FilingComparisonRow:
    filing_status: FilingStatus
    label: str
    federal_tax: float
    state_tax: float
    child_tax_credit: float
    total_tax: float
    net_income: float
    effective_rate: float
    is_best: bool = False


def calculate_federal_tax(taxable_income: float, brackets: list[TaxBracket]) -> list[BracketTax]:
    """Spread taxable income across ascending brackets.

    Every bracket appears in the result, including those the income never
    reaches (taxable = tax = 0), so callers can render the full table.

    Args:
        taxable_income: Income after the standard deduction
        brackets: Ascending, non-overlapping brackets; last max is +inf

    Returns:
        One BracketTax per bracket, in bracket order
    """
    result = []
    remaining = taxable_income

    for bracket in brackets:
        if remaining <= 0:
            result.append(BracketTax(bracket=bracket, taxable=0.0, tax=0.0))
            continue
        taxable = min(remaining, bracket.width)
        result.append(BracketTax(bracket=bracket, taxable=taxable, tax=taxable * bracket.rate))
        remaining -= taxable

    return result


def calculate_tax_breakdown(
    base_salary: float,
    monthly_commission: float,
    dependents: int,
    state_tax_rate: float,
    filing_status: FilingStatus,
    annual_business_income: float = 0.0,
) -> TaxBreakdownResult:
    """Compute annual tax for a household.

    Args:
        base_salary: Annual base salary
        monthly_commission: Commission per month
        dependents: Qualifying children for the child credit
        state_tax_rate: Flat state rate in percent (e.g. 5 for 5%)
        filing_status: Federal filing status
        annual_business_income: Business income per year

    Returns:
        TaxBreakdownResult with per-bracket detail and base/commission split
    """
    gross_income = base_salary + monthly_commission * 12 + annual_business_income
    standard_deduction = STANDARD_DEDUCTIONS[filing_status]
    taxable_income = max(0.0, gross_income - standard_deduction)
    brackets = FEDERAL_BRACKETS[filing_status]

    bracket_breakdown = calculate_federal_tax(taxable_income, brackets)
    total_federal_tax = sum(b.tax for b in bracket_breakdown)

    # State tax is flat on gross income
    state_fraction = state_tax_rate / 100
    state_tax = gross_income * state_fraction

    child_tax_credit = min(dependents * CHILD_TAX_CREDIT_PER_DEPENDENT, total_federal_tax)

    total_tax = total_federal_tax - child_tax_credit + state_tax
    effective_rate = (total_tax / gross_income) * 100 if gross_income > 0 else 0.0

    # Attribution: base salary alone fills the lower brackets, everything
    # above it is charged to commission (and business income).
    base_taxable = max(0.0, base_salary - standard_deduction)
    base_tax = sum(b.tax for b in calculate_federal_tax(base_taxable, brackets))

    return TaxBreakdownResult(
        brackets=bracket_breakdown,
        total_federal_tax=total_federal_tax,
        state_tax=state_tax,
        child_tax_credit=child_tax_credit,
        total_tax=total_tax,
        effective_rate=effective_rate,
        gross_income=gross_income,
        taxable_income=taxable_income,
        net_income=gross_income - total_tax,
        base_tax=base_tax,
        commission_tax=total_federal_tax - base_tax,
        base_state_tax=base_salary * state_fraction,
        commission_state_tax=monthly_commission * 12 * state_fraction,
    )


def calculate_income_tax(income: IncomeState) -> TaxBreakdownResult:
    """Run the tax engine on a household's full income."""
    return calculate_tax_breakdown(
        base_salary=income.base_salary,
        monthly_commission=income.monthly_commission,
        dependents=income.dependents,
        state_tax_rate=income.state_tax_rate,
        filing_status=income.filing_status,
        annual_business_income=income.annual_business_income,
    )


def compare_filing_statuses(
    base_salary: float,
    monthly_commission: float,
    dependents: int,
    state_tax_rate: float,
    annual_business_income: float = 0.0,
) -> list[FilingComparisonRow]:
    """Run the engine once per filing status and flag the cheapest.

    Ties are all flagged best.
    """
    rows = []
    for status in FilingStatus:
        result = calculate_tax_breakdown(
            base_salary, monthly_commission, dependents, state_tax_rate, status, annual_business_income
        )
        rows.append(
            FilingComparisonRow(
                filing_status=status,
                label=status.label,
                federal_tax=result.total_federal_tax,
                state_tax=result.state_tax,
                child_tax_credit=result.child_tax_credit,
                total_tax=result.total_tax,
                net_income=result.net_income,
                effective_rate=result.effective_rate,
            )
        )

    min_tax = min(r.total_tax for r in rows)
    for row in rows:
        row.is_best = row.total_tax == min_tax

    return rows
