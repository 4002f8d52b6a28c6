"""
Tax Tables - 2024 Tax Year

Single source of truth for the tax constants used by the tax engine.
Depends only on the record enums in ``pathwise.financial.models``.

The engine models one simplified tax year: marginal federal brackets per
filing status, a standard deduction, a flat per-dependent child credit.
State tax is a flat user-supplied rate and has no table here.

Sources:
- Federal brackets and standard deductions: IRS Rev. Proc. 2023-34
"""

import math
from typing import NamedTuple

from ..models import FilingStatus


class TaxBracket(NamedTuple):
    """One marginal bracket. ``max`` of the top bracket is +inf."""

    min: float
    max: float
    rate: float  # fraction, e.g. 0.22

    @property
    def width(self) -> float:
        return self.max - self.min


# =============================================================================
# FEDERAL TAX BRACKETS 2024
# =============================================================================

_INF = math.inf

FEDERAL_BRACKETS_2024 = {
    FilingStatus.SINGLE: [
        TaxBracket(0, 11_600, 0.10),
        TaxBracket(11_600, 47_150, 0.12),
        TaxBracket(47_150, 100_525, 0.22),
        TaxBracket(100_525, 191_950, 0.24),
        TaxBracket(191_950, 243_725, 0.32),
        TaxBracket(243_725, 609_350, 0.35),
        TaxBracket(609_350, _INF, 0.37),
    ],
    FilingStatus.MARRIED_FILING_JOINTLY: [
        TaxBracket(0, 23_200, 0.10),
        TaxBracket(23_200, 94_300, 0.12),
        TaxBracket(94_300, 201_050, 0.22),
        TaxBracket(201_050, 383_900, 0.24),
        TaxBracket(383_900, 487_450, 0.32),
        TaxBracket(487_450, 731_200, 0.35),
        TaxBracket(731_200, _INF, 0.37),
    ],
    FilingStatus.MARRIED_FILING_SEPARATELY: [
        TaxBracket(0, 11_600, 0.10),
        TaxBracket(11_600, 47_150, 0.12),
        TaxBracket(47_150, 100_525, 0.22),
        TaxBracket(100_525, 191_950, 0.24),
        TaxBracket(191_950, 243_725, 0.32),
        TaxBracket(243_725, 365_600, 0.35),
        TaxBracket(365_600, _INF, 0.37),
    ],
    FilingStatus.HEAD_OF_HOUSEHOLD: [
        TaxBracket(0, 16_550, 0.10),
        TaxBracket(16_550, 63_100, 0.12),
        TaxBracket(63_100, 100_500, 0.22),
        TaxBracket(100_500, 191_950, 0.24),
        TaxBracket(191_950, 243_700, 0.32),
        TaxBracket(243_700, 609_350, 0.35),
        TaxBracket(609_350, _INF, 0.37),
    ],
}

# Standard deduction 2024
STANDARD_DEDUCTIONS_2024 = {
    FilingStatus.SINGLE: 14_600,
    FilingStatus.MARRIED_FILING_JOINTLY: 29_200,
    FilingStatus.MARRIED_FILING_SEPARATELY: 14_600,
    FilingStatus.HEAD_OF_HOUSEHOLD: 21_900,
}

# =============================================================================
# CREDITS
# =============================================================================

# Nonrefundable in this model: capped at federal tax before credits
CHILD_TAX_CREDIT_PER_DEPENDENT = 2_000


# =============================================================================
# EARLY WITHDRAWAL
# =============================================================================

# Additional tax on early retirement-plan distributions (IRC §72(t)), percent
EARLY_WITHDRAWAL_PENALTY_RATE = 10.0


# =============================================================================
# ALIASES
# =============================================================================

FEDERAL_BRACKETS = FEDERAL_BRACKETS_2024
STANDARD_DEDUCTIONS = STANDARD_DEDUCTIONS_2024
