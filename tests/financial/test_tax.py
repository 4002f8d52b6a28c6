"""Tests for pathwise.financial.calculators.tax."""

import math

import pytest

from pathwise.financial.calculators.tax import (
    calculate_federal_tax,
    calculate_income_tax,
    calculate_tax_breakdown,
    compare_filing_statuses,
)
from pathwise.financial.calculators.tax_tables import FEDERAL_BRACKETS, STANDARD_DEDUCTIONS
from pathwise.financial.models import FilingStatus, IncomeState


class TestTaxTables:
    @pytest.mark.parametrize("status", list(FilingStatus))
    def test_brackets_are_contiguous(self, status):
        brackets = FEDERAL_BRACKETS[status]
        assert brackets[0].min == 0
        assert math.isinf(brackets[-1].max)
        for lower, upper in zip(brackets, brackets[1:]):
            assert lower.max == upper.min
            assert lower.rate < upper.rate

    def test_standard_deductions(self):
        assert STANDARD_DEDUCTIONS[FilingStatus.SINGLE] == 14_600
        assert STANDARD_DEDUCTIONS[FilingStatus.MARRIED_FILING_JOINTLY] == 29_200
        assert STANDARD_DEDUCTIONS[FilingStatus.HEAD_OF_HOUSEHOLD] == 21_900


class TestFederalTax:
    def test_every_bracket_listed(self):
        brackets = FEDERAL_BRACKETS[FilingStatus.SINGLE]
        result = calculate_federal_tax(10_000, brackets)
        assert len(result) == len(brackets)
        assert result[0].taxable == 10_000
        assert all(b.taxable == 0 and b.tax == 0 for b in result[1:])

    @pytest.mark.parametrize("taxable", [0, 5_000, 11_600, 45_400, 250_000, 1_000_000])
    def test_bracket_slices_sum_to_taxable(self, taxable):
        result = calculate_federal_tax(taxable, FEDERAL_BRACKETS[FilingStatus.SINGLE])
        assert sum(b.taxable for b in result) == pytest.approx(taxable)

    def test_zero_income(self):
        result = calculate_federal_tax(0, FEDERAL_BRACKETS[FilingStatus.SINGLE])
        assert sum(b.tax for b in result) == 0


class TestTaxBreakdown:
    @pytest.mark.smoke
    def test_single_60k(self):
        result = calculate_tax_breakdown(60_000, 0, 0, 0, FilingStatus.SINGLE)
        assert result.taxable_income == 45_400
        # 10% of 11,600 + 12% of 33,800
        assert result.total_federal_tax == pytest.approx(5_216)
        assert result.total_tax == pytest.approx(5_216)
        assert result.net_income == pytest.approx(54_784)
        assert result.marginal_rate == pytest.approx(0.12)

    def test_married_filing_jointly(self):
        result = calculate_tax_breakdown(100_000, 0, 0, 0, FilingStatus.MARRIED_FILING_JOINTLY)
        assert result.taxable_income == 70_800
        assert result.total_federal_tax == pytest.approx(2_320 + 47_600 * 0.12)

    def test_income_below_deduction(self):
        result = calculate_tax_breakdown(10_000, 0, 0, 0, FilingStatus.SINGLE)
        assert result.taxable_income == 0
        assert result.total_federal_tax == 0

    def test_zero_income_effective_rate(self):
        result = calculate_tax_breakdown(0, 0, 0, 5, FilingStatus.SINGLE)
        assert result.total_tax == 0
        assert result.effective_rate == 0

    def test_state_tax_is_flat_on_gross(self):
        result = calculate_tax_breakdown(60_000, 0, 0, 5, FilingStatus.SINGLE)
        assert result.state_tax == pytest.approx(3_000)
        assert result.total_tax == pytest.approx(5_216 + 3_000)
        assert result.effective_rate == pytest.approx((5_216 + 3_000) / 60_000 * 100)

    def test_child_credit_capped_at_federal_tax(self):
        result = calculate_tax_breakdown(30_000, 0, 3, 0, FilingStatus.SINGLE)
        assert result.total_federal_tax == pytest.approx(1_616)
        assert result.child_tax_credit == pytest.approx(1_616)
        assert result.total_tax == pytest.approx(0)

    def test_child_credit_per_dependent(self):
        result = calculate_tax_breakdown(60_000, 0, 2, 0, FilingStatus.SINGLE)
        assert result.child_tax_credit == 4_000
        assert result.total_tax == pytest.approx(1_216)

    def test_commission_attribution(self):
        result = calculate_tax_breakdown(60_000, 1_000, 0, 5, FilingStatus.SINGLE)
        assert result.gross_income == 72_000
        assert result.total_federal_tax == pytest.approx(7_681)
        assert result.base_tax == pytest.approx(5_216)
        assert result.commission_tax == pytest.approx(2_465)
        assert result.base_state_tax == pytest.approx(3_000)
        assert result.commission_state_tax == pytest.approx(600)

    def test_business_income_is_taxed(self):
        without = calculate_tax_breakdown(60_000, 0, 0, 0, FilingStatus.SINGLE)
        with_business = calculate_tax_breakdown(60_000, 0, 0, 0, FilingStatus.SINGLE, annual_business_income=12_000)
        assert with_business.gross_income == 72_000
        assert with_business.total_federal_tax > without.total_federal_tax

    def test_income_state_wrapper(self):
        income = IncomeState(base_salary=60_000, monthly_business_income=1_000)
        result = calculate_income_tax(income)
        assert result.gross_income == 72_000


class TestFilingComparison:
    def test_one_row_per_status(self):
        rows = compare_filing_statuses(60_000, 0, 0, 0)
        assert [r.filing_status for r in rows] == list(FilingStatus)

    def test_joint_is_cheapest(self):
        rows = {r.filing_status: r for r in compare_filing_statuses(60_000, 0, 0, 0)}
        assert rows[FilingStatus.MARRIED_FILING_JOINTLY].is_best
        assert rows[FilingStatus.MARRIED_FILING_JOINTLY].federal_tax == pytest.approx(3_232)
        assert not rows[FilingStatus.SINGLE].is_best
        assert not rows[FilingStatus.HEAD_OF_HOUSEHOLD].is_best

    def test_ties_all_flagged(self):
        rows = compare_filing_statuses(0, 0, 0, 0)
        assert all(r.is_best for r in rows)
