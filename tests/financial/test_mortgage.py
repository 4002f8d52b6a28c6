"""Tests for pathwise.financial.calculators.mortgage."""

import pytest

from pathwise.financial.calculators.mortgage import (
    HouseInputs,
    calculate_affordability,
    calculate_debt_payoff_impact,
    calculate_monthly_payment,
    calculate_monthly_pmi,
    housing_cost,
    max_monthly_housing,
)
from pathwise.financial.models import Account


class TestMonthlyPayment:
    def test_standard_mortgage(self):
        # $300k, 6.5%, 30 years -> ~$1,896/mo
        payment = calculate_monthly_payment(300_000, 6.5, 30)
        assert payment == pytest.approx(1_896.20, rel=0.001)

    def test_fifteen_year_costs_more_per_month(self):
        assert calculate_monthly_payment(300_000, 6.5, 15) > calculate_monthly_payment(300_000, 6.5, 30)

    def test_zero_rate_is_straight_line(self):
        assert calculate_monthly_payment(360_000, 0, 30) == pytest.approx(1_000)

    def test_zero_principal(self):
        assert calculate_monthly_payment(0, 6.5, 30) == 0


class TestPmi:
    def test_charged_above_80_ltv(self):
        assert calculate_monthly_pmi(90_000, 100_000) == pytest.approx(90_000 * 0.0075 / 12)

    def test_not_charged_at_80_ltv(self):
        assert calculate_monthly_pmi(80_000, 100_000) == 0

    def test_no_loan(self):
        assert calculate_monthly_pmi(0, 100_000) == 0


class TestHousingCost:
    def test_components(self):
        cost = housing_cost(400_000, HouseInputs())
        assert cost.down_payment == 100_000
        assert cost.loan_amount == 300_000
        assert cost.tax == pytest.approx(400)
        assert cost.insurance == pytest.approx(200)
        assert cost.pmi == 0
        assert cost.total == pytest.approx(cost.principal_interest + 600)

    def test_down_payment_capped_at_price(self):
        cost = housing_cost(50_000, HouseInputs())
        assert cost.down_payment == 50_000
        assert cost.loan_amount == 0


class TestAffordability:
    @pytest.mark.smoke
    def test_front_end_limited(self):
        result = calculate_affordability(10_000, 0)
        assert result.limiting_factor == "front_end"
        assert result.max_monthly_housing == pytest.approx(2_800)
        assert result.max_home_price == 441_000
        assert result.total_monthly_housing <= 2_800
        assert housing_cost(result.max_home_price + 1_100, HouseInputs()).total > 2_800
        assert result.front_end_dti == pytest.approx(result.total_monthly_housing / 100)

    def test_back_end_limited(self):
        result = calculate_affordability(10_000, 1_500)
        assert result.limiting_factor == "back_end"
        assert result.max_monthly_housing == pytest.approx(2_100)
        assert result.total_monthly_housing <= 2_100
        assert result.back_end_dti <= 36

    def test_price_is_rounded_to_thousands(self):
        result = calculate_affordability(8_333, 400)
        assert result.max_home_price % 1_000 == 0

    def test_debts_exceed_limit(self):
        result = calculate_affordability(5_000, 5_000)
        assert result.max_home_price == 0
        assert max_monthly_housing(5_000, 5_000)[0] == 0

    def test_zero_income(self):
        result = calculate_affordability(0, 0)
        assert result.max_home_price == 0
        assert result.front_end_dti == 0
        assert result.back_end_dti == 0

    def test_lower_rate_buys_more(self):
        base = calculate_affordability(10_000, 0, HouseInputs(mortgage_rate=7.5))
        cheaper = calculate_affordability(10_000, 0, HouseInputs(mortgage_rate=5.5))
        assert cheaper.max_home_price > base.max_home_price


class TestDebtPayoffImpact:
    def test_ranked_by_price_increase(self):
        debts = [
            Account(id="small", name="Small", balance=2_000, interest_rate=10, minimum_payment=300),
            Account(id="none", name="No Minimum", balance=500, interest_rate=0, minimum_payment=0),
            Account(id="car", name="Car", balance=15_000, interest_rate=6, minimum_payment=1_000),
        ]
        impacts = calculate_debt_payoff_impact(10_000, debts)
        assert [i.debt_id for i in impacts] == ["car", "small"]
        assert impacts[0].max_home_price_increase >= impacts[1].max_home_price_increase
        assert impacts[0].dti_drop > 0
        # without the car payment the front-end limit binds again
        assert impacts[0].new_max_home_price == 441_000
