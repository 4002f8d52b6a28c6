"""Tests for pathwise.financial.calculators.payoff."""

import pytest

from pathwise.financial.calculators.payoff import (
    MAX_PAYOFF_MONTHS,
    PayDelay,
    PayoffStrategy,
    analyze_lump_sum,
    apply_lump_sum,
    compare_strategies,
    simulate_payoff,
)
from pathwise.financial.models import Account, CompoundingType


def _debt(id, balance, rate, minimum=0.0, compounding=CompoundingType.MONTHLY):
    return Account(
        id=id, name=id.title(), balance=balance, interest_rate=rate, minimum_payment=minimum, compounding_type=compounding
    )


class TestSimulatePayoff:
    @pytest.mark.smoke
    def test_single_credit_card_converges(self, credit_card):
        result = simulate_payoff([credit_card], 500)
        assert result.converged
        assert 10 <= result.total_months <= 12
        assert result.total_months < MAX_PAYOFF_MONTHS
        assert result.final_balances == {"visa": 0.0}

    def test_total_paid_is_balance_plus_interest(self, credit_card):
        result = simulate_payoff([credit_card], 500)
        assert result.total_paid == pytest.approx(credit_card.balance + result.total_interest_paid)

    def test_balances_never_increase_when_budget_covers_interest(self, credit_card, student_loan):
        result = simulate_payoff([credit_card, student_loan], 800)
        remaining = [entry.total_remaining for entry in result.schedule]
        assert all(later <= earlier for earlier, later in zip(remaining, remaining[1:]))
        interest = [entry.total_interest for entry in result.schedule]
        assert all(later >= earlier for earlier, later in zip(interest, interest[1:]))

    def test_payment_never_exceeds_balance(self):
        debt = _debt("small", 100, 10, minimum=25)
        result = simulate_payoff([debt], 1_000)
        assert result.total_months == 1
        payment = result.schedule[0].payments[0]
        assert payment.payment == pytest.approx(100 + result.total_interest_paid)
        assert payment.remaining == 0

    def test_budget_below_interest_does_not_converge(self):
        debt = _debt("big", 10_000, 24, minimum=50)
        result = simulate_payoff([debt], 100)
        assert not result.converged
        assert result.total_months == MAX_PAYOFF_MONTHS
        assert result.final_balances["big"] > debt.balance

    def test_zero_budget_returns_empty_result(self, credit_card):
        result = simulate_payoff([credit_card], 0)
        assert result.schedule == []
        assert result.total_months == 0
        assert not result.converged
        assert result.final_balances == {"visa": 5_000}

    def test_no_debts(self):
        result = simulate_payoff([], 500)
        assert result.converged
        assert result.total_months == 0

    def test_inputs_untouched(self, credit_card):
        debts = [credit_card]
        simulate_payoff(debts, 500)
        assert debts[0].balance == 5_000

    def test_minimums_paid_before_extra(self):
        low = _debt("low", 1_000, 5, minimum=50)
        high = _debt("high", 1_000, 25, minimum=50)
        result = simulate_payoff([low, high], 300)
        first = {p.account_id: p.payment for p in result.schedule[0].payments}
        assert first["low"] == pytest.approx(50)
        assert first["high"] == pytest.approx(250)

    def test_ties_keep_input_order(self):
        first = _debt("first", 1_000, 10)
        second = _debt("second", 1_000, 10)
        result = simulate_payoff([first, second], 300)
        payments = result.schedule[0].payments
        assert payments[0].payment == pytest.approx(300)
        assert payments[1].payment == 0

    def test_snowball_targets_smallest_balance(self):
        small = _debt("small", 500, 5)
        large = _debt("large", 5_000, 25)
        result = simulate_payoff([large, small], 200, PayoffStrategy.SNOWBALL)
        first = {p.account_id: p.payment for p in result.schedule[0].payments}
        assert first["small"] == pytest.approx(200)
        assert first["large"] == 0


class TestPayDelay:
    def test_zero_delay_budget_accrues_interest(self, credit_card):
        result = simulate_payoff([credit_card], 500, pay_delay=PayDelay(months=3, delay_budget=0))
        for entry in result.schedule[:3]:
            assert all(p.payment == 0 for p in entry.payments)
        assert result.schedule[2].total_remaining > credit_card.balance
        assert result.converged

    def test_delay_makes_payoff_longer(self, credit_card):
        plain = simulate_payoff([credit_card], 500)
        delayed = simulate_payoff([credit_card], 500, pay_delay=PayDelay(months=2, delay_budget=100))
        assert delayed.total_months > plain.total_months
        assert delayed.total_interest_paid > plain.total_interest_paid

    def test_delay_budget_alone_is_enough_to_start(self, credit_card):
        result = simulate_payoff([credit_card], 0, pay_delay=PayDelay(months=2, delay_budget=200))
        assert result.total_months == MAX_PAYOFF_MONTHS
        assert result.schedule[0].payments[0].payment == pytest.approx(200)
        assert not result.converged


class TestCompareStrategies:
    def test_avalanche_never_costs_more(self):
        debts = [
            _debt("cheap", 1_000, 5, minimum=25),
            _debt("pricey", 5_000, 25, minimum=100),
            _debt("mid", 2_500, 12, minimum=50),
        ]
        comparison = compare_strategies(debts, 400)
        assert comparison.avalanche.total_interest_paid <= comparison.snowball.total_interest_paid
        assert comparison.interest_savings >= 0
        assert comparison.avalanche.converged and comparison.snowball.converged

    def test_total_paid_is_balances_plus_interest_for_both_strategies(self):
        debts = [
            _debt("cheap", 1_000, 5, minimum=25),
            _debt("pricey", 5_000, 25, minimum=100),
            _debt("mid", 2_500, 12, minimum=50),
        ]
        comparison = compare_strategies(debts, 400)
        owed = sum(d.balance for d in debts)
        for result in (comparison.avalanche, comparison.snowball):
            assert result.converged
            assert result.total_paid == pytest.approx(owed + result.total_interest_paid)

        paid_gap = comparison.snowball.total_paid - comparison.avalanche.total_paid
        interest_gap = comparison.snowball.total_interest_paid - comparison.avalanche.total_interest_paid
        assert interest_gap > 0
        assert paid_gap == pytest.approx(interest_gap)

    def test_strategy_labels(self, credit_card):
        comparison = compare_strategies([credit_card], 500)
        assert comparison.avalanche.strategy is PayoffStrategy.AVALANCHE
        assert comparison.snowball.strategy is PayoffStrategy.SNOWBALL
        assert comparison.months_difference == 0


class TestLumpSum:
    def test_highest_rate_first(self):
        low = _debt("low", 2_000, 10)
        high = _debt("high", 1_000, 20)
        remaining = apply_lump_sum([low, high], 1_500)
        assert [d.id for d in remaining] == ["low"]
        assert remaining[0].balance == pytest.approx(1_500)
        assert low.balance == 2_000

    def test_amount_larger_than_debt(self):
        assert apply_lump_sum([_debt("a", 500, 10)], 10_000) == []

    def test_negative_amount_is_ignored(self):
        remaining = apply_lump_sum([_debt("a", 500, 10)], -100)
        assert remaining[0].balance == 500


class TestAnalyzeLumpSum:
    def test_cash_shortens_card_payoff(self, credit_card, student_loan):
        analysis = analyze_lump_sum([credit_card, student_loan], 2_000, 500)
        assert analysis.lump_sum == 2_000
        assert set(analysis.normal.final_balances) == {"visa"}
        assert [(a.account_id, a.applied) for a in analysis.allocations] == [("visa", 2_000)]
        assert analysis.with_lump_sum.total_months < analysis.normal.total_months
        assert analysis.months_saved == analysis.normal.total_months - analysis.with_lump_sum.total_months
        assert analysis.interest_saved == pytest.approx(
            analysis.normal.total_interest_paid - analysis.with_lump_sum.total_interest_paid
        )
        assert analysis.interest_saved > 0

    def test_lump_sum_capped_at_card_debt(self, credit_card):
        store_card = _debt("store", 1_000, 28, minimum=30, compounding=CompoundingType.DAILY_COMPOUND)
        analysis = analyze_lump_sum([credit_card, store_card], 10_000, 500)
        assert analysis.lump_sum == 6_000
        assert [a.account_id for a in analysis.allocations] == ["store", "visa"]
        assert [a.applied for a in analysis.allocations] == [1_000, 5_000]
        assert analysis.with_lump_sum.total_months == 0
        assert analysis.with_lump_sum.total_interest_paid == 0
        assert analysis.months_saved == analysis.normal.total_months

    def test_partial_cash_goes_to_highest_rate(self, credit_card):
        store_card = _debt("store", 1_000, 28, compounding=CompoundingType.DAILY_COMPOUND)
        analysis = analyze_lump_sum([credit_card, store_card], 1_500, 400)
        assert [(a.account_id, a.applied) for a in analysis.allocations] == [("store", 1_000), ("visa", 500)]
        assert analysis.with_lump_sum.final_balances == {"visa": 0.0}

    def test_inputs_untouched(self, credit_card):
        analyze_lump_sum([credit_card], 2_000, 500)
        assert credit_card.balance == 5_000

    @pytest.mark.parametrize("cash, budget", [(0, 500), (2_000, 0)])
    def test_nothing_to_analyze(self, credit_card, cash, budget):
        assert analyze_lump_sum([credit_card], cash, budget) is None

    def test_no_card_debt(self, student_loan):
        assert analyze_lump_sum([student_loan], 2_000, 500) is None
