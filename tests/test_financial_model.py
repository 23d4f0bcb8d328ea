"""Unit tests for the fee schedule, currency rounding and reward policy.

Expected values are hand-calculated; money is compared as exact Decimals.
"""

import datetime as dt
from decimal import Decimal

import pytest

from cardsim.engine.financial_model import FeeSchedule, RewardPolicy, round_currency
from cardsim.engine.transaction import Category


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def fees() -> FeeSchedule:
    return FeeSchedule()


@pytest.fixture
def policy() -> RewardPolicy:
    return RewardPolicy.default()


# ── Rounding ─────────────────────────────────────────────────────────────

class TestRoundCurrency:

    def test_half_up(self):
        assert round_currency(Decimal("1.005")) == Decimal("1.01")
        assert round_currency(Decimal("1.004")) == Decimal("1.00")

    def test_exactly_two_digits(self):
        assert str(round_currency(Decimal("7"))) == "7.00"

    def test_negative_half_up_rounds_away_from_zero(self):
        assert round_currency(Decimal("-2.345")) == Decimal("-2.35")

    def test_none_passes_through(self):
        assert round_currency(None) is None


# ── Fee schedule ─────────────────────────────────────────────────────────

class TestFeeSchedule:

    def test_constants(self, fees):
        assert fees.apr_purchases == Decimal("0.3499")
        assert fees.apr_penalty == Decimal("0.3999")
        assert fees.min_interest_charge == Decimal("2.00")
        assert fees.paper_statement_fee == Decimal("1.99")
        assert fees.promotional_fee_rate == Decimal("0.02")
        assert fees.late_fee_low == Decimal("30.00")
        assert fees.late_fee_high == Decimal("41.00")

    def test_paper_fee_threshold_is_strict(self, fees):
        """$2.50 exactly is free; one cent more is billed."""
        assert fees.paper_fee_due(Decimal("2.50")) is False
        assert fees.paper_fee_due(Decimal("2.51")) is True
        assert fees.paper_fee_due(Decimal("0.00")) is False

    def test_minimum_interest_raises_small_charges(self, fees):
        assert fees.apply_minimum_interest(Decimal("0.07")) == Decimal("2.00")
        assert fees.apply_minimum_interest(Decimal("1.99")) == Decimal("2.00")

    def test_minimum_interest_leaves_zero_and_large_alone(self, fees):
        assert fees.apply_minimum_interest(Decimal("0")) == Decimal("0")
        assert fees.apply_minimum_interest(Decimal("2.00")) == Decimal("2.00")
        assert fees.apply_minimum_interest(Decimal("29.72")) == Decimal("29.72")

    def test_late_boundary(self, fees):
        """Late iff strictly after cycle_end + 23 days."""
        cycle_end = dt.date(2024, 1, 31)
        assert fees.payment_due_date(cycle_end) == dt.date(2024, 2, 23)
        assert fees.is_late(cycle_end + dt.timedelta(days=22), cycle_end) is False
        assert fees.is_late(cycle_end + dt.timedelta(days=23), cycle_end) is False
        assert fees.is_late(cycle_end + dt.timedelta(days=24), cycle_end) is True


# ── Rewards ──────────────────────────────────────────────────────────────

class TestRewardPolicy:

    @pytest.mark.parametrize("category, rate", [
        ("groceries", Decimal("0.03")),
        ("  GROCERIES ", Decimal("0.03")),
        ("Gas", Decimal("0.02")),
        ("other", Decimal("0.01")),
        (Category.GROCERIES, Decimal("0.03")),
        (Category.GAS, Decimal("0.02")),
    ])
    def test_rate_lookup(self, policy, category, rate):
        amount = Decimal("123.45")
        assert policy.reward_for(category, amount) == amount * rate

    @pytest.mark.parametrize("category", [None, "", "dining", "unicorn", Category.PAYMENT])
    def test_unknown_uses_other_rate(self, policy, category):
        assert policy.reward_for(category, Decimal("100.00")) == Decimal("1.0000")

    def test_reward_is_unrounded(self, policy):
        """0.03 × 33.33 = 0.9999 — rounding is left to the simulator."""
        assert policy.reward_for("groceries", Decimal("33.33")) == Decimal("0.9999")

    def test_custom_rates(self):
        policy = RewardPolicy(Decimal("0.05"), Decimal("0.04"), Decimal("0"))
        assert policy.reward_for("groceries", Decimal("10.00")) == Decimal("0.5")
        assert policy.reward_for("other", Decimal("10.00")) == Decimal("0")
